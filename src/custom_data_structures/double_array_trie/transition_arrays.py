"""The base/check array pair that encodes the transitions of a
double-array trie.

A node `n` with `base[n] > 0` owns the transition for character value `v`
at slot `base[n] + v`, and that slot is live only while `check[slot] == n`.
A negative base is a pointer into the tail store, 0 marks an unused cell.
"""

import logging
from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

ROOT = 1


class TransitionArrays:
    """Parallel `base` and `check` arrays that grow by doubling."""

    def __init__(self, capacity: int = 16) -> None:
        """Initialize the arrays with only the root node.

        Args:
            capacity (int): The initial length of both arrays.

        """
        capacity = max(capacity, ROOT + 1)
        self.base: list[int] = [0] * capacity
        self.check: list[int] = [0] * capacity
        self.base[ROOT] = 1

    @classmethod
    def from_values(
        cls,
        base: Sequence[int],
        check: Sequence[int],
    ) -> "TransitionArrays":
        """Wrap pre-existing array content."""
        arrays = cls.__new__(cls)
        arrays.base = list(base)
        arrays.check = list(check)
        return arrays

    def get_base(self, index: int) -> int:
        """Return `base[index]`, or 0 when the index is out of range."""
        if 0 <= index < len(self.base):
            return self.base[index]
        return 0

    def get_check(self, index: int) -> int:
        """Return `check[index]`, or 0 when the index is out of range."""
        if 0 <= index < len(self.check):
            return self.check[index]
        return 0

    def set_base(self, index: int, value: int) -> None:
        _ensure_capacity(self.base, index, "base")
        logger.debug("Updating base[%d] to %d.", index, value)
        self.base[index] = value

    def set_check(self, index: int, value: int) -> None:
        _ensure_capacity(self.check, index, "check")
        logger.debug("Updating check[%d] to %d.", index, value)
        self.check[index] = value

    def clear(self, index: int) -> None:
        """Release a slot."""
        self.base[index] = 0
        self.check[index] = 0

    def is_free(self, slot: int) -> bool:
        """Check whether `slot` can be handed out as a new transition.

        The unused cell 0 and the root are never available.
        """
        return slot > ROOT and self.get_check(slot) == 0

    def find_base(self, values: Iterable[int]) -> int:
        """Find the lowest base value whose slots for all `values` are free.

        Candidates are probed linearly from 1, so the cost grows with the
        number of occupied cells times the number of values. Cells past the
        end of the arrays are free, so the search always terminates.

        Args:
            values (Iterable[int]): The character values to accommodate.

        Returns:
            int: The base value.

        """
        values = list(values)
        base_value = 1
        while not all(self.is_free(base_value + value) for value in values):
            base_value += 1
        return base_value

    def children(self, node: int, values: Iterable[int]) -> list[int]:
        """Return the character values among `values` with a live
        transition out of `node`.
        """
        base_value = self.get_base(node)
        if base_value <= 0:
            return []
        return [
            value
            for value in values
            if self.get_check(base_value + value) == node
        ]

    def relocate(
        self,
        node: int,
        values: Sequence[int],
        extra: Iterable[int] = (),
    ) -> dict[int, int]:
        """Move every transition of `node` to a collision-free region.

        The new base also leaves room for the `extra` character values.
        Children that own transitions themselves have the `check` entries of
        their own children re-pointed at their new slot.

        Args:
            node (int): The node whose transitions are moved.
            values (Sequence[int]): Every character value of the alphabet.
            extra (Iterable[int]): Values that must fit at the new base
                without being moved.

        Returns:
            dict[int, int]: Old slot to new slot for every moved child.

        """
        old_base = self.get_base(node)
        child_values = self.children(node, values)
        new_base = self.find_base(child_values + list(extra))

        logger.debug(
            "Relocating node %d from base %d to base %d (%d transitions).",
            node,
            old_base,
            new_base,
            len(child_values),
        )

        moved: dict[int, int] = {}
        for value in child_values:
            old_slot = old_base + value
            new_slot = new_base + value
            child_base = self.base[old_slot]

            self.set_base(new_slot, child_base)
            self.set_check(new_slot, node)

            if child_base > 0:
                for grandchild_value in values:
                    grandchild = child_base + grandchild_value
                    if self.get_check(grandchild) == old_slot:
                        self.set_check(grandchild, new_slot)

            self.clear(old_slot)
            moved[old_slot] = new_slot

        self.set_base(node, new_base)
        return moved


def _ensure_capacity(values: list[int], index: int, name: str) -> None:
    """Double `values` in place until `index` is addressable."""
    while index >= len(values):
        logger.debug(
            "Resizing %s from %d to %d cells.",
            name,
            len(values),
            len(values) * 2,
        )
        values.extend([0] * len(values))

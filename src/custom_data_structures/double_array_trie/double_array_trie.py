"""This module represents the implementation of a double-array trie, a
compact string set that can be built incrementally.

Transitions live in the `base`/`check` arrays of `TransitionArrays`, the
suffixes that only one key uses live in a `TailStore`. Every key is
processed as `key + TERMINATOR`, so a key that is a prefix of another one
ends in its own terminator transition and every stored key is confirmed by
a terminator in the tail.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence

from .mapper import (
    GARBAGE,
    TERMINATOR,
    CharacterValueMapper,
)
from .tail_store import TailStore
from .transition_arrays import ROOT, TransitionArrays

logger = logging.getLogger(__name__)


class DoubleArrayTrieCorruptionError(RuntimeError):
    """Raised when the arrays break the double-array trie invariants."""


class DoubleArrayTrie:
    """Represents a set of strings stored in a double-array trie."""

    def __init__(
        self,
        mapper: CharacterValueMapper,
        initial_capacity: int = 16,
    ) -> None:
        """Initialize an empty trie with only the root node.

        Args:
            mapper (CharacterValueMapper): Translates characters to the
                integer offsets used by the transitions.
            initial_capacity (int): Initial length of the backing arrays.

        Raises:
            ValueError: If `mapper` is None.

        """
        if mapper is None:
            raise ValueError("A character value mapper is required.")

        self.mapper = mapper
        self.arrays = TransitionArrays(initial_capacity)
        self.tail = TailStore(initial_capacity)
        self._size = 0

        # The terminator comes first so iteration yields shorter keys first
        self._terminator_value = mapper.get_character_value(TERMINATOR)
        self._character_values = [self._terminator_value] + list(
            range(mapper.min_character_value, mapper.max_character_value + 1),
        )

    @classmethod
    def from_arrays(
        cls,
        base: Sequence[int],
        check: Sequence[int],
        tail: str | Sequence[str],
        mapper: CharacterValueMapper,
    ) -> "DoubleArrayTrie":
        """Build a trie over pre-set arrays.

        Args:
            base (Sequence[int]): The base array.
            check (Sequence[int]): The check array.
            tail (str | Sequence[str]): The tail content, one character per
                cell, offset 0 unused.
            mapper (CharacterValueMapper): The mapper the arrays were built
                with.

        Returns:
            DoubleArrayTrie: A trie that reads and extends the given arrays.

        """
        trie = cls(mapper)
        trie.arrays = TransitionArrays.from_values(base, check)
        trie.tail = TailStore.from_values(list(tail))
        trie._size = sum(1 for _ in trie)
        return trie

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.contains(key)

    def __iter__(self) -> Iterator[str]:
        """Yield every stored key, in alphabet order for mappers whose
        values follow that order.
        """
        # Depth-first with an explicit stack, children pushed in reverse
        stack: list[tuple[int, str]] = [(ROOT, "")]
        while stack:
            node, prefix = stack.pop()
            base_value = self.arrays.get_base(node)

            if base_value < 0:
                yield prefix + self.tail.read(-base_value)
                continue

            for value in reversed(
                self.arrays.children(node, self._character_values),
            ):
                child = base_value + value
                if value == self._terminator_value:
                    stack.append((child, prefix))
                else:
                    stack.append(
                        (child, prefix + self.mapper.get_character(value)),
                    )

    def update(self, keys: Iterable[str]) -> int:
        """Add every key of `keys`.

        Returns:
            int: The number of keys that were not present before.

        """
        return sum(1 for key in keys if self.add(key))

    def add(self, key: str) -> bool:
        """Add the specified key to the trie.

        Args:
            key (str): The key to add.

        Raises:
            ValueError: If `key` is None, holds a reserved character or a
                character outside the alphabet.

        Returns:
            bool: True if the key is added, False if it was already present.

        """
        self._validate_key(key)
        logger.debug("Add('%s'): Executing.", key)

        node = ROOT
        for index, character in enumerate(key + TERMINATOR):
            base_value = self.arrays.get_base(node)

            # A negative base value means matching continues in the tail
            if base_value < 0:
                added = self._add_in_tail(node, -base_value, key[index:])
                self._after_add(key, added)
                return added

            if base_value == 0:
                raise DoubleArrayTrieCorruptionError(
                    f"Node {node} is reachable but has no base value.",
                )

            value = self.mapper.get_character_value(character)
            slot = base_value + value

            if slot > ROOT and self.arrays.get_check(slot) == node:
                logger.debug(
                    "Add('%s'): Character %r matched.",
                    key,
                    character,
                )
                node = slot
                continue

            if not self.arrays.is_free(slot):
                logger.debug(
                    "Add('%s'): Slot %d for character %r is taken.",
                    key,
                    slot,
                    character,
                )
                node = self._resolve_collision(node, slot, value)
                slot = self.arrays.get_base(node) + value

            logger.debug(
                "Add('%s'): Slot %d for character %r available.",
                key,
                slot,
                character,
            )
            self._append_branch(node, slot, key[index + 1 :])
            self._after_add(key, True)
            return True

        # The terminator transition was followed, so the key is stored
        base_value = self.arrays.get_base(node)
        if base_value >= 0 or not self.tail.matches(-base_value, ""):
            raise DoubleArrayTrieCorruptionError(
                f"Terminator transition {node} does not point at an empty "
                "tail run.",
            )
        self._after_add(key, False)
        return False

    def contains(self, key: str) -> bool:
        """Determine whether the trie contains the specified key.

        The arrays are never modified or grown by a lookup.

        Args:
            key (str): The key to locate.

        Raises:
            ValueError: If `key` is None, holds a reserved character or a
                character outside the alphabet.

        Returns:
            bool: True if the key is present, False otherwise.

        """
        self._validate_key(key)

        node = ROOT
        for index, character in enumerate(key + TERMINATOR):
            base_value = self.arrays.get_base(node)

            if base_value < 0:
                found = self.tail.matches(-base_value, key[index:])
                logger.debug(
                    "Contains('%s'): Tail comparison %s.",
                    key,
                    "matched" if found else "did not match",
                )
                return found

            if base_value == 0:
                logger.debug("Contains('%s'): Node %d is unused.", key, node)
                return False

            slot = base_value + self.mapper.get_character_value(character)
            if slot <= ROOT or self.arrays.get_check(slot) != node:
                logger.debug(
                    "Contains('%s'): Character %r not matched.",
                    key,
                    character,
                )
                return False

            node = slot

        # Only reached through a terminator transition
        base_value = self.arrays.get_base(node)
        return base_value < 0 and self.tail.matches(-base_value, "")

    def dump_state(self) -> str:
        """Return the arrays formatted as aligned rows for debugging."""
        base_values = ",".join(f"{value:>4}" for value in self.arrays.base)
        check_values = ",".join(f"{value:>4}" for value in self.arrays.check)
        tail_values = ",".join(
            f"{value.replace(chr(0), ' '):>4}" for value in self.tail.values
        )
        return (
            f"base:  {base_values}\n"
            f"check: {check_values}\n"
            f"tail:  {tail_values}"
        )

    def _validate_key(self, key: str) -> None:
        if key is None:
            raise ValueError("key must not be None.")
        if TERMINATOR in key or GARBAGE in key:
            raise ValueError(
                f"key must not contain the reserved characters "
                f"{TERMINATOR!r} or {GARBAGE!r}.",
            )
        # Map every character before any state is touched
        for character in key:
            self.mapper.get_character_value(character)

    def _after_add(self, key: str, added: bool) -> None:
        if added:
            self._size += 1
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Add('%s'): Added.\n%s", key, self.dump_state())
        else:
            logger.debug("Add('%s'): The key is already present.", key)

    def _append_branch(self, node: int, slot: int, suffix: str) -> None:
        """Attach a new transition of `node` at `slot` whose remaining
        characters `suffix` are stored in the tail.
        """
        offset = self.tail.append(suffix)
        self.arrays.set_base(slot, -offset)
        self.arrays.set_check(slot, node)

    def _add_in_tail(self, node: int, offset: int, suffix: str) -> bool:
        """Continue an insertion at a node whose base points into the tail.

        If the run at `offset` differs from `suffix`, the characters both
        share are turned into real transitions and the two diverging
        remainders become separate branches.

        Returns:
            bool: False if the run already equals `suffix`.

        """
        if self.tail.matches(offset, suffix):
            return False

        common = self.tail.common_prefix_length(offset, suffix)
        logger.debug(
            "Splitting tail run at offset %d after %d common characters.",
            offset,
            common,
        )

        for character in suffix[:common]:
            value = self.mapper.get_character_value(character)
            base_value = self.arrays.find_base([value])
            self.arrays.set_base(node, base_value)
            self.arrays.set_check(base_value + value, node)
            node = base_value + value

        tail_next = self.tail[offset + common]
        key_next = (suffix + TERMINATOR)[common]
        tail_value = self.mapper.get_character_value(tail_next)
        key_value = self.mapper.get_character_value(key_next)

        base_value = self.arrays.find_base([tail_value, key_value])
        self.arrays.set_base(node, base_value)

        # The old run keeps its offset and loses the consumed characters
        tail_slot = base_value + tail_value
        self.arrays.set_base(tail_slot, -offset)
        self.arrays.set_check(tail_slot, node)
        self.tail.shift(offset, common + 1)

        self._append_branch(node, base_value + key_value, suffix[common + 1 :])
        return True

    def _resolve_collision(self, node: int, slot: int, value: int) -> int:
        """Free `slot` so `node` can own a transition for `value` there.

        Either the node that owns `slot` or `node` itself is relocated,
        whichever has fewer transitions to move. A slot at or below the
        root can never be handed out, so `node` is relocated.

        Returns:
            int: The index of `node` after the move.

        """
        if slot > ROOT:
            owner = self.arrays.get_check(slot)
            node_children = self.arrays.children(node, self._character_values)
            owner_children = self.arrays.children(
                owner,
                self._character_values,
            )
            if len(node_children) + 1 >= len(owner_children):
                moved = self.arrays.relocate(owner, self._character_values)
                return moved.get(node, node)

        self.arrays.relocate(node, self._character_values, extra=[value])
        return node

"""The tail of a double-array trie: a flat, append-only buffer of the
key suffixes that are not shared with any other key.
"""

import logging

from .mapper import GARBAGE, TERMINATOR

logger = logging.getLogger(__name__)

EMPTY = "\0"


class TailStore:
    """Growable buffer of terminator-delimited suffix runs.

    Offset 0 is never used, so a run offset can be stored negated in the
    base array without colliding with the "free" value 0.
    """

    def __init__(self, capacity: int = 16) -> None:
        """Initialize an empty tail.

        Args:
            capacity (int): The initial number of character cells.

        """
        self.values: list[str] = [EMPTY] * max(capacity, 2)
        # Next free append offset, it only ever grows
        self.position = 1

    @classmethod
    def from_values(cls, values: str | list[str]) -> "TailStore":
        """Wrap pre-existing tail content, appending after its last cell."""
        store = cls.__new__(cls)
        store.values = list(values)
        store.position = max(len(store.values), 1)
        return store

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> str:
        return self.values[index]

    def get(self, index: int) -> str | None:
        """Return the character at `index`, or None when out of range."""
        if 0 <= index < len(self.values):
            return self.values[index]
        return None

    def set(self, index: int, character: str) -> None:
        self._ensure_capacity(index)
        self.values[index] = character

    def _ensure_capacity(self, index: int) -> None:
        while index >= len(self.values):
            logger.debug(
                "Resizing tail from %d to %d cells.",
                len(self.values),
                len(self.values) * 2,
            )
            self.values.extend([EMPTY] * len(self.values))

    def append(self, suffix: str) -> int:
        """Store `suffix` followed by the terminator at the append position.

        Args:
            suffix (str): The remaining key characters, possibly empty.

        Returns:
            int: The offset the run was written at.

        """
        offset = self.position
        end = offset + len(suffix)
        # Grow once up front so the run is written into a stable buffer
        self._ensure_capacity(end)
        self.values[offset:end] = list(suffix)
        self.values[end] = TERMINATOR
        self.position = end + 1

        logger.debug(
            "Wrote suffix '%s' to tail at offset %d, next position is %d.",
            suffix,
            offset,
            self.position,
        )
        return offset

    def read(self, offset: int) -> str:
        """Return the run at `offset` without its terminator."""
        characters = []
        index = offset
        while 0 <= index < len(self.values):
            character = self.values[index]
            if character == TERMINATOR:
                break
            characters.append(character)
            index += 1
        return "".join(characters)

    def matches(self, offset: int, suffix: str) -> bool:
        """Check whether the run at `offset` is exactly `suffix`.

        Every character of `suffix` must equal the tail character at the
        same position and the character right after the last one must be
        the terminator. Reads past the end of the buffer never match.
        """
        for index, character in enumerate(suffix, start=offset):
            if self.get(index) != character:
                return False
        return self.get(offset + len(suffix)) == TERMINATOR

    def common_prefix_length(self, offset: int, suffix: str) -> int:
        """Count the leading characters of `suffix` plus the terminator
        that agree with the run at `offset`.

        A result of `len(suffix) + 1` means the run equals `suffix`.
        """
        length = 0
        for index, character in enumerate(suffix + TERMINATOR, start=offset):
            if self.get(index) != character:
                break
            length += 1
        return length

    def shift(self, offset: int, count: int) -> None:
        """Drop the first `count` characters of the run at `offset`.

        The rest of the run is moved down to `offset` so the run stays
        reachable from the same offset, and the cells it no longer needs
        (through the old terminator) are overwritten with garbage.
        """
        content = self.read(offset)
        remainder = content[count:]
        old_end = offset + len(content)

        for index, character in enumerate(remainder, start=offset):
            self.values[index] = character
        self.values[offset + len(remainder)] = TERMINATOR

        for index in range(offset + len(remainder) + 1, old_end + 1):
            self.values[index] = GARBAGE

        logger.debug(
            "Shifted tail run at offset %d from '%s' to '%s'.",
            offset,
            content,
            remainder,
        )

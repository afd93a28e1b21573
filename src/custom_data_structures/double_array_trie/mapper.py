"""Mapping between alphabet characters and the small integer codes the
double-array trie uses as transition offsets.
"""

from typing import Protocol

TERMINATOR = "#"
GARBAGE = "?"


class CharacterValueMapper(Protocol):
    """Capability consumed by the double-array trie.

    The mapping must be injective over the alphabet in use, must give the
    terminator a value outside the normal alphabet and must not change for
    the lifetime of a trie.
    """

    @property
    def min_character_value(self) -> int:
        """Smallest value of a normal alphabet character (inclusive)."""
        ...

    @property
    def max_character_value(self) -> int:
        """Largest value of a normal alphabet character (inclusive)."""
        ...

    def get_character_value(self, character: str) -> int:
        """Return the integer code of `character`."""
        ...

    def get_character(self, character_value: int) -> str:
        """Return the character whose code is `character_value`."""
        ...


class LowercaseCharacterValueMapper:
    """Map 'a'..'z' to 2..27 and the terminator '#' to -1."""

    _OFFSET = 95
    _TERMINATOR_VALUE = -1

    @property
    def min_character_value(self) -> int:
        return ord("a") - self._OFFSET

    @property
    def max_character_value(self) -> int:
        return ord("z") - self._OFFSET

    def get_character_value(self, character: str) -> int:
        """Return the code of a lowercase letter or of the terminator.

        Args:
            character (str): A single character.

        Raises:
            ValueError: If the character is outside the alphabet.

        Returns:
            int: The character code.

        """
        if character == TERMINATOR:
            return self._TERMINATOR_VALUE
        if len(character) != 1 or not "a" <= character <= "z":
            raise ValueError(
                f"Character {character!r} is not part of the lowercase "
                "alphabet.",
            )
        return ord(character) - self._OFFSET

    def get_character(self, character_value: int) -> str:
        """Return the character for a code produced by
        `get_character_value`.

        Raises:
            ValueError: If the code is outside the valid range.

        """
        if character_value == self._TERMINATOR_VALUE:
            return TERMINATOR
        if not (
            self.min_character_value
            <= character_value
            <= self.max_character_value
        ):
            raise ValueError(
                f"Character value {character_value} is outside the range "
                f"{self.min_character_value}..{self.max_character_value}.",
            )
        return chr(character_value + self._OFFSET)

"""Character selection and code point set resolution.

A character selection is what the caller asks for: literal strings, named
sets, or any mix of them. Resolution turns it into a canonical
``CodePointSet``, ascending and free of duplicates, so two builds of the same
request hand the conversion tools identical arguments.
"""

import string
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from glyphpack.exceptions import EmptySelectionError, SelectionError, UnknownCharacterSetError

MAX_CODE_POINT = 0x10FFFF
SURROGATE_RANGE = range(0xD800, 0xE000)


class NamedSet(str, Enum):
    """Predefined character sets."""

    NUMBERS = "numbers"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    PUNCTUATION = "punctuation"

    @property
    def characters(self) -> str:
        """Characters belonging to this set."""
        return _NAMED_SET_CHARACTERS[self]

    @classmethod
    def from_name(cls, name: str) -> "NamedSet":
        """Look up a set by name or alias.

        Matching ignores case, spaces, hyphens and underscores, so
        "Numbers", "digits" and "lowercase-letters" are all accepted.

        Raises:
            UnknownCharacterSetError: If no set matches
        """
        key = name.lower()
        for char in " -_":
            key = key.replace(char, "")
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnknownCharacterSetError(name) from None


_NAMED_SET_CHARACTERS: dict[NamedSet, str] = {
    NamedSet.NUMBERS: string.digits,
    NamedSet.LOWERCASE: string.ascii_lowercase,
    NamedSet.UPPERCASE: string.ascii_uppercase,
    NamedSet.PUNCTUATION: ".,'\"?!:;()-",
}

_ALIASES: dict[str, NamedSet] = {
    "numbers": NamedSet.NUMBERS,
    "digits": NamedSet.NUMBERS,
    "lowercase": NamedSet.LOWERCASE,
    "lowercaseletters": NamedSet.LOWERCASE,
    "lower": NamedSet.LOWERCASE,
    "uppercase": NamedSet.UPPERCASE,
    "uppercaseletters": NamedSet.UPPERCASE,
    "upper": NamedSet.UPPERCASE,
    "punctuation": NamedSet.PUNCTUATION,
    "punct": NamedSet.PUNCTUATION,
}


SelectionEntry = str | NamedSet


@dataclass(frozen=True)
class CharacterSelection:
    """Caller-supplied description of which characters to include.

    Attributes:
        entries: Literal strings and named sets, combined by union
    """

    entries: tuple[SelectionEntry, ...]

    @classmethod
    def of(cls, *entries: SelectionEntry) -> "CharacterSelection":
        """Build a selection from literal strings and named sets."""
        return cls(entries=tuple(entries))

    @classmethod
    def from_parts(
        cls,
        chars: Iterable[str] = (),
        sets: Iterable[str] = (),
    ) -> "CharacterSelection":
        """Build a selection from literal strings and set names.

        Args:
            chars: Literal character strings
            sets: Names or aliases of predefined sets

        Raises:
            UnknownCharacterSetError: If a set name is not recognized
        """
        entries: list[SelectionEntry] = [NamedSet.from_name(name) for name in sets]
        entries.extend(chars)
        return cls(entries=tuple(entries))

    def iter_characters(self) -> Iterator[str]:
        """Yield every selected character, duplicates included."""
        for entry in self.entries:
            if isinstance(entry, NamedSet):
                yield from entry.characters
            else:
                yield from entry


@dataclass(frozen=True)
class CodePointSet:
    """Ascending, duplicate-free, non-empty sequence of Unicode scalar values.

    Use ``from_iterable`` to build one from unordered input; the constructor
    only validates.
    """

    values: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.values:
            raise EmptySelectionError()
        previous = -1
        for value in self.values:
            if value <= previous:
                raise ValueError("Code points must be strictly increasing")
            if value > MAX_CODE_POINT or value in SURROGATE_RANGE:
                raise ValueError(f"Not a Unicode scalar value: {value:#x}")
            previous = value

    @classmethod
    def from_iterable(cls, values: Iterable[int]) -> "CodePointSet":
        """Sort and deduplicate code points into a set."""
        return cls(values=tuple(sorted(set(values))))

    @property
    def low(self) -> int:
        """Smallest code point."""
        return self.values[0]

    @property
    def high(self) -> int:
        """Largest code point."""
        return self.values[-1]

    def characters(self) -> str:
        return "".join(chr(value) for value in self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, value: object) -> bool:
        return value in self.values


def resolve_selection(selection: CharacterSelection) -> CodePointSet:
    """Resolve a character selection to its canonical code point set.

    Args:
        selection: Literal strings and named sets to combine

    Returns:
        Sorted, deduplicated code points

    Raises:
        EmptySelectionError: If the selection contains no characters
        SelectionError: If a literal contains a lone surrogate
    """
    code_points: set[int] = set()
    for char in selection.iter_characters():
        value = ord(char)
        if value in SURROGATE_RANGE:
            raise SelectionError(f"Not a Unicode scalar value: {value:#x}")
        code_points.add(value)
    return CodePointSet.from_iterable(code_points)

"""Name selectors used to filter a unit's resource listing.

Selectors are pure: they receive the ordered list of resource names of one
unit and return the selected names in order. They never touch the unit.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol


def contains_ignorable(
    haystack: str | None, needle: str | None, ignore_case: bool = False
) -> bool:
    """Check whether haystack contains needle, optionally ignoring case.

    An empty (or None) needle matches everything, and so does an empty
    haystack. Both degenerate cases return True.

    Args:
        haystack: String to search in (usually a resource name).
        needle: Substring to search for.
        ignore_case: Compare case-insensitively by lowercasing each
            character (no multi-character folds such as "ß" to "ss").

    Returns:
        True if needle occurs in haystack or either side is empty.
    """
    if not needle or not haystack:
        return True
    if ignore_case:
        return needle.lower() in haystack.lower()
    return needle in haystack


class Selector(Protocol):
    """Protocol for resource name selectors."""

    def select(self, names: Sequence[str]) -> list[str]:
        """Return the selected names, in order, duplicates allowed."""
        ...


@dataclass(frozen=True, slots=True)
class All:
    """Select every resource."""

    def select(self, names: Sequence[str]) -> list[str]:
        return list(names)


@dataclass(frozen=True, slots=True)
class NameContains:
    """Select resources whose name contains a substring.

    An empty or None pattern selects every resource.
    """

    pattern: str | None
    ignore_case: bool = False

    def select(self, names: Sequence[str]) -> list[str]:
        return [
            name
            for name in names
            if contains_ignorable(name, self.pattern, self.ignore_case)
        ]


@dataclass(frozen=True, slots=True, init=False)
class NameIn:
    """Apply NameContains once per pattern and concatenate the results.

    A resource matched by several patterns appears once per pattern.
    An empty pattern list selects nothing.
    """

    patterns: tuple[str | None, ...]
    ignore_case: bool = False

    def __init__(
        self, patterns: Iterable[str | None], ignore_case: bool = False
    ) -> None:
        if isinstance(patterns, str):
            raise TypeError(
                "patterns must be an iterable of names, not a single string"
            )
        object.__setattr__(self, "patterns", tuple(patterns))
        object.__setattr__(self, "ignore_case", ignore_case)

    def select(self, names: Sequence[str]) -> list[str]:
        selected: list[str] = []
        for pattern in self.patterns:
            selected.extend(NameContains(pattern, self.ignore_case).select(names))
        return selected


@dataclass(frozen=True, slots=True, init=False)
class NameMatchesRegex:
    """Select resources whose name contains a regular expression match.

    Uses re.search semantics, so the match may occur anywhere in the name.
    Anchor the pattern (``^...$``) to require a whole-name match.
    """

    pattern: re.Pattern[str]

    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        object.__setattr__(self, "pattern", pattern)

    def select(self, names: Sequence[str]) -> list[str]:
        return [name for name in names if self.pattern.search(name)]


ALL = All()

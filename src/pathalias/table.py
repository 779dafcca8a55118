#!/usr/bin/env python3
"""Alias Table - normalized alias configuration ready for resolution.

Turns the raw ``paths`` mapping of a project configuration into an immutable
AliasTable. Every target pattern is joined onto the base directory, so the
resolver can use it directly on the filesystem. Building is pure string work
and touches nothing on disk.

Example:
    >>> table = build("/my/project/src", {"@app/*": ["app/*", "legacy/*"]})
    >>> table.lookup("@app/*").targets.candidates
    ('/my/project/src/app/*', '/my/project/src/legacy/*')
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import ConfigShapeError

WILDCARD = "*"


@dataclass(frozen=True)
class AliasPattern:
    """A single alias pattern, split around its optional wildcard.

    Attributes:
        pattern: Alias key as written in the paths mapping, such as "@app/*" or "@config".
        is_wildcard: Whether the pattern contains a wildcard.
        prefix: Part before the wildcard (whole pattern when exact).
        suffix: Part after the wildcard.
    """

    pattern: str
    is_wildcard: bool = False
    prefix: str = ""
    suffix: str = ""

    @classmethod
    def parse(cls, pattern: str) -> "AliasPattern":
        """Parse a pattern string, rejecting more than one wildcard."""
        if not isinstance(pattern, str):
            raise ConfigShapeError(
                f"Bad alias key {pattern!r}: {type(pattern).__name__}, expected str"
            )
        count = pattern.count(WILDCARD)
        if count > 1:
            raise ConfigShapeError(
                f"Alias pattern '{pattern}' can have at most one '{WILDCARD}' character"
            )
        if count == 0:
            return cls(pattern=pattern, prefix=pattern)
        prefix, suffix = pattern.split(WILDCARD, 1)
        return cls(pattern=pattern, is_wildcard=True, prefix=prefix, suffix=suffix)

    def matches(self, specifier: str) -> Optional[str]:
        """Check if a specifier matches this pattern.

        Args:
            specifier: The import string to check.

        Returns:
            The captured wildcard portion ("" for exact patterns), or None
            if the specifier does not match.
        """
        if not self.is_wildcard:
            return "" if specifier == self.pattern else None

        # prefix and suffix must not overlap
        if len(specifier) < len(self.prefix) + len(self.suffix):
            return None
        if not specifier.startswith(self.prefix) or not specifier.endswith(self.suffix):
            return None

        return specifier[len(self.prefix) : len(specifier) - len(self.suffix)]


@dataclass(frozen=True)
class SingleTarget:
    """An alias configured with one target pattern."""

    pattern: str

    @property
    def candidates(self) -> Tuple[str, ...]:
        return (self.pattern,)


@dataclass(frozen=True)
class MultiTarget:
    """An alias configured with an ordered list of fallback target patterns."""

    patterns: Tuple[str, ...]

    @property
    def candidates(self) -> Tuple[str, ...]:
        return self.patterns


Targets = Union[SingleTarget, MultiTarget]


@dataclass(frozen=True)
class AliasEntry:
    """One alias pattern and the targets it maps to."""

    pattern: AliasPattern
    targets: Targets

    @property
    def key(self) -> str:
        return self.pattern.pattern


class AliasTable:
    """Immutable mapping of alias patterns to their target candidates.

    Entries keep their first-declared order, which is also the order used
    when scanning wildcard aliases. Exact lookups go through a dict.

    Attributes:
        base_dir: Directory every target pattern was joined onto.
        entries: Alias entries in declared order.
    """

    __slots__ = ("_base_dir", "_entries", "_by_key")

    def __init__(self, base_dir: str, entries: Sequence[AliasEntry] = ()):
        by_key: Dict[str, AliasEntry] = {}
        order: List[str] = []
        for entry in entries:
            if entry.key not in by_key:
                order.append(entry.key)
            by_key[entry.key] = entry

        object.__setattr__(self, "_base_dir", base_dir)
        object.__setattr__(self, "_entries", tuple(by_key[key] for key in order))
        object.__setattr__(self, "_by_key", by_key)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def base_dir(self) -> str:
        return self._base_dir

    @property
    def entries(self) -> Tuple[AliasEntry, ...]:
        return self._entries

    def lookup(self, key: str) -> Optional[AliasEntry]:
        """Return the entry whose pattern is exactly ``key``, if any."""
        return self._by_key.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return (entry.key for entry in self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasTable):
            return NotImplemented
        return self._base_dir == other._base_dir and self._entries == other._entries

    def __hash__(self) -> int:
        return hash((self._base_dir, self._entries))

    def __repr__(self) -> str:
        return f"AliasTable(base_dir={self._base_dir!r}, aliases={list(self)!r})"

    def to_dict(self) -> Dict[str, List[str]]:
        """Plain dict view for logging and debugging."""
        return {entry.key: list(entry.targets.candidates) for entry in self._entries}


def _join(base_dir: str, target: str) -> str:
    return os.path.join(base_dir, target) if base_dir else target


def _check_target(alias: str, target: str) -> str:
    if target.count(WILDCARD) > 1:
        raise ConfigShapeError(
            f"Target '{target}' of alias '{alias}' can have at most one '{WILDCARD}' character"
        )
    return target


def _normalize_targets(alias: str, value: object, base_dir: str) -> Targets:
    """Validate a raw target value and join it onto base_dir."""
    if isinstance(value, str):
        return SingleTarget(_join(base_dir, _check_target(alias, value)))

    if isinstance(value, (list, tuple)):
        if not value:
            raise ConfigShapeError(f"Alias '{alias}' has an empty target list")
        for item in value:
            if not isinstance(item, str):
                raise ConfigShapeError(
                    f"Bad target {item!r} for alias '{alias}': "
                    f"{type(item).__name__}, expected str"
                )
            _check_target(alias, item)
        return MultiTarget(tuple(_join(base_dir, item) for item in value))

    raise ConfigShapeError(
        f"Bad path type for alias '{alias}': {type(value).__name__}, "
        "expected str or list of str"
    )


def build(base_dir: str, raw_paths: Mapping[str, Union[str, Sequence[str]]]) -> AliasTable:
    """Build an AliasTable from a base directory and a raw paths mapping.

    Args:
        base_dir: Directory the target patterns are relative to.
        raw_paths: Alias pattern -> target pattern or list of target patterns.

    Returns:
        The normalized, immutable AliasTable.

    Raises:
        ConfigShapeError: If a pattern has more than one wildcard, or a value
            is neither a string nor a non-empty sequence of strings.
    """
    if not isinstance(raw_paths, Mapping):
        raise ConfigShapeError(
            f"Bad paths type: {type(raw_paths).__name__}, expected a mapping"
        )

    entries = [
        AliasEntry(
            pattern=AliasPattern.parse(alias),
            targets=_normalize_targets(alias, value, base_dir),
        )
        for alias, value in raw_paths.items()
    ]
    return AliasTable(base_dir, entries)

#!/usr/bin/env python3
"""Alias Resolver - map an aliased import specifier to a file on disk.

Given an AliasTable and a specifier such as ``@app/models/user``, the resolver
finds the alias that matches, substitutes the wildcard into each target
candidate and probes the filesystem until one candidate yields a file.

Resolution order:
    1. Exact alias key (always beats wildcard aliases)
    2. Wildcard aliases, in the order they were declared
    3. Otherwise the specifier is not an alias

Probing a candidate:
    1. The path itself
    2. Extension inference (``foo`` -> ``foo.ts``), then any ``foo.*``
    3. Directories resolve to their index file; a directory without one
       falls through to the next candidate

Example:
    >>> table = build("/my/project/src", {"@app/*": ["app/*", "legacy/*"]})
    >>> result = resolve(table, "@app/models/user", root="/my/project")
    >>> result.path
    'src/app/models/user.ts'
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .filesystem import FileSystem, LocalFileSystem, find_file_in_directory, find_file_unknown_ext
from .table import WILDCARD, AliasEntry, AliasTable

logger = logging.getLogger(__name__)

# Extension priority for TypeScript/JavaScript sources
DEFAULT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx")

# Names loaded when a directory itself is imported
DEFAULT_INDEX_NAMES = ("index",)


class ResolutionOutcome(Enum):
    """How a resolution attempt ended."""

    RESOLVED = "resolved"  # Alias matched and a file was found
    NOT_AN_ALIAS = "not_an_alias"  # No alias pattern matched the specifier
    ALIAS_UNRESOLVED = "alias_unresolved"  # Alias matched, nothing on disk


@dataclass
class ResolutionResult:
    """Result of resolving one specifier.

    Attributes:
        outcome: How resolution ended.
        specifier: The specifier as written in the import.
        path: Resolved file path relative to the project root, or None.
        alias: The alias pattern that matched, or None.
        candidates: Absolute unaliased paths that were probed.
    """

    outcome: ResolutionOutcome
    specifier: str
    path: Optional[str] = None
    alias: Optional[str] = None
    candidates: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """Whether the specifier resolved to a file."""
        return self.outcome is ResolutionOutcome.RESOLVED and self.path is not None


@dataclass(frozen=True)
class AliasMatch:
    """An alias entry matched against a specifier, with the captured wildcard."""

    entry: AliasEntry
    captured: str


class AliasResolver:
    """Resolves specifiers against an AliasTable by probing the filesystem.

    The resolver holds configuration only. Tables are passed in per call and
    never modified, so one resolver can serve many threads at once.

    Attributes:
        root: Absolute project root; results are expressed relative to it.
        extensions: Extensions tried during inference, in priority order.
        index_names: Index file names (without extension) for directories.
        filesystem: Filesystem accessor used for probing.
    """

    def __init__(
        self,
        root: str = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        index_names: Sequence[str] = DEFAULT_INDEX_NAMES,
        filesystem: FileSystem = None,
    ):
        self.root = os.path.abspath(root) if root else os.getcwd()
        self.extensions = tuple(extensions)
        self.index_names = tuple(index_names)
        self.filesystem = filesystem or LocalFileSystem()

    def match(self, table: AliasTable, specifier: str) -> Optional[AliasMatch]:
        """Find the alias entry that applies to a specifier.

        Args:
            table: The alias table.
            specifier: The import string.

        Returns:
            AliasMatch, or None when the specifier is not an alias.
        """
        entry = table.lookup(specifier)
        if entry is not None:
            return AliasMatch(entry=entry, captured="")

        for entry in table.entries:
            if not entry.pattern.is_wildcard:
                continue
            captured = entry.pattern.matches(specifier)
            if captured is not None:
                return AliasMatch(entry=entry, captured=captured)

        return None

    def expand(self, match: AliasMatch) -> List[str]:
        """Substitute the captured segment into each target candidate."""
        expanded = []
        for target in match.entry.targets.candidates:
            if WILDCARD in target:
                target = target.replace(WILDCARD, match.captured, 1)
            expanded.append(target)
        return expanded

    def resolve(self, table: AliasTable, specifier: str) -> ResolutionResult:
        """Resolve a specifier to a file path.

        Never raises for an unmatched specifier; see ResolutionResult.outcome.

        Args:
            table: The alias table.
            specifier: The import string.

        Returns:
            ResolutionResult describing the outcome.
        """
        match = self.match(table, specifier)
        if match is None:
            return ResolutionResult(outcome=ResolutionOutcome.NOT_AN_ALIAS, specifier=specifier)

        alias = match.entry.key
        logger.debug("Specifier %r matched alias %r", specifier, alias)

        candidates = []
        for unaliased in self.expand(match):
            absolute = self._absolute(unaliased)
            candidates.append(absolute)

            found = self._probe(absolute)
            if found is None:
                logger.debug("Candidate %s for %r not found", absolute, specifier)
                continue  # try another option, don't stop early

            return ResolutionResult(
                outcome=ResolutionOutcome.RESOLVED,
                specifier=specifier,
                path=os.path.relpath(found, self.root),
                alias=alias,
                candidates=candidates,
            )

        return ResolutionResult(
            outcome=ResolutionOutcome.ALIAS_UNRESOLVED,
            specifier=specifier,
            alias=alias,
            candidates=candidates,
        )

    def _absolute(self, path: str) -> str:
        return os.path.normpath(os.path.join(self.root, path))

    def _probe(self, path: str) -> Optional[str]:
        """Return an existing file for a candidate path, or None."""
        fs = self.filesystem

        if not fs.exists(path):
            # could be missing extension
            directory, basename = os.path.split(path)
            path = find_file_in_directory(
                fs, directory, basename, self.extensions
            ) or find_file_unknown_ext(fs, directory, basename)
            if path is None:
                return None

        if fs.is_dir(path):
            return self._find_index(path)
        return path

    def _find_index(self, directory: str) -> Optional[str]:
        fs = self.filesystem
        for name in self.index_names:
            found = find_file_in_directory(fs, directory, name, self.extensions)
            if found:
                return found
        for name in self.index_names:
            found = find_file_unknown_ext(fs, directory, name)
            if found:
                return found
        return None


def resolve(
    table: AliasTable,
    specifier: str,
    *,
    root: str = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    index_names: Sequence[str] = DEFAULT_INDEX_NAMES,
    filesystem: FileSystem = None,
) -> ResolutionResult:
    """Resolve a specifier against a table.

    This is a convenience function for one-off use. Hosts resolving many
    specifiers should keep an AliasResolver around.

    Example:
        >>> result = resolve(table, "@app/utils", root="/my/project")
        >>> if result.found:
        ...     print(result.path)
    """
    resolver = AliasResolver(
        root=root, extensions=extensions, index_names=index_names, filesystem=filesystem
    )
    return resolver.resolve(table, specifier)

#!/usr/bin/env python3
"""Host plugin - hook alias resolution into a build pipeline.

The host calls AliasResolverPlugin.resolve for each import it cannot resolve
itself. The plugin finds the config governing the importing file, resolves
the specifier, and returns a PluginResult or None ("no opinion").

Example:
    >>> plugin = AliasResolverPlugin(root="/my/project")
    >>> request = ResolutionRequest("@app/utils", "/my/project/src/main.ts")
    >>> plugin.resolve(request)
    PluginResult(file_path='src/app/utils.ts', alias='@app/*')
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .cache import ConfigCache
from .errors import UnsupportedSpecifierError
from .resolver import (
    DEFAULT_EXTENSIONS,
    DEFAULT_INDEX_NAMES,
    AliasResolver,
    ResolutionOutcome,
)

logger = logging.getLogger(__name__)

# Importers the plugin handles; others get no opinion
DEFAULT_SOURCE_EXTENSIONS = (".ts", ".tsx")


@dataclass(frozen=True)
class ResolutionRequest:
    """A specifier and the absolute path of the file importing it."""

    specifier: str
    importer: str


@dataclass(frozen=True)
class PluginResult:
    """Successful resolution handed back to the host."""

    file_path: str
    alias: Optional[str] = None


def check_loader_syntax(specifier: str) -> None:
    """Reject webpack loader chains such as ``imports-loader?$=jquery!./app.js``.

    Raises:
        UnsupportedSpecifierError: If the specifier uses loader syntax.
    """
    if "!" in specifier:
        raise UnsupportedSpecifierError(specifier)


class AliasResolverPlugin:
    """Resolver plugin for a build pipeline.

    Attributes:
        resolver: The AliasResolver used for every request.
        cache: Config cache shared by all requests of this plugin.
        source_extensions: Importer extensions this plugin handles.
        stop_at: Directory above which config discovery does not go.
    """

    def __init__(
        self,
        root: str = None,
        cache: ConfigCache = None,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        index_names: Sequence[str] = DEFAULT_INDEX_NAMES,
        source_extensions: Sequence[str] = DEFAULT_SOURCE_EXTENSIONS,
        stop_at: str = None,
    ):
        self.resolver = AliasResolver(root=root, extensions=extensions, index_names=index_names)
        self.cache = cache if cache is not None else ConfigCache()
        self.source_extensions = tuple(source_extensions)
        self.stop_at = stop_at

    def handles(self, importer: str) -> bool:
        """Whether requests from this importing file are handled."""
        return importer.endswith(self.source_extensions)

    def resolve(self, request: ResolutionRequest) -> Optional[PluginResult]:
        """Resolve one request.

        Returns:
            PluginResult on success, None when the host should fall back.

        Raises:
            UnsupportedSpecifierError: For loader syntax.
            ConfigParseError, ConfigShapeError: For a broken project config.
        """
        check_loader_syntax(request.specifier)
        if not self.handles(request.importer):
            return None

        logger.debug("Resolving TypeScript file: %s", request.importer)
        table = self.cache.table_for(request.importer, stop_at=self.stop_at)
        if table is None:
            return None

        result = self.resolver.resolve(table, request.specifier)
        if result.outcome is ResolutionOutcome.RESOLVED:
            return PluginResult(file_path=result.path, alias=result.alias)

        if result.outcome is ResolutionOutcome.ALIAS_UNRESOLVED:
            logger.warning(
                "Alias %r matched %r but no file was found (tried: %s)",
                result.alias,
                request.specifier,
                ", ".join(result.candidates),
            )
        return None

    def resolve_many(
        self, requests: Sequence[ResolutionRequest], max_workers: int = None
    ) -> List[Optional[PluginResult]]:
        """Resolve independent requests concurrently, preserving input order."""
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.resolve, requests))

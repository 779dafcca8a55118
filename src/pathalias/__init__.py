"""pathalias - Resolve configured import path aliases to files on disk.

Projects declare aliases such as ``@app/*`` in tsconfig.json ``paths``; this
package turns those into real file paths so a build tool can load the right
module.

Components:
    - build: Normalizes a raw paths mapping into an immutable AliasTable
    - AliasResolver / resolve: Matches a specifier and probes the filesystem
    - ConfigCache: Owns discovered configs and their tables
    - AliasResolverPlugin: Adapter for a host build pipeline

Quick Start:
    >>> from pathalias import build, resolve
    >>> table = build("/my/project/src", {"@app/*": ["app/*", "legacy/*"]})
    >>> result = resolve(table, "@app/models/user", root="/my/project")
    >>> result.path
    'src/app/models/user.ts'

    With config discovery:
    >>> from pathalias import AliasResolverPlugin, ResolutionRequest
    >>> plugin = AliasResolverPlugin(root="/my/project")
    >>> plugin.resolve(ResolutionRequest("@app/utils", "/my/project/src/main.ts"))
"""

from .cache import ConfigCache
from .config import AliasConfig, find_config, load_config, load_pyproject_aliases, load_table
from .errors import (
    ConfigParseError,
    ConfigShapeError,
    InvalidConfigShape,
    PathAliasError,
    UnsupportedSpecifierError,
)
from .filesystem import FileSystem, LocalFileSystem
from .plugin import AliasResolverPlugin, PluginResult, ResolutionRequest
from .resolver import (
    DEFAULT_EXTENSIONS,
    DEFAULT_INDEX_NAMES,
    AliasMatch,
    AliasResolver,
    ResolutionOutcome,
    ResolutionResult,
    resolve,
)
from .table import AliasEntry, AliasPattern, AliasTable, MultiTarget, SingleTarget, build

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Table building
    "build",
    "AliasTable",
    "AliasEntry",
    "AliasPattern",
    "SingleTarget",
    "MultiTarget",
    # Resolution
    "resolve",
    "AliasResolver",
    "AliasMatch",
    "ResolutionResult",
    "ResolutionOutcome",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_INDEX_NAMES",
    # Filesystem
    "FileSystem",
    "LocalFileSystem",
    # Configuration
    "AliasConfig",
    "find_config",
    "load_config",
    "load_pyproject_aliases",
    "load_table",
    "ConfigCache",
    # Host integration
    "AliasResolverPlugin",
    "ResolutionRequest",
    "PluginResult",
    # Errors
    "PathAliasError",
    "ConfigShapeError",
    "InvalidConfigShape",
    "ConfigParseError",
    "UnsupportedSpecifierError",
]

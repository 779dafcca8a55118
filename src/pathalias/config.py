#!/usr/bin/env python3
"""Configuration loading - find and parse the project's alias configuration.

Supports:
- tsconfig.json / jsconfig.json ``compilerOptions.paths`` and ``baseUrl``
- The ``extends`` directive (child overrides parent, cycles are cut)
- JSON with comments and trailing commas, as TypeScript accepts
- pyproject.toml ``[tool.pathalias]`` for non-TypeScript projects

Example:
    >>> config_path = find_config("/my/project/src/app/main.ts")
    >>> config = load_config(config_path)
    >>> config.base_dir, config.paths
    ('/my/project/src', {'@app/*': ['app/*']})
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Union

try:
    import tomllib
except ImportError:  # Python < 3.11
    import toml as tomllib

from .errors import ConfigParseError, ConfigShapeError
from .table import AliasTable, build

logger = logging.getLogger(__name__)

# Config files searched for, in priority order within each directory
CONFIG_FILE_NAMES = ("tsconfig.json", "jsconfig.json")

PYPROJECT_FILE_NAME = "pyproject.toml"

# baseUrl used when the configuration does not declare one
DEFAULT_BASE_URL = "src"

# Strings are matched first so comment markers inside them survive
_COMMENT_RE = re.compile(r'"(?:\\.|[^"\\])*"|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMA_RE = re.compile(r'"(?:\\.|[^"\\])*"|,(?=\s*[}\]])')


@dataclass
class AliasConfig:
    """Alias configuration read from a project file.

    Attributes:
        config_path: Absolute path of the file it was loaded from.
        base_dir: Absolute directory that target patterns are relative to.
        paths: Raw alias pattern -> target(s) mapping.
    """

    config_path: str
    base_dir: str
    paths: Dict[str, Union[str, List[str]]] = field(default_factory=dict)


def find_config(
    start: str,
    names: Sequence[str] = CONFIG_FILE_NAMES,
    stop_at: Optional[str] = None,
) -> Optional[str]:
    """Find the nearest config file at or above ``start``.

    Args:
        start: The importing file, or a directory to start from.
        names: Config file names to look for, in priority order.
        stop_at: Directory above which the search does not go.

    Returns:
        Absolute path to the config file, or None if there is none.
    """
    directory = _absolute(start)
    if not directory.is_dir():
        directory = directory.parent
    stop = _absolute(stop_at) if stop_at else None

    for current in [directory, *directory.parents]:
        for name in names:
            candidate = current / name
            if candidate.is_file():
                return str(candidate)
        if current == stop:
            break
    return None


def strip_json_comments(content: str) -> str:
    """Remove ``//`` and ``/* */`` comments and trailing commas from JSON text."""

    def _keep_strings(match):
        token = match.group(0)
        return token if token.startswith('"') else ""

    content = _COMMENT_RE.sub(_keep_strings, content)
    return _TRAILING_COMMA_RE.sub(_keep_strings, content)


def _absolute(path: Union[str, Path]) -> Path:
    """Absolute, normalized path; symlinks are left alone."""
    return Path(os.path.normpath(os.path.abspath(path)))


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ConfigParseError(f"Cannot read {path}: {e}", path=str(path)) from e

    try:
        data = json.loads(strip_json_comments(content))
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigParseError(f"Expected a JSON object in {path}", path=str(path))
    return data


def _extends_paths(config_path: Path, extends: Any) -> List[Path]:
    """Turn an ``extends`` value into absolute parent config paths."""
    if isinstance(extends, str):
        extends = [extends]
    if not isinstance(extends, list):
        raise ConfigShapeError(
            f"Bad extends type in {config_path}: {type(extends).__name__}, "
            "expected str or list of str"
        )

    parents = []
    for item in extends:
        if not isinstance(item, str):
            raise ConfigShapeError(
                f"Bad extends entry {item!r} in {config_path}: "
                f"{type(item).__name__}, expected str"
            )
        parent = Path(item)
        if not parent.is_absolute():
            parent = config_path.parent / item
        if not parent.suffix:
            parent = parent.with_suffix(".json")
        parents.append(_absolute(parent))
    return parents


def _parse_tsconfig(
    config_path: Path, seen: Set[Path] = None
) -> Tuple[Dict[str, Any], Optional[Path]]:
    """Parse a tsconfig, following extends.

    Args:
        config_path: Absolute path of the config file.
        seen: Configs on the current extends chain (prevents cycles).

    Returns:
        Tuple of (paths dict, absolute base dir or None if undeclared).
    """
    seen = set(seen or ())
    if config_path in seen:
        logger.warning("Circular extends chain at %s", config_path)
        return {}, None
    seen.add(config_path)

    config = _read_json(config_path)
    compiler_options = config.get("compilerOptions") or {}
    if not isinstance(compiler_options, dict):
        raise ConfigShapeError(f"compilerOptions in {config_path} must be an object")

    paths = compiler_options.get("paths")
    base_url = compiler_options.get("baseUrl", config.get("baseUrl"))
    base_dir = None
    if base_url is not None:
        if not isinstance(base_url, str):
            raise ConfigShapeError(f"baseUrl in {config_path} must be a string")
        base_dir = _absolute(config_path.parent / base_url)

    # Handle extends: later parents override earlier ones, the child overrides all
    inherited_paths: Optional[Dict[str, Any]] = None
    inherited_base = None
    extends = config.get("extends")
    if extends:
        for parent in _extends_paths(config_path, extends):
            if not parent.is_file():
                logger.warning("Extended config %s not found (from %s)", parent, config_path)
                continue
            parent_paths, parent_base = _parse_tsconfig(parent, seen)
            if parent_paths:
                inherited_paths = parent_paths
            if parent_base:
                inherited_base = parent_base

    if paths is None:
        paths = inherited_paths or {}
    if not isinstance(paths, dict):
        raise ConfigShapeError(f"compilerOptions.paths in {config_path} must be an object")

    return paths, base_dir or inherited_base


def load_config(config_path: str) -> AliasConfig:
    """Load alias configuration from a tsconfig.json or jsconfig.json.

    Args:
        config_path: Path to the config file.

    Returns:
        AliasConfig with an absolute base dir.

    Raises:
        ConfigParseError: If a file in the extends chain cannot be parsed.
        ConfigShapeError: If paths, baseUrl or extends have the wrong type.
    """
    path = _absolute(config_path)
    paths, base_dir = _parse_tsconfig(path)
    if base_dir is None:
        base_dir = path.parent / DEFAULT_BASE_URL
    return AliasConfig(config_path=str(path), base_dir=str(base_dir), paths=paths)


def _table(data: Dict[str, Any], key: str, where: str, config_path: Path) -> Dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigShapeError(
            f"{where} in {config_path} must be a table, not {type(value).__name__}"
        )
    return value


def load_pyproject_aliases(config_path: str) -> AliasConfig:
    """Load alias configuration from a pyproject.toml ``[tool.pathalias]`` table.

    Expected format:
        [tool.pathalias]
        base_url = "src"
        aliases = { "@app/*" = ["app/*"], "@config" = "config/index" }
    """
    path = _absolute(config_path)
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigParseError(f"Cannot read {path}: {e}", path=str(path)) from e
    except ValueError as e:
        raise ConfigParseError(f"Invalid TOML in {path}: {e}", path=str(path)) from e

    tool = _table(data, "tool", "[tool]", path)
    section = _table(tool, "pathalias", "[tool.pathalias]", path)
    aliases = _table(section, "aliases", "[tool.pathalias] aliases", path)

    base_url = section.get("base_url", DEFAULT_BASE_URL)
    if not isinstance(base_url, str):
        raise ConfigShapeError(f"[tool.pathalias] base_url in {path} must be a string")

    base_dir = _absolute(path.parent / base_url)
    return AliasConfig(config_path=str(path), base_dir=str(base_dir), paths=aliases)


def load_table(config_path: str) -> AliasTable:
    """Load a config file and build its AliasTable."""
    if Path(config_path).name == PYPROJECT_FILE_NAME:
        config = load_pyproject_aliases(config_path)
    else:
        config = load_config(config_path)

    table = build(config.base_dir, config.paths)
    logger.debug("Alias paths loaded from %s: %s", config.config_path, json.dumps(table.to_dict()))
    return table

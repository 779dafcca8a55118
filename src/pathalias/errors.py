#!/usr/bin/env python3
"""Exceptions raised by pathalias.

Only malformed configuration and unsupported specifier syntax are errors.
A specifier that is not an alias, or an alias with nothing on disk behind it,
is reported through ResolutionResult instead.
"""

from typing import Optional


class PathAliasError(Exception):
    """Base class for all pathalias errors."""


class ConfigShapeError(PathAliasError):
    """Raised when an alias pattern or its target value has the wrong shape.

    Example:
        >>> build("src", {"@app/*": 42})
        Traceback (most recent call last):
        ...
        ConfigShapeError: Bad path type for alias '@app/*': int, expected str or list of str
    """


# Name used by hosts that follow the builder contract wording.
InvalidConfigShape = ConfigShapeError


class ConfigParseError(PathAliasError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UnsupportedSpecifierError(PathAliasError):
    """Raised for specifiers using loader syntax, e.g. ``style-loader!./app.css``."""

    def __init__(self, specifier: str):
        super().__init__(
            f"The import path '{specifier}' uses webpack-specific loader syntax, "
            "which is not supported."
        )
        self.specifier = specifier

#!/usr/bin/env python3
"""Config cache - reuse built alias tables across resolutions.

A ConfigCache is owned by the host for as long as it wants tables reused
(typically one build). Tables are rebuilt when their config file changes on
disk, detected by its modification time and size.

Example:
    >>> cache = ConfigCache()
    >>> table = cache.table_for("/my/project/src/app/main.ts")
    >>> table is cache.table_for("/my/project/src/app/other.ts")
    True
"""

import os
import threading
from typing import Callable, Dict, Optional, Tuple

from .config import CONFIG_FILE_NAMES, find_config, load_table
from .table import AliasTable

Stamp = Tuple[int, int]


def _normalize(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


def _stamp(path: str) -> Optional[Stamp]:
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return (stat.st_mtime_ns, stat.st_size)


class ConfigCache:
    """Thread-safe cache of AliasTables keyed by config file path.

    Attributes:
        loader: Callable building a table from a config path.
        names: Config file names used for discovery.
    """

    def __init__(
        self,
        loader: Callable[[str], AliasTable] = load_table,
        names=CONFIG_FILE_NAMES,
    ):
        self.loader = loader
        self.names = tuple(names)
        self._tables: Dict[str, Tuple[Stamp, AliasTable]] = {}
        self._discovered: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def get(self, config_path: str) -> AliasTable:
        """Return the table for a config file, loading it if new or changed.

        Raises:
            ConfigParseError, ConfigShapeError: From the loader.
        """
        config_path = _normalize(config_path)
        stamp = _stamp(config_path)

        with self._lock:
            cached = self._tables.get(config_path)
            if cached is not None and cached[0] == stamp:
                return cached[1]

        # Load outside the lock; a concurrent duplicate load is harmless
        table = self.loader(config_path)

        with self._lock:
            self._tables[config_path] = (stamp, table)
        return table

    def find(self, importer: str, stop_at: Optional[str] = None) -> Optional[str]:
        """Find the config governing ``importer``, remembering the answer per directory."""
        directory = os.path.dirname(os.path.abspath(importer))
        key = f"{directory}\0{stop_at or ''}"

        with self._lock:
            if key in self._discovered:
                return self._discovered[key]

        config_path = find_config(directory, names=self.names, stop_at=stop_at)

        with self._lock:
            self._discovered[key] = config_path
        return config_path

    def table_for(self, importer: str, stop_at: Optional[str] = None) -> Optional[AliasTable]:
        """Return the table for the config nearest to ``importer``, or None."""
        config_path = self.find(importer, stop_at=stop_at)
        if config_path is not None and _stamp(config_path) is None:
            # config removed since discovery; whatever is above it governs now
            self._forget(config_path)
            config_path = self.find(importer, stop_at=stop_at)
        if config_path is None:
            return None
        return self.get(config_path)

    def invalidate(self, config_path: str = None) -> None:
        """Drop one config's table, or everything when no path is given."""
        with self._lock:
            if config_path is None:
                self._tables.clear()
                self._discovered.clear()
            else:
                self._forget_locked(_normalize(config_path))

    def _forget(self, config_path: str) -> None:
        with self._lock:
            self._forget_locked(_normalize(config_path))

    def _forget_locked(self, config_path: str) -> None:
        self._tables.pop(config_path, None)
        stale = [key for key, found in self._discovered.items() if found == config_path]
        for key in stale:
            del self._discovered[key]

    def clear(self) -> None:
        self.invalidate()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

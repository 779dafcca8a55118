#!/usr/bin/env python3
"""Filesystem access used while probing alias candidates.

The resolver never touches ``os`` directly; it goes through a FileSystem so
hosts with a virtual or in-memory filesystem can plug in their own.
"""

import os
from typing import List, Optional, Sequence


class FileSystem:
    """Minimal read-only filesystem interface: exists, is_dir, listdir."""

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def is_dir(self, path: str) -> bool:
        raise NotImplementedError

    def listdir(self, path: str) -> List[str]:
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    """FileSystem backed by the local disk."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def listdir(self, path: str) -> List[str]:
        try:
            return os.listdir(path)
        except (FileNotFoundError, NotADirectoryError):
            return []


def find_file_in_directory(
    fs: FileSystem,
    directory: str,
    basename: str = "index",
    extensions: Sequence[str] = (),
) -> Optional[str]:
    """Find ``basename`` + extension in a directory, by extension priority.

    Args:
        fs: Filesystem to probe.
        directory: Directory to look in.
        basename: File name without extension (default: "index").
        extensions: Extensions to try, in priority order.

    Returns:
        Path of the first existing file, or None.
    """
    for ext in extensions:
        candidate = os.path.join(directory, basename + ext)
        if fs.exists(candidate) and not fs.is_dir(candidate):
            return candidate
    return None


def find_file_unknown_ext(fs: FileSystem, directory: str, basename: str) -> Optional[str]:
    """Find any file in ``directory`` whose name without extension is ``basename``.

    Names are checked in sorted order so the pick is stable across platforms.
    """
    for name in sorted(fs.listdir(directory)):
        stem, ext = os.path.splitext(name)
        if stem != basename or not ext:
            continue
        candidate = os.path.join(directory, name)
        if not fs.is_dir(candidate):
            return candidate
    return None

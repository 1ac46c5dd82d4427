"""Prune a file system cache down to a size, oldest entries first."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_PROTECTED_NAMES = ("full.json",)


@dataclass(frozen=True)
class CacheItem:
    """A file or directory in the cache with its total size and modification time."""

    path: str
    size: int
    mtime: float


def _size_of(path: str) -> int:
    info = os.stat(path)
    if not os.path.isdir(path):
        return info.st_size
    total = 0
    for root, _dirs, files in os.walk(path, followlinks=True):
        for name in files:
            total += os.stat(os.path.join(root, name)).st_size
    return total


def _directory_contents(path: str) -> list[CacheItem]:
    with os.scandir(path) as entries:
        return [
            CacheItem(entry.path, _size_of(entry.path), os.stat(entry.path).st_mtime)
            for entry in entries
        ]


def _tree_contents(path: str) -> list[CacheItem]:
    items = []
    for root, _dirs, files in os.walk(path, followlinks=True):
        for name in files:
            full = os.path.join(root, name)
            info = os.stat(full)
            items.append(CacheItem(full, info.st_size, info.st_mtime))
    return items


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def _remove_empty_directories(path: str) -> None:
    for root, dirs, files in os.walk(path, topdown=False):
        if root == path:
            continue
        if not dirs and not files:
            os.rmdir(root)
        elif not files and not os.listdir(root):
            os.rmdir(root)


def prune_cache(path: str, max_size: int, recursive: bool, dry_run: bool) -> list[CacheItem]:
    """Remove the least recently modified entries until the cache fits in max_size bytes.

    Without recursive, each top-level entry (a whole directory included) is one
    item; with it, every file is its own item and emptied directories are removed
    afterwards. Entries named full.json are never removed. In dry-run mode nothing
    is deleted. Returns the items that were (or would have been) removed.
    """
    os.stat(path)
    if not os.path.isdir(path):
        raise NotADirectoryError(f"building cache for '{path}': not a directory")

    items = _tree_contents(path) if recursive else _directory_contents(path)
    items.sort(key=lambda item: item.mtime)
    total = sum(item.size for item in items)

    removed: list[CacheItem] = []
    for item in items:
        if total <= max_size:
            break
        if os.path.basename(item.path) in _PROTECTED_NAMES:
            continue
        if dry_run:
            logger.info("dry run: would remove '%s' (%d bytes)", item.path, item.size)
        else:
            _remove(item.path)
            logger.info("removed '%s' (%d bytes)", item.path, item.size)
        total -= item.size
        removed.append(item)

    if recursive and not dry_run:
        _remove_empty_directories(path)

    return removed
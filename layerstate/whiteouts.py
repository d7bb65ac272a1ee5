"""Helpers for choosing whiteouts and following symlinks in snapshots."""

from __future__ import annotations

import os
import posixpath
import stat
from typing import Collection


def _parent(path: str) -> str:
    parent = posixpath.dirname(path)
    return posixpath.normpath(parent) if parent else "."


def remove_obsolete_whiteouts(deleted_files: Collection[str]) -> list[str]:
    """Deleted paths whose parent directory was not itself deleted, sorted."""
    deleted = set(deleted_files)
    return sorted(path for path in deleted if _parent(path) not in deleted)


def files_with_links(path: str) -> list[str]:
    """``path``, plus its symlink target when ``path`` is a link to an existing file."""
    if not stat.S_ISLNK(os.lstat(path).st_mode):
        return [path]
    link = os.readlink(path)
    if not os.path.isabs(link):
        link = os.path.normpath(os.path.join(os.path.dirname(path), link))
    try:
        os.stat(link)
    except OSError:
        return [path]
    return [path, link]
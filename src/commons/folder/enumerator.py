"""Recursive file discovery under a benchmark root. Lazy and restartable."""

import os
from typing import Iterator

from commons.errors import AccessDenied, DirectoryNotFound


def _check_root(root: str) -> str:
    if not os.path.exists(root):
        raise DirectoryNotFound(f"Directory not found: {root}")
    if not os.path.isdir(root):
        raise DirectoryNotFound(f"Not a folder: {root}")
    return os.path.abspath(root)


def _raise_access_denied(err: OSError) -> None:
    raise AccessDenied(f"Cannot read directory: {err.filename}") from err


def enumerate_files(root: str) -> Iterator[str]:
    """
    Yield absolute paths of every file below root, recursively.

    No extension filtering. Entries are visited in sorted order so repeated
    walks over an unchanged tree yield the same sequence. An unreadable
    subdirectory raises AccessDenied instead of being skipped.
    """
    root = _check_root(root)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_access_denied):
        dirnames.sort()
        for filename in sorted(filenames):
            yield os.path.join(dirpath, filename)


class FileEnumerator:
    """
    Restartable producer of file paths: each iter() walks the tree again, so a
    benchmark case can replay its file set every iteration without holding the
    whole listing in memory. The root is validated up front.
    """

    def __init__(self, root: str):
        self.root = _check_root(root)

    def __iter__(self) -> Iterator[str]:
        return enumerate_files(self.root)

    def __repr__(self) -> str:
        return f"FileEnumerator({self.root!r})"

"""File name extension helpers."""

from __future__ import annotations

LEN_FILE_EXTENSION_MAX = 5
"""Longest extension recognised, dot included."""


def get_file_extension(
    filename: str, size: int = 0, ext_max_len: int = 0
) -> str | None:
    """Return the extension of ``filename`` including its dot, or None.

    Only the first ``size`` characters are looked at (all when 0), and an
    extension longer than ``ext_max_len`` characters (default
    ``LEN_FILE_EXTENSION_MAX``) is not recognised.
    """
    length = size or len(filename)
    max_len = ext_max_len or LEN_FILE_EXTENSION_MAX
    for i in range(length - 1, -1, -1):
        if length - i > max_len:
            break
        if filename[i] == ".":
            return filename[i:length]
    return None


def is_extension_matching(extension: str | None, pattern: str) -> bool:
    """Tell whether ``extension`` is one of the extensions joined in ``pattern``.

    ``pattern`` is a run of extensions such as ``".gif.jpg.jpeg.png"``,
    searched from the end; the comparison ignores case.
    """
    if extension is None:
        return False
    ext = get_file_extension(pattern)
    plen = len(pattern)
    while plen > 0 and ext:
        extlen = len(ext)
        if extension[:extlen].lower() == ext.lower():
            return True
        plen -= extlen
        if plen > 0:
            ext = get_file_extension(pattern, plen)
    return False


def nocase_key(name: str) -> str:
    """Sort key that orders names without regard to case."""
    return name.lower()
"""Suffix-based filename filtering.

Suffixes are compared as plain strings: "txt" matches both "report.txt" and
"notxt". Directories are never filtered; only file names pass through here.

Example:
    >>> from dirreader.scanning import matches
    >>> matches("a.txt", [".txt"], include=True)
    True
    >>> matches("a.txt", [".txt"], include=False)
    False
    >>> matches("a.md", [], include=True)  # empty mask admits everything
    True
"""

from typing import Sequence


def has_suffix(name: str, mask: Sequence[str]) -> bool:
    """Return True if name ends with any string in mask."""
    for suffix in mask:
        if name.endswith(suffix):
            return True
    return False


def normalize_include(mask: Sequence[str], include: bool) -> bool:
    """Return the effective include flag for a mask.

    An empty mask disables filtering, which is expressed as include=False
    (keep every name that matches none of zero suffixes).
    """
    if not mask:
        return False
    return include


def matches(name: str, mask: Sequence[str], include: bool) -> bool:
    """Decide whether a file should be processed.

    Args:
        name: File name (not a path).
        mask: Literal suffixes. Empty disables filtering.
        include: True keeps only names ending with a suffix in mask,
            False keeps only names ending with none of them.

    Returns:
        True if the file is admitted.
    """
    return has_suffix(name, mask) == normalize_include(mask, include)

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Deterministic ordering for file-path collections.

Artifacts arrive in whatever order the pipeline happens to finish them, and
dpkg lists entries in archive order. Every comparison in the harness goes
through sort_paths so both sides are ordered by the same rule.

The rule: split on path separators and compare segment by segment,
case-insensitively first and then case-sensitively. Paths that still tie
(they differ only in separator style) fall back to the raw string, so the
order never depends on input order. A directory sorts before anything
inside it.
"""

import re
from collections.abc import Iterable

_SEPARATORS = re.compile(r"[\\/]")


def path_sort_key(path: str) -> tuple[tuple[tuple[str, str], ...], str]:
    """Sort key for a single path string. Works for POSIX and Windows separators."""
    segments = tuple((segment.casefold(), segment) for segment in _SEPARATORS.split(path))
    return segments, path


def sort_paths(paths: Iterable[str]) -> list[str]:
    """Return a new list with the paths in a fixed, total order."""
    return sorted(paths, key=path_sort_key)

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Platform and architecture identifiers.

A request may name platforms loosely (``"current"``, ``"all"``, ``"osx"``,
``"win32"``); normalize_platforms turns that into the concrete node-style
identifiers the dispatcher works with.
"""

from collections.abc import Iterable
from enum import Enum

from packcheck.runtime.environment import current_os


class Platform(str, Enum):
    """Artifact tag attached to every pipeline notification."""

    MAC = "mac"
    LINUX = "linux"
    WINDOWS = "win"

    @property
    def node_name(self) -> str:
        return _NODE_NAMES[self]

    @classmethod
    def from_node_name(cls, name: str) -> "Platform":
        for member, node in _NODE_NAMES.items():
            if node == name:
                return member
        raise ValueError(f"Unknown platform identifier: {name!r}")


class Arch(str, Enum):
    IA32 = "ia32"
    X64 = "x64"


_NODE_NAMES: dict[Platform, str] = {
    Platform.MAC: "darwin",
    Platform.LINUX: "linux",
    Platform.WINDOWS: "win32",
}

_ALIASES: dict[str, str] = {
    "darwin": "darwin",
    "mac": "darwin",
    "osx": "darwin",
    "macos": "darwin",
    "linux": "linux",
    "win32": "win32",
    "win": "win32",
    "windows": "win32",
}

CURRENT = "current"
ALL = "all"


def normalize_platforms(requested: Iterable[str] | None) -> list[str]:
    """
    Expand a platform request to concrete node-style identifiers.

    An empty or missing request, or the literal ``"current"``, means the OS
    the harness runs on. ``"all"`` means every supported platform. Order of
    first appearance is preserved and duplicates are dropped.

    Raises:
        ValueError: On an unrecognized platform name.
    """
    names = list(requested or [])
    if not names:
        names = [CURRENT]

    expanded: list[str] = []
    for raw in names:
        name = raw.strip().lower()
        if name == CURRENT:
            candidates = [current_os()]
        elif name == ALL:
            candidates = ["darwin", "linux", "win32"]
        elif name in _ALIASES:
            candidates = [_ALIASES[name]]
        else:
            raise ValueError(f"Unknown platform: {raw!r}")

        for candidate in candidates:
            if candidate not in expanded:
                expanded.append(candidate)

    return expanded

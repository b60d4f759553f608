# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Squirrel.Windows release manifests (RELEASES / RELEASES-ia32).

Each non-blank line is `<sha1> <nupkg filename> <size>`. The harness only
needs a weak check that the 32-bit manifest really describes 32-bit
packages. When that check fails, the parsed entries name the packages the
manifest lists instead.
"""

from dataclasses import dataclass
from pathlib import Path

from packcheck.config.exceptions import DocumentParseError
from packcheck.utils.filesystem import read_text_async

IA32_MANIFEST = "RELEASES-ia32"
X64_MANIFEST = "RELEASES"
IA32_MARKER = "ia32"


@dataclass(frozen=True)
class ReleaseEntry:
    sha1: str
    filename: str
    size: int


def parse_release_entries(text: str) -> list[ReleaseEntry]:
    """
    Parse manifest lines into entries.

    Raises:
        DocumentParseError: A line doesn't have three fields or the size isn't an integer.
    """
    entries: list[ReleaseEntry] = []
    for lineno, line in enumerate(text.lstrip("\ufeff").splitlines(), start=1):
        if not line.strip():
            continue
        fields = line.split()
        if len(fields) != 3:
            raise DocumentParseError(f"Release manifest line {lineno} has {len(fields)} fields")
        sha1, filename, size = fields
        try:
            entries.append(ReleaseEntry(sha1=sha1, filename=filename, size=int(size)))
        except ValueError as err:
            raise DocumentParseError(f"Release manifest line {lineno}: bad size {size!r}") from err
    return entries


def has_arch_marker(text: str, marker: str = IA32_MARKER) -> bool:
    return marker in text


async def read_release_manifest(path: Path) -> str:
    try:
        return await read_text_async(path)
    except OSError as err:
        raise DocumentParseError(f"Cannot read release manifest {path}: {err}") from err

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Info.plist parsing for macOS application bundles.

Only the four keys the mac validator checks are extracted. A missing key
is a parse failure, not a silent None, so a half-written plist can't slip
through as "field differs".
"""

import plistlib
from dataclasses import dataclass
from pathlib import Path
from xml.parsers.expat import ExpatError

from packcheck.config.exceptions import DocumentParseError
from packcheck.utils.filesystem import read_bytes_async

INFO_PLIST_PATH: tuple[str, ...] = ("Contents", "Info.plist")

_REQUIRED_KEYS: dict[str, str] = {
    "CFBundleDisplayName": "display_name",
    "CFBundleIdentifier": "identifier",
    "LSApplicationCategoryType": "category",
    "CFBundleVersion": "version",
}


@dataclass(frozen=True)
class BundleInfo:
    display_name: str
    identifier: str
    category: str
    version: str


def parse_info_plist(data: bytes, source: str = "<bytes>") -> BundleInfo:
    """
    Parse an XML or binary property list into BundleInfo.

    Raises:
        DocumentParseError: Malformed document, non-dict root, or a required key missing.
    """
    try:
        document = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as err:
        raise DocumentParseError(f"Invalid property list {source}: {err}") from err

    if not isinstance(document, dict):
        raise DocumentParseError(
            f"Property list {source} root must be a dict, got {type(document).__name__}"
        )

    missing = [key for key in _REQUIRED_KEYS if key not in document]
    if missing:
        raise DocumentParseError(
            f"Property list {source} is missing required keys: {', '.join(missing)}"
        )

    return BundleInfo(**{field: str(document[key]) for key, field in _REQUIRED_KEYS.items()})


async def read_info_plist(app_dir: Path) -> BundleInfo:
    """Read `<app_dir>/Contents/Info.plist`."""
    plist_path = app_dir.joinpath(*INFO_PLIST_PATH)
    try:
        data = await read_bytes_async(plist_path)
    except OSError as err:
        raise DocumentParseError(f"Cannot read property list {plist_path}: {err}") from err
    return parse_info_plist(data, source=str(plist_path))

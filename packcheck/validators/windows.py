# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Windows (Squirrel) result checks: the installer, full nupkg and RELEASES
manifest per architecture, with 32-bit files carrying an `-ia32` suffix.
"""

from pathlib import Path

from packcheck.config.schema import BuildOptions
from packcheck.formats.releases import (
    IA32_MANIFEST,
    X64_MANIFEST,
    has_arch_marker,
    parse_release_entries,
    read_release_manifest,
)
from packcheck.harness.platforms import Arch
from packcheck.logging.logger import get_logger
from packcheck.utils.paths import sort_paths
from packcheck.validators.errors import ArtifactAssertionError, assert_equal

logger = get_logger(__name__)


def windows_artifacts_32(product_name: str, version: str) -> list[str]:
    return [
        IA32_MANIFEST,
        f"{product_name}Setup-{version}-ia32.exe",
        f"{product_name}-{version}-ia32-full.nupkg",
    ]


def windows_artifacts_64(product_name: str, version: str) -> list[str]:
    return [
        X64_MANIFEST,
        f"{product_name}Setup-{version}.exe",
        f"{product_name}-{version}-full.nupkg",
    ]


def expected_windows_artifacts(product_name: str, version: str, arch: Arch | None) -> list[str]:
    """64-bit set alone for an x64 request, both sets otherwise."""
    expected = windows_artifacts_64(product_name, version)
    if arch != Arch.X64:
        expected = windows_artifacts_32(product_name, version) + expected
    return sort_paths(expected)


async def check_windows_result(options: BuildOptions, artifacts: list[str]) -> None:
    """
    Validate a Windows build. Raises on the first mismatch.

    Raises:
        ArtifactAssertionError: Filename set differs, or RELEASES-ia32 lacks the ia32 marker.
        DocumentParseError: RELEASES-ia32 is unreadable or malformed.
    """
    metadata = options.metadata
    expected = expected_windows_artifacts(
        metadata.resolved_product_name, metadata.version, options.arch
    )
    filenames = [Path(path).name for path in artifacts]
    assert_equal("windows_artifacts", expected, sort_paths(filenames))

    if IA32_MANIFEST in filenames:
        manifest_path = Path(artifacts[filenames.index(IA32_MANIFEST)])
        text = await read_release_manifest(manifest_path)
        if not has_arch_marker(text):
            raise ArtifactAssertionError(
                "windows_release_manifest",
                expected="'ia32' in manifest",
                actual=[entry.filename for entry in parse_release_entries(text)],
                detail=str(manifest_path),
            )

    logger.info("Windows result valid", extra={"artifacts": sort_paths(filenames)})

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Linux result checks.

The expected install listing is written once against the placeholder
product name "TestApp" and re-targeted per run. The produced .deb packages
are listed with `dpkg --contents`, noise paths are dropped, and the two
sorted listings must match exactly.
"""

from pathlib import Path

from packcheck.config.schema import BuildOptions, ToolConfig
from packcheck.formats.deb_contents import package_contents
from packcheck.harness.platforms import Arch
from packcheck.logging.logger import get_logger
from packcheck.tools import runner
from packcheck.utils.paths import sort_paths
from packcheck.validators.errors import assert_equal

logger = get_logger(__name__)

PLACEHOLDER_PRODUCT_NAME = "TestApp"

_EXECUTABLE_TEMPLATE = f"/opt/{PLACEHOLDER_PRODUCT_NAME}/{PLACEHOLDER_PRODUCT_NAME}"
_DESKTOP_TEMPLATE = f"/usr/share/applications/{PLACEHOLDER_PRODUCT_NAME}.desktop"
_INSTALL_ROOT_TEMPLATE = f"/opt/{PLACEHOLDER_PRODUCT_NAME}/"

# Installed by every Electron deb, minus locales/ and libgcrypt* which vary per build host.
EXPECTED_LINUX_CONTENTS: tuple[str, ...] = (
    "/",
    "/opt/",
    "/opt/TestApp/",
    "/opt/TestApp/LICENSE",
    "/opt/TestApp/LICENSES.chromium.html",
    "/opt/TestApp/TestApp",
    "/opt/TestApp/blink_image_resources_200_percent.pak",
    "/opt/TestApp/content_resources_200_percent.pak",
    "/opt/TestApp/content_shell.pak",
    "/opt/TestApp/icudtl.dat",
    "/opt/TestApp/libffmpeg.so",
    "/opt/TestApp/libnode.so",
    "/opt/TestApp/natives_blob.bin",
    "/opt/TestApp/resources/",
    "/opt/TestApp/resources/app.asar",
    "/opt/TestApp/resources/electron.asar",
    "/opt/TestApp/snapshot_blob.bin",
    "/opt/TestApp/ui_resources_200_percent.pak",
    "/opt/TestApp/version",
    "/opt/TestApp/views_resources_200_percent.pak",
    "/usr/",
    "/usr/share/",
    "/usr/share/applications/",
    "/usr/share/applications/TestApp.desktop",
    "/usr/share/doc/",
    "/usr/share/doc/testapp/",
    "/usr/share/doc/testapp/changelog.gz",
    "/usr/share/icons/",
    "/usr/share/icons/hicolor/",
    "/usr/share/icons/hicolor/128x128/",
    "/usr/share/icons/hicolor/128x128/apps/",
    "/usr/share/icons/hicolor/128x128/apps/testapp.png",
    "/usr/share/icons/hicolor/16x16/",
    "/usr/share/icons/hicolor/16x16/apps/",
    "/usr/share/icons/hicolor/16x16/apps/testapp.png",
    "/usr/share/icons/hicolor/256x256/",
    "/usr/share/icons/hicolor/256x256/apps/",
    "/usr/share/icons/hicolor/256x256/apps/testapp.png",
    "/usr/share/icons/hicolor/32x32/",
    "/usr/share/icons/hicolor/32x32/apps/",
    "/usr/share/icons/hicolor/32x32/apps/testapp.png",
    "/usr/share/icons/hicolor/48x48/",
    "/usr/share/icons/hicolor/48x48/apps/",
    "/usr/share/icons/hicolor/48x48/apps/testapp.png",
)

DEB_ARCH_64 = "amd64"
DEB_ARCH_32 = "i386"


def _retarget(path: str, product_name: str) -> str:
    if path == _EXECUTABLE_TEMPLATE:
        return f"/opt/{product_name}/{product_name}"
    if path == _DESKTOP_TEMPLATE:
        return f"/usr/share/applications/{product_name}.desktop"
    return path.replace(_INSTALL_ROOT_TEMPLATE, f"/opt/{product_name}/")


def expected_linux_contents(
    product_name: str,
    template: tuple[str, ...] = EXPECTED_LINUX_CONTENTS,
) -> list[str]:
    """The template listing with every placeholder occurrence replaced, sorted."""
    return sort_paths(_retarget(path, product_name) for path in template)


def linux_package_path(project_dir: Path, name: str, version: str, deb_arch: str) -> Path:
    return project_dir / "dist" / f"{name}-{version}-{deb_arch}.deb"


async def get_package_contents(
    package_path: Path,
    product_name: str,
    tools: ToolConfig,
) -> list[str]:
    """`dpkg --contents` output, parsed, filtered and sorted."""
    result = await runner.run_tool(
        [tools.dpkg, "--contents", str(package_path)],
        timeout_seconds=tools.timeout_seconds,
    )
    return package_contents(result.stdout, product_name)


def deb_architectures(arch: Arch | None) -> list[str]:
    """amd64 is always checked; i386 too unless only x64 was requested."""
    if arch is None or arch == Arch.IA32:
        return [DEB_ARCH_64, DEB_ARCH_32]
    return [DEB_ARCH_64]


async def check_linux_result(options: BuildOptions, tools: ToolConfig) -> None:
    """
    Validate the Linux packages of a build. Raises on the first mismatch.

    Raises:
        ArtifactAssertionError: Package listing differs from the expected one.
        ToolError: dpkg missing or failed.
    """
    metadata = options.metadata
    product_name = metadata.resolved_product_name
    expected = expected_linux_contents(product_name)

    for deb_arch in deb_architectures(options.arch):
        package_path = linux_package_path(
            options.project_dir, metadata.name, metadata.version, deb_arch
        )
        actual = await get_package_contents(package_path, product_name, tools)
        assert_equal(f"linux_contents_{deb_arch}", expected, actual, detail=str(package_path))
        logger.info(
            "Linux package contents valid",
            extra={"package": str(package_path), "entries": len(actual)},
        )

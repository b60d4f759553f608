# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
macOS result checks.

The pipeline leaves `<ProductName>.app` next to the artifacts it reports.
We read the bundle's Info.plist and compare identity and version fields,
ask codesign whether the bundle is signed at all, and finally check that
exactly the zip and dmg were produced.
"""

from pathlib import Path

from packcheck.config.exceptions import ToolError
from packcheck.config.schema import BuildOptions, ToolConfig
from packcheck.formats.plist import read_info_plist
from packcheck.logging.logger import get_logger
from packcheck.tools import runner
from packcheck.utils.paths import sort_paths
from packcheck.validators.errors import ArtifactAssertionError, assert_equal

logger = get_logger(__name__)

NOT_SIGNED_MARKER = "is not signed at all"


def expected_mac_artifacts(product_name: str, version: str) -> list[str]:
    return sort_paths([f"{product_name}-{version}-mac.zip", f"{product_name}-{version}.dmg"])


def expected_bundle_version(version: str, build_number: str) -> str:
    return f"{version}.{build_number}"


def locate_app_bundle(artifacts: list[str], product_name: str) -> Path:
    """The `.app` directory sitting beside the first recorded artifact."""
    if not artifacts:
        raise ArtifactAssertionError(
            "mac_artifacts", expected="at least one artifact", actual=artifacts
        )
    return Path(artifacts[0]).parent / f"{product_name}.app"


async def verify_signature(app_dir: Path, tools: ToolConfig) -> None:
    """
    Run `codesign --verify` against the bundle.

    An unsigned bundle is a validation failure. Any other non-zero exit is
    a tool failure and propagates as ToolError.
    """
    argv = [tools.codesign, "--verify", str(app_dir)]
    result = await runner.run_tool(argv, timeout_seconds=tools.timeout_seconds, check=False)
    if NOT_SIGNED_MARKER in result.output:
        raise ArtifactAssertionError(
            "mac_signature",
            expected="signed bundle",
            actual=result.output.strip(),
            detail=str(app_dir),
        )
    if result.exit_code != 0:
        raise ToolError(
            f"{tools.codesign} exited with code {result.exit_code}",
            argv,
            exit_code=result.exit_code,
            output=result.output,
        )


async def check_mac_result(
    options: BuildOptions,
    artifacts: list[str],
    tools: ToolConfig,
    build_number: str,
) -> None:
    """
    Validate a macOS build. Raises on the first failed check.

    Raises:
        ArtifactAssertionError: Any field, signature or filename mismatch.
        DocumentParseError: Info.plist unreadable or missing a required key.
        ToolError: codesign failed for a reason other than "not signed".
    """
    metadata = options.metadata
    product_name = metadata.resolved_product_name
    app_dir = locate_app_bundle(artifacts, product_name)

    info = await read_info_plist(app_dir)
    expected_fields = {
        "CFBundleDisplayName": product_name,
        "CFBundleIdentifier": metadata.id,
        "LSApplicationCategoryType": metadata.category,
        "CFBundleVersion": expected_bundle_version(metadata.version, build_number),
    }
    actual_fields = {
        "CFBundleDisplayName": info.display_name,
        "CFBundleIdentifier": info.identifier,
        "LSApplicationCategoryType": info.category,
        "CFBundleVersion": info.version,
    }
    assert_equal("mac_info_plist", expected_fields, actual_fields, detail=str(app_dir))

    await verify_signature(app_dir, tools)

    filenames = sort_paths(Path(path).name for path in artifacts)
    assert_equal("mac_artifacts", expected_mac_artifacts(product_name, metadata.version), filenames)

    logger.info(
        "macOS result valid",
        extra={"app_dir": str(app_dir), "artifacts": filenames},
    )

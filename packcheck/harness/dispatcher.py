# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Platform validator dispatch.

A single harness run validates one platform family even though a request
can name several. Priority is fixed: macOS, then Linux, then Windows. The
Windows check only applies to the default installer set, so it is skipped
when an artifact-target filter narrowed the build.
"""

from collections.abc import Iterable, Mapping

from packcheck.config.schema import BuildOptions, HarnessConfig
from packcheck.harness.ledger import PlatformArtifactMap
from packcheck.harness.platforms import Platform, normalize_platforms
from packcheck.logging.logger import get_logger
from packcheck.runtime.environment import resolve_build_number
from packcheck.validators.linux import check_linux_result
from packcheck.validators.macos import check_mac_result
from packcheck.validators.windows import check_windows_result

logger = get_logger(__name__)


def select_validator(
    requested_platforms: Iterable[str] | None,
    *,
    target_filter_requested: bool,
) -> Platform | None:
    """Which validator runs for a request, or None if none applies."""
    expanded = normalize_platforms(requested_platforms)
    if Platform.MAC.node_name in expanded:
        return Platform.MAC
    if Platform.LINUX.node_name in expanded:
        return Platform.LINUX
    if Platform.WINDOWS.node_name in expanded and not target_filter_requested:
        return Platform.WINDOWS
    return None


async def dispatch(
    options: BuildOptions,
    artifacts: PlatformArtifactMap,
    config: HarnessConfig,
    environ: Mapping[str, str] | None = None,
) -> Platform | None:
    """
    Run the one applicable validator over the build's artifacts.

    Returns the platform that was validated, or None when no validator applied.
    """
    selected = select_validator(
        options.platforms,
        target_filter_requested=options.target is not None,
    )
    if selected is None:
        logger.info(
            "No validator applies",
            extra={"platforms": options.platforms, "target": options.target},
        )
        return None

    logger.info("Validator selected", extra={"platform": selected.value})
    platform_artifacts = list(artifacts.get(selected, []))

    if selected == Platform.MAC:
        build_number = resolve_build_number(config.ci.build_number_vars, environ)
        await check_mac_result(options, platform_artifacts, config.tools, build_number)
    elif selected == Platform.LINUX:
        await check_linux_result(options, config.tools)
    else:
        await check_windows_result(options, platform_artifacts)

    return selected

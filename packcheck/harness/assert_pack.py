# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
End-to-end harness entry points.

pack_and_check builds once and validates the result. assert_pack wraps it
with fixture handling: pick the fixture project, copy it into a temp
workspace when the test needs to modify it, run the optional hooks, and
always release the workspace afterwards.
"""

from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any

from packcheck.config.schema import BuildOptions, HarnessConfig
from packcheck.harness.dispatcher import dispatch
from packcheck.harness.driver import BuildDriver
from packcheck.harness.ledger import PlatformArtifactMap
from packcheck.harness.pipeline import PipelineFactory
from packcheck.logging.logger import get_logger
from packcheck.runtime.environment import custom_tmp_dir
from packcheck.workspace.manifest import read_product_metadata
from packcheck.workspace.sandbox import ProjectWorkspace, RunSequence

logger = get_logger(__name__)

ProjectHook = Callable[[Path], Awaitable[Any]]


def platform_options(name: str) -> dict[str, Any]:
    """Options fragment requesting a single platform."""
    return {"platforms": [name]}


async def pack_and_check(
    options: BuildOptions,
    pipeline_factory: PipelineFactory,
    config: HarnessConfig,
    environ: Mapping[str, str] | None = None,
) -> PlatformArtifactMap:
    """
    Build, then run the applicable platform validator.

    A request with `dist` off is a dry run: the build still happens but
    nothing is validated.
    """
    artifacts = await BuildDriver(pipeline_factory).run(options)

    if not options.dist:
        logger.info("Dry run, validation skipped", extra={"platforms": options.platforms})
        return artifacts

    await dispatch(options, artifacts, config, environ)
    return artifacts


def _build_options(
    project_dir: Path,
    overrides: Mapping[str, Any],
    config: HarnessConfig,
) -> BuildOptions:
    fields: dict[str, Any] = {
        "project_dir": project_dir,
        "signing": config.signing,
        "dist": True,
    }
    fields.update(overrides)
    if "metadata" not in fields:
        fields["metadata"] = read_product_metadata(project_dir)
    return BuildOptions.model_validate(fields)


async def _pack_project(
    project_dir: Path,
    overrides: Mapping[str, Any],
    pipeline_factory: PipelineFactory,
    config: HarnessConfig,
    temp_dir_created: ProjectHook | None,
    packed: ProjectHook | None,
    environ: Mapping[str, str] | None,
) -> None:
    if temp_dir_created is not None:
        await temp_dir_created(project_dir)

    options = _build_options(project_dir, overrides, config)
    await pack_and_check(options, pipeline_factory, config, environ)

    if packed is not None:
        await packed(project_dir)


async def assert_pack(
    fixture_name: str,
    options: Mapping[str, Any] | None,
    pipeline_factory: PipelineFactory,
    config: HarnessConfig,
    *,
    temp_dir_created: ProjectHook | None = None,
    packed: ProjectHook | None = None,
    sequence: RunSequence | None = None,
    fixtures_root: Path | None = None,
    tmp_base_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """
    Pack a fixture project and validate the result.

    `options` holds BuildOptions fields; project_dir, signing, dist and
    metadata default from the workspace and config. A temp copy of the
    fixture is used when a `temp_dir_created` hook is given or a `target`
    filter is requested, since both write into the project.
    """
    overrides = dict(options or {})
    fixture_dir = (fixtures_root if fixtures_root is not None else Path(config.fixtures_dir)) / fixture_name
    use_temp_dir = temp_dir_created is not None or overrides.get("target") is not None

    if not use_temp_dir:
        await _pack_project(
            fixture_dir, overrides, pipeline_factory, config, temp_dir_created, packed, environ
        )
        return

    workspace = ProjectWorkspace(
        fixture_dir,
        fixture_name,
        sequence if sequence is not None else RunSequence(),
        prefix=config.tmp_prefix,
        custom_dir=custom_tmp_dir(config.ci.tmp_dir_var, environ),
        base_dir=tmp_base_dir,
    )
    with workspace as project_dir:
        await _pack_project(
            project_dir, overrides, pipeline_factory, config, temp_dir_created, packed, environ
        )

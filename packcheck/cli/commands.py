# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the packcheck CLI.

Each handler returns an exit code; failures are reported through the
structured logger, never print().
"""

import argparse
import asyncio
import logging
from pathlib import Path

from packcheck.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from packcheck.config.exceptions import ConfigError, DocumentParseError, ToolError
from packcheck.config.loader import load_build_options, load_config
from packcheck.config.schema import BuildOptions, HarnessConfig
from packcheck.harness.assert_pack import pack_and_check
from packcheck.logging.logger import configure_logging, get_logger
from packcheck.pipelines.dist_scan import DistDirectoryPipeline
from packcheck.runtime.environment import (
    current_os,
    get_system_info,
    resolve_build_number,
    tool_available,
)
from packcheck.validators.errors import ArtifactAssertionError
from packcheck.workspace.manifest import read_product_metadata


def _load_harness_config(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, HarnessConfig | None, logging.Logger]:
    """
    Shared setup: load the config (or defaults), then apply its logging
    settings to every packcheck logger. `--log-level` wins over the file.

    Returns (exit_code, config, logger); a non-SUCCESS code means return it.
    """
    logger = get_logger(f"packcheck.cli.{command_name}", log_level=args.log_level or "INFO")

    if args.config is None:
        logger.debug("No config provided, running with defaults", extra={"command": command_name})
        config = HarnessConfig(config_version="1.0.0")
    else:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error("Configuration error", extra={"command": command_name, "error": str(err)})
            return CONFIG_ERROR, None, logger

    log_file = Path(config.log_file) if config.log_file else None
    try:
        configure_logging("packcheck", args.log_level or config.log_level, log_file)
    except ValueError as err:
        logger.error("Configuration error", extra={"command": command_name, "error": str(err)})
        return CONFIG_ERROR, None, logger

    return SUCCESS, config, logger


def _build_options(
    args: argparse.Namespace,
    project_dir: Path,
    config: HarnessConfig,
) -> BuildOptions:
    """Options from `--options` when given, with command-line flags on top."""
    if args.options is None:
        return BuildOptions(
            platforms=args.platforms or [],
            arch=args.arch,
            target=args.target,
            project_dir=project_dir,
            metadata=read_product_metadata(project_dir),
            signing=config.signing,
        )

    return load_build_options(
        Path(args.options),
        defaults={"metadata": read_product_metadata(project_dir), "signing": config.signing},
        project_dir=project_dir,
        platforms=args.platforms,
        arch=args.arch,
        target=args.target,
    )


def handle_verify(args: argparse.Namespace) -> int:
    """Validate the artifacts already present in `<project>/dist`."""
    exit_code, config, logger = _load_harness_config(args, "verify")
    if exit_code != SUCCESS or config is None:
        return exit_code

    project_dir = Path(args.project_dir).resolve()
    if not project_dir.is_dir():
        logger.error("Project directory not found", extra={"project_dir": str(project_dir)})
        return USER_ERROR

    try:
        options = _build_options(args, project_dir, config)
        asyncio.run(pack_and_check(options, DistDirectoryPipeline, config))
    except ArtifactAssertionError as err:
        logger.error(
            "Validation failed",
            extra={"check": err.check, "expected": err.expected, "actual": err.actual},
        )
        return VALIDATION_ERROR
    except DocumentParseError as err:
        logger.error("Validation failed", extra={"error": str(err)})
        return VALIDATION_ERROR
    except ConfigError as err:
        logger.error("Configuration error", extra={"error": str(err)})
        return CONFIG_ERROR
    except ToolError as err:
        logger.error(
            "External tool failed",
            extra={"argv": err.argv, "exit_code": err.exit_code, "output": err.output},
        )
        return RUNTIME_ERROR
    except ValueError as err:
        logger.error("Invalid request", extra={"error": str(err)})
        return USER_ERROR

    logger.info("Verification passed", extra={"project_dir": str(project_dir)})
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Log what the harness would see on this machine."""
    exit_code, config, logger = _load_harness_config(args, "info")
    if exit_code != SUCCESS or config is None:
        return exit_code

    try:
        build_number: str | None = resolve_build_number(config.ci.build_number_vars)
    except ConfigError:
        build_number = None

    system = get_system_info()
    logger.info(
        "Environment",
        extra={
            "current_os": current_os(),
            "python_version": system.python_version,
            "architecture": system.architecture,
            "build_number": build_number,
            "tools": {
                config.tools.codesign: tool_available(config.tools.codesign),
                config.tools.dpkg: tool_available(config.tools.dpkg),
            },
        },
    )
    return SUCCESS

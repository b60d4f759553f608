# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader: reads YAML from disk and produces a validated, frozen HarnessConfig.

The loading pipeline is linear:
  1. Read the file
  2. Parse as YAML into a plain dict
  3. Hand the dict to pydantic for schema validation

If anything goes wrong at any step we fail immediately. There are no
fallback defaults for a broken file.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from packcheck.config.exceptions import ConfigLoadError, ConfigValidationError
from packcheck.config.schema import BuildOptions, HarnessConfig


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    """
    Read a YAML file and return the parsed dict.

    Raises:
        ConfigLoadError: If the file doesn't exist, isn't readable, or isn't a YAML mapping.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping (dict), got {type(parsed).__name__}"
        )

    return parsed


def load_config(config_path: Path) -> HarnessConfig:
    """
    Load and validate a harness config file.

    Raises:
        ConfigLoadError: File I/O or YAML parse failures.
        ConfigValidationError: Schema violations (missing fields, wrong types, unknown keys).
    """
    raw_data = _read_yaml_file(config_path)

    try:
        return HarnessConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err


def load_build_options(
    options_path: Path,
    defaults: Optional[Mapping[str, Any]] = None,
    **overrides: Any,
) -> BuildOptions:
    """
    Load a BuildOptions document from YAML.

    `defaults` fill keys the file leaves out. Keyword overrides that are not
    None win over the file (`verify --options` passes the command-line
    flags this way).
    """
    raw_data = {**(defaults or {}), **_read_yaml_file(options_path)}
    raw_data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return BuildOptions.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Build options validation failed for {options_path}:\n{err}"
        ) from err

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment lookups for packcheck.

Everything the harness reads from the process environment goes through
here: which OS we're running on, which CI build number to stamp into the
expected bundle version, and whether a fixed temp directory was requested.
"""

import os
import platform
import shutil
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NamedTuple

from packcheck.config.exceptions import MissingBuildNumberError

DEFAULT_BUILD_NUMBER_VARS: tuple[str, ...] = ("TRAVIS_BUILD_NUMBER", "CIRCLE_BUILD_NUM")
DEFAULT_TMP_DIR_VAR = "TEST_APP_TMP_DIR"


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str
    hostname: str


def current_os() -> str:
    """
    Return the node-style identifier of the host OS: darwin, linux or win32.

    Anything else is reported as-is from sys.platform so the caller can
    decide whether it's supported.
    """
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform in ("win32", "cygwin"):
        return "win32"
    return sys.platform


def resolve_build_number(
    variables: Sequence[str] = DEFAULT_BUILD_NUMBER_VARS,
    environ: Mapping[str, str] | None = None,
) -> str:
    """
    Read the CI build number from the first variable that is set.

    Raises:
        MissingBuildNumberError: If none of the variables has a value.
    """
    env = os.environ if environ is None else environ
    for name in variables:
        value = env.get(name)
        if value:
            return value
    raise MissingBuildNumberError(
        f"No CI build number found. Set one of: {', '.join(variables)}"
    )


def custom_tmp_dir(
    variable: str = DEFAULT_TMP_DIR_VAR,
    environ: Mapping[str, str] | None = None,
) -> Path | None:
    """Return the resolved override temp directory, or None if not requested."""
    env = os.environ if environ is None else environ
    value = env.get(variable)
    if not value:
        return None
    return Path(value).resolve()


def tool_available(executable: str) -> bool:
    """Whether an external tool can be found on PATH."""
    return shutil.which(executable) is not None


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
    )

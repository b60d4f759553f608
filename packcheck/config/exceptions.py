# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Exception hierarchy for packcheck.

Validation mismatches are not here: they raise ArtifactAssertionError from
packcheck.validators.errors, which is an AssertionError so test runners
report it as a failed check rather than a crash.
"""


class HarnessError(Exception):
    """Base for every non-assertion failure raised by the harness."""


class ConfigError(HarnessError):
    """Base for all configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read from disk or parsed as YAML."""


class ConfigValidationError(ConfigError):
    """
    Raised when a config file parses fine but fails schema validation.
    This covers missing required fields, type mismatches and unknown keys.
    """


class MissingBuildNumberError(ConfigError):
    """Raised when none of the CI build-number variables is set."""


class DocumentParseError(HarnessError):
    """Raised when a property list, contents listing or manifest cannot be parsed."""


class ToolError(HarnessError):
    """
    Raised when an external tool (codesign, dpkg) is missing, times out or
    exits non-zero. The captured output is kept for the report.
    """

    def __init__(
        self,
        message: str,
        argv: list[str],
        exit_code: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = argv
        self.exit_code = exit_code
        self.output = output

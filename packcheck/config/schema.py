# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for packcheck.

Every model is a frozen pydantic model: once a build request is constructed
it cannot be mutated for the duration of the build. Unknown fields are
rejected so a typo in a YAML file fails loudly instead of being ignored.

BuildOptions describes a single packaging request. HarnessConfig is the
process-wide setup loaded from YAML (tool names, CI variables, temp-dir
naming, fixtures location).
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from packcheck.harness.platforms import Arch
from packcheck.runtime.environment import DEFAULT_BUILD_NUMBER_VARS, DEFAULT_TMP_DIR_VAR


class ProductMetadata(BaseModel):
    """
    Product identity as the packaging pipeline sees it.

    `product_name` is the optional display-name override; when it's absent
    the package name is used everywhere a product name is needed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    product_name: Optional[str] = Field(
        default=None, description="Display name override (e.g. 'Test App ßW')"
    )
    name: str = Field(description="Package metadata name, used for Linux package filenames")
    id: str = Field(default="your.id", description="Bundle identifier")
    category: str = Field(
        default="your.app.category.type", description="macOS application category type"
    )
    version: str = Field(default="1.0.0", description="Semantic version of the product")

    @property
    def resolved_product_name(self) -> str:
        return self.product_name or self.name


class SigningConfig(BaseModel):
    """Code-signing credentials passed through to the pipeline untouched."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    csc_link: Optional[str] = Field(default=None, description="Certificate file or URL")
    csc_key_password: Optional[str] = Field(default=None, description="Certificate password")


class BuildOptions(BaseModel):
    """
    One packaging request. Consumed once by the build driver.

    `target` is the explicit artifact-target filter. When it is set the run
    produces a narrower artifact set than the platform default, so the
    Windows installer-set check is skipped.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    platforms: list[str] = Field(
        default_factory=list,
        description="Requested platforms; empty means the current OS",
    )
    arch: Optional[Arch] = Field(default=None, description="Single architecture, or None for all")
    dist: bool = Field(default=True, description="Produce distributable artifacts")
    target: Optional[list[str]] = Field(default=None, description="Artifact-target filter")
    project_dir: Path = Field(description="Project directory handed to the pipeline")
    metadata: ProductMetadata
    signing: SigningConfig = Field(default_factory=SigningConfig)


class CIConfig(BaseModel):
    """Names of the environment variables the harness reads."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    build_number_vars: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BUILD_NUMBER_VARS),
        min_length=1,
        description="Build-number variables, checked in order",
    )
    tmp_dir_var: str = Field(
        default=DEFAULT_TMP_DIR_VAR,
        description="Variable selecting a fixed temp directory instead of a generated one",
    )


class ToolConfig(BaseModel):
    """External tools used by the validators."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    codesign: str = Field(default="codesign", description="Signature verification tool")
    dpkg: str = Field(default="dpkg", description="Debian package inspection tool")
    timeout_seconds: int = Field(
        default=120,
        ge=1,
        le=3600,
        description="Max seconds to wait for any single tool invocation",
    )


class HarnessConfig(BaseModel):
    """
    Top-level harness config. Maps to a single YAML file.

    Every section has defaults, so `config_version: "1.0.0"` alone is a
    valid file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(description="Schema version, e.g. '1.0.0'")
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    fixtures_dir: str = Field(
        default="fixtures", description="Directory holding the fixture projects"
    )
    tmp_prefix: str = Field(
        default="packcheck-test-", description="Prefix of generated temp project directories"
    )
    ci: CIConfig = Field(default_factory=CIConfig)
    tools: ToolConfig = Field(default_factory=ToolConfig)
    signing: SigningConfig = Field(default_factory=SigningConfig)

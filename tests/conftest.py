# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for packcheck tests.

FakePipeline stands in for the packaging pipeline: it reports a scripted
list of artifacts during build(). The `tool_calls` fixture replaces the
external tool runner with canned results keyed by executable name.
"""

import json
import textwrap
from pathlib import Path

import pytest

from packcheck.config.exceptions import ToolError
from packcheck.config.schema import BuildOptions, HarnessConfig, ProductMetadata
from packcheck.harness.pipeline import ArtifactEvent, ArtifactListener
from packcheck.harness.platforms import Platform
from packcheck.tools import runner
from packcheck.tools.runner import ToolResult


class FakePipeline:
    """Reports `events` in order when built. Records the options it was given."""

    def __init__(self, options: BuildOptions, events: list[tuple[Platform, str]]) -> None:
        self.options = options
        self.events = events
        self.built = False
        self._listeners: list[ArtifactListener] = []

    def on_artifact(self, listener: ArtifactListener) -> None:
        self._listeners.append(listener)

    async def build(self) -> None:
        for platform, path in self.events:
            for listener in self._listeners:
                listener(ArtifactEvent(platform=platform, path=path))
        self.built = True


class FakeTools:
    """Canned ToolResult per executable; every call is recorded."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.results: dict[str, ToolResult] = {}
        self.by_path: dict[str, ToolResult] = {}

    def set(self, executable: str, stdout: str = "", stderr: str = "", exit_code: int = 0) -> None:
        self.results[executable] = ToolResult([executable], exit_code, stdout, stderr, 0.0)

    def set_for_path(self, path: Path, stdout: str) -> None:
        self.by_path[str(path)] = ToolResult([str(path)], 0, stdout, "", 0.0)

    async def __call__(
        self, argv: list[str], timeout_seconds: int = 120, check: bool = True
    ) -> ToolResult:
        self.calls.append(list(argv))
        result = self.by_path.get(argv[-1]) or self.results[argv[0]]
        if check and result.exit_code != 0:
            raise ToolError("failed", argv, result.exit_code, result.output)
        return result


@pytest.fixture()
def tool_calls(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    fake = FakeTools()
    monkeypatch.setattr(runner, "run_tool", fake)
    return fake


@pytest.fixture()
def harness_config() -> HarnessConfig:
    return HarnessConfig(config_version="1.0.0")


@pytest.fixture()
def metadata() -> ProductMetadata:
    return ProductMetadata(name="TestApp", version="1.0.0")


@pytest.fixture()
def fixture_project(tmp_path: Path) -> Path:
    """A minimal two-package Electron project under tmp_path/fixtures/test-app."""
    project = tmp_path / "fixtures" / "test-app"
    (project / "app").mkdir(parents=True)
    (project / "package.json").write_text(
        json.dumps({"build": {"appId": "your.id", "app-category-type": "your.app.category.type"}}),
        encoding="utf-8",
    )
    (project / "app" / "package.json").write_text(
        json.dumps({"name": "TestApp", "version": "1.0.0"}), encoding="utf-8"
    )
    (project / "app" / "index.js").write_text("console.log('hi')\n", encoding="utf-8")
    (project / "dist").mkdir()
    (project / "dist" / "stale.txt").write_text("old", encoding="utf-8")
    (project / "node_modules").mkdir()
    (project / ".idea").mkdir()
    return project


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """Smallest config that passes schema validation."""
    config_file = tmp_path / "harness.yaml"
    config_file.write_text(
        textwrap.dedent("""\
            config_version: "1.0.0"
            log_level: "DEBUG"
        """),
        encoding="utf-8",
    )
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (unknown key)."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text('config_version: "1.0.0"\nunknown_key: 1\n', encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


class PipelineRecorder:
    """Pipeline factory for BuildDriver; remembers every pipeline it made."""

    def __init__(self, events: list[tuple[Platform, str]]) -> None:
        self.events = events
        self.pipelines: list[FakePipeline] = []

    def __call__(self, options: BuildOptions) -> FakePipeline:
        pipeline = FakePipeline(options, self.events)
        self.pipelines.append(pipeline)
        return pipeline


@pytest.fixture()
def make_pipeline():  # type: ignore[no-untyped-def]
    """make_pipeline(events) -> PipelineRecorder usable as a PipelineFactory."""
    return PipelineRecorder

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the build driver."""

import asyncio
from pathlib import Path

import pytest

from packcheck.config.schema import BuildOptions, ProductMetadata
from packcheck.harness.driver import BuildDriver
from packcheck.harness.platforms import Platform
from packcheck.validators.errors import ArtifactAssertionError


def _options(tmp_path: Path, metadata: ProductMetadata) -> BuildOptions:
    return BuildOptions(platforms=["win"], project_dir=tmp_path, metadata=metadata)


class TestBuildDriver:
    def test_collects_interleaved_notifications(
        self, tmp_path: Path, metadata: ProductMetadata, make_pipeline
    ) -> None:
        factory = make_pipeline(
            [
                (Platform.WINDOWS, "/dist/TestAppSetup-1.0.0.exe"),
                (Platform.LINUX, "/dist/TestApp-1.0.0-amd64.deb"),
                (Platform.WINDOWS, "/dist/RELEASES"),
            ]
        )
        options = _options(tmp_path, metadata)

        artifacts = asyncio.run(BuildDriver(factory).run(options))

        assert artifacts[Platform.WINDOWS] == ["/dist/RELEASES", "/dist/TestAppSetup-1.0.0.exe"]
        assert artifacts[Platform.LINUX] == ["/dist/TestApp-1.0.0-amd64.deb"]
        assert factory.pipelines[0].options is options
        assert factory.pipelines[0].built

    def test_no_notifications(self, tmp_path: Path, metadata: ProductMetadata, make_pipeline) -> None:
        artifacts = asyncio.run(BuildDriver(make_pipeline([])).run(_options(tmp_path, metadata)))
        assert dict(artifacts) == {}

    def test_relative_path_fails_build(
        self, tmp_path: Path, metadata: ProductMetadata, make_pipeline
    ) -> None:
        factory = make_pipeline([(Platform.MAC, "relative.dmg")])
        with pytest.raises(ArtifactAssertionError):
            asyncio.run(BuildDriver(factory).run(_options(tmp_path, metadata)))

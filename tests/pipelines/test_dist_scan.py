# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the dist-directory pipeline."""

import asyncio
from pathlib import Path

import pytest

from packcheck.config.schema import BuildOptions
from packcheck.harness.driver import BuildDriver
from packcheck.harness.platforms import Platform
from packcheck.pipelines.dist_scan import DistDirectoryPipeline, classify_artifact


class TestClassifyArtifact:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("TestApp-1.0.0.dmg", Platform.MAC),
            ("TestApp-1.0.0-mac.zip", Platform.MAC),
            ("TestApp-1.0.0-amd64.deb", Platform.LINUX),
            ("TestApp-1.0.0-x86_64.AppImage", Platform.LINUX),
            ("TestAppSetup-1.0.0.exe", Platform.WINDOWS),
            ("TestApp-1.0.0-full.nupkg", Platform.WINDOWS),
            ("RELEASES", Platform.WINDOWS),
            ("RELEASES-ia32", Platform.WINDOWS),
            ("notes.txt", None),
            ("TestApp-1.0.0-win.zip", None),
        ],
    )
    def test_by_name(self, name: str, expected: Platform | None) -> None:
        assert classify_artifact(Path(name)) is expected


class TestDistDirectoryPipeline:
    def test_reports_classified_files(self, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        (dist / "mac" / "TestApp.app" / "Contents").mkdir(parents=True)
        (dist / "mac" / "TestApp.app" / "Contents" / "Info.plist").write_text("x")
        (dist / "mac" / "TestApp-1.0.0.dmg").write_text("x")
        (dist / "TestApp-1.0.0-amd64.deb").write_text("x")
        (dist / "builder-debug.yml").write_text("x")

        options = BuildOptions(project_dir=tmp_path, metadata={"name": "TestApp"})
        artifacts = asyncio.run(BuildDriver(DistDirectoryPipeline).run(options))

        assert artifacts[Platform.MAC] == [str((dist / "mac" / "TestApp-1.0.0.dmg").resolve())]
        assert artifacts[Platform.LINUX] == [str((dist / "TestApp-1.0.0-amd64.deb").resolve())]
        assert Platform.WINDOWS not in artifacts

    def test_missing_dist(self, tmp_path: Path) -> None:
        options = BuildOptions(project_dir=tmp_path, metadata={"name": "TestApp"})
        assert dict(asyncio.run(BuildDriver(DistDirectoryPipeline).run(options))) == {}

    def test_unpacked_directories_are_skipped(self, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        (dist / "win-unpacked").mkdir(parents=True)
        (dist / "win-unpacked" / "TestApp.exe").write_text("x")
        (dist / "win-ia32-unpacked").mkdir()
        (dist / "win-ia32-unpacked" / "TestApp.exe").write_text("x")
        (dist / "TestAppSetup-1.0.0.exe").write_text("x")

        options = BuildOptions(project_dir=tmp_path, metadata={"name": "TestApp"})
        artifacts = asyncio.run(BuildDriver(DistDirectoryPipeline).run(options))

        assert artifacts[Platform.WINDOWS] == [str((dist / "TestAppSetup-1.0.0.exe").resolve())]

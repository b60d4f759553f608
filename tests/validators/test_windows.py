# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the Windows result checks."""

import asyncio
from pathlib import Path

import pytest

from packcheck.config.exceptions import DocumentParseError
from packcheck.config.schema import BuildOptions, ProductMetadata
from packcheck.harness.platforms import Arch
from packcheck.validators.errors import ArtifactAssertionError
from packcheck.validators.windows import check_windows_result, expected_windows_artifacts


class TestExpectedArtifacts:
    def test_x64_only(self) -> None:
        assert set(expected_windows_artifacts("TestApp", "1.0.0", Arch.X64)) == {
            "RELEASES",
            "TestAppSetup-1.0.0.exe",
            "TestApp-1.0.0-full.nupkg",
        }

    def test_ia32_is_union_of_both_sets(self) -> None:
        assert set(expected_windows_artifacts("TestApp", "1.0.0", Arch.IA32)) == {
            "RELEASES-ia32",
            "TestAppSetup-1.0.0-ia32.exe",
            "TestApp-1.0.0-ia32-full.nupkg",
            "RELEASES",
            "TestAppSetup-1.0.0.exe",
            "TestApp-1.0.0-full.nupkg",
        }

    def test_unset_matches_ia32(self) -> None:
        assert expected_windows_artifacts("TestApp", "1.0.0", None) == expected_windows_artifacts(
            "TestApp", "1.0.0", Arch.IA32
        )


def _produce(dist: Path, names: list[str], manifest_32: str = "ABC TestApp-1.0.0-ia32-full.nupkg 1\n") -> list[str]:
    dist.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        path = dist / name
        path.write_text(manifest_32 if name == "RELEASES-ia32" else "x", encoding="utf-8")
        paths.append(str(path))
    return paths


def _options(tmp_path: Path, arch: Arch | None) -> BuildOptions:
    return BuildOptions(
        platforms=["win"],
        arch=arch,
        project_dir=tmp_path,
        metadata=ProductMetadata(name="TestApp", version="1.0.0"),
    )


class TestCheckWindowsResult:
    def test_full_set_passes(self, tmp_path: Path) -> None:
        names = expected_windows_artifacts("TestApp", "1.0.0", None)
        artifacts = _produce(tmp_path / "dist", list(reversed(names)))
        asyncio.run(check_windows_result(_options(tmp_path, None), artifacts))

    def test_x64_set_passes(self, tmp_path: Path) -> None:
        artifacts = _produce(tmp_path / "dist", ["RELEASES", "TestAppSetup-1.0.0.exe", "TestApp-1.0.0-full.nupkg"])
        asyncio.run(check_windows_result(_options(tmp_path, Arch.X64), artifacts))

    def test_missing_32bit_set(self, tmp_path: Path) -> None:
        artifacts = _produce(tmp_path / "dist", ["RELEASES", "TestAppSetup-1.0.0.exe", "TestApp-1.0.0-full.nupkg"])
        with pytest.raises(ArtifactAssertionError) as excinfo:
            asyncio.run(check_windows_result(_options(tmp_path, None), artifacts))
        assert excinfo.value.check == "windows_artifacts"

    def test_no_artifacts(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactAssertionError):
            asyncio.run(check_windows_result(_options(tmp_path, Arch.X64), []))

    def test_manifest_without_marker(self, tmp_path: Path) -> None:
        names = expected_windows_artifacts("TestApp", "1.0.0", None)
        artifacts = _produce(tmp_path / "dist", names, manifest_32="ABC TestApp-1.0.0-full.nupkg 1\n")
        with pytest.raises(ArtifactAssertionError) as excinfo:
            asyncio.run(check_windows_result(_options(tmp_path, None), artifacts))
        assert excinfo.value.check == "windows_release_manifest"
        assert excinfo.value.actual == ["TestApp-1.0.0-full.nupkg"]

    def test_unreadable_manifest(self, tmp_path: Path) -> None:
        names = expected_windows_artifacts("TestApp", "1.0.0", None)
        artifacts = _produce(tmp_path / "dist", names)
        (tmp_path / "dist" / "RELEASES-ia32").unlink()
        with pytest.raises(DocumentParseError, match="Cannot read release manifest"):
            asyncio.run(check_windows_result(_options(tmp_path, None), artifacts))

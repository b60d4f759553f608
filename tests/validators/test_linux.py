# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for the Linux result checks."""

import asyncio
from pathlib import Path

import pytest

from packcheck.config.exceptions import ToolError
from packcheck.config.schema import BuildOptions, ProductMetadata, ToolConfig
from packcheck.harness.platforms import Arch
from packcheck.validators.errors import ArtifactAssertionError
from packcheck.validators.linux import (
    EXPECTED_LINUX_CONTENTS,
    PLACEHOLDER_PRODUCT_NAME,
    check_linux_result,
    deb_architectures,
    expected_linux_contents,
    linux_package_path,
)


def _listing(paths: list[str], product_name: str) -> str:
    """Render paths as dpkg --contents output, with noise entries mixed in."""
    noise = [f"/opt/{product_name}/locales/", f"/opt/{product_name}/locales/de.pak",
             f"/opt/{product_name}/libgcrypt.so.11"]
    lines = [f"-rw-r--r-- root/root 1024 2016-06-20 10:00 .{path}" for path in reversed(paths + noise)]
    return "\n".join(lines) + "\n"


class TestExpectedContents:
    @pytest.mark.parametrize("product_name", ["TestApp", "Foo", "Test App ßW"])
    def test_install_root_is_product_name(self, product_name: str) -> None:
        contents = expected_linux_contents(product_name)
        for path in contents:
            if path.startswith("/opt/") and path != "/opt/":
                assert path.split("/")[2] == product_name

    def test_no_placeholder_remains(self) -> None:
        contents = expected_linux_contents("Foo")
        assert all(PLACEHOLDER_PRODUCT_NAME not in path for path in contents)
        assert "/opt/Foo/Foo" in contents
        assert "/usr/share/applications/Foo.desktop" in contents
        assert "/opt/Foo/resources/app.asar" in contents

    def test_same_size_as_template(self) -> None:
        assert len(expected_linux_contents("Foo")) == len(EXPECTED_LINUX_CONTENTS)

    def test_special_cases_only_match_exact_paths(self) -> None:
        template = ("/opt/TestApp/TestApp.bak", "/opt/TestApp/TestApp")
        assert expected_linux_contents("X", template) == ["/opt/X/TestApp.bak", "/opt/X/X"]


class TestArchitectures:
    def test_unset_checks_both(self) -> None:
        assert deb_architectures(None) == ["amd64", "i386"]

    def test_ia32_checks_both(self) -> None:
        assert deb_architectures(Arch.IA32) == ["amd64", "i386"]

    def test_x64_checks_only_amd64(self) -> None:
        assert deb_architectures(Arch.X64) == ["amd64"]


@pytest.fixture()
def linux_options(tmp_path: Path) -> BuildOptions:
    return BuildOptions(
        platforms=["linux"],
        project_dir=tmp_path,
        metadata=ProductMetadata(product_name="Test App", name="testapp", version="1.0.0"),
    )


class TestCheckLinuxResult:
    def test_both_packages_match(self, linux_options: BuildOptions, tool_calls) -> None:  # type: ignore[no-untyped-def]
        listing = _listing(expected_linux_contents("Test App"), "Test App")
        for deb_arch in ("amd64", "i386"):
            tool_calls.set_for_path(
                linux_package_path(linux_options.project_dir, "testapp", "1.0.0", deb_arch), listing
            )

        asyncio.run(check_linux_result(linux_options, ToolConfig()))

        assert [call[-1].rsplit("-", 1)[-1] for call in tool_calls.calls] == ["amd64.deb", "i386.deb"]
        assert all(call[:2] == ["dpkg", "--contents"] for call in tool_calls.calls)

    def test_x64_only_skips_i386(self, linux_options: BuildOptions, tool_calls) -> None:  # type: ignore[no-untyped-def]
        options = linux_options.model_copy(update={"arch": Arch.X64})
        tool_calls.set_for_path(
            linux_package_path(options.project_dir, "testapp", "1.0.0", "amd64"),
            _listing(expected_linux_contents("Test App"), "Test App"),
        )
        asyncio.run(check_linux_result(options, ToolConfig()))
        assert len(tool_calls.calls) == 1

    def test_missing_file_in_package(self, linux_options: BuildOptions, tool_calls) -> None:  # type: ignore[no-untyped-def]
        contents = [p for p in expected_linux_contents("Test App") if not p.endswith("app.asar")]
        tool_calls.set("dpkg", stdout=_listing(contents, "Test App"))

        with pytest.raises(ArtifactAssertionError) as excinfo:
            asyncio.run(check_linux_result(linux_options, ToolConfig()))
        assert excinfo.value.check == "linux_contents_amd64"
        assert "/opt/Test App/resources/app.asar" in excinfo.value.expected

    def test_dpkg_failure_propagates(self, linux_options: BuildOptions, tool_calls) -> None:  # type: ignore[no-untyped-def]
        tool_calls.set("dpkg", stderr="dpkg-deb: error: failed to read archive", exit_code=2)
        with pytest.raises(ToolError):
            asyncio.run(check_linux_result(linux_options, ToolConfig()))

    def test_package_path_uses_package_name(self, tmp_path: Path) -> None:
        assert linux_package_path(tmp_path, "testapp", "1.0.0", "i386") == (
            tmp_path / "dist" / "testapp-1.0.0-i386.deb"
        )

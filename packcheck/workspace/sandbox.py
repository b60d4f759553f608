# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Temporary project workspaces.

Builds that modify their project (hooks editing package.json, target
filters writing into dist/) run against a copy of the fixture instead of
the fixture itself. The copy skips `dist`, `node_modules` and dot-files.

Directory names come from an explicit RunSequence: `<prefix><run id>-<fixture>-<n>`.
A caller-chosen directory (the TEST_APP_TMP_DIR override) is emptied and
reused, and is left in place afterwards so it can be inspected.

Removal failures are logged and swallowed: they must never hide the
validation failure that may be propagating at the same time.
"""

import itertools
import os
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from packcheck.logging.logger import get_logger

logger = get_logger(__name__)

_EXCLUDED_NAMES: frozenset[str] = frozenset({"dist", "node_modules"})


class RunSequence:
    """Unique directory names for one test run. Defaults the run id to the pid."""

    def __init__(self, run_id: str | None = None, start: int = 0) -> None:
        self.run_id = run_id if run_id is not None else str(os.getpid())
        self._counter = itertools.count(start)

    def next_name(self, prefix: str, fixture_name: str) -> str:
        return f"{prefix}{self.run_id}-{fixture_name}-{next(self._counter)}"


def _ignore_project_noise(directory: str, names: list[str]) -> set[str]:
    return {name for name in names if name in _EXCLUDED_NAMES or name.startswith(".")}


def empty_dir(path: Path) -> None:
    """Make `path` an existing, empty directory."""
    if path.is_dir():
        for child in path.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
    else:
        path.mkdir(parents=True, exist_ok=True)


def copy_project(source: Path, destination: Path) -> Path:
    """Copy a fixture project into an existing, empty destination."""
    if not source.is_dir():
        raise FileNotFoundError(f"Fixture project not found: {source}")
    shutil.copytree(source, destination, ignore=_ignore_project_noise, dirs_exist_ok=True)
    return destination


def remove_workspace(path: Path) -> bool:
    """Delete a workspace. Returns False (after a warning) if that failed."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return True
    except OSError as err:
        logger.warning(
            "Cannot delete temporary directory",
            extra={"path": str(path), "error": str(err)},
        )
        return False
    logger.debug("Workspace removed", extra={"path": str(path)})
    return True


class ProjectWorkspace:
    """
    Context manager around a copied fixture project.

    Usage:
        with ProjectWorkspace(fixture_dir, "test-app", sequence) as project_dir:
            ...
        # generated directory deleted here, even if the block raised
    """

    def __init__(
        self,
        fixture_dir: Path,
        fixture_name: str,
        sequence: RunSequence,
        prefix: str = "packcheck-test-",
        custom_dir: Path | None = None,
        base_dir: Path | None = None,
    ) -> None:
        self._fixture_dir = fixture_dir
        self._fixture_name = fixture_name
        self._sequence = sequence
        self._prefix = prefix
        self._custom_dir = custom_dir
        self._base_dir = base_dir
        self.path: Path | None = None

    @property
    def is_custom(self) -> bool:
        return self._custom_dir is not None

    def __enter__(self) -> Path:
        if self._custom_dir is not None:
            target = self._custom_dir
            logger.info("Custom temp dir used", extra={"path": str(target)})
        else:
            base = self._base_dir if self._base_dir is not None else Path(tempfile.gettempdir())
            target = base / self._sequence.next_name(self._prefix, self._fixture_name)

        empty_dir(target)
        self.path = target
        try:
            copy_project(self._fixture_dir, target)
        except BaseException:
            self._cleanup()
            raise

        logger.debug(
            "Workspace created",
            extra={"path": str(target), "fixture": self._fixture_name},
        )
        return target

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._cleanup()

    def _cleanup(self) -> None:
        if self.path is not None and not self.is_custom:
            remove_workspace(self.path)

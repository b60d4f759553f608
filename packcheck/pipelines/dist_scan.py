# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
A packaging pipeline stand-in that reports artifacts already on disk.

`packcheck verify` validates the output of a build that ran elsewhere (a CI
job, a manual electron-builder run). This pipeline walks `<project>/dist`,
classifies each file by its platform naming convention and reports it the
same way a live pipeline would. Files it can't classify are skipped.
`.app` bundles and electron-builder's `*-unpacked` directories are not
descended into.
"""

from pathlib import Path

from packcheck.config.schema import BuildOptions
from packcheck.harness.pipeline import ArtifactEvent, ArtifactListener
from packcheck.harness.platforms import Platform
from packcheck.logging.logger import get_logger

logger = get_logger(__name__)

DIST_DIR = "dist"
UNPACKED_SUFFIX = "-unpacked"

_SUFFIXES: dict[str, Platform] = {
    ".dmg": Platform.MAC,
    ".deb": Platform.LINUX,
    ".rpm": Platform.LINUX,
    ".appimage": Platform.LINUX,
    ".exe": Platform.WINDOWS,
    ".nupkg": Platform.WINDOWS,
}


def classify_artifact(path: Path) -> Platform | None:
    """Platform a dist file belongs to, judged by its name."""
    name = path.name
    if name.startswith("RELEASES"):
        return Platform.WINDOWS
    if name.endswith("-mac.zip"):
        return Platform.MAC
    return _SUFFIXES.get(path.suffix.lower())


def _is_opaque_dir(path: Path) -> bool:
    return path.suffix == ".app" or path.name.endswith(UNPACKED_SUFFIX)


def _walk(directory: Path) -> list[Path]:
    files: list[Path] = []
    for child in sorted(directory.iterdir()):
        if child.is_dir():
            if not _is_opaque_dir(child):
                files.extend(_walk(child))
        elif child.is_file():
            files.append(child)
    return files


class DistDirectoryPipeline:
    def __init__(self, options: BuildOptions) -> None:
        self._dist_dir = Path(options.project_dir).resolve() / DIST_DIR
        self._listeners: list[ArtifactListener] = []

    def on_artifact(self, listener: ArtifactListener) -> None:
        self._listeners.append(listener)

    async def build(self) -> None:
        if not self._dist_dir.is_dir():
            logger.warning("No dist directory", extra={"path": str(self._dist_dir)})
            return

        for path in _walk(self._dist_dir):
            platform = classify_artifact(path)
            if platform is None:
                logger.debug("Unclassified file skipped", extra={"path": str(path)})
                continue
            event = ArtifactEvent(platform=platform, path=str(path))
            for listener in self._listeners:
                listener(event)

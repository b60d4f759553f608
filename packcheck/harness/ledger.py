# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Artifact ledger: accumulates reported artifact paths per platform.

Append-only while the build runs, read-only once frozen. No de-duplication:
if the pipeline reports the same file twice, the platform validator sees it
twice and fails on the filename comparison.
"""

import os
from collections.abc import Mapping

from packcheck.config.exceptions import HarnessError
from packcheck.harness.platforms import Platform
from packcheck.logging.logger import get_logger
from packcheck.utils.paths import sort_paths
from packcheck.validators.errors import ArtifactAssertionError

logger = get_logger(__name__)

PlatformArtifactMap = Mapping[Platform, list[str]]


class ArtifactLedger:
    def __init__(self) -> None:
        self._artifacts: dict[Platform, list[str]] = {}
        self._frozen = False

    def record(self, platform: Platform, path: str) -> None:
        """
        Append a reported artifact.

        Raises:
            ArtifactAssertionError: The pipeline reported a relative path.
            HarnessError: The ledger was already frozen.
        """
        if self._frozen:
            raise HarnessError(f"Artifact reported after build completion: {path}")
        if not os.path.isabs(path):
            raise ArtifactAssertionError(
                "artifact_path_absolute", expected="absolute path", actual=path
            )
        self._artifacts.setdefault(platform, []).append(path)
        logger.debug("Artifact recorded", extra={"platform": platform.value, "path": path})

    def freeze(self) -> None:
        self._frozen = True

    def sorted(self, platform: Platform) -> list[str]:
        """Recorded paths for `platform` in path order; empty if none were reported."""
        return sort_paths(self._artifacts.get(platform, []))

    def snapshot(self) -> dict[Platform, list[str]]:
        """Sorted copy of every platform's artifacts."""
        return {platform: self.sorted(platform) for platform in self._artifacts}

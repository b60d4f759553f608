# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The packaging pipeline as seen by the harness.

The pipeline is an external collaborator with one observable capability:
while `build()` runs it reports each artifact it produced, tagged with a
platform. Emission order across platforms is not guaranteed and nothing in
the harness depends on it.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from packcheck.config.schema import BuildOptions
from packcheck.harness.platforms import Platform


@dataclass(frozen=True)
class ArtifactEvent:
    """One "artifact produced" notification."""

    platform: Platform
    path: str


ArtifactListener = Callable[[ArtifactEvent], None]


class PackagingPipeline(Protocol):
    def on_artifact(self, listener: ArtifactListener) -> None:
        """Subscribe to artifact notifications. Called before build()."""
        ...

    async def build(self) -> None:
        """Run the build. All notifications are delivered before this returns."""
        ...


PipelineFactory = Callable[[BuildOptions], PackagingPipeline]

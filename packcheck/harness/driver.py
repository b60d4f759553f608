# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build driver: runs the packaging pipeline and collects what it produces.

The driver owns the only subscriber to the pipeline's artifact
notifications. It feeds every notification into a fresh ArtifactLedger,
awaits completion, freezes the ledger and hands back the sorted map.
"""

from packcheck.config.schema import BuildOptions
from packcheck.harness.ledger import ArtifactLedger, PlatformArtifactMap
from packcheck.harness.pipeline import ArtifactEvent, PipelineFactory
from packcheck.logging.logger import get_logger

logger = get_logger(__name__)


class BuildDriver:
    def __init__(self, pipeline_factory: PipelineFactory) -> None:
        self._pipeline_factory = pipeline_factory

    async def run(self, options: BuildOptions) -> PlatformArtifactMap:
        """
        Build once and return artifacts per platform, each list sorted.

        Exceptions from the pipeline (including a relative artifact path
        rejected by the ledger) propagate unchanged.
        """
        ledger = ArtifactLedger()
        pipeline = self._pipeline_factory(options)

        def _on_artifact(event: ArtifactEvent) -> None:
            ledger.record(event.platform, event.path)

        pipeline.on_artifact(_on_artifact)

        logger.info(
            "Build started",
            extra={
                "platforms": options.platforms,
                "arch": options.arch.value if options.arch else None,
                "dist": options.dist,
                "project_dir": str(options.project_dir),
            },
        )

        await pipeline.build()
        ledger.freeze()

        artifacts = ledger.snapshot()
        logger.info(
            "Build completed",
            extra={"artifact_counts": {p.value: len(paths) for p, paths in artifacts.items()}},
        )
        return artifacts

from __future__ import annotations

from dataclasses import dataclass, field
import logging

from siteassets.asset_copier import AssetCopier, CopyRunOptions
from siteassets.config import SiteConfig
from siteassets.models import CopyError, CopyStats


EXIT_SUCCESS = 0
EXIT_RUNTIME_OR_CONFIG_ERROR = 1
EXIT_PARTIAL_FAILURES = 2
EXIT_INVALID_CONFIG = 3


@dataclass(slots=True)
class RunSummary:
    copied: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[CopyError] = field(default_factory=list)

    @property
    def partial_failures(self) -> bool:
        return bool(self.errors)

    def absorb(self, stats: CopyStats, errors: list[CopyError]) -> None:
        self.copied += stats.copied
        self.skipped += stats.skipped
        self.failed += stats.failed
        self.errors.extend(errors)


def run_asset_copy(
    config: SiteConfig,
    options: CopyRunOptions | None = None,
    logger: logging.Logger | None = None,
) -> tuple[int, RunSummary]:
    """Copy the asset folder, then the media colocated with content."""
    log = logger or logging.getLogger("siteassets.run")
    copier = AssetCopier(config, options=options, logger=logger)

    copier.copy()
    log.info(
        "%s -> %s | copied=%s skipped=%s failed=%s",
        config.asset_folder,
        config.destination_folder,
        copier.stats.copied,
        copier.stats.skipped,
        copier.stats.failed,
    )

    content_copier = AssetCopier(config, options=options, logger=logger)
    content_copier.copy_assets_from_content()
    log.info(
        "%s -> %s | copied=%s skipped=%s failed=%s",
        config.content_folder,
        config.destination_folder,
        content_copier.stats.copied,
        content_copier.stats.skipped,
        content_copier.stats.failed,
    )

    summary = RunSummary()
    summary.absorb(copier.stats, copier.errors)
    summary.absorb(content_copier.stats, content_copier.errors)

    exit_code = EXIT_PARTIAL_FAILURES if summary.partial_failures else EXIT_SUCCESS
    return exit_code, summary

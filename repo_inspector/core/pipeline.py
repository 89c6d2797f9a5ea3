# repo_inspector/core/pipeline.py
import asyncio
import collections
import logging as stdlib_logging
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from rich.console import Console as RichConsole
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
import structlog

from repo_inspector.cli.console_logger import ConsoleLogger
from repo_inspector.config.settings import InspectorConfig
from repo_inspector.core.binary import make_binary_check
from repo_inspector.core.classification import (
    ClassificationDecision,
    ClassificationService,
    ClassifiedPath,
    FileCategory,
    omit_reason_for_error,
)
from repo_inspector.core.concurrency import map_with_concurrency
from repo_inspector.core.discovery.pattern_matching import compile_glob_patterns_to_spec
from repo_inspector.core.discovery.walker import FilesystemWalker
from repo_inspector.core.ports import (
    DiscoveredEntry,
    DiscoveryOptions,
    DiscoveryPort,
    LoggerPort,
    ReaderPort,
    SkippedDirectory,
)
from repo_inspector.core.reader import FilesystemReader
from repo_inspector.logging_setup import APP_LOGGER_NAME
from repo_inspector.util import printable_path

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReportSummary:
    code: int
    config: int
    omit: int
    omit_by_reason: Dict[str, int]

    @property
    def total(self) -> int:
        return self.code + self.config + self.omit


def summarize(entries: Sequence[ClassifiedPath]) -> ReportSummary:
    categories = collections.Counter(e.decision.category for e in entries)
    reasons = collections.Counter(
        e.decision.reason.value for e in entries if e.decision.reason is not None
    )
    return ReportSummary(
        code=categories[FileCategory.CODE],
        config=categories[FileCategory.CONFIG],
        omit=categories[FileCategory.OMIT],
        omit_by_reason=dict(reasons),
    )


@dataclass
class ClassificationReport:
    root: str
    # index-aligned with discovery order.
    entries: List[ClassifiedPath]
    skipped_directories: List[SkippedDirectory] = field(default_factory=list)

    @property
    def summary(self) -> ReportSummary:
        return summarize(self.entries)


class ReportGenerator:
    """
    Orchestrates discovery and classification for one repository root.

    Discovery runs synchronously; classification runs on the event loop through
    `map_with_concurrency`. A failure while classifying one file becomes an omit
    decision for that file only. Root validation errors from discovery propagate.
    """

    def __init__(
        self,
        config: InspectorConfig,
        walker: Optional[DiscoveryPort] = None,
        reader: Optional[ReaderPort] = None,
        classifier: Optional[ClassificationService] = None,
        logger: Optional[LoggerPort] = None,
    ):
        self.config = config
        self.walker = walker or FilesystemWalker()
        self.reader = reader or FilesystemReader()
        self.policy = config.exclusion_policy()
        self.classifier = classifier or ClassificationService(
            max_bytes=config.max_bytes,
            head_sample_bytes=config.head_sample_bytes,
            policy=self.policy,
        )
        self.logger = (logger or ConsoleLogger(debug_enabled=config.debug)).with_scope("Generate")
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")
        self.report: Optional[ClassificationReport] = None

    def _discover(self) -> List[DiscoveredEntry]:
        options = DiscoveryOptions(
            root_abs_path=self.config.root_abs_path,
            excluded_dir_names=self.policy.excluded_dir_names,
            excluded_file_names=self.policy.excluded_file_names,
            exclude_spec=compile_glob_patterns_to_spec(self.config.exclude_patterns),
        )
        self.log.info("discovering_paths", root=self.config.root_abs_path)
        entries = list(self.walker.discover(options))
        self.log.info("paths_discovered", count=len(entries))
        return entries

    async def _classify_all(self, entries: List[DiscoveredEntry], progress: Progress) -> List[ClassifiedPath]:
        reader_options = self.config.reader_options()
        binary_check = make_binary_check(self.config.binary_options())
        task_id = progress.add_task("classifying files...", total=len(entries))

        async def classify(entry: DiscoveredEntry, index: int) -> ClassifiedPath:
            try:
                classified = await self.classifier.classify_one(
                    entry.relative_path, self.reader, reader_options, binary_check
                )
            except Exception as e:
                reason = omit_reason_for_error(e)
                self.log.debug(
                    "classification_failed",
                    path=entry.relative_path,
                    reason=reason.value,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                classified = ClassifiedPath(entry.relative_path, ClassificationDecision.omit(reason))
            progress.update(task_id, advance=1)
            return classified

        return await map_with_concurrency(entries, self.config.concurrency, classify)

    def _report_lines(self, report: ClassificationReport) -> None:
        for skipped in report.skipped_directories:
            self.logger.warn(f"Skipped unreadable directory: {printable_path(skipped.relative_path) or '.'} ({skipped.error})")

        for entry in report.entries:
            decision = entry.decision
            detail = decision.reason.value if decision.reason else (decision.language_hint or "-")
            self.logger.debug(f"{decision.category.value:<6} {printable_path(entry.relative_path)} [{detail}]")

        summary = report.summary
        self.logger.info(f"Classified {summary.total} files")
        self.logger.info(f"  code  : {summary.code}")
        self.logger.info(f"  config: {summary.config}")
        self.logger.info(f"  omit  : {summary.omit}")
        for reason, count in sorted(summary.omit_by_reason.items()):
            self.logger.debug(f"    {reason}: {count}")

    async def generate_async(self) -> ClassificationReport:
        self.logger.debug(f"Scanning {self.config.root_abs_path}")

        app_log_level = stdlib_logging.getLogger(APP_LOGGER_NAME).getEffectiveLevel()
        progress_disabled = (
            self.config.debug or app_log_level < stdlib_logging.WARNING or not sys.stderr.isatty()
        )
        stderr_console = RichConsole(file=sys.stderr)

        with Progress(
            SpinnerColumn(), TextColumn("[bold blue]{task.description}"), BarColumn(),
            transient=True, disable=progress_disabled, console=stderr_console
        ) as progress:
            entries = self._discover()
            self.logger.info(f"Discovered {len(entries)} files")
            classified = await self._classify_all(entries, progress)

        report = ClassificationReport(
            root=self.config.root_abs_path,
            entries=classified,
            skipped_directories=list(self.walker.skipped_directories),
        )
        self.log.info(
            "classification_complete",
            code=report.summary.code,
            config=report.summary.config,
            omit=report.summary.omit,
            skipped_directories=len(report.skipped_directories),
        )
        self._report_lines(report)
        self.report = report
        return report

    def generate(self) -> ClassificationReport:
        # runs the full pipeline on a fresh event loop.
        return asyncio.run(self.generate_async())

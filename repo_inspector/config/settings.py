import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import structlog

from repo_inspector.core.binary import (
    DEFAULT_NON_PRINTABLE_THRESHOLD,
    DEFAULT_TREAT_NUL_AS_BINARY,
    BinaryHeuristicOptions,
)
from repo_inspector.core.classification import DEFAULT_HEAD_SAMPLE_BYTES, DEFAULT_MAX_BYTES
from repo_inspector.core.discovery.exclusions import DEFAULT_EXCLUSION_POLICY, ExclusionPolicy
from repo_inspector.core.ports import ReaderOptions
from repo_inspector.exceptions import ConfigError

log = structlog.get_logger(__name__)

DEFAULT_CONCURRENCY = 8
REPORT_FILENAME = "classification.json"


@dataclass
class InspectorConfig:
    # holds all configuration parameters for a single run.
    repo_path: Path = field(default_factory=Path.cwd)
    out_dir: Optional[Path] = None
    debug: bool = False
    json_output: bool = False
    max_bytes: int = DEFAULT_MAX_BYTES
    head_sample_bytes: int = DEFAULT_HEAD_SAMPLE_BYTES
    non_printable_threshold: float = DEFAULT_NON_PRINTABLE_THRESHOLD
    treat_nul_as_binary: bool = DEFAULT_TREAT_NUL_AS_BINARY
    concurrency: int = DEFAULT_CONCURRENCY
    exclude_dirs: List[str] = field(default_factory=list)
    exclude_files: List[str] = field(default_factory=list)
    exclude_patterns: List[str] = field(default_factory=list)

    # internal state, not set directly by user flags.
    root_abs_path: str = field(init=False)

    def __post_init__(self):
        self.repo_path = Path(self.repo_path)
        if self.out_dir is not None:
            self.out_dir = Path(self.out_dir)
        # abspath, not resolve(): a symlinked root must reach discovery unresolved so it can be rejected.
        self.root_abs_path = os.path.abspath(self.repo_path)
        self._validate()

    def _validate(self):
        if self.max_bytes < 0:
            raise ConfigError(f"max_bytes must be >= 0, got {self.max_bytes}")
        if self.head_sample_bytes < 1:
            raise ConfigError(f"head_sample_bytes must be >= 1, got {self.head_sample_bytes}")
        if not 0.0 <= self.non_printable_threshold <= 1.0:
            raise ConfigError(f"non_printable_threshold must be within [0, 1], got {self.non_printable_threshold}")
        if self.concurrency < 1:
            raise ConfigError(f"concurrency must be >= 1, got {self.concurrency}")

    @property
    def report_path(self) -> Optional[Path]:
        return self.out_dir / REPORT_FILENAME if self.out_dir else None

    def reader_options(self) -> ReaderOptions:
        return ReaderOptions(root_abs_path=self.root_abs_path, max_bytes=self.max_bytes)

    def binary_options(self) -> BinaryHeuristicOptions:
        return BinaryHeuristicOptions(
            treat_nul_as_binary=self.treat_nul_as_binary,
            non_printable_threshold=self.non_printable_threshold,
        )

    def exclusion_policy(self) -> ExclusionPolicy:
        if not self.exclude_dirs and not self.exclude_files:
            return DEFAULT_EXCLUSION_POLICY
        log.debug("extending_exclusion_policy", dirs=self.exclude_dirs, files=self.exclude_files)
        return DEFAULT_EXCLUSION_POLICY.with_extra_names(self.exclude_dirs, self.exclude_files)

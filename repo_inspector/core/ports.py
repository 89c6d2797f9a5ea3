# repo_inspector/core/ports.py
"""
Capability interfaces injected into the pipeline: discovery, content reading
and user-facing logging. Each has a single default implementation
(FilesystemWalker, FilesystemReader, ConsoleLogger) passed in by the
composing orchestrator.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, AbstractSet, Literal, Optional, Sequence

if TYPE_CHECKING:
    import pathspec

LogLevel = Literal["info", "warn", "error", "debug", "success"]


@dataclass(frozen=True)
class DiscoveredEntry:
    # posix path relative to the repository root, no leading "./".
    relative_path: str


@dataclass(frozen=True)
class DiscoveryOptions:
    root_abs_path: str
    # lowercase names, applied while traversing.
    excluded_dir_names: AbstractSet[str]
    excluded_file_names: AbstractSet[str]
    # optional gitignore-style patterns matched against root-relative paths.
    exclude_spec: Optional["pathspec.PathSpec"] = None


@dataclass(frozen=True)
class SkippedDirectory:
    # a subtree that could not be opened; none of its files were discovered.
    relative_path: str
    error: str


@dataclass(frozen=True)
class FileStat:
    size_bytes: int


@dataclass(frozen=True)
class ReaderOptions:
    root_abs_path: str
    max_bytes: int


class DiscoveryPort(ABC):
    """Lists repository files following the exclusion policy."""

    # subtrees the last discover() call could not open.
    skipped_directories: Sequence[SkippedDirectory] = ()

    @abstractmethod
    def discover(self, options: DiscoveryOptions) -> Sequence[DiscoveredEntry]:
        pass


class ReaderPort(ABC):
    """
    Reads file stats and contents. Paths are posix-style and relative to
    `options.root_abs_path`; the implementation resolves them.
    """

    @abstractmethod
    async def stat(self, rel_path: str, options: ReaderOptions) -> FileStat:
        pass

    @abstractmethod
    async def read_head(self, rel_path: str, n: int, options: ReaderOptions) -> bytes:
        # at most n bytes from the start of the file.
        pass

    @abstractmethod
    async def read_text_normalized(self, rel_path: str, options: ReaderOptions) -> str:
        # strict utf-8 with CRLF rewritten to LF; raises ContentDecodeError on bad bytes.
        pass


class LoggerPort(ABC):
    """Leveled, scoped, user-facing logging."""

    @abstractmethod
    def set_debug(self, enabled: bool) -> None:
        pass

    @abstractmethod
    def set_colors(self, enabled: bool) -> None:
        pass

    @abstractmethod
    def with_scope(self, scope: str) -> "LoggerPort":
        pass

    @abstractmethod
    def log(self, level: LogLevel, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        self.log("info", message)

    def warn(self, message: str) -> None:
        self.log("warn", message)

    def error(self, message: str) -> None:
        self.log("error", message)

    def debug(self, message: str) -> None:
        self.log("debug", message)

    def success(self, message: str) -> None:
        self.log("success", message)

# repo_inspector/core/classification.py
"""
Per-file classification into code / config / omit.

Each file passes through at most three ordered checks and stops at the first
that applies: size limit, binary sample, then naming rules. Reader errors are
not handled here; the pipeline turns them into omit decisions.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from repo_inspector.core.binary import BinaryCheck
from repo_inspector.core.discovery.exclusions import DEFAULT_EXCLUSION_POLICY, ExclusionPolicy
from repo_inspector.core.ports import ReaderOptions, ReaderPort
from repo_inspector.exceptions import ContentDecodeError
from repo_inspector.util import get_language_hint, posix_basename, printable_path

DEFAULT_MAX_BYTES = 204_800  # 200 KiB
DEFAULT_HEAD_SAMPLE_BYTES = 4_096


class FileCategory(Enum):
    CODE = "code"
    CONFIG = "config"
    OMIT = "omit"


class OmitReason(Enum):
    SIZE_OVER_LIMIT = "SIZE_OVER_LIMIT"
    LIKELY_BINARY = "LIKELY_BINARY"
    READ_ERROR = "READ_ERROR"
    UNKNOWN_ENCODING = "UNKNOWN_ENCODING"


@dataclass(frozen=True)
class ClassificationDecision:
    category: FileCategory
    # set if and only if category is OMIT.
    reason: Optional[OmitReason] = None
    language_hint: Optional[str] = None

    def __post_init__(self):
        if (self.category is FileCategory.OMIT) != (self.reason is not None):
            raise ValueError(
                f"omit reason must be given exactly when category is omit "
                f"(category={self.category.value}, reason={self.reason})"
            )

    @classmethod
    def omit(cls, reason: OmitReason) -> "ClassificationDecision":
        return cls(category=FileCategory.OMIT, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"category": self.category.value}
        if self.reason is not None:
            data["reason"] = self.reason.value
        if self.language_hint is not None:
            data["language_hint"] = self.language_hint
        return data


@dataclass(frozen=True)
class ClassifiedPath:
    # posix path relative to the repository root.
    relative_path: str
    decision: ClassificationDecision

    def to_dict(self) -> Dict[str, Any]:
        return {"relative_path": printable_path(self.relative_path), **self.decision.to_dict()}


def omit_reason_for_error(error: BaseException) -> OmitReason:
    # decode failures keep their own reason; every other failure is a read error.
    if isinstance(error, ContentDecodeError):
        return OmitReason.UNKNOWN_ENCODING
    return OmitReason.READ_ERROR


class ClassificationService:
    def __init__(
        self,
        max_bytes: Optional[int] = None,
        head_sample_bytes: int = DEFAULT_HEAD_SAMPLE_BYTES,
        policy: ExclusionPolicy = DEFAULT_EXCLUSION_POLICY,
    ):
        # max_bytes=None defers to the limit carried by the reader options.
        self.max_bytes = max_bytes
        self.head_sample_bytes = head_sample_bytes
        self.policy = policy

    async def classify_one(
        self,
        relative_path: str,
        reader: ReaderPort,
        reader_options: ReaderOptions,
        binary_check: BinaryCheck,
    ) -> ClassifiedPath:
        max_bytes = self.max_bytes if self.max_bytes is not None else reader_options.max_bytes

        file_stat = await reader.stat(relative_path, reader_options)
        if file_stat.size_bytes > max_bytes:
            return ClassifiedPath(relative_path, ClassificationDecision.omit(OmitReason.SIZE_OVER_LIMIT))

        head = await reader.read_head(relative_path, self.head_sample_bytes, reader_options)
        if binary_check(head):
            return ClassifiedPath(relative_path, ClassificationDecision.omit(OmitReason.LIKELY_BINARY))

        return ClassifiedPath(relative_path, self.classify_by_name(relative_path))

    def classify_by_name(self, relative_path: str) -> ClassificationDecision:
        """Pure naming rules: known config locations and basenames are config, everything else is code."""
        lower = relative_path.lower()
        hint = get_language_hint(lower)
        if self.policy.is_under_known_config_dir(lower) or self.policy.is_known_config_by_basename(posix_basename(lower)):
            return ClassificationDecision(category=FileCategory.CONFIG, language_hint=hint)
        return ClassificationDecision(category=FileCategory.CODE, language_hint=hint)

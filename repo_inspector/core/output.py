import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

import structlog

from repo_inspector.exceptions import OutputError
from repo_inspector.util import printable_path

if TYPE_CHECKING:
    from repo_inspector.core.pipeline import ClassificationReport

log = structlog.get_logger(__name__)


def report_to_dict(report: "ClassificationReport") -> Dict[str, Any]:
    summary = report.summary
    return {
        "root": printable_path(report.root),
        "summary": {
            "total": summary.total,
            "code": summary.code,
            "config": summary.config,
            "omit": summary.omit,
            "omit_by_reason": dict(sorted(summary.omit_by_reason.items())),
        },
        "entries": [entry.to_dict() for entry in report.entries],
        "skipped_directories": [
            {"relative_path": printable_path(s.relative_path), "error": s.error} for s in report.skipped_directories
        ],
    }


def render_report_json(report: "ClassificationReport") -> str:
    # key order is fixed by report_to_dict; entries keep discovery order.
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False) + "\n"


def write_to_stdout(text_content: str):
    # writes text to standard output.
    try:
        sys.stdout.write(text_content)
        sys.stdout.flush()
    except UnicodeEncodeError as e:
        log.warning("stdout_write_failed_trying_binary_fallback", error=str(e))
        sys.stdout.buffer.write(text_content.encode("utf-8", errors="replace"))
        sys.stdout.buffer.flush()


def write_to_file(output_file_path: Path, text_content: str):
    # writes text content to the specified file path, creating parent directories.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.parent.mkdir(parents=True, exist_ok=True)
        output_file_path.write_text(text_content, encoding="utf-8")
    except (OSError, UnicodeEncodeError) as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e

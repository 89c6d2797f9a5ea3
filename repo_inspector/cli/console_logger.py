# repo_inspector/cli/console_logger.py
"""
Console implementation of LoggerPort.

Renders user-facing lines with click styling: an optional [HH:MM:SS]
timestamp, an optional [ Scope ] label, and a colour per level. info, debug
and success go to stdout (or stderr when `all_to_stderr` is set, which keeps
stdout clean for machine output); warn and error go to stderr. Scoped children share
the parent's state, so set_debug/set_colors on any of them applies to all.
"""
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import click

from repo_inspector.core.ports import LoggerPort, LogLevel

_level_styles: Dict[str, Dict[str, Any]] = {
    "info": {"fg": "cyan"},
    "warn": {"fg": "yellow", "bold": True},
    "error": {"fg": "red", "bold": True},
    "debug": {"fg": "magenta", "dim": True},
    "success": {"fg": "green", "bold": True},
}
_stderr_levels = {"warn", "error"}


def detect_color_support() -> bool:
    # NO_COLOR wins; FORCE_COLOR enables colour even when stdout is piped.
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return sys.stdout.isatty()


def indent_multiline(text: str, prefix_length: int) -> str:
    # aligns continuation lines under the first line of the message.
    if "\n" not in text:
        return text
    pad = " " * prefix_length
    first, *rest = text.split("\n")
    return "\n".join([first] + [pad + line for line in rest])


@dataclass
class _LoggerState:
    debug_enabled: bool
    colors_enabled: bool
    timestamps: bool
    all_to_stderr: bool


class ConsoleLogger(LoggerPort):
    def __init__(
        self,
        scope: Optional[str] = None,
        debug_enabled: bool = False,
        colors_enabled: Optional[bool] = None,
        timestamps: bool = True,
        all_to_stderr: bool = False,
    ):
        self._state = _LoggerState(
            debug_enabled=debug_enabled,
            colors_enabled=detect_color_support() if colors_enabled is None else colors_enabled,
            timestamps=timestamps,
            all_to_stderr=all_to_stderr,
        )
        self.scope = scope

    def set_debug(self, enabled: bool) -> None:
        self._state.debug_enabled = enabled is True

    def set_colors(self, enabled: bool) -> None:
        self._state.colors_enabled = enabled is True

    def with_scope(self, scope: str) -> "ConsoleLogger":
        child = ConsoleLogger(scope=scope)
        child._state = self._state
        return child

    def _paint(self, text: str, **style: Any) -> str:
        return click.style(text, **style) if self._state.colors_enabled else text

    def format_line(self, level: LogLevel, message: str, now: Optional[datetime] = None) -> str:
        plain_parts = []
        styled_parts = []
        if self._state.timestamps:
            stamp = f"[{(now or datetime.now()).strftime('%H:%M:%S')}]"
            plain_parts.append(stamp)
            styled_parts.append(self._paint(stamp, dim=True))
        if self.scope:
            label = f"[ {self.scope} ]"
            plain_parts.append(label)
            styled_parts.append(self._paint(label, fg="blue", bold=True))

        prefix = " ".join(styled_parts)
        plain_prefix_length = len(" ".join(plain_parts)) + (1 if plain_parts else 0)
        body = self._paint(indent_multiline(message, plain_prefix_length), **_level_styles[level])
        return f"{prefix} {body}" if prefix else body

    def log(self, level: LogLevel, message: str) -> None:
        if level == "debug" and not self._state.debug_enabled:
            return
        click.echo(
            self.format_line(level, message),
            err=self._state.all_to_stderr or level in _stderr_levels,
            color=self._state.colors_enabled,
        )

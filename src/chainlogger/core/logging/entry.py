"""
Log entries and the entry builder.

`make_entry(*messages, req=None)` turns the arguments of a logging call into
a `LogEntry`:

    make_entry("user %s logged in", "alice", req=request)
    make_entry("hello", ValueError("from an"), "exception")

Message arguments are classified into `Text`, `Value` and `Failure` parts.
Failures contribute their traceback (`stack`) and the place they were raised
(`file`/`line`/`column`), and are rendered by their message text. The parts
are then joined with printf-style semantics (see `format_message`).
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .correlation import read_correlation_id
from .filters import current_correlation_id
from .source import SourceAnchor, error_anchor, format_stack, source_anchor


class LogLevel(str, enum.Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass
class LogEntry:
    """
    One log event before formatting.

    Attribute names are snake_case; `to_dict()` produces the camelCase wire
    names (`processTime`, `correlationId`, `isAccessLog`) consumed downstream.
    """

    message: str
    process_time: str
    correlation_id: str | None = None
    duration: int | None = None
    file: str | None = None
    line: str | None = None
    column: str | None = None
    stack: str | None = None
    suffix: str | None = None
    is_access_log: bool = False

    _WIRE_NAMES = (
        ("correlation_id", "correlationId"),
        ("stack", "stack"),
        ("file", "file"),
        ("line", "line"),
        ("column", "column"),
        ("message", "message"),
        ("process_time", "processTime"),
        ("duration", "duration"),
        ("suffix", "suffix"),
    )

    @property
    def has_source_anchor(self) -> bool:
        return bool(self.file and self.line and self.column)

    def set_anchor(self, anchor: SourceAnchor) -> None:
        self.file = anchor.file
        self.line = anchor.line
        self.column = anchor.column

    def to_dict(self) -> dict[str, Any]:
        data = {
            wire: getattr(self, attr)
            for attr, wire in self._WIRE_NAMES
            if getattr(self, attr) is not None
        }
        if self.is_access_log:
            data["isAccessLog"] = True
        return data


# --- message parts ---

@dataclass(frozen=True)
class Text:
    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class Value:
    value: Any

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Failure:
    error: BaseException

    def render(self) -> str:
        return str(self.error)


MessagePart = Text | Value | Failure


def to_part(arg: Any) -> MessagePart:
    if isinstance(arg, BaseException):
        return Failure(arg)
    if isinstance(arg, str):
        return Text(arg)
    return Value(arg)


# --- printf-style joining ---

_DIRECTIVE = re.compile(r"%[sdifjoO%]")


def _apply_directive(directive: str, arg: MessagePart) -> str:
    value = arg.error if isinstance(arg, Failure) else arg.value
    if directive in ("%d", "%i"):
        try:
            return str(int(value))
        except (TypeError, ValueError):
            return "NaN"
    if directive == "%f":
        try:
            return str(float(value))
        except (TypeError, ValueError):
            return "NaN"
    if directive == "%j":
        return json.dumps(value, default=str)
    if directive in ("%o", "%O"):
        return repr(value)
    return arg.render()


def format_message(*parts: MessagePart) -> str:
    """
    Join message parts the way printf-style loggers do.

    If the first part is text, its `%s %d %i %f %j %o %O` directives consume
    the following parts in order and `%%` becomes `%`. Directives left without
    an argument are kept verbatim. Unconsumed parts are appended, separated by
    single spaces.
    """
    if not parts:
        return ""

    first, rest = parts[0], list(parts[1:])
    if not isinstance(first, Text):
        return " ".join(part.render() for part in parts)

    def substitute(match: re.Match) -> str:
        directive = match.group(0)
        if directive == "%%":
            return "%"
        if not rest:
            return directive
        return _apply_directive(directive, rest.pop(0))

    head = _DIRECTIVE.sub(substitute, first.value)
    return " ".join([head, *(part.render() for part in rest)])


def iso_timestamp() -> str:
    """Current UTC time, e.g. 2024-05-01T12:00:00.123Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_entry(*messages: Any, req: Any = None, stacklevel: int = 1) -> LogEntry:
    """
    Build a LogEntry from logging-call arguments.

    Args:
        *messages: strings, arbitrary values and exceptions, in call order.
        req: optional incoming request; its correlation id is copied onto
            the entry. When there is no request, or it carries no id, the
            id bound to the current context (if any) is used.
        stacklevel: frames between the user's logging call and this function,
            used to anchor exceptions that were never raised.
    """
    parts = [to_part(message) for message in messages]

    stack = None
    anchor = None
    for part in parts:
        if isinstance(part, Failure):
            stack = format_stack(part.error)
            anchor = error_anchor(part.error)
            if anchor is None:
                anchor = source_anchor(stacklevel)

    entry = LogEntry(
        message=format_message(*parts),
        process_time=iso_timestamp(),
        correlation_id=read_correlation_id(req) or current_correlation_id(),
        stack=stack,
    )
    if anchor is not None:
        entry.set_anchor(anchor)
    return entry

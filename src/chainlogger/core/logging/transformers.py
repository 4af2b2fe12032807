"""
Transformers: turn a LogEntry into the text handed to the sink.

A transformer is any callable `(level, entry) -> str | None`. Returning None
suppresses the entry: the dispatcher then does not call the sink at all.
Suppression is entry-scoped, so a transformer can keep access logs while
dropping other info entries:

    def quiet(level, entry):
        if level is LogLevel.INFO and not entry.is_access_log:
            return None
        return text_transformer(level, entry)

Two built-ins:

  - text_transformer (default): one human-readable line, plus the traceback
    on following lines when the entry carries one.

        2024-05-01T12:00:00.123Z ERR: boom (c:5f0c...) (d:12ms)

  - json_transformer: the entry's wire dict as a JSON document, without the
    `isAccessLog` marker.
"""

from __future__ import annotations

import json
from typing import Callable

from .entry import LogEntry, LogLevel

Transformer = Callable[[LogLevel, LogEntry], "str | None"]


def text_transformer(level: LogLevel, entry: LogEntry) -> str:
    result = entry.process_time
    if level is LogLevel.ERROR:
        result += " ERR:"
    result += f" {entry.message}"
    if entry.correlation_id:
        result += f" (c:{entry.correlation_id})"
    if entry.duration is not None:
        result += f" (d:{entry.duration}ms)"
    if not entry.stack and entry.has_source_anchor:
        result += f" in {entry.file}:{entry.line}:{entry.column}"
    if entry.stack:
        result += "\n" + entry.stack
    return result


def json_transformer(level: LogLevel, entry: LogEntry) -> str:
    data = entry.to_dict()
    data.pop("isAccessLog", None)
    return json.dumps(data, ensure_ascii=False, default=str)


TRANSFORMERS: dict[str, Transformer] = {
    "text": text_transformer,
    "json": json_transformer,
}


def transformer_for(log_format: str) -> Transformer:
    """
    Built-in transformer for a LOG_FORMAT value ("text" or "json").
    """
    try:
        return TRANSFORMERS[log_format]
    except KeyError:
        raise ValueError(f"unknown log format {log_format!r}") from None

"""
Source anchors: file / line / column of a frame on the call stack.

Two lookups live here:

  - `source_anchor(stacklevel)` walks up the *current* call stack. It follows
    the stdlib `logging` convention for `stacklevel`: 1 means "whoever called
    the function that called me". Every public wrapper that sits between user
    code and this lookup must add 1 when it forwards `stacklevel`, otherwise
    the reported location is silently wrong (it points into this package).

  - `error_anchor(exc)` reads the innermost frame of an exception's
    traceback, i.e. the line that raised it.

`SOURCE_ANCHOR_DEPTH` is the number of frames owned by `source_anchor` itself
(its own frame). It is a module constant so the frame-depth assumption is
visible and patchable in one place.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from traceback import FrameSummary

from chainlogger.exceptions.base import MalformedStackTraceError

SOURCE_ANCHOR_DEPTH = 1


@dataclass(frozen=True)
class SourceAnchor:
    file: str
    line: str
    column: str

    @classmethod
    def from_frame_summary(cls, summary: FrameSummary) -> "SourceAnchor":
        # colno is 0-based and only exists on Python 3.11+; report 1-based columns
        colno = getattr(summary, "colno", None)
        return cls(
            file=summary.filename,
            line=str(summary.lineno),
            column=str(colno + 1) if colno is not None else "0",
        )


def source_anchor(stacklevel: int = 1) -> SourceAnchor:
    """
    Return the location of the frame `stacklevel` levels above our caller.

    Raises:
        MalformedStackTraceError: the stack is shallower than requested.
    """
    try:
        frame = sys._getframe(SOURCE_ANCHOR_DEPTH + stacklevel)
    except ValueError as exc:
        raise MalformedStackTraceError(
            f"call stack is not {SOURCE_ANCHOR_DEPTH + stacklevel} frames deep"
        ) from exc

    # limit=1 keeps only `frame` itself
    summary = traceback.extract_stack(frame, limit=1)[-1]
    return SourceAnchor.from_frame_summary(summary)


def error_anchor(exc: BaseException) -> SourceAnchor | None:
    """
    Location where `exc` was raised, or None if it was never raised.
    """
    if exc.__traceback__ is None:
        return None

    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        raise MalformedStackTraceError(f"traceback of {type(exc).__name__} has no frames")
    return SourceAnchor.from_frame_summary(frames[-1])


def format_stack(exc: BaseException) -> str:
    """Full traceback text for `exc`, without the trailing newline."""
    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(lines).rstrip("\n")

# src/chainlogger/core/logging/
# ├─ __init__.py            # public API
# ├─ entry.py               # LogEntry, LogLevel, message parts, make_entry
# ├─ source.py              # source anchors (call stack / traceback frames)
# ├─ transformers.py        # text_transformer, json_transformer
# ├─ dispatcher.py          # LogSink, ChainLogger (transformer binding + dispatch)
# ├─ facade.py              # module-level info/warn/error/debug on a default ChainLogger
# ├─ correlation.py         # get_correlation_id, assign_correlation_id
# ├─ filters.py             # correlation id contextvar + CorrelationIdFilter
# ├─ middleware.py          # CorrelationIdMiddleware, AccessLogMiddleware
# ├─ formatters.py          # ColorFormatter
# ├─ handlers.py            # handler dicts for dictConfig
# └─ builder.py             # make_dict_config(settings) + setup_logging(settings)


from .builder import ensure_sink_logger, make_dict_config, setup_logging
from .correlation import (
    CORRELATION_ID_HEADER,
    OUTGOING_CORRELATION_ID_HEADER,
    assign_correlation_id,
    correlation_headers,
    get_correlation_id,
)
from .dispatcher import ChainLogger, LogSink
from .entry import LogEntry, LogLevel, make_entry
from .facade import (
    apply_log_function,
    debug,
    error,
    get_chain_logger,
    get_transformer,
    info,
    info_source,
    set_chain_logger,
    set_transformer,
    use_transformer,
    warn,
)
from .filters import CorrelationIdFilter, current_correlation_id
from .middleware import AccessLogMiddleware, CorrelationIdMiddleware
from .source import SourceAnchor, source_anchor
from .transformers import json_transformer, text_transformer

__all__ = [
    "setup_logging", "make_dict_config", "ensure_sink_logger",
    "CORRELATION_ID_HEADER", "OUTGOING_CORRELATION_ID_HEADER",
    "assign_correlation_id", "correlation_headers", "get_correlation_id",
    "ChainLogger", "LogSink", "LogEntry", "LogLevel", "make_entry",
    "apply_log_function", "debug", "error", "get_chain_logger", "get_transformer",
    "info", "info_source", "set_chain_logger", "set_transformer", "use_transformer", "warn",
    "CorrelationIdFilter", "current_correlation_id",
    "AccessLogMiddleware", "CorrelationIdMiddleware",
    "SourceAnchor", "source_anchor",
    "json_transformer", "text_transformer",
]

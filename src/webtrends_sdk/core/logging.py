import logging
from typing import Any, Iterator, Tuple

# Extras attached to ``ots_call`` and ``ots.decode_failed`` records, in render order.
LOG_EXTRA_FIELDS = (
    "operation",
    "method",
    "endpoint",
    "status",
    "duration_ms",
    "success",
    "error_type",
    "error_code",
    "model",
)


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    text = str(value)
    if text and not any(c in text for c in ' ="'):
        return text
    return '"' + text.replace('"', '\\"') + '"'


def _call_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    for key in LOG_EXTRA_FIELDS:
        value = getattr(record, key, None)
        if value is not None:
            yield key, value


class LogfmtFormatter(logging.Formatter):
    """One logfmt line per record: level, logger, event, then call fields.

    Missing extras are skipped, so plain log calls format too.
    """

    def format(self, record: logging.LogRecord) -> str:
        pairs = [("level", record.levelname.lower()), ("logger", record.name)]
        event = record.getMessage()
        if event:
            pairs.append(("event", event))
        pairs.extend(_call_fields(record))
        if record.exc_info and record.exc_info[0] is not None:
            pairs.append(("exc_type", record.exc_info[0].__name__))
        return " ".join(f"{key}={_render(value)}" for key, value in pairs)


def setup_logging(level: str = "INFO") -> None:
    """Route all records through a single logfmt stream handler."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS"]

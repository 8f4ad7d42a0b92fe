"""
Structured logging for the Play Store scraper.

Library modules log through plain `logging.getLogger(__name__)` loggers,
all children of "play_scraper". `configure_logging` attaches the handlers
to that parent once, rendering records as JSON lines or terminal text.

ScraperLogger is a LoggerAdapter that stamps every record with a
component, a correlation id, the current operation and free-form fields.
"""
import json
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, TextIO, Tuple, Union

ROOT_LOGGER_NAME = "play_scraper"

# Keyword arguments consumed by logging itself; the rest become fields
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


class LogLevel(Enum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level '{name}'") from None


@dataclass(frozen=True)
class LogContext:
    """Values attached to every record logged through a ScraperLogger."""
    component: Optional[str] = None
    correlation_id: Optional[str] = None
    operation: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    def bind(self, **fields) -> "LogContext":
        """Copy with additional fields."""
        return replace(self, fields={**self.fields, **fields})

    def for_operation(self, operation: str) -> "LogContext":
        return replace(self, operation=operation)


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


def _error_of(record: logging.LogRecord) -> Tuple[Optional[str], Optional[str]]:
    if not record.exc_info or record.exc_info[1] is None:
        return None, None
    error = record.exc_info[1]
    return str(error), type(error).__name__


class JSONFormatter(logging.Formatter):
    """One JSON object per line. Unset values are left out."""

    def format(self, record: logging.LogRecord) -> str:
        error, error_type = _error_of(record)
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "component": getattr(record, "component", None),
            "correlation_id": getattr(record, "correlation_id", None),
            "operation": getattr(record, "operation", None),
            "duration_ms": getattr(record, "duration_ms", None),
            "error": error,
            "error_type": error_type,
            "fields": getattr(record, "fields", None) or None,
        }
        return json.dumps(
            {key: value for key, value in payload.items() if value is not None},
            default=str,
            ensure_ascii=False,
        )


class HumanFormatter(logging.Formatter):
    """
    Terminal format:

        14:03:21 INFO    [cli] Completed details app_id=com.example (812.40ms)
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            datetime.fromtimestamp(record.created).strftime("%H:%M:%S"),
            f"{record.levelname:<7}",
            f"[{getattr(record, 'component', None) or record.name}]",
            record.getMessage(),
        ]

        fields = getattr(record, "fields", None)
        if fields:
            parts.extend(f"{key}={value}" for key, value in fields.items())

        duration_ms = getattr(record, "duration_ms", None)
        if duration_ms is not None:
            parts.append(f"({duration_ms:.2f}ms)")

        error, _ = _error_of(record)
        if error:
            parts.append(f"error={error}")

        return " ".join(parts)


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    json_output: bool = False,
    log_file: Optional[Union[str, Path]] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the "play_scraper" logger.

    Handlers from a previous call are removed. The file handler always
    records JSON at DEBUG level, whatever the console level.

    Args:
        level: Console level
        json_output: JSON lines instead of terminal text on the console
        log_file: Also write to this file
        stream: Console stream (default: stderr)
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(level.value)
    console.setFormatter(JSONFormatter() if json_output else HumanFormatter())
    root.addHandler(console)
    root.setLevel(level.value)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)
        root.setLevel(logging.DEBUG)

    return root


class ScraperLogger(logging.LoggerAdapter):
    """
    Structured logger for a scraper component.

    Keyword arguments other than logging's own become record fields.

    Usage:
        logger = create_scraper_logger("cli")
        logger.info("Fetching details", app_id="com.example")

        with logger.timed_operation("details") as op:
            details = await scraper.get_app_details("com.example")
            op.debug("Parsed", missing=len(details.missing_fields))
    """

    def __init__(self, component: str, context: Optional[LogContext] = None):
        super().__init__(logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}"), {})
        self.context = replace(context or LogContext(), component=component)

    @property
    def component(self) -> str:
        return self.context.component

    def process(self, msg, kwargs):
        fields = dict(self.context.fields)
        passthrough = {}
        for key, value in kwargs.items():
            if key in _LOGGING_KWARGS:
                passthrough[key] = value
            else:
                fields[key] = value

        extra = {
            "component": self.context.component,
            "correlation_id": self.context.correlation_id,
            "operation": self.context.operation,
            "fields": fields,
        }
        extra.update(passthrough.get("extra") or {})
        passthrough["extra"] = extra
        return msg, passthrough

    def bind(self, **fields) -> "ScraperLogger":
        """Logger for the same component with extra fields on every record."""
        return ScraperLogger(self.component, self.context.bind(**fields))

    @contextmanager
    def timed_operation(self, operation: str) -> Iterator["ScraperLogger"]:
        """
        Log start, completion or failure of the block, with its duration.

        Exceptions are logged at ERROR and re-raised.
        """
        timed = ScraperLogger(self.component, self.context.for_operation(operation))
        start = time.perf_counter()
        timed.debug(f"Starting {operation}")
        try:
            yield timed
        except Exception as e:
            timed.error(f"Failed {operation}: {e}", extra={"duration_ms": _elapsed_ms(start)})
            raise
        timed.info(f"Completed {operation}", extra={"duration_ms": _elapsed_ms(start)})


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def create_scraper_logger(
    component: str,
    correlation_id: Optional[str] = None,
) -> ScraperLogger:
    """Logger for `component` with a fresh correlation id unless one is given."""
    context = LogContext(correlation_id=correlation_id or new_correlation_id())
    return ScraperLogger(component, context)

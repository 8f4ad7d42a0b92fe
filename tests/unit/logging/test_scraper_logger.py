"""
Tests for structured scraper logging.
"""
import io
import json
import logging

import pytest

from play_scraper.infrastructure.logging import (
    HumanFormatter,
    JSONFormatter,
    LogContext,
    LogLevel,
    ScraperLogger,
    configure_logging,
    create_scraper_logger,
    new_correlation_id,
)


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger("play_scraper")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def json_stream():
    stream = io.StringIO()
    configure_logging(LogLevel.DEBUG, json_output=True, stream=stream)
    return stream


def json_lines(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestLogLevel:
    """Tests for LogLevel."""

    def test_from_name(self):
        assert LogLevel.from_name("debug") is LogLevel.DEBUG
        assert LogLevel.from_name(" WARNING ") is LogLevel.WARNING

    def test_values_are_logging_levels(self):
        assert LogLevel.ERROR.value == logging.ERROR

    def test_unknown(self):
        with pytest.raises(ValueError):
            LogLevel.from_name("loud")


class TestLogContext:
    """Tests for LogContext."""

    def test_for_operation_copies(self):
        ctx = LogContext(correlation_id="abc")

        derived = ctx.for_operation("details")

        assert derived.operation == "details"
        assert derived.correlation_id == "abc"
        assert ctx.operation is None

    def test_bind_merges_without_mutating(self):
        ctx = LogContext(fields={"a": 1})

        bound = ctx.bind(b=2)

        assert bound.fields == {"a": 1, "b": 2}
        assert ctx.fields == {"a": 1}


class TestScraperLogger:
    """Tests for ScraperLogger."""

    def test_json_output_carries_context(self, json_stream):
        logger = create_scraper_logger("unit", correlation_id="abc123")

        logger.info("Fetching details", app_id="com.x", limit=10)

        data = json_lines(json_stream)[0]
        assert data["message"] == "Fetching details"
        assert data["level"] == "INFO"
        assert data["logger"] == "play_scraper.unit"
        assert data["component"] == "unit"
        assert data["correlation_id"] == "abc123"
        assert data["fields"] == {"app_id": "com.x", "limit": 10}
        assert "operation" not in data
        assert "duration_ms" not in data

    def test_bind_adds_fields_to_every_record(self, json_stream):
        logger = ScraperLogger("bound").bind(app_id="com.x")

        logger.info("first")
        logger.info("second", page=2)

        first, second = json_lines(json_stream)
        assert first["fields"] == {"app_id": "com.x"}
        assert second["fields"] == {"app_id": "com.x", "page": 2}

    def test_level_filtering(self):
        stream = io.StringIO()
        configure_logging(LogLevel.WARNING, stream=stream)
        logger = ScraperLogger("quiet")

        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_exception_recorded(self, json_stream):
        logger = ScraperLogger("errors")

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.error("Request failed", exc_info=True)

        data = json_lines(json_stream)[0]
        assert data["error"] == "boom"
        assert data["error_type"] == "RuntimeError"

    def test_plain_module_loggers_share_handlers(self, json_stream):
        logging.getLogger("play_scraper.infrastructure.http.client").warning("retrying")

        data = json_lines(json_stream)[0]
        assert data["message"] == "retrying"
        assert data["logger"] == "play_scraper.infrastructure.http.client"
        assert "component" not in data


class TestTimedOperation:
    """Tests for ScraperLogger.timed_operation()."""

    def test_success_logs_completion_with_duration(self, json_stream):
        logger = create_scraper_logger("timed")

        with logger.timed_operation("details") as op:
            assert op.context.operation == "details"
            op.info("inside", app_id="com.x")

        starting, inside, completed = json_lines(json_stream)
        assert starting["message"] == "Starting details"
        assert starting["level"] == "DEBUG"
        assert inside["operation"] == "details"
        assert inside["correlation_id"] == logger.context.correlation_id
        assert completed["message"] == "Completed details"
        assert completed["duration_ms"] >= 0

    def test_failure_logs_error_and_reraises(self, json_stream):
        logger = create_scraper_logger("timed_fail", correlation_id="c1")

        with pytest.raises(ValueError):
            with logger.timed_operation("search"):
                raise ValueError("bad query")

        failed = json_lines(json_stream)[-1]
        assert failed["level"] == "ERROR"
        assert failed["message"] == "Failed search: bad query"
        assert failed["correlation_id"] == "c1"
        assert failed["operation"] == "search"
        assert failed["duration_ms"] >= 0


class TestHumanFormatter:
    """Tests for terminal output."""

    def test_line_layout(self):
        stream = io.StringIO()
        configure_logging(LogLevel.INFO, stream=stream)

        ScraperLogger("human").info("Completed search", query="maps")

        line = stream.getvalue().strip()
        assert line.split(" ", 1)[1] == "INFO    [human] Completed search query=maps"

    def test_falls_back_to_logger_name(self):
        record = logging.LogRecord(
            "play_scraper.x", logging.WARNING, __file__, 1, "plain", None, None
        )

        line = HumanFormatter().format(record)

        assert "[play_scraper.x] plain" in line


class TestConfigureLogging:
    """Tests for configure_logging() and create_scraper_logger()."""

    def test_configures_package_logger(self):
        root = configure_logging(LogLevel.DEBUG, json_output=True, stream=io.StringIO())

        assert root.name == "play_scraper"
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_replaces_previous_handlers(self):
        configure_logging(stream=io.StringIO())
        root = configure_logging(stream=io.StringIO())

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, HumanFormatter)

    def test_log_file_records_debug_as_json(self, tmp_path):
        log_file = tmp_path / "logs" / "scraper.log"
        console = io.StringIO()

        root = configure_logging(LogLevel.WARNING, log_file=log_file, stream=console)
        ScraperLogger("file").debug("detail only in file", page=3)
        for handler in root.handlers:
            handler.flush()

        assert "detail only in file" not in console.getvalue()
        data = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])
        assert data["message"] == "detail only in file"
        assert data["fields"] == {"page": 3}

    def test_create_scraper_logger_assigns_correlation_id(self):
        first = create_scraper_logger("cli")
        second = create_scraper_logger("cli")

        assert first.component == "cli"
        assert len(first.context.correlation_id) == 12
        assert first.context.correlation_id != second.context.correlation_id

    def test_new_correlation_id_is_hex(self):
        int(new_correlation_id(), 16)

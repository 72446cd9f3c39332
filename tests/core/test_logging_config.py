# tests/core/test_logging_config.py
"""Tests for structured logging configuration.

Logs are written to stderr so that CLI commands keep stdout for results.
"""

import json
import logging

import pytest


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from locus_datasource.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "bind")

    def test_json_output_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").info("source_ready", source="memory")

        captured = capsys.readouterr()
        assert captured.out == ""
        data = json.loads(captured.err.strip().split("\n")[-1])
        assert data["event"] == "source_ready"
        assert data["source"] == "memory"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_internal_fields_not_leaked(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").warning("probe_failed")

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, get_logger

        configure_logging(json_output=False)
        get_logger("test").info("search_done", found=3)

        err = capsys.readouterr().err
        assert "search_done" in err
        assert "found=3" in err

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, get_logger

        configure_logging(json_output=True, level="WARNING")
        logger = get_logger("test")
        logger.info("hidden")
        logger.warning("shown")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_stdlib_logging_uses_same_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Third-party packages using logging.getLogger() get JSON too."""
        from locus_datasource.core.logging import configure_logging

        configure_logging(json_output=True)
        logging.getLogger("some_wiki_plugin").warning("rate limited")

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "rate limited"

    def test_http_client_loggers_held_at_warning(self) -> None:
        from locus_datasource.core.logging import configure_logging

        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_noisy_loggers_follow_stricter_root(self) -> None:
        from locus_datasource.core.logging import configure_logging

        configure_logging(level="ERROR")

        assert logging.getLogger("httpx").level == logging.ERROR

    def test_reconfigure_replaces_handler(self) -> None:
        from locus_datasource.core.logging import configure_logging

        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1


class TestSourceLogging:
    def test_source_logs_bound_name(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging
        from locus_datasource.testing import MemoryDataSource

        configure_logging(json_output=True, level="INFO")
        MemoryDataSource({}).initialize()

        lines = [json.loads(line) for line in capsys.readouterr().err.strip().split("\n")]
        init = next(line for line in lines if line["event"] == "data_source_initialized")
        assert init["source"] == "memory"
        assert init["version"] == "1.0.0"

    def test_failed_probe_logged_as_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.contracts import TransientSourceError
        from locus_datasource.core.logging import configure_logging
        from locus_datasource.testing import MemoryDataSource

        class FlakyProbe(MemoryDataSource):
            def probe(self) -> bool:
                raise TransientSourceError("dns lookup failed")

        configure_logging(json_output=True, level="INFO")
        source = FlakyProbe({})
        source.initialize()

        assert source.check_availability() is False

        lines = [json.loads(line) for line in capsys.readouterr().err.strip().split("\n")]
        failure = next(line for line in lines if line["event"] == "availability_probe_failed")
        assert failure["level"] == "warning"
        assert failure["error_type"] == "TransientSourceError"


class TestSourceContext:
    def test_label_attached_inside_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, get_logger, source_context

        configure_logging(json_output=True)
        logger = get_logger("test")
        with source_context("docs"):
            logger.info("inside")
        logger.info("outside")

        lines = [json.loads(line) for line in capsys.readouterr().err.strip().split("\n")]
        assert lines[0]["label"] == "docs"
        assert "label" not in lines[1]

    def test_label_reaches_stdlib_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, source_context

        configure_logging(json_output=True)
        with source_context("wiki-eu"):
            logging.getLogger("some_wiki_plugin").warning("rate limited")

        data = json.loads(capsys.readouterr().err.strip().split("\n")[-1])
        assert data["event"] == "rate limited"
        assert data["label"] == "wiki-eu"

    def test_nested_blocks_restore_outer_label(self, capsys: pytest.CaptureFixture[str]) -> None:
        from locus_datasource.core.logging import configure_logging, get_logger, source_context

        configure_logging(json_output=True)
        logger = get_logger("test")
        with source_context("outer"):
            with source_context("inner"):
                logger.info("a")
            logger.info("b")

        lines = [json.loads(line) for line in capsys.readouterr().err.strip().split("\n")]
        assert [line["label"] for line in lines] == ["inner", "outer"]

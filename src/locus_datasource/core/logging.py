# src/locus_datasource/core/logging.py
"""Structured logging for data sources and the host.

Two fields identify where a log line came from:

    source  plugin name, bound on the logger by BaseDataSource
    label   host-assigned instance label, bound by source_context()

The host wraps every lifecycle call and routed operation in source_context(),
so two instances of the same plugin stay distinguishable without sources
knowing their label. The label lives in a contextvar, which means it also
reaches plain logging.getLogger() records emitted by third-party source
packages: stdlib records run through the same structlog chain via
ProcessorFormatter.

Output goes to stderr; stdout belongs to CLI results.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

# Connection-level DEBUG chatter from the HTTP client; capped at WARNING
_NOISY_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "httpcore.connection",
    "httpcore.http11",
)


def _shared_processors() -> list[Any]:
    """Processors applied to both structlog and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_processors(json_output: bool) -> list[Any]:
    if json_output:
        return [
            ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(colors=False),
    ]


def configure_logging(*, json_output: bool = False, level: str = "INFO") -> None:
    """Route structlog and stdlib logging to one stderr handler.

    Safe to call repeatedly; each call replaces the root handler.

    Args:
        json_output: One JSON object per line instead of console format.
        level: Root log level (DEBUG, INFO, WARNING, ERROR).
    """
    log_level = getattr(logging, level.upper())
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure between cases; cached loggers would keep old settings
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=_render_processors(json_output), foreign_pre_chain=shared))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(log_level, logging.WARNING))


@contextmanager
def source_context(label: str) -> Iterator[None]:
    """Attach label=<label> to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(label=label):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module (typically __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger

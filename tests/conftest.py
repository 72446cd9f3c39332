# tests/conftest.py
"""Shared test fixtures and helpers.

Test Fixture Philosophy: Direct Instantiation
=============================================

Production hosts build sources through SourceManager from validated settings.
Tests instantiate sources directly (MemoryDataSource({...})) and call
initialize() themselves. That keeps each test in control of the exact seed
data without a YAML + manager round trip. The production path is covered
separately in test_host.py and test_cli.py.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from locus_datasource.testing import MemoryDataSource

# =============================================================================
# Hypothesis Profiles
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Seed Data
# =============================================================================


def golang_seed() -> dict[str, Any]:
    """Options for a memory source with three Go topics and one Python topic.

    Relevance order among the Go topics: 2 (0.9), 1 (0.7), 3 (0.4).
    Topic 3 has no content.
    """
    return {
        "topics": [
            {
                "topic": "Golang concurrency patterns with channels",
                "source_url": "https://example.com/q/1",
                "site": "stackoverflow",
                "topic_id": 1,
                "relevance": 0.7,
                "tags": ["go", "channels"],
            },
            {
                "topic": "Understanding goroutines and concurrency",
                "source_url": "https://example.com/q/2",
                "site": "stackoverflow",
                "topic_id": 2,
                "relevance": 0.9,
                "tags": ["go"],
            },
            {
                "topic": "Worker pool patterns in golang",
                "source_url": "https://example.com/q/3",
                "topic_id": 3,
                "relevance": 0.4,
            },
            {
                "topic": "Python asyncio event loop",
                "source_url": "https://example.com/q/4",
                "site": "stackoverflow",
                "topic_id": 4,
                "relevance": 0.95,
                "tags": ["python"],
            },
        ],
        "content": {
            1: [
                {"data_text": "Use a fan-in channel.", "source_url": "https://example.com/a/10", "answer_id": 10, "score": 3},
                {"data_text": "<p>select over <code>ctx.Done()</code></p>", "source_url": "https://example.com/a/11", "answer_id": 11, "score": 12},
                {"data_text": "Pipelines compose stages.", "source_url": "https://example.com/a/12", "answer_id": 12, "score": 7},
            ],
            2: [
                {"data_text": "Goroutines are cheap.", "source_url": "https://example.com/a/20", "answer_id": 20, "score": 1},
            ],
        },
    }


@pytest.fixture
def make_memory_source() -> Iterator[Callable[..., MemoryDataSource]]:
    """Factory for initialized memory sources; closes them at teardown."""
    created: list[MemoryDataSource] = []

    def _make(options: dict[str, Any] | None = None, *, initialize: bool = True) -> MemoryDataSource:
        source = MemoryDataSource(golang_seed() if options is None else options)
        if initialize:
            source.initialize()
        created.append(source)
        return source

    yield _make

    for source in created:
        source.close()


@pytest.fixture
def golang_source(make_memory_source: Callable[..., MemoryDataSource]) -> MemoryDataSource:
    """Initialized memory source seeded with golang_seed()."""
    return make_memory_source()


@pytest.fixture
def empty_source(make_memory_source: Callable[..., MemoryDataSource]) -> MemoryDataSource:
    """Initialized memory source with no topics at all."""
    return make_memory_source({})


@pytest.fixture
def golang_options() -> dict[str, Any]:
    """Fresh copy of golang_seed() for tests that tweak the seed."""
    return golang_seed()


@pytest.fixture(autouse=True)
def _reset_root_handlers() -> Iterator[None]:
    """Drop handlers installed by configure_logging().

    configure_logging() binds a handler to whatever sys.stderr is at call
    time; under capsys or CliRunner that stream is closed after the test.
    """
    yield
    logging.getLogger().handlers = []

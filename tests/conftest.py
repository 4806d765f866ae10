"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from tests.payloads import Clock, tserver_metrics
from ybstats.adapters.transport import InMemoryTransport
from ybstats.config import Settings


@pytest.fixture
def clock() -> Clock:
    """A clock frozen at 1000.0 that tests can move by hand."""
    return Clock()


@pytest.fixture
def snapshot_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for snapshot store tests."""
    return str(tmp_path / "snapshots.db")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings for a two host, one port cluster."""
    return Settings(
        hosts=("node-1", "node-2"),
        ports=(9000,),
        parallel=2,
        snapshot_dir=tmp_path / "snapshots",
    )


@pytest.fixture
def cluster_transport() -> Callable[[int], InMemoryTransport]:
    """Factory for a transport serving two tablet servers at a given scale."""

    def _transport(scale: int = 1) -> InMemoryTransport:
        return InMemoryTransport(
            {
                "node-1:9000": {"metrics": tserver_metrics(scale)},
                "node-2:9000": {"metrics": tserver_metrics(scale)},
            }
        )

    return _transport


@pytest.fixture(autouse=True)
def reset_ybstats_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees ybstats records in every test."""
    yield
    logger = logging.getLogger("ybstats")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

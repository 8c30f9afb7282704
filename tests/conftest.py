"""
Pytest configuration and shared fixtures.
"""

import pytest

from storeenv.config import get_store_env
from storeenv.fields import STORE_FIELDS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove store variables from the process environment and reset the cache."""
    for spec in STORE_FIELDS:
        monkeypatch.delenv(spec.env_var, raising=False)
    get_store_env.cache_clear()
    yield
    get_store_env.cache_clear()


@pytest.fixture
def sample_env():
    """A synthetic environment with a few store variables and unrelated noise."""
    return {
        "GRAPH_QUERY_STATS_REFRESH_INTERVAL": "100",
        "GRAPH_STORE_WRITE_BATCH_SIZE": "2500",
        "GRAPH_STORE_CONNECTION_TIMEOUT": "250",
        "GRAPH_REMOVE_UNUSED_INTERVAL": "15",
        "ORDER_BY_BLOCK_RANGE": "false",
        "GRAPH_STORE_CONNECTION_MIN_IDLE": "2",
        "PATH": "/usr/bin",
        "GRAPH_UNKNOWN_SETTING": "whatever",
    }

"""Store environment settings, loaded once and frozen.

Usage:
    from storeenv import get_store_env

    env_vars = get_store_env()
    timeout = env_vars.connection_timeout   # timedelta
    batch_bytes = env_vars.write_batch_size  # int, bytes

Environment Variables:
    Run ``storeenv describe`` for the full list with units and defaults.
"""

# Load .env BEFORE any settings are read (must be first)
from dotenv import load_dotenv

load_dotenv()

import os  # noqa: E402
from dataclasses import dataclass  # noqa: E402
from datetime import timedelta  # noqa: E402
from functools import lru_cache  # noqa: E402
from typing import Mapping, Optional  # noqa: E402

from storeenv.fields import STORE_FIELDS  # noqa: E402
from storeenv.loader import load_fields  # noqa: E402

OPAQUE_REPR = "StoreEnvVars(<values hidden>)"


@dataclass(frozen=True, repr=False)
class StoreEnvVars:
    """Storage subsystem tunables resolved from the environment.

    Durations are ``timedelta`` regardless of the unit the operator used
    (seconds, milliseconds or minutes). ``write_batch_size`` is in bytes even
    though ``GRAPH_STORE_WRITE_BATCH_SIZE`` is given in kilobytes.

    ``repr()`` and ``str()`` never show values, so an instance can be logged
    without leaking connection or tuning parameters.
    """

    chain_head_watcher_timeout: timedelta
    query_stats_refresh_interval: timedelta
    schema_cache_ttl: timedelta
    extra_query_permits: int
    large_notification_cleanup_interval: timedelta
    notification_broadcast_timeout: timedelta
    typea_batch_size: int
    typed_children_set_size: int
    # Turns `ORDER BY id` into `ORDER BY id, block_range` in some queries
    order_by_block_range: bool
    remove_unused_interval: timedelta
    recent_blocks_cache_capacity: int
    connection_timeout: timedelta
    connection_min_idle: Optional[int]
    connection_idle_timeout: timedelta
    write_queue_size: int
    batch_target_duration: timedelta
    # Fraction of entity versions removed at which pruning rebuilds the table
    rebuild_threshold: float
    # Fraction at which pruning deletes instead (below rebuild_threshold)
    delete_threshold: float
    history_slack_factor: float
    write_batch_duration: timedelta
    write_batch_size: int
    create_gin_indexes: bool
    use_brin_for_all_query_types: bool
    disable_block_cache_for_lookup: bool
    last_rollup_from_poi: bool
    insert_extra_cols: int
    fdw_fetch_size: int

    def __repr__(self) -> str:
        return OPAQUE_REPR

    __str__ = __repr__

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "StoreEnvVars":
        """Load and freeze settings from ``env`` (defaults to ``os.environ``).

        Raises:
            ConfigError: On the first variable that is missing or invalid.
        """
        if env is None:
            env = os.environ
        return cls(**load_fields(env, STORE_FIELDS))


@lru_cache()
def get_store_env() -> StoreEnvVars:
    """Return the store settings resolved from the process environment.

    The first call loads and validates; later calls share that instance.
    A failed load is not cached, and tests reset it with
    ``get_store_env.cache_clear()``.
    """
    return StoreEnvVars.from_env()


__all__ = [
    "StoreEnvVars",
    "get_store_env",
    "OPAQUE_REPR",
]

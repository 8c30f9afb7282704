"""Field table binding every store setting to its environment variable.

Each ``FieldSpec`` names the variable, the base kind its raw string is
parsed as, the unit the operator writes it in, and either a static default
(a string, parsed like operator input), a derivation from other resolved
fields, or neither (optional or required).
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Tuple

from storeenv.scalars import (
    U32_MAX,
    U64_MAX,
    SlackFactor,
    UnitInterval,
    parse_bool,
    parse_strict_bool,
    parse_unsigned,
)


class Kind(Enum):
    """Base type a raw string is parsed as."""

    U64 = "u64"
    USIZE = "usize"
    U32 = "u32"
    BOOL = "bool"
    STRICT_BOOL = "strict_bool"
    UNIT_INTERVAL = "unit_interval"
    SLACK_FACTOR = "slack_factor"

    def parse(self, raw: str) -> Any:
        if self is Kind.BOOL:
            return parse_bool(raw)
        if self is Kind.STRICT_BOOL:
            return parse_strict_bool(raw)
        if self is Kind.UNIT_INTERVAL:
            return UnitInterval.parse(raw).value
        if self is Kind.SLACK_FACTOR:
            return SlackFactor.parse(raw).value
        if self is Kind.U32:
            return parse_unsigned(raw, U32_MAX)
        return parse_unsigned(raw, U64_MAX)


class Unit(Enum):
    """Unit an operator expresses a value in."""

    NONE = "none"
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
    MINUTES = "minutes"
    KILOBYTES = "kilobytes"

    def convert(self, value: Any) -> Any:
        """Normalize a parsed value into its stored form.

        Durations become ``timedelta``; kilobytes become a byte count.
        Raises ``OverflowError`` if a duration does not fit a ``timedelta``.
        """
        if self is Unit.SECONDS:
            return timedelta(seconds=value)
        if self is Unit.MILLISECONDS:
            return timedelta(milliseconds=value)
        if self is Unit.MINUTES:
            return timedelta(minutes=value)
        if self is Unit.KILOBYTES:
            return value * 1000
        return value


@dataclass(frozen=True)
class FieldSpec:
    name: str
    env_var: str
    kind: Kind
    unit: Unit = Unit.NONE
    default: Optional[str] = None
    optional: bool = False
    derive: Optional[Callable[[Mapping[str, Any]], Any]] = None
    depends_on: Tuple[str, ...] = ()
    doc: str = ""

    @property
    def is_derived(self) -> bool:
        return self.derive is not None

    @property
    def default_label(self) -> str:
        """Human-readable default, used by ``storeenv describe``."""
        if self.is_derived:
            return "derived"
        if self.default is not None:
            return self.default
        return "unset" if self.optional else "required"


def _twice_refresh_interval(resolved: Mapping[str, Any]) -> timedelta:
    return 2 * resolved["query_stats_refresh_interval"]


STORE_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(
        "chain_head_watcher_timeout",
        "GRAPH_CHAIN_HEAD_WATCHER_TIMEOUT",
        Kind.U64,
        Unit.SECONDS,
        default="30",
    ),
    FieldSpec(
        "query_stats_refresh_interval",
        "GRAPH_QUERY_STATS_REFRESH_INTERVAL",
        Kind.U64,
        Unit.SECONDS,
        default="300",
        doc="How long query statistics are cached before reloading",
    ),
    FieldSpec(
        "schema_cache_ttl",
        "GRAPH_SCHEMA_CACHE_TTL",
        Kind.U64,
        Unit.SECONDS,
        derive=_twice_refresh_interval,
        depends_on=("query_stats_refresh_interval",),
        doc="Defaults to twice the query stats refresh interval",
    ),
    FieldSpec(
        "extra_query_permits",
        "GRAPH_EXTRA_QUERY_PERMITS",
        Kind.USIZE,
        default="0",
    ),
    FieldSpec(
        "large_notification_cleanup_interval",
        "LARGE_NOTIFICATION_CLEANUP_INTERVAL",
        Kind.U64,
        Unit.SECONDS,
        default="300",
    ),
    FieldSpec(
        "notification_broadcast_timeout",
        "GRAPH_NOTIFICATION_BROADCAST_TIMEOUT",
        Kind.U64,
        Unit.SECONDS,
        default="60",
    ),
    FieldSpec("typea_batch_size", "TYPEA_BATCH_SIZE", Kind.USIZE, default="150"),
    FieldSpec(
        "typed_children_set_size",
        "TYPED_CHILDREN_SET_SIZE",
        Kind.USIZE,
        default="150",
        doc="Set to 0 to turn off the typed children optimization",
    ),
    FieldSpec(
        "order_by_block_range",
        "ORDER_BY_BLOCK_RANGE",
        Kind.BOOL,
        default="true",
    ),
    FieldSpec(
        "remove_unused_interval",
        "GRAPH_REMOVE_UNUSED_INTERVAL",
        Kind.U64,
        Unit.MINUTES,
        default="360",
    ),
    FieldSpec(
        "recent_blocks_cache_capacity",
        "GRAPH_STORE_RECENT_BLOCKS_CACHE_CAPACITY",
        Kind.USIZE,
        default="10",
    ),
    FieldSpec(
        "connection_timeout",
        "GRAPH_STORE_CONNECTION_TIMEOUT",
        Kind.U64,
        Unit.MILLISECONDS,
        default="5000",
    ),
    FieldSpec(
        "connection_min_idle",
        "GRAPH_STORE_CONNECTION_MIN_IDLE",
        Kind.U32,
        optional=True,
    ),
    FieldSpec(
        "connection_idle_timeout",
        "GRAPH_STORE_CONNECTION_IDLE_TIMEOUT",
        Kind.U64,
        Unit.SECONDS,
        default="600",
    ),
    FieldSpec(
        "write_queue_size",
        "GRAPH_STORE_WRITE_QUEUE",
        Kind.USIZE,
        default="5",
        doc="Blocks buffered for writing; 0 makes writes synchronous",
    ),
    FieldSpec(
        "batch_target_duration",
        "GRAPH_STORE_BATCH_TARGET_DURATION",
        Kind.U64,
        Unit.SECONDS,
        default="180",
    ),
    FieldSpec(
        "rebuild_threshold",
        "GRAPH_STORE_HISTORY_REBUILD_THRESHOLD",
        Kind.UNIT_INTERVAL,
        default="0.5",
    ),
    FieldSpec(
        "delete_threshold",
        "GRAPH_STORE_HISTORY_DELETE_THRESHOLD",
        Kind.UNIT_INTERVAL,
        default="0.05",
    ),
    FieldSpec(
        "history_slack_factor",
        "GRAPH_STORE_HISTORY_SLACK_FACTOR",
        Kind.SLACK_FACTOR,
        default="1.2",
    ),
    FieldSpec(
        "write_batch_duration",
        "GRAPH_STORE_WRITE_BATCH_DURATION",
        Kind.U64,
        Unit.SECONDS,
        default="300",
        doc="0 disables write batching",
    ),
    FieldSpec(
        "write_batch_size",
        "GRAPH_STORE_WRITE_BATCH_SIZE",
        Kind.USIZE,
        Unit.KILOBYTES,
        default="10000",
        doc="0 disables write batching",
    ),
    FieldSpec(
        "create_gin_indexes",
        "GRAPH_STORE_CREATE_GIN_INDEXES",
        Kind.STRICT_BOOL,
        default="false",
    ),
    FieldSpec(
        "use_brin_for_all_query_types",
        "GRAPH_STORE_USE_BRIN_FOR_ALL_QUERY_TYPES",
        Kind.STRICT_BOOL,
        default="false",
    ),
    FieldSpec(
        "disable_block_cache_for_lookup",
        "GRAPH_STORE_DISABLE_BLOCK_CACHE_FOR_LOOKUP",
        Kind.STRICT_BOOL,
        default="false",
    ),
    FieldSpec(
        "last_rollup_from_poi",
        "GRAPH_STORE_LAST_ROLLUP_FROM_POI",
        Kind.STRICT_BOOL,
        default="false",
    ),
    FieldSpec(
        "insert_extra_cols",
        "GRAPH_STORE_INSERT_EXTRA_COLS",
        Kind.USIZE,
        default="0",
    ),
    FieldSpec(
        "fdw_fetch_size",
        "GRAPH_STORE_FDW_FETCH_SIZE",
        Kind.USIZE,
        default="10000",
        doc="Rows fetched from the foreign data wrapper per round trip",
    ),
)

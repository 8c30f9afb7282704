"""Validated scalar types and base parsers for raw environment strings.

Base parsers turn a raw string into an ``int``, ``float`` or ``bool`` and
raise ``MalformedScalarError`` when the string is not of that shape. The
validated scalars (``UnitInterval``, ``SlackFactor``) additionally enforce a
range and raise ``ScalarRangeError`` on violation. Neither knows which
environment variable the string came from; the loader attaches that.
"""

import re
from dataclasses import dataclass
from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_NEGATIVE_RE = re.compile(r"-[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?(?:inf|infinity|nan)",
    re.IGNORECASE,
)

_TRUE_VALUES = ("true", "1")
_FALSE_VALUES = ("false", "0")


class MalformedScalarError(ValueError):
    """Raw string is not of the expected base type."""


class ScalarRangeError(ValueError):
    """Parsed value violates a range constraint."""


def parse_unsigned(raw: str, max_value: int = U64_MAX) -> int:
    """Parse a non-negative integer no larger than ``max_value``."""
    if _UNSIGNED_RE.fullmatch(raw):
        # int() refuses strings past the interpreter digit limit
        digits = raw.lstrip("+").lstrip("0") or "0"
        if len(digits) > len(str(max_value)):
            raise ScalarRangeError(f"must be at most {max_value}")
        value = int(digits)
        if value > max_value:
            raise ScalarRangeError(f"must be at most {max_value}")
        return value
    if _NEGATIVE_RE.fullmatch(raw):
        raise ScalarRangeError("must be non-negative")
    raise MalformedScalarError("expected a non-negative integer")


def parse_float(raw: str) -> float:
    if not _FLOAT_RE.fullmatch(raw):
        raise MalformedScalarError("expected a number")
    return float(raw)


def parse_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise MalformedScalarError("expected one of true, false, 1, 0")


def parse_strict_bool(raw: str) -> bool:
    """Accept exactly ``true`` or ``false``."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise MalformedScalarError("expected true or false")


_UNIT_INTERVAL = TypeAdapter(Annotated[float, Field(ge=0.0, le=1.0, allow_inf_nan=False)])
_SLACK_FACTOR = TypeAdapter(Annotated[float, Field(ge=1.01, allow_inf_nan=False)])


def _check(adapter: TypeAdapter, value: float, reason: str) -> float:
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise ScalarRangeError(reason) from e


@dataclass(frozen=True)
class UnitInterval:
    """A fraction in the closed range [0.0, 1.0].

    Used for thresholds expressing the fraction of rows affected by an
    operation. Construction validates, so every instance is in range.
    """

    value: float

    def __post_init__(self):
        _check(_UNIT_INTERVAL, self.value, "must be between 0 and 1")

    @classmethod
    def parse(cls, raw: str) -> "UnitInterval":
        return cls(parse_float(raw))

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True)
class SlackFactor:
    """Overshoot ratio of at least 1.01.

    A factor of 1.2 tolerates 20% more accumulated history than the limit
    before a rebuild. Values close to 1.0 would trigger rebuilds constantly.
    """

    value: float

    def __post_init__(self):
        _check(_SLACK_FACTOR, self.value, "must be at least 1.01")

    @classmethod
    def parse(cls, raw: str) -> "SlackFactor":
        return cls(parse_float(raw))

    def __float__(self) -> float:
        return self.value

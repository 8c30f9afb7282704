"""Startup-time loader for storage subsystem settings.

Reads the store's environment variables, validates and unit-normalizes each,
derives dependent defaults, and freezes the result into ``StoreEnvVars``.
"""

from storeenv.config import StoreEnvVars, get_store_env
from storeenv.errors import (
    ConfigError,
    MalformedValueError,
    MissingRequiredError,
    OutOfRangeError,
)
from storeenv.fields import STORE_FIELDS, FieldSpec, Kind, Unit
from storeenv.loader import load_fields
from storeenv.scalars import SlackFactor, UnitInterval

__all__ = [
    "StoreEnvVars",
    "get_store_env",
    "ConfigError",
    "MalformedValueError",
    "MissingRequiredError",
    "OutOfRangeError",
    "STORE_FIELDS",
    "FieldSpec",
    "Kind",
    "Unit",
    "load_fields",
    "SlackFactor",
    "UnitInterval",
]

"""Generic loader that resolves a field table against an environment mapping.

Resolution runs in two passes. Independent fields are parsed first, in table
order. Derived fields are evaluated second, so a derivation only ever sees
fully parsed and validated values. The first error aborts the whole load.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from storeenv.errors import MalformedValueError, MissingRequiredError, OutOfRangeError
from storeenv.fields import STORE_FIELDS, FieldSpec
from storeenv.scalars import MalformedScalarError, ScalarRangeError

logger = logging.getLogger(__name__)


def parse_field(spec: FieldSpec, raw: Optional[str]) -> Any:
    """Convert one raw value (or its absence) into the field's stored value.

    Args:
        spec: Field being resolved
        raw: Raw environment string, or None if the variable is not set

    Returns:
        The parsed value with its unit conversion applied, or None for an
        unset optional field

    Raises:
        MissingRequiredError: Variable is absent and the field is required
        MalformedValueError: Raw string is not of the field's base type
        OutOfRangeError: Value parses but violates the field's constraint
    """
    if raw is None:
        if spec.default is None:
            if spec.optional:
                return None
            raise MissingRequiredError(spec.env_var)
        raw = spec.default

    try:
        value = spec.kind.parse(raw)
    except MalformedScalarError as e:
        raise MalformedValueError(spec.env_var, raw, str(e)) from e
    except ScalarRangeError as e:
        raise OutOfRangeError(spec.env_var, raw, str(e)) from e

    try:
        return spec.unit.convert(value)
    except OverflowError as e:
        raise OutOfRangeError(spec.env_var, raw, f"too large in {spec.unit.value}") from e


def resolve_derived(spec: FieldSpec, raw: Optional[str], resolved: Mapping[str, Any]) -> Any:
    """Resolve a derived field from its own variable or from resolved fields."""
    if raw is not None:
        return parse_field(spec, raw)

    missing = [name for name in spec.depends_on if name not in resolved]
    if missing:
        raise RuntimeError(
            f"Cannot derive {spec.name}: unresolved dependencies {', '.join(missing)}"
        )

    try:
        return spec.derive(resolved)
    except OverflowError as e:
        raise OutOfRangeError(spec.env_var, None, "derived value is out of range") from e


def load_fields(
    env: Mapping[str, str], fields: Iterable[FieldSpec] = STORE_FIELDS
) -> Dict[str, Any]:
    """Resolve every field in ``fields`` against ``env``.

    Variables in ``env`` that no field names are ignored.
    """
    fields = tuple(fields)
    resolved: Dict[str, Any] = {}
    from_env = []

    for spec in fields:
        if spec.is_derived:
            continue
        raw = env.get(spec.env_var)
        if raw is not None:
            from_env.append(spec.env_var)
        resolved[spec.name] = parse_field(spec, raw)

    for spec in fields:
        if not spec.is_derived:
            continue
        raw = env.get(spec.env_var)
        if raw is not None:
            from_env.append(spec.env_var)
        resolved[spec.name] = resolve_derived(spec, raw, resolved)

    logger.debug(
        f"Resolved {len(resolved)} fields, {len(from_env)} set in environment: "
        f"{', '.join(from_env) or 'none'}"
    )
    return resolved

"""Shallow object-schema validation for tool arguments.

Only the top level of an ``object`` schema is checked: required property
names and the primitive type tag of each declared property. Nested
schemas, ``enum`` and other keywords are not interpreted. Validation stops
at the first failure.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from toolrpc.errors import InvalidParamsError, raise_rpc_error


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_TYPE_CHECKS: dict[str, Callable[[Any], bool]] = {
    "string": lambda value: isinstance(value, str),
    "number": _is_number,
    "integer": _is_integer,
    "boolean": lambda value: isinstance(value, bool),
    "object": lambda value: isinstance(value, Mapping),
    "array": lambda value: isinstance(value, (list, tuple)),
}


def matches_type(value: Any, type_tag: str) -> bool:
    """Return whether ``value`` has the runtime kind named by ``type_tag``.

    Unknown tags match anything.
    """
    check = _TYPE_CHECKS.get(type_tag)
    return True if check is None else check(value)


def validate(value: Any, schema: Mapping[str, Any]) -> None:
    """Check ``value`` against a shallow object schema.

    Args:
        value: Candidate arguments.
        schema: Schema with ``type``, ``properties`` and ``required`` keys.

    Raises:
        InvalidParamsError: On the first violation found.
    """
    if schema.get("type") != "object":
        return
    if value is None:
        raise_rpc_error(InvalidParamsError, "Expected params object, got null.")
    if not isinstance(value, Mapping):
        raise_rpc_error(
            InvalidParamsError,
            f"Expected params object, got {type(value).__name__}.",
        )

    for name in schema.get("required") or ():
        if name not in value:
            raise_rpc_error(
                InvalidParamsError,
                f"Missing required property: {name}",
                {"property": name},
            )

    properties = schema.get("properties") or {}
    for name, item in value.items():
        definition = properties.get(name)
        if not isinstance(definition, Mapping):
            continue
        type_tag = definition.get("type")
        if isinstance(type_tag, str) and not matches_type(item, type_tag):
            raise_rpc_error(
                InvalidParamsError,
                f'Property "{name}" expected type {type_tag}.',
                {"property": name, "expected": type_tag},
            )

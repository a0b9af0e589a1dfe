"""Unwrap response envelopes into typed results."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from .command import Command
from .exceptions import DecodeError, TransportError
from ..utils.error_mapper import is_error_payload, map_protocol_error

_MISSING = object()


@lru_cache(maxsize=None)
def _adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def extract_value(envelope: Any) -> Any:
    """
    Return the ``value`` of an envelope, raising for remote-end errors.

    Args:
        envelope: Decoded JSON body of a response

    Returns:
        The raw ``value`` payload (which may legitimately be None)

    Raises:
        TransportError: If the envelope is not an object with a ``value``
        ProtocolError: If ``value`` reports a remote-end error
    """
    if not isinstance(envelope, Mapping):
        raise TransportError(
            f"Malformed response envelope: expected object, got {type(envelope).__name__}"
        )
    value = envelope.get("value", _MISSING)
    if value is _MISSING:
        raise TransportError("Malformed response envelope: missing 'value'")
    if is_error_payload(value):
        raise map_protocol_error(value)
    return value


def decode(value: Any, result_type: Any, command: str = "command") -> Any:
    """
    Validate a raw value against the expected result type.

    Works the same for scalars, lists and pydantic models. Validation is
    strict: a string is never accepted where a bool or int is expected.

    Raises:
        DecodeError: If the value does not fit ``result_type``
    """
    try:
        return _adapter(result_type).validate_python(value, strict=True)
    except ValidationError as e:
        raise DecodeError(command, str(e), value=value) from e


def unwrap(envelope: Any, result_type: Any = Any, command: Optional[Command] = None) -> Any:
    """
    Extract and decode the value of an envelope.

    Args:
        envelope: Decoded JSON body of a response
        result_type: Expected type of ``value``; defaults to the command's
            declared result type when a command is given
        command: Command that produced the envelope, used for error context

    Returns:
        The decoded value
    """
    value = extract_value(envelope)
    name = command.kind.value if command is not None else "command"
    if command is not None and result_type is Any:
        result_type = command.result_type
    if result_type is Any:
        return value
    return decode(value, result_type, name)

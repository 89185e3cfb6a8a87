"""JSON text codec built on pydantic.

Absence is always the four bytes ``null``. A present value is encoded by
pydantic's serializer for the element type, so composite elements
(models, lists, dicts) recurse through their own JSON rules.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any

from pydantic import PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import core_schema, to_json

from nullable.config.settings import get_settings
from nullable.errors import DecodeError, type_name

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

logger = logging.getLogger(__name__)

NULL_LITERAL = b"null"


@functools.lru_cache(maxsize=256)
def _adapter(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(Any if value_type is None else value_type)


def as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    """Normalize codec input to ``bytes``.

    Raises:
        DecodeError: If *data* is a ``str`` that is not encodable as UTF-8.
    """
    if isinstance(data, str):
        try:
            return data.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise DecodeError(f"invalid utf-8 input: {exc.reason}") from exc
    return bytes(data)


def is_null_literal(data: bytes) -> bool:
    """True only for the exact literal ``null``, without surrounding whitespace."""
    return data == NULL_LITERAL


def encode_value(value_type: Any, value: Any) -> bytes:
    """Encode a present value as compact JSON."""
    return _adapter(value_type).dump_json(value)


def decode_value(value_type: Any, data: bytes, *, strict: bool = True) -> Any:
    """Decode JSON *data* into *value_type*.

    Raises:
        DecodeError: If *data* is malformed, does not match *value_type*,
            or *value_type* has no JSON schema.
    """
    try:
        adapter = _adapter(value_type)
    except PydanticUserError as exc:
        msg = f"cannot decode into {type_name(value_type)}: no JSON schema for this type"
        raise DecodeError(msg, value_type=value_type) from exc
    try:
        return adapter.validate_json(data, strict=strict)
    except ValidationError as exc:
        logger.debug("Decode into %s failed", type_name(value_type), exc_info=True)
        msg = f"cannot decode into {type_name(value_type)}: {exc.error_count()} error(s)"
        raise DecodeError(
            msg,
            value_type=value_type,
            errors=exc.errors(include_url=False),
        ) from exc


def nullable_core_schema(
    cls: type,
    value_type: Any,
    handler: GetCoreSchemaHandler,
) -> core_schema.CoreSchema:
    """Build the pydantic core schema for a ``Nullable[value_type]`` field.

    Validation accepts an existing container, a raw element value, or
    ``None``/``null``. A valid container's value is checked against the
    element type like any raw value. JSON input goes through
    :func:`decode_value`, so field decoding follows ``strict_decode``.
    Serialization emits the element value when valid and ``None``/``null``
    otherwise.
    """
    inner = handler.generate_schema(Any if value_type is None else value_type)
    nullable_inner = core_schema.nullable_schema(inner)

    def wrap(raw: Any) -> Any:
        if raw is None:
            return cls.null(value_type)
        return cls.of(raw, value_type)

    from_value = core_schema.no_info_after_validator_function(wrap, nullable_inner)

    def unwrap(container: Any) -> Any:
        if not container.valid:
            return None
        return container.value

    from_container = core_schema.chain_schema(
        [
            core_schema.is_instance_schema(cls),
            core_schema.no_info_plain_validator_function(unwrap),
            from_value,
        ]
    )

    def from_json(raw: Any) -> Any:
        if raw is None:
            return cls.null(value_type)
        strict = get_settings().strict_decode
        return cls.of(decode_value(value_type, to_json(raw), strict=strict), value_type)

    return core_schema.json_or_python_schema(
        json_schema=core_schema.no_info_plain_validator_function(
            from_json, json_schema_input_schema=nullable_inner
        ),
        python_schema=core_schema.union_schema([from_container, from_value]),
        serialization=core_schema.plain_serializer_function_ser_schema(
            unwrap,
            return_schema=nullable_inner,
        ),
    )

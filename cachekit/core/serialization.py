"""
Versioned Envelope Codec

Every cached value is wrapped in a fixed envelope so that values written by
another producer, or by a deployment with a different schema, are detected
instead of being decoded into garbage:

    [MAGIC: 4 bytes b"CKIT"][VERSION: u32 big-endian][MSGPACK PAYLOAD]

The payload is the entity reduced to plain Python data by pydantic's
TypeAdapter and packed with MessagePack. Binary fields stay binary; values
MessagePack has no type for (datetime, UUID, Decimal, sets...) are reduced to
their JSON form through the same adapters. Decoding validates the data back
into the requested entity type, so a payload that no longer matches the
model is a DeserializationError.

This is the only serialization path. Entity types cannot override it.
"""

import struct
from functools import lru_cache
from typing import Any, NamedTuple, TypeVar

import msgpack
from pydantic import TypeAdapter

from cachekit.core.config.constants import (
    CURRENT_SCHEMA_VERSION,
    ENVELOPE_HEADER_SIZE,
    ENVELOPE_MAGIC,
)
from cachekit.core.exceptions import (
    DeserializationError,
    InvalidCacheEntryError,
    SerializationError,
    VersionMismatchError,
)

T = TypeVar("T")

_HEADER = struct.Struct(">4sI")


class EnvelopeHeader(NamedTuple):
    """Decoded envelope header."""

    magic: bytes
    version: int


@lru_cache(maxsize=256)
def _adapter_for(entity_type: Any) -> TypeAdapter:
    return TypeAdapter(entity_type)


def _type_name(entity_type: Any) -> str:
    return getattr(entity_type, "__name__", repr(entity_type))


def _pack_default(value: Any) -> Any:
    # Called by msgpack for types it cannot pack natively
    return _adapter_for(type(value)).dump_python(value, mode="json")


def serialize_for_cache(entity: Any) -> bytes:
    """
    Encode an entity into an envelope.

    Args:
        entity: Any value pydantic can dump (model, dataclass, TypedDict, list...)

    Returns:
        bytes: Header followed by the MessagePack payload

    Raises:
        SerializationError: If the entity cannot be reduced or packed
    """
    entity_type = type(entity)
    try:
        plain = _adapter_for(entity_type).dump_python(entity, mode="python")
        payload = msgpack.packb(plain, use_bin_type=True, default=_pack_default)
    except Exception as e:
        raise SerializationError.from_exception(
            e,
            message=f"Failed to serialize {_type_name(entity_type)} for cache: {e}",
            entity_type=_type_name(entity_type),
        ) from e

    return _HEADER.pack(ENVELOPE_MAGIC, CURRENT_SCHEMA_VERSION) + payload


def read_envelope_header(data: bytes) -> EnvelopeHeader:
    """
    Read the header of a cached buffer without validating it.

    Raises:
        InvalidCacheEntryError: If the buffer is shorter than the header
    """
    if len(data) < ENVELOPE_HEADER_SIZE:
        raise InvalidCacheEntryError(
            f"Cache entry too short: {len(data)} bytes, header needs {ENVELOPE_HEADER_SIZE}",
            details={"length": len(data)},
        )
    magic, version = _HEADER.unpack_from(data)
    return EnvelopeHeader(magic=magic, version=version)


def deserialize_from_cache(data: bytes, entity_type: type[T]) -> T:
    """
    Decode an envelope into an instance of ``entity_type``.

    Checks run in order: length, magic, version, payload.

    Raises:
        InvalidCacheEntryError: Short buffer or foreign magic bytes
        VersionMismatchError: Envelope written with another schema version
        DeserializationError: Malformed payload or payload not matching entity_type
    """
    header = read_envelope_header(data)

    if header.magic != ENVELOPE_MAGIC:
        raise InvalidCacheEntryError(
            "Invalid cache entry: magic bytes do not match",
            details={"expected_magic": ENVELOPE_MAGIC.hex(), "found_magic": header.magic.hex()},
        )

    if header.version != CURRENT_SCHEMA_VERSION:
        raise VersionMismatchError(expected=CURRENT_SCHEMA_VERSION, found=header.version)

    try:
        plain = msgpack.unpackb(bytes(data[ENVELOPE_HEADER_SIZE:]), raw=False, strict_map_key=False)
        return _adapter_for(entity_type).validate_python(plain)
    except Exception as e:
        raise DeserializationError.from_exception(
            e,
            message=f"Failed to deserialize cached {_type_name(entity_type)}: {e}",
            entity_type=_type_name(entity_type),
        ) from e

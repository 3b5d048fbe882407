"""Raw record <-> BSON document mapping (identity key, Decimal, UUID)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from bson import Decimal128


def _serialize_value(value: Any) -> Any:
    """Convert Python types to BSON-safe types."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    return value


def _deserialize_value(value: Any) -> Any:
    """Convert BSON types back to Python types."""
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, dict):
        return {k: _deserialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(v) for v in value]
    return value


def record_to_doc(
    record: dict[str, Any], *, id_field: str = "id", native_id_field: str = "_id"
) -> dict[str, Any]:
    """Convert a raw record to a BSON-ready document.

    ``id_field`` (e.g. ``"id"``) is renamed to ``native_id_field``
    (e.g. ``"_id"``).  A ``None`` identity is dropped.
    """
    doc = {k: _serialize_value(v) for k, v in record.items()}
    if id_field in doc:
        entity_id = doc.pop(id_field)
        if entity_id is not None:
            doc[native_id_field] = entity_id
    return doc


def doc_to_record(
    doc: dict[str, Any], *, id_field: str = "id", native_id_field: str = "_id"
) -> dict[str, Any]:
    """Convert a BSON document back to a raw record, ``_id`` -> ``id``."""
    record = {k: _deserialize_value(v) for k, v in doc.items()}
    if native_id_field in record:
        record[id_field] = record.pop(native_id_field)
    return record

"""Conversion of ledger records to JSON-ready values."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from realty_escrow.models.base import Event


def serialize_value(value: Any) -> Any:
    """Convert a value to something ``json.dumps`` accepts unchanged.

    Integers pass through as-is so base-unit amounts stay exact.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(serialize_value(item) for item in value)
    return value


def dataclass_to_dict(obj: Any) -> dict:
    """Serialize every field of a dataclass instance."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def event_to_record(event: Event) -> dict:
    """Flatten an event envelope for export.

    Payload fields sit next to the envelope fields and metadata is prefixed
    with ``meta_``.  Envelope fields win on a name clash.
    """
    record = serialize_value(event.data)
    for key, value in event.metadata.items():
        record[f"meta_{key}"] = serialize_value(value)
    record.update(
        event_id=event.event_id,
        event_type=event.event_type,
        event_time=event.event_time.isoformat(),
        source=event.source,
        subject=event.subject,
    )
    return record


def to_dict(record: Any) -> dict:
    """Convert an event, dataclass or mapping to a JSON-ready dict."""
    if isinstance(record, Event):
        return event_to_record(record)
    if is_dataclass(record):
        return dataclass_to_dict(record)
    if isinstance(record, dict):
        return record
    return {"value": str(record)}

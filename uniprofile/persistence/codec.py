"""Firestore REST typed value codec.

Firestore's REST API wraps every field value in an object naming its type:

    {"name": {"stringValue": "Ana"},
     "graduation_year": {"integerValue": "2020"},
     "createdAt": {"timestampValue": "2024-05-01T10:00:00.000000Z"},
     "legacy": {"nullValue": null}}

Integers travel as strings (64-bit); timestamps as RFC 3339 in UTC.
"""

import re
from datetime import datetime, timezone
from typing import Any, Mapping

_FRACTION = re.compile(r"\.(\d+)")


def encode_value(value: Any) -> dict[str, Any]:
    """Encode a Python value as a Firestore typed value.

    Raises:
        TypeError: If the value has no Firestore representation
    """
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": format_timestamp(value)}
    if isinstance(value, Mapping):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    raise TypeError(f"Cannot encode {type(value).__name__} as a Firestore value")


def decode_value(wire: Mapping[str, Any]) -> Any:
    """Decode a Firestore typed value into a Python value.

    Types the profile schema never uses (references, geo points, bytes)
    are returned as their raw wire payload.
    """
    if "nullValue" in wire:
        return None
    if "booleanValue" in wire:
        return bool(wire["booleanValue"])
    if "integerValue" in wire:
        return int(wire["integerValue"])
    if "doubleValue" in wire:
        return float(wire["doubleValue"])
    if "stringValue" in wire:
        return wire["stringValue"]
    if "timestampValue" in wire:
        return parse_timestamp(wire["timestampValue"])
    if "mapValue" in wire:
        return decode_fields(wire["mapValue"].get("fields", {}))
    if "arrayValue" in wire:
        return [decode_value(v) for v in wire["arrayValue"].get("values", [])]
    for key in ("referenceValue", "geoPointValue", "bytesValue"):
        if key in wire:
            return wire[key]
    raise ValueError(f"Unknown Firestore value: {dict(wire)!r}")


def encode_fields(record: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    return {key: encode_value(value) for key, value in record.items()}


def decode_fields(fields: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
    return {key: decode_value(value) for key, value in fields.items()}


def format_timestamp(value: datetime) -> str:
    """Format as RFC 3339 UTC; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp.

    Firestore returns up to nanosecond precision; fractions are truncated to
    microseconds.
    """
    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

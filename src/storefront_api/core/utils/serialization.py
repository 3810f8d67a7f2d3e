"""Conversions between plain records, DynamoDB items and JSON.

DynamoDB rejects Python floats, so numbers are written as ``Decimal`` and
converted back to ``int``/``float`` when read.
"""

import json
from decimal import Decimal
from typing import Any

Record = dict[str, Any]


def json_default(value: Any) -> Any:
    """``json.dumps`` fallback for values returned by DynamoDB."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)

    if isinstance(value, (set, frozenset)):
        return sorted(value)

    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(record: Record) -> str:
    """Serialize a record to its canonical JSON form."""
    return json.dumps(record, default=json_default, sort_keys=True, separators=(",", ":"))


def to_dynamodb_item(record: Record) -> Record:
    """Return a copy of ``record`` with every float replaced by ``Decimal``."""
    item: Record = json.loads(to_json(record), parse_float=Decimal)
    return item


def from_dynamodb_item(item: Record) -> Record:
    """Return a copy of ``item`` with every ``Decimal`` replaced by int or float."""
    record: Record = json.loads(json.dumps(item, default=json_default))
    return record

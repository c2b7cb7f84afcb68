"""Structured list/map values stored in JSON columns.

Legacy clients still send these fields as JSON-encoded strings, so the boundary accepts either
the encoded text or the decoded value and always hands a validated structure to the store.
"""

import json
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from legalhub.core.errors import ValidationError

CompositeValue = list[str] | dict[str, str] | dict[str, list[str]]

_adapter: TypeAdapter[CompositeValue] = TypeAdapter(CompositeValue)


def parse_composite(value: Any, *, field: str) -> CompositeValue | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{field} must be valid JSON", field=field) from exc
    try:
        return _adapter.validate_python(value)
    except PydanticValidationError as exc:
        raise ValidationError(f"{field} must be a list of strings or a string-keyed map", field=field) from exc


def is_empty_composite(value: Any) -> bool:
    return value is None or (isinstance(value, (list, dict)) and len(value) == 0)

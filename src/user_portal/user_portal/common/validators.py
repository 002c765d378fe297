from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> dict:
    """Return the named fields, raising if any of them is missing or blank."""
    out = {}
    for name in fields:
        value = data.get(name)
        if value is None or not str(value).strip():
            raise ValidationError("All fields are required!")
        out[name] = str(value)
    return out

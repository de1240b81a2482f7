from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} debe tener al menos {min_len} caracteres")
    return value.strip()


def optional_arg(args: Mapping[str, Any], name: str) -> Optional[str]:
    """Query-string filter value; empty and ``all`` mean no constraint."""
    value = args.get(name)
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == "all":
        return None
    return value

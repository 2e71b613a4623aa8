"""Input validation helpers for attribute names and records."""
from __future__ import annotations
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional


def validate_record(record: Any) -> Mapping:
    """Ensure a record is a mapping of attribute names to values.

    Args:
        record: Record handed to a translation

    Returns:
        The record, unchanged

    Raises:
        TypeError: If the record is not a mapping
    """
    if not isinstance(record, Mapping):
        raise TypeError(f"Record must be a mapping, got {type(record).__name__}")
    return record


def validate_attribute_names(names: Any) -> Sequence:
    """Ensure attribute names are a sequence of strings.

    A bare string is rejected: it would otherwise be iterated character
    by character.

    Raises:
        TypeError: If names is not a list/tuple of strings
    """
    if isinstance(names, (str, bytes)) or not isinstance(names, Sequence):
        raise TypeError(f"Attribute names must be a list of strings, got {type(names).__name__}")
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"Attribute name must be a string, got {type(name).__name__}")
    return names


def parse_fields_param(raw: Optional[str]) -> List[str]:
    """Parse an OpenSocial ``fields`` query parameter.

    ``a,b , c`` becomes ``["a", "b", "c"]``. A missing or empty value, or
    the ``@all`` marker, yields an empty list meaning "every field".

    Raises:
        ValueError: If a field name contains characters outside [A-Za-z0-9_.-]
    """
    if not raw:
        return []

    fields = [field.strip() for field in raw.split(",") if field.strip()]
    if "@all" in fields:
        return []

    for field in fields:
        if not all(char.isalnum() or char in {"_", ".", "-"} for char in field):
            raise ValueError(f"Invalid field name: {field!r}")
    return fields

"""Uniform field access for keyed (header) and positional (headerless) records."""

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

FieldId = Union[str, int]
FieldSpec = Union[FieldId, list, tuple, None]

_MISSING = object()


def _is_positional(record: Any) -> bool:
    return isinstance(record, Sequence) and not isinstance(record, (str, bytes))


def _to_index(identifier: FieldId) -> Optional[int]:
    """Convert a positional identifier ('5' or 5) to an index, or None."""
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        return identifier if identifier >= 0 else None
    text = str(identifier).strip()
    if not text.isdecimal():
        return None
    return int(text)


def _resolve_field(record: Any, identifier: FieldId) -> Any:
    """Look up a raw value, returning _MISSING if the field does not exist."""
    if _is_positional(record):
        index = _to_index(identifier)
        if index is None or index >= len(record):
            return _MISSING
        return record[index]

    if isinstance(record, Mapping):
        if identifier in record:
            return record[identifier]
        # Records keyed by stringified position, e.g. {'0': ..., '1': ...}
        key = str(identifier)
        if key in record:
            return record[key]
    return _MISSING


def get_field_value(record: Any, field_spec: FieldSpec) -> str:
    """Return a field of a record as a trimmed string.

    Args:
        record: A mapping (CSV with header) or a sequence (CSV without
            header, addressed by column index).
        field_spec: A single field name or index, a list of candidates that
            are tried in order, or None if the field is not available.

    Returns:
        The first present, non-null value converted with str() and stripped,
        or an empty string.
    """
    if field_spec is None:
        return ''

    candidates = field_spec if isinstance(field_spec, (list, tuple)) else [field_spec]
    for identifier in candidates:
        if identifier is None:
            continue
        value = _resolve_field(record, identifier)
        if value is not _MISSING and value is not None:
            return str(value).strip()
    return ''


def has_field(record: Any, identifier: FieldId) -> bool:
    """Check whether a field exists on a record (its value may still be empty)."""
    return _resolve_field(record, identifier) is not _MISSING


def available_fields(record: Any) -> list[str]:
    """List the field identifiers a record offers."""
    if _is_positional(record):
        return [str(i) for i in range(len(record))]
    if isinstance(record, Mapping):
        return [str(k) for k in record.keys()]
    return []

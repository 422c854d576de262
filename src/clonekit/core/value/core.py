"""Reading record fields as reflected values."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from clonekit.core.typeinfo import kind_of, struct_fields
from clonekit.core.value.models import FieldValue


def field_value(obj: Any, index: int) -> FieldValue:
    """Read one field of a record instance as a reflected value.

    The value keeps the field's declared type, not the runtime class of the
    stored object. Fields whose name starts with an underscore produce
    unreadable values.

    Args:
        obj: Record instance (dataclass, Pydantic model, NamedTuple, ctypes
            structure or datetime value).
        index: Ordinal of the field in declaration order.

    Returns:
        FieldValue for the field.

    Raises:
        TypeError: If obj is not a record instance.
        IndexError: If the record has no field at index.
    """
    info = struct_fields(type(obj))[index]
    return FieldValue(
        type=info.type,
        kind=kind_of(info.type),
        raw=getattr(obj, info.name),
        readable=info.exported,
        name=info.name,
    )


def field_values(obj: Any) -> Iterator[FieldValue]:
    """Yield every field of a record instance in declaration order."""
    for info in struct_fields(type(obj)):
        yield field_value(obj, info.index)

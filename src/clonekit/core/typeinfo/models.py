"""Type introspection models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """One field of a record type, as seen by the introspection layer.

    Attributes:
        name: Attribute name of the field.
        index: Ordinal position of the field in declaration order.
        type: Declared type handle, with string annotations resolved where possible.
        offset: Byte offset from the record base for fixed-layout records
            (ctypes structures), None for records without a fixed memory layout.
    """

    name: str
    index: int
    type: Any
    offset: int | None = None

    @property
    def exported(self) -> bool:
        """Whether the field is public. Private fields start with an underscore."""
        return not self.name.startswith("_")

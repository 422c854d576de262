"""Classification models: the fields of a record type that need deep copy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StructField:
    """A record field that may hold aliasable state and must be deep-copied.

    Attributes:
        offset: Byte offset from the record base, for fixed-layout records
            (ctypes structures). None when the record has no fixed layout.
        index: Ordinal of the field in declaration order.
        name: Attribute name of the field.
    """

    offset: int | None
    index: int
    name: str


@dataclass(frozen=True, slots=True)
class StructType:
    """Classification result for one record type.

    Immutable and safe to share between any number of readers.
    """

    pointer_fields: tuple[StructField, ...] = ()
    """Fields needing deep copy, in declaration order. Empty: copy by assignment."""

    @property
    def is_opaque(self) -> bool:
        """Whether the whole record can be copied by plain assignment."""
        return not self.pointer_fields


EMPTY_STRUCT_TYPE = StructType()
"""Shared result for every record with no field needing deep copy."""

"""Reflected values: field reading, kind accessors and the private-field extractor."""

from clonekit.core.value.core import field_value, field_values
from clonekit.core.value.models import (
    FieldValue,
    UnexportedFieldError,
    ValueKindError,
    code_address,
)
from clonekit.core.value.operations import CloneInvariantError, copy_scalar_value

__all__ = [
    # Models
    "FieldValue",
    "UnexportedFieldError",
    "ValueKindError",
    "code_address",
    # Core
    "field_value",
    "field_values",
    # Operations
    "copy_scalar_value",
    "CloneInvariantError",
]

"""Core functionalities: stateless kind model, type introspection and value extraction.

Architecture Note:
    core/ contains pure, stateless functionalities. The stateful
    classification cache lives in classify/.
"""

from clonekit.core.kind import Kind, is_opaque_kind
from clonekit.core.typeinfo import (
    Complex64,
    Complex128,
    FieldInfo,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Uint,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    Uintptr,
    UnsafePointer,
    array_info,
    is_record,
    is_value_record,
    kind_of,
    pointer_elem,
    struct_fields,
    unwrap_pointer,
)
from clonekit.core.value import (
    CloneInvariantError,
    FieldValue,
    UnexportedFieldError,
    ValueKindError,
    code_address,
    copy_scalar_value,
    field_value,
    field_values,
)

__all__ = [
    # Kind
    "Kind",
    "is_opaque_kind",
    # Type introspection
    "FieldInfo",
    "kind_of",
    "is_record",
    "is_value_record",
    "pointer_elem",
    "unwrap_pointer",
    "array_info",
    "struct_fields",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "Uintptr",
    "Float32",
    "Float64",
    "Complex64",
    "Complex128",
    "UnsafePointer",
    # Values
    "FieldValue",
    "UnexportedFieldError",
    "ValueKindError",
    "code_address",
    "field_value",
    "field_values",
    "copy_scalar_value",
    "CloneInvariantError",
]

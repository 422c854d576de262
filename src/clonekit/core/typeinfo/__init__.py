"""Type introspection: kinds of type handles, references, arrays and record fields."""

from clonekit.core.typeinfo.core import (
    array_info,
    is_record,
    is_value_record,
    kind_of,
    pointer_elem,
    struct_fields,
    unwrap_pointer,
)
from clonekit.core.typeinfo.models import FieldInfo
from clonekit.core.typeinfo.scalars import (
    Complex64,
    Complex128,
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
)

__all__ = [
    # Models
    "FieldInfo",
    # Core
    "kind_of",
    "is_record",
    "is_value_record",
    "pointer_elem",
    "unwrap_pointer",
    "array_info",
    "struct_fields",
    # Scalars
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
]

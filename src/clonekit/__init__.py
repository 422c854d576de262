"""clonekit: clone-ability analysis for Python record types.

Usage:
    from dataclasses import dataclass
    from clonekit import TypeClassifier, field_value, copy_scalar_value

    @dataclass
    class Meta:
        cache: list[int] | None

    @dataclass
    class Record:
        id: int
        name: str
        meta: Meta

    classifier = TypeClassifier()
    for f in classifier.classify(Record).pointer_fields:
        ...  # deep-copy only these fields, assign the rest

    value = copy_scalar_value(field_value(record, 0)).interface()
"""

__version__ = "0.1.0"

# Classification cache
from clonekit.classify import (
    DEFAULT_OPAQUE_TYPES,
    EMPTY_STRUCT_TYPE,
    StructField,
    StructType,
    TypeClassifier,
)

# Core primitives
from clonekit.core import (
    CloneInvariantError,
    FieldInfo,
    FieldValue,
    Kind,
    UnexportedFieldError,
    ValueKindError,
    copy_scalar_value,
    field_value,
    field_values,
    is_opaque_kind,
    is_value_record,
    kind_of,
    struct_fields,
    unwrap_pointer,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Kind",
    "is_opaque_kind",
    "is_value_record",
    "kind_of",
    "unwrap_pointer",
    "struct_fields",
    "FieldInfo",
    "FieldValue",
    "field_value",
    "field_values",
    "copy_scalar_value",
    "CloneInvariantError",
    "UnexportedFieldError",
    "ValueKindError",
    # Classification
    "TypeClassifier",
    "StructType",
    "StructField",
    "EMPTY_STRUCT_TYPE",
    "DEFAULT_OPAQUE_TYPES",
]

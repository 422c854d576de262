"""Type classification cache."""

from clonekit.classify.classifier import DEFAULT_OPAQUE_TYPES, TypeClassifier, import_type
from clonekit.classify.models import EMPTY_STRUCT_TYPE, StructField, StructType

__all__ = [
    "TypeClassifier",
    "DEFAULT_OPAQUE_TYPES",
    "import_type",
    "StructType",
    "StructField",
    "EMPTY_STRUCT_TYPE",
]

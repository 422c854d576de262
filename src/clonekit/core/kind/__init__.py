"""Kind functionality: the kind enumeration and the scalar kind predicate."""

from clonekit.core.kind.models import Kind, is_opaque_kind

__all__ = [
    "Kind",
    "is_opaque_kind",
]

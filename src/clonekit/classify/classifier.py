"""Type classification cache.

TypeClassifier decides, once per record type, which fields a deep-copy
walker has to recurse into. Everything else in the record can be copied by
plain assignment.

Usage:
    classifier = TypeClassifier()

    @dataclass
    class Job:
        id: int
        name: str
        tags: list[str]

    classifier.classify(Job).pointer_fields
    # (StructField(offset=None, index=2, name='tags'),)

    classifier.mark_opaque(Job)
    classifier.classify(Job).is_opaque  # True
"""

from __future__ import annotations

import datetime
import importlib
import logging
import warnings
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from clonekit.classify.models import EMPTY_STRUCT_TYPE, StructField, StructType
from clonekit.core.kind import Kind, is_opaque_kind
from clonekit.core.typeinfo import (
    array_info,
    is_value_record,
    kind_of,
    struct_fields,
    unwrap_pointer,
)
from clonekit.core.value import FieldValue

if TYPE_CHECKING:
    from clonekit.config import ClassifierSettings

logger = logging.getLogger(__name__)

DEFAULT_OPAQUE_TYPES: tuple[Any, ...] = (datetime.datetime, FieldValue)
"""Well-known records copied by value.

datetime.datetime refers to a tzinfo instance, which is shared and treated
as constant. FieldValue wraps an arbitrary stored object that the walker
never recurses into.
"""


def import_type(path: str) -> Any:
    """Import a type from `module:QualName` or a dotted `module.Name` path.

    Args:
        path: Import path of the type.

    Returns:
        The imported object.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
    """
    module_name, sep, qualname = path.partition(":")
    if not sep:
        module_name, _, qualname = path.rpartition(".")
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


class TypeClassifier:
    """Concurrency-safe cache mapping record types to their classification.

    Results are computed lazily, recursing into nested records and fixed-size
    arrays, and stored with insert-if-absent semantics. Concurrent callers may
    compute the same result twice; the first stored result wins and every
    caller receives it. Entries are never evicted.

    A nested record field holds a reference, so it is skipped only when the
    record is registered opaque, or is a value record (see `is_value_record`)
    with nothing to deep copy. Records referring back to a record being
    classified are included without recursing.

    Args:
        opaque_types: Records to copy by value whatever their fields hold.
        warn_on_inconsistent: Warn when a concurrently computed result differs
            from the stored one.
    """

    def __init__(
        self,
        opaque_types: Iterable[Any] = DEFAULT_OPAQUE_TYPES,
        *,
        warn_on_inconsistent: bool = True,
    ) -> None:
        """Initialize the classifier and register the opaque types.

        Args:
            opaque_types: Records to copy by value whatever their fields hold.
            warn_on_inconsistent: Warn when a concurrently computed result
                differs from the stored one.
        """
        self._struct_types: dict[Any, StructType] = {}
        self._opaque: set[Any] = set()
        self._warn_on_inconsistent = warn_on_inconsistent
        for tp in opaque_types:
            self.mark_opaque(tp)

    @classmethod
    def from_settings(cls, settings: ClassifierSettings) -> TypeClassifier:
        """Build a classifier from settings.

        Args:
            settings: Classifier settings.

        Returns:
            Classifier with the built-in opaque types (unless disabled) and the
            configured extra opaque types registered.
        """
        opaque_types: list[Any] = list(DEFAULT_OPAQUE_TYPES) if settings.builtin_opaque else []
        opaque_types.extend(import_type(path) for path in settings.opaque_types)
        return cls(opaque_types, warn_on_inconsistent=settings.warn_on_inconsistent)

    def mark_opaque(self, tp: Any) -> None:
        """Mark a record type to be copied by value.

        Pointer layers are unwrapped first. Anything that is not a record is
        ignored. The registration replaces an earlier classification of the
        same type; classifications already computed for records containing it
        are kept.

        Args:
            tp: Record type, or a nullable reference to one.
        """
        tp = unwrap_pointer(tp)
        if kind_of(tp) is not Kind.STRUCT:
            return

        self._opaque.add(tp)
        self._struct_types[tp] = EMPTY_STRUCT_TYPE
        logger.debug("Marked %r as opaque", tp)

    def classify(self, tp: Any) -> StructType:
        """Return the fields of a record type that need deep copy.

        Args:
            tp: Record type, or a nullable reference to one.

        Returns:
            Cached or freshly computed classification.

        Raises:
            TypeError: If tp is not a record type.
        """
        return self._classify(unwrap_pointer(tp), frozenset())

    def _classify(self, tp: Any, path: frozenset[Any]) -> StructType:
        cached = self._struct_types.get(tp)
        if cached is not None:
            return cached

        if kind_of(tp) is not Kind.STRUCT:
            raise TypeError(f"Cannot classify {tp!r}: not a record type")

        path = path | {tp}
        pointer_fields = tuple(
            StructField(offset=field.offset, index=field.index, name=field.name)
            for field in struct_fields(tp)
            if self._needs_deep_copy(field.type, path)
        )
        st = StructType(pointer_fields) if pointer_fields else EMPTY_STRUCT_TYPE

        stored = self._struct_types.setdefault(tp, st)
        if stored is st:
            logger.debug("Classified %r: %d field(s) need deep copy", tp, len(pointer_fields))
        elif stored != st and tp not in self._opaque and self._warn_on_inconsistent:
            warnings.warn(
                f"Inconsistent classification of {tp!r}: {stored} is stored, {st} was computed. "
                f"Field order of the type is not deterministic.",
                RuntimeWarning,
                stacklevel=3,
            )
        return stored

    def _needs_deep_copy(self, tp: Any, path: frozenset[Any]) -> bool:
        kind = kind_of(tp)
        if is_opaque_kind(kind):
            return False

        match kind:
            case Kind.ARRAY:
                length, elem = array_info(tp)
                if length == 0:
                    return False
                elem_kind = kind_of(elem)
                if is_opaque_kind(elem_kind):
                    return False
                if elem_kind is Kind.STRUCT:
                    return self._record_needs_deep_copy(elem, path)
                return True
            case Kind.STRUCT:
                return self._record_needs_deep_copy(tp, path)
            case _:
                return True

    def _record_needs_deep_copy(self, tp: Any, path: frozenset[Any]) -> bool:
        tp = unwrap_pointer(tp)
        if tp in self._opaque:
            return False
        # Records referring back to one on the current path form a cycle.
        if tp in path:
            return True
        nested = self._classify(tp, path)
        return not (is_value_record(tp) and nested.is_opaque)

    def is_opaque(self, tp: Any) -> bool:
        """Check whether every field of a record type can be copied by plain assignment."""
        return self.classify(tp).is_opaque

    def __contains__(self, tp: Any) -> bool:
        return unwrap_pointer(tp) in self._struct_types

    def __len__(self) -> int:
        return len(self._struct_types)

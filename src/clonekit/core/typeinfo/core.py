"""Type introspection: kinds, references, arrays and record fields of type handles.

A type handle is anything that can appear as a field annotation: a class,
a typing construct (`list[int]`, `Foo | None`, `Annotated[int, Kind.INT8]`)
or a ctypes type.

Usage:
    kind_of(int)                       # Kind.INT
    kind_of(Node | None)               # Kind.POINTER
    unwrap_pointer(ctypes.POINTER(P))  # P
    struct_fields(Point)               # (FieldInfo("x", 0, float), ...)
"""

from __future__ import annotations

import asyncio
import collections
import collections.abc
import ctypes
import dataclasses
import datetime
import queue
import types
import typing
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from clonekit.core.kind import Kind
from clonekit.core.typeinfo.models import FieldInfo

_NONE_TYPE = type(None)

# Base class of every CFUNCTYPE/PYFUNCTYPE function pointer type.
CFUNC_POINTER_TYPE: type = ctypes.CFUNCTYPE(None).__base__  # type: ignore[assignment]

_FUNCTION_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.LambdaType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.BuiltinMethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    collections.abc.Callable,  # type: ignore[arg-type]
)

_CHANNEL_TYPES: tuple[type, ...] = (queue.Queue, queue.SimpleQueue, asyncio.Queue)

_SIGNED_BY_SIZE = {1: Kind.INT8, 2: Kind.INT16, 4: Kind.INT32, 8: Kind.INT64}
_UNSIGNED_BY_SIZE = {1: Kind.UINT8, 2: Kind.UINT16, 4: Kind.UINT32, 8: Kind.UINT64}

_DATE_FIELDS: tuple[tuple[str, Any], ...] = (("year", int), ("month", int), ("day", int))
_TIME_FIELDS: tuple[tuple[str, Any], ...] = (
    ("hour", int),
    ("minute", int),
    ("second", int),
    ("microsecond", int),
    ("tzinfo", datetime.tzinfo | None),
    ("fold", int),
)

# Standard library value types described as records. Their instances expose
# each field as a read-only attribute.
_KNOWN_LAYOUTS: dict[type, tuple[tuple[str, Any], ...]] = {
    datetime.date: _DATE_FIELDS,
    datetime.time: _TIME_FIELDS,
    datetime.datetime: _DATE_FIELDS + _TIME_FIELDS,
    datetime.timedelta: (("days", int), ("seconds", int), ("microseconds", int)),
}


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = tp.__origin__
    return tp


def _is_pydantic(cls: type) -> bool:
    """Check if class is a Pydantic model without importing pydantic.

    Args:
        cls: Class to check.

    Returns:
        True if class inherits from pydantic.BaseModel, False otherwise.
    """
    for base in cls.__mro__:
        if base.__module__.startswith("pydantic") and base.__name__ == "BaseModel":
            return True
    return False


def _is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields") and hasattr(cls, "_field_defaults")


def _is_ctypes_record(cls: type) -> bool:
    return issubclass(cls, (ctypes.Structure, ctypes.Union))


def is_record(tp: Any) -> bool:
    """Check whether a type handle describes a record with introspectable fields.

    Records are dataclasses, Pydantic models, NamedTuple classes, ctypes
    structures and unions, and the datetime value types.

    Args:
        tp: Type handle to check.

    Returns:
        True if `struct_fields` can describe the type, False otherwise.
    """
    tp = _strip_annotated(tp)
    if not isinstance(tp, type):
        return False
    if tp in _KNOWN_LAYOUTS:
        return True
    return (
        dataclasses.is_dataclass(tp)
        or _is_pydantic(tp)
        or _is_namedtuple(tp)
        or _is_ctypes_record(tp)
    )


def is_value_record(tp: Any) -> bool:
    """Check whether a record's instances cannot be changed through a field holding them.

    Frozen dataclasses and Pydantic models, NamedTuple classes and the
    datetime value types are immutable. ctypes structures and unions nested
    in another one live inline in its buffer and are copied with it.

    Args:
        tp: Type handle to check.

    Returns:
        True for immutable or inline records, False otherwise.
    """
    cls = _strip_annotated(tp)
    if not is_record(cls):
        return False
    if cls in _KNOWN_LAYOUTS or _is_namedtuple(cls) or _is_ctypes_record(cls):
        return True
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    return bool(cls.model_config.get("frozen", False))  # type: ignore[attr-defined]


def _ctypes_simple_kind(tp: type) -> Kind:
    size = ctypes.sizeof(tp)
    match tp._type_:  # type: ignore[attr-defined]
        case "?":
            return Kind.BOOL
        case "b" | "h" | "i" | "l" | "q":
            return _SIGNED_BY_SIZE[size]
        case "B" | "H" | "I" | "L" | "Q":
            return _UNSIGNED_BY_SIZE[size]
        case "f":
            return Kind.FLOAT32
        case "d" | "g":
            return Kind.FLOAT64
        case "c" | "u" | "z" | "Z":
            # Read back as bytes or str, not as integers.
            return Kind.STRING
        case "P":
            return Kind.UNSAFE_POINTER
        case _:
            return Kind.INTERFACE


def _nullable_target(tp: Any) -> Any | None:
    """Return X for `X | None`, None for any other union."""
    args = [arg for arg in get_args(tp) if arg is not _NONE_TYPE]
    if len(args) == 1 and len(get_args(tp)) == 2:
        return args[0]
    return None


def _tuple_kind(tp: Any) -> Kind:
    args = get_args(tp)
    if tp is typing.Tuple or (len(args) == 2 and args[1] is Ellipsis):  # noqa: UP006
        return Kind.SLICE
    if not args or all(arg == args[0] for arg in args):
        return Kind.ARRAY
    return Kind.INTERFACE


def _class_kind(tp: type) -> Kind:
    if tp is bool:
        return Kind.BOOL
    if issubclass(tp, ctypes._SimpleCData):
        return _ctypes_simple_kind(tp)
    if issubclass(tp, CFUNC_POINTER_TYPE) or tp in _FUNCTION_TYPES:
        return Kind.FUNC
    if issubclass(tp, ctypes._Pointer):
        return Kind.POINTER
    if issubclass(tp, ctypes.Array):
        return Kind.ARRAY
    if is_record(tp):
        return Kind.STRUCT
    if tp is int:
        return Kind.INT
    if tp is float:
        return Kind.FLOAT64
    if tp is complex:
        return Kind.COMPLEX128
    if tp is str or tp is bytes:
        return Kind.STRING
    if issubclass(tp, _CHANNEL_TYPES):
        return Kind.CHAN
    if issubclass(tp, collections.abc.Mapping):
        return Kind.MAP
    if issubclass(tp, (collections.abc.Sequence, collections.abc.Set, collections.deque)):
        return Kind.SLICE
    return Kind.INTERFACE


def kind_of(tp: Any) -> Kind:
    """Map a type handle to its kind.

    `Annotated` handles carrying a `Kind` in their metadata use that kind, so
    fixed-width scalars can be declared on plain `int` and `float` fields.
    Nullable references (`X | None`, `ctypes.POINTER(X)`) are pointers. Unions
    of several types, unresolved forward references and plain classes are
    interfaces: anything may hide behind them.

    Args:
        tp: Type handle to classify.

    Returns:
        Kind of the handle.
    """
    origin = get_origin(tp)
    if origin is Annotated:
        for meta in tp.__metadata__:
            if isinstance(meta, Kind):
                return meta
        return kind_of(tp.__origin__)
    if origin is Union or origin is types.UnionType:
        return Kind.POINTER if _nullable_target(tp) is not None else Kind.INTERFACE
    if origin is tuple:
        return _tuple_kind(tp)
    if origin is collections.abc.Callable:
        return Kind.FUNC
    if origin is not None:
        # Parameterized generic: list[int], dict[str, int], queue.Queue[int]
        tp = origin
    if tp is Any or tp is object or not isinstance(tp, type):
        return Kind.INTERFACE
    return _class_kind(tp)


def pointer_elem(tp: Any) -> Any:
    """Return the type a pointer handle refers to.

    Args:
        tp: Handle of kind POINTER.

    Returns:
        X for `X | None`, `Optional[X]` and `ctypes.POINTER(X)`.

    Raises:
        TypeError: If the handle is not a nullable reference.
    """
    tp = _strip_annotated(tp)
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        target = _nullable_target(tp)
        if target is not None:
            return target
    elif isinstance(tp, type) and issubclass(tp, ctypes._Pointer):
        return tp._type_
    raise TypeError(f"{tp!r} is not a pointer type")


def unwrap_pointer(tp: Any) -> Any:
    """Strip every pointer layer and `Annotated` wrapper from a type handle.

    Args:
        tp: Type handle, possibly a (nested) nullable reference.

    Returns:
        The innermost non-pointer handle, without annotations.
    """
    tp = _strip_annotated(tp)
    while kind_of(tp) is Kind.POINTER:
        tp = _strip_annotated(pointer_elem(tp))
    return tp


def array_info(tp: Any) -> tuple[int, Any]:
    """Return length and element type of a fixed-size array handle.

    Args:
        tp: Handle of kind ARRAY: a ctypes array type or a fixed tuple.

    Returns:
        (length, element_type). Zero-length tuples report `Any` as element.

    Raises:
        TypeError: If the handle is not a fixed-size array.
    """
    tp = _strip_annotated(tp)
    if isinstance(tp, type) and issubclass(tp, ctypes.Array):
        return tp._length_, tp._type_
    if get_origin(tp) is tuple and kind_of(tp) is Kind.ARRAY:
        args = get_args(tp)
        return len(args), (args[0] if args else Any)
    raise TypeError(f"{tp!r} is not a fixed-size array type")


def _resolved_hints(cls: type, raw: dict[str, Any]) -> dict[str, Any]:
    """Resolve string annotations, keeping the raw ones when resolution fails."""
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return raw
    return {name: hints.get(name, annotation) for name, annotation in raw.items()}


def _ctypes_fields(cls: type) -> list[tuple[str, Any, int | None]]:
    declared: list[tuple[str, Any]] = []
    for base in reversed(cls.__mro__):
        if "_fields_" in vars(base):
            declared.extend((entry[0], entry[1]) for entry in base._fields_)
    return [(name, ftype, getattr(cls, name).offset) for name, ftype in declared]


@lru_cache(maxsize=None)
def struct_fields(tp: Any) -> tuple[FieldInfo, ...]:
    """List the fields of a record type in declaration order.

    Results are cached per type since a class's fields don't change after
    its definition.

    Args:
        tp: Record type handle (see `is_record`).

    Returns:
        One FieldInfo per field, ordered as declared.

    Raises:
        TypeError: If the handle is not a record type.
    """
    cls = _strip_annotated(tp)
    if not is_record(cls):
        raise TypeError(f"{tp!r} is not a record type")

    entries: list[tuple[str, Any, int | None]]
    if cls in _KNOWN_LAYOUTS:
        entries = [(name, ftype, None) for name, ftype in _KNOWN_LAYOUTS[cls]]
    elif _is_ctypes_record(cls):
        entries = _ctypes_fields(cls)
    elif dataclasses.is_dataclass(cls):
        raw = {f.name: f.type for f in dataclasses.fields(cls)}
        entries = [(name, ftype, None) for name, ftype in _resolved_hints(cls, raw).items()]
    elif _is_pydantic(cls):
        entries = [(name, info.annotation, None) for name, info in cls.model_fields.items()]  # type: ignore[attr-defined]
    else:
        annotations = getattr(cls, "__annotations__", {})
        raw = {name: annotations.get(name, Any) for name in cls._fields}  # type: ignore[attr-defined]
        entries = [(name, ftype, None) for name, ftype in _resolved_hints(cls, raw).items()]

    return tuple(
        FieldInfo(name=name, index=index, type=ftype, offset=offset)
        for index, (name, ftype, offset) in enumerate(entries)
    )

"""Tests for type introspection.

Why these tests exist:
- The classifier trusts kind_of to route every field; a wrong kind means a
  field that aliases state gets copied by assignment
- Field order and offsets are part of the classification result
"""

import asyncio
import collections
import ctypes
import datetime
import queue
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, NamedTuple, Optional

import pytest
from pydantic import BaseModel, ConfigDict

from clonekit.core.kind import Kind
from clonekit.core.typeinfo import (
    Float32,
    Int8,
    UnsafePointer,
    array_info,
    is_record,
    is_value_record,
    kind_of,
    pointer_elem,
    struct_fields,
    unwrap_pointer,
)


@dataclass
class Point:
    x: float
    y: float


@dataclass(slots=True)
class Segment:
    start: "Point"
    end: "Point"
    _label: str = ""


@dataclass
class Haunted:
    count: int
    ghost: "Undefined"  # noqa: F821


class Pair(NamedTuple):
    left: int
    right: list[int]


class Settings(BaseModel):
    retries: int
    hosts: list[str]


class FrozenSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    retries: int


@dataclass(frozen=True)
class Coord:
    x: float
    y: float


class CPoint(ctypes.Structure):
    _fields_ = [("x", ctypes.c_int32), ("y", ctypes.c_int32), ("_tag", ctypes.c_void_p)]


class CPoint3(CPoint):
    _fields_ = [("z", ctypes.c_int32)]


class Plain:
    value: int


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (bool, Kind.BOOL),
        (int, Kind.INT),
        (float, Kind.FLOAT64),
        (complex, Kind.COMPLEX128),
        (str, Kind.STRING),
        (bytes, Kind.STRING),
        (Int8, Kind.INT8),
        (Float32, Kind.FLOAT32),
        (UnsafePointer, Kind.UNSAFE_POINTER),
        (Annotated[list[int], "docs only"], Kind.SLICE),
        (ctypes.c_bool, Kind.BOOL),
        (ctypes.c_int8, Kind.INT8),
        (ctypes.c_int16, Kind.INT16),
        (ctypes.c_int32, Kind.INT32),
        (ctypes.c_int64, Kind.INT64),
        (ctypes.c_uint8, Kind.UINT8),
        (ctypes.c_uint16, Kind.UINT16),
        (ctypes.c_uint32, Kind.UINT32),
        (ctypes.c_uint64, Kind.UINT64),
        (ctypes.c_float, Kind.FLOAT32),
        (ctypes.c_double, Kind.FLOAT64),
        (ctypes.c_char, Kind.STRING),
        (ctypes.c_wchar, Kind.STRING),
        (ctypes.c_char_p, Kind.STRING),
        (ctypes.c_void_p, Kind.UNSAFE_POINTER),
        (ctypes.py_object, Kind.INTERFACE),
        (ctypes.CFUNCTYPE(ctypes.c_int, ctypes.c_int), Kind.FUNC),
        (Callable[[int], int], Kind.FUNC),
        (typing.Callable, Kind.FUNC),
        (types.FunctionType, Kind.FUNC),
        (int | None, Kind.POINTER),
        (Optional[Point], Kind.POINTER),  # noqa: UP007
        (ctypes.POINTER(ctypes.c_int), Kind.POINTER),
        (int | str, Kind.INTERFACE),
        (int | str | None, Kind.INTERFACE),
        (ctypes.c_int * 4, Kind.ARRAY),
        (tuple[int, int, int], Kind.ARRAY),
        (tuple[()], Kind.ARRAY),
        (tuple[int, str], Kind.INTERFACE),
        (tuple[int, ...], Kind.SLICE),
        (list[int], Kind.SLICE),
        (set, Kind.SLICE),
        (frozenset[str], Kind.SLICE),
        (bytearray, Kind.SLICE),
        (collections.deque, Kind.SLICE),
        (dict[str, int], Kind.MAP),
        (collections.OrderedDict, Kind.MAP),
        (queue.Queue[int], Kind.CHAN),
        (asyncio.Queue, Kind.CHAN),
        (Point, Kind.STRUCT),
        (Pair, Kind.STRUCT),
        (Settings, Kind.STRUCT),
        (CPoint, Kind.STRUCT),
        (datetime.datetime, Kind.STRUCT),
        (datetime.timedelta, Kind.STRUCT),
        (Any, Kind.INTERFACE),
        (object, Kind.INTERFACE),
        (Plain, Kind.INTERFACE),
        ("Undefined", Kind.INTERFACE),
    ],
    ids=repr,
)
def test_kind_of(tp, expected):
    """Type handles map to the kind their values have."""
    assert kind_of(tp) is expected


def test_is_record_rejects_non_records():
    """Containers, scalars and plain classes have no introspectable fields."""
    assert is_record(Point)
    assert not is_record(int)
    assert not is_record(list[Point])
    assert not is_record(Plain)


def test_pointer_elem_and_unwrap_pointer():
    """Nullable references unwrap to the type they refer to."""
    assert pointer_elem(Point | None) is Point
    assert pointer_elem(ctypes.POINTER(CPoint)) is CPoint
    assert unwrap_pointer(ctypes.POINTER(ctypes.POINTER(CPoint))) is CPoint
    assert unwrap_pointer(Point) is Point
    assert unwrap_pointer(Annotated[Point, "doc"]) is Point
    assert unwrap_pointer(Optional[Annotated[Point, "doc"]]) is Point  # noqa: UP007


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (Coord, True),
        (Pair, True),
        (CPoint, True),
        (FrozenSettings, True),
        (datetime.datetime, True),
        (Annotated[Coord, "doc"], True),
        (Point, False),
        (Segment, False),
        (Settings, False),
        (int, False),
        (Plain, False),
    ],
)
def test_is_value_record(tp, expected):
    """Only records that cannot change through a field holding them are value records."""
    assert is_value_record(tp) is expected


def test_pointer_elem_rejects_non_pointers():
    with pytest.raises(TypeError, match="not a pointer type"):
        pointer_elem(list[int])


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (ctypes.c_int16 * 3, (3, ctypes.c_int16)),
        (ctypes.c_int16 * 0, (0, ctypes.c_int16)),
        (tuple[Point, Point], (2, Point)),
        (tuple[()], (0, Any)),
    ],
    ids=["ctypes", "ctypes-empty", "tuple", "tuple-empty"],
)
def test_array_info(tp, expected):
    assert array_info(tp) == expected


def test_array_info_rejects_variable_length():
    with pytest.raises(TypeError, match="not a fixed-size array"):
        array_info(tuple[int, ...])


def test_dataclass_fields_in_declaration_order():
    """Fields keep declaration order, resolved annotations and privacy flag."""
    fields = struct_fields(Segment)

    assert [f.name for f in fields] == ["start", "end", "_label"]
    assert [f.index for f in fields] == [0, 1, 2]
    assert fields[0].type is Point
    assert all(f.offset is None for f in fields)
    assert [f.exported for f in fields] == [True, True, False]


def test_unresolvable_annotations_are_kept_raw():
    """A forward reference that cannot be resolved leaves the raw annotation."""
    fields = struct_fields(Haunted)

    assert fields[0].type is int
    assert fields[1].type == "Undefined"
    assert kind_of(fields[1].type) is Kind.INTERFACE


def test_namedtuple_and_pydantic_fields():
    assert [(f.name, f.type) for f in struct_fields(Pair)] == [("left", int), ("right", list[int])]
    assert [(f.name, f.type) for f in struct_fields(Settings)] == [
        ("retries", int),
        ("hosts", list[str]),
    ]


def test_ctypes_fields_report_byte_offsets():
    """ctypes structures have a fixed layout; offsets come from the field descriptors."""
    fields = struct_fields(CPoint)

    assert [f.name for f in fields] == ["x", "y", "_tag"]
    assert [f.offset for f in fields] == [CPoint.x.offset, CPoint.y.offset, CPoint._tag.offset]
    assert fields[0].offset == 0
    assert fields[1].offset == 4


def test_ctypes_subclass_fields_follow_base_fields():
    fields = struct_fields(CPoint3)

    assert [f.name for f in fields] == ["x", "y", "_tag", "z"]
    assert fields[3].index == 3
    assert fields[3].offset == CPoint3.z.offset


def test_datetime_layout_exposes_tzinfo_reference():
    """datetime refers to a shared tzinfo, which introspection reports as a pointer."""
    fields = {f.name: f for f in struct_fields(datetime.datetime)}

    assert kind_of(fields["tzinfo"].type) is Kind.POINTER
    assert kind_of(fields["year"].type) is Kind.INT


def test_struct_fields_rejects_non_records():
    with pytest.raises(TypeError, match="not a record type"):
        struct_fields(dict[str, int])

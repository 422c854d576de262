"""Kind model: the closed set of value kinds the classifier understands.

A kind is the shape of a value as far as copying is concerned. Scalar kinds
never alias external mutable state and can be copied by assignment; every
other kind needs further analysis.
"""

from __future__ import annotations

from enum import Enum, auto


class Kind(Enum):
    """Kind of a type handle, independent of the concrete Python type."""

    INVALID = auto()
    BOOL = auto()
    INT = auto()  # Python int, no fixed width
    INT8 = auto()
    INT16 = auto()
    INT32 = auto()
    INT64 = auto()
    UINT = auto()  # platform width
    UINT8 = auto()
    UINT16 = auto()
    UINT32 = auto()
    UINT64 = auto()
    UINTPTR = auto()
    FLOAT32 = auto()
    FLOAT64 = auto()
    COMPLEX64 = auto()
    COMPLEX128 = auto()
    ARRAY = auto()
    CHAN = auto()
    FUNC = auto()
    INTERFACE = auto()
    MAP = auto()
    POINTER = auto()
    SLICE = auto()
    STRING = auto()
    STRUCT = auto()
    UNSAFE_POINTER = auto()


def is_opaque_kind(kind: Kind) -> bool:
    """Check whether values of a kind are self-contained leaves.

    Opaque kinds never alias external mutable state, so a field of such a kind
    is copied by plain assignment and never recursed into.

    Args:
        kind: Kind to check.

    Returns:
        True for booleans, numbers, strings, callables and raw addresses.
        False for arrays, channels, interfaces, maps, pointers, slices,
        structs and invalid kinds.
    """
    match kind:
        case (
            Kind.BOOL
            | Kind.INT
            | Kind.INT8
            | Kind.INT16
            | Kind.INT32
            | Kind.INT64
            | Kind.UINT
            | Kind.UINT8
            | Kind.UINT16
            | Kind.UINT32
            | Kind.UINT64
            | Kind.UINTPTR
            | Kind.FLOAT32
            | Kind.FLOAT64
            | Kind.COMPLEX64
            | Kind.COMPLEX128
            | Kind.STRING
            | Kind.FUNC
            | Kind.UNSAFE_POINTER
        ):
            return True
        case (
            Kind.ARRAY
            | Kind.CHAN
            | Kind.INTERFACE
            | Kind.MAP
            | Kind.POINTER
            | Kind.SLICE
            | Kind.STRUCT
            | Kind.INVALID
        ):
            return False

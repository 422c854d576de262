"""Copying scalar values out of private fields.

A deep-copy walker reads scalar fields by value. Values read from private
fields cannot be handed out as they are, so `copy_scalar_value` rebuilds an
equal value of the same kind that carries no access restriction.

Usage:
    src = field_value(record, index)
    value = copy_scalar_value(src).interface()
"""

from __future__ import annotations

import ctypes
from typing import Any

from clonekit.core.kind import Kind
from clonekit.core.typeinfo.core import CFUNC_POINTER_TYPE
from clonekit.core.value.models import FieldValue


class CloneInvariantError(RuntimeError):
    """Raised when a value of a non-scalar kind reaches the scalar extractor.

    The classifier only leaves scalar fields to be copied by value, so this
    always points at a bug in clonekit. It is never caught inside the package.
    """

    pass


class _Sentinel:
    def method(self) -> None:
        pass


# Address every bound method reports, taken once from a known bound method.
_METHOD_SENTINEL_ADDRESS = FieldValue.of(_Sentinel().method).pointer()


def _rebuild(src: FieldValue, value: Any) -> FieldValue:
    return FieldValue(type=src.type, kind=src.kind, raw=value)


def _callable_at(fn: Any, address: int) -> Any:
    """Build a callable pointing at the same code address as fn."""
    if isinstance(fn, CFUNC_POINTER_TYPE):
        return type(fn)(address)
    # Python callables are shared as they are.
    return fn


def _copy_func(src: FieldValue) -> FieldValue:
    if src.is_nil():
        return _rebuild(src, None)

    address = src.pointer()

    # Bound methods are dropped: the address names neither function nor receiver.
    if address == _METHOD_SENTINEL_ADDRESS:
        return _rebuild(src, None)

    return _rebuild(src, _callable_at(src.raw, address))


def copy_scalar_value(src: FieldValue) -> FieldValue:
    """Return a freely readable copy of a scalar value.

    Readable values are returned unchanged. Values read from private fields
    are rebuilt from their stored content, one rule per kind: integers are
    wrapped to their declared width, 32-bit floats and complex parts are
    rounded to single precision. ctypes function pointers are rebuilt from
    their code address and Python functions are returned as they are. Bound
    methods come back as None since their address is shared by every bound
    method.

    Args:
        src: Value of a scalar kind.

    Returns:
        FieldValue of the same type and kind whose `interface()` succeeds.

    Raises:
        CloneInvariantError: If src is private and not of a scalar kind.
    """
    if src.can_interface():
        return src

    match src.kind:
        case Kind.BOOL:
            return _rebuild(src, src.as_bool())

        case Kind.INT:
            return _rebuild(src, src.as_int())
        case Kind.INT8:
            return _rebuild(src, ctypes.c_int8(src.as_int()).value)
        case Kind.INT16:
            return _rebuild(src, ctypes.c_int16(src.as_int()).value)
        case Kind.INT32:
            return _rebuild(src, ctypes.c_int32(src.as_int()).value)
        case Kind.INT64:
            return _rebuild(src, ctypes.c_int64(src.as_int()).value)

        case Kind.UINT | Kind.UINTPTR:
            return _rebuild(src, ctypes.c_size_t(src.as_uint()).value)
        case Kind.UINT8:
            return _rebuild(src, ctypes.c_uint8(src.as_uint()).value)
        case Kind.UINT16:
            return _rebuild(src, ctypes.c_uint16(src.as_uint()).value)
        case Kind.UINT32:
            return _rebuild(src, ctypes.c_uint32(src.as_uint()).value)
        case Kind.UINT64:
            return _rebuild(src, ctypes.c_uint64(src.as_uint()).value)

        case Kind.FLOAT32:
            return _rebuild(src, ctypes.c_float(src.as_float()).value)
        case Kind.FLOAT64:
            return _rebuild(src, src.as_float())

        case Kind.COMPLEX64:
            c = src.as_complex()
            return _rebuild(src, complex(ctypes.c_float(c.real).value, ctypes.c_float(c.imag).value))
        case Kind.COMPLEX128:
            return _rebuild(src, src.as_complex())

        case Kind.STRING:
            return _rebuild(src, src.as_string())
        case Kind.FUNC:
            return _copy_func(src)
        case Kind.UNSAFE_POINTER:
            return _rebuild(src, src.pointer() or None)

    raise CloneInvariantError(
        f"clonekit: <bug> unexpected kind {src.kind.name} of private field {src.name!r} "
        f"declared as {src.type!r}"
    )

"""Reflected values: a field value together with its declared type and kind.

A FieldValue read from a private field cannot be handed out through
`interface()`. Its kind-specific accessors still read the stored object, which
is what the extractor in `clonekit.core.value.operations` relies on to build
an unrestricted copy.
"""

from __future__ import annotations

import ctypes
import types
from dataclasses import dataclass
from typing import Any

from clonekit.core.kind import Kind
from clonekit.core.typeinfo.core import CFUNC_POINTER_TYPE, kind_of

_INT_KINDS = frozenset({Kind.INT, Kind.INT8, Kind.INT16, Kind.INT32, Kind.INT64})
_UINT_KINDS = frozenset(
    {Kind.UINT, Kind.UINT8, Kind.UINT16, Kind.UINT32, Kind.UINT64, Kind.UINTPTR}
)
_FLOAT_KINDS = frozenset({Kind.FLOAT32, Kind.FLOAT64})
_COMPLEX_KINDS = frozenset({Kind.COMPLEX64, Kind.COMPLEX128})
_NILABLE_KINDS = frozenset(
    {
        Kind.CHAN,
        Kind.FUNC,
        Kind.INTERFACE,
        Kind.MAP,
        Kind.POINTER,
        Kind.SLICE,
        Kind.UNSAFE_POINTER,
    }
)
_ADDRESS_KINDS = frozenset(
    {Kind.CHAN, Kind.FUNC, Kind.MAP, Kind.POINTER, Kind.SLICE, Kind.UNSAFE_POINTER}
)

# Address reported for every bound method, whatever its function and receiver.
# The marker stays alive, so no other object can share its id.
_METHOD_VALUE_MARKER = object()
_METHOD_VALUE_ADDRESS = id(_METHOD_VALUE_MARKER)


class UnexportedFieldError(AttributeError):
    """Raised when a private field value is read through `interface()`."""

    pass


class ValueKindError(TypeError):
    """Raised when a FieldValue accessor does not serve the value's kind."""

    pass


def _is_bound_method(fn: Any) -> bool:
    if isinstance(fn, (types.MethodType, types.MethodWrapperType)):
        return True
    if isinstance(fn, types.BuiltinMethodType):
        owner = fn.__self__
        return owner is not None and not isinstance(owner, types.ModuleType)
    return False


def code_address(fn: Any) -> int:
    """Report the code address of a callable.

    ctypes function pointers report their C entry point, other callables the
    address of the callable object. Bound methods all report one shared
    address, owned by a private marker object: the receiver is not part of a
    code address, so a bound method cannot be told apart from any other by
    its address.

    Args:
        fn: Callable, or None.

    Returns:
        Address as an integer, 0 for None and null function pointers.
    """
    if fn is None:
        return 0
    if isinstance(fn, CFUNC_POINTER_TYPE):
        return ctypes.cast(fn, ctypes.c_void_p).value or 0
    if _is_bound_method(fn):
        return _METHOD_VALUE_ADDRESS
    return id(fn)


def _zero_for(tp: Any, kind: Kind) -> Any:
    match kind:
        case Kind.BOOL:
            return False
        case k if k in _INT_KINDS or k in _UINT_KINDS:
            return 0
        case k if k in _FLOAT_KINDS:
            return 0.0
        case k if k in _COMPLEX_KINDS:
            return 0j
        case Kind.STRING:
            return b"" if tp in (bytes, ctypes.c_char, ctypes.c_char_p) else ""
        case _:
            return None


@dataclass(frozen=True, slots=True)
class FieldValue:
    """A reflected value: declared type, kind and the stored object.

    Attributes:
        type: Declared type handle of the value.
        kind: Kind of `type`.
        raw: Stored object. Reading it directly bypasses the readability
            check; use `interface()` or the kind accessors instead.
        readable: False for values read from private fields.
        name: Field name the value was read from, if any.
    """

    type: Any
    kind: Kind
    raw: Any = None
    readable: bool = True
    name: str | None = None

    @classmethod
    def of(cls, value: Any, tp: Any = None) -> FieldValue:
        """Wrap a value, declared as `tp` or as its own class."""
        tp = type(value) if tp is None else tp
        return cls(type=tp, kind=kind_of(tp), raw=value)

    @classmethod
    def zero(cls, tp: Any) -> FieldValue:
        """Zero value of a type: False, 0, 0.0, 0j, an empty string or None."""
        kind = kind_of(tp)
        return cls(type=tp, kind=kind, raw=_zero_for(tp, kind))

    def can_interface(self) -> bool:
        """Check whether `interface()` may hand out the stored object."""
        return self.readable

    def interface(self) -> Any:
        """Return the stored object.

        Raises:
            UnexportedFieldError: If the value was read from a private field.
        """
        if not self.readable:
            raise UnexportedFieldError(
                f"cannot return value obtained from private field {self.name!r}"
            )
        return self.raw

    def _require(self, kinds: frozenset[Kind], accessor: str) -> None:
        if self.kind not in kinds:
            raise ValueKindError(f"FieldValue.{accessor} called on {self.kind.name} value")

    def as_bool(self) -> bool:
        self._require(frozenset({Kind.BOOL}), "as_bool")
        return bool(self.raw)

    def as_int(self) -> int:
        self._require(_INT_KINDS, "as_int")
        return int(self.raw)

    def as_uint(self) -> int:
        self._require(_UINT_KINDS, "as_uint")
        return int(self.raw)

    def as_float(self) -> float:
        self._require(_FLOAT_KINDS, "as_float")
        return float(self.raw)

    def as_complex(self) -> complex:
        self._require(_COMPLEX_KINDS, "as_complex")
        return complex(self.raw)

    def as_string(self) -> str | bytes:
        """Return string content. A null `c_char_p` reads as an empty string."""
        self._require(frozenset({Kind.STRING}), "as_string")
        if self.raw is None:
            return _zero_for(self.type, Kind.STRING)  # type: ignore[no-any-return]
        return self.raw  # type: ignore[no-any-return]

    def pointer(self) -> int:
        """Return the address held by a reference-like value.

        Callables report their code address (see `code_address`), raw
        addresses their integer value, other references the object address.
        """
        self._require(_ADDRESS_KINDS, "pointer")
        if self.raw is None:
            return 0
        if self.kind is Kind.FUNC:
            return code_address(self.raw)
        if self.kind is Kind.UNSAFE_POINTER:
            return int(self.raw)
        return id(self.raw)

    def is_nil(self) -> bool:
        """Check whether a reference-like value is None or a null function pointer."""
        self._require(_NILABLE_KINDS, "is_nil")
        if isinstance(self.raw, CFUNC_POINTER_TYPE):
            return not self.raw
        return self.raw is None

"""Fixed-width scalar annotations.

Python numbers have no declared width. These aliases attach a `Kind` to a
field annotation so records can describe their scalars precisely:

    @dataclass
    class Sample:
        channel: Uint8
        level: Float32
"""

from typing import Annotated

from clonekit.core.kind import Kind

Int8 = Annotated[int, Kind.INT8]
Int16 = Annotated[int, Kind.INT16]
Int32 = Annotated[int, Kind.INT32]
Int64 = Annotated[int, Kind.INT64]

Uint = Annotated[int, Kind.UINT]
"""Unsigned integer of platform width (the size of a C `size_t`)."""

Uint8 = Annotated[int, Kind.UINT8]
Uint16 = Annotated[int, Kind.UINT16]
Uint32 = Annotated[int, Kind.UINT32]
Uint64 = Annotated[int, Kind.UINT64]

Uintptr = Annotated[int, Kind.UINTPTR]
"""Integer large enough to hold an address. Not followed when copying."""

Float32 = Annotated[float, Kind.FLOAT32]
Float64 = Annotated[float, Kind.FLOAT64]
Complex64 = Annotated[complex, Kind.COMPLEX64]
Complex128 = Annotated[complex, Kind.COMPLEX128]

UnsafePointer = Annotated[int | None, Kind.UNSAFE_POINTER]
"""Raw untyped address, or None for a null address."""

"""Checked byte arithmetic.

Sizes are unsigned 64-bit quantities. Python integers never wrap, so every
operation here checks its operands against ``UINT64_MAX`` explicitly and
raises :class:`PreconditionViolation` instead of producing a value a 64-bit
filesystem API could not represent.
"""
from __future__ import annotations

import enum

from .errors import require

UINT64_MAX = 2**64 - 1


class KiloByte(enum.IntEnum):
    BINARY = 1024
    DECIMAL = 1000


class MegaByte(enum.IntEnum):
    BINARY = 1024**2
    DECIMAL = 1000**2


class GigaByte(enum.IntEnum):
    BINARY = 1024**3
    DECIMAL = 1000**3


def _scale(size: int, factor: int) -> int:
    require(isinstance(size, int), f"size must be an integer, got {size!r}")
    require(0 <= size <= UINT64_MAX // factor, f"{size} units of {factor} bytes do not fit in 64 bits")
    return size * factor


def kb(size: int, unit: KiloByte = KiloByte.BINARY) -> int:
    """Return the number of bytes in ``size`` kilobytes."""
    return _scale(size, int(unit))


def mb(size: int, unit: MegaByte = MegaByte.BINARY) -> int:
    """Return the number of bytes in ``size`` megabytes."""
    return _scale(size, int(unit))


def gb(size: int, unit: GigaByte = GigaByte.BINARY) -> int:
    """Return the number of bytes in ``size`` gigabytes."""
    return _scale(size, int(unit))


def checked_add(*values: int) -> int:
    """Sum ``values`` as unsigned 64-bit integers, refusing to overflow."""
    total = 0
    for value in values:
        require(value >= 0, f"negative size {value}")
        require(value <= UINT64_MAX - total, "size sum overflows 64 bits")
        total += value
    return total


__all__ = [
    "GigaByte",
    "KiloByte",
    "MegaByte",
    "UINT64_MAX",
    "checked_add",
    "gb",
    "kb",
    "mb",
]

"""
physq.errors
============

Exception hierarchy for the quantity engine.

Every failure is raised synchronously to the caller; nothing here is
retryable. Each class also derives from the built-in exception that
describes the situation (``TypeError`` for incompatible dimensions,
``ValueError`` for everything else), so code that catches built-ins keeps
working.
"""

from __future__ import annotations


class PhysqError(Exception):
    """Root of all errors raised by physq."""


# --- Dimension mismatch -------------------------------------------------------

class IncompatibleUnitsError(PhysqError, TypeError):
    """Operands (or a conversion target) have different dimensions."""


# --- Affine (offset) scales ---------------------------------------------------

class InvalidOffsetOperationError(PhysqError, ValueError):
    """An operation that is undefined for a quantity with a zero offset."""


class OffsetMultiplicationError(InvalidOffsetOperationError):
    """Multiplication, division or inversion involving an offset quantity."""


class CompoundOffsetUnitError(InvalidOffsetOperationError):
    """An offset unit was combined with prefixes, powers or other units."""


# --- Power / root domain ------------------------------------------------------

class FractionalPowerError(PhysqError, ValueError):
    """A power or root argument is not an acceptable integer."""


class FractionalDimensionError(PhysqError, ValueError):
    """A root would leave a non-integer dimensional exponent."""


class NegativeMagnitudeRootError(PhysqError, ValueError):
    """A root was requested for a negative magnitude."""


# --- Unit string parsing ------------------------------------------------------

class UnitStringError(PhysqError, ValueError):
    """Base class for unit string parsing failures."""


class UnknownUnitError(UnitStringError):
    """A unit symbol does not resolve against the registry."""


class UnknownPrefixError(UnitStringError):
    """A bracketed prefix does not resolve against the registry."""


class MalformedUnitStringError(UnitStringError):
    """The unit string does not follow the unit syntax."""


class InvalidPowerError(UnitStringError):
    """A ``^power`` suffix is not a non-zero signed integer."""


# --- Registry / representation / broadcasting --------------------------------

class UnitListInsufficientError(PhysqError, ValueError):
    """The candidate unit list cannot span the quantity's dimensions."""


class DuplicateUnitError(PhysqError, ValueError):
    """A symbol is already present in the (append-only) registry."""


class ArrayLengthMismatchError(PhysqError, ValueError):
    """Array operands have incompatible lengths."""


__all__ = [
    "PhysqError",
    "IncompatibleUnitsError",
    "InvalidOffsetOperationError",
    "OffsetMultiplicationError",
    "CompoundOffsetUnitError",
    "FractionalPowerError",
    "FractionalDimensionError",
    "NegativeMagnitudeRootError",
    "UnitStringError",
    "UnknownUnitError",
    "UnknownPrefixError",
    "MalformedUnitStringError",
    "InvalidPowerError",
    "UnitListInsufficientError",
    "DuplicateUnitError",
    "ArrayLengthMismatchError",
]

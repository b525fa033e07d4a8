"""
physq.core.quantity
===================

Defines the `Quantity` class: a magnitude (scalar or array) together with a
dimension vector and an affine offset.

The system supports:
- Dimensionally checked addition, subtraction and comparison.
- Multiplication, division, integer powers and integer roots, which combine
  the dimension vectors.
- Affine ("zero offset") scales such as degC or gauge pressure, whose use is
  restricted to the operations that are physically meaningful for them.
- Conversion to any compatible unit string and best-fit rendering in a
  supplied unit list (SI, CGS, US customary).

Magnitudes and offsets are stored in coherent SI units: ``quantity(1, "ft")``
has magnitude 0.3048 and dimensions ``[L^1]``. Quantities are immutable;
every operation returns a new instance.
"""

from __future__ import annotations

import operator
from numbers import Integral
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

import numpy as np

from physq.core.dimensions import DIM_0, Dimension, DimLike
from physq.core.utils import (
    Magnitude,
    MagnitudeLike,
    any_negative,
    as_magnitude,
    broadcast,
    check_lengths,
    elementwise,
    format_magnitude,
    is_array,
    ones_like,
)
from physq.errors import (
    ArrayLengthMismatchError,
    FractionalPowerError,
    IncompatibleUnitsError,
    InvalidOffsetOperationError,
    NegativeMagnitudeRootError,
    OffsetMultiplicationError,
)

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from physq.units.registry import UnitsRegistry

Operand = Union["Quantity", MagnitudeLike]
Comparison = Union[int, np.ndarray]
Predicate = Union[bool, np.ndarray]


def _registry(reg: "Optional[UnitsRegistry]") -> "UnitsRegistry":
    if reg is None:
        from physq.units.registry import DEFAULT_REGISTRY  # local import avoids a cycle
        return DEFAULT_REGISTRY
    return reg


def _parse(unit_string: str, reg: "Optional[UnitsRegistry]") -> "Quantity":
    from physq.units.parser import parse_unit_expr

    return parse_unit_expr(unit_string, _registry(reg))


def _integer_power(n: Any) -> int:
    if isinstance(n, bool):
        raise FractionalPowerError("Quantities cannot be raised to a bool power")
    if isinstance(n, Integral):
        return int(n)
    if isinstance(n, float) and n.is_integer():
        return int(n)
    raise FractionalPowerError(
        f"Quantities don't support fractional or non-numeric powers, got {n!r}"
    )


class Quantity:
    """
    A physical quantity.

    Attributes
    ----------
    magnitude : float or numpy.ndarray
        Value in the coherent SI unit of `dimensions`. A read-only 1-D array
        for array quantities.
    dimensions : Dimension
        Exponents over (mass, length, time, temperature, current, substance,
        luminosity, information, rotation).
    offset : float
        Zero-point shift relative to the coherent unit (273.15 for degC).
        Only meaningful for single-dimension "degree" style units.
    """
    __slots__ = ("_magnitude", "_dimensions", "_offset")

    # Make numpy defer to our reflected operators (ndarray * Quantity).
    __array_ufunc__ = None

    def __init__(
        self,
        magnitude: MagnitudeLike = 1.0,
        dimensions: DimLike = DIM_0,
        offset: float = 0.0,
    ):
        object.__setattr__(self, "_magnitude", as_magnitude(magnitude))
        object.__setattr__(self, "_dimensions", Dimension(dimensions))
        object.__setattr__(self, "_offset", float(offset))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Quantity objects are immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Quantity objects are immutable")

    # --- accessors ---
    @property
    def magnitude(self) -> Magnitude:
        return self._magnitude

    @property
    def dimensions(self) -> Dimension:
        return self._dimensions

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def dimensionality(self) -> int:
        return self._dimensions.dimensionality

    @property
    def is_array(self) -> bool:
        return is_array(self._magnitude)

    @property
    def is_dimensionless(self) -> bool:
        return self._dimensions.is_dimensionless

    # --- internal helpers ---
    @staticmethod
    def _coerce(other: Operand) -> "Quantity":
        """Plain numbers (or sequences of numbers) become dimensionless quantities."""
        if isinstance(other, Quantity):
            return other
        return Quantity(other)

    def _require_same_dimensions(self, other: "Quantity", action: str) -> None:
        if self._dimensions != other._dimensions:
            raise IncompatibleUnitsError(
                f"Cannot {action} quantities with unlike dimensions: "
                f"{self._dimensions!r} and {other._dimensions!r}"
            )

    def _effective(self) -> Magnitude:
        """Magnitude measured from the coherent unit's true zero."""
        return broadcast(operator.add, self._magnitude, self._offset)

    # --- dimensional checks ---
    def same_dimensions(self, other: Operand) -> bool:
        return self._dimensions == self._coerce(other)._dimensions

    # --- arithmetic ---
    def add(self, other: Operand) -> "Quantity":
        """Add `other` as a delta; the result keeps this quantity's offset."""
        other = self._coerce(other)
        self._require_same_dimensions(other, "add")
        if other._offset != 0:
            raise InvalidOffsetOperationError(
                "A unit with a zero offset (such as degC or degF) cannot be added "
                "to another unit; use a delta unit (deltaC, deltaF) instead"
            )
        mag = broadcast(operator.add, self._magnitude, other._magnitude)
        return Quantity(mag, self._dimensions, self._offset)

    def subtract(self, other: Operand) -> "Quantity":
        """
        Subtract `other`. Subtracting an offset quantity yields a delta (offset
        0); subtracting a delta keeps this quantity's offset.
        """
        other = self._coerce(other)
        self._require_same_dimensions(other, "subtract")
        mag = broadcast(operator.sub, self._effective(), other._effective())
        if other._offset != 0:
            new_offset = 0.0
        else:
            new_offset = self._offset
            mag = broadcast(operator.sub, mag, new_offset)
        return Quantity(mag, self._dimensions, new_offset)

    def multiply(self, other: Operand) -> "Quantity":
        other = self._coerce(other)
        if self._offset != 0 or other._offset != 0:
            raise OffsetMultiplicationError(
                "Cannot multiply quantities with an offset; for temperatures "
                "use 'deltaC' or 'deltaF' instead"
            )
        mag = broadcast(operator.mul, self._magnitude, other._magnitude)
        return Quantity(mag, self._dimensions * other._dimensions)

    def invert(self) -> "Quantity":
        """Return 1 / self."""
        if self._offset != 0:
            raise OffsetMultiplicationError(
                "Cannot invert a quantity with an offset; for temperatures "
                "use 'deltaC' or 'deltaF' instead"
            )
        mag = elementwise(np.reciprocal, self._magnitude)
        return Quantity(mag, -self._dimensions)

    def divide(self, other: Operand) -> "Quantity":
        other = self._coerce(other)
        if self._offset != 0 or other._offset != 0:
            raise OffsetMultiplicationError(
                "Cannot divide quantities with an offset; for temperatures "
                "use 'deltaC' or 'deltaF' instead"
            )
        return self.multiply(other.invert())

    def power(self, n: int) -> "Quantity":
        n = _integer_power(n)
        if self._offset != 0:
            if n > 1:
                raise InvalidOffsetOperationError(
                    "Cannot raise units with zero offsets to powers > 1"
                )
            if n < 0:
                raise OffsetMultiplicationError(
                    "Cannot raise units with zero offsets to negative powers"
                )
        if n == 0:
            return Quantity(ones_like(self._magnitude))
        if n == 1:
            return Quantity(self._magnitude, self._dimensions, self._offset)
        mag = elementwise(lambda m: m ** n, self._magnitude)
        return Quantity(mag, self._dimensions ** n)

    def root(self, n: int) -> "Quantity":
        """Return the n-th root; every dimension exponent must divide by n."""
        if isinstance(n, bool) or not isinstance(n, Integral) or n < 1:
            raise FractionalPowerError(
                f"Root may only be a positive integer greater than or equal to 1, got {n!r}"
            )
        n = int(n)
        if self._offset != 0 and n > 1:
            raise InvalidOffsetOperationError("Cannot take root of units with zero offset")
        if any_negative(self._magnitude):
            raise NegativeMagnitudeRootError(
                "Root function not supported for negative magnitudes"
            )
        dims = self._dimensions.root(n)
        if n == 1:
            return Quantity(self._magnitude, dims, self._offset)
        mag = elementwise(lambda m: m ** (1.0 / n), self._magnitude)
        return Quantity(mag, dims)

    # --- comparison ---
    def _absolute_tolerance(self, tolerance: "Operand | None") -> Magnitude:
        if tolerance is None:
            return 0.0
        if isinstance(tolerance, Quantity):
            if tolerance._dimensions != self._dimensions:
                raise IncompatibleUnitsError(
                    f"Tolerance dimensions {tolerance._dimensions!r} are not "
                    f"compatible with {self._dimensions!r}"
                )
            if tolerance._offset != 0:
                raise InvalidOffsetOperationError(
                    "Absolute tolerance in units with a zero offset is not allowed; "
                    "use a delta unit"
                )
            return tolerance._magnitude
        fraction = as_magnitude(tolerance)
        if self._offset != 0 and np.any(np.asarray(fraction) != 0):
            raise InvalidOffsetOperationError(
                "Fractional tolerances are not allowed for quantities with a "
                "zero offset; use an absolute tolerance instead"
            )
        return broadcast(lambda m, f: abs(m) * f, self._magnitude, fraction)

    def compare(self, other: Operand, tolerance: "Operand | None" = None) -> Comparison:
        """
        Compare with `other`.

        Returns 1 where this quantity is greater, -1 where it is less and 0
        where the two agree within `tolerance`. `tolerance` is either a
        fraction of this quantity's magnitude or an absolute Quantity.
        Array operands give a read-only integer array.
        """
        other = self._coerce(other)
        self._require_same_dimensions(other, "compare")
        tol = self._absolute_tolerance(tolerance)
        diff = broadcast(operator.sub, other._effective(), self._effective())

        if not is_array(diff) and not is_array(tol):
            if diff < -tol:
                return 1
            if diff > tol:
                return -1
            return 0

        check_lengths(diff, tol)
        d, t = np.asarray(diff), np.asarray(tol)
        result = np.where(d < -t, 1, np.where(d > t, -1, 0))
        result.setflags(write=False)
        return result

    def _test(
        self,
        other: Operand,
        tolerance: "Operand | None",
        predicate: Callable[[Any], Any],
    ) -> Predicate:
        result = self.compare(other, tolerance)
        if is_array(result):
            out = predicate(result)
            out.setflags(write=False)
            return out
        return bool(predicate(result))

    def eq(self, other: Operand, tolerance: "Operand | None" = None) -> Predicate:
        return self._test(other, tolerance, lambda c: c == 0)

    def lt(self, other: Operand, tolerance: "Operand | None" = None) -> Predicate:
        return self._test(other, tolerance, lambda c: c < 0)

    def lte(self, other: Operand, tolerance: "Operand | None" = None) -> Predicate:
        return self._test(other, tolerance, lambda c: c <= 0)

    def gt(self, other: Operand, tolerance: "Operand | None" = None) -> Predicate:
        return self._test(other, tolerance, lambda c: c > 0)

    def gte(self, other: Operand, tolerance: "Operand | None" = None) -> Predicate:
        return self._test(other, tolerance, lambda c: c >= 0)

    # --- conversion ---
    def value_in(self, unit_string: str, registry: "Optional[UnitsRegistry]" = None) -> Magnitude:
        """Magnitude of this quantity expressed in `unit_string`."""
        ref = _parse(unit_string, registry)
        if not self.same_dimensions(ref):
            raise IncompatibleUnitsError(
                f"Cannot convert {self._dimensions!r} to '{unit_string}' "
                f"({ref._dimensions!r})"
            )
        shifted = broadcast(operator.sub, self._effective(), ref._offset)
        return broadcast(operator.truediv, shifted, ref._magnitude)

    def with_units(
        self,
        unit_list: Sequence[str],
        registry: "Optional[UnitsRegistry]" = None,
    ) -> tuple[Magnitude, str]:
        """Best-fit rendering in `unit_list`: returns ``(magnitude, unit_string)``."""
        from physq.core.representation import best_fit

        return best_fit(self, unit_list, _registry(registry))

    def in_si(self, registry: "Optional[UnitsRegistry]" = None) -> tuple[Magnitude, str]:
        from physq.core.representation import SI_UNITS

        return self.with_units(SI_UNITS, registry)

    def in_cgs(self, registry: "Optional[UnitsRegistry]" = None) -> tuple[Magnitude, str]:
        from physq.core.representation import CGS_UNITS

        return self.with_units(CGS_UNITS, registry)

    def in_us(self, registry: "Optional[UnitsRegistry]" = None) -> tuple[Magnitude, str]:
        from physq.core.representation import US_UNITS

        return self.with_units(US_UNITS, registry)

    # --- presentation ---
    def to_string(
        self,
        unit: Optional[str] = None,
        registry: "Optional[UnitsRegistry]" = None,
    ) -> str:
        """Render as "<magnitude> <unit>", in `unit` or in SI when omitted."""
        if unit is None:
            value, unit = self.in_si(registry)
        else:
            value = self.value_in(unit, registry)
        text = format_magnitude(value)
        return text if unit == "1" else f"{text} {unit}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        text = f"Quantity({format_magnitude(self._magnitude)}, {self._dimensions!r}"
        if self._offset != 0:
            text += f", offset={self._offset:.15g}"
        return text + ")"

    def __format__(self, spec: str) -> str:
        """
        Format specifiers
        -----------------
        "" or "si"
            Best-fit SI rendering (same as ``str``).
        "cgs", "us"
            Best-fit CGS / US customary rendering.
        anything else
            Treated as a unit string, e.g. ``f"{q:[k]m / hr}"``.
        """
        spec = (spec or "").strip()
        if spec.lower() in ("", "si"):
            return self.to_string()
        if spec.lower() in ("cgs", "us"):
            value, unit = self.in_cgs() if spec.lower() == "cgs" else self.in_us()
            text = format_magnitude(value)
            return text if unit == "1" else f"{text} {unit}"
        return self.to_string(spec)

    # --- operator protocol ---
    def __add__(self, other: Operand) -> "Quantity":
        return self.add(other)

    def __radd__(self, other: Operand) -> "Quantity":
        return self._coerce(other).add(self)

    def __sub__(self, other: Operand) -> "Quantity":
        return self.subtract(other)

    def __rsub__(self, other: Operand) -> "Quantity":
        return self._coerce(other).subtract(self)

    def __mul__(self, other: Operand) -> "Quantity":
        return self.multiply(other)

    def __rmul__(self, other: Operand) -> "Quantity":
        return self._coerce(other).multiply(self)

    def __truediv__(self, other: Operand) -> "Quantity":
        return self.divide(other)

    def __rtruediv__(self, other: Operand) -> "Quantity":
        return self._coerce(other).divide(self)

    def __pow__(self, n: int) -> "Quantity":
        return self.power(n)

    def __neg__(self) -> "Quantity":
        return self.multiply(-1.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        if self._dimensions != other._dimensions:
            return False
        try:
            return bool(np.all(self.eq(other)))
        except ArrayLengthMismatchError:
            return False

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __lt__(self, other: Operand) -> Predicate:
        return self.lt(other)

    def __le__(self, other: Operand) -> Predicate:
        return self.lte(other)

    def __gt__(self, other: Operand) -> Predicate:
        return self.gt(other)

    def __ge__(self, other: Operand) -> Predicate:
        return self.gte(other)


__all__ = ["Quantity"]

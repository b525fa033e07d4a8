# physq.core.dimensions

from __future__ import annotations
from enum import IntEnum
from numbers import Integral
from typing import Any, Iterable, Tuple, TypeAlias, Union

from physq.errors import FractionalDimensionError, FractionalPowerError


class BaseDimension(IntEnum):
    """Index of each base dimension inside a :class:`Dimension`."""

    MASS = 0
    LENGTH = 1
    TIME = 2
    TEMPERATURE = 3
    CURRENT = 4
    SUBSTANCE = 5
    LUMINOSITY = 6
    INFORMATION = 7
    ROTATION = 8


NUM_DIMENSIONS = len(BaseDimension)

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[int, ...]
DimLike = Union["Dimension", DimTuple, Iterable[int]]


def _as_exponent(x: Any) -> int:
    if isinstance(x, bool):
        raise TypeError("Dimension exponents must be integers, got bool")
    if isinstance(x, Integral):
        return int(x)
    if isinstance(x, float) and x.is_integer():
        return int(x)
    raise FractionalDimensionError(
        f"Dimension exponents must be integers, got {x!r}"
    )

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 9-length vector of integer exponents, one per base dimension
    (mass, length, time, temperature, current, substance, luminosity,
    information, rotation).

    Tuple subclass => hashable, comparable, usable as dict keys.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0,) * NUM_DIMENSIONS) -> "Dimension":
        if isinstance(data, Dimension):
            return tuple.__new__(cls, data)

        t = tuple(_as_exponent(x) for x in data)
        if len(t) != NUM_DIMENSIONS:
            raise ValueError(
                f"Dimension must have length {NUM_DIMENSIONS} "
                f"({', '.join(d.name.lower() for d in BaseDimension)})."
            )
        return tuple.__new__(cls, t)

    @classmethod
    def from_mapping(cls, exponents: "dict[str, int]") -> "Dimension":
        """Build from ``{"mass": 1, "length": -1, ...}``; missing names are 0."""
        vec = [0] * NUM_DIMENSIONS
        for name, exp in exponents.items():
            try:
                idx = BaseDimension[name.upper()]
            except KeyError:
                raise ValueError(f"Unknown base dimension {name!r}") from None
            vec[idx] = exp
        return cls(vec)

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension": # type: ignore[override]
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def __truediv__(self, other: DimLike) -> "Dimension":
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def __rtruediv__(self, other: DimLike) -> "Dimension":
        """Handles (tuple / Dimension) by calculating (other / self)."""
        return Dimension(other) / self

    def __pow__(self, n: int, modulo: Any | None = None) -> "Dimension":
        # Python may call __pow__ with a third arg (modulo); reject it
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        if isinstance(n, bool) or not isinstance(n, Integral):
            raise FractionalPowerError(
                f"Dimensions can only be raised to integer powers, got {n!r}"
            )
        return Dimension(e * int(n) for e in self)

    def __neg__(self) -> "Dimension":
        return Dimension(-e for e in self)

    def root(self, n: int) -> "Dimension":
        """Divide every exponent by ``n``; each must divide evenly."""
        if any(e % n for e in self):
            raise FractionalDimensionError(
                f"Root {n} of {self!r} would give a fractional dimension"
            )
        return Dimension(e // n for e in self)

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., (1,2) + MASS)."""
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    @property
    def dimensionality(self) -> int:
        """Total number of base dimensions, i.e. the sum of |exponent|."""
        return sum(abs(x) for x in self)

    def as_mapping(self) -> "dict[str, int]":
        return {d.name.lower(): self[d] for d in BaseDimension if self[d] != 0}

    def __repr__(self) -> str:
        names = ("M", "L", "T", "Θ", "I", "N", "J", "B", "R")

        parts = ""
        for n, v in zip(names, self, strict=True):
            if v != 0:
                parts += f"[{n}^{v}]"

        return parts or "[1]"


def _unit_vector(axis: BaseDimension) -> Dimension:
    vec = [0] * NUM_DIMENSIONS
    vec[axis] = 1
    return Dimension(vec)


# --- Public constants --------------------------------------------------------

DIM_0: Dim       = Dimension()
MASS: Dim        = _unit_vector(BaseDimension.MASS)
LENGTH: Dim      = _unit_vector(BaseDimension.LENGTH)
TIME: Dim        = _unit_vector(BaseDimension.TIME)
TEMPERATURE: Dim = _unit_vector(BaseDimension.TEMPERATURE)
CURRENT: Dim     = _unit_vector(BaseDimension.CURRENT)
SUBSTANCE: Dim   = _unit_vector(BaseDimension.SUBSTANCE)
LUMINOSITY: Dim  = _unit_vector(BaseDimension.LUMINOSITY)
INFORMATION: Dim = _unit_vector(BaseDimension.INFORMATION)
ROTATION: Dim    = _unit_vector(BaseDimension.ROTATION)

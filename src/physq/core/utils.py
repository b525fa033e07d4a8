"""
physq.core.utils
================

Magnitude helpers shared by every quantity operation.

A magnitude is either a plain ``float`` (scalar quantity) or a read-only,
one-dimensional ``numpy.ndarray`` of ``float64`` (array quantity). All binary
arithmetic goes through :func:`broadcast`, which enforces the two
broadcasting rules:

1. equal-length operands combine element-wise;
2. a length-1 operand (scalar or one-element array) combines with every
   element of the other operand.

Any other length mismatch raises :class:`ArrayLengthMismatchError`.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Callable, Sequence, TypeAlias, Union

import numpy as np

from physq.errors import ArrayLengthMismatchError

Magnitude: TypeAlias = Union[float, np.ndarray]
MagnitudeLike: TypeAlias = Union[Real, Sequence[Real], np.ndarray]


def freeze(values: Any) -> np.ndarray:
    """Return a read-only 1-D float64 copy of ``values``."""
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(
            f"Array magnitudes must be one-dimensional, got shape {arr.shape}"
        )
    arr.setflags(write=False)
    return arr


def as_magnitude(value: MagnitudeLike) -> Magnitude:
    """Normalise user input into a scalar ``float`` or a frozen array."""
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return float(value)
        return freeze(value)
    if isinstance(value, (list, tuple)):
        return freeze(value)
    if isinstance(value, bool):
        raise TypeError("A bool is not a valid magnitude")
    if isinstance(value, (Real, np.number)):
        return float(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a magnitude")


def is_array(value: Any) -> bool:
    return isinstance(value, np.ndarray)


def _length(value: Magnitude) -> int:
    return len(value) if isinstance(value, np.ndarray) else 1


def check_lengths(a: Magnitude, b: Magnitude) -> None:
    """Raise unless ``a`` and ``b`` have equal lengths or one has length 1."""
    la, lb = _length(a), _length(b)
    if la != lb and la != 1 and lb != 1:
        raise ArrayLengthMismatchError(
            f"Cannot combine arrays of length {la} and {lb}"
        )


# Division by zero and overflow give IEEE inf/nan for scalars and arrays alike.
_IEEE = dict(divide="ignore", over="ignore", invalid="ignore")


def broadcast(op: Callable[[Any, Any], Any], a: Magnitude, b: Magnitude) -> Magnitude:
    """Apply a binary ``op`` under the scalar/array broadcasting rules."""
    if not is_array(a) and not is_array(b):
        with np.errstate(**_IEEE):
            return float(op(np.float64(a), np.float64(b)))

    check_lengths(a, b)
    with np.errstate(**_IEEE):
        return freeze(op(np.asarray(a), np.asarray(b)))


def elementwise(func: Callable[[Any], Any], a: Magnitude) -> Magnitude:
    """Apply a unary ``func`` keeping the scalar/array tag of ``a``."""
    with np.errstate(**_IEEE):
        if is_array(a):
            return freeze(func(a))
        return float(func(np.float64(a)))


def ones_like(a: Magnitude) -> Magnitude:
    if is_array(a):
        return freeze(np.ones(len(a)))
    return 1.0


def any_negative(a: Magnitude) -> bool:
    if is_array(a):
        return bool(np.any(a < 0))
    return a < 0


def format_magnitude(a: Magnitude) -> str:
    """'%.15g' for scalars, '[1,2,4]' for arrays."""
    if is_array(a):
        return "[" + ",".join(f"{x:.15g}" for x in a) + "]"
    return f"{a:.15g}"

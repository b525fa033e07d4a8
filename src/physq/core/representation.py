"""
physq.core.representation
=========================

Best-fit decomposition of a dimension vector into a compact combination of
units taken from a caller-supplied list.

The search is greedy: at every step each candidate unit is tried with power
-1 and +1, and the one that brings the remaining dimensions closest to
dimensionless (smallest sum of absolute exponents) is accumulated. The first
candidate wins ties, so list order decides between equivalent renderings.

Examples (SI list)::

    1 m^4         -> "m^4"
    1 / (1 N)     -> "1 / N"
    1 kg m / s^2  -> "N"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Sequence, Tuple

from physq.errors import UnitListInsufficientError

if TYPE_CHECKING:
    from physq.core.dimensions import Dimension
    from physq.core.quantity import Quantity
    from physq.core.utils import Magnitude
    from physq.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

SI_UNITS: Tuple[str, ...] = (
    "[k]g", "m", "s", "K", "A", "mol", "cd", "bit", "rad",
    "Hz", "N", "Pa", "J", "W", "C", "V", "F", "ohm", "S",
    "Wb", "T", "H", "lm", "lx", "Bq", "Gy",
)
CGS_UNITS: Tuple[str, ...] = ("g", "[c]m", "s", "deltaC", "dyn", "erg", "Ba", "P", "St")
US_UNITS: Tuple[str, ...] = ("lbm", "ft", "s", "Ra", "gal", "lbf", "BTU", "HP")


def _term(symbol: str, power: int) -> str:
    return symbol if power == 1 else f"{symbol}^{power}"


def render_powers(powers: Dict[str, int]) -> str:
    """Render ``{unit: power}`` as ``"a b^2 / c"``; zero powers are dropped."""
    numerator = [_term(u, p) for u, p in powers.items() if p > 0]
    denominator = [_term(u, -p) for u, p in powers.items() if p < 0]
    if denominator:
        return f"{' '.join(numerator) or '1'} / {' '.join(denominator)}"
    return " ".join(numerator) or "1"


def decompose(
    dims: "Dimension",
    unit_list: Sequence[str],
    reg: "UnitsRegistry",
) -> Dict[str, int]:
    """Greedy search for ``{unit: power}`` whose product has dimensions ``dims``."""
    from physq.units.parser import parse_unit_expr

    candidates = [(unit, parse_unit_expr(unit, reg).dimensions) for unit in unit_list]
    remainder = dims
    distance = remainder.dimensionality
    powers: Dict[str, int] = {}

    while distance > 0:
        best = None
        best_distance = None
        for unit, unit_dims in candidates:
            for sign in (-1, 1):
                trial = remainder / unit_dims ** sign
                trial_distance = trial.dimensionality
                if best_distance is None or trial_distance < best_distance:
                    best, best_distance = (unit, sign, trial), trial_distance

        if best is None or best_distance >= distance:
            raise UnitListInsufficientError(
                f"Cannot represent dimensions {dims!r} with units {list(unit_list)!r}"
            )
        unit, sign, remainder = best
        distance = best_distance
        powers[unit] = powers.get(unit, 0) + sign

    return {u: p for u, p in powers.items() if p != 0}


def best_fit(
    q: "Quantity",
    unit_list: Sequence[str],
    reg: "UnitsRegistry",
) -> "tuple[Magnitude, str]":
    """Express ``q`` in the best combination of ``unit_list``: ``(magnitude, unit_string)``."""
    unit_string = render_powers(decompose(q.dimensions, unit_list, reg))
    logger.debug("best fit for %r in %d units: %r", q.dimensions, len(unit_list), unit_string)
    return q.value_in(unit_string, reg), unit_string


__all__ = [
    "SI_UNITS",
    "CGS_UNITS",
    "US_UNITS",
    "best_fit",
    "decompose",
    "render_powers",
]

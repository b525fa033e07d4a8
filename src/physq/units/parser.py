"""
physq.units.parser
==================

Parser for compound unit strings such as ``"[k]g m^2 / s^3"``.

Syntax::

    expr    := section ['/' section]
    section := term (WHITESPACE term)*
    term    := ['[' prefix ']'] symbol ['^' signed_int]

Parentheses are not allowed anywhere, and at most one ``/`` may appear;
every term after the ``/`` is inverted.

Parsing is split in two stages. ``_compile_unit_expr`` turns the text into a
*plan* (no registry lookups) and is cached by text only. ``_eval_plan``
resolves the plan against the registry given at call time, so the cache is
safe across registries and across later ``define`` calls.
"""

from __future__ import annotations

import logging
import operator
import re
from functools import lru_cache
from typing import TYPE_CHECKING, NamedTuple, Optional, Tuple

from physq.core.quantity import Quantity
from physq.core.utils import MagnitudeLike, as_magnitude, broadcast
from physq.errors import (
    CompoundOffsetUnitError,
    InvalidPowerError,
    MalformedUnitStringError,
    UnknownPrefixError,
    UnknownUnitError,
)

if TYPE_CHECKING:
    from physq.units.registry import UnitEntry, UnitsRegistry

logger = logging.getLogger(__name__)


class Term(NamedTuple):
    prefix: Optional[str]   # explicit "[p]" prefix ("" for "[]"), None when absent
    symbol: str
    power: int


# A plan is one or two sections (numerator, optional denominator) of terms.
Plan = Tuple[Tuple[Term, ...], ...]

_TERM_RE = re.compile(
    r"""
    ^(?:\[(?P<prefix>[^\[\]]*)\])?     # optional [prefix]; "[]" means no prefix
    (?P<symbol>[^\[\]\^]+)             # unit symbol
    (?:\^(?P<power>.*))?$              # optional ^power (validated separately)
    """,
    re.X,
)
_POWER_RE = re.compile(r"[+-]?\d+")


# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _UnitExprParser:
    def __init__(self, text: str):
        self.s = text

    def parse(self) -> Plan:
        if "(" in self.s or ")" in self.s:
            raise MalformedUnitStringError(
                f"Parentheses are not allowed in unit strings: {self.s!r}"
            )
        sections = self.s.split("/")
        if len(sections) > 2:
            raise MalformedUnitStringError(
                f"Cannot parse unit string with 2 or more '/' symbols: {self.s!r}"
            )
        return tuple(self._parse_section(sec) for sec in sections)

    def _parse_section(self, section: str) -> Tuple[Term, ...]:
        tokens = section.split()
        if not tokens:
            raise MalformedUnitStringError(f"Empty unit section in {self.s!r}")
        return tuple(self._parse_term(tok) for tok in tokens)

    def _parse_term(self, token: str) -> Term:
        m = _TERM_RE.match(token)
        if m is None:
            raise MalformedUnitStringError(
                f"Cannot convert {token!r} to a valid unit (in {self.s!r})"
            )
        power_text = m.group("power")
        if power_text is None:
            power = 1
        else:
            if not _POWER_RE.fullmatch(power_text):
                raise InvalidPowerError(
                    f"{power_text!r} is not a valid unit power (in {self.s!r})"
                )
            power = int(power_text)
            if power == 0:
                raise InvalidPowerError(f"Unit power cannot be zero (in {self.s!r})")
        return Term(m.group("prefix"), m.group("symbol"), power)


@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    return _UnitExprParser(expr).parse()


# ---------------- Evaluation of a plan against a given registry ----------------
def _resolve_term(term: Term, reg: "UnitsRegistry", expr: str) -> "tuple[float, UnitEntry]":
    """Return ``(prefix_factor, unit_entry)`` for a term.

    Without an explicit prefix the lookup order is: exact symbol, then a
    1-character prefix split, then a 2-character prefix split. That order
    decides collisions such as "min" (minute) vs "[m]in" (milli-inch).
    """
    if term.prefix is not None:
        factor = reg.lookup_prefix(term.prefix) if term.prefix else 1.0
        if factor is None:
            raise UnknownPrefixError(
                f"{term.prefix!r} is not a valid prefix (in {expr!r})"
            )
        entry = reg.lookup_unit(term.symbol)
        if entry is None:
            raise UnknownUnitError(f"{term.symbol!r} is not a valid unit (in {expr!r})")
        return factor, entry

    entry = reg.lookup_unit(term.symbol)
    if entry is not None:
        return 1.0, entry

    for split in (1, 2):
        if len(term.symbol) <= split:
            break
        factor = reg.lookup_prefix(term.symbol[:split])
        entry = reg.lookup_unit(term.symbol[split:])
        if factor is not None and entry is not None:
            logger.debug("resolved %r as [%s]%s", term.symbol,
                         term.symbol[:split], term.symbol[split:])
            return factor, entry

    raise UnknownUnitError(f"{term.symbol!r} is not a valid unit (in {expr!r})")


def _eval_plan(plan: Plan, reg: "UnitsRegistry", expr: str) -> Quantity:
    single_term = len(plan) == 1 and len(plan[0]) == 1
    result = Quantity(1.0)

    for si, section in enumerate(plan):
        for term in section:
            factor, entry = _resolve_term(term, reg, expr)
            unit_q = Quantity(entry.scale, entry.dims, entry.offset)

            if entry.offset != 0:
                # Only a bare degree-style unit may carry its offset.
                if single_term and factor == 1.0 and term.power == 1:
                    return unit_q
                raise CompoundOffsetUnitError(
                    f"Cannot create compound units from unit '{entry.symbol}' "
                    f"with a zero offset (in {expr!r})"
                )

            if factor != 1.0:
                unit_q = unit_q.multiply(factor)
            if term.power != 1:
                unit_q = unit_q.power(term.power)
            if si == 1:
                unit_q = unit_q.invert()
            result = result.multiply(unit_q)

    return result


# ---------------- Public API ----------------
def parse_unit_expr(expr: Optional[str], reg: "UnitsRegistry") -> Quantity:
    """
    Resolve a unit string like ``"[k]g m^2 / s^3"`` into a Quantity of
    magnitude 1 (in that unit) against the given registry.

    ``None`` or a blank string is the dimensionless unity.
    """
    if expr is None or not expr.strip():
        return Quantity(1.0)
    plan = _compile_unit_expr(expr)
    return _eval_plan(plan, reg, expr)


def quantity(
    magnitude: MagnitudeLike = 1,
    unit_string: Optional[str] = None,
    reg: "Optional[UnitsRegistry]" = None,
) -> Quantity:
    """
    Build a Quantity from a magnitude (number or sequence of numbers) and a
    unit string, e.g. ``quantity(10, "ft")`` or ``quantity([1, 2], "m / s")``.
    """
    if reg is None:
        from physq.units.registry import DEFAULT_REGISTRY
        reg = DEFAULT_REGISTRY

    unit = parse_unit_expr(unit_string, reg)
    # Scale directly rather than through multiply(): the offset must survive.
    scaled = broadcast(operator.mul, as_magnitude(magnitude), unit.magnitude)
    return Quantity(scaled, unit.dimensions, unit.offset)


__all__ = ["Term", "parse_unit_expr", "quantity"]

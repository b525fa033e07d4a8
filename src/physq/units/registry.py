"""
physq.units.registry
====================

An append-only, thread-safe table of unit symbols and prefixes.

Design
------
- Encapsulates the unit table in a `UnitsRegistry` object instead of a
  module-level dict, so tests (and embedders) can build isolated registries.
- Data-driven bootstrap of the default table from `physq.units.definitions`
  and `physq.units.prefixes`.
- Insertion is append-only: units, aliases and prefixes can be added but
  never replaced or removed, so any expression parsed earlier (and any
  quantity built from it) stays valid for the life of the process.
- Lookups implement the contract consumed by the parser:
  `lookup_unit(symbol) -> UnitEntry | None` and
  `lookup_prefix(symbol) -> float | None`.
"""
from __future__ import annotations

import logging
import threading
import unicodedata
from dataclasses import dataclass, replace
from math import isfinite
from typing import TYPE_CHECKING, ClassVar, Dict, Iterable, Mapping, Optional

from physq.core.dimensions import NUM_DIMENSIONS, Dimension
from physq.errors import (
    CompoundOffsetUnitError,
    DuplicateUnitError,
    UnknownUnitError,
)

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from physq.core.quantity import Quantity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UnitEntry:
    """A resolved unit symbol: scale and offset are in coherent SI units."""

    symbol: str
    scale: float
    dims: Dimension
    offset: float = 0.0

    def __post_init__(self) -> None:
        if len(self.dims) != NUM_DIMENSIONS:
            raise ValueError(f"dims must have length {NUM_DIMENSIONS}")
        if not (self.scale > 0 and isfinite(self.scale)):
            raise ValueError(
                f"scale of unit '{self.symbol}' must be a positive, finite number"
            )
        if not isfinite(self.offset):
            raise ValueError(f"offset of unit '{self.symbol}' must be finite")


def normalize_symbol(s: str) -> str:
    """Strip surrounding whitespace and Unicode-normalize to NFC ("µ", "Ω")."""
    if not s:
        return s
    return unicodedata.normalize("NFC", s.strip())


class UnitsRegistry:
    """Thread-safe, append-only registry of units, aliases and prefixes.

    This registry does *not* parse compound expressions (like "m / s^2");
    that is the parser's job (`physq.units.parser`). It only resolves atomic
    symbols and prefixes.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, UnitEntry] = {}
        self._aliases: Dict[str, str] = {}
        self._prefixes: Dict[str, float] = {}

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    # -------------------------- insertion ----------------------------------
    def register(self, entry: UnitEntry) -> None:
        """Insert a unit. Raises `DuplicateUnitError` if the symbol is taken."""
        sym = normalize_symbol(entry.symbol)
        if not sym:
            raise ValueError("Unit symbol must be a non-empty string")
        if entry.symbol != sym:
            entry = replace(entry, symbol=sym)
        # The lock wraps the whole check-and-set operation.
        with self._lock:
            self._check_free(sym)
            self._units[sym] = entry
        logger.debug("registered unit %r (scale=%r, dims=%r, offset=%r)",
                     sym, entry.scale, entry.dims, entry.offset)

    def register_alias(self, alias: str, canonical: str) -> None:
        """Make `alias` resolve to the already-registered `canonical` unit."""
        key = normalize_symbol(alias)
        target = normalize_symbol(canonical)
        with self._lock:
            if target not in self._units:
                raise UnknownUnitError(
                    f"Cannot alias '{alias}' to unknown unit '{canonical}'"
                )
            self._check_free(key)
            self._aliases[key] = target
        logger.debug("registered alias %r -> %r", key, target)

    def register_prefix(self, symbol: str, factor: float) -> None:
        """Insert a prefix multiplier. Prefixes are append-only as well."""
        key = normalize_symbol(symbol)
        if not key:
            raise ValueError("Prefix symbol must be a non-empty string")
        if not (factor > 0 and isfinite(factor)):
            raise ValueError(f"factor of prefix '{symbol}' must be a positive, finite number")
        with self._lock:
            if key in self._prefixes:
                raise DuplicateUnitError(
                    f"Cannot register prefix '{key}': it is already defined"
                )
            self._prefixes[key] = float(factor)

    def define(
        self,
        symbol: str,
        magnitude: "float | int" = 1,
        unit_string: Optional[str] = None,
        offset: "float | int" = 0,
    ) -> UnitEntry:
        """Define `symbol` as `magnitude` of `unit_string`.

        `offset` is the zero-point shift expressed in the *new* unit (e.g.
        459.67 for a Fahrenheit-like scale built on "K" with magnitude 5/9);
        it is stored in the coherent reference frame.
        """
        from physq.core.utils import is_array
        from physq.units.parser import quantity  # local import: parser imports registry types

        sym = normalize_symbol(symbol)
        with self._lock:
            # Check first so a bad unit string does not mask the duplicate.
            self._check_free(sym)

            q = quantity(magnitude, unit_string, self)
            if is_array(q.magnitude):
                raise ValueError(f"Cannot define unit '{symbol}' with an array magnitude")
            if q.offset != 0:
                raise CompoundOffsetUnitError(
                    f"Cannot define unit '{symbol}' from offset unit '{unit_string}'"
                )
            entry = UnitEntry(sym, q.magnitude, q.dimensions, float(offset) * q.magnitude)
            self.register(entry)
        logger.debug("defined %r as %r %r (offset %r)", sym, magnitude, unit_string, offset)
        return entry

    # -------------------------- lookup -------------------------------------
    def lookup_unit(self, symbol: str) -> Optional[UnitEntry]:
        """Exact (alias-aware) lookup; `None` when the symbol is unknown."""
        sym = normalize_symbol(symbol)
        with self._lock:
            target = self._aliases.get(sym)
            if target is not None:
                sym = target
            return self._units.get(sym)

    def lookup_prefix(self, symbol: str) -> Optional[float]:
        with self._lock:
            return self._prefixes.get(normalize_symbol(symbol))

    def get(self, symbol: str) -> UnitEntry:
        """Lookup a unit by symbol. Raises `UnknownUnitError` if unknown."""
        entry = self.lookup_unit(symbol)
        if entry is None:
            raise UnknownUnitError(f"Unknown unit symbol: {symbol}")
        return entry

    def has(self, symbol: str) -> bool:
        return self.lookup_unit(symbol) is not None

    def all(self) -> Mapping[str, UnitEntry]:
        with self._lock:
            return dict(self._units)

    def aliases(self) -> Mapping[str, str]:
        with self._lock:
            return dict(self._aliases)

    def prefixes(self) -> Mapping[str, float]:
        with self._lock:
            return dict(self._prefixes)

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)

    # ------------------------- internals -----------------------------------
    def _check_free(self, sym: str) -> None:
        if sym in self._units:
            raise DuplicateUnitError(
                f"Cannot register unit '{sym}': a unit with this name already exists."
            )
        if sym in self._aliases:
            raise DuplicateUnitError(
                f"Cannot register unit '{sym}': an alias with this name already exists."
            )


class UnitNamespace:
    """Attribute-style access to a registry: ``u.ft`` is ``quantity(1, "ft")``."""

    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, reg: "UnitsRegistry") -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def define(
        self,
        symbol: str,
        magnitude: "float | int" = 1,
        unit_string: Optional[str] = None,
        offset: "float | int" = 0,
    ) -> None:
        if symbol in UnitNamespace._reserved_names:
            raise ValueError(
                f"Cannot define unit '{symbol}': "
                "name conflicts with UnitNamespace attribute/method."
            )
        self._reg.define(symbol, magnitude, unit_string, offset)

    def __call__(self, spec: str) -> "Quantity":
        from physq.units.parser import quantity

        return quantity(1, spec, self._reg)

    def __getattr__(self, name: str) -> "Quantity":
        if name.startswith("__"):
            raise AttributeError(name)
        from physq.units.parser import quantity

        try:
            return quantity(1, name, self._reg)
        except ValueError as e:
            # Unknown symbol should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        """List all available unit symbols for autocomplete."""
        base_dir = set(super().__dir__())
        return sorted(base_dir | set(self._reg.all()) | set(self._reg.aliases()))

UnitNamespace._reserved_names = set(dir(UnitNamespace))


# ---------------------------------------------------------------------------
# Bootstrap a default registry from the bundled tables
# ---------------------------------------------------------------------------

def populate(reg: UnitsRegistry, units: Iterable[tuple], aliases: Iterable[tuple[str, str]] = ()) -> None:
    """Register `(symbol, scale, dims[, offset])` rows and `(alias, canonical)` pairs."""
    for row in units:
        symbol, scale, dims, *rest = row
        offset = rest[0] if rest else 0.0
        reg.register(UnitEntry(symbol, float(scale), Dimension(dims), float(offset)))
    for alias, canonical in aliases:
        reg.register_alias(alias, canonical)


def _bootstrap_default_registry() -> UnitsRegistry:
    from physq.units.definitions import ALIASES, UNITS
    from physq.units.prefixes import PREFIXES

    reg = UnitsRegistry()
    for p in PREFIXES:
        reg.register_prefix(p.symbol, p.factor)
    populate(reg, UNITS, ALIASES)
    logger.debug("bootstrapped default registry with %d units", len(reg))
    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


__all__ = [
    "UnitEntry",
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "normalize_symbol",
    "populate",
]

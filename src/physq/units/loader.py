"""Load unit tables from JSON into a registry.

A table looks like::

    {
      "prefixes": {"k": 1000.0},
      "units": {
        "furlong": {"scale": 201.168, "dimensions": {"length": 1}},
        "degX":    {"scale": 1.0, "dimensions": {"temperature": 1},
                    "offset": 100.0, "aliases": ["X"]}
      }
    }

``scale`` and ``offset`` are given in coherent SI units, exactly like the rows
of the bundled table. Both sections are optional. Loading is append-only:
symbols that already exist raise ``DuplicateUnitError``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from physq.core.dimensions import Dimension
from physq.units.registry import UnitEntry, UnitsRegistry

logger = logging.getLogger(__name__)


def _entry(symbol: str, spec: dict[str, Any]) -> UnitEntry:
    if "scale" not in spec:
        raise ValueError(f"Unit '{symbol}' in table has no 'scale'")
    dims = Dimension.from_mapping(spec.get("dimensions", {}))
    return UnitEntry(symbol, float(spec["scale"]), dims, float(spec.get("offset", 0.0)))


def load_unit_table(path: str | Path, reg: UnitsRegistry) -> int:
    """Register the prefixes, units and aliases of a JSON table into ``reg``.

    Returns the number of units added.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    for symbol, factor in data.get("prefixes", {}).items():
        reg.register_prefix(symbol, float(factor))

    units = data.get("units", {})
    for symbol, spec in units.items():
        reg.register(_entry(symbol, spec))
        for alias in spec.get("aliases", ()):
            reg.register_alias(alias, symbol)

    logger.info("Loaded %d units and %d prefixes from %s",
                len(units), len(data.get("prefixes", {})), path)
    return len(units)


def registry_from_table(path: str | Path) -> UnitsRegistry:
    """Build a fresh registry holding only the contents of a JSON table."""
    reg = UnitsRegistry()
    load_unit_table(path, reg)
    return reg


__all__ = ["load_unit_table", "registry_from_table"]

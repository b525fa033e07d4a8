"""
physq: unit-aware physical quantities with dimension-checked arithmetic.

physq represents a number (or a 1-D array of numbers) together with a physical
unit, e.g. ``quantity(10, "ft")`` or ``quantity([1, 2], "[k]g m^2 / s^2")``,
and converts, compares and combines such values while checking dimensions.
This module exposes a minimal, stable public API. The units registry is
imported lazily to avoid import-time side effects and circular imports.
"""

import logging
from importlib import metadata as _metadata
from typing import Any, Optional

from physq.core.quantity import Quantity
from physq.errors import *  # noqa: F401,F403
from physq.errors import __all__ as _error_names

__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("physq")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

logging.getLogger(__name__).addHandler(logging.NullHandler())


def quantity(magnitude: Any = 1, unit_string: Optional[str] = None) -> Quantity:
    """``quantity(10, "ft")``: build a Quantity against the default registry."""
    from physq.units.parser import quantity as _quantity  # local import

    return _quantity(magnitude, unit_string)


def define(
    symbol: str,
    magnitude: float = 1,
    unit_string: Optional[str] = None,
    offset: float = 0,
) -> None:
    """Add ``symbol`` = ``magnitude`` ``unit_string`` to the default registry."""
    from physq.units.registry import DEFAULT_REGISTRY  # local import

    DEFAULT_REGISTRY.define(symbol, magnitude, unit_string, offset)


def __getattr__(name: str) -> Any:
    """Lazily expose ``physq.u``, the attribute namespace of the default registry."""
    if name == "u":
        from physq.units import u
        return u
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# Public names exposed by the package. Keep this minimal and stable.
__all__ = ["__version__", "__license__", "Quantity", "quantity", "define", "u", *_error_names]

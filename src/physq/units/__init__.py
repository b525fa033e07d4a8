"""
physq.units
===========

Unit database, unit-string parser and the ``u`` attribute namespace.

``from physq.units import u`` gives a :class:`UnitNamespace` over the default
registry, so ``u.ft`` is ``quantity(1, "ft")`` and ``u.define(...)`` adds to
the same registry that :func:`physq.quantity` reads.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from physq.units.registry import UnitNamespace, UnitsRegistry

__all__ = ["u"]

_namespace: "Optional[UnitNamespace]" = None


def _get_default_registry() -> "UnitsRegistry":
    # registry.py bootstraps the default tables on import
    from physq.units.registry import DEFAULT_REGISTRY
    return DEFAULT_REGISTRY


def _default_namespace() -> "UnitNamespace":
    """Namespace over the default registry, rebuilt only when that registry is replaced."""
    global _namespace
    reg = _get_default_registry()
    if _namespace is None or _namespace._reg is not reg:
        _namespace = reg.as_namespace()
    return _namespace


def __getattr__(name: str) -> Any:
    if name == "u":
        return _default_namespace()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["u"])

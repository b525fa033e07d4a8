# tests/conftest.py
import pytest

from physq.units.parser import quantity
from physq.units.registry import DEFAULT_REGISTRY as _ureg
from physq.units.registry import _bootstrap_default_registry


@pytest.fixture(scope="session")
def ureg():
    return _ureg


@pytest.fixture
def reg():
    """Fresh, fully-bootstrapped registry so `define` never leaks between tests."""
    return _bootstrap_default_registry()


@pytest.fixture
def q(reg):
    """`quantity` bound to the per-test registry."""
    def _q(magnitude=1, unit_string=None):
        return quantity(magnitude, unit_string, reg)
    return _q

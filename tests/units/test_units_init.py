
import pytest

import physq.units.registry as regmod
from physq.units.registry import _bootstrap_default_registry


@pytest.fixture()
def fresh_registry():
    return _bootstrap_default_registry()


def test__get_default_registry_returns_DEFAULT(monkeypatch, fresh_registry):
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)

    import physq.units as units
    assert units._get_default_registry() is fresh_registry


def test_lazy_u_binds_to_default_registry(monkeypatch, fresh_registry):
    # When DEFAULT_REGISTRY is patched, `physq.units.u` resolves against it.
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)

    from physq.units import u
    assert u._reg is fresh_registry

    import physq
    assert physq.u._reg is fresh_registry


def test_unknown_module_attribute_raises_attributeerror():
    import physq.units as units
    with pytest.raises(AttributeError):
        _ = units.not_a_real_attribute


def test_dir_lists_u():
    import physq.units as units
    assert "u" in dir(units)


def test_u_is_reused_until_the_default_registry_changes(monkeypatch, fresh_registry):
    import physq.units as units
    first = units.u
    assert units.u is first
    assert first._reg is units._get_default_registry()

    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)
    rebound = units.u
    assert rebound is not first
    assert rebound._reg is fresh_registry
    assert units.u is rebound


def test_u_sees_units_defined_later(monkeypatch, fresh_registry):
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)
    import physq.units as units

    ns = units.u
    fresh_registry.define("smoot", 1.7018, "m")
    assert units.u is ns
    assert ns.smoot.value_in("m") == pytest.approx(1.7018)

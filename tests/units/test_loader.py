import json
import logging

import pytest

from physq.core.dimensions import LENGTH, TEMPERATURE
from physq.errors import DuplicateUnitError
from physq.units.loader import load_unit_table, registry_from_table
from physq.units.parser import quantity

TABLE = {
    "prefixes": {"k": 1000.0},
    "units": {
        "m": {"scale": 1.0, "dimensions": {"length": 1}},
        "furlong": {"scale": 201.168, "dimensions": {"length": 1}, "aliases": ["fur"]},
        "K": {"scale": 1.0, "dimensions": {"temperature": 1}},
        "degX": {"scale": 2.0, "dimensions": {"temperature": 1}, "offset": 100.0},
    },
}


@pytest.fixture
def table_path(tmp_path):
    path = tmp_path / "units.json"
    path.write_text(json.dumps(TABLE), encoding="utf-8")
    return path


def write_table(tmp_path, data):
    path = tmp_path / "extra.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_registry_from_table(table_path):
    reg = registry_from_table(table_path)
    assert len(reg) == 4
    assert reg.get("furlong").dims == LENGTH
    assert reg.get("fur") is reg.get("furlong")
    assert reg.lookup_prefix("k") == 1000.0
    # only the table's contents are present
    assert not reg.has("ft")
    assert reg.lookup_prefix("M") is None

def test_loaded_units_work_in_quantities(table_path):
    reg = registry_from_table(str(table_path))
    assert quantity(1, "[k]furlong", reg).value_in("m", reg) == pytest.approx(201168)
    assert quantity(1, "kfur", reg).value_in("m", reg) == pytest.approx(201168)

def test_offset_units_from_table(table_path):
    reg = registry_from_table(table_path)
    t = quantity(0, "degX", reg)
    assert t.dimensions == TEMPERATURE
    assert t.offset == 100.0
    assert t.value_in("K", reg) == pytest.approx(100)

def test_load_into_bootstrapped_registry(reg, tmp_path):
    path = write_table(tmp_path, {"units": {"furlong": {"scale": 201.168, "dimensions": {"length": 1}}}})
    assert load_unit_table(path, reg) == 1
    assert quantity(1, "furlong", reg).value_in("ft", reg) == pytest.approx(660)

def test_load_is_append_only(reg, table_path):
    with pytest.raises(DuplicateUnitError):
        load_unit_table(table_path, reg)

def test_unknown_dimension_name(tmp_path):
    path = write_table(tmp_path, {"units": {"zork": {"scale": 1.0, "dimensions": {"charm": 1}}}})
    with pytest.raises(ValueError):
        registry_from_table(path)

def test_missing_scale(tmp_path):
    path = write_table(tmp_path, {"units": {"zork": {"dimensions": {"length": 1}}}})
    with pytest.raises(ValueError, match="scale"):
        registry_from_table(path)

def test_load_logs_summary(table_path, caplog):
    with caplog.at_level(logging.INFO, logger="physq.units.loader"):
        registry_from_table(table_path)
    assert "Loaded 4 units and 1 prefixes" in caplog.text

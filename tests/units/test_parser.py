import pytest

from physq.core.dimensions import DIM_0, INFORMATION, LENGTH, MASS, TIME
from physq.errors import (
    CompoundOffsetUnitError,
    InvalidPowerError,
    MalformedUnitStringError,
    UnitStringError,
    UnknownPrefixError,
    UnknownUnitError,
)
from physq.units.parser import (
    Term,
    _compile_unit_expr,
    _UnitExprParser,
    parse_unit_expr,
    quantity,
)

# --------------------------
# Parsing-only unit tests
# --------------------------

def test_parse_simple_name():
    assert _UnitExprParser("m").parse() == ((Term(None, "m", 1),),)

def test_parse_prefix_power_and_denominator():
    plan = _UnitExprParser("[k]g m^2 / s^3").parse()
    assert plan == (
        (Term("k", "g", 1), Term(None, "m", 2)),
        (Term(None, "s", 3),),
    )

def test_parse_signed_exponents():
    assert _UnitExprParser("m^+3").parse()[0][0].power == 3
    assert _UnitExprParser("s^-2").parse()[0][0].power == -2

def test_parse_ignores_extra_whitespace():
    assert _UnitExprParser("  kg    m /  s^2 ").parse() == _UnitExprParser("kg m / s^2").parse()

@pytest.mark.parametrize("text", ["(m)", "m / (s)", "1 / s / s", "[k]", "[]", "m /", "/ s", "[k]m]"])
def test_malformed_strings(text):
    with pytest.raises(MalformedUnitStringError):
        _UnitExprParser(text).parse()

@pytest.mark.parametrize("text", ["[k]m^d", "m^0", "m^1.5", "m^", "s^--1", "m^2^3"])
def test_invalid_powers(text):
    with pytest.raises(InvalidPowerError):
        _UnitExprParser(text).parse()

def test_plans_are_cached_by_text():
    assert _compile_unit_expr("m / s") is _compile_unit_expr("m / s")

# --------------------------
# Evaluation against a registry
# --------------------------

def test_blank_is_dimensionless_unity(reg):
    for text in (None, "", "   "):
        unit = parse_unit_expr(text, reg)
        assert unit.dimensions == DIM_0 and unit.magnitude == 1.0

def test_compound_units(reg):
    assert parse_unit_expr("[k]g m^2 / s^3", reg).dimensions == MASS * LENGTH ** 2 / TIME ** 3
    assert parse_unit_expr("1 / s", reg).dimensions == TIME ** -1
    assert parse_unit_expr("km / hr", reg).magnitude == pytest.approx(1000 / 3600)

@pytest.mark.parametrize("text,meters", [
    ("km", 1000),
    ("[k]m", 1000),
    ("dam", 10),
    ("[da]m", 10),
    ("um", 1e-6),
    ("µm", 1e-6),
    ("[m]in", 2.54e-5),
])
def test_prefix_resolution(reg, text, meters):
    assert parse_unit_expr(text, reg).magnitude == pytest.approx(meters)

def test_exact_symbols_win_over_prefix_splits(reg):
    minute = parse_unit_expr("min", reg)
    assert minute.dimensions == TIME and minute.magnitude == 60
    assert parse_unit_expr("[m]in", reg).dimensions == LENGTH
    # "Pa" is pascal, not peta-annum; "cd" is candela, not centi-day
    assert parse_unit_expr("Pa", reg).magnitude == 1.0
    assert parse_unit_expr("cd", reg).magnitude == 1.0

def test_empty_brackets_mean_no_prefix(reg):
    assert parse_unit_expr("[]m", reg).magnitude == 1.0
    assert parse_unit_expr("[]m^2 / []s", reg).dimensions == LENGTH ** 2 / TIME
    assert parse_unit_expr("[]degC", reg).offset == pytest.approx(273.15)

def test_binary_prefixes(reg):
    kib = parse_unit_expr("KiB", reg)
    assert kib.dimensions == INFORMATION
    assert kib.magnitude == 8192
    assert parse_unit_expr("[Ki]B", reg).magnitude == 8192

def test_aliases_resolve(reg):
    assert parse_unit_expr("sec", reg).magnitude == 1.0
    assert parse_unit_expr("Ω", reg).dimensions == parse_unit_expr("ohm", reg).dimensions

@pytest.mark.parametrize("text,error", [
    ("[GG]m", UnknownPrefixError),
    ("[k]bugs", UnknownUnitError),
    ("bugs", UnknownUnitError),
    ("m / furlongs", UnknownUnitError),
    ("kbugs", UnknownUnitError),
])
def test_unknown_symbols(reg, text, error):
    with pytest.raises(error):
        parse_unit_expr(text, reg)

def test_parser_errors_share_a_base():
    for exc in (UnknownUnitError, UnknownPrefixError, MalformedUnitStringError, InvalidPowerError):
        assert issubclass(exc, UnitStringError)
        assert issubclass(exc, ValueError)

def test_error_message_includes_unit_string(reg):
    with pytest.raises(UnknownUnitError, match="m / bugs"):
        parse_unit_expr("m / bugs", reg)

def test_offset_unit_alone_keeps_offset(reg):
    assert parse_unit_expr("degC", reg).offset == pytest.approx(273.15)
    assert parse_unit_expr("Pa-g", reg).offset == pytest.approx(101325)
    with pytest.raises(CompoundOffsetUnitError):
        parse_unit_expr("degC / Pa-g", reg)

def test_evaluation_is_bound_to_the_registry_at_call_time(reg):
    with pytest.raises(UnknownUnitError):
        parse_unit_expr("smoot", reg)
    reg.define("smoot", 1.7018, "m")
    assert parse_unit_expr("smoot", reg).magnitude == pytest.approx(1.7018)

# --------------------------
# quantity()
# --------------------------

def test_quantity_scales_magnitude(reg):
    q = quantity(10, "ft", reg)
    assert q.magnitude == pytest.approx(3.048)
    assert q.dimensions == LENGTH

def test_quantity_keeps_offset(reg):
    t = quantity(25, "degC", reg)
    assert t.magnitude == 25.0 and t.offset == pytest.approx(273.15)

def test_quantity_with_array(reg):
    q = quantity([1, 2], "[k]m", reg)
    assert q.is_array
    assert list(q.magnitude) == [1000.0, 2000.0]

def test_quantity_uses_default_registry():
    assert quantity(1, "m").dimensions == LENGTH

import numpy as np
import pytest

from physq import quantity
from physq.core.dimensions import DIM_0, LENGTH, MASS, TIME
from physq.core.quantity import Quantity
from physq.errors import IncompatibleUnitsError


# -------------------------------
# Construction & accessors
# -------------------------------

def test_quantity_is_stored_in_coherent_units():
    q = quantity(1, "ft")
    assert q.magnitude == pytest.approx(0.3048)
    assert q.dimensions == LENGTH
    assert q.offset == 0.0
    assert not q.is_array
    assert q.dimensionality == 1

def test_default_quantity_is_dimensionless_one():
    q = Quantity()
    assert q.magnitude == 1.0 and q.dimensions == DIM_0
    assert q.is_dimensionless
    assert quantity().eq(q)

def test_quantities_are_immutable():
    q = quantity(1, "m")
    with pytest.raises(AttributeError):
        q.magnitude = 2.0
    with pytest.raises(AttributeError):
        q._magnitude = 2.0
    with pytest.raises(AttributeError):
        del q._offset
    assert q.magnitude == 1.0

# -------------------------------
# Arithmetic: +, -, *, /, scalars
# -------------------------------

def test_add_feet_and_yards():
    total = quantity(10, "ft").add(quantity(10, "yd"))
    assert total.value_in("ft") == pytest.approx(40)
    assert (quantity(10, "ft") + quantity(10, "yd")).eq(total)

def test_subtract_same_dim():
    d = quantity(1, "m") - quantity(50, "[c]m")
    assert d.value_in("m") == pytest.approx(0.5)

def test_add_dim_mismatch_raises():
    with pytest.raises(IncompatibleUnitsError):
        quantity(1, "ft").add(quantity(1, "kg"))
    with pytest.raises(TypeError):
        _ = quantity(1, "m") + quantity(1, "s")
    with pytest.raises(IncompatibleUnitsError):
        quantity(1, "m").subtract(quantity(1, "s"))

def test_multiply_lengths():
    area = quantity(10, "ft").multiply(quantity(10, "yd"))
    assert area.dimensions == LENGTH ** 2
    assert area.value_in("ft^2") == pytest.approx(300)

def test_electrical_power():
    p = quantity(1, "A^2").multiply(quantity(10, "ohm"))
    assert p.value_in("W") == pytest.approx(10)

    p2 = quantity(1, "V^2").divide(quantity(0.1, "[m]ohm"))
    assert p2.value_in("[k]W") == pytest.approx(10)

def test_divide_gives_combined_dims():
    v = quantity(100, "m") / quantity(10, "s")
    assert v.dimensions == LENGTH / TIME
    assert v.value_in("m / s") == pytest.approx(10)

def test_invert():
    f = quantity(4, "s").invert()
    assert f.dimensions == TIME ** -1
    assert f.value_in("Hz") == pytest.approx(0.25)

def test_scalar_multiplication_and_division():
    q = quantity(2, "m")
    assert (q * 3).value_in("m") == pytest.approx(6)
    assert (3 * q).value_in("m") == pytest.approx(6)
    assert (q / 2).value_in("m") == pytest.approx(1)
    r = 1 / q
    assert r.dimensions == LENGTH ** -1
    assert r.value_in("1 / m") == pytest.approx(0.5)

def test_negation():
    assert (-quantity(2, "m")).value_in("m") == pytest.approx(-2)

def test_dimensionless_with_plain_numbers():
    q = quantity(2)
    assert (q + 1).magnitude == 3.0
    assert (1 + q).magnitude == 3.0
    assert (5 - q).magnitude == 3.0
    assert (q - 5).magnitude == -3.0
    with pytest.raises(IncompatibleUnitsError):
        quantity(2, "m") + 1

def test_unsupported_operand_type():
    with pytest.raises(TypeError):
        quantity(1, "m") * "abc"

def test_force_from_base_units():
    f = quantity(2, "[k]g") * quantity(3, "m / s^2")
    assert f.dimensions == MASS * LENGTH / TIME ** 2
    assert f.value_in("N") == pytest.approx(6)

# -------------------------------
# Properties that hold for every operator
# -------------------------------

def test_add_then_subtract_round_trips():
    a, b = quantity(3.5, "mi"), quantity(12, "[k]m")
    assert a.add(b).subtract(b).eq(a, 1e-12)

def test_operators_leave_operands_untouched():
    a = quantity([1.0, 2.0], "m")
    b = quantity(3, "ft")
    before = (a.magnitude.copy(), a.dimensions, a.offset, b.magnitude, b.dimensions, b.offset)

    a + b
    a - b
    a * b
    a / b
    a.invert()
    a ** 2
    a ** -1
    (a ** 2).root(2)
    a.compare(b)

    np.testing.assert_array_equal(a.magnitude, before[0])
    assert (a.dimensions, a.offset) == before[1:3]
    assert (b.magnitude, b.dimensions, b.offset) == before[3:]

def test_offset_subtraction_leaves_operands_untouched():
    warm = quantity(30, "degC")
    cool = quantity(20, "degC")

    delta = warm - cool
    shifted = warm - delta

    assert (warm.magnitude, warm.offset) == (30.0, pytest.approx(273.15))
    assert (cool.magnitude, cool.offset) == (20.0, pytest.approx(273.15))
    assert delta.offset == 0.0
    assert shifted.value_in("degC") == pytest.approx(20)

# -------------------------------
# Division by zero and overflow follow IEEE rules for scalars and arrays
# -------------------------------

def test_zero_inverse_is_infinite():
    assert quantity(0, "m").invert().magnitude == float("inf")
    np.testing.assert_array_equal(quantity([0.0, 2.0], "m").invert().magnitude, [np.inf, 0.5])

def test_zero_divisor_is_infinite():
    assert (quantity(1, "m") / quantity(0, "s")).magnitude == float("inf")
    assert (1 / quantity(0, "s")).magnitude == float("inf")
    assert (quantity(-1, "m") / quantity(0, "s")).magnitude == float("-inf")

def test_scalar_and_array_overflow_agree():
    big = quantity(1e200, "m")
    assert (big * big).magnitude == float("inf")
    np.testing.assert_array_equal((quantity([1e200], "m") * big).magnitude, [np.inf])

def test_same_dimensions():
    assert quantity(1, "ft").same_dimensions(quantity(1, "[k]m"))
    assert not quantity(1, "ft").same_dimensions(quantity(1, "s"))
    assert quantity(3).same_dimensions(7)
    assert not quantity(1, "Hz").same_dimensions(quantity(1, "rad / s"))

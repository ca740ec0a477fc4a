"""
Forward values and local gradients of every primitive.
"""
import math

import numpy as np
import pytest

from scalargrad import (
    Op, Role, absolute, add, backward, make_leaf, multiply, power, relu,
    subtract, tanh,
)
from scalargrad.core.rules import RULES


@pytest.mark.parametrize("a_val,b_val", [(2.0, 3.0), (-1.5, 0.25), (0.0, 0.0), (1e6, -1e-6)])
def test_add(a_val, b_val):
    a, b = make_leaf(a_val), make_leaf(b_val)
    c = add(a, b)
    assert c.value == a_val + b_val
    assert c.op is Op.ADD
    backward(c)
    assert a.grad == 1.0 and b.grad == 1.0


def test_subtract():
    a, b = make_leaf(5.0), make_leaf(2.0)
    c = subtract(a, b)
    assert c.value == 3.0
    backward(c)
    assert a.grad == 1.0 and b.grad == -1.0


def test_multiply():
    a, b = make_leaf(2.0), make_leaf(3.0)
    c = multiply(a, b)
    assert c.value == 6.0
    backward(c)
    assert a.grad == 3.0 and b.grad == 2.0


def test_multiply_same_operand_accumulates():
    a = make_leaf(3.0)
    backward(multiply(a, a))
    assert a.grad == 6.0


def test_power():
    a = make_leaf(1.0)
    c = power(a, 3)
    assert c.value == 1.0
    assert c.node.aux == 3.0
    backward(c)
    assert a.grad == 3.0


def test_power_fractional_and_negative_exponents():
    a = make_leaf(4.0)
    backward(power(a, 0.5))
    assert a.grad == pytest.approx(0.25)
    b = make_leaf(2.0)
    c = power(b, -1)
    assert c.value == 0.5
    backward(c)
    assert b.grad == pytest.approx(-0.25)


def test_power_negative_base_fractional_exponent_is_nan():
    a = make_leaf(-8.0)
    c = power(a, 1.0 / 3.0)
    assert math.isnan(c.value)
    backward(c)
    assert math.isnan(a.grad)


def test_power_integer_exponent_of_negative_base():
    a = make_leaf(-2.0)
    c = power(a, 2)
    assert c.value == 4.0
    backward(c)
    assert a.grad == -4.0


def test_power_accepts_numpy_exponents():
    a = make_leaf(2.0)
    assert power(a, np.int64(3)).value == 8.0
    assert power(a, np.float32(0.5)).value == pytest.approx(np.sqrt(2.0))


def test_power_rejects_non_numeric_exponent():
    a = make_leaf(2.0)
    with pytest.raises(TypeError):
        power(a, "2")
    with pytest.raises(TypeError):
        power(a, make_leaf(2.0))


@pytest.mark.parametrize("x,out,g", [(-2.0, 0.0, 0.0), (2.0, 2.0, 1.0), (0.0, 0.0, 0.0)])
def test_relu(x, out, g):
    a = make_leaf(x)
    c = relu(a)
    assert c.value == out
    backward(c)
    assert a.grad == g


@pytest.mark.parametrize("x,out,g", [(-2.0, 2.0, -1.0), (2.0, 2.0, 1.0), (0.0, 0.0, 0.0)])
def test_absolute(x, out, g):
    a = make_leaf(x)
    c = absolute(a)
    assert c.value == out
    backward(c)
    assert a.grad == g


@pytest.mark.parametrize("x", [-3.0, -0.2, 0.0, 0.7, 20.0])
def test_tanh(x):
    a = make_leaf(x)
    c = tanh(a)
    assert c.value == pytest.approx(np.tanh(x))
    backward(c)
    assert a.grad == pytest.approx(1.0 - np.tanh(x) ** 2)


def test_operator_overloads():
    a, b = make_leaf(2.0), make_leaf(-3.0)
    assert (a + b).value == -1.0
    assert (a - b).value == 5.0
    assert (a * b).value == -6.0
    assert (a ** 2).value == 4.0
    assert abs(b).value == 3.0
    assert b.relu().value == 0.0
    assert a.tanh().value == pytest.approx(np.tanh(2.0))
    assert (a * b).op is Op.MUL


@pytest.mark.parametrize("other", [1, 2.0])
def test_overloads_reject_plain_numbers(other):
    a = make_leaf(1.0)
    with pytest.raises(TypeError):
        a + other
    with pytest.raises(TypeError):
        other * a
    with pytest.raises(TypeError):
        a - other


def test_primitives_reject_non_scalars():
    with pytest.raises(TypeError):
        add(make_leaf(1.0), 1.0)
    with pytest.raises(TypeError):
        relu(0.5)


def test_every_op_has_a_rule():
    assert set(RULES) == set(Op)
    for op, rule in RULES.items():
        assert rule.arity in (1, 2)
        values = (0.3, -0.7)[:rule.arity]
        assert len(rule.local_gradients(values, 2.0)) == rule.arity


def test_primitive_output_is_intermediate():
    a = make_leaf(1.0, Role.PARAMETER)
    for out in (a + a, a - a, a * a, a ** 2, a.relu(), abs(a), a.tanh()):
        assert out.role is Role.INTERMEDIATE

"""
Node construction, handles, accessors and the tape arena.
"""
import numpy as np
import pytest

from scalargrad import (
    EngineConfig, Op, ReclaimedNodeError, Role, Tape, TapeMismatchError,
    add, backward, gradient_of, is_alive, make_derived, make_leaf, mark_output,
    multiply, reset_gradient, set_value, use_tape, value_of, zero_gradients,
)


def test_make_leaf_defaults(tape):
    x = make_leaf(2.5)
    assert value_of(x) == 2.5
    assert gradient_of(x) == 0.0
    assert x.role is Role.INPUT
    assert x.op is None
    assert x.operands == ()
    assert x.tape is tape


def test_make_leaf_accepts_numpy_scalars():
    x = make_leaf(np.float32(1.5), Role.PARAMETER)
    y = make_leaf(np.int64(3))
    assert x.value == 1.5 and x.role is Role.PARAMETER
    assert isinstance(y.value, float) and y.value == 3.0


@pytest.mark.parametrize("bad", ["1.0", None, [1.0], True])
def test_make_leaf_rejects_non_numbers(bad):
    with pytest.raises(TypeError):
        make_leaf(bad)


@pytest.mark.parametrize("role", [Role.INTERMEDIATE, Role.OUTPUT])
def test_make_leaf_rejects_derived_roles(role):
    with pytest.raises(ValueError):
        make_leaf(1.0, role)


def test_make_derived_records_operands_in_order():
    a, b = make_leaf(1.0), make_leaf(2.0)
    c = make_derived(-1.0, [a, b], Op.SUB)
    assert c.role is Role.INTERMEDIATE
    assert c.op is Op.SUB
    assert c.operands == (a, b)
    assert isinstance(c.node.operands, tuple)


def test_make_derived_checks_arity_and_role():
    a = make_leaf(1.0)
    with pytest.raises(TypeError):
        make_derived(1.0, [a], Op.ADD)
    with pytest.raises(TypeError):
        make_derived(1.0, [a, a], Op.TANH)
    with pytest.raises(ValueError):
        make_derived(1.0, [a], Op.RELU, role=Role.PARAMETER)


def test_operands_from_different_tapes():
    a = make_leaf(1.0)
    b = make_leaf(2.0, tape=Tape())
    with pytest.raises(TapeMismatchError):
        add(a, b)


def test_same_primitive_twice_gives_independent_nodes():
    a, b = make_leaf(2.0), make_leaf(3.0)
    c1 = multiply(a, b)
    c2 = multiply(a, b)
    assert c1 != c2
    assert c1.ref != c2.ref
    assert c1.operands == c2.operands == (a, b)


def test_handles_compare_by_identity_not_value():
    a, b = make_leaf(1.0), make_leaf(1.0)
    assert a != b
    assert a == type(a)(a.tape, a.ref)
    assert len({a, b, type(a)(a.tape, a.ref)}) == 2


def test_reset_and_zero_gradients():
    a, b = make_leaf(2.0), make_leaf(3.0)
    backward(multiply(a, b))
    assert a.grad == 3.0
    reset_gradient(a)
    assert a.grad == 0.0 and b.grad == 2.0
    zero_gradients([a, b])
    assert b.grad == 0.0


def test_set_value_only_on_leaves():
    w = make_leaf(1.0, Role.PARAMETER)
    set_value(w, 0.5)
    assert w.value == 0.5
    y = multiply(w, w)
    with pytest.raises(ValueError):
        set_value(y, 3.0)


def test_mark_output_keeps_node_after_backward(tape):
    a, b = make_leaf(2.0), make_leaf(3.0)
    s = add(a, b)
    loss = mark_output(multiply(s, s))
    backward(loss)
    assert is_alive(loss)
    assert loss.role is Role.OUTPUT
    assert loss.value == 25.0 and loss.grad == 1.0
    assert not is_alive(s)
    # its intermediate ancestor is gone, so a second pass must fail
    with pytest.raises(ReclaimedNodeError):
        backward(loss)


def test_mark_output_rejects_leaves():
    with pytest.raises(ValueError):
        mark_output(make_leaf(1.0))


def test_released_handle_fails_fast(tape):
    a, b = make_leaf(2.0), make_leaf(3.0)
    c = multiply(a, b)
    backward(c)
    assert not c.alive
    with pytest.raises(ReclaimedNodeError):
        value_of(c)
    with pytest.raises(ReclaimedNodeError):
        gradient_of(c)
    with pytest.raises(ReclaimedNodeError):
        add(c, a)
    assert "released" in repr(c)


def test_tape_recycles_released_slots(tape):
    a, b = make_leaf(2.0), make_leaf(3.0)
    c = multiply(a, b)
    old = c.ref
    backward(c)
    assert tape.live_count == 2
    d = add(a, b)
    assert d.ref.index == old.index
    assert d.ref.generation == old.generation + 1
    assert len(tape) == 3
    # the stale handle does not see the new occupant
    with pytest.raises(ReclaimedNodeError):
        c.value
    assert d.value == 5.0


def test_tape_release_twice_raises():
    t = Tape()
    x = make_leaf(1.0, tape=t)
    t.release(x.ref)
    assert t.released_count == 1
    with pytest.raises(ReclaimedNodeError):
        t.release(x.ref)
    assert t.released_count == 1


def test_tape_reset():
    t = Tape()
    make_leaf(1.0, tape=t)
    t.reset()
    assert len(t) == 0 and t.live_count == 0 and t.released_count == 0


def test_unchecked_tape_reads_recycled_slot():
    t = Tape(EngineConfig(check_reclaimed=False))
    a = make_leaf(2.0, tape=t)
    c = multiply(a, a)
    backward(c)
    d = add(a, a)
    assert d.ref.index == c.ref.index
    # without generation checks the stale handle reads whatever lives there
    assert c.value == 4.0 == d.value


def test_use_tape_keeps_the_given_empty_tape():
    given = Tape(EngineConfig(reclaim_intermediates=False))
    assert len(given) == 0
    with use_tape(given) as t:
        assert t is given
        assert make_leaf(1.0).tape is given


def test_make_leaf_on_explicit_empty_tape(tape):
    other = Tape()
    x = make_leaf(1.0, tape=other)
    assert x.tape is other
    assert len(other) == 1
    assert len(tape) == 0


def test_tape_keeps_given_config():
    config = EngineConfig(check_reclaimed=False)
    assert Tape(config).config is config
    assert Tape().config == EngineConfig()

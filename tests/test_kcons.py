import numpy as np
import pytest
from simEngine2D.Bodies import Body
from simEngine2D.KCons import RotationalConstraint, FixedConstraint


def test_body_pose_roundtrip():
    bdy = Body("a", 1.0, 2.0, 0.5)
    assert np.array_equal(bdy.pose, [1.0, 2.0, 0.5])
    assert np.array_equal(bdy.r, [1.0, 2.0])
    bdy.set_pose(np.array([3.0, 4.0, -1.0]))
    assert (bdy.x, bdy.y, bdy.theta) == (3.0, 4.0, -1.0)


def test_rotational_phi_is_anchor_mismatch():
    a = Body("a", 0, 0, 0)
    b = Body("b", 2, 0, 0)
    kc = RotationalConstraint(a, (1, 0), b, (0, 0))
    assert kc.bodies == (a, b)
    assert kc.n_eqs == 2
    assert np.allclose(kc.phi(a.pose, b.pose), [-1, 0])
    # Rotating body a by 90 deg moves its anchor to (0, 1)
    assert np.allclose(kc.phi(np.array([0, 0, np.pi/2]), np.array([0, 1, 0])), [0, 0])


def test_rotational_phi_uses_both_rotations():
    a = Body("a", 0, 0, 0)
    b = Body("b", 0, 0, 0)
    kc = RotationalConstraint(a, (1, 0), b, (1, 0))
    # a's anchor at (0, 1); b's anchor at (-1, 0) + (1, 1)
    assert np.allclose(kc.phi(np.array([0, 0, np.pi/2]), np.array([1, 1, np.pi])), [0, 0])


def test_rotational_self_reference_is_not_rejected_at_construction():
    a = Body("a", 0, 0, 0)
    kc = RotationalConstraint(a, (1, 0), a, (0, 0))
    assert kc.body_a is kc.body_b


def test_fixed_captures_pose_at_construction():
    bdy = Body("a", 1.0, -2.0, 0.3)
    kc = FixedConstraint(bdy)
    bdy.x = 5.0
    assert kc.n_eqs == 3
    assert np.allclose(kc.phi(bdy.pose), [4.0, 0.0, 0.0])


def test_fixed_target_override():
    bdy = Body("a", 1.0, -2.0, 0.3)
    kc = FixedConstraint(bdy, theta=0.0)
    assert np.allclose(kc.target, [1.0, -2.0, 0.0])


def test_fixed_power_keeps_sign():
    bdy = Body("a", 0.0, 0.0, 0.0)
    kc = FixedConstraint(bdy, power=5)
    assert np.allclose(kc.phi(np.array([-2.0, 1.0, 0.5])), [-32.0, 1.0, 0.03125])


@pytest.mark.parametrize("power", [0, 2, -1, 1.0])
def test_fixed_power_must_be_positive_odd_int(power):
    with pytest.raises(ValueError):
        FixedConstraint(Body("a", 0, 0, 0), power=power)

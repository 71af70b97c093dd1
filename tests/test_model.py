import math

import numpy as np
import pytest
from scipy.linalg import expm

from huskympcc.integrator import Integrator
from huskympcc.model import Model
from huskympcc.types import (
    Input,
    InputIndex,
    State,
    StateIndex,
    input_to_vector,
    state_to_vector,
    vector_to_input,
    vector_to_state,
)

TS = 0.05
STATE = State(1.0, 2.0, 0.7, 1.2, 0.4, 3.0, 1.1)
INPUT = Input(0.3, -0.2, 0.5)


@pytest.fixture
def model():
    return Model(TS)


def test_get_f_straight_heading(model):
    f = model.get_f(State(th=0.0, v=2.0, w=0.3, vs=1.5), Input(0.1, 0.2, 0.3))
    np.testing.assert_allclose(f, [2.0, 0.0, 0.3, 0.1, 0.2, 1.5, 0.3])


def test_get_f_quarter_turn(model):
    f = model.get_f(State(th=math.pi / 2, v=3.0), Input())
    assert f[StateIndex.X] == pytest.approx(0.0, abs=1e-12)
    assert f[StateIndex.Y] == pytest.approx(3.0)


def test_jacobian_matches_finite_differences(model):
    lin = model.get_model_jacobian(STATE, INPUT)
    eps = 1e-6
    x_vec = state_to_vector(STATE)
    u_vec = input_to_vector(INPUT)
    for i in range(len(x_vec)):
        step = np.zeros_like(x_vec)
        step[i] = eps
        diff = (
            model.get_f(vector_to_state(x_vec + step), INPUT)
            - model.get_f(vector_to_state(x_vec - step), INPUT)
        ) / (2 * eps)
        np.testing.assert_allclose(lin.a[:, i], diff, atol=1e-6)
    for j in range(len(u_vec)):
        step = np.zeros_like(u_vec)
        step[j] = eps
        diff = (
            model.get_f(STATE, vector_to_input(u_vec + step))
            - model.get_f(STATE, vector_to_input(u_vec - step))
        ) / (2 * eps)
        np.testing.assert_allclose(lin.b[:, j], diff, atol=1e-6)


def test_jacobian_zero_order_term(model):
    lin = model.get_model_jacobian(STATE, INPUT)
    expected = (
        model.get_f(STATE, INPUT)
        - lin.a @ state_to_vector(STATE)
        - lin.b @ input_to_vector(INPUT)
    )
    np.testing.assert_allclose(lin.g, expected)


def test_input_jacobian_entries(model):
    lin = model.get_model_jacobian(STATE, INPUT)
    assert lin.b[StateIndex.V, InputIndex.DV] == 1.0
    assert lin.b[StateIndex.W, InputIndex.DW] == 1.0
    assert lin.b[StateIndex.VS, InputIndex.DVS] == 1.0
    assert np.count_nonzero(lin.b) == 3


def test_discrete_a_is_matrix_exponential(model):
    lin_c = model.get_model_jacobian(STATE, INPUT)
    lin_d = model.discretize_model(lin_c, STATE, INPUT, STATE)
    np.testing.assert_allclose(lin_d.a, expm(lin_c.a * TS))
    assert lin_d.a[StateIndex.S, StateIndex.VS] == pytest.approx(TS)


def test_discrete_b_solves_defining_equation(model):
    lin_c = model.get_model_jacobian(STATE, INPUT)
    lin_d = model.discretize_model(lin_c, STATE, INPUT, STATE)
    np.testing.assert_allclose(
        lin_c.a @ lin_d.b, (lin_d.a - np.eye(7)) @ lin_c.b, atol=1e-12
    )


def test_discrete_b_has_no_nullspace_component(model):
    lin_c = model.get_model_jacobian(STATE, INPUT)
    lin_d = model.discretize_model(lin_c, STATE, INPUT, STATE)
    for row in (StateIndex.X, StateIndex.Y, StateIndex.S):
        np.testing.assert_allclose(lin_d.b[row], 0.0, atol=1e-12)


def test_g_is_rk4_defect_for_straight_motion(model):
    x = State(v=1.0)
    lin = model.get_lin_model(x, Input(), x)
    expected = np.zeros(7)
    expected[StateIndex.X] = TS
    np.testing.assert_allclose(lin.g, expected, atol=1e-12)


def test_g_vanishes_on_rk4_trajectory(model):
    x_next = Integrator(TS).rk4(STATE, INPUT, TS)
    lin = model.get_lin_model(STATE, INPUT, x_next)
    np.testing.assert_allclose(lin.g, 0.0, atol=1e-12)


def test_get_lin_model_composes_steps(model):
    x_next = State(1.1, 2.0, 0.72, 1.2, 0.4, 3.05, 1.1)
    direct = model.get_lin_model(STATE, INPUT, x_next)
    staged = model.discretize_model(
        model.get_model_jacobian(STATE, INPUT), STATE, INPUT, x_next
    )
    np.testing.assert_allclose(direct.a, staged.a)
    np.testing.assert_allclose(direct.b, staged.b)
    np.testing.assert_allclose(direct.g, staged.g)
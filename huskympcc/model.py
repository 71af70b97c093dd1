"""Unicycle model of the vehicle with progress dynamics and its linearisation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.linalg import expm

from .params import Param
from .types import (
    NU,
    NX,
    Input,
    InputIndex,
    State,
    StateIndex,
    input_to_vector,
    state_to_vector,
    vector_to_state,
)


@dataclass(eq=False)
class LinModelMatrix:
    """Affine model x_next = A x + B u + g."""

    a: np.ndarray
    b: np.ndarray
    g: np.ndarray


class Model:
    """Continuous dynamics f(x, u) and their successive linearisation."""

    def __init__(self, ts: float, param: Optional[Param] = None) -> None:
        self.ts = float(ts)
        self.param = param

    def get_f(self, x: State, u: Input) -> np.ndarray:
        """Time derivative of the state."""
        return np.array(
            [
                x.v * math.cos(x.th),
                x.v * math.sin(x.th),
                x.w,
                u.d_v,
                u.d_w,
                x.vs,
                u.d_vs,
            ]
        )

    def get_model_jacobian(self, x: State, u: Input) -> LinModelMatrix:
        """Continuous-time Jacobians and zero-order term at (x, u)."""
        a_c = np.zeros((NX, NX))
        b_c = np.zeros((NX, NU))

        a_c[StateIndex.X, StateIndex.TH] = -x.v * math.sin(x.th)
        a_c[StateIndex.Y, StateIndex.TH] = x.v * math.cos(x.th)
        a_c[StateIndex.X, StateIndex.V] = math.cos(x.th)
        a_c[StateIndex.Y, StateIndex.V] = math.sin(x.th)
        a_c[StateIndex.TH, StateIndex.W] = 1.0
        a_c[StateIndex.S, StateIndex.VS] = 1.0

        b_c[StateIndex.V, InputIndex.DV] = 1.0
        b_c[StateIndex.W, InputIndex.DW] = 1.0
        b_c[StateIndex.VS, InputIndex.DVS] = 1.0

        g_c = self.get_f(x, u) - a_c @ state_to_vector(x) - b_c @ input_to_vector(u)
        return LinModelMatrix(a=a_c, b=b_c, g=g_c)

    def _rk4(self, x: State, u: Input, ts: float) -> np.ndarray:
        x_vec = state_to_vector(x)
        k1 = self.get_f(x, u)
        k2 = self.get_f(vector_to_state(x_vec + ts / 2.0 * k1), u)
        k3 = self.get_f(vector_to_state(x_vec + ts / 2.0 * k2), u)
        k4 = self.get_f(vector_to_state(x_vec + ts * k3), u)
        return x_vec + ts * (k1 / 6.0 + k2 / 3.0 + k3 / 3.0 + k4 / 6.0)

    def discretize_model(
        self, lin_model_c: LinModelMatrix, x: State, u: Input, x_next: State
    ) -> LinModelMatrix:
        """Discretise: A by matrix exponential, g as the RK4 defect to x_next."""
        a_d = expm(lin_model_c.a * self.ts)
        rhs = (a_d - np.eye(NX)) @ lin_model_c.b
        # A is singular; take the minimum-norm solution of A B_d = (A_d - I) B.
        b_d = np.linalg.lstsq(lin_model_c.a, rhs, rcond=None)[0]
        g_d = self._rk4(x, u, self.ts) - state_to_vector(x_next)
        return LinModelMatrix(a=a_d, b=b_d, g=g_d)

    def get_lin_model(self, x: State, u: Input, x_next: State) -> LinModelMatrix:
        """Linearised and discretised model around (x, u)."""
        return self.discretize_model(self.get_model_jacobian(x, u), x, u, x_next)
"""Numerical integration of the vehicle model."""

from __future__ import annotations

import warnings
from typing import Optional

from .model import Model
from .params import Param
from .types import Input, State, state_to_vector, vector_to_state

FINE_TIME_STEP = 0.001
"""Step used when simulating a full sampling interval."""


class Integrator:
    """Runge-Kutta and Euler integration of the continuous dynamics."""

    def __init__(self, ts: float, param: Optional[Param] = None) -> None:
        self.model = Model(ts, param)
        self.fine_time_step = FINE_TIME_STEP

    def rk4(self, x: State, u: Input, ts: float) -> State:
        """One fourth-order Runge-Kutta step of length ts."""
        x_vec = state_to_vector(x)
        f = self.model.get_f
        k1 = f(x, u)
        k2 = f(vector_to_state(x_vec + ts / 2.0 * k1), u)
        k3 = f(vector_to_state(x_vec + ts / 2.0 * k2), u)
        k4 = f(vector_to_state(x_vec + ts * k3), u)
        return vector_to_state(x_vec + ts * (k1 / 6.0 + k2 / 3.0 + k3 / 3.0 + k4 / 6.0))

    def ef(self, x: State, u: Input, ts: float) -> State:
        """One forward Euler step of length ts."""
        return vector_to_state(state_to_vector(x) + ts * self.model.get_f(x, u))

    def sim_time_step(self, x: State, u: Input, ts: float) -> State:
        """Integrate over ts with fine RK4 steps, holding u constant."""
        ratio = ts / self.fine_time_step
        steps = int(ratio)
        if ratio != steps:
            warnings.warn(
                f"time step {ts} is not a multiple of {self.fine_time_step}",
                RuntimeWarning,
                stacklevel=2,
            )
        x_next = vector_to_state(state_to_vector(x))
        for _ in range(steps):
            x_next = self.rk4(x_next, u, self.fine_time_step)
        return x_next
"""Box bounds on states, inputs and slacks, relative to a linearisation point."""

from __future__ import annotations

import numpy as np

from .params import BoundsParam
from .types import NS, Input, State, input_to_vector, state_to_vector


class Bounds:
    """Box bounds expressed as offsets from a given state or input."""

    def __init__(self, bounds_param: BoundsParam) -> None:
        ls = bounds_param.lower_state_bounds
        us = bounds_param.upper_state_bounds
        li = bounds_param.lower_input_bounds
        ui = bounds_param.upper_input_bounds
        self.l_bounds_x = np.array(
            [ls.x_l, ls.y_l, ls.th_l, ls.v_l, ls.w_l, ls.s_l, ls.vs_l]
        )
        self.u_bounds_x = np.array(
            [us.x_u, us.y_u, us.th_u, us.v_u, us.w_u, us.s_u, us.vs_u]
        )
        self.l_bounds_u = np.array([li.dv_l, li.dw_l, li.dvs_l])
        self.u_bounds_u = np.array([ui.dv_u, ui.dw_u, ui.dvs_u])
        self.l_bounds_s = np.zeros(NS)
        self.u_bounds_s = np.zeros(NS)

    def get_bounds_lx(self, x: State) -> np.ndarray:
        """Lower state bounds minus the state."""
        return self.l_bounds_x - state_to_vector(x)

    def get_bounds_ux(self, x: State) -> np.ndarray:
        """Upper state bounds minus the state."""
        return self.u_bounds_x - state_to_vector(x)

    def get_bounds_lu(self, u: Input) -> np.ndarray:
        """Lower input bounds minus the input."""
        return self.l_bounds_u - input_to_vector(u)

    def get_bounds_uu(self, u: Input) -> np.ndarray:
        """Upper input bounds minus the input."""
        return self.u_bounds_u - input_to_vector(u)

    def get_bounds_ls(self) -> np.ndarray:
        """Lower slack bounds."""
        return self.l_bounds_s.copy()

    def get_bounds_us(self) -> np.ndarray:
        """Upper slack bounds."""
        return self.u_bounds_s.copy()
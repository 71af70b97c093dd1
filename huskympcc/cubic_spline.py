"""Natural cubic spline with periodic evaluation."""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.linalg import solve_banded


@dataclass(eq=False)
class SplineParams:
    """Coefficients of y = a + b dx + c dx^2 + d dx^3 on each segment."""

    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    d: np.ndarray


@dataclass(eq=False)
class SplineData:
    """Knots of a spline and how they are spaced."""

    x_data: np.ndarray
    y_data: np.ndarray
    is_regular: bool
    delta_x: float = 0.0
    x_map: Dict[float, int] = field(default_factory=dict)
    x_keys: List[float] = field(default_factory=list)

    @property
    def n_points(self) -> int:
        """Number of knots."""
        return len(self.x_data)


def _natural_coefficients(x: np.ndarray, y: np.ndarray) -> SplineParams:
    h = np.diff(x)
    slope = np.diff(y) / h
    n = len(x)

    rhs = np.zeros(n)
    rhs[1:-1] = 3.0 * (slope[1:] - slope[:-1])

    banded = np.zeros((3, n))
    banded[1, 0] = banded[1, -1] = 1.0
    banded[1, 1:-1] = 2.0 * (h[:-1] + h[1:])
    banded[0, 2:] = h[1:]
    banded[2, :-2] = h[:-1]

    c = solve_banded((1, 1), banded, rhs)
    b = slope - h * (c[1:] + 2.0 * c[:-1]) / 3.0
    d = (c[1:] - c[:-1]) / (3.0 * h)
    return SplineParams(a=y.copy(), b=b, c=c, d=d)


class CubicSpline:
    """One-dimensional natural cubic spline whose input wraps at the last knot."""

    def __init__(self) -> None:
        self.spline_data: Optional[SplineData] = None
        self.spline_params: Optional[SplineParams] = None

    def gen_spline(
        self, x_in: Sequence[float], y_in: Sequence[float], is_regular: bool
    ) -> None:
        """Fit the spline to the data; regular data are spaced by x_in[1] - x_in[0]."""
        x = np.asarray(x_in, dtype=float).ravel()
        y = np.asarray(y_in, dtype=float).ravel()
        if x.size != y.size:
            raise ValueError("input data does not have the same length")
        if x.size < 2:
            raise ValueError("a spline needs at least two points")
        if np.any(np.diff(x) <= 0.0):
            raise ValueError("x data must be strictly increasing")

        if is_regular:
            data = SplineData(x_data=x, y_data=y, is_regular=True, delta_x=x[1] - x[0])
        else:
            x_map = {float(value): index for index, value in enumerate(x)}
            data = SplineData(
                x_data=x, y_data=y, is_regular=False, x_map=x_map, x_keys=sorted(x_map)
            )
        self.spline_params = _natural_coefficients(x, y)
        self.spline_data = data

    def _fitted(self) -> Tuple[SplineData, SplineParams]:
        if self.spline_data is None or self.spline_params is None:
            raise RuntimeError("spline has not been generated")
        return self.spline_data, self.spline_params

    def _unwrap_input(self, data: SplineData, x: float) -> float:
        x_max = float(data.x_data[-1])
        return x - x_max * math.floor(x / x_max)

    def _index(self, data: SplineData, x: float) -> int:
        last = data.n_points - 1
        if x == data.x_data[last]:
            return last
        if data.is_regular:
            return int(math.floor(x / data.delta_x))
        position = bisect_right(data.x_keys, x)
        if position == len(data.x_keys):
            return -1
        return data.x_map[data.x_keys[position]] - 1

    def _locate(self, x: float) -> Tuple[SplineParams, int, float]:
        data, params = self._fitted()
        x = self._unwrap_input(data, float(x))
        index = self._index(data, x)
        if index < 0:
            raise ValueError(f"{x} lies outside the spline data")
        # The final knot is evaluated as the end of the last segment.
        index = min(index, data.n_points - 2)
        return params, index, x - float(data.x_data[index])

    def get_point(self, x: float) -> float:
        """Value of the spline at x."""
        params, i, dx = self._locate(x)
        return float(params.a[i] + params.b[i] * dx + params.c[i] * dx**2 + params.d[i] * dx**3)

    def get_derivative(self, x: float) -> float:
        """First derivative of the spline at x."""
        params, i, dx = self._locate(x)
        return float(params.b[i] + 2.0 * params.c[i] * dx + 3.0 * params.d[i] * dx**2)

    def get_second_derivative(self, x: float) -> float:
        """Second derivative of the spline at x."""
        params, i, dx = self._locate(x)
        return float(2.0 * params.c[i] + 6.0 * params.d[i] * dx)
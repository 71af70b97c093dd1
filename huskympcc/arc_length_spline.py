"""Two-dimensional spline of a path, parametrised by arc length."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from .cubic_spline import CubicSpline
from .params import Param
from .types import State

DEFAULT_N_SPLINE = 5000
"""Number of points the path is resampled to."""

_OUTLIER_FRACTION = 0.7
_NEWTON_ITERATIONS = 20
_NEWTON_TOLERANCE = 1e-5


@dataclass(eq=False)
class RawPath:
    """X-Y points of a path."""

    x: np.ndarray
    y: np.ndarray


@dataclass(eq=False)
class PathData:
    """X-Y points of a path with their arc length."""

    x: np.ndarray
    y: np.ndarray
    s: np.ndarray

    @property
    def n_points(self) -> int:
        """Number of points."""
        return len(self.x)


def _pair(x: Sequence[float], y: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    x_arr = np.asarray(x, dtype=float).ravel()
    y_arr = np.asarray(y, dtype=float).ravel()
    if x_arr.size != y_arr.size:
        raise ValueError("input data does not have the same length")
    return x_arr, y_arr


def comp_arc_length(x: Sequence[float], y: Sequence[float]) -> np.ndarray:
    """Cumulative straight-line distance along the points, starting at zero."""
    x_arr, y_arr = _pair(x, y)
    steps = np.hypot(np.diff(x_arr), np.diff(y_arr))
    return np.concatenate(([0.0], np.cumsum(steps)))


def outlier_removal(x: Sequence[float], y: Sequence[float]) -> RawPath:
    """Drop points closer than 0.7 of the mean spacing to the last point kept.

    The first and last points are always kept.
    """
    x_arr, y_arr = _pair(x, y)
    n_points = x_arr.size
    if n_points < 2:
        raise ValueError("a path needs at least two points")
    mean_dist = float(np.mean(np.hypot(np.diff(x_arr), np.diff(y_arr))))
    threshold = _OUTLIER_FRACTION * mean_dist

    kept = [0]
    for i in range(1, n_points - 1):
        last = kept[-1]
        if math.hypot(x_arr[i] - x_arr[last], y_arr[i] - y_arr[last]) >= threshold:
            kept.append(i)
    kept.append(n_points - 1)
    return RawPath(x=x_arr[kept].copy(), y=y_arr[kept].copy())


def _resample(
    spline_x: CubicSpline, spline_y: CubicSpline, total_length: float, n_points: int
) -> PathData:
    s = np.linspace(0.0, total_length, n_points)
    x = np.array([spline_x.get_point(value) for value in s])
    y = np.array([spline_y.get_point(value) for value in s])
    return PathData(x=x, y=y, s=s)


class ArcLengthSpline:
    """Path through X-Y points, evaluated by arc length s with wrap-around."""

    def __init__(self, param: Optional[Param] = None, n_spline: int = DEFAULT_N_SPLINE) -> None:
        if n_spline < 2:
            raise ValueError("n_spline must be at least 2")
        self.param = param
        self.n_spline = n_spline
        self.path_data: Optional[PathData] = None
        self._spline_x = CubicSpline()
        self._spline_y = CubicSpline()

    @property
    def max_dist_proj(self) -> float:
        """Distance beyond which projection restarts from the nearest point."""
        return math.inf if self.param is None else self.param.max_dist_proj

    def _path(self) -> PathData:
        if self.path_data is None:
            raise RuntimeError("spline has not been generated")
        return self.path_data

    def _fit_spline(self, x: np.ndarray, y: np.ndarray) -> None:
        # Fit, resample and recompute arc length twice, so the final points
        # are close to equidistant in arc length.
        path_x, path_y = x, y
        s_approx = comp_arc_length(path_x, path_y)
        for _ in range(2):
            spline_x = CubicSpline()
            spline_y = CubicSpline()
            spline_x.gen_spline(s_approx, path_x, False)
            spline_y.gen_spline(s_approx, path_y, False)
            refined = _resample(spline_x, spline_y, float(s_approx[-1]), self.n_spline)
            path_x, path_y = refined.x, refined.y
            s_approx = comp_arc_length(path_x, path_y)

        self.path_data = refined
        self._spline_x.gen_spline(refined.s, refined.x, True)
        self._spline_y.gen_spline(refined.s, refined.y, True)

    def gen_2d_spline(self, x: Sequence[float], y: Sequence[float]) -> None:
        """Generate the arc-length spline through the given points."""
        clean = outlier_removal(x, y)
        self._fit_spline(clean.x, clean.y)

    def get_position(self, s: float) -> np.ndarray:
        """X-Y position at arc length s."""
        self._path()
        return np.array([self._spline_x.get_point(s), self._spline_y.get_point(s)])

    def get_derivative(self, s: float) -> np.ndarray:
        """First derivative of the position with respect to s."""
        self._path()
        return np.array(
            [self._spline_x.get_derivative(s), self._spline_y.get_derivative(s)]
        )

    def get_second_derivative(self, s: float) -> np.ndarray:
        """Second derivative of the position with respect to s."""
        self._path()
        return np.array(
            [
                self._spline_x.get_second_derivative(s),
                self._spline_y.get_second_derivative(s),
            ]
        )

    def get_length(self) -> float:
        """Total arc length of the path."""
        return float(self._path().s[-1])

    def _unwrap_input(self, s: float) -> float:
        length = self.get_length()
        return s - length * math.floor(s / length)

    def project_on_spline(self, x: State) -> float:
        """Arc length of the path point closest to the vehicle position.

        Starts from x.s, or from the nearest path point when x.s lies too far
        away; returns x.s if Newton's method does not converge.
        """
        path = self._path()
        pos = np.array([x.x, x.y])
        s_guess = x.s
        s_opt = s_guess

        if np.linalg.norm(pos - self.get_position(s_guess)) >= self.max_dist_proj:
            dist_square = (path.x - pos[0]) ** 2 + (path.y - pos[1]) ** 2
            s_opt = float(path.s[int(np.argmin(dist_square))])

        s_old = s_opt
        for _ in range(_NEWTON_ITERATIONS):
            diff = self.get_position(s_opt) - pos
            ds = self.get_derivative(s_opt)
            dds = self.get_second_derivative(s_opt)
            jac = 2.0 * float(diff @ ds)
            hessian = 2.0 * float(ds @ ds) + 2.0 * float(diff @ dds)
            s_opt = self._unwrap_input(s_opt - jac / hessian)
            if abs(s_old - s_opt) <= _NEWTON_TOLERANCE:
                return s_opt
            s_old = s_opt
        return s_guess
"""Vehicle state and input containers for the unicycle model."""

from __future__ import annotations

import math
import os
from dataclasses import astuple, dataclass, fields
from enum import IntEnum
from typing import Sequence, Union

import numpy as np

NX = 7
"""Number of states."""
NU = 3
"""Number of inputs."""
NPC = 3
"""Number of polytopic constraints (track, left wheel, right wheel)."""
NS = 3
"""Number of soft constraints, one per polytopic constraint."""


class StateIndex(IntEnum):
    """Position of each state in a state vector."""

    X = 0
    Y = 1
    TH = 2
    V = 3
    W = 4
    S = 5
    VS = 6


class InputIndex(IntEnum):
    """Position of each input in an input vector."""

    DV = 0
    DW = 1
    DVS = 2


@dataclass
class State:
    """Pose, velocities and track progress of the vehicle."""

    x: float = 0.0
    y: float = 0.0
    th: float = 0.0
    v: float = 0.0
    w: float = 0.0
    s: float = 0.0
    vs: float = 0.0

    def set_zero(self) -> None:
        """Reset every state to zero."""
        for item in fields(self):
            setattr(self, item.name, 0.0)

    def unwrap(self, track_length: float) -> None:
        """Bring the heading into [-pi, pi] and progress into [0, track_length]."""
        if self.th > math.pi:
            self.th -= 2.0 * math.pi
        if self.th < -math.pi:
            self.th += 2.0 * math.pi
        if self.s > track_length:
            self.s -= track_length
        if self.s < 0:
            self.s += track_length


@dataclass
class Input:
    """Rates of change of the linear, angular and progress velocities."""

    d_v: float = 0.0
    d_w: float = 0.0
    d_vs: float = 0.0

    def set_zero(self) -> None:
        """Reset every input to zero."""
        for item in fields(self):
            setattr(self, item.name, 0.0)


PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class PathToJson:
    """Locations of the JSON parameter files."""

    param_path: PathLike
    cost_path: PathLike
    bounds_path: PathLike
    track_path: PathLike
    normalization_path: PathLike


def _as_vector(values: Sequence[float], size: int, what: str) -> np.ndarray:
    vector = np.asarray(values, dtype=float).ravel()
    if vector.shape != (size,):
        raise ValueError(f"{what} vector must have {size} entries, got {vector.size}")
    return vector


def state_to_vector(x: State) -> np.ndarray:
    """Return the state as a vector ordered by StateIndex."""
    return np.array(astuple(x), dtype=float)


def input_to_vector(u: Input) -> np.ndarray:
    """Return the input as a vector ordered by InputIndex."""
    return np.array(astuple(u), dtype=float)


def vector_to_state(xk: Sequence[float]) -> State:
    """Build a State from a vector ordered by StateIndex."""
    return State(*(float(value) for value in _as_vector(xk, NX, "state")))


def vector_to_input(uk: Sequence[float]) -> Input:
    """Build an Input from a vector ordered by InputIndex."""
    return Input(*(float(value) for value in _as_vector(uk, NU, "input")))
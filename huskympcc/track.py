"""Track geometry: centre line and inner and outer boundaries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from itertools import chain, repeat
from typing import Any, Iterable, List, Mapping, Optional

import numpy as np

from .types import PathLike

_CSV_HEADER = "x_o,y_o,x_i,y_i,x,y\n"


def scale_values(values: Iterable[float], factor: float) -> List[float]:
    """Return the values multiplied by factor."""
    return [float(value) * factor for value in values]


def _array(values: Iterable[float]) -> np.ndarray:
    return np.array(list(values), dtype=float)


@dataclass(frozen=True, eq=False)
class TrackPos:
    """Coordinates of the centre line and the two boundaries."""

    x: np.ndarray
    y: np.ndarray
    x_inner: np.ndarray
    y_inner: np.ndarray
    x_outer: np.ndarray
    y_outer: np.ndarray


@dataclass(eq=False)
class Track:
    """A track given by its outer, inner and centre points."""

    x_outer: np.ndarray = field(default_factory=lambda: np.zeros(0))
    y_outer: np.ndarray = field(default_factory=lambda: np.zeros(0))
    x_inner: np.ndarray = field(default_factory=lambda: np.zeros(0))
    y_inner: np.ndarray = field(default_factory=lambda: np.zeros(0))
    x_centre: np.ndarray = field(default_factory=lambda: np.zeros(0))
    y_centre: np.ndarray = field(default_factory=lambda: np.zeros(0))

    def __post_init__(self) -> None:
        for name in ("x_outer", "y_outer", "x_inner", "y_inner", "x_centre", "y_centre"):
            setattr(self, name, _array(getattr(self, name)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Track":
        """Build from a decoded track JSON object, scaled by its Factor."""
        factor = float(data["Factor"])
        return cls(
            x_outer=scale_values(data["X_o"], factor),
            y_outer=scale_values(data["Y_o"], factor),
            x_inner=scale_values(data["X_i"], factor),
            y_inner=scale_values(data["Y_i"], factor),
            x_centre=scale_values(data["X"], factor),
            y_centre=scale_values(data["Y"], factor),
        )

    @classmethod
    def from_file(cls, path: PathLike, csv_path: Optional[PathLike] = None) -> "Track":
        """Load a track JSON file, optionally writing the scaled track as CSV."""
        with open(path, encoding="utf-8") as handle:
            track = cls.from_dict(json.load(handle))
        if csv_path is not None:
            track.write_csv(csv_path)
        return track

    def get_track(self) -> TrackPos:
        """Return copies of the track coordinates."""
        return TrackPos(
            x=self.x_centre.copy(),
            y=self.y_centre.copy(),
            x_inner=self.x_inner.copy(),
            y_inner=self.y_inner.copy(),
            x_outer=self.x_outer.copy(),
            y_outer=self.y_outer.copy(),
        )

    def write_csv(self, path: PathLike) -> None:
        """Write one row per centre point; missing boundary points are written as 0,0."""
        padding = repeat((0.0, 0.0))
        outer = chain(zip(self.x_outer, self.y_outer), padding)
        inner = chain(zip(self.x_inner, self.y_inner), padding)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(_CSV_HEADER)
            for (xo, yo), (xi, yi), (x, y) in zip(
                outer, inner, zip(self.x_centre, self.y_centre)
            ):
                handle.write(f"{xo:g},{yo:g},{xi:g},{yi:g},{x:g},{y:g},\n")
"""Model, cost, bound and normalisation parameters loaded from JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

import numpy as np

from .types import NS, PathLike


def _key(name: str) -> Any:
    return field(metadata={"key": name})


def _number(data: Mapping[str, Any], key: str) -> float:
    try:
        raw = data[key]
    except KeyError:
        raise KeyError(f"missing parameter {key!r}") from None
    return float(raw)


def _read(cls: type, data: Mapping[str, Any]) -> dict:
    return {
        item.name: _number(data, item.metadata["key"])
        for item in fields(cls)
        if "key" in item.metadata
    }


def _load_json(path: PathLike) -> Mapping[str, Any]:
    with open(path, encoding="utf-8") as handle:
        return json.load(handle)


@dataclass(frozen=True, kw_only=True)
class Param:
    """Vehicle model and constraint parameters."""

    cm1: float = _key("Cm1")
    cm2: float = _key("Cm2")
    cr0: float = _key("Cr0")
    cr2: float = _key("Cr2")
    br: float = _key("Br")
    cr: float = _key("Cr")
    dr: float = _key("Dr")
    bf: float = _key("Bf")
    cf: float = _key("Cf")
    df: float = _key("Df")
    m: float = _key("m")
    iz: float = _key("Iz")
    lf: float = _key("lf")
    lr: float = _key("lr")
    car_l: float = _key("car_l")
    car_w: float = _key("car_w")
    husky_track: float = _key("husky_track")
    g: float = _key("g")
    r_in: float = _key("R_in")
    r_out: float = _key("R_out")
    max_dist_proj: float = _key("max_dist_proj")
    e_long: float = _key("E_long")
    e_eps: float = _key("E_eps")
    max_alpha: float = _key("maxAlpha")
    initial_velocity: float = _key("initial_velocity")
    s_trust_region: float = _key("s_trust_region")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Param":
        """Build from a decoded JSON object."""
        return cls(**_read(cls, data))

    @classmethod
    def from_file(cls, path: PathLike) -> "Param":
        """Load from a JSON file."""
        return cls.from_dict(_load_json(path))


@dataclass(frozen=True, kw_only=True)
class CostParam:
    """Weights of the contouring cost function."""

    q_c: float = _key("qC")
    q_l: float = _key("qL")
    q_vs: float = _key("qVs")
    q_mu: float = _key("qMu")
    q_w: float = _key("qW")
    q_beta: float = _key("qBeta")
    r_v: float = _key("rV")
    r_w: float = _key("rW")
    r_vs: float = _key("rVs")
    r_dv: float = _key("rdV")
    r_dw: float = _key("rdW")
    r_dvs: float = _key("rdVs")
    q_c_n_mult: float = _key("qCNmult")
    q_w_n_mult: float = _key("qWNmult")
    sc_quad_track: float = _key("sc_quad_track")
    sc_quad_tire: float = _key("sc_quad_tire")
    sc_quad_alpha: float = _key("sc_quad_alpha")
    sc_lin_track: float = _key("sc_lin_track")
    sc_lin_tire: float = _key("sc_lin_tire")
    sc_lin_alpha: float = _key("sc_lin_alpha")
    beta_kin_cost: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CostParam":
        """Build from a decoded JSON object."""
        return cls(**_read(cls, data))

    @classmethod
    def from_file(cls, path: PathLike) -> "CostParam":
        """Load from a JSON file."""
        return cls.from_dict(_load_json(path))


@dataclass(frozen=True, kw_only=True)
class LowerStateBounds:
    """Lower limits on the states."""

    x_l: float = _key("Xl")
    y_l: float = _key("Yl")
    th_l: float = _key("thl")
    v_l: float = _key("vl")
    w_l: float = _key("wl")
    s_l: float = _key("sl")
    vs_l: float = _key("vsl")


@dataclass(frozen=True, kw_only=True)
class UpperStateBounds:
    """Upper limits on the states."""

    x_u: float = _key("Xu")
    y_u: float = _key("Yu")
    th_u: float = _key("thu")
    v_u: float = _key("vu")
    w_u: float = _key("wu")
    s_u: float = _key("su")
    vs_u: float = _key("vsu")


@dataclass(frozen=True, kw_only=True)
class LowerInputBounds:
    """Lower limits on the inputs."""

    dv_l: float = _key("dVl")
    dw_l: float = _key("dWl")
    dvs_l: float = _key("dVsl")


@dataclass(frozen=True, kw_only=True)
class UpperInputBounds:
    """Upper limits on the inputs."""

    dv_u: float = _key("dVu")
    dw_u: float = _key("dWu")
    dvs_u: float = _key("dVsu")


@dataclass(frozen=True)
class BoundsParam:
    """Box limits on states and inputs."""

    lower_state_bounds: LowerStateBounds
    upper_state_bounds: UpperStateBounds
    lower_input_bounds: LowerInputBounds
    upper_input_bounds: UpperInputBounds

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BoundsParam":
        """Build from a decoded JSON object."""
        return cls(
            lower_state_bounds=LowerStateBounds(**_read(LowerStateBounds, data)),
            upper_state_bounds=UpperStateBounds(**_read(UpperStateBounds, data)),
            lower_input_bounds=LowerInputBounds(**_read(LowerInputBounds, data)),
            upper_input_bounds=UpperInputBounds(**_read(UpperInputBounds, data)),
        )

    @classmethod
    def from_file(cls, path: PathLike) -> "BoundsParam":
        """Load from a JSON file."""
        return cls.from_dict(_load_json(path))


_STATE_SCALE_KEYS = ("X", "Y", "th", "v", "w", "s", "vs")
_INPUT_SCALE_KEYS = ("dV", "dW", "dVs")


def _diagonal_pair(data: Mapping[str, Any], keys: tuple) -> tuple:
    scale = np.array([_number(data, key) for key in keys])
    zero = [key for key, value in zip(keys, scale) if value == 0.0]
    if zero:
        raise ValueError(f"normalisation factors must be non-zero: {', '.join(zero)}")
    return np.diag(scale), np.diag(1.0 / scale)


@dataclass(frozen=True, eq=False)
class NormalizationParam:
    """Diagonal scaling matrices for states, inputs and slacks."""

    t_x: np.ndarray
    t_x_inv: np.ndarray
    t_u: np.ndarray
    t_u_inv: np.ndarray
    t_s: np.ndarray
    t_s_inv: np.ndarray

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NormalizationParam":
        """Build from a decoded JSON object."""
        t_x, t_x_inv = _diagonal_pair(data, _STATE_SCALE_KEYS)
        t_u, t_u_inv = _diagonal_pair(data, _INPUT_SCALE_KEYS)
        return cls(
            t_x=t_x,
            t_x_inv=t_x_inv,
            t_u=t_u,
            t_u_inv=t_u_inv,
            t_s=np.eye(NS),
            t_s_inv=np.eye(NS),
        )

    @classmethod
    def from_file(cls, path: PathLike) -> "NormalizationParam":
        """Load from a JSON file."""
        return cls.from_dict(_load_json(path))
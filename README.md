# huskympcc

Building blocks for model predictive contouring control of a
differential-drive robot on a closed track: the vehicle state and input
types, JSON parameter loading, track geometry, cubic and arc-length
splines, the unicycle model with its linearisation, numerical integration,
and box bounds.

The vehicle is modelled as a unicycle with progress along the track. States
are `x, y, th, v, w, s, vs` (position, heading, linear and angular
velocity, arc-length progress and progress velocity); inputs are
`d_v, d_w, d_vs`, the rates of change of the three velocities.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `huskympcc.types`: the `State` and `Input` dataclasses (with
  `set_zero()`, and `State.unwrap(track_length)` which brings the heading
  back into [-pi, pi] and the progress into [0, track_length]),
  `PathToJson` (the paths of the parameter files), the index enums
  `StateIndex` and `InputIndex`, the sizes `NX`, `NU`, `NPC`, `NS`, and
  conversion to and from numpy vectors: `state_to_vector`,
  `vector_to_state`, `input_to_vector`, `vector_to_input`. Converting a
  vector of the wrong length raises `ValueError`.
- `huskympcc.params`: frozen dataclasses `Param`, `CostParam`,
  `BoundsParam` (made of `LowerStateBounds`, `UpperStateBounds`,
  `LowerInputBounds`, `UpperInputBounds`) and `NormalizationParam`. Each
  is built with `from_dict(data)` or `from_file(path)`. A missing key
  raises `KeyError`; a zero normalisation factor raises `ValueError`.
  `NormalizationParam` holds the diagonal matrices `t_x`, `t_u`, `t_s` and
  their inverses.
- `huskympcc.track`: `Track` holds the outer, inner and centre points.
  `Track.from_dict` and `Track.from_file(path, csv_path=None)` read the
  JSON keys `X`, `Y`, `X_i`, `Y_i`, `X_o`, `Y_o` and multiply every
  coordinate by `Factor`; when `csv_path` is given the scaled track is also
  written there by `write_csv`. `get_track()` returns a `TrackPos` with
  copies of the arrays `x`, `y`, `x_inner`, `y_inner`, `x_outer`,
  `y_outer`. `scale_values(values, factor)` is the scaling helper.
- `huskympcc.cubic_spline`: `CubicSpline`, a natural cubic spline.
  `gen_spline(x_in, y_in, is_regular)` fits it (x must be strictly
  increasing, with at least two points); `get_point`,
  `get_derivative` and `get_second_derivative` evaluate it, wrapping the
  input periodically at the last knot.
- `huskympcc.arc_length_spline`: `ArcLengthSpline(param=None,
  n_spline=5000)`. `gen_2d_spline(x, y)` drops points closer than 0.7 of the
  mean spacing (`outlier_removal`), then fits and resamples twice so the
  `n_spline` points are nearly equidistant in arc length. It offers
  `get_position(s)`, `get_derivative(s)`, `get_second_derivative(s)`,
  `get_length()` and `project_on_spline(state)`, which finds the arc length
  of the closest path point by Newton's method (starting from the nearest
  sample when the state is further than `param.max_dist_proj` from the
  guess, and returning `state.s` when it does not converge).
  `comp_arc_length(x, y)` gives the cumulative straight-line distance.
- `huskympcc.model`: `Model(ts, param=None)` with `get_f(x, u)` (the
  continuous dynamics), `get_model_jacobian`, `discretize_model` and
  `get_lin_model(x, u, x_next)`, which returns a `LinModelMatrix` with
  `a` from the matrix exponential, `b` as the minimum-norm solution of
  `A B_d = (A_d - I) B`, and `g` as the gap between one RK4 step and
  `x_next`.
- `huskympcc.integrator`: `Integrator(ts, param=None)` with `rk4`, `ef`
  (forward Euler) and `sim_time_step(x, u, ts)`, which integrates with
  RK4 steps of 0.001 s and issues a `RuntimeWarning` when `ts` is not a
  whole multiple of that step.
- `huskympcc.bounds`: `Bounds(bounds_param)` returns the state and input
  limits as offsets from a given state or input (`get_bounds_lx`,
  `get_bounds_ux`, `get_bounds_lu`, `get_bounds_uu`) and zero slack bounds
  (`get_bounds_ls`, `get_bounds_us`).

## Example

```python
import math

from huskympcc.arc_length_spline import ArcLengthSpline
from huskympcc.integrator import Integrator
from huskympcc.track import Track
from huskympcc.types import Input, State

angles = [2 * math.pi * k / 40 for k in range(41)]
track = Track.from_dict({
    "Factor": 1.0,
    "X": [10 * math.cos(a) for a in angles],
    "Y": [10 * math.sin(a) for a in angles],
    "X_i": [9 * math.cos(a) for a in angles],
    "Y_i": [9 * math.sin(a) for a in angles],
    "X_o": [11 * math.cos(a) for a in angles],
    "Y_o": [11 * math.sin(a) for a in angles],
})
track_xy = track.get_track()

spline = ArcLengthSpline()
spline.gen_2d_spline(track_xy.x, track_xy.y)
print("track length", spline.get_length())

integrator = Integrator(0.05)
state = State(x=10.0, y=0.0, th=math.pi / 2, v=1.0)
state = integrator.rk4(state, Input(), 0.05)
state.s = spline.project_on_spline(state)
print("progress", state.s)
```

## What the package does not do

It provides the model, geometry, parameters and bounds, but not the
controller built on them: there is no cost function, no track or
wheel-speed constraint linearisation, no quadratic-program solver and no
control loop. There is also no command-line program and no plotting.
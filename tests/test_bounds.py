import numpy as np
import pytest

from huskympcc.bounds import Bounds
from huskympcc.params import BoundsParam
from huskympcc.types import NS, Input, State, input_to_vector, state_to_vector

_DATA = {
    "Xl": -10.0, "Yl": -20.0, "thl": -30.0, "vl": -1.0, "wl": -2.0, "sl": 0.0, "vsl": 0.0,
    "Xu": 10.0, "Yu": 20.0, "thu": 30.0, "vu": 1.0, "wu": 2.0, "su": 100.0, "vsu": 3.0,
    "dVl": -4.0, "dWl": -5.0, "dVsl": -6.0,
    "dVu": 4.0, "dWu": 5.0, "dVsu": 6.0,
}

_LOWER_X = [-10.0, -20.0, -30.0, -1.0, -2.0, 0.0, 0.0]
_UPPER_X = [10.0, 20.0, 30.0, 1.0, 2.0, 100.0, 3.0]


@pytest.fixture
def bounds():
    return Bounds(BoundsParam.from_dict(_DATA))


def test_zero_state_gives_raw_bounds(bounds):
    assert list(bounds.get_bounds_lx(State())) == _LOWER_X
    assert list(bounds.get_bounds_ux(State())) == _UPPER_X


def test_zero_input_gives_raw_bounds(bounds):
    assert list(bounds.get_bounds_lu(Input())) == [-4.0, -5.0, -6.0]
    assert list(bounds.get_bounds_uu(Input())) == [4.0, 5.0, 6.0]


def test_state_bounds_are_offsets(bounds):
    x = State(1.0, 2.0, 0.5, 0.3, -0.1, 7.0, 0.4)
    assert bounds.get_bounds_lx(x) + state_to_vector(x) == pytest.approx(_LOWER_X)
    assert bounds.get_bounds_ux(x) - bounds.get_bounds_lx(x) == pytest.approx(
        np.subtract(_UPPER_X, _LOWER_X)
    )


def test_input_bounds_are_offsets(bounds):
    u = Input(0.5, -0.5, 1.0)
    assert bounds.get_bounds_uu(u) + input_to_vector(u) == pytest.approx([4.0, 5.0, 6.0])


def test_slack_bounds_are_zero(bounds):
    assert np.array_equal(bounds.get_bounds_ls(), np.zeros(NS))
    assert np.array_equal(bounds.get_bounds_us(), np.zeros(NS))


def test_missing_key_raises():
    data = dict(_DATA)
    del data["vu"]
    with pytest.raises(KeyError):
        Bounds(BoundsParam.from_dict(data))
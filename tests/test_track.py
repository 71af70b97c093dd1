import json

import numpy as np
import pytest

from huskympcc.track import Track, scale_values


@pytest.fixture
def track_data():
    return {
        "Factor": 1,
        "X": [0.0, 1.0, 2.0, 3.0],
        "Y": [0.0, 0.5, 1.0, 1.5],
        "X_i": [0.0, 1.0, 2.0],
        "Y_i": [1.0, 1.5, 2.0],
        "X_o": [0.0, 1.0],
        "Y_o": [-1.0, -0.5],
    }


def test_scale_values_identity_and_zero():
    values = [1.5, -2.0, 3.25]
    assert scale_values(values, 1.0) == values
    assert scale_values(values, 0.0) == [0.0, 0.0, 0.0]


def test_scale_values_example():
    assert scale_values([1, 2], 2) == [2.0, 4.0]


def test_from_dict_applies_factor(track_data):
    plain = Track.from_dict(track_data)
    scaled = Track.from_dict(dict(track_data, Factor=3))
    assert np.allclose(scaled.x_centre, 3 * plain.x_centre)
    assert np.allclose(scaled.y_inner, 3 * plain.y_inner)
    assert np.allclose(scaled.x_outer, 3 * plain.x_outer)


def test_from_dict_keeps_values_with_unit_factor(track_data):
    track = Track.from_dict(track_data)
    assert list(track.x_centre) == track_data["X"]
    assert list(track.y_outer) == track_data["Y_o"]


def test_from_dict_missing_factor(track_data):
    del track_data["Factor"]
    with pytest.raises(KeyError):
        Track.from_dict(track_data)


def test_get_track_returns_copies(track_data):
    track = Track.from_dict(track_data)
    pos = track.get_track()
    assert list(pos.x) == track_data["X"]
    assert list(pos.y_inner) == track_data["Y_i"]
    pos.x[0] = 99.0
    assert track.x_centre[0] == track_data["X"][0]


def test_constructor_from_lists():
    track = Track([0, 1], [2, 3], [4, 5], [6, 7], [8, 9], [10, 11])
    pos = track.get_track()
    assert list(pos.x_outer) == [0, 1]
    assert list(pos.y_outer) == [2, 3]
    assert list(pos.x) == [8, 9]
    assert list(pos.y) == [10, 11]


def test_empty_track():
    pos = Track().get_track()
    assert pos.x.size == 0
    assert pos.y_outer.size == 0


def test_write_csv_rows_and_padding(tmp_path, track_data):
    track = Track.from_dict(track_data)
    out = tmp_path / "track.csv"
    track.write_csv(out)
    lines = out.read_text().splitlines()
    assert lines[0] == "x_o,y_o,x_i,y_i,x,y"
    assert len(lines) == len(track_data["X"]) + 1
    assert lines[1] == "0,-1,0,1,0,0,"
    assert lines[-1].startswith("0,0,0,0,")
    assert all(line.endswith(",") for line in lines[1:])


def test_from_file_writes_csv(tmp_path, track_data):
    json_path = tmp_path / "track.json"
    json_path.write_text(json.dumps(track_data))
    csv_path = tmp_path / "out.csv"
    track = Track.from_file(json_path, csv_path)
    assert list(track.x_inner) == track_data["X_i"]
    assert csv_path.read_text().splitlines()[0] == "x_o,y_o,x_i,y_i,x,y"


def test_from_file_without_csv(tmp_path, track_data):
    json_path = tmp_path / "track.json"
    json_path.write_text(json.dumps(track_data))
    track = Track.from_file(json_path)
    assert list(track.y_centre) == track_data["Y"]
    assert sorted(p.name for p in tmp_path.iterdir()) == ["track.json"]
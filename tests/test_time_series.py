import pytest

from dji_metrology.geo import haversine_m
from dji_metrology.parser import parse_srt
from dji_metrology.time_series import FRAME_COLUMNS, metrology_to_frame, summarize_flight


@pytest.fixture
def metrology(flight_srt):
    return parse_srt(flight_srt)


def test_frame_has_one_row_per_sample(metrology):
    df = metrology_to_frame(metrology)

    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == len(metrology)
    assert df["start_s"].tolist() == [0.0, 1.0, 2.0, 3.0, 4.0]
    assert df["end_s"].iloc[-1] == 5.0


def test_frame_distances(metrology):
    df = metrology_to_frame(metrology)

    assert df["segment_distance_m"].iloc[0] == 0
    assert df["segment_distance_m"].iloc[1] == pytest.approx(
        haversine_m(46.8450, -69.9190, 46.8451, -69.9190)
    )
    # sample 4 repeats sample 3's position
    assert df["segment_distance_m"].iloc[3] == 0
    assert df["distance_along_m"].is_monotonic_increasing
    assert df["distance_along_m"].iloc[-1] == pytest.approx(df["segment_distance_m"].sum())


def test_empty_frame_keeps_columns():
    df = metrology_to_frame([])
    assert df.empty
    assert list(df.columns) == FRAME_COLUMNS


def test_summarize_flight(metrology):
    summary = summarize_flight(metrology)

    assert summary["sample_count"] == 5
    assert summary["duration_s"] == 5.0
    assert summary["max_altitude_m"] == 12.0
    assert summary["min_altitude_m"] == 0.0
    assert summary["max_horizontal_speed_mps"] == 1.0
    assert summary["max_distance_to_home_m"] == 31.42
    assert summary["travelled_distance_m"] > 100
    assert summary["first_position"] == {"lat": 46.845, "lon": -69.919}
    assert summary["last_position"] == {"lat": 46.846, "lon": -69.9189}


def test_summarize_empty_flight():
    summary = summarize_flight([])

    assert summary["sample_count"] == 0
    assert summary["travelled_distance_m"] == 0.0
    assert summary["max_altitude_m"] is None
    assert summary["first_position"] is None

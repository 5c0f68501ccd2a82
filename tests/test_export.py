import json
from datetime import timedelta

import pytest

from dji_metrology.export import export_csv, export_fusion, export_json, export_metrology, load_json
from dji_metrology.model import RECORD_KEYS, Sample, sample_from_record, sample_to_record
from dji_metrology.parser import parse_srt


@pytest.fixture
def metrology(flight_srt):
    return parse_srt(flight_srt)


def test_json_uses_record_keys(metrology):
    records = json.loads(export_json(metrology))

    assert len(records) == len(metrology)
    assert list(records[0].keys()) == list(RECORD_KEYS.values())
    assert records[0]["start"] == "00:00:00,000"
    assert records[0]["satelliteCount"] == 19
    assert records[0]["distanceToHome"] == 31.42


def test_json_is_tab_indented(metrology):
    assert export_json(metrology).startswith("[\n\t{\n\t\t\"id\": 1,")


def test_json_round_trip_is_lossless(metrology):
    restored = load_json(export_json(metrology))

    assert restored == metrology
    assert restored[2].bearing == metrology[2].bearing
    assert isinstance(restored[0].iso, int)


def test_json_round_trip_of_empty_metrology():
    assert export_json([]) == "[]"
    assert load_json("[]") == []


@pytest.mark.parametrize("document", ['{"id": 1}', "[1, 2]"])
def test_load_json_rejects_other_documents(document):
    with pytest.raises(ValueError):
        load_json(document)


def test_record_round_trip_keeps_defaults_for_missing_keys():
    sample = sample_from_record({"id": 9, "end": "00:00:10,000"})
    assert sample == Sample(id=9, end=timedelta(seconds=10))
    assert sample_to_record(sample)["start"] == "00:00:00,000"


def test_fusion_keyframes_use_id_times_thirty(metrology):
    output = export_fusion(metrology)

    assert "DroneWidth = BezierSpline {" in output
    assert "DroneHeight = BezierSpline {" in output
    # altitude spline: sample 4 is at 11.8 m
    assert "[120] = { 11.8, LH = { 20, 0.666666666666667 }" in output
    # bearing spline: the first sample has no heading yet
    assert "[30] = { 0.0, LH" in output
    assert output.count("[150] = {") == 2


def test_fusion_bearing_values(metrology):
    output = export_fusion(metrology)
    assert f"[90] = {{ {metrology[2].bearing}, LH" in output


def test_fusion_with_no_samples_has_no_keyframes():
    output = export_fusion([])
    assert "KeyFrames = {\n\t\t\t}" in output
    assert "LH = {" not in output


def test_csv_has_header_and_one_row_per_sample(metrology):
    lines = export_csv(metrology).splitlines()

    assert lines[0] == ",".join(RECORD_KEYS.values())
    assert len(lines) == len(metrology) + 1
    assert lines[1].startswith('1,"00:00:00,000","00:00:01,000",2.8,141.87,110,-0.7,1,')


def test_export_metrology_dispatches_on_format(metrology):
    assert export_metrology(metrology, "json") == export_json(metrology)
    assert export_metrology(metrology, "fusion") == export_fusion(metrology)
    assert export_metrology(metrology, "csv") == export_csv(metrology)


def test_export_metrology_rejects_unknown_format(metrology):
    with pytest.raises(ValueError, match="Unknown format"):
        export_metrology(metrology, "xml")

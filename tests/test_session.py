import json

import pytest

from dji_metrology.errors import InvalidInput
from dji_metrology.parser import ParserConfig
from dji_metrology.session import build_session_payload, load_metrology


def test_load_metrology_reads_the_whole_file(flight_file):
    metrology, diagnostics = load_metrology(flight_file)

    assert [s.id for s in metrology] == [1, 2, 3, 4, 5]
    assert diagnostics == []


def test_load_metrology_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_metrology(tmp_path / "missing.srt")


def test_load_metrology_too_short_file(tmp_path):
    path = tmp_path / "short.srt"
    path.write_bytes(b"1\n")
    with pytest.raises(InvalidInput):
        load_metrology(path)


def test_build_session_payload(flight_file):
    payload = build_session_payload(flight_file)

    assert set(payload) == {"metrology", "summary", "diagnostics"}
    assert len(payload["metrology"]) == 5
    assert payload["summary"]["sample_count"] == 5
    assert payload["diagnostics"] == []
    # payload must be JSON serializable as-is
    json.dumps(payload)


def test_build_session_payload_reports_diagnostics(tmp_path, flight_srt):
    path = tmp_path / "bad.srt"
    path.write_bytes(flight_srt.replace(b"ISO 110", b"ISO x", 1))

    payload = build_session_payload(path)

    assert payload["diagnostics"] == [
        {"line": 3, "kind": "MalformedNumericField", "message": "Field 'iso' is not numeric: 'x'"}
    ]
    assert payload["metrology"][0]["iso"] == 0


def test_build_session_payload_strict(tmp_path, flight_srt):
    path = tmp_path / "bad.srt"
    path.write_bytes(flight_srt.replace(b"ISO 110", b"ISO x", 1))

    with pytest.raises(ValueError):
        build_session_payload(path, ParserConfig(strict=True))

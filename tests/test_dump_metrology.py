import json

from dump_metrology import main


def test_json_output(flight_file, capsys):
    assert main(["-srtfile", str(flight_file)]) == 0

    records = json.loads(capsys.readouterr().out)
    assert [r["id"] for r in records] == [1, 2, 3, 4, 5]
    assert records[0]["verticalSpeed"] == 0.7


def test_fusion_output(flight_file, capsys):
    assert main(["-srtfile", str(flight_file), "-format", "fusion"]) == 0
    assert "[150] = {" in capsys.readouterr().out


def test_csv_output(flight_file, capsys):
    assert main(["-srtfile", str(flight_file), "-format", "csv"]) == 0
    assert capsys.readouterr().out.startswith("id,start,end,")


def test_legacy_vertical_speed(flight_file, capsys):
    assert main(["-srtfile", str(flight_file), "-legacy-vertical-speed"]) == 0
    assert json.loads(capsys.readouterr().out)[0]["verticalSpeed"] == 1.0


def test_missing_file_exits_non_zero(tmp_path, capsys):
    assert main(["-srtfile", str(tmp_path / "missing.srt")]) == 1
    assert capsys.readouterr().out == ""


def test_invalid_input_exits_non_zero(tmp_path):
    path = tmp_path / "short.srt"
    path.write_bytes(b"1")
    assert main(["-srtfile", str(path)]) == 1


def test_strict_mode_exits_non_zero_on_malformed_field(tmp_path, flight_srt):
    path = tmp_path / "bad.srt"
    path.write_bytes(flight_srt.replace(b"ISO 110", b"ISO x", 1))

    assert main(["-srtfile", str(path)]) == 0
    assert main(["-srtfile", str(path), "-strict"]) == 1

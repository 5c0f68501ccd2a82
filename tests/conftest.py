import pytest

BOM = "\ufeff"

DATA_LINE = (
    "F/2.8, SS 141.87, ISO 110, EV -0.7, DZOOM 1.000, "
    "GPS ({lon}, {lat}, 19), D 31.42m, H {alt}m, H.S 1.00m/s, V.S 0.70m/s"
)

# (id, start, end, lon, lat, altitude)
FLIGHT = [
    (1, "00:00:00,000", "00:00:01,000", "-69.9190", "46.8450", "0.00"),
    (2, "00:00:01,000", "00:00:02,000", "-69.9190", "46.8451", "5.00"),
    (3, "00:00:02,000", "00:00:03,000", "-69.9189", "46.8452", "8.50"),
    (4, "00:00:03,000", "00:00:04,000", "-69.9189", "46.8452", "11.80"),
    (5, "00:00:04,000", "00:00:05,000", "-69.9189", "46.8460", "12.00"),
]


def make_block(sample_id, start, end, lon, lat, alt="11.80"):
    return "\n".join([
        str(sample_id),
        f"{start} --> {end}",
        DATA_LINE.format(lon=lon, lat=lat, alt=alt),
    ])


def make_srt(blocks, newline="\n", bom=True) -> bytes:
    text = ("\n\n".join(blocks) + "\n").replace("\n", newline)
    return ((BOM if bom else "") + text).encode("utf-8")


@pytest.fixture
def flight_srt() -> bytes:
    return make_srt([make_block(*row) for row in FLIGHT])


@pytest.fixture
def flight_file(tmp_path, flight_srt):
    path = tmp_path / "DJI_0023.srt"
    path.write_bytes(flight_srt)
    return path

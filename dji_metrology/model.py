"""
Telemetry Data Model for DJI SRT Metrology

A Sample is one subtitle block of drone telemetry. A Metrology is the ordered
list of samples in the order they appear in the file (ids are neither unique
nor contiguous).
"""

from dataclasses import dataclass, field, fields
from datetime import timedelta
from typing import Dict, List

from .timecode import format_time_token, parse_time_token


@dataclass
class Sample:
    id: int = 0
    start: timedelta = field(default_factory=timedelta)
    end: timedelta = field(default_factory=timedelta)
    f_stop: float = 0.0
    shutter: float = 0.0
    iso: int = 0
    ev: float = 0.0
    zoom: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    satellite_count: int = 0        # number of connected satellites
    bearing: float = 0.0            # direction in degrees (0 = north), derived
    distance_to_home: float = 0.0   # meters
    altitude: float = 0.0           # meters
    horizontal_speed: float = 0.0   # meters/second
    vertical_speed: float = 0.0     # meters/second


Metrology = List[Sample]

# Attribute name -> exported record key
RECORD_KEYS: Dict[str, str] = {
    "id": "id",
    "start": "start",
    "end": "end",
    "f_stop": "fStop",
    "shutter": "shutter",
    "iso": "iso",
    "ev": "ev",
    "zoom": "zoom",
    "latitude": "latitude",
    "longitude": "longitude",
    "satellite_count": "satelliteCount",
    "bearing": "bearing",
    "distance_to_home": "distanceToHome",
    "altitude": "altitude",
    "horizontal_speed": "horizontalSpeed",
    "vertical_speed": "verticalSpeed",
}

_TIME_FIELDS = ("start", "end")


def sample_to_record(sample: Sample) -> Dict:
    """
    Convert a Sample to a JSON-ready record dictionary.

    Times become SRT timecodes ("00:00:43,000"); every other field keeps its
    Python type.
    """
    record = {}
    for f in fields(Sample):
        value = getattr(sample, f.name)
        if f.name in _TIME_FIELDS:
            value = format_time_token(value)
        record[RECORD_KEYS[f.name]] = value
    return record


def sample_from_record(record: Dict) -> Sample:
    """
    Rebuild a Sample from a record produced by sample_to_record().

    Missing keys keep the Sample defaults.

    Raises:
        MalformedTimeToken: If a start/end value is not a valid timecode.
    """
    kwargs = {}
    for f in fields(Sample):
        key = RECORD_KEYS[f.name]
        if key not in record:
            continue
        value = record[key]
        if f.name in _TIME_FIELDS:
            value = parse_time_token(value)
        kwargs[f.name] = value
    return Sample(**kwargs)


def metrology_to_records(metrology: Metrology) -> List[Dict]:
    """Convert a whole Metrology to a list of record dictionaries."""
    return [sample_to_record(sample) for sample in metrology]

"""
SRT Record Parsing for DJI SRT Metrology

This module decodes the subtitle track a DJI Mini 2 writes next to its video
into an ordered list of telemetry samples.

Extract the subtitle track from a movie with ffmpeg:
    ffmpeg -txt_format text -i DJI_0023.MP4 DJI_0023.srt

Each block looks like:
    44
    00:00:43,000 --> 00:00:44,000
    F/2.8, SS 141.87, ISO 110, EV -0.7, DZOOM 1.000, GPS (-69.9191, 46.8451, 19), D 31.42m, H 11.80m, H.S 1.00m/s, V.S 0.70m/s
"""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, List, Optional

from . import constants
from .errors import InvalidInput, MalformedNumericField, MalformedTimeToken
from .geo import Point, bearing_to
from .model import Metrology, Sample
from .timecode import parse_time_token
from .utils import to_float, to_int

logger = logging.getLogger(__name__)

# Data line captures: (group name, Sample attribute, converter)
_DATA_FIELDS = (
    ("fstop", "f_stop", to_float),
    ("shutter", "shutter", to_float),
    ("iso", "iso", to_int),
    ("ev", "ev", to_float),
    ("zoom", "zoom", to_int),
    ("lon", "longitude", to_float),
    ("lat", "latitude", to_float),
    ("sat", "satellite_count", to_int),
    ("dth", "distance_to_home", to_float),
    ("alt", "altitude", to_float),
    ("hspeed", "horizontal_speed", to_float),
    ("vspeed", "vertical_speed", to_float),
)


@dataclass(frozen=True)
class ParserConfig:
    """
    Parser behaviour switches.

    Attributes:
        strict: Raise on malformed numeric fields and time tokens instead of
            coercing them to zero.
        legacy_vertical_speed: Copy the horizontal speed into vertical_speed,
            as older exporters did, instead of reading the V.S field.
    """

    strict: bool = False
    legacy_vertical_speed: bool = False


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while parsing one line."""

    line_number: int
    kind: str
    message: str

    def to_dict(self) -> dict:
        return {"line": self.line_number, "kind": self.kind, "message": self.message}


class SrtParser:
    """
    Line-oriented SRT telemetry parser.

    Patterns are compiled once per instance. A parser carries no per-call
    state, so one instance can serve any number of parse() calls.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self._index_re = re.compile(r"^([0-9]+)$")
        self._time_re = re.compile(r"([0-9:.,]*) --> ([0-9:.,]*)")
        self._data_re = re.compile(
            r"F/(?P<fstop>[^,]*), SS (?P<shutter>[^,]*), ISO (?P<iso>[^,]*), "
            r"EV (?P<ev>[^,]*), DZOOM (?P<zoom>[^,]*), "
            r"GPS \((?P<lon>[^,]*), (?P<lat>[^,]*), (?P<sat>[^)]*)\), "
            r"D (?P<dth>[^,]*?)m, H (?P<alt>[^,]*?)m, "
            r"H\.S (?P<hspeed>[^,]*?)m/s. V\.S (?P<vspeed>[^,]*?)m/s"
        )

    def parse(self, raw: bytes, diagnostics: Optional[List[Diagnostic]] = None) -> Metrology:
        """
        Parse raw SRT bytes into a Metrology.

        Blank lines close the current block: the in-progress sample is
        discarded and a fresh one started. Lines matching no pattern are
        ignored.

        Args:
            raw: Full file contents. The first BOM_LENGTH bytes are skipped.
            diagnostics: Optional list receiving a Diagnostic for each
                recovered error.

        Returns:
            Samples in input order.

        Raises:
            InvalidInput: If raw is non-empty but shorter than BOM_LENGTH.
            MalformedNumericField, MalformedTimeToken: In strict mode only.
        """
        if not raw:
            return []
        if len(raw) < constants.BOM_LENGTH:
            raise InvalidInput(len(raw))

        text = raw[constants.BOM_LENGTH:].decode("utf-8", errors="replace")
        lines = text.split("\n")

        metrology: Metrology = []
        data = Sample()

        def report(line_number: int, error: Exception) -> None:
            diagnostic = Diagnostic(line_number, type(error).__name__, str(error))
            logger.warning("srt: line %d: %s", line_number, diagnostic.message)
            if diagnostics is not None:
                diagnostics.append(diagnostic)

        for line_number, line in enumerate(lines, start=1):
            line = line.rstrip("\r")
            if line == "":
                data = Sample()
                continue

            id_match = self._index_re.match(line)
            if id_match:
                data.id = self._convert(to_int, id_match.group(1), "id", line_number, report)
                continue

            time_match = self._time_re.search(line)
            if time_match:
                data.start = self._read_time(time_match.group(1), line_number, report)
                data.end = self._read_time(time_match.group(2), line_number, report)
                continue

            data_match = self._data_re.search(line)
            if data_match:
                self._read_data_fields(data, data_match, line_number, report)

                # Compute heading (bearing) once two samples are known
                if len(metrology) > 1:
                    previous = metrology[-1]
                    bearing = bearing_to(
                        Point(previous.latitude, previous.longitude),
                        Point(data.latitude, data.longitude),
                    )
                    # Exact 0/180 comes from duplicate fixes: keep the last heading
                    if bearing == 0 or bearing == 180:
                        data.bearing = previous.bearing
                    else:
                        data.bearing = bearing

                metrology.append(data)
                data = Sample()
                continue

            logger.debug("srt: line %d ignored: %r", line_number, line)

        logger.info("srt: decoded %d samples from %d lines", len(metrology), len(lines))
        return metrology

    def _read_time(self, token: str, line_number: int, report: Callable) -> timedelta:
        try:
            return parse_time_token(token)
        except MalformedTimeToken as exc:
            if self.config.strict:
                raise
            report(line_number, exc)
            return timedelta()

    def _read_data_fields(self, data: Sample, match, line_number: int, report: Callable) -> None:
        for group, attr, convert in _DATA_FIELDS:
            if group == "vspeed" and self.config.legacy_vertical_speed:
                group = "hspeed"
            value = self._convert(convert, match.group(group), attr, line_number, report)
            setattr(data, attr, value)

    def _convert(self, convert: Callable, text: str, attr: str, line_number: int, report: Callable):
        try:
            return convert(text, attr)
        except MalformedNumericField as exc:
            if self.config.strict:
                raise
            report(line_number, exc)
            return 0.0 if convert is to_float else 0


_default_parser = SrtParser()


def parse_srt(raw: bytes, config: Optional[ParserConfig] = None,
              diagnostics: Optional[List[Diagnostic]] = None) -> Metrology:
    """
    Parse raw SRT bytes with a shared parser, or a new one for a custom config.

    See SrtParser.parse() for the full contract.
    """
    parser = _default_parser if config is None else SrtParser(config)
    return parser.parse(raw, diagnostics)

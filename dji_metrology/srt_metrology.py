"""
DJI SRT Metrology Module

This module parses DJI Mini 2 subtitle telemetry into structured samples and
exports them for analysis or video compositing.

This file serves as the public entry point: it imports and re-exports the
functions spread over the modular structure.
"""

# Import constants
from .constants import DATA_DIR, DEFAULT_SRT_FILE, FRAMES_PER_SECOND, OUTPUT_FORMATS

# Import errors
from .errors import (
    MetrologyError,
    InvalidInput,
    MalformedTimeToken,
    MalformedNumericField,
)

# Import timecode functions
from .timecode import (
    make_time,
    parse_time_token,
    format_time_token,
)

# Import geodesy functions
from .geo import (
    Point,
    bearing_to,
    haversine_m,
)

# Import data model
from .model import (
    Sample,
    Metrology,
    sample_to_record,
    sample_from_record,
    metrology_to_records,
)

# Import parser
from .parser import (
    ParserConfig,
    Diagnostic,
    SrtParser,
    parse_srt,
)

# Import time series functions
from .time_series import (
    metrology_to_frame,
    summarize_flight,
)

# Import export functions
from .export import (
    export_json,
    load_json,
    export_fusion,
    export_csv,
    export_metrology,
)

# Import session builder functions
from .session import (
    load_metrology,
    build_session_payload,
    build_payload,
)

__all__ = [
    # Constants
    "DATA_DIR",
    "DEFAULT_SRT_FILE",
    "FRAMES_PER_SECOND",
    "OUTPUT_FORMATS",
    # Errors
    "MetrologyError",
    "InvalidInput",
    "MalformedTimeToken",
    "MalformedNumericField",
    # Timecode
    "make_time",
    "parse_time_token",
    "format_time_token",
    # Geodesy
    "Point",
    "bearing_to",
    "haversine_m",
    # Model
    "Sample",
    "Metrology",
    "sample_to_record",
    "sample_from_record",
    "metrology_to_records",
    # Parser
    "ParserConfig",
    "Diagnostic",
    "SrtParser",
    "parse_srt",
    # Time series
    "metrology_to_frame",
    "summarize_flight",
    # Export
    "export_json",
    "load_json",
    "export_fusion",
    "export_csv",
    "export_metrology",
    # Session builder
    "load_metrology",
    "build_session_payload",
    "build_payload",
]

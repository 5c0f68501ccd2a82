"""
Session Builder for DJI SRT Metrology

This module orchestrates the complete pipeline, from the raw SRT file on
disk to a payload with samples, flight summary and parse diagnostics.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from . import constants
from . import parser
from . import time_series
from .model import Metrology, metrology_to_records

logger = logging.getLogger(__name__)


def load_metrology(srt_file: Path = Path(constants.DEFAULT_SRT_FILE),
                   config: Optional[parser.ParserConfig] = None
                   ) -> Tuple[Metrology, List[parser.Diagnostic]]:
    """
    Read an SRT file fully into memory and parse it.

    Args:
        srt_file: Path to the .srt file. Defaults to DEFAULT_SRT_FILE.
        config: Parser configuration. Defaults to lenient parsing.

    Returns:
        Tuple of (metrology, diagnostics).

    Raises:
        OSError: If the file cannot be read.
        InvalidInput: If the file is too short to be an SRT track.
    """
    srt_file = Path(srt_file)
    logger.info("Loading SRT telemetry from %s", srt_file)
    raw = srt_file.read_bytes()

    diagnostics: List[parser.Diagnostic] = []
    metrology = parser.parse_srt(raw, config=config, diagnostics=diagnostics)
    return metrology, diagnostics


def build_session_payload(srt_file: Path = Path(constants.DEFAULT_SRT_FILE),
                          config: Optional[parser.ParserConfig] = None) -> Dict:
    """
    Build complete session payload for one SRT file.

    Main entry point that orchestrates the pipeline:
    1. Reads and parses the SRT file
    2. Builds sample records
    3. Summarizes the flight

    Args:
        srt_file: Path to the .srt file.
        config: Parser configuration. Defaults to lenient parsing.

    Returns:
        Dictionary containing:
        - metrology: List of sample records
        - summary: Flight summary figures
        - diagnostics: Recovered parse errors
    """
    metrology, diagnostics = load_metrology(srt_file, config)
    return build_payload(metrology, diagnostics)


def build_payload(metrology: Metrology, diagnostics: List[parser.Diagnostic]) -> Dict:
    """Assemble the session payload from already parsed samples."""
    return {
        "metrology": metrology_to_records(metrology),
        "summary": time_series.summarize_flight(metrology),
        "diagnostics": [d.to_dict() for d in diagnostics],
    }

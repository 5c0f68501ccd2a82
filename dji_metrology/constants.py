"""
Constants for DJI SRT Metrology

This module defines path constants and format defaults used throughout the
SRT parsing and export pipeline.
"""

import os
from pathlib import Path

# SRT Data folder is one level up from dji_metrology/, unless overridden
DATA_DIR = Path(os.environ.get(
    "METROLOGY_DATA_DIR",
    Path(__file__).parent.parent / "SRT Data",
))
DEFAULT_SRT_FILE = "sample.srt"

# Leading marker bytes written by the drone's subtitle tool
BOM_LENGTH = 3

# Fusion keyframes are placed at id * FRAMES_PER_SECOND
FRAMES_PER_SECOND = 30

OUTPUT_FORMATS = ("json", "fusion", "csv")

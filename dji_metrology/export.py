"""
Export Functions for DJI SRT Metrology

This module provides functions to export a parsed Metrology to JSON, CSV,
and DaVinci Resolve Fusion settings, and to load an exported JSON document
back.
"""

import csv
import io
import json
from typing import List

from jinja2 import Environment, StrictUndefined

from . import constants
from .model import RECORD_KEYS, Metrology, metrology_to_records, sample_from_record


def multiply(a, b):
    return a * b


FUSION_TEMPLATE = """{
	Tools = ordered() {
		Drone = RectangleMask {
			CtrlWZoom = false,
			Inputs = {
				Filter = Input { Value = FuID { "Fast Gaussian" }, },
				MaskWidth = Input { Value = 2016, },
				MaskHeight = Input { Value = 1222, },
				PixelAspect = Input { Value = { 1, 1 }, },
				UseFrameFormatSettings = Input { Value = 1, },
				ClippingMode = Input { Value = FuID { "None" }, },
				Width = Input {
					SourceOp = "DroneWidth",
					Source = "Value",
				},
				Height = Input {
					SourceOp = "DroneHeight",
					Source = "Value",
				},
			},
			ViewInfo = OperatorInfo { Pos = { 434, 86.1515 } },
		},
		DroneWidth = BezierSpline {
			SplineColor = { Red = 225, Green = 255, Blue = 0 },
			NameSet = true,
			KeyFrames = {
			{%- for sample in metrology %}
				[{{ multiply(sample.id, fps) }}] = { {{ sample.altitude }}, LH = { 20, 0.666666666666667 }, RH = { 40, 0.666666666666667 }, Flags = { Linear = true } },
			{%- endfor %}
			}
		},
		DroneHeight = BezierSpline {
			SplineColor = { Red = 0, Green = 255, Blue = 255 },
			NameSet = true,
			KeyFrames = {
			{%- for sample in metrology %}
				[{{ multiply(sample.id, fps) }}] = { {{ sample.bearing }}, LH = { 20, 0.666666666666667 }, RH = { 40, 0.666666666666667 }, Flags = { Linear = true } },
			{%- endfor %}
			}
		}
	}
}
"""

_fusion_env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
_fusion_env.globals["multiply"] = multiply
_fusion_template = _fusion_env.from_string(FUSION_TEMPLATE)


def export_json(metrology: Metrology) -> str:
    """
    Export a Metrology as an indented JSON array of sample records.

    Times are written as SRT timecodes, so load_json() restores every field
    exactly.
    """
    return json.dumps(metrology_to_records(metrology), indent="\t")


def load_json(text: str) -> Metrology:
    """
    Load a Metrology from a document produced by export_json().

    Raises:
        ValueError: If the document is not a JSON array of objects.
    """
    records = json.loads(text)
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise ValueError("Metrology JSON must be an array of objects")
    return [sample_from_record(record) for record in records]


def export_fusion(metrology: Metrology) -> str:
    """
    Render a Metrology as Resolve Fusion settings.

    Produces a RectangleMask driven by two BezierSpline tools: DroneWidth
    keyed on altitude and DroneHeight keyed on bearing, one keyframe per
    sample at frame id * FRAMES_PER_SECOND.
    """
    return _fusion_template.render(metrology=metrology, fps=constants.FRAMES_PER_SECOND)


def export_csv(metrology: Metrology) -> str:
    """
    Export a Metrology to CSV format.

    Returns:
        CSV string with a header row of record keys and one row per sample.
    """
    buffer = io.StringIO()
    columns: List[str] = list(RECORD_KEYS.values())
    writer = csv.DictWriter(buffer, fieldnames=columns)

    writer.writeheader()
    for record in metrology_to_records(metrology):
        writer.writerow(record)

    return buffer.getvalue()


EXPORTERS = {
    "json": export_json,
    "fusion": export_fusion,
    "csv": export_csv,
}


def export_metrology(metrology: Metrology, fmt: str) -> str:
    """
    Render a Metrology in one of OUTPUT_FORMATS.

    Raises:
        ValueError: If fmt is not a known format.
    """
    exporter = EXPORTERS.get(fmt)
    if exporter is None:
        raise ValueError(f"Unknown format: {fmt}. Must be one of: {', '.join(constants.OUTPUT_FORMATS)}")
    return exporter(metrology)

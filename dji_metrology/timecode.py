"""
Subtitle Timecode Parsing for DJI SRT Metrology

SRT times are offsets from the start of the clip ("00:00:43,000"). They are
represented as timedelta values and never compared against wall-clock time.
"""

import re
from datetime import timedelta

from .errors import MalformedTimeToken

_TIME_GROUPS = re.compile(r"([0-9]+):([0-9]+):([0-9]+):([0-9]+)")


def make_time(h: int, m: int, s: int, ms: int) -> timedelta:
    """Build a clip offset from hour, minute, second and millisecond parts."""
    return timedelta(hours=h, minutes=m, seconds=s, milliseconds=ms)


def parse_time_token(text: str) -> timedelta:
    """
    Parse a single SRT time token.

    Both "," and "." are accepted as the millisecond separator. A token with
    only three groups ("00:00:43") is read as having zero milliseconds.

    Args:
        text: Time token such as "00:00:43,000".

    Returns:
        Offset from the start of the clip.

    Raises:
        MalformedTimeToken: If the token does not hold H:MM:SS:mmm digit groups
            or lies outside the range of a timedelta.
    """
    normalized = text.replace(",", ":").replace(".", ":")
    if normalized.count(":") == 2:
        normalized += ":000"

    match = _TIME_GROUPS.search(normalized)
    if not match:
        raise MalformedTimeToken(text)

    try:
        h, m, s, ms = (int(group) for group in match.groups())
        return make_time(h, m, s, ms)
    except (OverflowError, ValueError) as exc:
        # out of timedelta range, or more digits than int() accepts
        raise MalformedTimeToken(text) from exc


def format_time_token(value: timedelta) -> str:
    """
    Format a clip offset as an SRT time token ("HH:MM:SS,mmm").

    Inverse of parse_time_token at millisecond precision.
    """
    total_ms = value // timedelta(milliseconds=1)
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, ms = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{ms:03d}"

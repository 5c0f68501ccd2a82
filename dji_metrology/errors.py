"""
Error taxonomy for DJI SRT Metrology.

All errors are ValueErrors: they describe bad input data, never a broken
program.
"""


class MetrologyError(ValueError):
    """Base class for every error raised while decoding telemetry."""


class InvalidInput(MetrologyError):
    """Raw input is too short to strip the leading marker bytes."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(
            f"Input is {length} byte(s) long, too short to hold the leading marker"
        )


class MalformedTimeToken(MetrologyError):
    """A subtitle time token does not match H:MM:SS:mmm digit groups."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"[srt] Time token did not match: {token!r}")


class MalformedNumericField(MetrologyError):
    """A numeric sub-field of a data line failed conversion."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Field {field!r} is not numeric: {value!r}")

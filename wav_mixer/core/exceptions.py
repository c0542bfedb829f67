"""Exceptions raised by the wav-mixer library."""

__all__ = [
    "MixerError",
    "InvalidFileError",
    "UnsupportedEncodingError",
    "FormatMismatchError",
]


class MixerError(Exception):
    """Base class for errors that abort a mixing session."""


class InvalidFileError(MixerError):
    """A track source failed the basic validity check."""


class UnsupportedEncodingError(MixerError):
    """A track is not encoded as signed integer PCM."""

    def __init__(self, encoding: str, index: int | None = None):
        self.encoding = encoding
        self.index = index
        super().__init__(f"{encoding} is not currently supported")


class FormatMismatchError(MixerError):
    """A track disagrees with the first track on sample rate or channel count."""

    def __init__(self, prop: str, index: int, expected: int, actual: int):
        self.prop = prop
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(f"{prop.capitalize()} mismatch on track {index}: expected {expected}, got {actual}")

"""Audio-related constants for the wav-mixer library."""

# Maximum sample values for the supported signed integer bit depths
# These are the full scale magnitudes used for clip counting and dB levels

# 8-bit: 2^7 - 1 = 127 (signed PCM only)
MAX_INT8 = 2**7 - 1  # 127

# 16-bit: 2^15 - 1 = 32767
MAX_INT16 = 2**15 - 1  # 32767

# 24-bit: 2^23 - 1 = 8388607
MAX_INT24 = 2**23 - 1  # 8388607

# 32-bit: 2^31 - 1 = 2147483647
MAX_INT32 = 2**31 - 1  # 2147483647

# Minimum sample values (two's complement signed integers)
# For n-bit signed: -2^(n-1)
MIN_INT8 = -(2**7)  # -128
MIN_INT16 = -(2**15)  # -32768
MIN_INT24 = -(2**23)  # -8388608
MIN_INT32 = -(2**31)  # -2147483648

_MAX_VALUES = {8: MAX_INT8, 16: MAX_INT16, 24: MAX_INT24, 32: MAX_INT32}
_MIN_VALUES = {8: MIN_INT8, 16: MIN_INT16, 24: MIN_INT24, 32: MIN_INT32}

# Bit depths accepted for the mix output
SUPPORTED_BIT_DEPTHS = (16, 24, 32)

DEFAULT_BIT_DEPTH = 24

# Samples (not frames) buffered per track and per chunk of mix
DEFAULT_BUFFER_SIZE = 8000
MAX_BUFFER_SIZE = 2**31 - 1


def max_sample_value(bit_depth: int) -> int:
    """Get the maximum positive sample value for a bit depth."""
    try:
        return _MAX_VALUES[bit_depth]
    except KeyError:
        raise ValueError(f"Unsupported bit depth: {bit_depth}") from None


def min_sample_value(bit_depth: int) -> int:
    """Get the minimum negative sample value for a bit depth."""
    try:
        return _MIN_VALUES[bit_depth]
    except KeyError:
        raise ValueError(f"Unsupported bit depth: {bit_depth}") from None


__all__ = [
    "MAX_INT8",
    "MAX_INT16",
    "MAX_INT24",
    "MAX_INT32",
    "MIN_INT8",
    "MIN_INT16",
    "MIN_INT24",
    "MIN_INT32",
    "SUPPORTED_BIT_DEPTHS",
    "DEFAULT_BIT_DEPTH",
    "DEFAULT_BUFFER_SIZE",
    "MAX_BUFFER_SIZE",
    "max_sample_value",
    "min_sample_value",
]

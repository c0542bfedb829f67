"""Core classes for the wav-mixer library.

This module contains the configuration, track state, buffer transforms and
statistics used by the mixing session.
"""

from .base_codec import BaseMixEncoder, BaseTrackDecoder, Encoding
from .buffer_ops import apply_fx, attenuate, reset, scale, sum_into
from .constants import DEFAULT_BIT_DEPTH, DEFAULT_BUFFER_SIZE, SUPPORTED_BIT_DEPTHS
from .exceptions import FormatMismatchError, InvalidFileError, MixerError, UnsupportedEncodingError
from .mix_config import MixConfig, get_default_mix_config, set_default_mix_config
from .stats import TrackStats, update_stats
from .track import TrackFX, TrackState, TrackStatus

__all__ = [
    "BaseMixEncoder",
    "BaseTrackDecoder",
    "Encoding",
    "MixConfig",
    "get_default_mix_config",
    "set_default_mix_config",
    "TrackFX",
    "TrackState",
    "TrackStatus",
    "TrackStats",
    "update_stats",
    "scale",
    "apply_fx",
    "reset",
    "sum_into",
    "attenuate",
    "MixerError",
    "InvalidFileError",
    "UnsupportedEncodingError",
    "FormatMismatchError",
    "DEFAULT_BIT_DEPTH",
    "DEFAULT_BUFFER_SIZE",
    "SUPPORTED_BIT_DEPTHS",
]

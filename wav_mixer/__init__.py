import logging

from .codec import WavMixEncoder, WavTrackDecoder, mix_wav_files  # noqa: F401
from .core import MixConfig, TrackFX, TrackStats  # noqa: F401
from .core.exceptions import (  # noqa: F401
    FormatMismatchError,
    InvalidFileError,
    MixerError,
    UnsupportedEncodingError,
)
from .mixer import MixSession  # noqa: F401
from .version import __version__  # noqa: F401

logger = logging.getLogger(__name__)

"""Container codecs for the wav-mixer library.

This module provides the soundfile-based WAV decoder and encoder.
"""

from .wav import WavMixEncoder, WavTrackDecoder, mix_wav_files

__all__ = [
    "WavMixEncoder",
    "WavTrackDecoder",
    "mix_wav_files",
]

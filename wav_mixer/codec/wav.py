"""WAV codec using soundfile.

This module provides the WavTrackDecoder and WavMixEncoder classes which
implement the decoder/encoder interfaces on top of libsndfile:
- soundfile for reading and writing WAV containers

Samples are exchanged with libsndfile as left-justified int32 and shifted
to and from the track's own bit depth.
"""

import logging
import os
import shutil
import sys
import tempfile
from contextlib import ExitStack
from typing import BinaryIO, Sequence

import numpy as np
import soundfile as sf

from ..core.base_codec import BaseMixEncoder, BaseTrackDecoder, Encoding
from ..core.constants import max_sample_value, min_sample_value
from ..core.exceptions import InvalidFileError
from ..core.mix_config import MixConfig
from ..core.track import TrackFX
from ..mixer import MixSession

logger = logging.getLogger(__name__)

__all__ = [
    "WavTrackDecoder",
    "WavMixEncoder",
    "mix_wav_files",
]

_WAV_FORMATS = ("WAV", "WAVEX", "RF64")

# Signed integer PCM subtypes and their bit depth
_PCM_SUBTYPES = {
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
}

_ENCODINGS = {
    "FLOAT": Encoding.IEEE_FLOAT,
    "DOUBLE": Encoding.IEEE_FLOAT,
    "ALAW": Encoding.ALAW,
    "ULAW": Encoding.MULAW,
}

_OUTPUT_SUBTYPES = {
    16: "PCM_16",
    24: "PCM_24",
    32: "PCM_32",
}


def _describe(file) -> str:
    if isinstance(file, (str, os.PathLike)):
        return os.fspath(file)
    return getattr(file, "name", repr(file))


class WavTrackDecoder(BaseTrackDecoder):
    """Reads integer PCM chunks from a WAV file.

    Accepts a path or an already-open binary handle.
    """

    def __init__(self, file: str | os.PathLike | BinaryIO):
        self._name = _describe(file)
        try:
            self._sound_file = sf.SoundFile(file)
        except RuntimeError as e:
            raise InvalidFileError(f"Invalid file {self._name}: {e}") from e

        info = self._sound_file
        self.sample_rate = info.samplerate
        self.channels = info.channels
        self.subtype = info.subtype
        self.bit_depth = _PCM_SUBTYPES.get(info.subtype, 0)
        if self.bit_depth:
            self.encoding = Encoding.PCM
        else:
            self.encoding = _ENCODINGS.get(info.subtype, Encoding.OTHER)

        logger.debug(f"Opened {self._name}: {info.format}/{info.subtype}, {self.sample_rate}Hz, {self.channels}ch")

    @property
    def name(self) -> str:
        return self._name

    @property
    def frames(self) -> int:
        return self._sound_file.frames

    def is_valid(self) -> bool:
        return self._sound_file.format in _WAV_FORMATS

    def decode_chunk(self, capacity: int) -> tuple[int, np.ndarray]:
        frames = capacity // self.channels
        data = self._sound_file.read(frames, dtype="int32", always_2d=True)
        count = data.shape[0] * self.channels
        if count == 0:
            return 0, np.empty(0, dtype=np.int32)
        return count, np.right_shift(data.reshape(-1), 32 - self.bit_depth)

    def close(self) -> None:
        if not self._sound_file.closed:
            self._sound_file.close()

    def __repr__(self):
        return f"WavTrackDecoder({self._name!r})"


class WavMixEncoder(BaseMixEncoder):
    """Writes the mix as an integer PCM WAV file.

    Samples are rounded to the nearest integer and clamped to the range of
    the output bit depth. A non-seekable target such as a stdout pipe cannot
    receive a WAV header after the fact, so the file is spooled to a
    temporary file and copied to the target on close().
    """

    def __init__(self, file: str | os.PathLike | BinaryIO, sample_rate: int, channels: int, bit_depth: int):
        """Initialize the WavMixEncoder.

        Args:
            file: Output path, "-" for stdout, or a writable binary handle
            sample_rate: Sample rate of the mix in Hz
            channels: Number of interleaved channels
            bit_depth: Bit depth of the mix (16, 24 or 32)
        """
        if bit_depth not in _OUTPUT_SUBTYPES:
            raise ValueError(f"Unsupported output bit depth: {bit_depth}")

        if file == "-":
            file = sys.stdout.buffer

        self._channels = channels
        self._bit_depth = bit_depth
        self._min = min_sample_value(bit_depth)
        self._max = max_sample_value(bit_depth)
        self._target = None
        self._spool = None

        if not isinstance(file, (str, os.PathLike)) and not file.seekable():
            logger.debug("Output is not seekable, spooling mix to a temporary file")
            self._target = file
            self._spool = tempfile.TemporaryFile()
            file = self._spool

        self._sound_file = sf.SoundFile(
            file,
            mode="w",
            samplerate=sample_rate,
            channels=channels,
            subtype=_OUTPUT_SUBTYPES[bit_depth],
            format="WAV",
        )

    def encode_chunk(self, samples: np.ndarray) -> None:
        data = np.clip(np.rint(samples), self._min, self._max).astype(np.int32)
        data = np.left_shift(data, 32 - self._bit_depth)
        self._sound_file.write(data.reshape(-1, self._channels))

    def close(self) -> None:
        if self._sound_file.closed:
            return
        self._sound_file.close()
        if self._spool is not None:
            self._spool.seek(0)
            shutil.copyfileobj(self._spool, self._target)
            self._target.flush()
            self._spool.close()
            self._spool = None


def mix_wav_files(
    paths: Sequence[str],
    output: str | BinaryIO | None = "-",
    config: MixConfig | None = None,
    fx: Sequence[TrackFX | None] | None = None,
) -> MixSession:
    """Mix WAV files and write the mix to output.

    Args:
        paths: Input WAV files, in mixing order
        output: Output path, "-" for stdout, a binary handle, or None to mix
            without writing
        config: MixConfig for the session, None for the default config
        fx: Effects per input

    Returns:
        The finished session, holding the level statistics
    """
    with ExitStack() as stack:
        decoders = []
        for path in paths:
            decoder = WavTrackDecoder(path)
            stack.callback(decoder.close)
            decoders.append(decoder)

        session = MixSession(decoders, config=config, fx=fx)

        encoder = None
        if output is not None:
            encoder = stack.enter_context(
                WavMixEncoder(output, session.sample_rate, session.channels, session.config.bit_depth)
            )

        session.run(encoder)
        return session

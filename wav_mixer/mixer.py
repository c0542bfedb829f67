"""Streaming mixing engine using NumPy.

This module provides the MixSession class which mixes N time-aligned integer
PCM tracks chunk by chunk into a single float mix, with bit depth rescaling,
per-track effects, optional attenuation and level statistics.
"""

import logging
from typing import Iterator, Sequence

import numpy as np

from .core.base_codec import BaseMixEncoder, BaseTrackDecoder, Encoding
from .core.buffer_ops import apply_fx, attenuate, reset, scale, sum_into
from .core.exceptions import FormatMismatchError, InvalidFileError, UnsupportedEncodingError
from .core.mix_config import MixConfig, get_default_mix_config
from .core.stats import TrackStats, update_stats
from .core.track import TrackFX, TrackState

logger = logging.getLogger(__name__)

__all__ = [
    "MixSession",
    "validate_decoders",
]


def validate_decoders(decoders: Sequence[BaseTrackDecoder]) -> tuple[int, int]:
    """Check that every track can be mixed with the others.

    The first track's sample rate and channel count are authoritative.

    Args:
        decoders: Track decoders in mixing order

    Returns:
        The session's (sample_rate, channels)

    Raises:
        InvalidFileError: A track failed its validity check
        UnsupportedEncodingError: A track is not signed integer PCM
        FormatMismatchError: A track disagrees with the first one
    """
    if not decoders:
        raise ValueError("At least one track is required")

    sample_rate = channels = None
    for i, decoder in enumerate(decoders):
        if not decoder.is_valid():
            raise InvalidFileError(f"Invalid file for track {i}")

        if decoder.encoding == Encoding.OTHER:
            raise UnsupportedEncodingError(decoder.subtype or Encoding.OTHER.value, i)
        if decoder.encoding != Encoding.PCM:
            raise UnsupportedEncodingError(decoder.encoding.value, i)

        if i == 0:
            sample_rate = decoder.sample_rate
            channels = decoder.channels
        elif decoder.sample_rate != sample_rate:
            raise FormatMismatchError("sample rate", i, sample_rate, decoder.sample_rate)
        elif decoder.channels != channels:
            raise FormatMismatchError("channel count", i, channels, decoder.channels)

    return sample_rate, channels


class MixSession:
    """Mixes multiple track decoders into a single stream of float chunks.

    Each call to next_chunk():
    1. Refreshes the chunk of every track that is not exhausted
    2. Rescales each chunk to the mix bit depth and applies its effects
    3. Sums all chunks into the mix accumulator
    4. Attenuates by the number of tracks, if configured
    5. Updates level statistics, if configured

    The session ends when every track is exhausted, or right after a round
    whose longest chunk is shorter than capacity. A track that runs out while
    another still fills whole chunks is retired and the mix continues without
    it. Tracks are expected to have the same duration.
    """

    def __init__(
        self,
        decoders: Sequence[BaseTrackDecoder],
        config: MixConfig | None = None,
        fx: Sequence[TrackFX | None] | None = None,
    ):
        """Validate the tracks and allocate the session buffers.

        Args:
            decoders: Track decoders in mixing order
            config: MixConfig for the session, None for the default config
            fx: Effects per track, same length as decoders
        """
        self._config = config if config is not None else get_default_mix_config()
        self._sample_rate, self._channels = validate_decoders(decoders)

        if fx is None:
            fx = [None] * len(decoders)
        elif len(fx) != len(decoders):
            raise ValueError(f"Expected {len(decoders)} track effects, got {len(fx)}")

        # Whole frames only, so a full interleaved read is never mistaken for a short one
        capacity = self._config.buffer_size - self._config.buffer_size % self._channels
        if capacity == 0:
            raise ValueError(
                f"buffer_size ({self._config.buffer_size}) is smaller than the channel count ({self._channels})"
            )
        self._capacity = capacity

        self._tracks = [TrackState(decoder, capacity, track_fx) for decoder, track_fx in zip(decoders, fx)]
        self._accumulator = np.zeros(capacity, dtype=np.float64)

        if self._config.collect_stats:
            self._track_stats = [TrackStats() for _ in self._tracks]
            self._mix_stats = TrackStats()
        else:
            self._track_stats = []
            self._mix_stats = None

        self._chunk_count = 0
        self._finished = False

        logger.debug(
            f"Mix session: {len(self._tracks)} tracks, {self._sample_rate}Hz, {self._channels}ch, "
            f"{self._config.bit_depth}bit, capacity {capacity}"
        )

    @property
    def config(self) -> MixConfig:
        return self._config

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def capacity(self) -> int:
        """Number of samples per full chunk."""
        return self._capacity

    @property
    def tracks(self) -> list[TrackState]:
        return self._tracks

    @property
    def track_stats(self) -> list[TrackStats]:
        """Statistics per track, empty when stats are disabled."""
        return self._track_stats

    @property
    def mix_stats(self) -> TrackStats | None:
        """Statistics of the mix, None when stats are disabled."""
        return self._mix_stats

    @property
    def chunk_count(self) -> int:
        return self._chunk_count

    @property
    def finished(self) -> bool:
        return self._finished

    def next_chunk(self) -> np.ndarray | None:
        """Mix the next chunk of every track.

        Returns:
            View of the mix accumulator, valid until the next call, or None
            once the session has ended
        """
        if self._finished:
            return None

        round_length = 0
        for track in self._tracks:
            round_length = max(round_length, track.refresh())

        if round_length == 0:
            logger.debug(f"All tracks exhausted after {self._chunk_count} chunks")
            self._finished = True
            return None

        bit_depth = self._config.bit_depth
        for track in self._tracks:
            length = track.chunk_length
            if length == 0:
                continue
            scale(track.samples, length, track.bit_depth, bit_depth)
            apply_fx(track.samples, length, track.fx)

        reset(self._accumulator)
        mix_length = sum_into(self._accumulator, self._tracks)

        if self._config.attenuate:
            attenuate(self._accumulator, mix_length, len(self._tracks))

        if self._mix_stats is not None:
            update_stats(self._track_stats, self._mix_stats, bit_depth, self._tracks, self._accumulator, mix_length)

        self._chunk_count += 1

        if round_length < self._capacity:
            logger.debug(f"Short chunk of {round_length} samples, ending session after {self._chunk_count} chunks")
            self._finished = True

        return self._accumulator[:mix_length]

    def __iter__(self) -> Iterator[np.ndarray]:
        while True:
            chunk = self.next_chunk()
            if chunk is None:
                return
            yield chunk

    def run(self, encoder: BaseMixEncoder | None = None) -> int:
        """Mix every chunk, handing each one to the encoder.

        Args:
            encoder: Sink for the mix, None to mix without writing

        Returns:
            Total number of mixed samples
        """
        total = 0
        for chunk in self:
            if encoder is not None:
                encoder.encode_chunk(chunk)
            total += chunk.size
        logger.debug(f"Mixed {total} samples in {self._chunk_count} chunks")
        return total

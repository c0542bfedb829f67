"""Per-track buffering state for the mixing session."""

import logging
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .base_codec import BaseTrackDecoder

logger = logging.getLogger(__name__)

__all__ = [
    "TrackFX",
    "TrackStatus",
    "TrackState",
]


@dataclass
class TrackFX:
    """Effects applied to a track before summation.

    Attributes:
        gain: Linear gain multiplier
        invert: Invert the polarity of the track
    """

    gain: float = 1.0
    invert: bool = False

    @classmethod
    def from_db(cls, db: float, invert: bool = False) -> "TrackFX":
        """Build effects from a gain expressed in decibels."""
        return cls(gain=math.pow(10, db / 20), invert=invert)


class TrackStatus(Enum):
    """Lifecycle of a track within a session."""

    NOT_STARTED = 1
    ACTIVE = 2
    EXHAUSTED = 3


class TrackState:
    """Holds one track's current chunk and lifecycle status.

    A track starts NOT_STARTED, becomes ACTIVE on its first non-empty read,
    and is EXHAUSTED once the decoder reports end of stream, fails, or
    delivered a chunk shorter than capacity on the previous refresh.
    EXHAUSTED is final: the decoder is never read again.
    """

    def __init__(self, decoder: BaseTrackDecoder, capacity: int, fx: TrackFX | None = None):
        """Initialize the TrackState.

        Args:
            decoder: Source of the track's integer samples
            capacity: Number of samples read per chunk
            fx: Effects applied before summation, None for none
        """
        self._decoder = decoder
        self._capacity = capacity
        self._fx = fx
        self._status = TrackStatus.NOT_STARTED
        self._chunk_length = 0
        self._buffer = np.zeros(capacity, dtype=np.float64)

    @property
    def decoder(self) -> BaseTrackDecoder:
        return self._decoder

    @property
    def bit_depth(self) -> int:
        return self._decoder.bit_depth

    @property
    def fx(self) -> TrackFX | None:
        return self._fx

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def status(self) -> TrackStatus:
        return self._status

    @property
    def chunk_length(self) -> int:
        """Number of valid samples this chunk, 0 unless ACTIVE."""
        return self._chunk_length

    @property
    def samples(self) -> np.ndarray:
        """Float view of the current chunk, overwritten on each refresh."""
        return self._buffer[: self._chunk_length]

    @property
    def is_short(self) -> bool:
        """Whether the current chunk is shorter than capacity."""
        return self._status == TrackStatus.ACTIVE and self._chunk_length < self._capacity

    def refresh(self) -> int:
        """Load the next chunk from the decoder.

        Returns:
            The new chunk length, 0 if the track is exhausted
        """
        if self._status == TrackStatus.EXHAUSTED:
            return 0

        if self.is_short:
            # A short chunk was the final one
            self._exhaust()
            return 0

        try:
            count, raw = self._decoder.decode_chunk(self._capacity)
        except (RuntimeError, OSError) as e:
            logger.warning(f"Error decoding {self._decoder}, treating as end of stream: {e}")
            count = 0

        if count <= 0:
            self._exhaust()
            return 0

        self._buffer[:count] = raw[:count]
        self._chunk_length = count
        self._status = TrackStatus.ACTIVE
        return count

    def _exhaust(self) -> None:
        logger.debug(f"Track {self._decoder} exhausted")
        self._status = TrackStatus.EXHAUSTED
        self._chunk_length = 0

    def __repr__(self):
        return f"TrackState({self._decoder!r}, {self._status.name}, {self._chunk_length}/{self._capacity})"

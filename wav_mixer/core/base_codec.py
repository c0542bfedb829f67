"""Decoder and encoder interfaces consumed by the mixing session.

A mixing session never touches containers directly: it reads integer PCM
chunks through a BaseTrackDecoder and hands float mix chunks to a
BaseMixEncoder.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

logger = logging.getLogger(__name__)

__all__ = [
    "Encoding",
    "BaseTrackDecoder",
    "BaseMixEncoder",
]


class Encoding(Enum):
    """Sample encoding reported by a decoder."""

    PCM = "PCM"
    IEEE_FLOAT = "IEEE float"
    ALAW = "A-law"
    MULAW = "µ-law"
    OTHER = "Non-PCM encoding"


class BaseTrackDecoder(ABC):
    """Source of fixed-capacity chunks of signed integer PCM samples.

    Subclasses describe the track through the bit_depth, sample_rate,
    channels, encoding and subtype attributes and implement decode_chunk().
    """

    bit_depth: int
    sample_rate: int
    channels: int
    encoding: Encoding = Encoding.PCM
    subtype: str | None = None

    def is_valid(self) -> bool:
        """Return whether the source passed the basic validity check."""
        return True

    @abstractmethod
    def decode_chunk(self, capacity: int) -> tuple[int, np.ndarray]:
        """Decode the next chunk of interleaved samples.

        Args:
            capacity: Maximum number of samples to decode

        Returns:
            A (count, samples) tuple. count is 0 at end of stream, otherwise
            1..capacity, and samples holds count signed integers at the
            track's bit depth.
        """
        raise NotImplementedError()

    def close(self) -> None:
        """Release the underlying source."""

    def __repr__(self):
        return (
            f"{self.__class__.__name__}({self.sample_rate}Hz, {self.channels}ch, "
            f"{self.bit_depth}bit, {self.encoding.value})"
        )


class BaseMixEncoder(ABC):
    """Sink for chunks of the mix."""

    @abstractmethod
    def encode_chunk(self, samples: np.ndarray) -> None:
        """Encode a chunk of interleaved float samples at the mix bit depth.

        Args:
            samples: Mix samples, valid only for the duration of the call
        """
        raise NotImplementedError()

    def close(self) -> None:
        """Flush and release the underlying sink."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

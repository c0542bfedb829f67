"""Running level statistics for tracks and for the mix.

Peak, RMS and clip counts are accumulated chunk by chunk. The dB values are
recomputed from the running totals after every update and are relative to
the full scale of the mix bit depth.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .constants import max_sample_value
from .track import TrackState

logger = logging.getLogger(__name__)

__all__ = [
    "TrackStats",
    "to_db",
    "update_stats",
]


def to_db(value: float, full_scale: float) -> float:
    """Convert a linear magnitude to dB relative to full scale."""
    if value <= 0:
        return -math.inf
    return 20 * math.log10(value / full_scale)


@dataclass
class TrackStats:
    """Level statistics accumulated across chunks.

    Attributes:
        sample_count: Total samples observed
        clipped_count: Samples beyond the full scale of the mix bit depth
        peak: Largest absolute sample value observed
        sum_of_squares: Running sum of squared samples
        peak_db: Peak relative to full scale
        rms_db: RMS relative to full scale
    """

    sample_count: int = 0
    clipped_count: int = 0
    peak: float = 0.0
    sum_of_squares: float = 0.0
    peak_db: float = -math.inf
    rms_db: float = -math.inf

    @property
    def rms(self) -> float:
        if self.sample_count == 0:
            return 0.0
        return math.sqrt(self.sum_of_squares / self.sample_count)

    def update(self, samples: np.ndarray, full_scale: int) -> None:
        """Accumulate a chunk of samples.

        Args:
            samples: Float samples expressed at the mix bit depth
            full_scale: Largest magnitude that is not counted as clipped
        """
        if samples.size == 0:
            return

        magnitudes = np.abs(samples)
        self.peak = max(self.peak, float(magnitudes.max()))
        self.clipped_count += int(np.count_nonzero(magnitudes > full_scale))
        self.sum_of_squares += float(np.dot(samples, samples))
        self.sample_count += samples.size

        self.peak_db = to_db(self.peak, full_scale)
        self.rms_db = to_db(self.rms, full_scale)


def update_stats(
    track_stats: Sequence[TrackStats],
    mix_stats: TrackStats,
    target_bits: int,
    tracks: Sequence[TrackState],
    accumulator: np.ndarray,
    mix_length: int,
) -> None:
    """Update the statistics of every active track and of the mix.

    Args:
        track_stats: One TrackStats per track, in track order
        mix_stats: Statistics of the mix
        target_bits: Bit depth of the mix
        tracks: Tracks after scaling and effects
        accumulator: Mix buffer
        mix_length: Number of valid samples in the accumulator
    """
    full_scale = max_sample_value(target_bits)

    for stats, track in zip(track_stats, tracks):
        if track.chunk_length > 0:
            stats.update(track.samples, full_scale)

    if mix_length > 0:
        mix_stats.update(accumulator[:mix_length], full_scale)

"""Numeric transforms over chunks of float samples.

All operations work in place on the first `length` samples of a float64
buffer. No rounding or clamping happens here; the encoder clamps to the
output bit depth.
"""

from typing import Iterable

import numpy as np

from .track import TrackFX, TrackState

__all__ = [
    "scale",
    "apply_fx",
    "reset",
    "sum_into",
    "attenuate",
]


def scale(buffer: np.ndarray, length: int, src_bits: int, dst_bits: int) -> None:
    """Rescale samples from one bit depth's full scale range to another's.

    Args:
        buffer: Float samples
        length: Number of valid samples in buffer
        src_bits: Bit depth the samples are expressed in
        dst_bits: Bit depth to express them in
    """
    if src_bits == dst_bits:
        return
    buffer[:length] *= 2.0 ** (dst_bits - src_bits)


def apply_fx(buffer: np.ndarray, length: int, fx: TrackFX | None) -> None:
    """Apply gain, then polarity inversion."""
    if fx is None:
        return
    if fx.gain != 1:
        buffer[:length] *= fx.gain
    if fx.invert:
        np.negative(buffer[:length], out=buffer[:length])


def reset(accumulator: np.ndarray) -> None:
    """Zero the whole accumulator, whatever the length of the last chunk."""
    accumulator.fill(0.0)


def sum_into(accumulator: np.ndarray, tracks: Iterable[TrackState]) -> int:
    """Add the current chunk of every active track into the accumulator.

    The accumulator must have been reset for this round, so slots beyond a
    shorter track's chunk hold only the contributions of longer tracks.

    Args:
        accumulator: Mix buffer sized to the session capacity
        tracks: Tracks in mixing order

    Returns:
        Length of the mix chunk: the longest contributing chunk, 0 if none
    """
    mix_length = 0
    for track in tracks:
        length = track.chunk_length
        if length == 0:
            continue
        accumulator[:length] += track.samples
        if length > mix_length:
            mix_length = length
    return mix_length


def attenuate(accumulator: np.ndarray, mix_length: int, track_count: int) -> None:
    """Divide the mix by the number of configured tracks."""
    accumulator[:mix_length] /= track_count

"""Mix configuration for the wav-mixer library.

This module provides the MixConfig dataclass which defines the parameters of
a mixing session, and the process-wide default configuration used by
sessions created without an explicit config.
"""

from dataclasses import dataclass

from .constants import (
    DEFAULT_BIT_DEPTH,
    DEFAULT_BUFFER_SIZE,
    MAX_BUFFER_SIZE,
    SUPPORTED_BIT_DEPTHS,
    max_sample_value,
    min_sample_value,
)

__all__ = [
    "MixConfig",
    "get_default_mix_config",
    "set_default_mix_config",
]


@dataclass
class MixConfig:
    """Configuration for a mixing session.

    Attributes:
        bit_depth: Bit depth of the mix (16, 24 or 32)
        attenuate: Divide the mix by the number of tracks to prevent clipping
        buffer_size: Number of samples buffered per track for each chunk
        collect_stats: Accumulate peak/RMS/clip statistics while mixing
    """

    bit_depth: int = DEFAULT_BIT_DEPTH
    attenuate: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    collect_stats: bool = True

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.bit_depth not in SUPPORTED_BIT_DEPTHS:
            raise ValueError(f"bit_depth must be one of {SUPPORTED_BIT_DEPTHS}, got {self.bit_depth}")

        if not 0 < self.buffer_size <= MAX_BUFFER_SIZE:
            raise ValueError(f"buffer_size must be between 1 and {MAX_BUFFER_SIZE}, got {self.buffer_size}")

    @property
    def max_sample_value(self) -> int:
        """Get the maximum positive sample value of the mix."""
        return max_sample_value(self.bit_depth)

    @property
    def min_sample_value(self) -> int:
        """Get the minimum negative sample value of the mix."""
        return min_sample_value(self.bit_depth)

    @property
    def full_scale(self) -> int:
        """Get the full scale magnitude used for clip counting and dB levels."""
        return self.max_sample_value


_default_mix_config: MixConfig = MixConfig()


def get_default_mix_config() -> MixConfig:
    """Get the default mix configuration.

    Returns:
        The current default MixConfig instance.
    """
    return _default_mix_config


def set_default_mix_config(config: MixConfig) -> None:
    """Set the default mix configuration.

    Sessions created afterwards without an explicit config will use it.

    Args:
        config: The new default MixConfig instance.
    """
    global _default_mix_config
    if not isinstance(config, MixConfig):
        raise TypeError(f"Expected MixConfig, got {type(config).__name__}")
    _default_mix_config = config

"""Test configuration and fixtures for wav-mixer tests."""

import numpy as np
import pytest
import soundfile as sf

from wav_mixer.core.mix_config import MixConfig


@pytest.fixture
def mix_config():
    """Create a small-buffer 16-bit mix configuration."""
    return MixConfig(bit_depth=16, attenuate=False, buffer_size=8, collect_stats=True)


@pytest.fixture
def make_wav(tmp_path):
    """Write integer samples to a WAV file and return its path.

    Samples are given at the file's own bit depth and left-justified to
    int32 for soundfile, which is how libsndfile expects integer data.
    """

    def _make_wav(name, samples, bit_depth=16, sample_rate=44100, channels=1, subtype=None):
        path = tmp_path / name
        data = np.asarray(samples)
        if subtype is None:
            subtype = f"PCM_{bit_depth}"
            data = np.left_shift(data.astype(np.int32), 32 - bit_depth)
        if channels > 1:
            data = data.reshape(-1, channels)
        sf.write(str(path), data, sample_rate, subtype=subtype, format="WAV")
        return str(path)

    return _make_wav

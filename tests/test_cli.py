"""Tests for the wav-mixer command line."""

import argparse
import math
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from wav_mixer.cli import _parse_args, build_parser, format_stats, main, parse_gain
from wav_mixer.core.stats import TrackStats


def parse(argv):
    return _parse_args(build_parser(), argv)


class TestParseGain:
    def test_linear(self):
        assert parse_gain("2") == 2.0
        assert parse_gain("-0.5") == -0.5

    def test_db(self):
        assert parse_gain("0dB") == pytest.approx(1.0)
        assert parse_gain("-6dB") == pytest.approx(0.501187, rel=1e-5)
        assert parse_gain("20dB") == pytest.approx(10.0)

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_gain("loud")

        with pytest.raises(argparse.ArgumentTypeError):
            parse_gain("xdB")


class TestArguments:
    """Tests for argument parsing and validation."""

    def test_defaults(self):
        args = parse(["-i", "a.wav"])
        assert args.inputs == ["a.wav"]
        assert args.output == "-"
        assert args.bits == 24
        assert args.attenuate is False
        assert args.buffer == 0
        # Stats are disabled when writing to stdout
        assert args.nostats is True

    def test_per_input_options(self):
        args = parse(["--gain", "2", "-i", "a.wav", "--invert", "-i", "b.wav", "-i", "c.wav", "--gain=-6dB", "-i", "d.wav"])
        assert args.inputs == ["a.wav", "b.wav", "c.wav", "d.wav"]
        assert args.fx[0].gain == 2.0
        assert args.fx[0].invert is False
        assert args.fx[1].gain == 1.0
        assert args.fx[1].invert is True
        assert args.fx[2].gain == 1.0
        assert args.fx[2].invert is False
        assert args.fx[3].gain == pytest.approx(0.501187, rel=1e-5)

    def test_output_forms(self):
        assert parse(["-i", "a.wav", "-o", "mix.wav"]).output == "mix.wav"
        assert parse(["-i", "a.wav", "mix.wav"]).output == "mix.wav"
        assert parse(["-i", "a.wav", "-o", "mix.wav"]).nostats is False

    def test_nowrite(self):
        args = parse(["-i", "a.wav", "--nowrite"])
        assert args.output is None
        assert args.nostats is False

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["mix.wav"],
            ["-i", "a.wav", "--invert"],
            ["-i", "a.wav", "--gain", "2"],
            ["--gain", "2", "--gain", "3", "-i", "a.wav"],
            ["--invert", "--invert", "-i", "a.wav"],
            ["-i", "a.wav", "-o", "x.wav", "y.wav"],
            ["-i", "a.wav", "-o", "x.wav", "--nowrite"],
            ["-i", "a.wav", "--nowrite", "--nostats"],
            ["-i", "a.wav", "--bits", "20"],
            ["-i", "a.wav", "--buffer", "-1"],
            ["-i", "a.wav", "--buffer", "2147483648"],
            ["--gain", "loud", "-i", "a.wav"],
        ],
    )
    def test_usage_errors(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            parse(argv)
        assert excinfo.value.code == 2


class TestFormatStats:
    def test_format(self):
        stats = TrackStats(sample_count=10, clipped_count=2, peak=1.0, peak_db=-3.5, rms_db=-10.25)
        assert format_stats("mix", stats) == (
            "----- Stats for mix -----\n-10.25dB RMS.\n-3.5dB peak.\n2 clipped samples.\n10 total samples.\n"
        )

    def test_silence(self):
        assert "-infdB RMS." in format_stats("mix", TrackStats())


class TestMain:
    """End-to-end tests for main()."""

    def test_mix_to_file_with_stats(self, make_wav, tmp_path, capsys):
        a = make_wav("a.wav", [1000] * 5000, bit_depth=16)
        b = make_wav("b.wav", [-1000] * 3000, bit_depth=16)
        out = str(tmp_path / "mix.wav")

        assert main(["-i", a, "-i", b, "--bits", "16", "--attenuate", "-o", out]) == 0

        data = sf.read(out, dtype="int16")[0]
        np.testing.assert_array_equal(data[:3000], 0)
        np.testing.assert_array_equal(data[3000:], 500)

        printed = capsys.readouterr().out
        assert f'----- Stats for "{a}" -----' in printed
        assert "----- Stats for mix -----" in printed
        assert "5000 total samples." in printed
        assert f"{20 * math.log10(500 / 32767)}dB peak." in printed

    def test_nowrite(self, make_wav, capsys):
        a = make_wav("a.wav", [1000] * 10, bit_depth=16)

        assert main(["-i", a, "--gain", "0.5", "-i", a, "--nowrite", "--bits", "16"]) == 0
        printed = capsys.readouterr().out
        assert printed.count("10 total samples.") == 3
        assert "0 clipped samples." in printed

    def test_nostats(self, make_wav, tmp_path, capsys):
        a = make_wav("a.wav", [1] * 10, bit_depth=16)
        out = tmp_path / "mix.wav"

        assert main(["-i", a, "--nostats", str(out)]) == 0
        assert out.exists()
        assert capsys.readouterr().out == ""

    def test_mixing_error(self, make_wav, tmp_path):
        a = make_wav("a.wav", [0] * 10, sample_rate=44100)
        b = make_wav("b.wav", [0] * 10, sample_rate=22050)

        assert main(["-i", a, "-i", b, str(tmp_path / "mix.wav")]) == 1

    def test_missing_input(self, tmp_path):
        assert main(["-i", str(tmp_path / "missing.wav"), "--nowrite"]) == 1

    def test_buffer_smaller_than_frame(self, make_wav):
        stereo = make_wav("stereo.wav", [0] * 10, channels=2)

        assert main(["-i", stereo, "--buffer", "1", "--nowrite"]) == 1

    def test_module_exit_code(self, tmp_path):
        """python -m wav_mixer exits with the status returned by main()."""
        result = subprocess.run(
            [sys.executable, "-m", "wav_mixer", "-i", str(tmp_path / "missing.wav"), "--nowrite"],
            cwd=Path(__file__).resolve().parent.parent,
            capture_output=True,
        )
        assert result.returncode == 1

        result = subprocess.run(
            [sys.executable, "-m", "wav_mixer"],
            cwd=Path(__file__).resolve().parent.parent,
            capture_output=True,
        )
        assert result.returncode == 2

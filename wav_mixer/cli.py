"""Mix WAV files from the command line.

Per-input options apply to the next -i that follows them.

Usage:
    wav-mixer -i a.wav -i b.wav -o mix.wav
    wav-mixer -i a.wav --gain=-6dB --invert -i b.wav --bits 16 --attenuate mix.wav
    wav-mixer -i a.wav -i b.wav --nowrite
"""

import argparse
import logging
import math
import sys

from .core.constants import DEFAULT_BIT_DEPTH, DEFAULT_BUFFER_SIZE, MAX_BUFFER_SIZE, SUPPORTED_BIT_DEPTHS
from .core.exceptions import MixerError
from .core.mix_config import MixConfig
from .core.stats import TrackStats
from .core.track import TrackFX
from .codec.wav import mix_wav_files

logger = logging.getLogger(__name__)

__all__ = [
    "build_parser",
    "format_stats",
    "main",
    "parse_gain",
]


def parse_gain(value: str) -> float:
    """Parse a linear gain, or a gain in dB when suffixed with "dB"."""
    try:
        if value.endswith("dB"):
            return math.pow(10, float(value[:-2]) / 20)
        return float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid gain: {value!r}") from None


def _buffer_size(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid buffer size: {value!r}") from None
    if not 0 <= size <= MAX_BUFFER_SIZE:
        raise argparse.ArgumentTypeError(f"buffer size must be between 0 and {MAX_BUFFER_SIZE}")
    return size


class _GainAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if namespace.pending_gain is not None:
            parser.error(f"{option_string} given twice for the same input")
        namespace.pending_gain = values


class _InvertAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if namespace.pending_invert:
            parser.error(f"{option_string} given twice for the same input")
        namespace.pending_invert = True


class _InputAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        gain = namespace.pending_gain if namespace.pending_gain is not None else 1.0
        namespace.inputs = list(namespace.inputs or []) + [values]
        namespace.fx = list(namespace.fx or []) + [TrackFX(gain=gain, invert=namespace.pending_invert)]
        namespace.pending_gain = None
        namespace.pending_invert = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the wav-mixer command."""
    parser = argparse.ArgumentParser(
        prog="wav-mixer",
        description="Mix time-aligned integer PCM WAV files into a single WAV file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input options (must precede the target input):
  -g/--gain VALUE   Gain adjustment, linear or in dB (use --gain=-6dB for negative dB values)
  --invert          Invert polarity

Examples:
  %(prog)s -i a.wav -i b.wav -o mix.wav
      Mix two files into a 24-bit WAV file

  %(prog)s -i a.wav --gain=-3dB -i b.wav --attenuate --bits 16 mix.wav
      Lower the first input by 3dB and attenuate the mix to avoid clipping

  %(prog)s -i a.wav -i b.wav --nowrite
      Only report the level statistics of the inputs and the mix
        """,
    )
    parser.set_defaults(inputs=[], fx=[], pending_gain=None, pending_invert=False)

    parser.add_argument("-i", "--input", action=_InputAction, metavar="FILE", help="Input WAV file (repeat for each input)")
    parser.add_argument("-g", "--gain", action=_GainAction, type=parse_gain, help=argparse.SUPPRESS)
    parser.add_argument("--invert", action=_InvertAction, help=argparse.SUPPRESS)

    parser.add_argument("output", nargs="?", help="Destination WAV file of the mix, - for stdout (default)")
    parser.add_argument("-o", "--output", dest="output_option", metavar="FILE", help="Destination WAV file of the mix")

    parser.add_argument(
        "--bits",
        type=int,
        choices=SUPPORTED_BIT_DEPTHS,
        default=DEFAULT_BIT_DEPTH,
        help=f"Bit depth of the mix (default: {DEFAULT_BIT_DEPTH})",
    )

    parser.add_argument(
        "--attenuate",
        action="store_true",
        help="Attenuate linearly to prevent clipping, dividing by the number of inputs",
    )

    parser.add_argument("--nowrite", action="store_true", help="Do not write the mix")
    parser.add_argument("--nostats", action="store_true", help="Do not collect stats")

    parser.add_argument(
        "--buffer",
        type=_buffer_size,
        default=0,
        help=f"Number of samples to buffer per input (default: {DEFAULT_BUFFER_SIZE})",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def _parse_args(parser: argparse.ArgumentParser, argv) -> argparse.Namespace:
    args = parser.parse_args(argv)

    if not args.inputs:
        parser.error("at least one input is required")
    if args.pending_gain is not None or args.pending_invert:
        parser.error("input options must precede an input")
    if args.output is not None and args.output_option is not None:
        parser.error("output given twice")

    args.output = args.output_option if args.output_option is not None else args.output
    if args.nowrite and args.output is not None:
        parser.error("--nowrite cannot be used with an output")
    if args.nowrite and args.nostats:
        parser.error("--nowrite cannot be used with --nostats")

    if not args.nowrite:
        if args.output is None:
            args.output = "-"
        # Stats would be printed into the mix
        if args.output == "-":
            args.nostats = True

    return args


def format_stats(title: str, stats: TrackStats) -> str:
    """Format the level statistics of an input or of the mix."""
    return (
        f"----- Stats for {title} -----\n"
        f"{stats.rms_db}dB RMS.\n"
        f"{stats.peak_db}dB peak.\n"
        f"{stats.clipped_count} clipped samples.\n"
        f"{stats.sample_count} total samples.\n"
    )


def main(argv=None) -> int:
    """Main entry point for the wav-mixer command."""
    parser = build_parser()
    args = _parse_args(parser, argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    config = MixConfig(
        bit_depth=args.bits,
        attenuate=args.attenuate,
        buffer_size=args.buffer or DEFAULT_BUFFER_SIZE,
        collect_stats=not args.nostats,
    )

    if args.nowrite:
        logger.info("Processing mix without writing...")
        output = None
    else:
        if args.output != "-":
            logger.info(f"Writing mix to {args.output}...")
        output = args.output

    try:
        session = mix_wav_files(args.inputs, output, config=config, fx=args.fx)
    except (MixerError, RuntimeError, OSError, ValueError) as e:
        logger.error(f"Error mixing: {e}")
        return 1

    if config.collect_stats:
        for path, stats in zip(args.inputs, session.track_stats):
            print(format_stats(f'"{path}"', stats), end="")
        print(format_stats("mix", session.mix_stats), end="")

    return 0


if __name__ == "__main__":
    sys.exit(main())

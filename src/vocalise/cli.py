"""CLI entrypoint for vocalise — subcommand dispatcher."""

import argparse
import logging
import os
import sys
from pathlib import Path

from vocalise.errors import InvalidPitchError, VocaliseError
from vocalise.pitch import Pitch

DEFAULT_ASSET_DIR = Path(os.environ.get("VOCALISE_ASSET_DIR", "assets"))
VOWEL_TABLE_NAME = "vowelVals.txt"


def _pitch_arg(value: str) -> Pitch:
    try:
        return Pitch.parse(value)
    except InvalidPitchError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _add_sing_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments specific to the sing subcommand."""
    parser.add_argument("song", type=Path,
                        help="Note list: one 'duration phonemes pitch' record per line.")
    parser.add_argument("--assets", type=Path, default=DEFAULT_ASSET_DIR,
                        help="Directory of consonant clips "
                             "(default: $VOCALISE_ASSET_DIR or ./assets)")
    parser.add_argument("--vowels", type=Path, default=None,
                        help=f"Vowel table (default: <assets>/{VOWEL_TABLE_NAME})")
    parser.add_argument("--output", type=Path, default=Path("song.dat"),
                        help="Output .dat file (default: song.dat)")
    parser.add_argument("--wav", type=Path, default=None,
                        help="Also write the amplitudes as a 16-bit WAV file")


def _add_shift_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments specific to the shift subcommand."""
    parser.add_argument("input", type=Path,
                        help="Reference recording to pitch-shift.")
    parser.add_argument("--prefix", required=True,
                        help="Phoneme symbol used to name outputs, e.g. 'b' -> b_C4.dat")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_ASSET_DIR,
                        help="Where to write shifted clips "
                             "(default: $VOCALISE_ASSET_DIR or ./assets)")
    parser.add_argument("--reference", type=_pitch_arg, default=Pitch.parse("C4"),
                        help="Pitch the reference recording was sung at (default: C4)")
    parser.add_argument("--low", type=_pitch_arg, default=Pitch.parse("F3"),
                        help="Lowest pitch to render (default: F3)")
    parser.add_argument("--high", type=_pitch_arg, default=Pitch.parse("F6"),
                        help="Highest pitch to render (default: F6)")
    parser.add_argument("--format", default="dat", choices=["dat", "wav"],
                        help="Output file format (default: dat)")
    parser.add_argument("--trim", type=float, default=None,
                        help="Trim each output to this many seconds (e.g. 0.18 for consonants)")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="vocalise",
        description="Sing a note list through pre-recorded phoneme samples",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sing_parser = subparsers.add_parser(
        "sing",
        help="Synthesize a note list to a .dat timeline",
        description="Synthesize a note list into a (time, amplitude) .dat file",
    )
    _add_sing_args(sing_parser)

    shift_parser = subparsers.add_parser(
        "shift",
        help="Generate pitch-shifted phoneme clips with sox",
        description="Render a reference recording at every pitch in a range",
    )
    _add_shift_args(shift_parser)

    for sub in (sing_parser, shift_parser):
        sub.add_argument("-v", "--verbose", action="store_true", default=False,
                         help="Show debug logging")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _run_sing(args: argparse.Namespace) -> None:
    """Run the sing pipeline."""
    from vocalise.dat import write_dat, write_wav
    from vocalise.song import parse_song
    from vocalise.sound_table import load_consonant_table, load_vowel_table
    from vocalise.synthesizer import (
        SAMPLE_RATE,
        render_amplitudes,
        synthesize,
        validate_song,
    )

    logger = logging.getLogger("vocalise.sing")

    vowel_path = args.vowels if args.vowels is not None else args.assets / VOWEL_TABLE_NAME

    # Everything is loaded and checked before any output is written
    notes = parse_song(args.song)
    vowels = load_vowel_table(vowel_path)
    consonants = load_consonant_table(args.assets)
    total = validate_song(notes, vowels, consonants)
    logger.info(f"Song: {len(notes)} notes, {total:.2f}s")

    count = write_dat(args.output, synthesize(notes, vowels, consonants), SAMPLE_RATE)
    print(f"Wrote {count} samples to {args.output}")

    if args.wav is not None:
        write_wav(args.wav, render_amplitudes(notes, vowels, consonants), SAMPLE_RATE)
        print(f"Wrote {args.wav}")


def _run_shift(args: argparse.Namespace) -> None:
    """Run the pitch-shift asset generator."""
    from vocalise.audio import generate_pitched_assets
    from vocalise.pitch import pitch_range

    pitches = pitch_range(args.low, args.high)
    results = generate_pitched_assets(
        reference_path=args.input,
        output_dir=args.output_dir,
        prefix=args.prefix,
        reference_pitch=args.reference,
        pitches=pitches,
        suffix=f".{args.format}",
        trim=args.trim,
    )

    ok = [r for r in results if r.ok]
    print(f"Generated {len(ok)} of {len(results)} clips in {args.output_dir}")
    for r in results:
        if not r.ok:
            print(f"  failed: {r.output_path.name} ({r.error})", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    try:
        if args.command == "sing":
            _run_sing(args)
        elif args.command == "shift":
            _run_shift(args)
    except (VocaliseError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

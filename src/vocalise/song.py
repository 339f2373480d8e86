"""Parse note lists into Note sequences.

One note per line, three whitespace-separated fields:

    0.5 ka C4
    1.0 lO D#4

Blank lines and lines starting with '#' are skipped.
"""

import logging
import math
from pathlib import Path

from vocalise.errors import AssetError, InvalidPitchError, SongFormatError
from vocalise.pitch import Pitch
from vocalise.types import Note

logger = logging.getLogger(__name__)


def parse_note_line(line: str, lineno: int = 0) -> Note:
    """Parse one 'duration phonemes pitch' record."""
    fields = line.split()
    if len(fields) != 3:
        raise SongFormatError(
            f"line {lineno}: expected 'duration phonemes pitch', got {line.strip()!r}"
        )
    duration_text, phonemes, pitch_text = fields

    try:
        duration = float(duration_text)
    except ValueError:
        raise SongFormatError(f"line {lineno}: bad duration {duration_text!r}") from None
    if not math.isfinite(duration) or duration <= 0:
        raise SongFormatError(f"line {lineno}: duration must be positive, got {duration_text}")

    try:
        pitch = Pitch.parse(pitch_text)
    except InvalidPitchError as e:
        raise SongFormatError(f"line {lineno}: {e}") from e

    return Note(duration=duration, phonemes=phonemes, pitch=pitch)


def parse_song_text(text: str) -> list[Note]:
    """Parse a whole note list held in memory."""
    notes = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        notes.append(parse_note_line(stripped, lineno))
    return notes


def parse_song(path: str | Path) -> list[Note]:
    """Read and parse a note list file.

    Raises:
        AssetError: if the file is missing or unreadable.
        SongFormatError: if a line is malformed (message includes the file and line).
    """
    path = Path(path)
    if not path.exists():
        raise AssetError(f"Song file not found: {path}")
    try:
        text = path.read_text()
    except OSError as e:
        raise AssetError(f"Could not read song file {path}: {e}") from e

    try:
        notes = parse_song_text(text)
    except SongFormatError as e:
        raise SongFormatError(f"{path}: {e}") from e

    logger.info(f"Parsed {len(notes)} notes from {path}")
    return notes

"""Turn a note list into a (time, amplitude) timeline.

Notes are walked in order and each note's phonemes in sung order. A single
time cursor runs through the whole song:

- a consonant emits its clip shifted to the cursor, then moves the cursor on
  by exactly CONSONANT_DURATION;
- a vowel holds its table amplitude for one sample per 1/sample_rate tick of
  its allotted duration, then moves the cursor on by that duration.

Amplitudes are used exactly as stored. Nothing is interpolated or resampled.
"""

import logging
import math
from collections.abc import Iterable, Iterator

import numpy as np

from vocalise.allocator import PhonemeSpan, plan_note
from vocalise.errors import VocaliseError
from vocalise.sound_table import (
    CONSONANT_DURATION,
    ConsonantClip,
    ConsonantTable,
    VowelTable,
)
from vocalise.types import Note, TimelineSample

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

# Absorbs float error such as 0.32 * 44100 == 14111.999999999998.
_TICK_TOLERANCE = 1e-6


def vowel_sample_count(duration: float, sample_rate: int = SAMPLE_RATE) -> int:
    """Number of sample ticks that fit in a vowel of the given duration."""
    return max(0, math.floor(duration * sample_rate + _TICK_TOLERANCE))


def _emit_vowel(
    amplitude: float, start: float, duration: float, sample_rate: int,
) -> Iterator[TimelineSample]:
    step = 1.0 / sample_rate
    for k in range(vowel_sample_count(duration, sample_rate)):
        yield TimelineSample(start + k * step, amplitude)


def _emit_consonant(clip: ConsonantClip, start: float) -> Iterator[TimelineSample]:
    for offset, amplitude in clip.samples():
        yield TimelineSample(start + offset, amplitude)


def synthesize_note(
    note: Note,
    start: float,
    vowels: VowelTable,
    consonants: ConsonantTable,
    sample_rate: int = SAMPLE_RATE,
) -> Iterator[TimelineSample]:
    """Yield the samples for one note beginning at start.

    The generator's return value is the cursor position after the note.
    """
    cursor = start
    for span in plan_note(note):
        if span.symbol.is_consonant:
            clip = consonants.clip(span.symbol, note.pitch)
            yield from _emit_consonant(clip, cursor)
            cursor += CONSONANT_DURATION
        else:
            amplitude = vowels.value(span.symbol, note.pitch)
            yield from _emit_vowel(amplitude, cursor, span.duration, sample_rate)
            cursor += span.duration
    return cursor


def synthesize(
    notes: Iterable[Note],
    vowels: VowelTable,
    consonants: ConsonantTable,
    sample_rate: int = SAMPLE_RATE,
) -> Iterator[TimelineSample]:
    """Lazily yield the whole song's timeline, in time order.

    Errors for a note (unknown phoneme, missing sample, impossible duration)
    are raised when that note is reached.
    """
    cursor = 0.0
    for index, note in enumerate(notes):
        try:
            cursor = yield from synthesize_note(note, cursor, vowels, consonants, sample_rate)
        except VocaliseError as e:
            logger.error(f"Note {index + 1} ({note.phonemes} {note.pitch}): {e}")
            raise
        logger.debug(f"Note {index + 1} ({note.phonemes} {note.pitch}) ends at {cursor:.4f}s")


def check_note(note: Note, vowels: VowelTable, consonants: ConsonantTable) -> list[PhonemeSpan]:
    """Plan a note and resolve every sample it needs, without emitting anything."""
    spans = plan_note(note)
    for span in spans:
        if span.symbol.is_consonant:
            consonants.clip(span.symbol, note.pitch)
        else:
            vowels.value(span.symbol, note.pitch)
    return spans


def validate_song(
    notes: Iterable[Note],
    vowels: VowelTable,
    consonants: ConsonantTable,
) -> float:
    """Check every note up front. Returns the song's total duration.

    Raises the first error found, after logging which note caused it.
    """
    total = 0.0
    for index, note in enumerate(notes):
        try:
            check_note(note, vowels, consonants)
        except VocaliseError as e:
            logger.error(f"Note {index + 1} ({note.phonemes} {note.pitch}): {e}")
            raise
        total += note.duration
    return total


def render_amplitudes(
    notes: Iterable[Note],
    vowels: VowelTable,
    consonants: ConsonantTable,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """Collect the amplitude column of the timeline into a float64 array."""
    return np.fromiter(
        (s.amplitude for s in synthesize(notes, vowels, consonants, sample_rate)),
        dtype=np.float64,
    )

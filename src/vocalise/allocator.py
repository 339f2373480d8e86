"""Split a note's duration among its phonemes.

Every consonant gets a fixed CONSONANT_DURATION. Whatever remains of the note
is shared equally by its vowels, so the phoneme durations always add up to
the note's duration.
"""

import math
from dataclasses import dataclass

from vocalise.errors import AllocationError
from vocalise.phonemes import PhonemeSymbol, count_classes, split_phonemes
from vocalise.sound_table import CONSONANT_DURATION
from vocalise.types import Note


@dataclass(frozen=True)
class PhonemeSpan:
    """A phoneme with its allotted duration."""
    symbol: PhonemeSymbol
    duration: float  # seconds


def vowel_duration(total_duration: float, consonant_count: int, vowel_count: int) -> float:
    """Duration each vowel receives once the consonants are paid for.

    Raises:
        AllocationError: if there are no vowels or nothing is left for them.
    """
    if not math.isfinite(total_duration) or total_duration <= 0:
        raise AllocationError(f"Note duration must be positive, got {total_duration}")
    if vowel_count == 0:
        raise AllocationError(
            f"Note has {consonant_count} consonant(s) and no vowel to carry its duration"
        )
    if consonant_count == 0:
        return total_duration / vowel_count

    budget = CONSONANT_DURATION * consonant_count
    remaining = total_duration - budget
    if remaining <= 0:
        raise AllocationError(
            f"{consonant_count} consonant(s) need {budget:.3f}s "
            f"but the note only lasts {total_duration:.3f}s"
        )
    return remaining / vowel_count


def allocate(total_duration: float, symbols: list[PhonemeSymbol]) -> list[float]:
    """Return each phoneme's duration, in the same order as symbols."""
    if not symbols:
        raise AllocationError("Cannot allocate a note with no phonemes")
    consonants, vowels = count_classes(symbols)
    per_vowel = vowel_duration(total_duration, consonants, vowels)
    return [per_vowel if s.is_vowel else CONSONANT_DURATION for s in symbols]


def plan_note(note: Note) -> list[PhonemeSpan]:
    """Split a note into phonemes and allot each one its duration."""
    symbols = split_phonemes(note.phonemes)
    durations = allocate(note.duration, symbols)
    return [PhonemeSpan(s, d) for s, d in zip(symbols, durations)]

"""Tests for per-phoneme duration allocation."""

import math

import pytest

from vocalise.allocator import PhonemeSpan, allocate, plan_note, vowel_duration
from vocalise.errors import AllocationError, UnknownPhonemeError
from vocalise.phonemes import PhonemeSymbol, split_phonemes
from vocalise.pitch import Pitch
from vocalise.sound_table import CONSONANT_DURATION
from vocalise.types import Note

C4 = Pitch.parse("C4")


def test_consonants_get_fixed_duration():
    durations = allocate(0.5, split_phonemes("ka"))
    assert durations[0] == CONSONANT_DURATION
    assert durations[1] == pytest.approx(0.32)


def test_remaining_time_split_among_vowels():
    durations = allocate(1.0, split_phonemes("kai"))
    assert durations == [CONSONANT_DURATION, pytest.approx(0.41), pytest.approx(0.41)]


def test_vowel_only_note_divides_exactly():
    assert allocate(0.9, split_phonemes("aio")) == [0.3, 0.3, 0.3]
    assert allocate(0.7, split_phonemes("a")) == [0.7]


@pytest.mark.parametrize("duration,phonemes", [
    (0.5, "ka"),
    (1.0, "str1a"),
    (2.0, "maOn"),
    (0.37, "ai"),
    (3.3, "b3ld4"),
])
def test_durations_sum_to_note_duration(duration, phonemes):
    assert math.fsum(allocate(duration, split_phonemes(phonemes))) == pytest.approx(duration)


def test_order_matches_symbols():
    durations = allocate(1.18, split_phonemes("aka"))
    assert durations == [pytest.approx(0.5), CONSONANT_DURATION, pytest.approx(0.5)]


def test_all_consonants_rejected():
    with pytest.raises(AllocationError, match="no vowel"):
        allocate(1.0, split_phonemes("kk"))


def test_consonant_budget_exceeding_duration_rejected():
    with pytest.raises(AllocationError, match="only lasts"):
        allocate(0.3, split_phonemes("kak"))


def test_consonant_budget_equal_to_duration_rejected():
    with pytest.raises(AllocationError):
        vowel_duration(0.36, consonant_count=2, vowel_count=1)


def test_two_consonants_in_short_note_rejected():
    """(0.1, 'kk', C4) must be rejected, never produce negative durations."""
    with pytest.raises(AllocationError):
        plan_note(Note(0.1, "kk", C4))


@pytest.mark.parametrize("duration", [0.0, -1.0, float("nan"), float("inf")])
def test_non_positive_duration_rejected(duration):
    with pytest.raises(AllocationError):
        allocate(duration, split_phonemes("a"))


def test_empty_sequence_rejected():
    with pytest.raises(AllocationError):
        allocate(1.0, [])


def test_allocation_error_is_value_error():
    with pytest.raises(ValueError):
        allocate(1.0, split_phonemes("pt"))


def test_plan_note():
    spans = plan_note(Note(0.5, "ka", C4))
    assert spans == [
        PhonemeSpan(PhonemeSymbol.K, CONSONANT_DURATION),
        PhonemeSpan(PhonemeSymbol.A_CAT, 0.5 - CONSONANT_DURATION),
    ]


def test_plan_note_unknown_symbol():
    with pytest.raises(UnknownPhonemeError):
        plan_note(Note(0.5, "kw", C4))

"""Tests for phoneme classification."""

import pytest

from vocalise.errors import UnknownPhonemeError
from vocalise.phonemes import (
    CONSONANTS,
    UNVOICED_CONSONANTS,
    VOICED_CONSONANTS,
    VOWELS,
    PhonemeClass,
    PhonemeSymbol,
    classify,
    count_classes,
    is_voiced,
    parse_symbol,
    split_phonemes,
)


def test_every_symbol_has_exactly_one_class():
    assert VOWELS | CONSONANTS == set(PhonemeSymbol)
    assert not VOWELS & CONSONANTS


def test_vowel_alphabet():
    assert {s.value for s in VOWELS} == set("aAei3IoOUu")


def test_consonant_alphabet():
    assert {s.value for s in CONSONANTS} == set("mbdgfhjlnrkpstz124098")


@pytest.mark.parametrize("char", list("aAei3IoOUu"))
def test_classify_vowels(char):
    assert classify(char) is PhonemeClass.VOWEL


@pytest.mark.parametrize("char", list("mbdgjln4r9z8"))
def test_voiced_consonants(char):
    assert classify(char) is PhonemeClass.CONSONANT
    assert is_voiced(char) is True


@pytest.mark.parametrize("char", list("1fhkps2t0"))
def test_unvoiced_consonants(char):
    assert classify(char) is PhonemeClass.CONSONANT
    assert is_voiced(char) is False


def test_voiced_and_unvoiced_partition_consonants():
    assert VOICED_CONSONANTS | UNVOICED_CONSONANTS == CONSONANTS
    assert not VOICED_CONSONANTS & UNVOICED_CONSONANTS


def test_case_distinguishes_vowels():
    assert parse_symbol("a") is PhonemeSymbol.A_CAT
    assert parse_symbol("A") is PhonemeSymbol.A_DOG
    assert parse_symbol("o") is PhonemeSymbol.O_BOAT
    assert parse_symbol("O") is PhonemeSymbol.O_MOVE


def test_digraph_codes():
    assert parse_symbol("1") is PhonemeSymbol.CH
    assert parse_symbol("2") is PhonemeSymbol.SH
    assert parse_symbol("4") is PhonemeSymbol.NG
    assert parse_symbol("0") is PhonemeSymbol.TH
    assert parse_symbol("9") is PhonemeSymbol.DH
    assert parse_symbol("8") is PhonemeSymbol.ZH


def test_parse_symbol_accepts_enum_member():
    assert parse_symbol(PhonemeSymbol.K) is PhonemeSymbol.K


@pytest.mark.parametrize("char", ["x", "w", "5", "E", "", "ka"])
def test_unknown_symbol_raises(char):
    with pytest.raises(UnknownPhonemeError):
        parse_symbol(char)


def test_unknown_symbol_error_is_value_error():
    with pytest.raises(ValueError):
        classify("q")


def test_is_voiced_rejects_vowels():
    with pytest.raises(ValueError):
        is_voiced("a")


def test_symbol_properties():
    assert PhonemeSymbol.B.is_consonant
    assert PhonemeSymbol.B.is_voiced
    assert not PhonemeSymbol.K.is_voiced
    assert PhonemeSymbol.I_BEE.is_vowel
    assert str(PhonemeSymbol.NG) == "4"


def test_split_preserves_order():
    assert split_phonemes("str1") == [
        PhonemeSymbol.S, PhonemeSymbol.T, PhonemeSymbol.R, PhonemeSymbol.CH,
    ]
    assert split_phonemes("ka") == [PhonemeSymbol.K, PhonemeSymbol.A_CAT]


def test_split_rejects_unknown_character():
    with pytest.raises(UnknownPhonemeError, match="'x'"):
        split_phonemes("kxa")


def test_split_rejects_empty():
    with pytest.raises(UnknownPhonemeError):
        split_phonemes("")


def test_count_classes():
    assert count_classes(split_phonemes("strin")) == (4, 1)
    assert count_classes(split_phonemes("ai")) == (0, 2)

"""Phoneme alphabet and vowel/consonant classification.

Symbols are single characters. Sounds without a plain-letter spelling use
digit codes:

    1  ch        2  sh        4  ng
    0  th (thin) 9  th (this) 8  zh

Vowels:

    a  cat   A  dog    e  able   i  bee    3  edible
    I  in    o  boat   O  move   U  book   u  up
"""

from enum import Enum

from vocalise.errors import UnknownPhonemeError


class PhonemeClass(Enum):
    VOWEL = "vowel"
    CONSONANT = "consonant"


class PhonemeSymbol(Enum):
    """Every symbol that may appear in a note's phoneme string."""
    # Vowels
    A_CAT = "a"
    A_DOG = "A"
    E_ABLE = "e"
    I_BEE = "i"
    E_EDIBLE = "3"
    I_IN = "I"
    O_BOAT = "o"
    O_MOVE = "O"
    U_BOOK = "U"
    U_UP = "u"
    # Consonants
    M = "m"
    B = "b"
    D = "d"
    G = "g"
    F = "f"
    H = "h"
    J = "j"
    L = "l"
    N = "n"
    R = "r"
    K = "k"
    P = "p"
    S = "s"
    T = "t"
    Z = "z"
    CH = "1"
    SH = "2"
    NG = "4"
    TH = "0"
    DH = "9"
    ZH = "8"

    def __str__(self) -> str:
        return self.value

    @property
    def phoneme_class(self) -> PhonemeClass:
        return _FEATURES[self][0]

    @property
    def is_vowel(self) -> bool:
        return self.phoneme_class is PhonemeClass.VOWEL

    @property
    def is_consonant(self) -> bool:
        return self.phoneme_class is PhonemeClass.CONSONANT

    @property
    def is_voiced(self) -> bool:
        return is_voiced(self)


_V = PhonemeClass.VOWEL
_C = PhonemeClass.CONSONANT

# (class, voiced). Voicing is only meaningful for consonants; vowels carry None.
_FEATURES: dict[PhonemeSymbol, tuple[PhonemeClass, bool | None]] = {
    PhonemeSymbol.A_CAT:    (_V, None),
    PhonemeSymbol.A_DOG:    (_V, None),
    PhonemeSymbol.E_ABLE:   (_V, None),
    PhonemeSymbol.I_BEE:    (_V, None),
    PhonemeSymbol.E_EDIBLE: (_V, None),
    PhonemeSymbol.I_IN:     (_V, None),
    PhonemeSymbol.O_BOAT:   (_V, None),
    PhonemeSymbol.O_MOVE:   (_V, None),
    PhonemeSymbol.U_BOOK:   (_V, None),
    PhonemeSymbol.U_UP:     (_V, None),
    PhonemeSymbol.M:        (_C, True),
    PhonemeSymbol.B:        (_C, True),
    PhonemeSymbol.D:        (_C, True),
    PhonemeSymbol.G:        (_C, True),
    PhonemeSymbol.J:        (_C, True),
    PhonemeSymbol.L:        (_C, True),
    PhonemeSymbol.N:        (_C, True),
    PhonemeSymbol.NG:       (_C, True),
    PhonemeSymbol.R:        (_C, True),
    PhonemeSymbol.DH:       (_C, True),
    PhonemeSymbol.Z:        (_C, True),
    PhonemeSymbol.ZH:       (_C, True),
    PhonemeSymbol.CH:       (_C, False),
    PhonemeSymbol.F:        (_C, False),
    PhonemeSymbol.H:        (_C, False),
    PhonemeSymbol.K:        (_C, False),
    PhonemeSymbol.P:        (_C, False),
    PhonemeSymbol.S:        (_C, False),
    PhonemeSymbol.SH:       (_C, False),
    PhonemeSymbol.T:        (_C, False),
    PhonemeSymbol.TH:       (_C, False),
}

VOWELS = frozenset(s for s, (cls, _) in _FEATURES.items() if cls is _V)
CONSONANTS = frozenset(s for s, (cls, _) in _FEATURES.items() if cls is _C)
VOICED_CONSONANTS = frozenset(s for s in CONSONANTS if _FEATURES[s][1])
UNVOICED_CONSONANTS = CONSONANTS - VOICED_CONSONANTS


def parse_symbol(char: str) -> PhonemeSymbol:
    """Return the PhonemeSymbol spelled by a single character."""
    if isinstance(char, PhonemeSymbol):
        return char
    try:
        return PhonemeSymbol(char)
    except ValueError:
        raise UnknownPhonemeError(f"Unknown phoneme symbol: {char!r}") from None


def classify(symbol: PhonemeSymbol | str) -> PhonemeClass:
    """Return whether a symbol is a vowel or a consonant."""
    return parse_symbol(symbol).phoneme_class


def is_voiced(symbol: PhonemeSymbol | str) -> bool:
    """Return True if a consonant's sample depends on the sung pitch.

    Raises:
        ValueError: if the symbol is a vowel.
    """
    symbol = parse_symbol(symbol)
    cls, voiced = _FEATURES[symbol]
    if cls is not PhonemeClass.CONSONANT:
        raise ValueError(f"Voicing is only defined for consonants, got vowel '{symbol}'")
    return voiced


def split_phonemes(text: str) -> list[PhonemeSymbol]:
    """Split a phoneme string into symbols, in sung (left-to-right) order."""
    if not text:
        raise UnknownPhonemeError("Empty phoneme string")
    return [parse_symbol(ch) for ch in text]


def count_classes(symbols: list[PhonemeSymbol]) -> tuple[int, int]:
    """Return (consonant_count, vowel_count) for a symbol sequence."""
    consonants = sum(1 for s in symbols if s.is_consonant)
    return consonants, len(symbols) - consonants

"""Shared fixtures: a small, complete set of vowel values and consonant clips."""

import pytest

from vocalise.phonemes import CONSONANTS, VOICED_CONSONANTS, VOWELS
from vocalise.pitch import Pitch
from vocalise.sound_table import ConsonantClip, ConsonantTable, SoundKey, VowelTable

C4 = Pitch.parse("C4")
D4 = Pitch.parse("D4")
CLIP_STEP = 0.02
CLIP_LENGTH = 9  # offsets 0.00 .. 0.16


def clip_amplitude(symbol, pitch=None) -> float:
    """Distinct, recognisable amplitude per consonant key."""
    base = 0.01 * (sorted(s.value for s in CONSONANTS).index(symbol.value) + 1)
    return base + (0.001 if pitch == D4 else 0.0)


def vowel_amplitude(symbol, pitch) -> float:
    base = 0.05 * (sorted(s.value for s in VOWELS).index(symbol.value) + 1)
    return base + (0.002 if pitch == D4 else 0.0)


def make_clip(amplitude: float, n: int = CLIP_LENGTH) -> ConsonantClip:
    return ConsonantClip(
        [i * CLIP_STEP for i in range(n)],
        [amplitude] * n,
    )


@pytest.fixture
def vowel_table():
    return VowelTable({
        SoundKey(v, p): vowel_amplitude(v, p)
        for v in VOWELS for p in (C4, D4)
    })


@pytest.fixture
def consonant_table():
    clips = {}
    for c in CONSONANTS:
        if c in VOICED_CONSONANTS:
            for p in (C4, D4):
                clips[SoundKey(c, p)] = make_clip(clip_amplitude(c, p))
        else:
            clips[SoundKey(c)] = make_clip(clip_amplitude(c))
    return ConsonantTable(clips)


def write_clip(path, amplitude: float, n: int = CLIP_LENGTH, header: bool = True) -> None:
    lines = []
    if header:
        lines += ["; Sample Rate 44100", "; Channels 1"]
    lines += [f"  {i * CLIP_STEP:14.8g}\t{amplitude:10.6g}" for i in range(n)]
    path.write_text("\n".join(lines) + "\n")


@pytest.fixture
def asset_dir(tmp_path):
    """Directory laid out the way load_consonant_table and the CLI expect."""
    d = tmp_path / "assets"
    d.mkdir()
    for c in CONSONANTS:
        if c in VOICED_CONSONANTS:
            for p in (C4, D4):
                write_clip(d / f"{c.value}_{p.name}.dat", clip_amplitude(c, p))
        else:
            write_clip(d / f"{c.value}.dat", clip_amplitude(c))

    rows = [
        f"{v.value}_{p.name} {vowel_amplitude(v, p)}"
        for v in sorted(VOWELS, key=lambda s: s.value) for p in (C4, D4)
    ]
    (d / "vowelVals.txt").write_text("\n".join(rows) + "\n")
    return d

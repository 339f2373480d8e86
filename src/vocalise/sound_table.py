"""Vowel and consonant sample tables.

Both tables are built once from their definition files and are read-only
afterwards. They are plain values passed to the synthesizer; nothing here is
module-level state.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import NamedTuple

import numpy as np

from vocalise.dat import read_dat
from vocalise.errors import (
    AssetError,
    InvalidPitchError,
    MissingSampleError,
    UnknownPhonemeError,
)
from vocalise.phonemes import (
    UNVOICED_CONSONANTS,
    VOICED_CONSONANTS,
    PhonemeSymbol,
    parse_symbol,
)
from vocalise.pitch import Pitch

logger = logging.getLogger(__name__)

CONSONANT_DURATION = 0.18  # seconds; every consonant clip spans this long

# Gap kept between a clip's last offset and CONSONANT_DURATION.
_OFFSET_TOLERANCE = 1e-9


class SoundKey(NamedTuple):
    """Lookup key: a symbol, plus a pitch when the sample depends on it."""
    symbol: PhonemeSymbol
    pitch: Pitch | None = None

    def __str__(self) -> str:
        if self.pitch is None:
            return self.symbol.value
        return f"{self.symbol.value}_{self.pitch.name}"


@dataclass(frozen=True, eq=False)
class ConsonantClip:
    """A pre-rendered consonant: parallel arrays of offsets and amplitudes.

    Offsets are seconds from the start of the consonant, non-decreasing and
    within [0, CONSONANT_DURATION). The last offset stays strictly below
    CONSONANT_DURATION so it never meets the next phoneme's first sample.
    """
    offsets: np.ndarray
    amplitudes: np.ndarray

    def __post_init__(self):
        offsets = np.array(self.offsets, dtype=np.float64)
        amplitudes = np.array(self.amplitudes, dtype=np.float64)
        if offsets.ndim != 1 or offsets.shape != amplitudes.shape:
            raise ValueError("Clip offsets and amplitudes must be 1-D arrays of equal length")
        if len(offsets) == 0:
            raise ValueError("Clip has no samples")
        if offsets[0] < 0:
            raise ValueError(f"Clip starts before zero ({offsets[0]:g}s)")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("Clip offsets are not in time order")
        if offsets[-1] > CONSONANT_DURATION - _OFFSET_TOLERANCE:
            raise ValueError(
                f"Clip must end before {CONSONANT_DURATION}s ({offsets[-1]:g}s)"
            )
        offsets.flags.writeable = False
        amplitudes.flags.writeable = False
        object.__setattr__(self, "offsets", offsets)
        object.__setattr__(self, "amplitudes", amplitudes)

    def __len__(self) -> int:
        return len(self.offsets)

    def samples(self) -> list[tuple[float, float]]:
        """(offset, amplitude) pairs as plain floats."""
        return list(zip(self.offsets.tolist(), self.amplitudes.tolist()))


class VowelTable:
    """Sustained-tone amplitude per (vowel, pitch)."""

    def __init__(self, values: Mapping[SoundKey, float]):
        self._values = MappingProxyType(
            {key: float(value) for key, value in values.items()}
        )

    @property
    def values(self) -> Mapping[SoundKey, float]:
        return self._values

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def value(self, symbol: PhonemeSymbol, pitch: Pitch) -> float:
        """Return the amplitude for a vowel sung at pitch.

        Raises:
            MissingSampleError: if the table has no entry for the pair.
        """
        try:
            return self._values[SoundKey(symbol, pitch)]
        except KeyError:
            raise MissingSampleError("vowel", symbol, pitch) from None


class ConsonantTable:
    """Consonant clips, keyed by (symbol, pitch) if voiced, else by symbol."""

    def __init__(self, clips: Mapping[SoundKey, ConsonantClip]):
        self._clips = MappingProxyType(dict(clips))

    @property
    def clips(self) -> Mapping[SoundKey, ConsonantClip]:
        return self._clips

    def __len__(self) -> int:
        return len(self._clips)

    def __contains__(self, key: object) -> bool:
        return key in self._clips

    @staticmethod
    def key_for(symbol: PhonemeSymbol, pitch: Pitch) -> SoundKey:
        """Unvoiced consonants sound the same at every pitch."""
        if symbol.is_voiced:
            return SoundKey(symbol, pitch)
        return SoundKey(symbol)

    def clip(self, symbol: PhonemeSymbol, pitch: Pitch) -> ConsonantClip:
        """Return the clip for a consonant sung at pitch.

        Raises:
            MissingSampleError: if no clip was loaded for the key.
        """
        key = self.key_for(symbol, pitch)
        try:
            return self._clips[key]
        except KeyError:
            raise MissingSampleError("consonant", symbol, key.pitch) from None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def parse_sound_key(text: str) -> SoundKey:
    """Parse 'a_C4' or 'k' into a SoundKey."""
    symbol_text, sep, pitch_text = text.partition("_")
    symbol = parse_symbol(symbol_text)
    if not sep:
        return SoundKey(symbol)
    return SoundKey(symbol, Pitch.parse(pitch_text))


def load_vowel_table(path: str | Path) -> VowelTable:
    """Load a vowel table from whitespace-delimited 'symbol_pitch value' lines.

    Blank lines and lines starting with ';' or '#' are ignored. When a key
    appears twice the later value wins.

    Raises:
        AssetError: if the file is missing or any line is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise AssetError(f"Vowel table not found: {path}")

    try:
        lines = path.read_text().splitlines()
    except OSError as e:
        raise AssetError(f"Could not read vowel table {path}: {e}") from e

    values: dict[SoundKey, float] = {}
    for lineno, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped[0] in ";#":
            continue
        fields = stripped.split()
        if len(fields) != 2:
            raise AssetError(f"{path}:{lineno}: expected 'key value', got {stripped!r}")
        key_text, value_text = fields
        try:
            key = parse_sound_key(key_text)
            value = float(value_text)
        except (UnknownPhonemeError, InvalidPitchError, ValueError) as e:
            raise AssetError(f"{path}:{lineno}: {e}") from e
        if not key.symbol.is_vowel or key.pitch is None:
            raise AssetError(f"{path}:{lineno}: {key_text!r} is not a vowel_pitch key")
        if key in values:
            logger.warning(f"{path}:{lineno}: duplicate vowel key {key}, using later value")
        values[key] = value

    logger.info(f"Loaded {len(values)} vowel values from {path}")
    return VowelTable(values)


def load_clip(path: str | Path) -> ConsonantClip:
    """Load a single consonant clip from a .dat file."""
    offsets, amplitudes = read_dat(path)
    try:
        return ConsonantClip(offsets, amplitudes)
    except ValueError as e:
        raise AssetError(f"Bad consonant clip {path}: {e}") from e


def load_consonant_table(asset_dir: str | Path) -> ConsonantTable:
    """Load every consonant clip from asset_dir.

    Unvoiced consonants need one '<symbol>.dat' file. Voiced consonants need at
    least one '<symbol>_<pitch>.dat' file; every pitch present is loaded.

    Raises:
        AssetError: if the directory or any required clip is missing or bad.
    """
    asset_dir = Path(asset_dir)
    if not asset_dir.is_dir():
        raise AssetError(f"Asset directory not found: {asset_dir}")

    clips: dict[SoundKey, ConsonantClip] = {}

    for symbol in sorted(UNVOICED_CONSONANTS, key=lambda s: s.value):
        clips[SoundKey(symbol)] = load_clip(asset_dir / f"{symbol.value}.dat")

    for symbol in sorted(VOICED_CONSONANTS, key=lambda s: s.value):
        paths = sorted(asset_dir.glob(f"{symbol.value}_*.dat"))
        if not paths:
            raise AssetError(
                f"No clips for voiced consonant '{symbol}' in {asset_dir} "
                f"(expected {symbol.value}_<pitch>.dat)"
            )
        for path in paths:
            try:
                key = parse_sound_key(path.stem)
            except InvalidPitchError as e:
                raise AssetError(f"Bad clip file name {path.name}: {e}") from e
            clips[key] = load_clip(path)

    logger.info(f"Loaded {len(clips)} consonant clips from {asset_dir}")
    return ConsonantTable(clips)

"""Core data types for vocalise."""

from dataclasses import dataclass
from typing import NamedTuple

from vocalise.pitch import Pitch


@dataclass(frozen=True)
class Note:
    """One sung note."""
    duration: float     # seconds
    phonemes: str       # phoneme symbols in sung order, e.g. "ka"
    pitch: Pitch


class TimelineSample(NamedTuple):
    """One emitted point of the song timeline."""
    time: float         # seconds since the start of the song
    amplitude: float

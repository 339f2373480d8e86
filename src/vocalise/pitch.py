"""Note-name pitches used as sample-table keys."""

from dataclasses import dataclass

import pretty_midi

from vocalise.errors import InvalidPitchError


@dataclass(frozen=True, order=True)
class Pitch:
    """A chromatic pitch identified by its MIDI note number.

    Enharmonic spellings compare equal: Pitch.parse("C#4") == Pitch.parse("Db4").
    """
    midi: int

    @classmethod
    def parse(cls, name: str) -> "Pitch":
        """Parse a note name like 'C4', 'F#3' or 'Bb5'."""
        try:
            return cls(pretty_midi.note_name_to_number(name.strip()))
        except (ValueError, AttributeError, KeyError):
            raise InvalidPitchError(f"Invalid note name: {name!r}") from None

    @property
    def name(self) -> str:
        """Canonical sharp spelling, e.g. 'C#4'."""
        return pretty_midi.note_number_to_name(self.midi)

    @property
    def hz(self) -> float:
        return float(pretty_midi.note_number_to_hz(self.midi))

    def semitones_from(self, other: "Pitch") -> int:
        """Signed semitone distance from other to self."""
        return self.midi - other.midi

    def __str__(self) -> str:
        return self.name


def pitch_range(low: Pitch, high: Pitch) -> list[Pitch]:
    """All chromatic pitches from low to high, inclusive."""
    if high < low:
        raise ValueError(f"Empty pitch range: {low} > {high}")
    return [Pitch(m) for m in range(low.midi, high.midi + 1)]

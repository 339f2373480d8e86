"""Exception types raised by vocalise."""


class VocaliseError(Exception):
    """Base class for all vocalise errors."""


class AssetError(VocaliseError, OSError):
    """An input or asset file is missing, unreadable, or malformed."""


class SongFormatError(VocaliseError, ValueError):
    """A line of the note list could not be parsed."""


class InvalidPitchError(VocaliseError, ValueError):
    """A note name such as 'C#4' could not be parsed."""


class UnknownPhonemeError(VocaliseError, ValueError):
    """A character is not part of the phoneme alphabet."""


class AllocationError(VocaliseError, ValueError):
    """A note's duration cannot be split among its phonemes."""


class MissingSampleError(VocaliseError, LookupError):
    """No sample data exists for a symbol at a given pitch."""

    def __init__(self, kind: str, symbol, pitch=None):
        self.kind = kind
        self.symbol = symbol
        self.pitch = pitch
        where = f" at pitch {pitch}" if pitch is not None else ""
        super().__init__(f"No {kind} sample for '{symbol}'{where}")

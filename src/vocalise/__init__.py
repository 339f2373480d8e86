"""Sing a note list through pre-recorded phoneme samples."""

__version__ = "0.1.0"

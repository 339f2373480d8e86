"""Sample file I/O: sox-style .dat text files and WAV export.

A .dat file is a header of ';'-prefixed lines followed by one whitespace
separated (time, amplitude) row per sample:

    ; Sample Rate 44100
    ; Channels 1
           0.0000000	 0.0124510
       2.2675737e-05	 0.0133670
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import numpy as np
import scipy.io.wavfile as wavfile

from vocalise.errors import AssetError
from vocalise.types import TimelineSample

logger = logging.getLogger(__name__)


def read_dat(path: str | Path) -> tuple[np.ndarray, np.ndarray]:
    """Read a .dat file and return (times, amplitudes) as float64 arrays.

    Header lines starting with ';' are skipped. If the file has more than one
    channel column, only the first is returned.

    Raises:
        AssetError: if the file is missing, unreadable, empty or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise AssetError(f"File not found: {path}")

    try:
        data = np.loadtxt(path, comments=";", dtype=np.float64, ndmin=2)
    except (OSError, ValueError) as e:
        raise AssetError(f"Could not read {path}: {e}") from e

    if data.size == 0:
        raise AssetError(f"No samples in {path}")
    if data.shape[1] < 2:
        raise AssetError(f"Expected time and amplitude columns in {path}")

    return data[:, 0].copy(), data[:, 1].copy()


def format_sample(time: float, amplitude: float) -> str:
    """Format one sample as a .dat row (without newline).

    Both columns keep trailing zeros, so 0 is written as 0.0000000.
    """
    return f"  {time:#14.8g}\t{amplitude:#10.6g}"


def write_dat(
    path: str | Path,
    samples: Iterable[TimelineSample],
    sample_rate: int,
    channels: int = 1,
) -> int:
    """Stream samples to a .dat file. Returns the number of samples written.

    Samples are consumed lazily, so a generator of any length can be written
    without holding it in memory.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(path, "w") as f:
        f.write(f"; Sample Rate {sample_rate}\n")
        f.write(f"; Channels {channels}\n")
        for time, amplitude in samples:
            f.write(format_sample(time, amplitude))
            f.write("\n")
            count += 1

    logger.info(f"Wrote {count} samples to {path}")
    return count


def write_wav(path: str | Path, amplitudes: np.ndarray, sample_rate: int) -> None:
    """Write a song's amplitude column as mono 16-bit PCM.

    The timeline's time column is implied by sample_rate. Amplitudes outside
    [-1, 1] saturate rather than wrap.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    pcm = np.round(np.clip(amplitudes, -1.0, 1.0) * 32767).astype(np.int16)
    wavfile.write(str(path), sample_rate, pcm)
    logger.info(f"Wrote {len(pcm)} WAV frames to {path}")

"""Pitched asset generation via sox.

Takes one reference recording and renders a chromatic set of pitch-shifted
copies, one sox invocation per target pitch. Output files are named
'<prefix>_<pitch><suffix>' (e.g. 'b_C#4.dat') so the sound table can load
them directly.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from vocalise.errors import AssetError
from vocalise.pitch import Pitch, pitch_range

logger = logging.getLogger(__name__)

DEFAULT_LOW = Pitch.parse("F3")
DEFAULT_HIGH = Pitch.parse("F6")
DEFAULT_REFERENCE = Pitch.parse("C4")

SOX_TIMEOUT = 60  # seconds per invocation


@dataclass
class ShiftResult:
    """Outcome of one pitch-shift invocation."""
    pitch: Pitch
    cents: int
    output_path: Path
    ok: bool
    error: str | None = None


def shift_cents(target: Pitch, reference: Pitch) -> int:
    """Cents to shift a recording made at reference so it sounds at target."""
    return 100 * target.semitones_from(reference)


def asset_name(prefix: str, pitch: Pitch, suffix: str = ".dat") -> str:
    return f"{prefix}_{pitch.name}{suffix}"


def build_shift_command(
    input_path: Path,
    output_path: Path,
    cents: int,
    trim: float | None = None,
) -> list[str]:
    """Build the sox command for one pitch shift.

    sox infers the output format from the extension, so '.dat' writes the text
    format the sound table reads and '.wav' writes audio.
    """
    cmd = ["sox", str(input_path), str(output_path), "pitch", str(cents)]
    if trim is not None:
        cmd.extend(["trim", "0", f"{trim:.4f}"])
    return cmd


def pitch_shift_clip(
    input_path: Path,
    output_path: Path,
    cents: int,
    trim: float | None = None,
) -> Path:
    """Pitch-shift input_path by cents into output_path.

    Raises:
        subprocess.CalledProcessError: if sox exits non-zero.
        subprocess.TimeoutExpired: if sox runs too long.
        FileNotFoundError: if sox is not installed.
    """
    cmd = build_shift_command(input_path, output_path, cents, trim)
    result = subprocess.run(cmd, capture_output=True, text=True, timeout=SOX_TIMEOUT)
    result.check_returncode()
    return output_path


def generate_pitched_assets(
    reference_path: Path,
    output_dir: Path,
    prefix: str,
    reference_pitch: Pitch = DEFAULT_REFERENCE,
    pitches: list[Pitch] | None = None,
    suffix: str = ".dat",
    trim: float | None = None,
) -> list[ShiftResult]:
    """Render reference_path at every pitch in pitches.

    Each invocation is independent: a failure is logged and recorded in the
    returned results, and the remaining pitches are still rendered.

    Raises:
        AssetError: if the reference recording does not exist.
    """
    reference_path = Path(reference_path)
    if not reference_path.exists():
        raise AssetError(f"Reference recording not found: {reference_path}")
    if pitches is None:
        pitches = pitch_range(DEFAULT_LOW, DEFAULT_HIGH)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    results = []
    for pitch in pitches:
        cents = shift_cents(pitch, reference_pitch)
        output_path = output_dir / asset_name(prefix, pitch, suffix)
        try:
            pitch_shift_clip(reference_path, output_path, cents, trim)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            message = f"sox exited with code {e.returncode}"
            if stderr:
                message += f": {stderr}"
            logger.warning(f"{output_path.name}: {message}")
            results.append(ShiftResult(pitch, cents, output_path, ok=False, error=message))
            continue
        except (subprocess.TimeoutExpired, FileNotFoundError) as e:
            logger.warning(f"{output_path.name}: {e}")
            results.append(ShiftResult(pitch, cents, output_path, ok=False, error=str(e)))
            continue
        logger.info(f"Wrote {output_path.name} ({cents:+d} cents)")
        results.append(ShiftResult(pitch, cents, output_path, ok=True))

    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.warning(f"{failed} of {len(results)} pitch shifts failed")
    return results

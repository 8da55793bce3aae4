"""
ingestion/annotation_loader.py — Read pitch observations from text files.

Expected layout, one observation per row:

    time_sec  pitch_hz  [probability]

Columns are separated by whitespace or commas. Blank lines and lines
starting with "#" are ignored. Rows that do not parse (wrong column count,
non-numeric or non-finite values such as "nan", negative times,
probabilities outside [0, 1]) are skipped and counted, never fatal.

How the file was produced (external tracker, live capture) is not this
module's concern.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path

from core.pitch.types import Annotation

logger = logging.getLogger(__name__)

_SEPARATOR = re.compile(r"[\s,]+")


def parse_annotation_row(row: str) -> Annotation:
    """Parse one "time pitch [probability]" row.

    Raises:
        ValueError: If the row does not hold a valid observation.
    """
    fields = [field for field in _SEPARATOR.split(row.strip()) if field]
    if len(fields) not in (2, 3):
        raise ValueError(f"Expected 2 or 3 columns, got {len(fields)}: {row!r}")
    values = [float(field) for field in fields]
    if not all(math.isfinite(value) for value in values):
        raise ValueError(f"Non-finite value in row: {row!r}")
    time_sec, pitch_hz = values[0], values[1]
    probability = values[2] if len(values) == 3 else 1.0
    return Annotation(time_sec=time_sec, pitch_hz=pitch_hz, probability=probability)


def load_annotations(path: str | Path) -> list[Annotation]:
    """Load every well-formed observation from a text file.

    Args:
        path: Path to the observation file.

    Returns:
        Observations in file order.

    Raises:
        FileNotFoundError: File does not exist at the given path.
        OSError: The file exists but could not be read.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Annotation file not found: {file_path}")

    annotations: list[Annotation] = []
    skipped = 0
    for number, line in enumerate(file_path.read_text().splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        try:
            annotations.append(parse_annotation_row(line))
        except ValueError as exc:
            skipped += 1
            logger.debug("%s:%d skipped: %s", file_path.name, number, exc)

    logger.info("Loaded %d observation(s) from %s", len(annotations), file_path)
    if skipped:
        logger.info("Skipped %d malformed row(s)", skipped)
    return annotations

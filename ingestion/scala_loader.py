"""
ingestion/scala_loader.py — File I/O boundary for Scala (.scl) tone scales.

This is the ONLY module that reads or writes .scl files. Parsing and
formatting are delegated to core/pitch/scala.py, which works on strings.

Usage:
    from ingestion.scala_loader import read_scala_file, write_scala_file
    scale = read_scala_file("data/scales/pelog.scl")
    write_scala_file(scale, "out/pelog_copy.scl")
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.pitch.scala import ScaleDefinition, declared_pitch_count, format_scala, parse_scala

logger = logging.getLogger(__name__)

SCALA_EXTENSION: str = ".scl"


def read_scala_file(path: str | Path) -> ScaleDefinition:
    """Read and parse a Scala file.

    Malformed pitch lines are skipped, never fatal. The file is decoded
    with the platform's default text encoding.

    Args:
        path: Path to a .scl file.

    Returns:
        The parsed ScaleDefinition. Names are always present ("" for
        unnamed pitches).

    Raises:
        FileNotFoundError: File does not exist at the given path.
        ValueError: File extension is not .scl.
        OSError: The file exists but could not be read.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"Scala file not found: {file_path}")

    if file_path.suffix.lower() != SCALA_EXTENSION:
        raise ValueError(f"Expected a {SCALA_EXTENSION} file, got: {file_path.suffix!r}")

    text = file_path.read_text()
    scale = parse_scala(text)

    declared = declared_pitch_count(text)
    if declared is not None and declared != len(scale):
        logger.debug(
            "%s declares %d pitch(es) but %d were parsed", file_path.name, declared, len(scale)
        )
    logger.info("Read %d pitch(es) from %s", len(scale), file_path)
    return scale


def write_scala_file(scale: ScaleDefinition, path: str | Path) -> bool:
    """Write a ScaleDefinition to disk in Scala format.

    A scale without pitches is not written: any existing file at ``path``
    is left untouched and a warning is logged.

    Args:
        scale: The scale to write.
        path: Destination. The header comment names it with a .scl suffix.

    Returns:
        True if the file was written, False if the write was skipped.

    Raises:
        OSError: The destination could not be written.
    """
    file_path = Path(path)

    if len(scale) == 0:
        logger.warning("No pitches defined, file %s not created.", file_path)
        return False

    text = format_scala(scale, f"{file_path.stem}{SCALA_EXTENSION}")
    file_path.write_text(text)
    logger.info("Wrote %d pitch(es) to %s", len(scale), file_path)
    return True

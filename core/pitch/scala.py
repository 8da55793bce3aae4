"""
core/pitch/scala.py — Scale definitions and the Scala (.scl) text format.

Pure string ↔ ScaleDefinition conversion. Reading and writing files lives
in ingestion/scala_loader.py.

Format (line oriented):
    - Lines whose first non-blank character is "!" are comments.
    - First data line: free-text description.
    - Second data line: number of pitches (informational only).
    - Remaining data lines: one pitch each, optionally followed by a name.

Pitch lines come in two flavours, recognised by independent patterns:

    ratio:  "81/64", "5", "10/20", "5/4   E\\"
    cents:  "408.0", "408.", "-5.0", "100.0 C#"

A token containing "/" or lacking "." is a ratio and is converted to
cents; anything else is read as cents directly. Lines matching neither
pattern, or whose numeric token does not parse, are skipped.

Exports:
    ScaleDefinition, WESTERN_TUNING, western_tuning
    is_ratio_line, is_cents_line, parse_pitch
    parse_scala, format_scala, declared_pitch_count
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from core.pitch.conversion import ratio_to_cents
from core.pitch.histogram import CircularHistogram
from core.pitch.tone_scale import create_tone_scale

_RATIO_LINE = re.compile(r"\s*[0-9]+(?:/[0-9]+)?.*")
_CENTS_LINE = re.compile(r"\s*[-+]?[0-9]+\.[0-9]*.*")
_RATIO_TOKEN = re.compile(r"[0-9]+(?:/[0-9]+)?")
_CENTS_TOKEN = re.compile(r"[-+]?[0-9]+\.[0-9]*")
_COMMENT_PREFIX = "!"


# ---------------------------------------------------------------------------
# ScaleDefinition
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScaleDefinition:
    """A tone scale: description, pitches in cents, optional pitch names.

    Pitches keep their given order and are neither sorted nor deduplicated.
    Sequences passed in are copied to tuples, so the definition shares no
    mutable state with the caller.

    Invariants:
        names is None or len(names) == len(pitches)
    """

    description: str
    pitches: tuple[float, ...]
    names: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "pitches", tuple(float(p) for p in self.pitches))
        if self.names is not None:
            object.__setattr__(self, "names", tuple(self.names))
            if len(self.names) != len(self.pitches):
                raise ValueError(
                    f"names and pitches must have the same length, "
                    f"got {len(self.names)} names for {len(self.pitches)} pitches"
                )

    @property
    def has_names(self) -> bool:
        return self.names is not None

    def build_histogram(self, reference: CircularHistogram | None = None) -> CircularHistogram:
        """Tone-scale histogram with a unit spike per pitch."""
        return create_tone_scale(self.pitches, reference)

    def __len__(self) -> int:
        return len(self.pitches)


WESTERN_TUNING = ScaleDefinition(
    description="The western tone scale",
    pitches=(0.0, 100.0, 200.0, 300.0, 400.0, 500.0, 600.0, 700.0, 800.0, 900.0, 1000.0, 1100.0),
    names=("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"),
)
"""12-tone equal temperament, C to B."""


def western_tuning() -> ScaleDefinition:
    return WESTERN_TUNING


# ---------------------------------------------------------------------------
# Pitch lines
# ---------------------------------------------------------------------------


def is_ratio_line(line: str) -> bool:
    """True for lines like "81/64", "5" or "3/2 fifth"."""
    return _RATIO_LINE.fullmatch(line) is not None


def is_cents_line(line: str) -> bool:
    """True for lines like "408.0", "-5.0" or "100. C#"."""
    return _CENTS_LINE.fullmatch(line) is not None


def parse_pitch(token: str) -> float:
    """Convert a numeric pitch token to cents.

    Examples:
        "81/64" → 407.82
        "5"     → 2786.31 (5/1)
        "408."  → 408.0
        "-5.0"  → -5.0

    Raises:
        ValueError: If the token is not a valid ratio or cents value, or
            a ratio term is ≤ 0. Only ASCII digits are accepted, so
            tokens like "1_200" or "1٣" are rejected.
    """
    if "/" in token or "." not in token:
        if _RATIO_TOKEN.fullmatch(token) is None:
            raise ValueError(f"Malformed ratio: {token!r}")
        terms = token.split("/")
        numerator = float(terms[0])
        denominator = float(terms[1]) if len(terms) == 2 else 1.0
        return ratio_to_cents(numerator, denominator)
    if _CENTS_TOKEN.fullmatch(token) is None:
        raise ValueError(f"Malformed cents value: {token!r}")
    return float(token)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _data_lines(text: str) -> Iterator[str]:
    for line in text.splitlines():
        if line.strip().startswith(_COMMENT_PREFIX):
            continue
        yield line


def declared_pitch_count(text: str) -> int | None:
    """The count on the second data line, or None if absent or not an integer."""
    for number, line in enumerate(_data_lines(text), start=1):
        if number == 2:
            try:
                return int(line.strip())
            except ValueError:
                return None
    return None


def parse_scala(text: str) -> ScaleDefinition:
    """Parse Scala file contents into a ScaleDefinition.

    Never raises on content: unrecognised or malformed pitch lines are
    skipped. The declared pitch count is not checked against the pitches
    found. Every parsed pitch gets a name ("" when the line has none).
    The description line is kept as written, surrounding spaces included.

    Args:
        text: Full file contents.

    Returns:
        ScaleDefinition with names always present.
    """
    description = ""
    pitches: list[float] = []
    names: list[str] = []

    for number, line in enumerate(_data_lines(text), start=1):
        if number == 1:
            description = line
            continue
        if number == 2:
            continue
        if not (is_ratio_line(line) or is_cents_line(line)):
            continue
        fields = line.strip().split(None, 1)
        try:
            pitch = parse_pitch(fields[0])
        except ValueError:
            continue
        pitches.append(pitch)
        names.append(fields[1].strip() if len(fields) == 2 else "")

    return ScaleDefinition(description=description, pitches=tuple(pitches), names=tuple(names))


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_scala(scale: ScaleDefinition, file_name: str) -> str:
    """Render a ScaleDefinition in Scala format.

    Layout: two comment lines naming the file, the description, the pitch
    count, then one "<cents>[ <name>]" line per pitch. Cents are written
    with a decimal point so they read back as cents, not ratios.
    """
    description = " ".join(scale.description.splitlines())
    lines = [f"{_COMMENT_PREFIX} {file_name}", _COMMENT_PREFIX, description, str(len(scale))]
    names: Sequence[str] = scale.names if scale.names is not None else ()
    for index, pitch in enumerate(scale.pitches):
        row = np.format_float_positional(float(pitch), trim="0")
        if index < len(names) and names[index]:
            row = f"{row} {names[index]}"
        lines.append(row)
    return "\n".join(lines) + "\n"

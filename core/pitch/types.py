"""
core/pitch/types.py — Frozen value objects for pitch-class analysis.

All types are frozen dataclasses — immutable value objects that can be
safely passed between layers and cached.

Types:
    Peak        — a local maximum (position, height) taken from a histogram
    Annotation  — one pitch observation from an external pitch tracker
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Peak:
    """A peak extracted from a circular histogram.

    Produced by ``detect_peaks`` or supplied by the caller to the
    tone-scale synthesizer.
    """

    position: float
    """Key of the peak in the histogram's domain, e.g. cents in [0, 1200)."""

    height: float
    """Bin count at that position."""


@dataclass(frozen=True)
class Annotation:
    """A single pitch observation.

    Invariants:
        time_sec >= 0
        0.0 <= probability <= 1.0
    """

    time_sec: float
    """Timestamp in seconds from the beginning of the audio."""

    pitch_hz: float
    """Detected frequency. Values <= 0 or NaN mean unvoiced and are never counted."""

    probability: float = 1.0
    """Confidence reported by the tracker. 1.0 when the tracker reports none."""

    def __post_init__(self) -> None:
        if self.time_sec < 0:
            raise ValueError(f"time_sec must be >= 0, got {self.time_sec}")
        if not (0.0 <= self.probability <= 1.0):
            raise ValueError(f"probability must be in [0, 1], got {self.probability}")

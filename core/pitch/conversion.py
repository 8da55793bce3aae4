"""
core/pitch/conversion.py — Pitch unit conversions (pure math).

Absolute cents are measured from MIDI note 0 (C-1, ~8.18 Hz), so
C-1 = 0 cents and A4 = 6900 cents. Relative cents fold absolute cents
into a single octave [0, 1200), which is the key space of every
pitch-class histogram.

Usage:
    from core.pitch.conversion import hz_to_relative_cents
    hz_to_relative_cents(440.0)  # 900.0 (A)
"""

from __future__ import annotations

import math

from core.config import A4_ABSOLUTE_CENTS, A4_FREQUENCY_HZ, OCTAVE_CENTS


def hz_to_absolute_cents(hz: float) -> float:
    """Convert a frequency to cents above MIDI note 0.

    Formula: cents = 1200 × log₂(hz / 440) + 6900

    Anchored at A4 so that octaves of 440 Hz land exactly on 900 cents
    of the pitch class.

    Raises:
        ValueError: If hz ≤ 0.
    """
    if hz <= 0.0:
        raise ValueError(f"Hz must be > 0, got {hz}")
    return OCTAVE_CENTS * math.log2(hz / A4_FREQUENCY_HZ) + A4_ABSOLUTE_CENTS


def absolute_cents_to_hz(cents: float) -> float:
    """Inverse of ``hz_to_absolute_cents``."""
    return A4_FREQUENCY_HZ * 2.0 ** ((cents - A4_ABSOLUTE_CENTS) / OCTAVE_CENTS)


def hz_to_relative_cents(hz: float) -> float:
    """Convert a frequency to its pitch class in cents, in [0, 1200)."""
    return hz_to_absolute_cents(hz) % OCTAVE_CENTS


def ratio_to_cents(numerator: float, denominator: float = 1.0) -> float:
    """Size of a frequency ratio in cents.

    Numerator and denominator are each converted as if they were
    frequencies; the interval is the absolute difference, so 5/4 and 4/5
    both give ~386.31 cents.

    Examples:
        81/64 → 407.82
        3/2   → 701.96
        2     → 1200.0

    Raises:
        ValueError: If either term is ≤ 0.
    """
    return abs(hz_to_absolute_cents(numerator) - hz_to_absolute_cents(denominator))


def circular_distance(a: float, b: float, period: float = OCTAVE_CENTS) -> float:
    """Shortest distance between two points on a circle of the given period."""
    d = abs(a - b) % period
    return min(d, period - d)

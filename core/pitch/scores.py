"""
core/pitch/scores.py — Pluggable peak scoring strategies.

A peak score maps one class of a histogram to a non-negative number; zero
means "not a peak here". Detection runs two strategies in sequence:

    1. DifferenceScore with distance 1 — a cheap local-maximum gate.
    2. LocalHeightScore with the detection window — prominence, evaluated
       only for classes that passed the gate.

Any class with a matching ``score`` method satisfies ``PeakScore``
without inheriting from it, so new strategies can be passed to
``detect_peaks`` without touching the detector.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.pitch.histogram import CircularHistogram


@runtime_checkable
class PeakScore(Protocol):
    """Contract for a per-class peak score."""

    def score(self, histogram: CircularHistogram, index: int, parameter: int) -> float:
        """
        Score class ``index`` of ``histogram``.

        Args:
            histogram: Histogram to inspect. Must not be mutated.
            index: Class index. Neighbors are addressed circularly.
            parameter: Strategy-specific distance or window size, in classes.

        Returns:
            A non-negative score. 0.0 means the class is not a peak.
        """
        ...


class DifferenceScore:
    """Local-maximum gate against the two neighbors at ``parameter`` classes.

    Returns 0.0 when either neighbor is strictly higher. Otherwise returns
    the mean of the two one-sided differences, which is positive for a
    strict local maximum and for the edge of a plateau that drops on one
    side. A perfectly flat neighborhood scores 0.0.
    """

    def score(self, histogram: CircularHistogram, index: int, parameter: int) -> float:
        if parameter <= 0:
            raise ValueError(f"neighbor distance must be positive, got {parameter}")
        current = histogram.count_for_class(index)
        left = histogram.count_for_class(index - parameter)
        right = histogram.count_for_class(index + parameter)
        if left > current or right > current:
            return 0.0
        return ((current - left) + (current - right)) / 2.0


class LocalHeightScore:
    """Prominence: the class count minus the minimum within ±``parameter`` classes."""

    def score(self, histogram: CircularHistogram, index: int, parameter: int) -> float:
        if parameter <= 0:
            raise ValueError(f"window size must be positive, got {parameter}")
        current = histogram.count_for_class(index)
        window_min = min(
            histogram.count_for_class(index + offset) for offset in range(-parameter, parameter + 1)
        )
        return current - window_min

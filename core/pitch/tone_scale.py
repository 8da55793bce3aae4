"""
core/pitch/tone_scale.py — Synthesized tone-scale histograms and matching.

A tone-scale histogram is a CircularHistogram over the octave [0, 1200)
cents built from a description of a scale rather than from observations.
Two construction modes:

    - ``create_tone_scale``: one unit spike per pitch. Represents a fixed
      tuning (e.g. a .scl file) as a grid of known scale degrees.
    - ``create_tone_scale_from_peaks``: a sum of Gaussian curves, one per
      peak, with circular wraparound. Represents detected peaks as a smooth
      density suitable for cross-correlation.

Both modes take an optional ``reference`` histogram and copy its class
width, so tone scales built from different sources compare bin-for-bin.

Matching helpers (``correlation``, ``best_shift``) compare two equally
resolved histograms under cyclic rotation.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy import fft as scipy_fft

from core.config import (
    DEFAULT_HISTOGRAM_CONFIG,
    DEFAULT_TONE_SCALE_CONFIG,
    OCTAVE_CENTS,
    ToneScaleConfig,
)
from core.pitch.histogram import CircularHistogram


def _resolution_for(reference: CircularHistogram | None) -> int:
    """Number of octave classes matching the reference's class width."""
    if reference is None:
        return DEFAULT_HISTOGRAM_CONFIG.n_classes
    return max(1, round(OCTAVE_CENTS / reference.class_width))


def _per_peak(
    values: Sequence[float] | None,
    default: float | None,
    n_peaks: int,
    label: str,
) -> list[float | None]:
    if values is None:
        return [default] * n_peaks
    if len(values) != n_peaks:
        raise ValueError(f"{label} must have one entry per peak ({n_peaks}), got {len(values)}")
    for value in values:
        if value <= 0:
            raise ValueError(f"{label} must be positive, got {value}")
    return list(values)


def create_tone_scale(
    pitches: Sequence[float],
    reference: CircularHistogram | None = None,
) -> CircularHistogram:
    """Tone scale with a unit spike at each pitch (cents, wrapped to the octave).

    Args:
        pitches: Scale degrees in cents. Duplicates add up.
        reference: Histogram whose class width is copied. Defaults to
            one class per cent.
    """
    histogram = CircularHistogram(0.0, OCTAVE_CENTS, _resolution_for(reference))
    for pitch in pitches:
        histogram.add(pitch, 1.0)
    return histogram


def create_tone_scale_from_peaks(
    positions: Sequence[float],
    heights: Sequence[float],
    widths: Sequence[float] | None = None,
    standard_deviations: Sequence[float] | None = None,
    *,
    reference: CircularHistogram | None = None,
    config: ToneScaleConfig = DEFAULT_TONE_SCALE_CONFIG,
) -> CircularHistogram:
    """Tone scale as a sum of circular Gaussian curves.

    Each bin receives, for every peak, ``height × exp(-d² / 2σ²)`` where d
    is the circular distance in cents from the bin's key to the peak
    position and σ is the peak's standard deviation.

    Args:
        positions: Peak positions in cents.
        heights: Peak amplitudes, same length as positions, ≥ 0.
        widths: Optional per-peak cutoff in cents; bins further away get
            nothing from that peak. Defaults to ``config.width``.
        standard_deviations: Optional per-peak σ in cents. Defaults to
            ``config.standard_deviation``.
        reference: Histogram whose class width is copied.
        config: Module-wide defaults.

    Raises:
        ValueError: On length mismatches, negative heights, or
            non-positive widths / standard deviations.
    """
    n_peaks = len(positions)
    if len(heights) != n_peaks:
        raise ValueError(
            f"heights must have one entry per peak ({n_peaks}), got {len(heights)}"
        )
    for height in heights:
        if height < 0:
            raise ValueError(f"heights must be non-negative, got {height}")
    peak_widths = _per_peak(widths, config.width, n_peaks, "widths")
    peak_sigmas = _per_peak(
        standard_deviations, config.standard_deviation, n_peaks, "standard_deviations"
    )

    n_classes = _resolution_for(reference)
    keys = np.arange(n_classes, dtype=np.float64) * (OCTAVE_CENTS / n_classes)
    counts = np.zeros(n_classes, dtype=np.float64)
    for position, height, width, sigma in zip(positions, heights, peak_widths, peak_sigmas):
        offset = np.abs(keys - position) % OCTAVE_CENTS
        distance = np.minimum(offset, OCTAVE_CENTS - offset)
        curve = height * np.exp(-0.5 * (distance / sigma) ** 2)
        if width is not None:
            curve[distance > width] = 0.0
        counts += curve
    return CircularHistogram.from_counts(counts, 0.0, OCTAVE_CENTS)


def _check_comparable(a: CircularHistogram, b: CircularHistogram) -> None:
    if a.n_classes != b.n_classes:
        raise ValueError(
            f"histograms must have the same number of classes, got {a.n_classes} and {b.n_classes}"
        )


def correlation(a: CircularHistogram, b: CircularHistogram, shift: int = 0) -> float:
    """Cosine similarity of ``a`` and ``b`` rotated up by ``shift`` classes.

    Returns 0.0 when either histogram is empty.

    Raises:
        ValueError: If the histograms have different resolutions.
    """
    _check_comparable(a, b)
    va = a.counts
    vb = np.roll(b.counts, shift)
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    return 0.0 if denom == 0.0 else float(np.dot(va, vb) / denom)


def best_shift(a: CircularHistogram, b: CircularHistogram) -> tuple[float, float]:
    """Rotation of ``b`` that best matches ``a``.

    Computes the circular cross-correlation for every shift at once.

    Returns:
        (shift, correlation) where shift is in key units, in
        [0, stop - start), and correlation equals
        ``correlation(a, b, shift_in_classes)``. (0.0, 0.0) when either
        histogram is empty. Ties resolve to the smallest shift.

    Raises:
        ValueError: If the histograms have different resolutions.
    """
    _check_comparable(a, b)
    va = a.counts
    vb = b.counts
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0, 0.0
    cross = scipy_fft.irfft(scipy_fft.rfft(va) * np.conj(scipy_fft.rfft(vb)), n=a.n_classes)
    # rounding keeps FFT noise from breaking ties between equal shifts
    scores = np.round(cross / denom, 12)
    shift = int(np.argmax(scores))
    return shift * a.class_width, float(scores[shift])

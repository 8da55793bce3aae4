"""
core/pitch/peaks.py — Peak detection on circular histograms.

Algorithm (``detect_peaks``):
    1. Score every class. A class that fails the difference gate
       (distance 1) scores 0; otherwise its score is its prominence over
       ±window_size classes.
    2. Keep classes scoring strictly above ``threshold``, ascending.
    3. Walk the candidates once, pairing each with its successor (the last
       pairs with the first). When a pair lies within window_size classes
       of each other (circularly), the lower of the two is dropped; on a
       tie the first of the pair is dropped.
    4. Convert survivors to Peak(key_for_class(i), count_for_class(i)).

Step 3 is a single pass over the original candidate list. Survivors that
become neighbors after a removal are not compared again, so two output
peaks can still be closer than window_size when three or more candidates
crowd together. With exactly two candidates the pair is visited in both
orders, so two equal candidates within the window both disappear. Callers rely on this exact spacing; do not turn it into
a fixed-point loop.

Usage:
    from core.pitch.peaks import detect_peaks
    peaks = detect_peaks(histogram, window_size=5, threshold=15.0)
"""

from __future__ import annotations

from collections.abc import Sequence

from core.config import (
    DEFAULT_PEAK_CONFIG,
    DEFAULT_TONE_SCALE_CONFIG,
    PeakDetectionConfig,
    ToneScaleConfig,
)
from core.pitch.histogram import CircularHistogram
from core.pitch.scores import DifferenceScore, LocalHeightScore, PeakScore
from core.pitch.tone_scale import create_tone_scale_from_peaks
from core.pitch.types import Peak

_GATE_DISTANCE: int = 1


def _class_distance(histogram: CircularHistogram, a: int, b: int) -> int:
    d = histogram.wrap_class(a - b)
    return min(d, histogram.n_classes - d)


def _candidate_pairs(candidates: Sequence[int]) -> list[tuple[int, int]]:
    """Each candidate with its circular successor.

    A single candidate has no partner. Two candidates give both (c0, c1)
    and (c1, c0), so a tie between them removes both.
    """
    if len(candidates) < 2:
        return []
    return [
        (candidates[i], candidates[(i + 1) % len(candidates)]) for i in range(len(candidates))
    ]


def score_classes(
    histogram: CircularHistogram,
    window_size: int,
    *,
    gate: PeakScore | None = None,
    prominence: PeakScore | None = None,
) -> list[float]:
    """Combined score per class: prominence for gated local maxima, else 0.

    Raises:
        ValueError: If window_size ≤ 0.
    """
    if window_size <= 0:
        raise ValueError(f"window_size must be positive, got {window_size}")
    gate = gate or DifferenceScore()
    prominence = prominence or LocalHeightScore()

    scores: list[float] = []
    for index in range(histogram.n_classes):
        if gate.score(histogram, index, _GATE_DISTANCE) == 0.0:
            scores.append(0.0)
        else:
            scores.append(prominence.score(histogram, index, window_size))
    return scores


def resolve_conflicts(
    histogram: CircularHistogram,
    candidates: Sequence[int],
    window_size: int,
) -> list[int]:
    """One-pass removal of the lower peak in each too-close adjacent pair.

    Args:
        histogram: Histogram the candidates were taken from.
        candidates: Class indices, sorted ascending.
        window_size: Pairs at most this many classes apart conflict.

    Returns:
        Surviving class indices, ascending.
    """
    removed: set[int] = set()
    for first, second in _candidate_pairs(candidates):
        if _class_distance(histogram, first, second) > window_size:
            continue
        if histogram.count_for_class(first) > histogram.count_for_class(second):
            removed.add(second)
        else:
            removed.add(first)
    return [index for index in candidates if index not in removed]


def detect_peaks(
    histogram: CircularHistogram,
    window_size: int,
    threshold: float,
    *,
    gate: PeakScore | None = None,
    prominence: PeakScore | None = None,
) -> list[Peak]:
    """Find prominent, separated peaks in a circular histogram.

    Args:
        histogram: Histogram to scan. It is not modified.
        window_size: Prominence window half-width and minimum peak
            separation, in classes. Must be ≥ 1.
        threshold: A class must score strictly above this to be a peak.
        gate: Local-maximum strategy. Defaults to ``DifferenceScore``.
        prominence: Windowed strategy. Defaults to ``LocalHeightScore``.

    Returns:
        Peaks in ascending class order. Empty if nothing clears the
        threshold, including for an all-zero histogram.

    Raises:
        ValueError: If window_size ≤ 0.
    """
    scores = score_classes(histogram, window_size, gate=gate, prominence=prominence)
    candidates = [index for index, value in enumerate(scores) if value > threshold]
    survivors = resolve_conflicts(histogram, candidates, window_size)
    return [
        Peak(
            position=histogram.key_for_class(index),
            height=histogram.count_for_class(index),
        )
        for index in survivors
    ]


def detect_tone_scale(
    histogram: CircularHistogram,
    config: PeakDetectionConfig = DEFAULT_PEAK_CONFIG,
) -> tuple[float, ...]:
    """Detect peaks and return their positions sorted ascending.

    An empty histogram returns () without running detection. When
    ``config.smooth_sigma`` is set, a smoothed copy is scanned; the
    caller's histogram is left untouched.
    """
    if histogram.max_bin_count() == 0.0:
        return ()
    if config.smooth_sigma is not None:
        histogram = histogram.copy()
        histogram.gaussian_smooth(config.smooth_sigma)
    peaks = detect_peaks(histogram, config.window_size, config.threshold)
    return tuple(sorted(peak.position for peak in peaks))


def peaks_to_histogram(
    peaks: Sequence[Peak],
    reference: CircularHistogram | None = None,
    config: ToneScaleConfig = DEFAULT_TONE_SCALE_CONFIG,
) -> CircularHistogram:
    """Render detected peaks as a sum of Gaussian curves over the octave.

    The result has the class width of ``reference`` so it can be matched
    bin-for-bin against other tone-scale histograms.
    """
    return create_tone_scale_from_peaks(
        [peak.position for peak in peaks],
        [peak.height for peak in peaks],
        reference=reference,
        config=config,
    )

"""
core/pitch/annotations.py — From pitch observations to pitch-class histograms.

An external pitch tracker produces Annotation(time_sec, pitch_hz,
probability) values. This module folds them into a CircularHistogram of
pitch classes (cents in [0, 1200)) and filters them against a tone scale.
It never reads files; see ingestion/annotation_loader.py for that.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from core.config import DEFAULT_HISTOGRAM_CONFIG, MAX_PITCH_HZ, OCTAVE_CENTS, HistogramConfig
from core.pitch.conversion import circular_distance, hz_to_relative_cents
from core.pitch.histogram import CircularHistogram
from core.pitch.types import Annotation


def is_countable(annotation: Annotation, min_probability: float = 0.0) -> bool:
    """Whether an observation should reach the histogram.

    Rejects unvoiced pitches (≤ 0 Hz or NaN), tracker glitches above
    MAX_PITCH_HZ and, when ``min_probability`` > 0, observations whose
    probability does not exceed it.
    """
    if not math.isfinite(annotation.pitch_hz):
        return False
    if annotation.pitch_hz <= 0.0 or annotation.pitch_hz > MAX_PITCH_HZ:
        return False
    if min_probability > 0.0 and annotation.probability <= min_probability:
        return False
    return True


def build_pitch_class_histogram(
    annotations: Iterable[Annotation],
    *,
    config: HistogramConfig = DEFAULT_HISTOGRAM_CONFIG,
    min_probability: float = 0.0,
    weighted: bool = False,
) -> CircularHistogram:
    """Fold observations into a pitch-class histogram.

    Args:
        annotations: Observations in any order.
        config: Histogram domain and resolution. The domain should be the
            octave; other domains receive the same cent values wrapped.
        min_probability: Observations at or below this probability are
            dropped. 0.0 keeps everything voiced.
        weighted: Add each observation with its probability as weight
            instead of 1.

    Returns:
        A new histogram. Empty when nothing passes the filters.
    """
    histogram = CircularHistogram.from_config(config)
    for annotation in annotations:
        if not is_countable(annotation, min_probability):
            continue
        weight = annotation.probability if weighted else 1.0
        histogram.add(hz_to_relative_cents(annotation.pitch_hz), weight)
    return histogram


def pitch_class_filter(
    annotations: Iterable[Annotation],
    scale: Sequence[float],
    max_deviation_cents: float,
) -> list[Annotation]:
    """Keep observations whose pitch class lies near a scale degree.

    Args:
        annotations: Observations to filter.
        scale: Scale degrees in cents. Values outside [0, 1200) wrap.
        max_deviation_cents: Largest circular distance, inclusive, to the
            nearest scale degree.

    Returns:
        Matching observations in their original order. Unvoiced
        observations and an empty scale yield nothing.

    Raises:
        ValueError: If max_deviation_cents < 0.
    """
    if max_deviation_cents < 0:
        raise ValueError(f"max_deviation_cents must be >= 0, got {max_deviation_cents}")
    if not scale:
        return []
    kept: list[Annotation] = []
    for annotation in annotations:
        if not is_countable(annotation):
            continue
        pitch_class = hz_to_relative_cents(annotation.pitch_hz)
        nearest = min(circular_distance(pitch_class, degree, OCTAVE_CENTS) for degree in scale)
        if nearest <= max_deviation_cents:
            kept.append(annotation)
    return kept

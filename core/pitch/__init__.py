"""
core/pitch/ — Pitch-class histogram analysis.

Pure computation: circular histograms, peak scoring and detection,
tone-scale synthesis and the Scala text format. File I/O lives in
ingestion/ (scala_loader, annotation_loader).

Public API:
    Types:      Peak, Annotation, ScaleDefinition
    Histogram:  CircularHistogram
    Scores:     PeakScore, DifferenceScore, LocalHeightScore
    Peaks:      detect_peaks, detect_tone_scale, peaks_to_histogram
    Tone scale: create_tone_scale, create_tone_scale_from_peaks,
                correlation, best_shift
    Scala:      parse_scala, format_scala, western_tuning
    Observations: build_pitch_class_histogram, pitch_class_filter
"""

from core.pitch.annotations import build_pitch_class_histogram, pitch_class_filter
from core.pitch.histogram import CircularHistogram
from core.pitch.peaks import detect_peaks, detect_tone_scale, peaks_to_histogram
from core.pitch.scala import ScaleDefinition, format_scala, parse_scala, western_tuning
from core.pitch.scores import DifferenceScore, LocalHeightScore, PeakScore
from core.pitch.tone_scale import (
    best_shift,
    correlation,
    create_tone_scale,
    create_tone_scale_from_peaks,
)
from core.pitch.types import Annotation, Peak

__all__ = [
    # Types
    "Peak",
    "Annotation",
    "ScaleDefinition",
    # Histogram
    "CircularHistogram",
    # Scores
    "PeakScore",
    "DifferenceScore",
    "LocalHeightScore",
    # Peaks
    "detect_peaks",
    "detect_tone_scale",
    "peaks_to_histogram",
    # Tone scale
    "create_tone_scale",
    "create_tone_scale_from_peaks",
    "correlation",
    "best_shift",
    # Scala
    "parse_scala",
    "format_scala",
    "western_tuning",
    # Observations
    "build_pitch_class_histogram",
    "pitch_class_filter",
]

"""
Configuration dataclasses for pitch-class histogram analysis.

These immutable config objects decouple parameter passing from function signatures,
making it easier to define standard configurations and reuse them across pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass

OCTAVE_CENTS: float = 1200.0
"""Width of the pitch-class domain. Every tone-scale histogram spans [0, 1200)."""

DEFAULT_SMOOTH_SIGMA: float = 0.8
"""Standard deviation (in cents) of the quick Gaussian smoothing step."""

MAX_PITCH_HZ: float = 25000.0
"""Observations above this frequency are annotation errors and are dropped."""

A4_FREQUENCY_HZ: float = 440.0
"""Concert pitch. A4 = MIDI 69 by definition."""

A4_ABSOLUTE_CENTS: float = 6900.0
"""Absolute cents of A4, i.e. MIDI 69 × 100."""

REFERENCE_FREQUENCY_HZ: float = A4_FREQUENCY_HZ * 2.0 ** (-A4_ABSOLUTE_CENTS / OCTAVE_CENTS)
"""Frequency of MIDI note 0 (C-1, ~8.1758 Hz). Absolute cents are measured from here."""


@dataclass(frozen=True)
class HistogramConfig:
    """
    Domain and resolution of a circular histogram.

    Attributes:
        start: Lower bound of the key range (inclusive).
        stop: Upper bound of the key range (exclusive). Must exceed start.
        n_classes: Number of equal-width bins. Defaults to 1200, i.e. one
            bin per cent over an octave.

    Example:
        >>> config = HistogramConfig(n_classes=600)
        >>> histogram = CircularHistogram.from_config(config)
    """

    start: float = 0.0
    stop: float = OCTAVE_CENTS
    n_classes: int = 1200

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.n_classes <= 0:
            raise ValueError(f"n_classes must be positive, got {self.n_classes}")
        if self.stop <= self.start:
            raise ValueError(f"stop ({self.stop}) must be greater than start ({self.start})")

    @property
    def class_width(self) -> float:
        return (self.stop - self.start) / self.n_classes


@dataclass(frozen=True)
class PeakDetectionConfig:
    """
    Parameters for peak picking on a pitch-class histogram.

    Attributes:
        window_size: Half-width, in classes, of the prominence window. Also
            the minimum separation enforced between adjacent peaks.
        threshold: Peaks must have a prominence strictly above this value.
        smooth_sigma: When set, a copy of the histogram is Gaussian-smoothed
            with this standard deviation (key units) before detection.
    """

    window_size: int = 5
    threshold: float = 15.0
    smooth_sigma: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.window_size <= 0:
            raise ValueError(f"window_size must be positive, got {self.window_size}")
        if self.smooth_sigma is not None and self.smooth_sigma <= 0:
            raise ValueError(f"smooth_sigma must be positive, got {self.smooth_sigma}")


@dataclass(frozen=True)
class ToneScaleConfig:
    """
    Defaults for synthesizing a tone scale from peaks.

    Attributes:
        standard_deviation: Gaussian standard deviation in cents, used for
            every peak without its own override.
        width: Optional cutoff in cents. Bins further than this from a peak
            receive nothing from it. None means the curve covers the octave.
    """

    standard_deviation: float = 10.0
    width: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.standard_deviation <= 0:
            raise ValueError(
                f"standard_deviation must be positive, got {self.standard_deviation}"
            )
        if self.width is not None and self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")


# Pre-defined configurations for common use cases

DEFAULT_HISTOGRAM_CONFIG = HistogramConfig()
"""One class per cent over a single octave."""

COARSE_HISTOGRAM_CONFIG = HistogramConfig(n_classes=120)
"""Ten-cent classes. Useful for sparse observation sets."""

DEFAULT_PEAK_CONFIG = PeakDetectionConfig()
"""Window of 5 classes, prominence threshold 15."""

SMOOTHED_PEAK_CONFIG = PeakDetectionConfig(smooth_sigma=DEFAULT_SMOOTH_SIGMA)
"""Default detection preceded by the quick Gaussian smoothing step."""

DEFAULT_TONE_SCALE_CONFIG = ToneScaleConfig()
"""Gaussian bumps with a 10-cent standard deviation over the full octave."""

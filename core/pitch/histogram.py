"""
core/pitch/histogram.py — Fixed-range, wrap-around binned counter.

A CircularHistogram divides the key range [start, stop) into n equal-width
classes. Key arithmetic is modular: a key outside the range is wrapped
into it before use, so class n-1 is adjacent to class 0. The canonical
use is a pitch-class histogram over [0, 1200) cents.

Design:
    - All wraparound goes through ``wrap`` (keys) and ``wrap_class``
      (class indices). No call site does its own modular arithmetic.
    - The position of a class is its lower edge (``key_for_class``).
    - Counts live in a float64 numpy array; ``counts`` exposes a
      read-only view so callers cannot bypass ``add``.
    - Smoothing is a circular convolution computed with scipy.fft.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

import numpy as np
from scipy import fft as scipy_fft

from core.config import DEFAULT_HISTOGRAM_CONFIG, HistogramConfig

_ROUND_OFF = 1e-12  # relative to the largest smoothed value


class CircularHistogram:
    """Wrap-around histogram over [start, stop) with n_classes bins.

    The histogram is a plain mutable value owned by one processing stage
    at a time (accumulate → smooth → detect). It is not thread-safe.

    Example:
        >>> h = CircularHistogram(0.0, 1200.0, 1200)
        >>> h.add(1250.0)          # wraps to 50 cents
        >>> h.count(50.0)
        1.0
    """

    def __init__(self, start: float, stop: float, n_classes: int) -> None:
        self._config = HistogramConfig(start=start, stop=stop, n_classes=n_classes)
        self._counts = np.zeros(n_classes, dtype=np.float64)

    @classmethod
    def from_config(cls, config: HistogramConfig = DEFAULT_HISTOGRAM_CONFIG) -> CircularHistogram:
        return cls(config.start, config.stop, config.n_classes)

    @classmethod
    def from_counts(
        cls,
        counts: Sequence[float] | np.ndarray,
        start: float = DEFAULT_HISTOGRAM_CONFIG.start,
        stop: float = DEFAULT_HISTOGRAM_CONFIG.stop,
    ) -> CircularHistogram:
        """Build a histogram whose class i holds counts[i].

        Raises:
            ValueError: If counts is empty or contains negative values.
        """
        values = np.asarray(counts, dtype=np.float64).ravel()
        if values.size == 0:
            raise ValueError("counts must contain at least one class")
        if np.any(values < 0):
            raise ValueError("counts must be non-negative")
        histogram = cls(start, stop, values.size)
        histogram._counts[:] = values
        return histogram

    # ------------------------------------------------------------------
    # Domain
    # ------------------------------------------------------------------

    @property
    def config(self) -> HistogramConfig:
        return self._config

    @property
    def start(self) -> float:
        return self._config.start

    @property
    def stop(self) -> float:
        return self._config.stop

    @property
    def n_classes(self) -> int:
        return self._config.n_classes

    @property
    def class_width(self) -> float:
        return self._config.class_width

    @property
    def counts(self) -> np.ndarray:
        """Read-only view of the accumulators, indexed by class."""
        view = self._counts.view()
        view.flags.writeable = False
        return view

    def wrap(self, key: float) -> float:
        """Fold key into [start, stop).

        Raises:
            ValueError: If key is NaN or infinite.
        """
        if not math.isfinite(key):
            raise ValueError(f"key must be finite, got {key}")
        width = self.stop - self.start
        offset = (key - self.start) % width
        # float % can round a tiny negative offset up to exactly width
        if offset >= width:
            offset = 0.0
        return self.start + offset

    def wrap_class(self, index: int) -> int:
        """Fold any integer class index into [0, n_classes)."""
        return index % self.n_classes

    def _class_position(self, key: float) -> float:
        return (self.wrap(key) - self.start) / self.class_width

    def class_for_key(self, key: float) -> int:
        """Class owning key: floor of its wrapped offset, clamped to [0, n_classes - 1]."""
        index = math.floor(self._class_position(key))
        return min(self.n_classes - 1, max(0, index))

    def key_for_class(self, index: int) -> float:
        """Lower edge of the (wrapped) class.

        The returned key always maps back to the same class through
        ``class_for_key``.
        """
        index = self.wrap_class(index)
        key = self.start + index * self.class_width
        # start + i * width can round to a hair below the edge of class i
        while math.floor(self._class_position(key)) < index:
            key = math.nextafter(key, math.inf)
        return key

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, key: float, weight: float = 1.0) -> None:
        """Add weight to the class owning key. Out-of-range keys wrap.

        Raises:
            ValueError: If weight is negative.
        """
        if weight < 0:
            raise ValueError(f"weight must be non-negative, got {weight}")
        self._counts[self.class_for_key(key)] += weight

    def clear(self) -> None:
        """Reset every class to zero. Bounds and resolution are unchanged."""
        self._counts[:] = 0.0

    def gaussian_smooth(self, sigma: float) -> None:
        """Circularly convolve the counts with a normalized Gaussian kernel.

        Args:
            sigma: Standard deviation in key units (e.g. cents). It is
                converted to classes via ``class_width``.

        The kernel is built over circular class distances and sums to 1,
        so total mass is preserved and the operation commutes with cyclic
        rotation of the counts.

        Raises:
            ValueError: If sigma ≤ 0.
        """
        if sigma <= 0:
            raise ValueError(f"sigma must be positive, got {sigma}")
        n = self.n_classes
        sigma_classes = sigma / self.class_width
        offsets = np.arange(n, dtype=np.float64)
        distances = np.minimum(offsets, n - offsets)
        kernel = np.exp(-0.5 * (distances / sigma_classes) ** 2)
        kernel /= kernel.sum()
        smoothed = scipy_fft.irfft(scipy_fft.rfft(self._counts) * scipy_fft.rfft(kernel), n=n)
        # FFT round-off leaves tiny residue (both signs) where counts were zero
        floor = _ROUND_OFF * float(np.abs(smoothed).max(initial=0.0))
        self._counts = np.where(smoothed > floor, smoothed, 0.0)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def count(self, key: float) -> float:
        return float(self._counts[self.class_for_key(key)])

    def count_for_class(self, index: int) -> float:
        return float(self._counts[self.wrap_class(index)])

    def max_bin_count(self) -> float:
        """Largest accumulator value; 0.0 for an empty histogram."""
        return float(self._counts.max())

    def total(self) -> float:
        return float(self._counts.sum())

    def normalized(self) -> np.ndarray:
        """Counts divided by ``max_bin_count``; all zeros when empty."""
        peak = self.max_bin_count()
        if peak == 0.0:
            return np.zeros(self.n_classes, dtype=np.float64)
        return self._counts / peak

    def keys(self) -> Iterator[float]:
        """Class keys in ascending class order, class 0 first."""
        for index in range(self.n_classes):
            yield self.key_for_class(index)

    def items(self) -> Iterator[tuple[float, float]]:
        """(key, count) pairs in ascending class order."""
        for index in range(self.n_classes):
            yield self.key_for_class(index), float(self._counts[index])

    def copy(self) -> CircularHistogram:
        duplicate = CircularHistogram(self.start, self.stop, self.n_classes)
        duplicate._counts[:] = self._counts
        return duplicate

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return self.items()

    def __len__(self) -> int:
        return self.n_classes

    def __repr__(self) -> str:
        return (
            f"CircularHistogram(start={self.start}, stop={self.stop}, "
            f"n_classes={self.n_classes}, total={self.total():g})"
        )

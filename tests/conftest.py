"""
Shared fixtures for the test suite.

Centralizes reusable histogram and scale builders so individual test
files don't need to repeat setup boilerplate.
"""

from collections.abc import Callable

import pytest

from core.pitch.histogram import CircularHistogram
from core.pitch.scala import WESTERN_TUNING, ScaleDefinition

# ---------------------------------------------------------------------------
# Histogram factory
# ---------------------------------------------------------------------------


def make_histogram(size: int, spikes: dict[int, float] | None = None) -> CircularHistogram:
    """Histogram over [0, size) with one class per unit, so key == class index.

    ``spikes`` maps class index → count; every other class is 0.
    """
    counts = [0.0] * size
    for index, value in (spikes or {}).items():
        counts[index] = value
    return CircularHistogram.from_counts(counts, 0.0, float(size))


@pytest.fixture
def histogram_factory() -> Callable[..., CircularHistogram]:
    return make_histogram


@pytest.fixture
def octave_histogram() -> CircularHistogram:
    """Empty 1-cent pitch-class histogram."""
    return CircularHistogram(0.0, 1200.0, 1200)


# ---------------------------------------------------------------------------
# Scales
# ---------------------------------------------------------------------------


@pytest.fixture
def western() -> ScaleDefinition:
    return WESTERN_TUNING


SAMPLE_SCALA_TEXT = """! sample.scl
!
Sample tuning with mixed notation
 7
!
100.0 cents
5/4   E\\
81/64
   ! indented comment
garbage line
-5.0
12abc
3/2
"""
"""Six candidate pitch lines, one of them malformed; declared count 7."""


@pytest.fixture
def sample_scala_text() -> str:
    return SAMPLE_SCALA_TEXT

"""
Tests for core/pitch/types.py and core/pitch/annotations.py — observations
and the pitch-class histograms built from them.
"""

import pytest

from core.config import COARSE_HISTOGRAM_CONFIG
from core.pitch.annotations import build_pitch_class_histogram, is_countable, pitch_class_filter
from core.pitch.types import Annotation, Peak

A4 = 440.0
A_SHARP4 = 466.1637615180899
C4 = 261.6255653005986


class TestTypes:
    def test_peak_is_frozen(self):
        peak = Peak(position=100.0, height=3.0)
        with pytest.raises(AttributeError):
            peak.height = 4.0

    def test_annotation_default_probability(self):
        assert Annotation(0.0, A4).probability == 1.0

    def test_negative_time_raises(self):
        with pytest.raises(ValueError, match="time_sec must be >= 0"):
            Annotation(-0.1, A4)

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_probability_out_of_range_raises(self, probability):
        with pytest.raises(ValueError, match="probability must be in"):
            Annotation(0.0, A4, probability)

    def test_unvoiced_pitch_is_allowed(self):
        assert Annotation(0.0, 0.0).pitch_hz == 0.0


class TestIsCountable:
    def test_voiced(self):
        assert is_countable(Annotation(0.0, A4))

    @pytest.mark.parametrize("pitch_hz", [0.0, -1.0, 25000.1, float("nan"), float("inf")])
    def test_rejects_unvoiced_and_glitches(self, pitch_hz):
        assert not is_countable(Annotation(0.0, pitch_hz))

    def test_upper_limit_is_inclusive(self):
        assert is_countable(Annotation(0.0, 25000.0))

    def test_min_probability_is_exclusive(self):
        assert not is_countable(Annotation(0.0, A4, 0.5), min_probability=0.5)
        assert is_countable(Annotation(0.0, A4, 0.6), min_probability=0.5)

    def test_zero_min_probability_keeps_everything(self):
        assert is_countable(Annotation(0.0, A4, 0.0))


# ---------------------------------------------------------------------------
# Histogram building
# ---------------------------------------------------------------------------


class TestBuildPitchClassHistogram:
    def test_octaves_fold_together(self):
        annotations = [Annotation(0.0, 220.0), Annotation(0.1, A4), Annotation(0.2, 880.0)]
        histogram = build_pitch_class_histogram(annotations)
        assert histogram.count(900.0) == 3.0
        assert histogram.total() == 3.0

    def test_skips_uncountable(self):
        annotations = [Annotation(0.0, 0.0), Annotation(0.1, 30000.0), Annotation(0.2, A4)]
        assert build_pitch_class_histogram(annotations).total() == 1.0

    def test_skips_nan_pitches(self):
        annotations = [Annotation(0.0, A4, 0.9), Annotation(0.01, float("nan"), 0.1)]
        histogram = build_pitch_class_histogram(annotations, weighted=True)
        assert histogram.total() == pytest.approx(0.9)
        assert histogram.count(900.0) == pytest.approx(0.9)

    def test_weighted(self):
        annotations = [Annotation(0.0, A4, 0.5), Annotation(0.1, A4, 0.25)]
        histogram = build_pitch_class_histogram(annotations, weighted=True)
        assert histogram.count(900.0) == pytest.approx(0.75)

    def test_min_probability(self):
        annotations = [Annotation(0.0, A4, 0.2), Annotation(0.1, A4, 0.9)]
        histogram = build_pitch_class_histogram(annotations, min_probability=0.5)
        assert histogram.total() == 1.0

    def test_config_resolution(self):
        histogram = build_pitch_class_histogram(
            [Annotation(0.0, A4)], config=COARSE_HISTOGRAM_CONFIG
        )
        assert histogram.n_classes == 120
        assert histogram.count(900.0) == 1.0

    def test_no_annotations(self):
        assert build_pitch_class_histogram([]).max_bin_count() == 0.0


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


class TestPitchClassFilter:
    def test_keeps_matching_in_order(self):
        first = Annotation(0.0, 880.0)
        off_scale = Annotation(0.1, A_SHARP4)
        second = Annotation(0.2, A4)
        assert pitch_class_filter([first, off_scale, second], [900.0], 10.0) == [first, second]

    def test_deviation_is_inclusive_bound(self):
        flat = Annotation(0.0, 437.0)  # about 11.84 cents below A
        assert pitch_class_filter([flat], [900.0], 10.0) == []
        assert pitch_class_filter([flat], [900.0], 12.0) == [flat]

    def test_distance_wraps_around_octave(self):
        c = Annotation(0.0, C4)
        assert pitch_class_filter([c], [1195.0], 10.0) == [c]

    def test_scale_degrees_wrap(self):
        a = Annotation(0.0, A4)
        assert pitch_class_filter([a], [2100.0], 1.0) == [a]

    def test_skips_unvoiced(self):
        assert pitch_class_filter([Annotation(0.0, 0.0)], [0.0], 1200.0) == []
        assert pitch_class_filter([Annotation(0.0, float("nan"))], [0.0], 1200.0) == []

    def test_empty_scale(self):
        assert pitch_class_filter([Annotation(0.0, A4)], [], 50.0) == []

    def test_negative_deviation_raises(self):
        with pytest.raises(ValueError, match="max_deviation_cents must be >= 0"):
            pitch_class_filter([], [0.0], -1.0)

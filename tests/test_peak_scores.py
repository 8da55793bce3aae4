"""
Tests for core/pitch/scores.py — peak scoring strategies.
"""

import pytest

from core.pitch.scores import DifferenceScore, LocalHeightScore, PeakScore


class TestProtocol:
    def test_builtin_strategies_satisfy_protocol(self):
        assert isinstance(DifferenceScore(), PeakScore)
        assert isinstance(LocalHeightScore(), PeakScore)

    def test_structural_typing(self):
        class ConstantScore:
            def score(self, histogram, index, parameter):
                return 1.0

        assert isinstance(ConstantScore(), PeakScore)


# ---------------------------------------------------------------------------
# DifferenceScore
# ---------------------------------------------------------------------------


class TestDifferenceScore:
    def test_strict_local_maximum_is_positive(self, histogram_factory):
        histogram = histogram_factory(5, {1: 3.0, 2: 5.0, 3: 2.0})
        assert DifferenceScore().score(histogram, 2, 1) == pytest.approx(2.5)

    def test_higher_neighbor_scores_zero(self, histogram_factory):
        histogram = histogram_factory(5, {1: 3.0, 2: 5.0, 3: 2.0})
        assert DifferenceScore().score(histogram, 1, 1) == 0.0
        assert DifferenceScore().score(histogram, 3, 1) == 0.0

    def test_flat_neighborhood_scores_zero(self, histogram_factory):
        histogram = histogram_factory(5)
        assert DifferenceScore().score(histogram, 2, 1) == 0.0

    def test_plateau_edge_passes(self, histogram_factory):
        histogram = histogram_factory(6, {2: 5.0, 3: 5.0})
        assert DifferenceScore().score(histogram, 2, 1) == pytest.approx(2.5)
        assert DifferenceScore().score(histogram, 3, 1) == pytest.approx(2.5)

    def test_neighbors_wrap(self, histogram_factory):
        histogram = histogram_factory(5, {0: 4.0, 4: 1.0})
        assert DifferenceScore().score(histogram, 0, 1) == pytest.approx(3.5)
        assert DifferenceScore().score(histogram, 4, 1) == 0.0

    def test_distance_parameter(self, histogram_factory):
        histogram = histogram_factory(10, {3: 9.0, 5: 6.0, 7: 9.0})
        # at distance 1 the neighbors are empty; at distance 2 they are higher
        assert DifferenceScore().score(histogram, 5, 1) > 0.0
        assert DifferenceScore().score(histogram, 5, 2) == 0.0

    def test_non_positive_distance_raises(self, histogram_factory):
        with pytest.raises(ValueError, match="neighbor distance must be positive"):
            DifferenceScore().score(histogram_factory(5), 0, 0)


# ---------------------------------------------------------------------------
# LocalHeightScore
# ---------------------------------------------------------------------------


class TestLocalHeightScore:
    def test_prominence_over_window(self, histogram_factory):
        histogram = histogram_factory(5, {0: 1.0, 1: 2.0, 2: 9.0, 3: 3.0, 4: 4.0})
        assert LocalHeightScore().score(histogram, 2, 1) == pytest.approx(7.0)
        assert LocalHeightScore().score(histogram, 2, 2) == pytest.approx(8.0)

    def test_window_wraps(self, histogram_factory):
        histogram = histogram_factory(5, {0: 9.0, 1: 2.0, 2: 5.0, 3: 5.0, 4: 1.0})
        assert LocalHeightScore().score(histogram, 0, 1) == pytest.approx(8.0)

    def test_window_larger_than_histogram(self, histogram_factory):
        histogram = histogram_factory(3, {0: 1.0, 1: 6.0, 2: 2.0})
        assert LocalHeightScore().score(histogram, 1, 10) == pytest.approx(5.0)

    def test_same_scale_as_counts(self, histogram_factory):
        histogram = histogram_factory(20, {10: 42.0})
        assert LocalHeightScore().score(histogram, 10, 3) == pytest.approx(42.0)

    def test_non_positive_window_raises(self, histogram_factory):
        with pytest.raises(ValueError, match="window size must be positive"):
            LocalHeightScore().score(histogram_factory(5), 0, -1)

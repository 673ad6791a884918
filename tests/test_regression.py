"""
Tests for the Title Engine building blocks

Tests cover:
- Least-squares fit against closed-form reference values
- Degenerate input (all x identical)
- R² edge cases
- Parity partition and sequence transform
- Single-outlier detection
"""

import pytest

from core.title_engine import (
    DegenerateInputError,
    InsufficientDataError,
    Parity,
    Sample,
    coefficient_of_determination,
    describe_transform,
    find_worst_residual,
    fit_line,
    partition_by_parity,
    transform_house_number,
)


def residual_sum_of_squares(xs, ys, slope, intercept):
    return sum((y - (slope * x + intercept)) ** 2 for x, y in zip(xs, ys))


# =============================================================================
# Test: Least-Squares Fit
# =============================================================================

class TestFitLine:
    """Tests for the regression engine."""

    def test_matches_reference_values(self):
        """Small fixed dataset against hand-computed OLS values."""
        result = fit_line([1, 2, 3, 4], [2, 4, 5, 4])

        assert result.slope == pytest.approx(0.7)
        assert result.intercept == pytest.approx(2.0)
        assert result.r_squared == pytest.approx(1 - 2.3 / 4.75)

    def test_residuals_are_minimised(self):
        """Nudging the fitted line in any direction increases the error."""
        xs = [1.0, 2.0, 3.0, 5.0, 8.0]
        ys = [1010.0, 1013.0, 1019.0, 1024.0, 1041.0]
        result = fit_line(xs, ys)
        best = residual_sum_of_squares(xs, ys, result.slope, result.intercept)

        for d_slope, d_intercept in [(0.01, 0), (-0.01, 0), (0, 0.01), (0, -0.01)]:
            nudged = residual_sum_of_squares(
                xs, ys, result.slope + d_slope, result.intercept + d_intercept
            )
            assert nudged > best

    def test_perfectly_collinear_points(self):
        """Points on a line give R² of 1."""
        result = fit_line([1, 2, 3, 4], [100, 102, 104, 106])

        assert result.slope == pytest.approx(2.0)
        assert result.intercept == pytest.approx(98.0)
        assert result.r_squared == pytest.approx(1.0)
        assert result.r_squared_percent == pytest.approx(100.0)

    def test_constant_y_is_perfect_fit(self):
        """Constant titles are fitted exactly by a flat line."""
        result = fit_line([1, 2, 3], [500, 500, 500])

        assert result.slope == 0
        assert result.intercept == 500
        assert result.r_squared == 1.0

    def test_pair_order_does_not_matter(self):
        """Reordering the pairs gives the same line."""
        forward = fit_line([1, 2, 3, 4], [10, 30, 20, 50])
        shuffled = fit_line([3, 1, 4, 2], [20, 10, 50, 30])

        assert forward.slope == pytest.approx(shuffled.slope)
        assert forward.intercept == pytest.approx(shuffled.intercept)
        assert forward.r_squared == pytest.approx(shuffled.r_squared)

    @pytest.mark.parametrize("ys", [[1, 2, 3], [5, 5, 5], [100, 1, 50]])
    def test_identical_x_is_degenerate(self, ys):
        """All x identical fails regardless of y values."""
        with pytest.raises(DegenerateInputError):
            fit_line([4.0, 4.0, 4.0], ys)

    def test_fewer_than_two_points(self):
        with pytest.raises(InsufficientDataError):
            fit_line([1.0], [100.0])

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            fit_line([1.0, 2.0, 3.0], [100.0, 200.0])


class TestCoefficientOfDetermination:
    """Tests for R² edge cases."""

    def test_constant_y_with_wrong_predictions_is_zero(self):
        assert coefficient_of_determination([5, 5, 5], [4, 5, 6]) == 0.0

    def test_constant_y_with_exact_predictions_is_one(self):
        assert coefficient_of_determination([5, 5, 5], [5, 5, 5]) == 1.0

    def test_poor_external_line_can_be_negative(self):
        assert coefficient_of_determination([1, 2, 3], [3, 2, 1]) < 0


# =============================================================================
# Test: Parity Partition and Transform
# =============================================================================

class TestPartitionByParity:
    """Tests for keeping only the target's side of the street."""

    def test_keeps_even_samples_for_even_target(self):
        samples = [
            Sample(2, 100),
            Sample(3, 900),
            Sample(4, 102),
            Sample(5, 905),
        ]

        matching = partition_by_parity(samples, 10)

        assert [s.house_number for s in matching] == [2, 4]

    def test_keeps_odd_samples_for_odd_target(self):
        samples = [Sample(1, 900), Sample(2, 100), Sample(3, 905), Sample(7, 915)]

        matching = partition_by_parity(samples, 9)

        assert [s.house_number for s in matching] == [1, 3, 7]

    def test_insufficient_matches_names_parity(self):
        """Error must tell the user which parity is needed."""
        samples = [Sample(1, 900), Sample(2, 100), Sample(3, 905)]

        with pytest.raises(InsufficientDataError) as exc_info:
            partition_by_parity(samples, 8)

        assert exc_info.value.parity == "even"
        assert exc_info.value.found == 1
        assert exc_info.value.required == 2
        assert "even" in exc_info.value.message

    def test_empty_input(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            partition_by_parity([], 3)

        assert exc_info.value.parity == "odd"


class TestTransform:
    """Tests for the house number -> sequence index transform."""

    @pytest.mark.parametrize("house,expected", [(2, 1.0), (4, 2.0), (8, 4.0), (100, 50.0)])
    def test_even_transform(self, house, expected):
        assert transform_house_number(house, Parity.EVEN) == expected

    @pytest.mark.parametrize("house,expected", [(1, 1.0), (3, 2.0), (7, 4.0), (99, 50.0)])
    def test_odd_transform(self, house, expected):
        assert transform_house_number(house, Parity.ODD) == expected

    def test_descriptions(self):
        assert describe_transform(Parity.EVEN) == "(HouseNo / 2)"
        assert describe_transform(Parity.ODD) == "(HouseNo + 1) / 2"

    def test_parity_of(self):
        assert Parity.of(12) == Parity.EVEN
        assert Parity.of(13) == Parity.ODD


# =============================================================================
# Test: Outlier Detection
# =============================================================================

class TestFindWorstResidual:
    """Tests for single-outlier detection."""

    def test_selects_noisy_third_point(self):
        """Line through the first two points; the third is noise."""
        candidate = find_worst_residual(
            [1, 2, 3], [1, 2, 30], [2, 4, 6], slope=1.0, intercept=0.0
        )

        assert candidate.index == 2
        assert candidate.house_number == 6
        assert candidate.squared_residual == pytest.approx(27 ** 2)

    def test_first_index_wins_ties(self):
        candidate = find_worst_residual(
            [1, 2, 3], [2, 2, 4], [1, 3, 5], slope=1.0, intercept=0.0
        )

        assert candidate.index == 0
        assert candidate.house_number == 1

    def test_perfect_fit_returns_first_point(self):
        candidate = find_worst_residual(
            [1, 2], [3, 5], [1, 3], slope=2.0, intercept=1.0
        )

        assert candidate.index == 0
        assert candidate.squared_residual == 0

    def test_empty_input_rejected(self):
        with pytest.raises(ValueError):
            find_worst_residual([], [], [], slope=1.0, intercept=0.0)

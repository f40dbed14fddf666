"""
Unit tests for SelectionConfig.
"""

import pytest
from fractions import Fraction

from exam_toolkit.core.models import Difficulty
from exam_toolkit.selection import SelectionConfig


class TestSelectionConfig:
    """Tests for SelectionConfig dataclass."""

    def test_init_when_defaults_then_forty_forty_twenty(self):
        """Default ratio favours easy and medium."""
        # Act
        config = SelectionConfig()

        # Assert
        assert config.target_ratio == {
            Difficulty.EASY: 0.4,
            Difficulty.MEDIUM: 0.4,
            Difficulty.HARD: 0.2,
        }
        assert config.allow_near_match is True
        assert config.min_balanced_tiers == 2

    def test_init_when_zero_search_cells_then_raises_error(self):
        """Non-positive max_search_cells should raise ValueError."""
        with pytest.raises(ValueError, match="max_search_cells must be positive"):
            SelectionConfig(max_search_cells=0)

    def test_init_when_zero_balance_vectors_then_raises_error(self):
        """Non-positive max_balance_vectors should raise ValueError."""
        with pytest.raises(ValueError, match="max_balance_vectors must be positive"):
            SelectionConfig(max_balance_vectors=0)

    @pytest.mark.parametrize("tiers", [0, 4])
    def test_init_when_min_tiers_out_of_range_then_raises_error(self, tiers):
        """min_balanced_tiers must be between 1 and 3."""
        with pytest.raises(ValueError, match="min_balanced_tiers"):
            SelectionConfig(min_balanced_tiers=tiers)

    def test_init_when_negative_weight_then_raises_error(self):
        """Negative ratio weights are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            SelectionConfig(target_ratio={Difficulty.EASY: -1.0, Difficulty.HARD: 1.0})

    def test_init_when_all_zero_weights_then_raises_error(self):
        """At least one weight must be positive."""
        with pytest.raises(ValueError, match="all be zero"):
            SelectionConfig(target_ratio={Difficulty.EASY: 0.0})

    def test_init_when_unknown_tier_then_raises_error(self):
        """Ratio keys must be Difficulty members."""
        with pytest.raises(ValueError, match="unknown tiers"):
            SelectionConfig(target_ratio={"trivial": 1.0})

    def test_normalized_ratio_when_all_tiers_then_exact_fifths(self):
        """Default weights normalize to exact fractions."""
        # Arrange
        config = SelectionConfig()

        # Act
        ratio = config.normalized_ratio(list(Difficulty))

        # Assert
        assert ratio == {
            Difficulty.EASY: Fraction(2, 5),
            Difficulty.MEDIUM: Fraction(2, 5),
            Difficulty.HARD: Fraction(1, 5),
        }

    def test_normalized_ratio_when_subset_of_tiers_then_rescaled(self):
        """Only tiers present are kept and rescaled to sum to 1."""
        ratio = SelectionConfig().normalized_ratio(iter([Difficulty.HARD, Difficulty.EASY]))
        assert ratio == {Difficulty.EASY: Fraction(2, 3), Difficulty.HARD: Fraction(1, 3)}

    def test_normalized_ratio_when_present_tiers_have_zero_weight_then_even(self):
        """Zero-weight tiers fall back to an even split."""
        config = SelectionConfig(target_ratio={Difficulty.EASY: 1.0, Difficulty.MEDIUM: 0.0})
        ratio = config.normalized_ratio([Difficulty.MEDIUM, Difficulty.HARD])
        assert ratio == {Difficulty.MEDIUM: Fraction(1, 2), Difficulty.HARD: Fraction(1, 2)}

    def test_normalized_ratio_when_no_tiers_then_empty(self):
        """No tiers, no ratio."""
        assert SelectionConfig().normalized_ratio([]) == {}

    def test_exceeds_search_bound_when_over_then_true(self):
        """The bound is pool_size * target_marks."""
        config = SelectionConfig(max_search_cells=100)
        assert config.exceeds_search_bound(10, 10) is False
        assert config.exceeds_search_bound(10, 11) is True

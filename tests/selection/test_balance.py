"""
Unit tests for difficulty-balance scoring.
"""

from dataclasses import replace
from fractions import Fraction

from exam_toolkit.core.models import Difficulty, Question
from exam_toolkit.selection import SelectionConfig
from exam_toolkit.selection.balance import BalanceScore, score_counts, score_selection

ALL_TIERS = SelectionConfig().normalized_ratio(list(Difficulty))


def make_question(qid: int, difficulty: Difficulty, marks: int = 5) -> Question:
    """Helper to create test questions."""
    return Question(id=qid, marks=marks, difficulty=difficulty)


class TestScoreSelection:
    """Tests for score_selection function."""

    def test_score_when_two_tiers_then_beats_one_tier(self):
        """Covering more tiers always ranks first."""
        # Arrange
        mixed = [make_question(1, Difficulty.EASY), make_question(2, Difficulty.MEDIUM)]
        single = [make_question(3, Difficulty.HARD)]

        # Act
        mixed_score = score_selection(mixed, ALL_TIERS)
        single_score = score_selection(single, ALL_TIERS)

        # Assert
        assert mixed_score < single_score
        assert mixed_score.tiers_covered(3) == 2
        assert single_score.tiers_covered(3) == 1

    def test_score_when_exact_ratio_then_zero_distance(self):
        """2 easy, 2 medium, 1 hard matches 40/40/20 exactly."""
        questions = [
            make_question(1, Difficulty.EASY),
            make_question(2, Difficulty.EASY),
            make_question(3, Difficulty.MEDIUM),
            make_question(4, Difficulty.MEDIUM),
            make_question(5, Difficulty.HARD),
        ]
        score = score_selection(questions, ALL_TIERS)
        assert score.uncovered_tiers == 0
        assert score.ratio_distance == Fraction(0)

    def test_score_when_same_coverage_then_closer_ratio_wins(self):
        """Among full-coverage mixes the one nearer 40/40/20 wins."""
        near = [
            make_question(1, Difficulty.EASY),
            make_question(2, Difficulty.MEDIUM),
            make_question(3, Difficulty.HARD),
        ]
        far = [
            make_question(4, Difficulty.EASY),
            make_question(5, Difficulty.HARD),
            make_question(6, Difficulty.HARD),
            make_question(7, Difficulty.MEDIUM),
        ]
        assert score_selection(near, ALL_TIERS) < score_selection(far, ALL_TIERS)

    def test_score_when_balance_ties_then_fewer_questions_win(self):
        """Question count breaks balance ties."""
        two = [make_question(1, Difficulty.EASY), make_question(2, Difficulty.MEDIUM)]
        four = [
            make_question(3, Difficulty.EASY),
            make_question(4, Difficulty.EASY),
            make_question(5, Difficulty.MEDIUM),
            make_question(6, Difficulty.MEDIUM),
        ]
        assert score_selection(two, ALL_TIERS) < score_selection(four, ALL_TIERS)

    def test_score_when_everything_ties_then_lower_id_sum_wins(self):
        """Id sum is the final tie-break."""
        low = [make_question(1, Difficulty.EASY), make_question(2, Difficulty.MEDIUM)]
        high = [make_question(3, Difficulty.EASY), make_question(4, Difficulty.MEDIUM)]
        assert score_selection(low, ALL_TIERS) < score_selection(high, ALL_TIERS)

    def test_score_when_pool_has_one_tier_then_fully_covered(self):
        """Only tiers present in the ratio count as uncovered."""
        ratio = SelectionConfig().normalized_ratio([Difficulty.HARD])
        score = score_selection([make_question(1, Difficulty.HARD)], ratio)
        assert score == BalanceScore(
            uncovered_tiers=0,
            ratio_distance=Fraction(0),
            question_count=1,
            id_sum=1,
        )


class TestScoreCounts:
    """Tests for score_counts function."""

    def test_score_counts_when_same_mix_then_matches_selection_score(self):
        """Counts alone give the same score, minus the id sum."""
        # Arrange
        questions = [
            make_question(1, Difficulty.EASY),
            make_question(2, Difficulty.EASY),
            make_question(3, Difficulty.HARD),
        ]

        # Act
        by_counts = score_counts({Difficulty.EASY: 2, Difficulty.HARD: 1}, ALL_TIERS)

        # Assert
        assert by_counts == replace(score_selection(questions, ALL_TIERS), id_sum=0)

    def test_score_counts_when_missing_tier_then_counted_uncovered(self):
        """Tiers absent from the mapping count as zero."""
        score = score_counts({Difficulty.MEDIUM: 1}, ALL_TIERS)
        assert score.uncovered_tiers == 2
        assert score.question_count == 1

"""
Unit tests for the candidate pool builder.
"""

from exam_toolkit.core.models import Difficulty, Question, QuestionStatus, SelectionFilter
from exam_toolkit.selection import build_pool


class TestBuildPool:
    """Tests for build_pool function."""

    def test_build_pool_when_no_filter_then_only_active(self, mixed_bank):
        """Inactive questions are never candidates."""
        # Act
        pool = build_pool(mixed_bank, SelectionFilter())

        # Assert
        assert [q.id for q in pool] == [1, 2, 3, 4, 5, 6, 8]
        assert all(q.is_active for q in pool)

    def test_build_pool_when_tag_filter_then_only_matching(self, mixed_bank):
        """A tag restricts the pool to questions carrying it."""
        pool = build_pool(mixed_bank, SelectionFilter("python"))
        assert [q.id for q in pool] == [1, 2, 3, 5]

    def test_build_pool_when_tag_case_differs_then_matches(self, mixed_bank):
        """Tag matching is case-insensitive."""
        pool = build_pool(mixed_bank, SelectionFilter("  DSA "))
        assert [q.id for q in pool] == [5, 8]

    def test_build_pool_when_tag_is_prefix_then_no_match(self, mixed_bank):
        """Matching is on whole tag tokens."""
        assert build_pool(mixed_bank, SelectionFilter("py")) == ()

    def test_build_pool_when_unsorted_input_then_sorted_by_id(self, mixed_bank):
        """Output order is by id regardless of input order."""
        pool = build_pool(list(reversed(mixed_bank)), SelectionFilter())
        assert [q.id for q in pool] == sorted(q.id for q in pool)

    def test_build_pool_when_malformed_marks_then_skipped(self):
        """Non-positive and non-int marks are skipped without error."""
        # Arrange
        questions = [
            Question(id=1, marks=0, difficulty=Difficulty.EASY),
            Question(id=2, marks=-4, difficulty=Difficulty.EASY),
            Question(id=3, marks=2.5, difficulty=Difficulty.EASY),
            Question(id=4, marks=3, difficulty=Difficulty.EASY),
        ]

        # Act
        pool = build_pool(questions, SelectionFilter())

        # Assert
        assert [q.id for q in pool] == [4]

    def test_build_pool_when_duplicate_ids_then_first_kept(self):
        """Repeated ids keep the first record only."""
        first = Question(id=1, marks=3, difficulty=Difficulty.EASY)
        second = Question(id=1, marks=9, difficulty=Difficulty.HARD)
        pool = build_pool([first, second], SelectionFilter())
        assert pool == (first,)

    def test_build_pool_when_called_then_inventory_untouched(self, mixed_bank):
        """The inventory is not modified and the same instances are returned."""
        snapshot = list(mixed_bank)
        pool = build_pool(mixed_bank, SelectionFilter())
        assert mixed_bank == snapshot
        assert all(any(q is orig for orig in mixed_bank) for q in pool)

    def test_build_pool_when_all_inactive_then_empty(self):
        """No active questions gives an empty pool."""
        questions = [
            Question(id=1, marks=3, difficulty=Difficulty.EASY, status=QuestionStatus.INACTIVE),
        ]
        assert build_pool(questions, SelectionFilter()) == ()

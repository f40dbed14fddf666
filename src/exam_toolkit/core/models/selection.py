"""
Module: selection

Purpose:
    Provides the request and result dataclasses for the question
    selection engine: what the caller asks for (SelectionRequest) and
    what it gets back (SelectionResult).

Key Classes:
    - SelectionFilter: Optional subject tag restriction
    - SelectionRequest: Target marks + filter, validated on construction
    - SelectionMetadata: Average marks and difficulty histogram
    - SelectionResult: Outcome of one selection call
    - Algorithm: Which strategy produced the result
    - FailureReason: Why a selection failed

Dependencies:
    - dataclasses (std)
    - decimal (std)
    - functools (std)
    - .questions.Question

Used By:
    - selection.selector: Main selector
    - selection.assembler: Result assembler
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Optional, Sequence

from exam_toolkit.core.errors import InvalidRequestError

from .questions import Difficulty, Question


class Algorithm(str, Enum):
    """Identifies which selection strategy produced a result."""

    EXACT_BALANCED = "exact_balanced"
    EXACT_UNBALANCED = "exact_unbalanced"
    GREEDY_NEAREST = "greedy_nearest"
    EMPTY_TARGET = "empty_target"  # target_marks == 0
    NONE = "none"                  # every strategy failed


class FailureReason(str, Enum):
    """Why a selection produced no questions."""

    EMPTY_POOL = "EmptyPool"
    NO_FEASIBLE_COMBINATION = "NoFeasibleCombination"
    SEARCH_BOUND_EXCEEDED = "SearchBoundExceeded"


# ─────────────────────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SelectionFilter:
    """
    Subject restriction for the candidate pool.

    Attributes:
        tag: Subject tag like "python"; None or blank means no restriction
    """

    tag: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject non-string tags."""
        if self.tag is not None and not isinstance(self.tag, str):
            raise InvalidRequestError(f"filter tag must be a string: {self.tag!r}")

    @property
    def normalized_tag(self) -> Optional[str]:
        """Lower-cased, stripped tag, or None if no restriction applies."""
        if self.tag is None:
            return None
        tag = self.tag.strip().lower()
        return tag or None


@dataclass(frozen=True)
class SelectionRequest:
    """
    One selection call's input (immutable, ephemeral).

    Attributes:
        target_marks: Desired total; 0 asks for an intentionally empty exam
        filter: Optional subject restriction

    Invariants:
        - target_marks is a non-negative int (bools rejected)

    Example:
        >>> SelectionRequest(target_marks=50, filter=SelectionFilter("python"))
        SelectionRequest(target_marks=50, filter=SelectionFilter(tag='python'))
    """

    target_marks: int
    filter: SelectionFilter = field(default_factory=SelectionFilter)

    def __post_init__(self) -> None:
        """Validate request on construction."""
        validate_request(self)


def validate_request(request: SelectionRequest) -> None:
    """
    Check a request is structurally valid.

    Raises:
        InvalidRequestError: If target_marks is negative or not an int,
            or the filter is not a SelectionFilter
    """
    target = request.target_marks
    if isinstance(target, bool) or not isinstance(target, int):
        raise InvalidRequestError(f"target_marks must be an integer: {target!r}")
    if target < 0:
        raise InvalidRequestError(f"target_marks must be non-negative: {target}")
    if not isinstance(request.filter, SelectionFilter):
        raise InvalidRequestError(f"filter must be a SelectionFilter: {request.filter!r}")


# ─────────────────────────────────────────────────────────────────────────────
# Result
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SelectionMetadata:
    """
    Summary statistics of a selection.

    Attributes:
        avg_marks_per_question: total / count, rounded half-up to 1 decimal
        difficulty_distribution: Count per tier, every tier present
    """

    avg_marks_per_question: float
    difficulty_distribution: Dict[Difficulty, int]

    @classmethod
    def from_questions(cls, questions: Sequence[Question]) -> SelectionMetadata:
        """
        Calculate metadata from a selection.

        Args:
            questions: Selected questions

        Returns:
            SelectionMetadata; avg is 0.0 for an empty selection
        """
        distribution = {d: 0 for d in Difficulty}
        for q in questions:
            distribution[q.difficulty] += 1

        if not questions:
            return cls(avg_marks_per_question=0.0, difficulty_distribution=distribution)

        total = sum(q.marks for q in questions)
        avg = (Decimal(total) / Decimal(len(questions))).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
        return cls(avg_marks_per_question=float(avg), difficulty_distribution=distribution)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with difficulty names as keys."""
        return {
            "avg_marks_per_question": self.avg_marks_per_question,
            "difficulty_distribution": {
                d.value: n for d, n in self.difficulty_distribution.items()
            },
        }


@dataclass(frozen=True)
class SelectionResult:
    """
    Result of the selection engine.

    Attributes:
        success: True if a selection (or an intentionally empty one) was made
        selected: Questions in presentation order
        algorithm_used: Strategy that produced the selection
        metadata: Average marks and difficulty histogram
        target_marks: Requested total
        failure_reason: Set only when success is False
        message: Human-readable outcome

    Invariants:
        - total_marks == sum of q.marks for q in selected
        - No duplicate questions in selected
        - failure_reason is set iff success is False

    Example:
        >>> result.total_marks
        25
        >>> result.algorithm_used
        <Algorithm.EXACT_BALANCED: 'exact_balanced'>
    """

    success: bool
    selected: tuple[Question, ...]
    algorithm_used: Algorithm
    metadata: SelectionMetadata
    target_marks: int
    failure_reason: Optional[FailureReason] = None
    message: str = ""

    def __post_init__(self) -> None:
        """Validate selection result on construction."""
        question_ids = [q.id for q in self.selected]
        if len(question_ids) != len(set(question_ids)):
            raise ValueError("Duplicate questions in selection result")
        if self.success and self.failure_reason is not None:
            raise ValueError("Successful result cannot carry a failure_reason")
        if not self.success and self.failure_reason is None:
            raise ValueError("Failed result requires a failure_reason")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def total_marks(self) -> int:
        """Sum of selected marks. Always calculated, never stored."""
        return sum(q.marks for q in self.selected)

    @property
    def question_count(self) -> int:
        """Number of selected questions."""
        return len(self.selected)

    @property
    def is_exact(self) -> bool:
        """True if total_marks hits target_marks exactly."""
        return self.total_marks == self.target_marks

    @property
    def deviation(self) -> int:
        """Absolute difference between total and target."""
        return abs(self.total_marks - self.target_marks)

    # ─────────────────────────────────────────────────────────────────────────
    # Caller helpers
    # ─────────────────────────────────────────────────────────────────────────

    def order_positions(self) -> list[tuple[int, int]]:
        """
        Question ids paired with their 1-based presentation position.

        This is the order the caller should attach questions to an exam.

        Returns:
            List of (question_id, order_position)
        """
        return [(q.id, position) for position, q in enumerate(self.selected, start=1)]

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the shape consumed by the orchestration layer.

        Returns:
            Dict with success, questions, total_marks, algorithm_used,
            selection_metadata, message and (on failure) failure_reason
        """
        d: dict[str, Any] = {
            "success": self.success,
            "questions": [
                {**q.to_dict(), "order_position": position}
                for position, q in enumerate(self.selected, start=1)
            ],
            "total_marks": self.total_marks,
            "target_marks": self.target_marks,
            "algorithm_used": self.algorithm_used.value,
            "selection_metadata": self.metadata.to_dict(),
            "message": self.message,
        }
        if self.failure_reason is not None:
            d["failure_reason"] = self.failure_reason.value
        return d

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"SelectionResult(success={self.success}, "
            f"questions={self.question_count}, "
            f"marks={self.total_marks}/{self.target_marks}, "
            f"algorithm={self.algorithm_used.value})"
        )

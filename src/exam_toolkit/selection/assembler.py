"""
Module: selection.assembler

Purpose:
    Result Assembler. Packages a selection (or a failure) into a
    SelectionResult with presentation order, metadata and a message.

Key Functions:
    - assemble(): Build the SelectionResult for one request

Used By:
    - selection.selector: Main selector
"""

from __future__ import annotations

from typing import Iterable, Optional

from exam_toolkit.core.models import (
    Algorithm,
    FailureReason,
    Question,
    SelectionMetadata,
    SelectionResult,
)
from exam_toolkit.core.models.questions import difficulty_sort_key

_FAILURE_MESSAGES = {
    FailureReason.EMPTY_POOL: "No active questions match the requested filter",
    FailureReason.NO_FEASIBLE_COMBINATION: (
        "No combination of questions can reach the target of {target} marks"
    ),
    FailureReason.SEARCH_BOUND_EXCEEDED: (
        "Target of {target} marks is too large to search with the current pool"
    ),
}


def assemble(
    selected: Iterable[Question],
    algorithm_used: Algorithm,
    target_marks: int,
    failure_reason: Optional[FailureReason] = None,
) -> SelectionResult:
    """
    Build a SelectionResult from a selection.

    Selected questions are put in presentation order (easy to hard,
    then marks ascending, then id). success is True whenever something
    was selected or the target was 0; otherwise the given failure
    reason is used (NoFeasibleCombination if none was given).

    Args:
        selected: Questions chosen by a strategy (any order)
        algorithm_used: Strategy tag
        target_marks: Requested total
        failure_reason: Reason determined by the selector on failure

    Returns:
        SelectionResult; identical input always gives identical output
    """
    ordered = tuple(sorted(selected, key=difficulty_sort_key))
    metadata = SelectionMetadata.from_questions(ordered)
    success = bool(ordered) or target_marks == 0

    if not success:
        reason = failure_reason or FailureReason.NO_FEASIBLE_COMBINATION
        return SelectionResult(
            success=False,
            selected=(),
            algorithm_used=Algorithm.NONE,
            metadata=metadata,
            target_marks=target_marks,
            failure_reason=reason,
            message=_FAILURE_MESSAGES[reason].format(target=target_marks),
        )

    total = sum(q.marks for q in ordered)
    if not ordered:
        message = "Target is 0 marks; no questions selected"
    elif total == target_marks:
        message = f"Selected {len(ordered)} questions totalling {total} marks"
    else:
        message = (
            f"Selected {len(ordered)} questions totalling {total} of "
            f"{target_marks} marks (closest attainable)"
        )

    return SelectionResult(
        success=True,
        selected=ordered,
        algorithm_used=algorithm_used,
        metadata=metadata,
        target_marks=target_marks,
        message=message,
    )

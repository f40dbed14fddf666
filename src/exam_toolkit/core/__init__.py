"""
Exam Toolkit Core Package

Shared data models and the exception taxonomy for the selection engine.

**CONVENTIONS:**

1. **Immutable Data Models**
   - Frozen dataclasses; the engine returns new objects, never edits input

2. **Calculated Totals (Never Stored)**
   - `SelectionResult.total_marks` is always summed from the selection

3. **Failures Are Data**
   - Only invalid requests raise; search failures come back as
     `SelectionResult.failure_reason`
"""

from .errors import InvalidRequestError, SearchBoundExceededError, SelectionError
from .models import (
    Algorithm,
    Difficulty,
    FailureReason,
    Question,
    QuestionStatus,
    SelectionFilter,
    SelectionMetadata,
    SelectionRequest,
    SelectionResult,
)

__all__ = [
    "InvalidRequestError",
    "SearchBoundExceededError",
    "SelectionError",
    "Algorithm",
    "Difficulty",
    "FailureReason",
    "Question",
    "QuestionStatus",
    "SelectionFilter",
    "SelectionMetadata",
    "SelectionRequest",
    "SelectionResult",
]

"""
Core Models Package

Immutable, validated data models shared by the selection engine and its
callers.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. The engine can never mutate the caller's inventory
2. Safe to pass between threads serving concurrent requests
3. Questions can be used in sets and as dict keys
"""

from .questions import Difficulty, Question, QuestionStatus
from .selection import (
    Algorithm,
    FailureReason,
    SelectionFilter,
    SelectionMetadata,
    SelectionRequest,
    SelectionResult,
)

__all__ = [
    "Difficulty",
    "Question",
    "QuestionStatus",
    "Algorithm",
    "FailureReason",
    "SelectionFilter",
    "SelectionMetadata",
    "SelectionRequest",
    "SelectionResult",
]

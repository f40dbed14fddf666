"""
Module: questions

Purpose:
    Provides the Question dataclass - the read-only record handed to the
    selection engine by the surrounding application. Represents one bank
    question with its marks, difficulty tier, subject tags and status.

Key Classes:
    - Difficulty: easy / medium / hard tier
    - QuestionStatus: active / inactive
    - Question: Immutable question record

Key Functions:
    - Question.is_well_formed: Marks are a positive integer
    - Question.has_tag(tag): Case-insensitive tag lookup
    - Question.to_dict() / Question.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.selection.SelectionResult
    - selection.pool: Candidate pool builder
    - selection.strategies: Selection strategies
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable


class Difficulty(str, Enum):
    """
    Difficulty tier of a question.

    Declaration order is the presentation order used for selected
    questions (easy first).
    """

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def rank(self) -> int:
        """Position in presentation order (0 = easy)."""
        return _DIFFICULTY_ORDER.index(self)


_DIFFICULTY_ORDER = tuple(Difficulty)


class QuestionStatus(str, Enum):
    """Lifecycle status of a question. Only ACTIVE questions are eligible."""

    ACTIVE = "active"
    INACTIVE = "inactive"


def normalize_tags(tags: Iterable[str]) -> frozenset[str]:
    """Lower-case and strip tags, dropping empty entries."""
    return frozenset(t.strip().lower() for t in tags if t and t.strip())


@dataclass(frozen=True)
class Question:
    """
    Question bank record (immutable).

    The engine only ever reads these; selected questions are returned
    as the same instances the caller supplied.

    Attributes:
        id: Unique, stable integer identifier
        marks: Score awarded for a correct answer
        difficulty: Difficulty tier
        tags: Lowercase subject keywords like "python" or "dsa"
        status: Only ACTIVE questions are ever selected
        text: Optional question body, carried through untouched

    Invariants:
        - difficulty is a Difficulty, status is a QuestionStatus
        - marks is NOT validated here; inventories are external data and
          malformed marks are skipped by the pool builder instead

    Example:
        >>> q = Question(id=7, marks=5, difficulty=Difficulty.EASY,
        ...              tags=frozenset({"python"}))
        >>> q.has_tag("Python")
        True
    """

    id: int
    marks: int
    difficulty: Difficulty
    tags: frozenset[str] = field(default_factory=frozenset)
    status: QuestionStatus = QuestionStatus.ACTIVE
    text: str = ""

    def __post_init__(self) -> None:
        """Validate enum fields on construction."""
        if not isinstance(self.difficulty, Difficulty):
            raise ValueError(f"difficulty must be a Difficulty: {self.difficulty!r}")
        if not isinstance(self.status, QuestionStatus):
            raise ValueError(f"status must be a QuestionStatus: {self.status!r}")

    # ─────────────────────────────────────────────────────────────────────────
    # Query Methods
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        """True if the question may be selected."""
        return self.status is QuestionStatus.ACTIVE

    @property
    def is_well_formed(self) -> bool:
        """
        Check the marks value is usable for selection.

        Returns:
            True if marks is a positive int (bools are rejected)
        """
        return (
            isinstance(self.marks, int)
            and not isinstance(self.marks, bool)
            and self.marks > 0
        )

    @property
    def normalized_tags(self) -> frozenset[str]:
        """Tags lower-cased and stripped."""
        return normalize_tags(self.tags)

    def has_tag(self, tag: str) -> bool:
        """
        Case-insensitive exact match on a tag token.

        Args:
            tag: Tag to look for

        Returns:
            True if the normalized tag is in the normalized tag set
        """
        return tag.strip().lower() in self.normalized_tags

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        d: dict[str, Any] = {
            "id": self.id,
            "marks": self.marks,
            "difficulty": self.difficulty.value,
            "tags": sorted(self.tags),
            "status": self.status.value,
        }
        if self.text:
            d["text"] = self.text
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Question:
        """
        Deserialize from a dictionary.

        Enum fields accept their string values in any case. Tags may be a
        list or a comma-separated string.

        Raises:
            ValueError: If difficulty or status is not a known value
        """
        raw_tags = data.get("tags") or ()
        if isinstance(raw_tags, str):
            raw_tags = raw_tags.split(",")
        return cls(
            id=data["id"],
            marks=data["marks"],
            difficulty=Difficulty(str(data["difficulty"]).strip().lower()),
            tags=normalize_tags(raw_tags),
            status=QuestionStatus(str(data.get("status", "active")).strip().lower()),
            text=data.get("text", ""),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"Question({self.id!r}, marks={self.marks}, "
            f"difficulty={self.difficulty.value}, status={self.status.value})"
        )


def difficulty_sort_key(question: Question) -> tuple[int, int, int]:
    """Presentation order: difficulty tier, then marks, then id."""
    return (question.difficulty.rank, question.marks, question.id)

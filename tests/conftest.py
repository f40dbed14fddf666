import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import exam_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_toolkit.core.models import Difficulty, Question, QuestionStatus  # noqa: E402


def make_question(
    qid: int,
    marks: int,
    difficulty: str = "medium",
    tags: tuple[str, ...] = (),
    status: str = "active",
) -> Question:
    """Helper to create test questions."""
    return Question(
        id=qid,
        marks=marks,
        difficulty=Difficulty(difficulty),
        tags=frozenset(tags),
        status=QuestionStatus(status),
    )


# Common test fixtures
@pytest.fixture
def scenario_a_pool() -> list[Question]:
    """Three questions, one per tier: 10 easy, 15 medium, 25 hard."""
    return [
        make_question(1, 10, "easy"),
        make_question(2, 15, "medium"),
        make_question(3, 25, "hard"),
    ]


@pytest.fixture
def mixed_bank() -> list[Question]:
    """A small mixed bank across two subjects with one inactive question."""
    return [
        make_question(1, 2, "easy", ("python",)),
        make_question(2, 3, "easy", ("python",)),
        make_question(3, 5, "medium", ("python",)),
        make_question(4, 4, "medium", ("php",)),
        make_question(5, 10, "hard", ("python", "dsa")),
        make_question(6, 6, "hard", ("php",)),
        make_question(7, 1, "easy", ("python",), status="inactive"),
        make_question(8, 8, "medium", ("dsa",)),
    ]

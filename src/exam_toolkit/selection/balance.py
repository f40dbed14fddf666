"""
Module: selection.balance

Purpose:
    Difficulty-balance scoring for candidate selections. Used to rank
    exact-sum subsets against each other.

Key Classes:
    - BalanceScore: Orderable score, lower is better

Key Functions:
    - score_selection(): Score a selection against a target ratio
    - score_counts(): Score a per-tier count vector (no ids yet)

Ranking (in priority order):
    1. More difficulty tiers covered
    2. Tier mix closer to the target ratio (L1 distance, exact fractions)
    3. Fewer questions
    4. Lower sum of question ids

Used By:
    - selection.strategies: Exact-Balanced
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Mapping, Sequence

from exam_toolkit.core.models import Difficulty, Question


@dataclass(frozen=True, order=True)
class BalanceScore:
    """
    Comparable balance score. Compare with < ; the smaller score wins.

    Attributes:
        uncovered_tiers: Pool tiers missing from the selection
        ratio_distance: Sum of |share - target share| over pool tiers
        question_count: Number of questions selected
        id_sum: Sum of question ids (final deterministic tie-break)
    """

    uncovered_tiers: int
    ratio_distance: Fraction
    question_count: int
    id_sum: int

    def tiers_covered(self, pool_tiers: int) -> int:
        """Number of tiers present in the selection."""
        return pool_tiers - self.uncovered_tiers


def score_selection(
    questions: Sequence[Question],
    ratio: Dict[Difficulty, Fraction],
) -> BalanceScore:
    """
    Score how well a selection matches the difficulty ratio.

    Args:
        questions: Non-empty candidate selection
        ratio: Target share per tier present in the pool (sums to 1)

    Returns:
        BalanceScore for ranking

    Example:
        >>> ratio = {Difficulty.EASY: Fraction(1, 2), Difficulty.HARD: Fraction(1, 2)}
        >>> score_selection([easy_q, hard_q], ratio).ratio_distance
        Fraction(0, 1)
    """
    counts = Counter(q.difficulty for q in questions)
    return score_counts(counts, ratio, id_sum=sum(q.id for q in questions))


def score_counts(
    counts: Mapping[Difficulty, int],
    ratio: Dict[Difficulty, Fraction],
    id_sum: int = 0,
) -> BalanceScore:
    """
    Score a tier count vector.

    Every component except id_sum depends only on how many questions of
    each tier are chosen, so count vectors can be ranked before any
    concrete subset is reconstructed.

    Args:
        counts: Questions per tier (missing tiers count as 0)
        ratio: Target share per tier present in the pool
        id_sum: Sum of selected ids, if already known

    Returns:
        BalanceScore for ranking
    """
    n = sum(counts.get(tier, 0) for tier in Difficulty)
    uncovered = sum(1 for tier in ratio if counts.get(tier, 0) == 0)
    distance = sum(
        (abs(Fraction(counts.get(tier, 0), n) - share) for tier, share in ratio.items()),
        Fraction(0),
    )
    return BalanceScore(
        uncovered_tiers=uncovered,
        ratio_distance=distance,
        question_count=n,
        id_sum=id_sum,
    )

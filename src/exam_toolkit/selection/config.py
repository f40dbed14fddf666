"""
Module: selection.config

Purpose:
    Configuration dataclass for the selection engine.
    Immutable configuration with validation on construction.

Key Classes:
    - SelectionConfig: Search bounds and difficulty-balance policy

Dependencies:
    - dataclasses (std)
    - fractions (std)

Used By:
    - selection.selector: Main selector
    - selection.strategies: Strategy functions
    - selection.balance: Balance scoring
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Iterable

from exam_toolkit.core.models import Difficulty


def _default_ratio() -> Dict[Difficulty, float]:
    return {
        Difficulty.EASY: 0.4,
        Difficulty.MEDIUM: 0.4,
        Difficulty.HARD: 0.2,
    }


@dataclass(frozen=True)
class SelectionConfig:
    """
    Configuration for the selection engine (immutable).

    The engine itself is stateless; one config may be shared by every
    request in a process.

    Attributes:
        max_search_cells: Upper bound on pool_size * target_marks. Larger
            requests fail fast with SearchBoundExceeded.
        max_balance_vectors: Upper bound on the per-tier count vectors the
            balanced search may rank. Larger searches fail with
            SearchBoundExceeded instead of returning a lesser answer.
        target_ratio: Desired share of each difficulty tier
        min_balanced_tiers: Tiers a subset must cover to count as balanced
            (capped by the tiers present in the pool)
        allow_near_match: Fall back to Greedy-Nearest when no exact sum
            exists. If False such requests fail with NoFeasibleCombination.

    Invariants:
        - max_search_cells > 0
        - max_balance_vectors > 0
        - target_ratio weights >= 0 with a positive sum
        - 1 <= min_balanced_tiers <= 3

    Example:
        >>> config = SelectionConfig(allow_near_match=False)
        >>> config.normalized_ratio([Difficulty.EASY, Difficulty.HARD])
        {<Difficulty.EASY: 'easy'>: Fraction(2, 3), <Difficulty.HARD: 'hard'>: Fraction(1, 3)}
    """

    # Resource guards
    max_search_cells: int = 5_000_000
    max_balance_vectors: int = 250_000

    # Balance policy
    target_ratio: Dict[Difficulty, float] = field(default_factory=_default_ratio)
    min_balanced_tiers: int = 2

    # Fallback policy
    allow_near_match: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.max_search_cells <= 0:
            raise ValueError(f"max_search_cells must be positive: {self.max_search_cells}")
        if self.max_balance_vectors <= 0:
            raise ValueError(
                f"max_balance_vectors must be positive: {self.max_balance_vectors}"
            )
        if not 1 <= self.min_balanced_tiers <= len(Difficulty):
            raise ValueError(
                f"min_balanced_tiers must be 1-{len(Difficulty)}: {self.min_balanced_tiers}"
            )
        unknown = set(self.target_ratio) - set(Difficulty)
        if unknown:
            raise ValueError(f"target_ratio has unknown tiers: {unknown}")
        if any(weight < 0 for weight in self.target_ratio.values()):
            raise ValueError(f"target_ratio weights must be non-negative: {self.target_ratio}")
        if sum(self.target_ratio.values()) <= 0:
            raise ValueError("target_ratio weights must not all be zero")

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties
    # ─────────────────────────────────────────────────────────────────────────

    def normalized_ratio(self, tiers: Iterable[Difficulty]) -> Dict[Difficulty, Fraction]:
        """
        Target ratio restricted to the given tiers, rescaled to sum to 1.

        Exact fractions keep balance comparisons free of float ties.
        Falls back to an even split if every given tier has zero weight.

        Args:
            tiers: Tiers present in the candidate pool

        Returns:
            Mapping tier -> share
        """
        wanted = set(tiers)
        tiers = [d for d in Difficulty if d in wanted]
        if not tiers:
            return {}
        weights = {
            d: Fraction(self.target_ratio.get(d, 0)).limit_denominator(1000)
            for d in tiers
        }
        total = sum(weights.values())
        if total == 0:
            return {d: Fraction(1, len(tiers)) for d in tiers}
        return {d: w / total for d, w in weights.items()}

    def exceeds_search_bound(self, pool_size: int, target_marks: int) -> bool:
        """
        Check whether a search would be too expensive.

        Args:
            pool_size: Number of candidates
            target_marks: Requested total

        Returns:
            True if pool_size * target_marks > max_search_cells
        """
        return pool_size * target_marks > self.max_search_cells

"""
Module: selection.strategies

Purpose:
    The selection strategies, as an ordered list of pure functions. The
    selector tries them in order; the first to return a selection wins.

Key Classes:
    - SearchContext: Pool, target and config for one request, plus the
      lazily built subset-sum table shared by Exact-Unbalanced and
      Greedy-Nearest
    - Strategy: Algorithm tag + strategy function

Key Functions:
    - exact_balanced(): Exact sum, best difficulty balance
    - exact_unbalanced(): Exact sum, canonical reconstruction
    - greedy_nearest(): Closest total not above target
    - strategies_for(): Strategies enabled by a config

Contract:
    A strategy returns a non-empty tuple of pool questions, or None if it
    cannot produce a selection. It never raises for "not found"; only a
    search past its budget raises SearchBoundExceededError.

Dependencies:
    - exam_toolkit.core.models: Question, Algorithm
    - selection.subset_sum: SubsetSumTable
    - selection.balanced_search: best_balanced

Used By:
    - selection.selector: Main selector
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Optional, Sequence

from exam_toolkit.core.models import Algorithm, Difficulty, Question

from .balanced_search import best_balanced
from .config import SelectionConfig
from .subset_sum import SubsetSumTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchContext:
    """
    Inputs shared by every strategy for one request.

    Attributes:
        pool: Candidates sorted by id
        target_marks: Positive target
        config: Engine configuration
    """

    pool: tuple[Question, ...]
    target_marks: int
    config: SelectionConfig

    @cached_property
    def table(self) -> SubsetSumTable:
        """Subset-sum DP over pool marks, built on first use."""
        table = SubsetSumTable.build([q.marks for q in self.pool], self.target_marks)
        logger.debug(
            f"Subset-sum table: {len(self.pool)} items, target {self.target_marks}, "
            f"feasible={table.is_feasible}, closest={table.closest_reachable()}"
        )
        return table

    @cached_property
    def pool_tiers(self) -> frozenset[Difficulty]:
        """Difficulty tiers present in the pool."""
        return frozenset(q.difficulty for q in self.pool)

    def questions_at(self, indices: tuple[int, ...]) -> tuple[Question, ...]:
        """Map pool indices to questions."""
        return tuple(self.pool[i] for i in indices)


StrategyFn = Callable[[SearchContext], Optional[tuple[Question, ...]]]


@dataclass(frozen=True)
class Strategy:
    """
    One entry in the selector's priority list.

    Attributes:
        algorithm: Tag reported in SelectionResult.algorithm_used
        run: Strategy function
        near_match: True if the result may miss the target
    """

    algorithm: Algorithm
    run: StrategyFn
    near_match: bool = False


# ─────────────────────────────────────────────────────────────────────────────
# Exact-Balanced
# ─────────────────────────────────────────────────────────────────────────────

def exact_balanced(ctx: SearchContext) -> Optional[tuple[Question, ...]]:
    """
    Exact-sum subset with the best difficulty balance.

    Exhaustive over reachable per-tier count vectors: the winner is the
    lowest BalanceScore among subsets covering enough tiers, whatever
    the pool size.

    Returns:
        Best balanced selection, or None if none qualifies

    Raises:
        SearchBoundExceededError: If the search passes
            config.max_balance_vectors
    """
    config = ctx.config
    ratio = config.normalized_ratio(ctx.pool_tiers)
    min_tiers = min(config.min_balanced_tiers, len(ctx.pool_tiers))

    best = best_balanced(
        ctx.pool,
        ctx.target_marks,
        ratio,
        min_tiers,
        config.max_balance_vectors,
    )
    if best is None:
        logger.debug(f"No exact subset covers {min_tiers} difficulty tiers")
    return best


# ─────────────────────────────────────────────────────────────────────────────
# Exact-Unbalanced
# ─────────────────────────────────────────────────────────────────────────────

def exact_unbalanced(ctx: SearchContext) -> Optional[tuple[Question, ...]]:
    """Any exact-sum subset: the DP's canonical reconstruction."""
    indices = ctx.table.canonical()
    if indices is None:
        return None
    return ctx.questions_at(indices)


# ─────────────────────────────────────────────────────────────────────────────
# Greedy-Nearest
# ─────────────────────────────────────────────────────────────────────────────

def _greedy_key(question: Question) -> tuple[int, int]:
    return (-question.marks, question.id)


def _first_fit(
    total: int,
    candidates: Sequence[Question],
    target: int,
) -> tuple[list[Question], int]:
    """Add candidates in order while they fit under target."""
    added: list[Question] = []
    for q in candidates:
        if total + q.marks <= target:
            added.append(q)
            total += q.marks
    return added, total


def greedy_nearest(ctx: SearchContext) -> Optional[tuple[Question, ...]]:
    """
    Closest total not exceeding the target.

    1. Take questions by marks descending (id ascending on ties) while
       the running total stays within target
    2. Close the gap by swapping: drop one selected question and refill
       the freed room first-fit from the unselected (smaller) ones.
       Apply the best such move and repeat while it raises the total.
    3. If the subset-sum table shows a closer total is reachable than
       the swaps found, use its canonical reconstruction of that total

    Each applied move strictly increases the total, so the loop
    terminates. Step 3 makes the reported total the closest attainable
    one, never above target.

    Returns:
        Near-match selection, or None if nothing fits under the target
    """
    target = ctx.target_marks
    ordered = sorted(ctx.pool, key=_greedy_key)

    chosen, total = _first_fit(0, ordered, target)
    if total == 0:
        return None

    while total < target:
        chosen_ids = {q.id for q in chosen}
        unchosen = [q for q in ordered if q.id not in chosen_ids]

        best_total = total
        best_move: Optional[tuple[Question, list[Question]]] = None
        for outgoing in chosen:
            added, new_total = _first_fit(total - outgoing.marks, unchosen, target)
            if new_total > best_total:
                best_total, best_move = new_total, (outgoing, added)

        if best_move is None:
            break

        outgoing, added = best_move
        chosen = sorted(
            [q for q in chosen if q.id != outgoing.id] + added,
            key=_greedy_key,
        )
        logger.debug(
            f"Greedy swap: out {outgoing.id}, in {[q.id for q in added]} "
            f"(total {total} -> {best_total} of {target})"
        )
        total = best_total

    closest = ctx.table.closest_reachable()
    if closest > total:
        logger.debug(f"Greedy total {total} below closest reachable {closest}; using DP")
        return ctx.questions_at(ctx.table.canonical(closest))

    return tuple(chosen)


# ─────────────────────────────────────────────────────────────────────────────
# Priority list
# ─────────────────────────────────────────────────────────────────────────────

STRATEGIES: tuple[Strategy, ...] = (
    Strategy(Algorithm.EXACT_BALANCED, exact_balanced),
    Strategy(Algorithm.EXACT_UNBALANCED, exact_unbalanced),
    Strategy(Algorithm.GREEDY_NEAREST, greedy_nearest, near_match=True),
)


def strategies_for(config: SelectionConfig) -> tuple[Strategy, ...]:
    """
    Strategies enabled by a config, in priority order.

    Args:
        config: Engine configuration

    Returns:
        STRATEGIES, minus near-match strategies if allow_near_match is off
    """
    if config.allow_near_match:
        return STRATEGIES
    return tuple(s for s in STRATEGIES if not s.near_match)

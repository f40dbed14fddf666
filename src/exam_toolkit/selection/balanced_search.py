"""
Module: selection.balanced_search

Purpose:
    Exact search for the best-balanced subset hitting a mark target.

    Every part of a BalanceScore except the id-sum tie-break depends only
    on how many questions of each tier are chosen. The search therefore
    runs a subset-sum DP per tier, keyed by question count, ranks the
    reachable count vectors, and only reconstructs concrete subsets for
    the winning vectors.

Key Classes:
    - TierTable: Sums reachable with exactly c questions of one tier

Key Functions:
    - best_balanced(): Best-scoring exact subset, or None

Algorithm:
    1. Per tier: by_count[c] = bitset of sums reachable with c questions
    2. Enumerate count vectors whose cheapest sums fit under the target
    3. Sort vectors by (uncovered tiers, ratio distance, question count)
    4. Walk equal-score groups; the first group with a vector whose tier
       sums can meet the target exactly wins
    5. Within that group, pick the subset with the lowest id sum (lowest
       sorted ids on a full tie)

Dependencies:
    - exam_toolkit.core.models: Difficulty, Question
    - exam_toolkit.core.errors: SearchBoundExceededError
    - selection.balance: score_counts

Used By:
    - selection.strategies: Exact-Balanced
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from itertools import groupby
from typing import Dict, Iterator, Optional, Sequence

from exam_toolkit.core.errors import SearchBoundExceededError
from exam_toolkit.core.models import Difficulty, Question

from .balance import BalanceScore, score_counts

logger = logging.getLogger(__name__)

# Reachable sum -> (id sum, sorted ids) of the cheapest subset reaching it
Cheapest = Dict[int, tuple[int, tuple[int, ...]]]


@dataclass(frozen=True)
class TierTable:
    """
    Count-indexed reachability for the questions of one tier (immutable).

    Attributes:
        questions: The tier's candidates, sorted by id
        target: Largest sum tracked
        by_count: by_count[c] is a bitset of sums reachable with exactly
            c questions; trailing empty counts are dropped

    Example:
        >>> table = TierTable.build([q_5_marks, q_3_marks], target=8)
        >>> bin(table.by_count[1]), bin(table.by_count[2])
        ('0b101000', '0b100000000')
    """

    questions: tuple[Question, ...]
    target: int
    by_count: tuple[int, ...]

    @classmethod
    def build(cls, questions: Sequence[Question], target: int) -> TierTable:
        mask = (1 << (target + 1)) - 1
        by_count = [1]
        for q in questions:
            if by_count[-1]:
                by_count.append(0)
            for c in range(len(by_count) - 2, -1, -1):
                by_count[c + 1] |= (by_count[c] << q.marks) & mask
        while len(by_count) > 1 and not by_count[-1]:
            by_count.pop()
        return cls(questions=tuple(questions), target=target, by_count=tuple(by_count))

    def min_sum(self, count: int) -> int:
        """Smallest sum reachable with exactly count questions."""
        bits = self.by_count[count]
        return (bits & -bits).bit_length() - 1

    def cheapest(self, max_count: int) -> list[Cheapest]:
        """
        Lowest-id-sum subsets per (count, sum), for counts up to max_count.

        Questions are visited in id order, so id tuples stay sorted.

        Returns:
            layers[c][s] = (id_sum, ids) for c questions summing to s
        """
        layers: list[Cheapest] = [{0: (0, ())}] + [{} for _ in range(max_count)]
        for q in self.questions:
            for c in range(max_count - 1, -1, -1):
                for total, (id_sum, ids) in layers[c].items():
                    s = total + q.marks
                    if s > self.target:
                        continue
                    candidate = (id_sum + q.id, ids + (q.id,))
                    current = layers[c + 1].get(s)
                    if current is None or candidate < current:
                        layers[c + 1][s] = candidate
        return layers


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _sumset(a: int, b: int, mask: int) -> int:
    """Bitset of every x + y with x in a and y in b."""
    out = 0
    while a:
        low = a & -a
        out |= b << (low.bit_length() - 1)
        a ^= low
    return out & mask


def _meets_target(tables: Sequence[TierTable], counts: tuple[int, ...], target: int) -> bool:
    mask = (1 << (target + 1)) - 1
    reach = 1
    for table, c in zip(tables, counts):
        reach = _sumset(table.by_count[c], reach, mask)
    return bool(reach >> target & 1)


def _count_vectors(tables: Sequence[TierTable], target: int) -> Iterator[tuple[int, ...]]:
    """Non-empty count vectors whose cheapest tier sums fit under target."""

    def extend(i: int, counts: tuple[int, ...], floor: int) -> Iterator[tuple[int, ...]]:
        if i == len(tables):
            if any(counts):
                yield counts
            return
        table = tables[i]
        for c in range(len(table.by_count)):
            low = table.min_sum(c)
            # min_sum grows with c
            if floor + low > target:
                break
            yield from extend(i + 1, counts + (c,), floor + low)

    return extend(0, (), 0)


def _combine(left: Cheapest, right: Cheapest, target: int) -> Cheapest:
    out: Cheapest = {}
    for s1, (id1, ids1) in left.items():
        for s2, (id2, ids2) in right.items():
            s = s1 + s2
            if s > target:
                continue
            candidate = (id1 + id2, tuple(sorted(ids1 + ids2)))
            current = out.get(s)
            if current is None or candidate < current:
                out[s] = candidate
    return out


# ─────────────────────────────────────────────────────────────────────────────
# Search
# ─────────────────────────────────────────────────────────────────────────────

def best_balanced(
    pool: Sequence[Question],
    target: int,
    ratio: Dict[Difficulty, Fraction],
    min_tiers: int,
    max_vectors: int,
) -> Optional[tuple[Question, ...]]:
    """
    Best-scoring subset of pool summing exactly to target.

    Ranking follows BalanceScore: more tiers covered, then closer to the
    ratio, then fewer questions, then lower id sum. Only subsets covering
    at least min_tiers tiers qualify.

    Args:
        pool: Candidates sorted by id
        target: Positive target sum
        ratio: Target share per tier present in the pool
        min_tiers: Tiers a subset must cover
        max_vectors: Budget on count vectors ranked

    Returns:
        Selected questions sorted by id, or None if no subset qualifies

    Raises:
        SearchBoundExceededError: If more than max_vectors count vectors
            would have to be ranked
    """
    tiers = [d for d in Difficulty if d in ratio]
    tables = [
        TierTable.build([q for q in pool if q.difficulty is d], target) for d in tiers
    ]

    ranked: list[tuple[BalanceScore, tuple[int, ...]]] = []
    for examined, counts in enumerate(_count_vectors(tables, target), start=1):
        if examined > max_vectors:
            raise SearchBoundExceededError(
                f"Balanced search needs more than {max_vectors} count vectors"
            )
        score = score_counts(dict(zip(tiers, counts)), ratio)
        if score.tiers_covered(len(ratio)) >= min_tiers:
            ranked.append((score, counts))
    ranked.sort()
    logger.debug(f"Balanced search: {len(ranked)} qualifying count vectors")

    for score, group in groupby(ranked, key=lambda entry: entry[0]):
        feasible = [counts for _, counts in group if _meets_target(tables, counts, target)]
        if not feasible:
            continue
        logger.debug(f"Best balance {score} met by count vectors {feasible}")
        return _cheapest_subset(pool, tables, feasible, target)
    return None


def _cheapest_subset(
    pool: Sequence[Question],
    tables: Sequence[TierTable],
    feasible: list[tuple[int, ...]],
    target: int,
) -> tuple[Question, ...]:
    """Lowest-id-sum subset over the feasible count vectors."""
    layers = [
        table.cheapest(max(counts[i] for counts in feasible))
        for i, table in enumerate(tables)
    ]

    best: Optional[tuple[int, tuple[int, ...]]] = None
    for counts in feasible:
        partial: Cheapest = {0: (0, ())}
        for tier_layers, c in zip(layers, counts):
            partial = _combine(partial, tier_layers[c], target)
        hit = partial.get(target)
        if hit is not None and (best is None or hit < best):
            best = hit

    by_id = {q.id: q for q in pool}
    return tuple(by_id[qid] for qid in best[1])

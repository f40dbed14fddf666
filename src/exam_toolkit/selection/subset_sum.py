"""
Module: selection.subset_sum

Purpose:
    Subset-sum dynamic programming over question marks. Records which
    totals are reachable with each prefix of the candidate pool and
    walks those layers back to reconstruct subsets hitting a target.

Key Classes:
    - SubsetSumTable: Per-prefix reachability layers with reconstruction

Algorithm:
    layers[0] = {0}
    layers[i] = layers[i-1] ∪ (layers[i-1] + marks[i-1]), capped at target

    Each layer is stored as an int bitset (bit s set = sum s reachable),
    so building the table costs O(pool_size) shifts of a target-bit int.
    A total s is reachable with the first i items by either skipping
    item i-1 (s in layers[i-1]) or taking it (s - marks[i-1] in
    layers[i-1]); those two edges are the parent pointers.

Dependencies:
    - dataclasses (std)

Used By:
    - selection.strategies: Exact-Unbalanced and Greedy-Nearest
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class SubsetSumTable:
    """
    Reachable-sum layers for a sequence of item weights (immutable).

    Attributes:
        marks: Item weights in pool order
        target: Largest sum tracked
        layers: layers[i] is a bitset of sums reachable with marks[:i]

    Invariants:
        - len(layers) == len(marks) + 1
        - layers[0] == 1 (only the empty sum)
        - no bit above target is ever set

    Example:
        >>> table = SubsetSumTable.build([10, 15, 25], target=25)
        >>> table.is_feasible
        True
        >>> table.canonical()
        (0, 1)
    """

    marks: tuple[int, ...]
    target: int
    layers: tuple[int, ...]

    @classmethod
    def build(cls, marks: Sequence[int], target: int) -> SubsetSumTable:
        """
        Run the DP.

        Args:
            marks: Positive item weights
            target: Non-negative target sum

        Returns:
            Populated SubsetSumTable
        """
        mask = (1 << (target + 1)) - 1
        reach = 1
        layers = [reach]
        for m in marks:
            reach = (reach | (reach << m)) & mask
            layers.append(reach)
        return cls(marks=tuple(marks), target=target, layers=tuple(layers))

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def reachable(self, total: int, prefix: Optional[int] = None) -> bool:
        """
        Check if total is a subset sum of the first `prefix` items.

        Args:
            total: Sum to test
            prefix: Number of leading items allowed (default: all)
        """
        if total < 0 or total > self.target:
            return False
        layer = self.layers[len(self.marks) if prefix is None else prefix]
        return bool(layer >> total & 1)

    @property
    def is_feasible(self) -> bool:
        """True if some subset sums exactly to target."""
        return self.reachable(self.target)

    def closest_reachable(self) -> int:
        """Largest reachable sum not exceeding target."""
        return self.layers[-1].bit_length() - 1

    # ─────────────────────────────────────────────────────────────────────────
    # Reconstruction
    # ─────────────────────────────────────────────────────────────────────────

    def canonical(self, total: Optional[int] = None) -> Optional[tuple[int, ...]]:
        """
        The canonical reconstruction of a reachable sum.

        Walks from the last item down, skipping an item whenever the
        remaining sum is reachable without it. Favours low-index items.

        Args:
            total: Sum to reconstruct (default: target)

        Returns:
            Sorted item indices, or None if total is unreachable
        """
        remaining = self.target if total is None else total
        if not self.reachable(remaining):
            return None
        picked: list[int] = []
        for i in range(len(self.marks), 0, -1):
            if remaining == 0:
                break
            if self.reachable(remaining, i - 1):
                continue
            picked.append(i - 1)
            remaining -= self.marks[i - 1]
        return tuple(reversed(picked))

"""
Module: selection.selector

Purpose:
    Main question selection entry point. Picks questions whose marks
    sum to a target while balancing difficulty.

Key Functions:
    - select(): Main entry point for selection

Key Classes:
    - Selector: Runs one request through the strategy state machine

Algorithm:
    1. Validate the request (invalid requests raise)
    2. Target 0: succeed with an empty selection
    3. Build the candidate pool (active, well-formed, tag-matched)
    4. Check the search bound (pool_size * target_marks); a strategy
       that outgrows its own budget also ends the run with
       SearchBoundExceeded
    5. Try strategies in order: Exact-Balanced, Exact-Unbalanced,
       Greedy-Nearest; the first to return a selection wins
    6. Assemble the SelectionResult

Dependencies:
    - exam_toolkit.core.models: Question, SelectionRequest, SelectionResult
    - selection.pool: Candidate pool builder
    - selection.strategies: Strategy list
    - selection.assembler: Result assembler

Used By:
    - Orchestration layer (exam assignment command, API handlers)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from exam_toolkit.core.errors import SearchBoundExceededError
from exam_toolkit.core.models import (
    Algorithm,
    FailureReason,
    Question,
    SelectionRequest,
    SelectionResult,
)
from exam_toolkit.core.models.selection import validate_request

from .assembler import assemble
from .config import SelectionConfig
from .pool import build_pool
from .strategies import SearchContext, strategies_for

logger = logging.getLogger(__name__)


def select(
    request: SelectionRequest,
    inventory: Sequence[Question],
    config: Optional[SelectionConfig] = None,
) -> SelectionResult:
    """
    Select questions to meet a mark target.

    Stateless: a new Selector is built per call, so concurrent calls
    against their own inventory snapshots need no locking.

    Args:
        request: Target marks and filter
        inventory: Question snapshot (read only)
        config: Engine configuration (defaults used if None)

    Returns:
        SelectionResult; failures are reported in failure_reason

    Raises:
        InvalidRequestError: If the request is structurally invalid

    Invariants:
        - Exact strategies: result.total_marks == request.target_marks
        - Greedy-Nearest: result.total_marks <= request.target_marks
        - No duplicate questions in selection

    Example:
        >>> result = select(SelectionRequest(target_marks=25), questions)
        >>> result.algorithm_used
        <Algorithm.EXACT_BALANCED: 'exact_balanced'>
    """
    selector = Selector(request, inventory, config or SelectionConfig())
    return selector.run()


@dataclass
class Selector:
    """
    Selection orchestrator for a single request.

    Attributes:
        request: Target marks and filter
        inventory: Question snapshot
        config: Engine configuration
    """

    request: SelectionRequest
    inventory: Sequence[Question]
    config: SelectionConfig = field(default_factory=SelectionConfig)

    # Internal state
    _pool: tuple[Question, ...] = field(init=False, default=())

    def run(self) -> SelectionResult:
        """
        Execute the selection.

        Returns:
            SelectionResult with the winning strategy's questions
        """
        validate_request(self.request)
        target = self.request.target_marks

        if target == 0:
            logger.debug("Target is 0 marks; returning empty selection")
            return assemble((), Algorithm.EMPTY_TARGET, target)

        # Step 1: Candidate pool
        self._pool = build_pool(self.inventory, self.request.filter)
        if not self._pool:
            logger.warning(
                f"No active questions match filter tag={self.request.filter.normalized_tag!r}"
            )
            return self._fail(FailureReason.EMPTY_POOL)

        # Step 2: Resource guard
        if self.config.exceeds_search_bound(len(self._pool), target):
            logger.warning(
                f"Search bound exceeded: {len(self._pool)} candidates x {target} marks "
                f"> max_search_cells ({self.config.max_search_cells})"
            )
            return self._fail(FailureReason.SEARCH_BOUND_EXCEEDED)

        # Step 3: Strategies in priority order
        context = SearchContext(pool=self._pool, target_marks=target, config=self.config)
        for strategy in strategies_for(self.config):
            try:
                selected = strategy.run(context)
            except SearchBoundExceededError as e:
                logger.warning(f"{strategy.algorithm.value} search too large: {e}")
                return self._fail(FailureReason.SEARCH_BOUND_EXCEEDED)
            if selected:
                result = assemble(selected, strategy.algorithm, target)
                logger.debug(
                    f"{strategy.algorithm.value} selected {result.question_count} "
                    f"questions: {result.total_marks}/{target} marks"
                )
                if strategy.near_match:
                    logger.warning(
                        f"No exact combination for {target} marks; "
                        f"closest attainable is {result.total_marks}"
                    )
                return result
            logger.debug(f"{strategy.algorithm.value} found no selection; falling through")

        logger.warning(f"No combination of {len(self._pool)} candidates reaches {target} marks")
        return self._fail(FailureReason.NO_FEASIBLE_COMBINATION)

    def _fail(self, reason: FailureReason) -> SelectionResult:
        """Build a failed result."""
        return assemble((), Algorithm.NONE, self.request.target_marks, failure_reason=reason)

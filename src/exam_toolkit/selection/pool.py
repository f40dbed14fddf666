"""
Module: selection.pool

Purpose:
    Candidate Pool Builder. Narrows the caller's question inventory down
    to the questions eligible for selection.

Key Functions:
    - build_pool(): Active, well-formed, tag-matched questions by id

Dependencies:
    - exam_toolkit.core.models: Question, SelectionFilter

Used By:
    - selection.selector: Main selector
"""

from __future__ import annotations

import logging
from typing import Iterable

from exam_toolkit.core.models import Question, SelectionFilter

logger = logging.getLogger(__name__)


def build_pool(
    questions: Iterable[Question],
    selection_filter: SelectionFilter,
) -> tuple[Question, ...]:
    """
    Filter the inventory to eligible candidates.

    Rules:
    1. Only ACTIVE questions
    2. Malformed marks (non-positive or non-int) are skipped silently
    3. Repeated ids keep the first record
    4. If a tag is requested, the question must carry it (case-insensitive)

    Args:
        questions: Full inventory snapshot (never modified)
        selection_filter: Optional subject restriction

    Returns:
        Candidates sorted by id ascending

    Example:
        >>> pool = build_pool(inventory, SelectionFilter("python"))
        >>> all(q.has_tag("python") for q in pool)
        True
    """
    tag = selection_filter.normalized_tag
    seen_ids: set = set()
    candidates: list[Question] = []
    total = 0
    skipped_malformed = 0

    for q in questions:
        total += 1
        if not q.is_active:
            continue
        if not q.is_well_formed:
            skipped_malformed += 1
            logger.debug(f"Skipping question {q.id!r}: malformed marks {q.marks!r}")
            continue
        if q.id in seen_ids:
            logger.debug(f"Skipping duplicate question id {q.id!r}")
            continue
        seen_ids.add(q.id)
        if tag is not None and tag not in q.normalized_tags:
            continue
        candidates.append(q)

    candidates.sort(key=lambda q: q.id)

    logger.debug(
        f"Pool: {len(candidates)}/{total} questions eligible "
        f"(tag={tag!r}, malformed={skipped_malformed})"
    )
    return tuple(candidates)

"""
Module: selection

Purpose:
    Question selection engine for assembling exams. Selects questions
    whose marks sum to a target total while balancing difficulty, and
    reports which strategy produced the selection.

Key Functions:
    - select(): Main entry point for selection
    - build_pool(): Candidate pool builder
    - assemble(): Result assembler

Key Classes:
    - SelectionConfig: Configuration for the engine
    - Selector: Main selection orchestrator
    - Strategy: Entry in the strategy priority list

Dependencies:
    - exam_toolkit.core.models: Question, SelectionRequest, SelectionResult

Used By:
    - Orchestration layer (exam assignment, API handlers)
"""

from .assembler import assemble
from .balanced_search import best_balanced
from .config import SelectionConfig
from .pool import build_pool
from .selector import Selector, select
from .strategies import (
    STRATEGIES,
    SearchContext,
    Strategy,
    exact_balanced,
    exact_unbalanced,
    greedy_nearest,
    strategies_for,
)
from .subset_sum import SubsetSumTable

__all__ = [
    "SelectionConfig",
    "select",
    "Selector",
    "build_pool",
    "assemble",
    "best_balanced",
    "STRATEGIES",
    "SearchContext",
    "Strategy",
    "exact_balanced",
    "exact_unbalanced",
    "greedy_nearest",
    "strategies_for",
    "SubsetSumTable",
]

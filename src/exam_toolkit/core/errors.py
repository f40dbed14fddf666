"""
Module: core.errors

Purpose:
    Exception taxonomy for the selection engine.

    Only structurally invalid input is raised. "Nothing could be selected"
    outcomes (empty pool, no combination, search bound) are returned as a
    FailureReason on SelectionResult instead.

Key Classes:
    - SelectionError: Base class for engine errors
    - InvalidRequestError: Request rejected before any search
    - SearchBoundExceededError: Raised inside the engine when a search
      grows past its configured budget; the selector turns it into a
      SearchBoundExceeded result

Used By:
    - core.models.selection: Request validation
    - selection.selector: Main selector
    - selection.balanced_search: Balanced search budget
"""


class SelectionError(Exception):
    """Error during question selection."""
    pass


class InvalidRequestError(SelectionError, ValueError):
    """
    Request is structurally invalid (negative target, malformed filter).

    Raised before the inventory is scanned. Subclasses ValueError so
    callers validating input generically still catch it.
    """
    pass


class SearchBoundExceededError(SelectionError):
    """
    A search outgrew its configured budget.

    Never escapes select(); the selector reports it as
    FailureReason.SEARCH_BOUND_EXCEEDED.
    """
    pass

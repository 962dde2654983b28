from __future__ import annotations
from typing import Any, Dict, Optional


class ContractViolation(ValueError):
    """
    Raised when a caller breaks a precondition of the alignment search.

    `precondition` is a short name for the check that failed (e.g. "target_index",
    "reference_range"); `context` carries the offending values for logging.
    """

    def __init__(self, precondition: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(f"{precondition}: {message}")
        self.precondition = precondition
        self.context = dict(context or {})

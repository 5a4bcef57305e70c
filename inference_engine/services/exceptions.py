"""
inference_engine/services/exceptions.py
=======================================
Custom exception hierarchy for the inference engine.

Exception Tree::

    InferenceEngineError (base)
    └── ConfigurationError

A goal lookup that finds no authoring rule is *not* an error: it is
reported as ``None`` by :meth:`DiagnosisService.evaluate_goal`.
"""

from __future__ import annotations


class InferenceEngineError(Exception):
    """Base exception for all inference engine errors.

    All domain-specific exceptions raised within the service layer
    inherit from this class so callers can catch them uniformly.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with structured error context.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message: str = message
        self.details: dict = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class ConfigurationError(InferenceEngineError):
    """Raised when the knowledge base violates one of its invariants.

    Attributes:
        problems: List of human-readable invariant violations.
    """

    def __init__(self, problems: list[str]) -> None:
        self.problems: list[str] = problems
        super().__init__(
            message=f"Invalid knowledge base: {'; '.join(problems)}",
            details={"problems": problems},
        )

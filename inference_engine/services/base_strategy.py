"""
inference_engine/services/base_strategy.py
==========================================
Abstract base class defining the contract every inference strategy
must fulfil.  Follows the **Strategy** design pattern so the
:class:`DiagnosisService` can run data-driven and goal-driven
evaluation through one interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from .knowledge import KnowledgeBase


class InferenceStrategy(ABC):
    """Abstract inference strategy interface.

    Strategies are bound to one read-only :class:`KnowledgeBase` and
    hold no other state, so a single instance may be shared freely.
    """

    def __init__(self, knowledge_base: KnowledgeBase) -> None:
        self.knowledge_base: KnowledgeBase = knowledge_base

    @abstractmethod
    def execute_inference(self, symptoms: Iterable[str], **kwargs: Any) -> Any:
        """Run the inference algorithm against the knowledge base.

        Args:
            symptoms: Observed symptom ids.
            **kwargs: Strategy-specific keyword arguments.  For example
                :class:`BackwardChainingStrategy` accepts
                ``target_disease_id``.

        Raises:
            ConfigurationError: If the knowledge base is malformed.
        """
        ...

    @abstractmethod
    def explain_result(self, result: Any) -> str:
        """Produce a human-readable explanation of an inference result.

        Args:
            result: The value previously returned by
                :meth:`execute_inference`.

        Returns:
            A formatted multi-line explanation string.
        """
        ...

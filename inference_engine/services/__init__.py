"""
inference_engine/services/__init__.py
=====================================
Service layer for the MediLogic inference engine.

Exports:
    - Symptom, Disease, Rule, KnowledgeBase: knowledge base value types.
    - DiagnosticResult, UncertaintyReport: evaluation outputs.
    - InferenceStrategy: Abstract base class for inference strategies.
    - ForwardChainingStrategy: Data-driven forward chaining implementation.
    - BackwardChainingStrategy: Goal lookup on top of forward chaining.
    - UncertaintyAnalyzer: Noise / conflict / ambiguity classification.
    - DiagnosisService: Orchestration service over one knowledge base.
    - KnowledgeBaseRepository: Cached loader from the Django models.
    - InferenceEngineError, ConfigurationError: Custom exceptions.
"""

from .base_strategy import InferenceStrategy
from .backward_chaining import BackwardChainingStrategy
from .diagnosis_service import DiagnosisService
from .exceptions import ConfigurationError, InferenceEngineError
from .forward_chaining import ForwardChainingStrategy
from .knowledge import (
    DiagnosticResult,
    Disease,
    KnowledgeBase,
    Rule,
    Severity,
    Symptom,
    UncertaintyReport,
)
from .knowledge_base_repository import KnowledgeBaseRepository
from .rule_evaluator import evaluate_rule
from .uncertainty import AMBIGUITY_THRESHOLD, UncertaintyAnalyzer

__all__: list[str] = [
    "Symptom",
    "Disease",
    "Rule",
    "Severity",
    "KnowledgeBase",
    "DiagnosticResult",
    "UncertaintyReport",
    "InferenceStrategy",
    "ForwardChainingStrategy",
    "BackwardChainingStrategy",
    "UncertaintyAnalyzer",
    "AMBIGUITY_THRESHOLD",
    "DiagnosisService",
    "KnowledgeBaseRepository",
    "evaluate_rule",
    "InferenceEngineError",
    "ConfigurationError",
]

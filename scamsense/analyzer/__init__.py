"""Analyzer modules for ScamSense."""

from .patterns import PatternRule, classify
from .rules import MessageContext, RuleResult
from .scorer import AnalysisResult, RiskScorer, analyze

__all__ = [
    "AnalysisResult",
    "MessageContext",
    "PatternRule",
    "RiskScorer",
    "RuleResult",
    "analyze",
    "classify",
]

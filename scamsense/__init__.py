"""ScamSense: heuristic scam-risk scoring for shared text messages."""

from .analyzer import AnalysisResult, RiskScorer, analyze
from .config import ScoringConfig
from .constants import RiskLevel

__version__ = "0.3.0"

__all__ = [
    "AnalysisResult",
    "RiskLevel",
    "RiskScorer",
    "ScoringConfig",
    "analyze",
]

"""Message scoring for scam detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import ScoringConfig
from ..constants import MAX_SCORE, RiskLevel
from ..utils.links import extract_links
from .detectors import build_rules
from .patterns import build_pattern_rules, classify
from .rules import MessageContext, RuleResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Result of message scoring."""

    score: int
    level: RiskLevel
    reasons: tuple[tuple[str, float], ...] = ()
    pattern: Optional[str] = None
    links: tuple[str, ...] = ()

    @property
    def reason_labels(self) -> list[str]:
        return [label for label, _ in self.reasons]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.name,
            "label": self.level.label,
            "reasons": [{"label": label, "weight": weight} for label, weight in self.reasons],
            "pattern": self.pattern,
            "links": list(self.links),
        }


class RiskScorer:
    """Scores messages for scam likelihood based on a fixed detector table."""

    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()
        self.rules = build_rules(self.config)
        self.pattern_rules = build_pattern_rules(self.config.pattern_rules)

    def _run(self, text: str) -> tuple[MessageContext, list[RuleResult]]:
        links = tuple(extract_links(text, self.config.shorteners))
        context = MessageContext.from_text(text, links)

        results: list[RuleResult] = []
        for rule in self.rules:
            result = rule.apply(context)
            if result.fired:
                context = context.with_fired(rule.name)
            results.append(result)
        return context, results

    def evaluate(self, message: str) -> list[RuleResult]:
        """Run every detector in table order and return all outcomes."""
        return self._run(message or "")[1]

    def analyze(self, message: str) -> AnalysisResult:
        """Score a message. Never raises for any string input."""
        text = message or ""
        context, results = self._run(text)

        score = 0
        reasons: list[tuple[str, float]] = []
        for result in results:
            if not result.fired:
                continue
            score += result.points
            reasons.append((result.reason, result.weight))

        # Cap score at 100
        score = min(score, MAX_SCORE)
        level = RiskLevel.from_score(
            score,
            caution=self.config.caution_threshold,
            critical=self.config.critical_threshold,
        )

        pattern = None
        if self.config.classify_patterns:
            pattern = classify(text, self.pattern_rules, self.config.pattern_fallback)

        logger.debug(
            "Scored message (%d chars): %d %s, %d reasons, pattern=%s",
            len(text),
            score,
            level.label,
            len(reasons),
            pattern,
        )

        return AnalysisResult(
            score=score,
            level=level,
            reasons=tuple(reasons),
            pattern=pattern,
            links=context.links,
        )


DEFAULT_SCORER = RiskScorer()


def analyze(message: str) -> AnalysisResult:
    """Score a message with the canonical detector configuration."""
    return DEFAULT_SCORER.analyze(message)

"""Detector rule implementations."""

from __future__ import annotations

import re
from typing import Iterable

from ..config import ScoringConfig
from .rules import DetectionRule, MessageContext, RuleResult


class LinkRule:
    """Fires when the message carries at least one URL-like token."""

    name = "link"

    def __init__(self, points: int, reason: str):
        self.points = points
        self.reason = reason

    def apply(self, context: MessageContext) -> RuleResult:
        if not context.links:
            return RuleResult(self.name)
        return RuleResult(self.name, fired=True, points=self.points, reason=self.reason)


class KeywordRule:
    """Vocabulary match over the lowercased message.

    ``keywords`` are plain substrings, ``words`` must stand alone and
    ``patterns`` are regular expressions. When ``requires`` is set, every
    named rule must have fired earlier in the same pass.
    """

    def __init__(
        self,
        name: str,
        points: int,
        reason: str,
        keywords: Iterable[str] = (),
        words: Iterable[str] = (),
        patterns: Iterable[str] = (),
        requires: Iterable[str] = (),
    ):
        self.name = name
        self.points = points
        self.reason = reason
        self.keywords = tuple(k.lower() for k in keywords)
        self.requires = frozenset(requires)

        compiled = [re.compile(p, re.IGNORECASE) for p in patterns]
        words = tuple(words)
        if words:
            alternation = "|".join(re.escape(w.lower()) for w in words)
            compiled.append(re.compile(rf"\b(?:{alternation})\b"))
        self._regexes = tuple(compiled)

    def matches(self, lowered: str) -> bool:
        if any(keyword in lowered for keyword in self.keywords):
            return True
        return any(regex.search(lowered) for regex in self._regexes)

    def apply(self, context: MessageContext) -> RuleResult:
        if not self.requires <= context.fired:
            return RuleResult(self.name)
        if not self.matches(context.lowered):
            return RuleResult(self.name)
        return RuleResult(self.name, fired=True, points=self.points, reason=self.reason)


class CompositeRule:
    """Fires when every rule in ``requires`` fired earlier in the same pass."""

    def __init__(self, name: str, points: int, reason: str, requires: Iterable[str]):
        self.name = name
        self.points = points
        self.reason = reason
        self.requires = frozenset(requires)

    def apply(self, context: MessageContext) -> RuleResult:
        if self.requires and self.requires <= context.fired:
            return RuleResult(self.name, fired=True, points=self.points, reason=self.reason)
        return RuleResult(self.name)


def build_rules(config: ScoringConfig) -> tuple[DetectionRule, ...]:
    """Build the detector table in evaluation order."""
    link = config.detector("link")
    urgency = config.detector("urgency")
    financial = config.detector("financial")
    logistics = config.detector("logistics")
    combo = config.detector("combo")

    return (
        LinkRule(link.points, link.reason),
        KeywordRule(
            "urgency",
            urgency.points,
            urgency.reason,
            keywords=urgency.keywords,
            words=urgency.words,
            patterns=urgency.patterns,
        ),
        KeywordRule(
            "financial",
            financial.points,
            financial.reason,
            keywords=financial.keywords,
            words=financial.words,
            patterns=financial.patterns,
        ),
        KeywordRule(
            "logistics",
            logistics.points,
            logistics.reason,
            keywords=logistics.keywords,
            words=logistics.words,
            patterns=logistics.patterns,
            requires=("link",),
        ),
        CompositeRule("combo", combo.points, combo.reason, requires=("link", "urgency")),
    )

"""Attack-pattern classification.

An ordered list of keyword rules evaluated first-match-wins on the raw
message. Runs independently of the weighted detectors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..constants import DEFAULT_PATTERN_FALLBACK, DEFAULT_PATTERN_RULES


@dataclass(frozen=True)
class PatternRule:
    label: str
    keywords: tuple[str, ...]

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


DEFAULT_RULES: tuple[PatternRule, ...] = tuple(
    PatternRule(label, keywords) for label, keywords in DEFAULT_PATTERN_RULES
)


def build_pattern_rules(raw: Iterable[tuple[str, Sequence[str]]]) -> tuple[PatternRule, ...]:
    return tuple(
        PatternRule(label, tuple(k.lower() for k in keywords)) for label, keywords in raw
    )


def classify(
    message: str,
    rules: Sequence[PatternRule] = DEFAULT_RULES,
    fallback: str = DEFAULT_PATTERN_FALLBACK,
) -> str:
    """Return the label of the first matching rule, else ``fallback``."""
    lowered = (message or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.label
    return fallback

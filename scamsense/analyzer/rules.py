"""Rule-based building blocks for message scoring."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class MessageContext:
    """Shared context passed to each detection rule."""

    text: str
    lowered: str
    links: tuple[str, ...] = ()
    fired: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_text(cls, text: str, links: tuple[str, ...] = ()) -> "MessageContext":
        return cls(text=text, lowered=text.lower(), links=links)

    def with_fired(self, name: str) -> "MessageContext":
        return MessageContext(
            text=self.text,
            lowered=self.lowered,
            links=self.links,
            fired=self.fired | {name},
        )


@dataclass(frozen=True)
class RuleResult:
    """Outcome of a single detection rule."""

    name: str
    fired: bool = False
    points: int = 0
    reason: str = ""

    @property
    def weight(self) -> float:
        return self.points / 100


class DetectionRule(Protocol):
    """Interface for detection rules."""

    name: str
    points: int
    reason: str

    def apply(self, context: MessageContext) -> RuleResult:  # pragma: no cover - interface
        ...

"""Configuration management for ScamSense."""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .constants import (
    CAUTION_THRESHOLD,
    CRITICAL_THRESHOLD,
    CURRENCY_SYMBOLS,
    DEFAULT_PATTERN_FALLBACK,
    DEFAULT_PATTERN_RULES,
    DEFAULT_SHORTENERS,
    FINANCIAL_KEYWORDS,
    FINANCIAL_WORDS,
    LOGISTICS_KEYWORDS,
    URGENCY_KEYWORDS,
)

logger = logging.getLogger(__name__)

DETECTOR_NAMES: tuple[str, ...] = ("link", "urgency", "financial", "logistics", "combo")

# Letter-separated spellings such as "u-r-g-e-n-t" or "U.R.G.E.N.T".
OBFUSCATED_URGENT = r"u[\W_]{1,3}r[\W_]{1,3}g[\W_]{1,3}e[\W_]{1,3}n[\W_]{1,3}t"


@dataclass(frozen=True)
class DetectorSettings:
    """Points, reason label and vocabulary for one detector."""

    points: int
    reason: str
    keywords: tuple[str, ...] = ()
    words: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()

    @property
    def weight(self) -> float:
        return self.points / 100


def _default_detectors() -> tuple[tuple[str, DetectorSettings], ...]:
    return (
        ("link", DetectorSettings(35, "Suspicious Link Detected")),
        (
            "urgency",
            DetectorSettings(
                25,
                "Artificial Urgency Language",
                keywords=URGENCY_KEYWORDS,
                patterns=(OBFUSCATED_URGENT,),
            ),
        ),
        (
            "financial",
            DetectorSettings(
                20,
                "Financial Trigger Words",
                keywords=FINANCIAL_KEYWORDS + CURRENCY_SYMBOLS,
                words=FINANCIAL_WORDS,
            ),
        ),
        ("logistics", DetectorSettings(25, "Fake Delivery Phishing Pattern", keywords=LOGISTICS_KEYWORDS)),
        ("combo", DetectorSettings(20, "High-Pressure Phishing Combo")),
    )


@dataclass(frozen=True)
class ScoringConfig:
    """Immutable detector table, tier thresholds and pattern rules."""

    detectors: tuple[tuple[str, DetectorSettings], ...] = field(default_factory=_default_detectors)
    caution_threshold: int = CAUTION_THRESHOLD
    critical_threshold: int = CRITICAL_THRESHOLD
    shorteners: frozenset[str] = DEFAULT_SHORTENERS
    pattern_rules: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_PATTERN_RULES
    pattern_fallback: str = DEFAULT_PATTERN_FALLBACK
    classify_patterns: bool = True

    def __post_init__(self):
        # Accept a mapping but store ordered (name, settings) pairs.
        if isinstance(self.detectors, Mapping):
            object.__setattr__(self, "detectors", tuple(self.detectors.items()))

    @property
    def detector_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.detectors)

    def detector(self, name: str) -> DetectorSettings:
        for key, settings in self.detectors:
            if key == name:
                return settings
        raise KeyError(name)


@dataclass
class Config:
    """Application configuration loaded from environment."""

    config_dir: Path = field(default_factory=lambda: Path("./config"))
    log_level: str = "INFO"
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    def __post_init__(self):
        self.config_dir = Path(self.config_dir)
        self.log_level = (self.log_level or "INFO").upper()


def _coerce_points(raw, default: int) -> int:
    if raw is None:
        return default
    try:
        points = int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer points value: %r", raw)
        return default
    if not 1 <= points <= 100:
        logger.warning("Ignoring points outside 1-100: %d", points)
        return default
    return points


def _coerce_strings(raw, default: tuple[str, ...], lower: bool = True) -> tuple[str, ...]:
    if raw is None:
        return default
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        return default
    items = tuple(str(item).strip() for item in raw if str(item).strip())
    if lower:
        items = tuple(item.lower() for item in items)
    return items or default


def _coerce_patterns(raw, default: tuple[str, ...]) -> tuple[str, ...]:
    patterns = _coerce_strings(raw, default, lower=False)
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as exc:
            logger.warning("Invalid detector pattern %r: %s", pattern, exc)
            return default
    return patterns


def _coerce_detectors(raw, default: dict[str, DetectorSettings]) -> dict[str, DetectorSettings]:
    if not isinstance(raw, dict):
        return dict(default)

    detectors = dict(default)
    for name, entry in raw.items():
        if name not in default:
            logger.warning("Unknown detector in heuristics.yaml: %s", name)
            continue
        if not isinstance(entry, dict):
            continue
        base = default[name]
        detectors[name] = DetectorSettings(
            points=_coerce_points(entry.get("points"), base.points),
            reason=str(entry.get("reason") or "").strip() or base.reason,
            keywords=_coerce_strings(entry.get("keywords"), base.keywords),
            words=_coerce_strings(entry.get("words"), base.words),
            patterns=_coerce_patterns(entry.get("patterns"), base.patterns),
        )

    labels = [settings.reason for settings in detectors.values()]
    if len(set(labels)) != len(labels):
        logger.warning("Duplicate detector reason labels in heuristics.yaml; using defaults")
        return dict(default)
    return detectors


def _coerce_pattern_rules(raw, default):
    if raw is None:
        return default
    rules: list[tuple[str, tuple[str, ...]]] = []
    for entry in raw if isinstance(raw, list) else []:
        if not isinstance(entry, dict):
            continue
        label = str(entry.get("label") or "").strip()
        keywords = _coerce_strings(entry.get("keywords"), ())
        if label and keywords:
            rules.append((label, keywords))
    return tuple(rules) or default


def _load_heuristics(config_dir: Path) -> dict:
    """Load heuristic overrides from config/heuristics.yaml (optional)."""
    path = Path(config_dir or ".") / "heuristics.yaml"
    if not path.exists():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to parse heuristics.yaml: %s", exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("heuristics.yaml must contain a mapping; ignoring")
        return {}
    return data


def build_scoring_config(heuristics: dict) -> ScoringConfig:
    """Merge heuristics overrides onto the canonical scoring configuration."""
    base = ScoringConfig()
    if not heuristics:
        return base

    thresholds = heuristics.get("thresholds") or {}
    if not isinstance(thresholds, dict):
        thresholds = {}
    caution = _coerce_points(thresholds.get("caution"), base.caution_threshold)
    critical = _coerce_points(thresholds.get("critical"), base.critical_threshold)
    if caution >= critical:
        logger.warning(
            "Caution threshold (%d) must be below critical (%d); using defaults",
            caution,
            critical,
        )
        caution, critical = base.caution_threshold, base.critical_threshold

    shorteners = _coerce_strings(heuristics.get("shorteners"), tuple(base.shorteners))
    classify = heuristics.get("classify_patterns", base.classify_patterns)

    return replace(
        base,
        detectors=_coerce_detectors(heuristics.get("detectors"), dict(base.detectors)),
        caution_threshold=caution,
        critical_threshold=critical,
        shorteners=frozenset(shorteners),
        pattern_rules=_coerce_pattern_rules(heuristics.get("patterns"), base.pattern_rules),
        pattern_fallback=str(heuristics.get("pattern_fallback") or "").strip()
        or base.pattern_fallback,
        classify_patterns=classify if isinstance(classify, bool) else base.classify_patterns,
    )


def load_config(config_dir: Path | None = None) -> Config:
    """Load configuration from environment variables.

    An explicit ``config_dir`` takes precedence over CONFIG_DIR.
    """
    load_dotenv()

    config_dir = Path(config_dir or os.getenv("CONFIG_DIR", "./config"))
    heuristics = _load_heuristics(config_dir)

    return Config(
        config_dir=config_dir,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        scoring=build_scoring_config(heuristics),
    )


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of error messages."""
    errors: list[str] = []
    scoring = config.scoring

    if logging.getLevelName(config.log_level) == f"Level {config.log_level}":
        errors.append(f"LOG_LEVEL {config.log_level!r} is not a logging level")

    missing = [name for name in DETECTOR_NAMES if name not in scoring.detector_names]
    if missing:
        errors.append(f"Missing detectors: {', '.join(missing)}")

    for name, settings in scoring.detectors:
        if not 1 <= settings.points <= 100:
            errors.append(f"Detector {name} points must be within 1-100")
        if not settings.reason:
            errors.append(f"Detector {name} has no reason label")

    if not 0 < scoring.caution_threshold < scoring.critical_threshold <= 100:
        errors.append("Thresholds must satisfy 0 < caution < critical <= 100")

    if not scoring.pattern_fallback:
        errors.append("Pattern fallback label is required")

    return errors

"""Command-line entry point for ScamSense.

Reads a shared message from an argument, a file or stdin and prints the
risk breakdown.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .analyzer import AnalysisResult, RiskScorer
from .config import load_config, validate_config
from .constants import DEMO_MESSAGES

logger = logging.getLogger(__name__)

BAR_WIDTH = 20


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def format_result(result: AnalysisResult, message: str | None = None) -> str:
    """Render a result as a plain-text report."""
    lines: list[str] = []
    if message is not None:
        lines.append(f"Message: {message}")
    lines.append(f"Risk: {result.level.label} ({result.score}%)")
    if result.pattern:
        lines.append(f"Pattern: {result.pattern}")

    lines.append("Risk Breakdown:")
    if not result.reasons:
        lines.append("  (no scam indicators found)")
    for label, weight in result.reasons:
        filled = round(weight * BAR_WIDTH)
        bar = "#" * filled + "-" * (BAR_WIDTH - filled)
        lines.append(f"  [{bar}] {weight:>4.0%}  {label}")

    if result.links:
        lines.append("Links:")
        lines.extend(f"  - {link}" for link in result.links)
    return "\n".join(lines)


def read_message(args: argparse.Namespace) -> str:
    if args.text:
        return " ".join(args.text)
    if args.file:
        return Path(args.file).read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scamsense",
        description="Score a shared text message for scam risk.",
    )
    parser.add_argument("text", nargs="*", help="Message text (default: read stdin).")
    parser.add_argument("--file", type=Path, help="Read the message from a file.")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument("--demo", action="store_true", help="Score the sample chat messages.")
    parser.add_argument("--config-dir", type=Path, help="Directory holding heuristics.yaml.")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO).")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_config(args.config_dir)
    if args.log_level:
        config.log_level = args.log_level.upper()

    setup_logging(config.log_level)
    for error in validate_config(config):
        logger.error("Config error: %s", error)

    scorer = RiskScorer(config.scoring)

    if args.demo:
        results = [(message, scorer.analyze(message)) for message in DEMO_MESSAGES]
        if args.json:
            payload = [dict(result.to_dict(), message=message) for message, result in results]
            print(json.dumps(payload, indent=2, ensure_ascii=False))
        else:
            print("\n\n".join(format_result(result, message) for message, result in results))
        return 0

    try:
        message = read_message(args)
    except OSError as exc:
        logger.error("Could not read %s: %s", args.file, exc)
        return 2

    if not message.strip():
        print("Waiting for a shared message...", file=sys.stderr)
        return 1

    result = scorer.analyze(message)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Centralized constants for ScamSense.

Risk tiers and the default heuristics shared by the scorer and the
configuration loader.
"""

from enum import IntEnum


class RiskLevel(IntEnum):
    """Risk tiers with ranking for comparison."""

    LOW_RISK = 0
    CAUTION = 1
    CRITICAL = 2

    @classmethod
    def from_score(cls, score: int, caution: int = 45, critical: int = 75) -> "RiskLevel":
        """Map a capped score onto a tier. Lower bounds are inclusive."""
        if score >= critical:
            return cls.CRITICAL
        if score >= caution:
            return cls.CAUTION
        return cls.LOW_RISK

    @property
    def label(self) -> str:
        return self.name.replace("_", " ")

    def __str__(self) -> str:
        return self.label


CAUTION_THRESHOLD = 45
CRITICAL_THRESHOLD = 75
MAX_SCORE = 100

# Registrable domains of common URL shorteners.
DEFAULT_SHORTENERS: frozenset[str] = frozenset(
    {
        "bit.ly",
        "tinyurl.com",
        "t.co",
        "goo.gl",
        "is.gd",
        "cutt.ly",
        "rb.gy",
        "ow.ly",
        "shorturl.at",
    }
)

URGENCY_KEYWORDS: tuple[str, ...] = ("urgent", "immediately", "action required")
FINANCIAL_KEYWORDS: tuple[str, ...] = ("payment", "transfer", "prize", "bank", "kyc", "amount")
FINANCIAL_WORDS: tuple[str, ...] = (
    "win",
    "wins",
    "winner",
    "winners",
    "winning",
    "winnings",
    "won",
)
CURRENCY_SYMBOLS: tuple[str, ...] = ("$", "€", "£", "₹", "¥")
LOGISTICS_KEYWORDS: tuple[str, ...] = (
    "delivery",
    "courier",
    "parcel",
    "package",
    "shipment",
    "tracking",
    "customs",
)

# Ordered: first match wins.
DEFAULT_PATTERN_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Bank KYC Phishing", ("kyc",)),
    ("OTP Credential Theft", ("otp",)),
    ("Fake Logistics Scam", ("delivery", "package")),
    ("Advance Fee Fraud", ("lottery", "prize")),
)
DEFAULT_PATTERN_FALLBACK = "Social Engineering Attempt"

# Sample chat messages from the prototype's mock conversation.
DEMO_MESSAGES: tuple[str, ...] = (
    "Hey, are we still meeting tomorrow at 5?",
    "URGENT: Your bank account has been suspended. Verify now at http://secure-update-bank.com",
    "Your package could not be delivered. Pay the customs amount at bit.ly/redeliver-now",
    "Congratulations! You won a lottery prize of $5,000. Share the OTP sent to your phone to claim.",
    "Dear customer, your KYC is pending. Update immediately or your account will be blocked.",
)

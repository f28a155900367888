"""Tests for message scoring."""

import pytest

from scamsense import analyze
from scamsense.analyzer.scorer import AnalysisResult
from scamsense.constants import DEMO_MESSAGES, RiskLevel

BANK_SCAM = "URGENT: Your bank account has been suspended. Verify now at http://secure-update-bank.com"
SAFE = "Hey, are we still meeting tomorrow at 5?"

SAMPLES = [
    "",
    SAFE,
    BANK_SCAM,
    "Your package is out for delivery",
    "Your parcel is held at customs, pay here: https://track-parcel.info",
    "URGENT: your package delivery payment is pending at https://x.io",
    "U-R-G-E-N-T reply now",
    "You could win big",
    "₹500 credited to your account",
    "Claim at bit.ly/abc123",
    *DEMO_MESSAGES,
]


class TestRiskScorer:
    """Test scoring of individual messages."""

    def test_bank_phishing_is_critical(self, scorer):
        """Link, urgency, financial and combo should saturate the score."""
        result = scorer.analyze(BANK_SCAM)
        assert result.score == 100
        assert result.level == RiskLevel.CRITICAL
        assert result.reasons == (
            ("Suspicious Link Detected", 0.35),
            ("Artificial Urgency Language", 0.25),
            ("Financial Trigger Words", 0.2),
            ("High-Pressure Phishing Combo", 0.2),
        )
        assert result.pattern == "Social Engineering Attempt"
        assert result.links == ("http://secure-update-bank.com",)

    def test_benign_message(self, scorer):
        """Ordinary chat should not trigger anything."""
        result = scorer.analyze(SAFE)
        assert result.score == 0
        assert result.level == RiskLevel.LOW_RISK
        assert result.reasons == ()

    def test_empty_message(self, scorer):
        """Empty input yields the zero result with the fallback pattern."""
        result = scorer.analyze("")
        assert result.score == 0
        assert result.level == RiskLevel.LOW_RISK
        assert result.reasons == ()
        assert result.pattern == "Social Engineering Attempt"
        assert result.links == ()

    def test_none_is_treated_as_empty(self, scorer):
        """None should score like an empty message."""
        assert scorer.analyze(None) == scorer.analyze("")

    def test_score_is_capped(self, scorer):
        """All five detectors add up to 125 but the score stops at 100."""
        result = scorer.analyze("URGENT: your package delivery payment is pending at https://x.io")
        assert len(result.reasons) == 5
        assert result.score == 100
        assert result.level == RiskLevel.CRITICAL

    def test_urgency_and_financial_hit_caution_boundary(self, scorer):
        """25 + 20 lands exactly on the inclusive caution threshold."""
        result = scorer.analyze("Urgent: transfer the payment")
        assert result.score == 45
        assert result.level == RiskLevel.CAUTION

    def test_link_and_financial(self, scorer):
        """A link plus money words is a caution."""
        result = scorer.analyze("Pay the amount at https://x.io")
        assert result.score == 55
        assert result.level == RiskLevel.CAUTION

    def test_link_and_urgency_adds_combo(self, scorer):
        """Link plus urgency should add the combo reason."""
        result = scorer.analyze("Act immediately: https://x.io")
        assert result.score == 80
        assert result.reason_labels[-1] == "High-Pressure Phishing Combo"

    def test_urgency_alone_has_no_combo(self, scorer):
        """Combo needs a link."""
        result = scorer.analyze("This is urgent")
        assert result.score == 25
        assert result.reason_labels == ["Artificial Urgency Language"]


class TestDetectors:
    """Test detector vocabulary."""

    @pytest.mark.parametrize("text", ["U-R-G-E-N-T reply now", "u r g e n t", "U.R.G.E.N.T!!"])
    def test_obfuscated_urgency(self, scorer, text):
        """Letter-separated spellings of urgent should be caught."""
        assert "Artificial Urgency Language" in scorer.analyze(text).reason_labels

    def test_action_required(self, scorer):
        """Phrase vocabulary should match case-insensitively."""
        assert scorer.analyze("ACTION REQUIRED on your profile").score == 25

    def test_logistics_requires_link(self, scorer):
        """Delivery words alone are not scored."""
        result = scorer.analyze("Your package is out for delivery")
        assert result.score == 0
        assert result.pattern == "Fake Logistics Scam"

    def test_logistics_with_link(self, scorer):
        """Delivery words with a link form the fake-delivery pattern."""
        result = scorer.analyze("Your parcel is held at customs, pay here: https://track-parcel.info")
        assert result.reason_labels == ["Suspicious Link Detected", "Fake Delivery Phishing Pattern"]
        assert result.score == 60
        assert result.level == RiskLevel.CAUTION

    def test_win_is_a_whole_word(self, scorer):
        """'win' fires on its own but not inside 'window'."""
        assert scorer.analyze("You could win big").score == 20
        assert scorer.analyze("Close the window please").score == 0

    @pytest.mark.parametrize(
        "text",
        ["Congratulations, you are a WINNER!", "Collect your winnings today", "She wins again"],
    )
    def test_win_inflections(self, scorer, text):
        """Inflected forms of 'win' are financial triggers."""
        assert scorer.analyze(text).reason_labels == ["Financial Trigger Words"]

    def test_shortener_glued_to_word(self, scorer):
        """A shortener stuck to the previous word still counts as a link."""
        result = scorer.analyze("Verify:bit.ly/abc now")
        assert result.reason_labels == ["Suspicious Link Detected"]
        assert result.links == ("bit.ly/abc",)

    @pytest.mark.parametrize("text", ["₹500 credited", "Send $20", "£10 fee", "Amount due"])
    def test_currency_and_amount(self, scorer, text):
        """Currency symbols and 'amount' are financial triggers."""
        assert scorer.analyze(text).reason_labels == ["Financial Trigger Words"]

    @pytest.mark.parametrize("text", ["Claim at bit.ly/abc123", "see t.co/xyz", "www.example.com"])
    def test_link_without_scheme(self, scorer, text):
        """Shorteners and www. tokens count as links."""
        assert scorer.analyze(text).reason_labels == ["Suspicious Link Detected"]

    def test_plain_domain_is_not_a_link(self, scorer):
        """A bare non-shortener domain is not flagged."""
        assert scorer.analyze("Visit example.com today").score == 0


class TestInvariants:
    """Test properties that hold for every message."""

    @pytest.mark.parametrize("text", SAMPLES)
    def test_score_matches_fired_detectors(self, scorer, text):
        """Score is the capped sum of fired points; one reason per detector."""
        fired = [r for r in scorer.evaluate(text) if r.fired]
        result = scorer.analyze(text)

        assert 0 <= result.score <= 100
        assert result.score == min(sum(r.points for r in fired), 100)
        assert len(result.reasons) == len(fired)
        assert len(set(result.reason_labels)) == len(result.reason_labels)
        assert all(0 < weight <= 1 for _, weight in result.reasons)
        assert result.level == RiskLevel.from_score(result.score)

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, scorer, text):
        """Scoring the same text twice gives identical results."""
        assert scorer.analyze(text) == scorer.analyze(text)

    def test_module_level_analyze(self, scorer):
        """The module helper uses the canonical configuration."""
        assert analyze(BANK_SCAM) == scorer.analyze(BANK_SCAM)

    def test_result_is_immutable(self, scorer):
        """Results cannot be modified after construction."""
        result = scorer.analyze(SAFE)
        with pytest.raises(AttributeError):
            result.score = 99


class TestRiskLevel:
    """Test tier thresholds."""

    @pytest.mark.parametrize(
        "score,level",
        [
            (0, RiskLevel.LOW_RISK),
            (44, RiskLevel.LOW_RISK),
            (45, RiskLevel.CAUTION),
            (74, RiskLevel.CAUTION),
            (75, RiskLevel.CRITICAL),
            (100, RiskLevel.CRITICAL),
        ],
    )
    def test_from_score(self, score, level):
        """Lower bounds are inclusive."""
        assert RiskLevel.from_score(score) == level

    def test_labels(self):
        """Display labels use spaces."""
        assert RiskLevel.LOW_RISK.label == "LOW RISK"
        assert str(RiskLevel.CRITICAL) == "CRITICAL"


class TestToDict:
    """Test serialisation for the CLI."""

    def test_to_dict(self):
        """Enum values are rendered by name."""
        result = AnalysisResult(
            score=60,
            level=RiskLevel.CAUTION,
            reasons=(("Suspicious Link Detected", 0.35),),
            pattern="Fake Logistics Scam",
            links=("https://x.io",),
        )
        assert result.to_dict() == {
            "score": 60,
            "level": "CAUTION",
            "label": "CAUTION",
            "reasons": [{"label": "Suspicious Link Detected", "weight": 0.35}],
            "pattern": "Fake Logistics Scam",
            "links": ["https://x.io"],
        }

"""Tests for the record models — immutability, wire names, validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from l2catalog.models import (
    ClassificationEntry,
    EscrowConfig,
    LivenessTracker,
    Milestone,
    ProjectRecord,
    Reference,
    RiskSource,
    RiskViewEntry,
    Stage1Criteria,
    TransactionApi,
)

ADDRESS = "0x1a0ad011913A150f69f6A19DF447A0CfD9551054"


class TestImmutability:
    def test_models_are_frozen(self):
        ref = Reference(text="Docs", href="https://example.com")
        with pytest.raises(ValidationError):
            ref.text = "Other"

    def test_record_is_frozen(self, zora_record):
        with pytest.raises(ValidationError):
            zora_record.id = "other"

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            Reference(text="Docs", href="https://example.com", rel="nofollow")


class TestWireFormat:
    def test_camel_case_keys(self, zora_record):
        wire = zora_record.to_wire()
        assert {"riskView", "knowledgeNuggets", "stateDerivation"} <= set(wire)
        assert "dataAvailabilityMode" in wire["display"]
        assert "sinceTimestamp" in wire["config"]["escrows"][0]
        assert wire["stage"]["missing"]["nextStage"] == "Stage 1"

    def test_digit_field_names(self):
        criteria = Stage1Criteria(
            state_verification_on_l1=True,
            fraud_proof_system_at_least_5_outsiders=None,
            users_have_7_days_to_exit=False,
            users_can_exit_without_cooperation=False,
            security_council_properly_set_up=None,
        )
        wire = criteria.to_wire()
        assert wire["usersHave7DaysToExit"] == "violated"
        assert wire["fraudProofSystemAtLeast5Outsiders"] == "not_applicable"

    def test_from_alias(self):
        tracker = LivenessTracker.model_validate(
            {"formula": "transfer", "from": ADDRESS, "sinceTimestamp": 0}
        )
        assert tracker.from_ == ADDRESS
        assert tracker.to_wire()["from"] == ADDRESS

    def test_snake_case_input_accepted(self):
        api = TransactionApi(url="https://rpc.zora.co", calls_per_minute=1500)
        assert api.to_wire()["callsPerMinute"] == 1500


class TestValidation:
    def test_reference_href_required(self):
        with pytest.raises(ValidationError):
            Reference(text="Docs", href="")

    def test_reference_href_whitespace(self):
        with pytest.raises(ValidationError):
            Reference(text="Docs", href="   ")

    def test_text_kept_verbatim(self):
        ref = Reference(text="  Docs ", href="https://example.com/a b ")
        assert ref.text == "  Docs "
        assert ref.href == "https://example.com/a b "

    def test_risk_source_needs_references(self):
        with pytest.raises(ValidationError):
            RiskSource(contract="OptimismPortal", references=[])

    def test_escrow_tokens(self):
        assert EscrowConfig(address=ADDRESS, since_timestamp=0, tokens="*").all_tokens
        with pytest.raises(ValidationError):
            EscrowConfig(address=ADDRESS, since_timestamp=0, tokens=[])
        with pytest.raises(ValidationError):
            EscrowConfig(address=ADDRESS, since_timestamp=0, tokens="ETH")

    def test_escrow_address(self):
        with pytest.raises(ValidationError):
            EscrowConfig(address="0x1234", since_timestamp=0, tokens=["ETH"])

    def test_calls_per_minute_positive(self):
        with pytest.raises(ValidationError):
            TransactionApi(url="https://rpc.zora.co", calls_per_minute=0)

    def test_milestone_date(self):
        milestone = Milestone(name="Launch", date="2023-06-21T00:00:00Z", link="https://x.y")
        assert milestone.date.year == 2023

    def test_milestone_date_needs_timezone(self):
        with pytest.raises(ValidationError):
            Milestone(name="Launch", date="2024-01-01T00:00:00", link="https://x.y")

    def test_milestones_chronological(self, zora_record):
        early = Milestone(name="Testnet", date="2023-01-01T00:00:00Z", link="https://x.y")
        late = Milestone(name="Mainnet", date="2023-06-21T00:00:00Z", link="https://x.y")
        fields = zora_record.model_dump()
        ProjectRecord.model_validate({**fields, "milestones": [early, late]})
        with pytest.raises(ValidationError):
            ProjectRecord.model_validate({**fields, "milestones": [late, early]})


class TestRiskViewEntry:
    def test_from_entry(self):
        entry = ClassificationEntry(
            category="RISK_VIEW", key="EXIT_WINDOW", label="7d", parameters=(14, 7)
        )
        risk = RiskViewEntry.from_entry(entry)
        assert risk.value == "7d"
        assert risk.classification == "RISK_VIEW.EXIT_WINDOW"
        assert risk.parameters == (14, 7)
        assert risk.sources == []

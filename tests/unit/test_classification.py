"""Unit tests for verification outcome classification and rendering."""

from contract_deployer.exceptions import AlreadyVerifiedError, VerificationError
from contract_deployer.setup.orchestrator import (
    DeploymentReport,
    VerificationOutcome,
    VerificationStatus,
    classify_verification_error,
)


class TestClassifyVerificationError:
    def test_typed_error_is_already_verified(self):
        outcome = classify_verification_error(AlreadyVerifiedError("source code already verified"))

        assert outcome.status is VerificationStatus.ALREADY_VERIFIED

    def test_message_marker_is_already_verified(self):
        outcome = classify_verification_error(VerificationError("Error: Already Verified"))

        assert outcome.status is VerificationStatus.ALREADY_VERIFIED

    def test_marker_is_case_sensitive_for_untyped_errors(self):
        outcome = classify_verification_error(VerificationError("already verified"))

        assert outcome.status is VerificationStatus.FAILED

    def test_other_message_fails_with_reason(self):
        outcome = classify_verification_error(VerificationError("Fail - Unable to verify"))

        assert outcome.status is VerificationStatus.FAILED
        assert outcome.reason == "Fail - Unable to verify"
        assert not outcome.succeeded


class TestVerificationOutcome:
    def test_descriptions(self):
        assert VerificationOutcome.verified().describe() == "Contract verified successfully!"
        assert VerificationOutcome.already_verified().describe() == "Contract already verified!"
        assert VerificationOutcome.failed("boom").describe() == "Verification failed: boom"

    def test_already_verified_counts_as_success(self):
        assert VerificationOutcome.already_verified().succeeded
        assert VerificationOutcome.verified().succeeded


def test_report_lines():
    report = DeploymentReport(
        contract_name="ETHMessenger",
        address="0xABC...123",
        explorer_url="https://basescan.org/address/0xABC...123",
        tx_hash="0x01",
        outcome=VerificationOutcome.failed("Unable to locate ContractCode"),
    )

    assert report.lines() == [
        "ETHMessenger deployed to: 0xABC...123",
        "Explorer: https://basescan.org/address/0xABC...123",
        "Transaction: 0x01",
        "Verification failed: Unable to locate ContractCode",
    ]

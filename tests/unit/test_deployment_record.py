"""Unit tests for deployment record files."""

from pathlib import Path

from contract_deployer.helpers.chain_client import DeploymentResult
from contract_deployer.setup.deployment_record import (
    build_record,
    default_record_path,
    load_deployment_record,
    save_deployment_record,
)
from contract_deployer.setup.orchestrator import VerificationOutcome

RESULT = DeploymentResult(address="0xABC...123", tx_hash="0x01", block_number=42, gas_used=21_000)


def test_default_path_layout(tmp_path: Path):
    path = default_record_path(tmp_path / "deployments", "ETHMessenger")

    assert path.parent == tmp_path / "deployments"
    assert path.name.startswith("deployment_ETHMessenger_")
    assert path.suffix == ".json"


def test_record_without_outcome():
    record = build_record(RESULT, contract_name="ETHMessenger", chain="base", deployer="0xdead")

    assert record["contract"] == "ETHMessenger"
    assert record["address"] == "0xABC...123"
    assert record["block_number"] == 42
    assert record["gas_used"] == 21_000
    assert record["deployer"] == "0xdead"
    assert record["verification"] is None


def test_record_with_failed_outcome():
    record = build_record(
        RESULT,
        contract_name="ETHMessenger",
        outcome=VerificationOutcome.failed("Fail - Unable to verify"),
    )

    assert record["verification"] == {"status": "failed", "reason": "Fail - Unable to verify"}


def test_save_creates_directories_and_round_trips(tmp_path: Path):
    path = tmp_path / "nested" / "deployments" / "record.json"
    record = build_record(RESULT, contract_name="ETHMessenger")

    saved = save_deployment_record(path, record)

    assert saved == path
    assert load_deployment_record(path) == record

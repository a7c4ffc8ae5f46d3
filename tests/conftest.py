"""Shared pytest fixtures and test doubles for contract-deployer tests."""

import json
from pathlib import Path
from typing import Any, List, Optional

import pytest

from contract_deployer.helpers.artifacts import ContractArtifact
from contract_deployer.helpers.chain_client import DeploymentRequest, DeploymentResult


SAMPLE_ADDRESS = "0xABC...123"
SAMPLE_TX_HASH = "0x" + "ab" * 32

ENV_KEYS = [
    "PRIVATE_KEY",
    "RPC_URL",
    "CHAIN",
    "CONTRACT_NAME",
    "BASESCAN_API_KEY",
    "ETHERSCAN_API_KEY",
    "EXPLORER_API_URL",
    "CONFIRMATIONS",
    "CONFIRMATION_TIMEOUT",
    "RECEIPT_TIMEOUT",
    "ARTIFACTS_DIR",
    "CONTRACTS_DIR",
    "COMPILER_VERSION",
    "OPTIMIZER_RUNS",
    "EVM_VERSION",
    "DEPLOYMENTS_DIR",
    "LOG_DIR",
    "LOG_LEVEL",
]


class FakeChainClient:
    """ChainClient double that records every call in a shared log."""

    def __init__(
        self,
        call_log: List[str],
        address: str = SAMPLE_ADDRESS,
        deploy_error: Optional[Exception] = None,
        confirm_error: Optional[Exception] = None,
    ):
        self.call_log = call_log
        self.result = DeploymentResult(
            address=address,
            tx_hash=SAMPLE_TX_HASH,
            block_number=100,
            gas_used=250_000,
        )
        self.deploy_error = deploy_error
        self.confirm_error = confirm_error
        self.requests: List[DeploymentRequest] = []

    async def deploy(self, request: DeploymentRequest) -> DeploymentResult:
        self.call_log.append("deploy")
        self.requests.append(request)
        if self.deploy_error is not None:
            raise self.deploy_error
        return self.result

    def address(self, result: DeploymentResult) -> str:
        self.call_log.append("address")
        return result.address

    async def await_confirmations(self, result: DeploymentResult, count: int) -> None:
        self.call_log.append(f"await_confirmations:{count}")
        if self.confirm_error is not None:
            raise self.confirm_error


class FakeVerifier:
    """VerificationService double; raises ``error`` when set."""

    def __init__(self, call_log: List[str], error: Optional[Exception] = None):
        self.call_log = call_log
        self.error = error
        self.calls: List[tuple] = []

    async def verify(self, address: str, constructor_args: Any) -> None:
        self.call_log.append("verify")
        self.calls.append((address, tuple(constructor_args)))
        if self.error is not None:
            raise self.error


@pytest.fixture
def call_log() -> List[str]:
    return []


@pytest.fixture
def fake_chain(call_log: List[str]) -> FakeChainClient:
    return FakeChainClient(call_log)


@pytest.fixture
def fake_verifier(call_log: List[str]) -> FakeVerifier:
    return FakeVerifier(call_log)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove deployer variables; anything loaded later (e.g. via .env) is undone too."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def sample_abi() -> List[dict]:
    return [
        {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
        {
            "inputs": [{"internalType": "string", "name": "message", "type": "string"}],
            "name": "sendMessage",
            "outputs": [],
            "stateMutability": "payable",
            "type": "function",
        },
    ]


@pytest.fixture
def artifact(sample_abi: List[dict]) -> ContractArtifact:
    return ContractArtifact(
        name="ETHMessenger",
        abi=sample_abi,
        bytecode="0x6080604052",
        source="// SPDX-License-Identifier: MIT\npragma solidity ^0.8.24;\ncontract ETHMessenger {}\n",
    )


@pytest.fixture
def artifact_dirs(tmp_path: Path, sample_abi: List[dict]) -> tuple:
    """Create build/ and contracts/ directories holding an ETHMessenger artifact."""
    build_dir = tmp_path / "build"
    contracts_dir = tmp_path / "contracts"
    build_dir.mkdir()
    contracts_dir.mkdir()
    (build_dir / "ETHMessenger.abi").write_text(json.dumps(sample_abi))
    (build_dir / "ETHMessenger.bin").write_text("6080604052\n")
    (contracts_dir / "ETHMessenger.sol").write_text("contract ETHMessenger {}\n")
    return build_dir, contracts_dir

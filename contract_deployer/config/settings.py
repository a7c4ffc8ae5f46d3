"""Deployment settings read from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from .network import DEFAULT_CHAIN, get_chain_config


DEFAULT_CONTRACT_NAME = "ETHMessenger"
DEFAULT_CONFIRMATIONS = 5
DEFAULT_RECEIPT_TIMEOUT = 300  # seconds
DEFAULT_COMPILER_VERSION = "v0.8.24+commit.e11b9ed9"
DEFAULT_OPTIMIZER_RUNS = 200
DEFAULT_EVM_VERSION = "paris"


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _optional_float_env(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class DeploySettings:
    private_key: str
    rpc_url: str
    chain: str
    chain_config: dict[str, Any]
    contract_name: str = DEFAULT_CONTRACT_NAME
    explorer_api_key: str | None = None
    confirmations: int = DEFAULT_CONFIRMATIONS
    # None keeps the confirmation wait unbounded
    confirmation_timeout: float | None = None
    receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT
    artifacts_dir: Path = Path("build")
    contracts_dir: Path = Path("contracts")
    compiler_version: str = DEFAULT_COMPILER_VERSION
    optimizer_runs: int = DEFAULT_OPTIMIZER_RUNS
    evm_version: str = DEFAULT_EVM_VERSION
    deployments_dir: Path | None = Path("deployments")

    @property
    def chain_name(self) -> str:
        return self.chain_config["name"]

    @property
    def chain_id(self) -> int:
        return self.chain_config["chain_id"]

    @property
    def explorer_name(self) -> str:
        return self.chain_config["explorer"]["name"]

    @property
    def explorer_url(self) -> str:
        return self.chain_config["explorer"]["url"]

    @property
    def explorer_api_url(self) -> str:
        return os.getenv("EXPLORER_API_URL") or self.chain_config["explorer"]["api_url"]

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "DeploySettings":
        """Build settings from environment variables.

        A ``.env`` file (``env_file`` or the default lookup) is loaded first;
        variables already set in the process environment win.

        Raises:
            ConfigurationError: If PRIVATE_KEY is missing or a value is invalid.
        """
        load_dotenv(env_file)

        private_key = os.getenv("PRIVATE_KEY")
        if not private_key:
            raise ConfigurationError("Missing environment variable: PRIVATE_KEY")

        chain = (os.getenv("CHAIN") or DEFAULT_CHAIN).lower()
        try:
            chain_config = get_chain_config(chain)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        deployments_raw = os.getenv("DEPLOYMENTS_DIR")
        if deployments_raw is None:
            deployments_dir: Path | None = Path("deployments")
        else:
            deployments_dir = Path(deployments_raw) if deployments_raw.strip() else None

        return cls(
            private_key=private_key,
            rpc_url=os.getenv("RPC_URL") or chain_config["rpc_urls"][0],
            chain=chain,
            chain_config=chain_config,
            contract_name=os.getenv("CONTRACT_NAME") or DEFAULT_CONTRACT_NAME,
            explorer_api_key=os.getenv("BASESCAN_API_KEY") or os.getenv("ETHERSCAN_API_KEY") or None,
            confirmations=_int_env("CONFIRMATIONS", DEFAULT_CONFIRMATIONS),
            confirmation_timeout=_optional_float_env("CONFIRMATION_TIMEOUT"),
            receipt_timeout=_int_env("RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT, minimum=1),
            artifacts_dir=Path(os.getenv("ARTIFACTS_DIR") or "build"),
            contracts_dir=Path(os.getenv("CONTRACTS_DIR") or "contracts"),
            compiler_version=os.getenv("COMPILER_VERSION") or DEFAULT_COMPILER_VERSION,
            optimizer_runs=_int_env("OPTIMIZER_RUNS", DEFAULT_OPTIMIZER_RUNS),
            evm_version=os.getenv("EVM_VERSION") or DEFAULT_EVM_VERSION,
            deployments_dir=deployments_dir,
        )

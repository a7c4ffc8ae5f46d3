#!/usr/bin/env python3
"""
Deploy the configured contract and verify it on the chain's block explorer.

Usage:
    deploy-contract
    python -m contract_deployer

Takes no arguments; everything comes from the environment / .env file
(PRIVATE_KEY, RPC_URL, CHAIN, CONTRACT_NAME, BASESCAN_API_KEY, ...).

Exit code is 0 once the contract is deployed, whatever the verification
outcome, and 1 if configuration, deployment or confirmation fails.
"""
from __future__ import annotations

import asyncio
import logging
import sys

from eth_account import Account

from .config.logging_config import get_deployer_logger
from .config.settings import DeploySettings
from .helpers.artifacts import load_artifact
from .helpers.chain_client import DeploymentRequest, Web3ChainClient
from .helpers.verification import EtherscanVerifier
from .helpers.web3_setup import get_async_web3
from .setup.deployment_record import default_record_path
from .setup.orchestrator import DeploymentOrchestrator, DeploymentReport

logger = logging.getLogger(__name__)


def build_orchestrator(settings: DeploySettings) -> DeploymentOrchestrator:
    """Wire the web3 chain client and Etherscan verifier from settings."""
    artifact = load_artifact(settings.contract_name, settings.artifacts_dir, settings.contracts_dir)
    account = Account.from_key(settings.private_key)

    w3 = get_async_web3(settings.rpc_url, poa=settings.chain_config.get("poa", False))
    chain = Web3ChainClient(
        w3,
        account,
        artifact,
        chain_id=settings.chain_id,
        receipt_timeout=settings.receipt_timeout,
        poll_interval=settings.chain_config["block_time"],
        confirmation_timeout=settings.confirmation_timeout,
    )
    verifier = EtherscanVerifier(
        settings.explorer_api_url,
        settings.explorer_api_key,
        artifact,
        compiler_version=settings.compiler_version,
        optimizer_runs=settings.optimizer_runs,
        evm_version=settings.evm_version,
    )

    record_path = None
    if settings.deployments_dir is not None:
        record_path = default_record_path(settings.deployments_dir, settings.contract_name)

    return DeploymentOrchestrator(
        chain,
        verifier,
        contract_name=settings.contract_name,
        explorer_url=settings.explorer_url,
        chain_name=settings.chain_name,
        explorer_name=settings.explorer_name,
        confirmations=settings.confirmations,
        record_path=record_path,
        network=settings.chain,
        deployer=account.address,
    )


def log_report(report: DeploymentReport) -> None:
    logger.info("=" * 60)
    logger.info("DEPLOYMENT COMPLETE")
    logger.info("=" * 60)
    for line in report.lines():
        logger.info(line)


async def _run_and_close(orchestrator: DeploymentOrchestrator, request: DeploymentRequest | None) -> DeploymentReport:
    try:
        return await orchestrator.run(request)
    finally:
        close = getattr(orchestrator.chain, "close", None)
        if close is not None:
            try:
                await close()
            except Exception as e:
                logger.warning("Could not close chain connection: %s", e)


def run(orchestrator: DeploymentOrchestrator, request: DeploymentRequest | None = None) -> int:
    """Run one workflow and map its result to a process exit code."""
    try:
        report = asyncio.run(_run_and_close(orchestrator, request))
    except Exception as e:
        logger.exception("Deployment failed")
        print(f"❌ Deployment failed: {e}", file=sys.stderr)
        return 1

    log_report(report)
    return 0


def main() -> int:
    get_deployer_logger()
    try:
        settings = DeploySettings.from_env()
        orchestrator = build_orchestrator(settings)
    except Exception as e:
        logger.exception("Could not set up deployment")
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return run(orchestrator)


if __name__ == "__main__":
    sys.exit(main())

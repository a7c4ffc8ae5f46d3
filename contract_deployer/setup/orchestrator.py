"""
Deployment orchestrator.

Runs the fixed sequence deploy -> await confirmations -> verify -> report:

    Start -> Deployed -> Confirmed -> Verified | AlreadyVerified | VerificationFailed -> Done

Only the first two steps can fail the run. Verification is best effort: its
errors are classified into a VerificationOutcome and reported, never raised.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config.network import explorer_address_url
from ..config.settings import DEFAULT_CONFIRMATIONS
from ..exceptions import AlreadyVerifiedError, VerificationError
from ..helpers.chain_client import ChainClient, DeploymentRequest, DeploymentResult
from ..helpers.verification import VerificationService
from .deployment_record import build_record, save_deployment_record

logger = logging.getLogger(__name__)

ALREADY_VERIFIED_MARKER = "Already Verified"


class VerificationStatus(Enum):
    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
    FAILED = "failed"


@dataclass(frozen=True)
class VerificationOutcome:
    status: VerificationStatus
    reason: str | None = None

    @classmethod
    def verified(cls) -> "VerificationOutcome":
        return cls(VerificationStatus.VERIFIED)

    @classmethod
    def already_verified(cls, reason: str | None = None) -> "VerificationOutcome":
        return cls(VerificationStatus.ALREADY_VERIFIED, reason)

    @classmethod
    def failed(cls, reason: str) -> "VerificationOutcome":
        return cls(VerificationStatus.FAILED, reason)

    @property
    def succeeded(self) -> bool:
        return self.status is not VerificationStatus.FAILED

    def describe(self) -> str:
        if self.status is VerificationStatus.VERIFIED:
            return "Contract verified successfully!"
        if self.status is VerificationStatus.ALREADY_VERIFIED:
            return "Contract already verified!"
        return f"Verification failed: {self.reason}"


def classify_verification_error(error: VerificationError) -> VerificationOutcome:
    """Map a verification rejection to an outcome.

    A typed AlreadyVerifiedError wins; otherwise the message is searched for
    the explorer's "Already Verified" wording.
    """
    if isinstance(error, AlreadyVerifiedError):
        return VerificationOutcome.already_verified(error.message)
    if ALREADY_VERIFIED_MARKER in error.message:
        return VerificationOutcome.already_verified(error.message)
    return VerificationOutcome.failed(error.message)


@dataclass(frozen=True)
class DeploymentReport:
    contract_name: str
    address: str
    explorer_url: str
    tx_hash: str
    outcome: VerificationOutcome

    def lines(self) -> list[str]:
        return [
            f"{self.contract_name} deployed to: {self.address}",
            f"Explorer: {self.explorer_url}",
            f"Transaction: {self.tx_hash}",
            self.outcome.describe(),
        ]

    def render(self) -> str:
        return "\n".join(self.lines())


class DeploymentOrchestrator:
    """Drives one deploy-and-verify run against a chain client and a verifier."""

    def __init__(
        self,
        chain: ChainClient,
        verifier: VerificationService,
        *,
        contract_name: str,
        explorer_url: str,
        chain_name: str = "Base",
        explorer_name: str = "BaseScan",
        confirmations: int = DEFAULT_CONFIRMATIONS,
        record_path: Path | None = None,
        network: str | None = None,
        deployer: str | None = None,
    ):
        self.chain = chain
        self.verifier = verifier
        self.contract_name = contract_name
        self.explorer_url = explorer_url
        self.chain_name = chain_name
        self.explorer_name = explorer_name
        self.confirmations = confirmations
        self.record_path = record_path
        self.network = network
        self.deployer = deployer

    def _save_record(self, result: DeploymentResult, outcome: VerificationOutcome | None = None) -> None:
        if self.record_path is None:
            return
        record = build_record(
            result,
            contract_name=self.contract_name,
            chain=self.network,
            deployer=self.deployer,
            outcome=outcome,
        )
        try:
            save_deployment_record(self.record_path, record)
        except OSError as e:
            logger.warning("Could not write deployment record %s: %s", self.record_path, e)
            return
        logger.debug("Deployment record saved to %s", self.record_path)

    async def verify(self, address: str, constructor_args) -> VerificationOutcome:
        logger.info("Verifying contract on %s...", self.explorer_name)
        try:
            await self.verifier.verify(address, constructor_args)
        except VerificationError as e:
            outcome = classify_verification_error(e)
        except Exception as e:
            logger.debug("Unexpected verification error", exc_info=True)
            outcome = classify_verification_error(VerificationError(str(e) or type(e).__name__))
        else:
            outcome = VerificationOutcome.verified()

        if outcome.succeeded:
            logger.info(outcome.describe())
        else:
            logger.warning(outcome.describe())
        return outcome

    async def run(self, request: DeploymentRequest | None = None) -> DeploymentReport:
        """Deploy, wait for confirmations, verify, and return the report.

        Raises:
            DeploymentError, ConfirmationError: deployment or confirmation failed.
        """
        request = request or DeploymentRequest()
        logger.info("Deploying %s to %s...", self.contract_name, self.chain_name)

        result = await self.chain.deploy(request)
        address = self.chain.address(result)
        url = explorer_address_url(address, self.explorer_url)

        logger.info("%s deployed to: %s", self.contract_name, address)
        logger.info("View on %s: %s", self.explorer_name, url)
        self._save_record(result)

        logger.info("Waiting for block confirmations...")
        await self.chain.await_confirmations(result, self.confirmations)

        outcome = await self.verify(address, request.constructor_args)
        self._save_record(result, outcome)

        return DeploymentReport(
            contract_name=self.contract_name,
            address=address,
            explorer_url=url,
            tx_hash=result.tx_hash,
            outcome=outcome,
        )

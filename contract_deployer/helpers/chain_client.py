"""
Chain client: submits the contract-creation transaction and waits for
confirmations on top of it.

The orchestrator only depends on the ``ChainClient`` protocol; the concrete
``Web3ChainClient`` talks to an RPC node through ``web3.AsyncWeb3`` and signs
locally with an ``eth_account`` key.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Protocol

from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from web3 import AsyncWeb3, Web3
from web3.exceptions import TimeExhausted

from ..exceptions import ConfirmationError, ConfirmationTimeoutError, DeploymentError
from .artifacts import ContractArtifact

logger = logging.getLogger(__name__)

GAS_LIMIT_BUFFER_PCT = 20
FALLBACK_GAS_LIMIT = 1_000_000


@dataclass(frozen=True)
class DeploymentRequest:
    """Constructor arguments for the contract; empty for a no-arg constructor."""
    constructor_args: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DeploymentResult:
    address: str
    tx_hash: str
    block_number: int
    gas_used: int | None = None


class ChainClient(Protocol):
    async def deploy(self, request: DeploymentRequest) -> DeploymentResult: ...

    def address(self, result: DeploymentResult) -> str: ...

    async def await_confirmations(self, result: DeploymentResult, count: int) -> None: ...


def confirmations_since(block_number: int, latest_block: int) -> int:
    """Blocks mined on top of ``block_number``."""
    return max(0, latest_block - block_number)


class Web3ChainClient:
    """ChainClient backed by an AsyncWeb3 connection and a local signer."""

    def __init__(
        self,
        w3: AsyncWeb3,
        account: LocalAccount,
        artifact: ContractArtifact,
        *,
        chain_id: int | None = None,
        receipt_timeout: float = 300,
        poll_interval: float = 2.0,
        confirmation_timeout: float | None = None,
    ):
        self.w3 = w3
        self.account = account
        self.artifact = artifact
        self.chain_id = chain_id
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self.confirmation_timeout = confirmation_timeout

    # ---------- helpers ----------

    async def check_network(self) -> int:
        """Return the node's chain id, failing if it differs from the configured one."""
        actual = await self.w3.eth.chain_id
        if self.chain_id is not None and actual != self.chain_id:
            raise DeploymentError(f"Chain ID mismatch: expected {self.chain_id}, got {actual}")
        return actual

    async def _build_transaction(self, request: DeploymentRequest) -> dict[str, Any]:
        sender = self.account.address
        contract = self.w3.eth.contract(abi=self.artifact.abi, bytecode=self.artifact.bytecode)
        constructor = contract.constructor(*request.constructor_args)
        tx = await constructor.build_transaction({
            "from": sender,
            "nonce": await self.w3.eth.get_transaction_count(sender, "pending"),
            "gasPrice": await self.w3.eth.gas_price,
            "chainId": await self.check_network(),
        })

        try:
            gas_estimate = await self.w3.eth.estimate_gas(tx)
            tx["gas"] = int(gas_estimate) * (100 + GAS_LIMIT_BUFFER_PCT) // 100
        except Exception as e:
            logger.warning("Gas estimation failed (%s); using fallback limit %d", e, FALLBACK_GAS_LIMIT)
            tx["gas"] = FALLBACK_GAS_LIMIT
        return tx

    # ---------- core ----------

    async def deploy(self, request: DeploymentRequest) -> DeploymentResult:
        """Sign and send the creation transaction, then wait for its receipt."""
        try:
            tx = await self._build_transaction(request)
            signed = self.account.sign_transaction(tx)
            tx_hash = Web3.to_hex(await self.w3.eth.send_raw_transaction(signed.raw_transaction))
        except DeploymentError:
            raise
        except Exception as e:
            raise DeploymentError(f"Failed to submit deployment transaction: {e}") from e

        logger.debug("Deployment transaction sent: %s", tx_hash)

        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except TimeExhausted as e:
            raise DeploymentError(f"No receipt for {tx_hash} after {self.receipt_timeout}s") from e
        except Exception as e:
            raise DeploymentError(f"Failed to fetch receipt for {tx_hash}: {e}") from e

        if int(receipt.get("status", 0)) != 1:
            raise DeploymentError(f"Deployment transaction {tx_hash} reverted (status={receipt.get('status')})")

        address = receipt.get("contractAddress")
        if not address:
            raise DeploymentError(f"Receipt for {tx_hash} has no contract address")

        return DeploymentResult(
            address=to_checksum_address(address),
            tx_hash=tx_hash,
            block_number=int(receipt["blockNumber"]),
            gas_used=int(receipt["gasUsed"]) if receipt.get("gasUsed") is not None else None,
        )

    def address(self, result: DeploymentResult) -> str:
        return result.address

    async def await_confirmations(self, result: DeploymentResult, count: int) -> None:
        """Sleep-poll the head block until ``count`` blocks sit on top of the deployment.

        Without ``confirmation_timeout`` this waits for as long as the chain takes.
        """
        started = time.monotonic()
        while True:
            try:
                latest = await self.w3.eth.block_number
            except Exception as e:
                raise ConfirmationError(f"Failed to read block number: {e}") from e

            confirmed = confirmations_since(result.block_number, latest)
            logger.debug("Confirmations for %s: %d/%d", result.tx_hash, confirmed, count)
            if confirmed >= count:
                return

            if self.confirmation_timeout is not None and time.monotonic() - started >= self.confirmation_timeout:
                raise ConfirmationTimeoutError(
                    f"Only {confirmed}/{count} confirmations for {result.tx_hash} "
                    f"after {self.confirmation_timeout}s"
                )
            await asyncio.sleep(self.poll_interval)

    async def close(self) -> None:
        """Release the provider's HTTP session."""
        await self.w3.provider.disconnect()

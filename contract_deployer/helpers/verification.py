"""
Block-explorer source verification through the Etherscan-style contract API.

Flow (one attempt per run):
    1. POST action=verifysourcecode -> GUID
    2. GET  action=checkverifystatus until the job leaves the queue

Rejections are raised as ``VerificationError``; an explorer answer saying the
source is already verified is raised as ``AlreadyVerifiedError``.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import aiohttp
from eth_abi import encode
from eth_abi.exceptions import EncodingError

from ..exceptions import AlreadyVerifiedError, VerificationError
from .artifacts import ContractArtifact

logger = logging.getLogger(__name__)

STATUS_PASS = "Pass - Verified"


class VerificationService(Protocol):
    async def verify(self, address: str, constructor_args: Sequence[Any]) -> None: ...


def encode_constructor_args(types: Sequence[str], values: Sequence[Any]) -> str:
    """ABI-encode constructor arguments as hex without 0x ("" when there are none)."""
    if len(types) != len(values):
        raise VerificationError(
            f"Constructor expects {len(types)} argument(s), got {len(values)}"
        )
    if not types:
        return ""
    try:
        return encode(list(types), list(values)).hex()
    except EncodingError as e:
        raise VerificationError(f"Could not encode constructor arguments: {e}") from e


def _is_already_verified(text: str) -> bool:
    return "already verified" in text.lower()


def _is_pending(text: str) -> bool:
    return "pending" in text.lower()


def _rejection(text: str) -> VerificationError:
    if _is_already_verified(text):
        return AlreadyVerifiedError(text)
    return VerificationError(text)


class EtherscanVerifier:
    """VerificationService for Etherscan-compatible explorers (BaseScan, Gnosisscan, ...)."""

    def __init__(
        self,
        api_url: str,
        api_key: str | None,
        artifact: ContractArtifact,
        *,
        compiler_version: str,
        optimizer_runs: int = 200,
        evm_version: str | None = None,
        license_type: str = "3",  # MIT
        status_poll_interval: float = 5.0,
        status_poll_attempts: int = 12,
        request_timeout: float = 30.0,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.artifact = artifact
        self.compiler_version = compiler_version
        self.optimizer_runs = optimizer_runs
        self.evm_version = evm_version
        self.license_type = license_type
        self.status_poll_interval = status_poll_interval
        self.status_poll_attempts = status_poll_attempts
        self.request_timeout = request_timeout

    # ---------- helpers ----------

    def build_submission(self, address: str, constructor_args: Sequence[Any]) -> dict[str, str]:
        return {
            "apikey": self.api_key or "",
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": self.artifact.source,
            "codeformat": "solidity-single-file",
            "contractname": self.artifact.name,
            "compilerversion": self.compiler_version,
            "optimizationUsed": "1" if self.optimizer_runs > 0 else "0",
            "runs": str(self.optimizer_runs),
            "evmversion": self.evm_version or "",
            "licenseType": self.license_type,
            # sic: the explorer API spells it this way
            "constructorArguements": encode_constructor_args(
                self.artifact.constructor_inputs(), constructor_args
            ),
        }

    @staticmethod
    def _expect_object(result: Any) -> dict[str, Any]:
        if not isinstance(result, dict):
            raise VerificationError(f"Unexpected explorer response: {result!r}")
        return result

    async def _post(self, session: aiohttp.ClientSession, data: dict[str, str]) -> dict[str, Any]:
        async with session.post(self.api_url, data=data) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

    async def _get(self, session: aiohttp.ClientSession, params: dict[str, str]) -> dict[str, Any]:
        async with session.get(self.api_url, params=params) as resp:
            resp.raise_for_status()
            return await resp.json(content_type=None)

    async def _wait_for_status(self, session: aiohttp.ClientSession, guid: str) -> None:
        params = {
            "apikey": self.api_key or "",
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        }
        for attempt in range(self.status_poll_attempts):
            await asyncio.sleep(self.status_poll_interval)
            result = self._expect_object(await self._get(session, params))
            text = str(result.get("result", ""))
            logger.debug("Verification status (%d/%d): %s", attempt + 1, self.status_poll_attempts, text)

            if _is_already_verified(text):
                raise AlreadyVerifiedError(text)
            if str(result.get("status")) == "1" or text == STATUS_PASS:
                return
            if _is_pending(text):
                continue
            raise _rejection(text or "Unknown verification status")

        raise VerificationError(
            f"Verification status check timed out after {self.status_poll_attempts} attempts (GUID {guid})"
        )

    # ---------- core ----------

    async def verify(self, address: str, constructor_args: Sequence[Any]) -> None:
        """Submit the source for ``address`` and wait for the explorer's verdict."""
        if not self.api_key:
            raise VerificationError("Explorer API key not set (BASESCAN_API_KEY / ETHERSCAN_API_KEY)")

        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        try:
            data = self.build_submission(address, constructor_args)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                result = self._expect_object(await self._post(session, data))
                text = str(result.get("result", ""))
                if str(result.get("status")) != "1":
                    raise _rejection(text or "Unknown error")

                logger.debug("Verification submitted, GUID: %s", text)
                await self._wait_for_status(session, text)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise VerificationError(f"Explorer request failed: {e}") from e

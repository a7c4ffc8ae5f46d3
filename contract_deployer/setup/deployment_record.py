"""
Deployment record

Writes a JSON file per run under the deployments directory, e.g.
deployments/deployment_ETHMessenger_1760000000.json, so the address and
transaction survive the console session. The record is written right after
the contract is mined and rewritten once the verification outcome is known.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..helpers.chain_client import DeploymentResult
    from .orchestrator import VerificationOutcome


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def default_record_path(deployments_dir: Path, contract_name: str) -> Path:
    ts = int(datetime.now(timezone.utc).timestamp())
    return Path(deployments_dir) / f"deployment_{contract_name}_{ts}.json"


def build_record(
    result: "DeploymentResult",
    *,
    contract_name: str,
    chain: str | None = None,
    deployer: str | None = None,
    outcome: "VerificationOutcome | None" = None,
) -> dict[str, Any]:
    return {
        "contract": contract_name,
        "address": result.address,
        "tx_hash": result.tx_hash,
        "block_number": result.block_number,
        "gas_used": result.gas_used,
        "network": chain,
        "deployer": deployer,
        "timestamp": _utc_now_iso(),
        "verification": (
            {"status": outcome.status.value, "reason": outcome.reason}
            if outcome is not None
            else None
        ),
    }


def save_deployment_record(path: Path, record: dict[str, Any]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(record, f, indent=2)
    return path


def load_deployment_record(path: Path) -> dict[str, Any]:
    with open(path) as f:
        return json.load(f)

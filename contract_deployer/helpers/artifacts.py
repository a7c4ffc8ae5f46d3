"""Load compiled contract artifacts (ABI, bytecode) and the matching source."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..exceptions import ArtifactNotFoundError, ConfigurationError


@dataclass(frozen=True)
class ContractArtifact:
    name: str
    abi: list[dict[str, Any]]
    bytecode: str
    source: str

    def constructor_inputs(self) -> list[str]:
        """ABI types of the constructor parameters (empty if there is no constructor)."""
        for entry in self.abi:
            if entry.get("type") == "constructor":
                return [inp["type"] for inp in entry.get("inputs", [])]
        return []


def load_artifact(name: str, artifacts_dir: Path, contracts_dir: Path) -> ContractArtifact:
    """Read ``<name>.abi``/``<name>.bin`` from the build dir and ``<name>.sol`` from sources.

    Compilation happens elsewhere; this only picks up its output.
    """
    abi_path = Path(artifacts_dir) / f"{name}.abi"
    bin_path = Path(artifacts_dir) / f"{name}.bin"
    source_path = Path(contracts_dir) / f"{name}.sol"

    for path in (abi_path, bin_path, source_path):
        if not path.exists():
            raise ArtifactNotFoundError(f"Missing artifact for {name}: {path}")

    try:
        abi = json.loads(abi_path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid ABI JSON in {abi_path}: {e}") from e

    bytecode = bin_path.read_text().strip()
    if bytecode in ("", "0x"):
        raise ConfigurationError(f"Empty bytecode in {bin_path}")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return ContractArtifact(
        name=name,
        abi=abi,
        bytecode=bytecode,
        source=source_path.read_text(),
    )

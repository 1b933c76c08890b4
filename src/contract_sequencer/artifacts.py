"""Compiled contract artifact lookup for contract-sequencer library."""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import HARDHAT_ARTIFACTS_DIR, TRUFFLE_ARTIFACTS_DIR
from .exceptions import ArtifactNotFoundError


class ArtifactFormat(Enum):
    """
    Compiled artifact layouts.

    - TRUFFLE: build/contracts/<Name>.json
    - HARDHAT: artifacts/contracts/<source>.sol/<Name>.json (plus .dbg.json companions)
    """

    TRUFFLE = "truffle"
    HARDHAT = "hardhat"


@dataclass
class ContractArtifact:
    """ABI and bytecode of a compiled contract."""

    name: str
    abi: List[Dict[str, Any]]
    bytecode: Optional[str] = None
    source_format: Optional[str] = None

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return item.get("inputs", [])
        return []


def _hardhat_artifacts(artifacts_dir: Path) -> List[Path]:
    return [
        p for p in artifacts_dir.rglob("*.json") if not p.name.endswith(".dbg.json")
    ]


def detect_artifact_format(project_dir: Path) -> Optional[ArtifactFormat]:
    """
    Detect which artifact layout a project directory has.

    Args:
        project_dir: Project root

    Returns:
        ArtifactFormat.TRUFFLE if build/contracts/*.json files exist
        ArtifactFormat.HARDHAT if TRUFFLE check fails but artifacts/contracts has artifacts
        None if no artifacts found
    """
    # Check truffle first
    truffle_dir = project_dir.joinpath(*TRUFFLE_ARTIFACTS_DIR)
    if truffle_dir.exists() and list(truffle_dir.glob("*.json")):
        return ArtifactFormat.TRUFFLE

    hardhat_dir = project_dir.joinpath(*HARDHAT_ARTIFACTS_DIR)
    if hardhat_dir.exists() and _hardhat_artifacts(hardhat_dir):
        return ArtifactFormat.HARDHAT

    return None


def find_artifact(project_dir: Path, contract_name: str) -> Path:
    """
    Locate the artifact file of a contract.

    Args:
        project_dir: Project root
        contract_name: Contract name, e.g. "AzbitToken"

    Returns:
        Path to the artifact JSON file

    Raises:
        ArtifactNotFoundError: If no artifact exists for the contract
    """
    project_dir = Path(project_dir)

    match detect_artifact_format(project_dir):
        case ArtifactFormat.TRUFFLE:
            candidate = project_dir.joinpath(*TRUFFLE_ARTIFACTS_DIR) / f"{contract_name}.json"
            if candidate.exists():
                return candidate
        case ArtifactFormat.HARDHAT:
            hardhat_dir = project_dir.joinpath(*HARDHAT_ARTIFACTS_DIR)
            for candidate in sorted(_hardhat_artifacts(hardhat_dir)):
                if candidate.stem == contract_name:
                    return candidate
        case None:
            raise ArtifactNotFoundError(f"No compiled artifacts found in {project_dir}")

    raise ArtifactNotFoundError(
        f"Artifact for contract '{contract_name}' not found in {project_dir}"
    )


def load_artifact(file_path: Path) -> ContractArtifact:
    """
    Parse a truffle or hardhat artifact JSON file.

    Args:
        file_path: Path to artifact file

    Returns:
        ContractArtifact

    Raises:
        KeyError: If the file has no ABI
    """
    with open(file_path) as f:
        data = json.load(f)

    # Truffle and hardhat both write "contractName", "abi" and "bytecode";
    # hardhat adds "_format"
    source_format = (
        ArtifactFormat.HARDHAT.value if "_format" in data else ArtifactFormat.TRUFFLE.value
    )

    return ContractArtifact(
        name=data.get("contractName", Path(file_path).stem),
        abi=data["abi"],
        bytecode=data.get("bytecode"),
        source_format=source_format,
    )

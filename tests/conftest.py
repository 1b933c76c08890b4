"""Shared pytest fixtures for contract-sequencer tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from contract_sequencer.exceptions import DeployError

ADDRESS_A = "0x" + "a" * 40
ADDRESS_B = "0x" + "b" * 40
ADDRESS_C = "0x" + "c" * 40


class RecordingDeployer:
    """Mock deployer that hands out addresses in order and records every call."""

    def __init__(
        self,
        addresses: Optional[List[str]] = None,
        fail_on: Optional[str] = None,
    ):
        self.addresses = list(addresses or [ADDRESS_A, ADDRESS_B, ADDRESS_C])
        self.fail_on = fail_on
        self.calls: List[Dict[str, Any]] = []

    def deploy(self, contract_name: str, args: List[Any], value: Optional[int] = None) -> str:
        self.calls.append({"contract": contract_name, "args": args, "value": value})
        if contract_name == self.fail_on:
            raise DeployError(f"{contract_name} constructor reverted")
        return self.addresses[len(self.calls) - 1]

    @property
    def deployed_contracts(self) -> List[str]:
        return [call["contract"] for call in self.calls]


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def azbit_plan_path(fixtures_dir: Path) -> Path:
    """Return path to the Azbit token plan."""
    return fixtures_dir / "azbit_plan.json"


@pytest.fixture
def azbit_plan_json(azbit_plan_path: Path) -> Dict[str, Any]:
    """Load and return the Azbit token plan document."""
    with open(azbit_plan_path) as f:
        return json.load(f)


@pytest.fixture
def truffle_project(fixtures_dir: Path) -> Path:
    """Return a project root with truffle build artifacts."""
    return fixtures_dir / "truffle"


@pytest.fixture
def hardhat_project(fixtures_dir: Path) -> Path:
    """Return a project root with hardhat artifacts."""
    return fixtures_dir / "hardhat"


@pytest.fixture
def deployer() -> RecordingDeployer:
    """Mock deployer returning 0xaaa..., 0xbbb..., 0xccc... in turn."""
    return RecordingDeployer()


@pytest.fixture
def make_deployer():
    """Factory for mock deployers with custom addresses or a failing contract."""
    return RecordingDeployer


@pytest.fixture(autouse=True)
def clear_sequencer_env(monkeypatch):
    """Keep tests independent of the caller's environment."""
    monkeypatch.delenv("CONTRACT_SEQUENCER_NETWORK", raising=False)
    monkeypatch.delenv("CONTRACT_SEQUENCER_PLAN", raising=False)

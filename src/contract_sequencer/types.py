"""Data types and dataclasses for contract-sequencer library."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Reference:
    """Placeholder for the address of an earlier step."""

    step_id: str

    def __str__(self) -> str:
        return f"address-of({self.step_id})"


@dataclass(frozen=True)
class DeploymentStep:
    """One contract deployment in a plan."""

    contract: str  # Contract name handed to the deployer, e.g. "AzbitToken"
    args: Tuple[Any, ...] = ()  # Literals or Reference placeholders
    value: Optional[int] = None  # Wei sent with the creation transaction
    networks: Optional[Tuple[str, ...]] = None  # None means every network
    step_id: Optional[str] = None  # Defaults to the contract name

    @property
    def id(self) -> str:
        return self.step_id if self.step_id is not None else self.contract

    def applies_to(self, network: Optional[str]) -> bool:
        """Whether the step runs on a network (always true when no network is selected)."""
        if network is None or self.networks is None:
            return True
        return network in self.networks

    def references(self) -> List[Reference]:
        """All references carried by the step's arguments, nested ones included."""
        found: List[Reference] = []
        _collect_references(self.args, found)
        return found


def _collect_references(value: Any, found: List[Reference]) -> None:
    if isinstance(value, Reference):
        found.append(value)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _collect_references(item, found)


@dataclass(frozen=True)
class DeploymentPlan:
    """Ordered, immutable sequence of deployment steps."""

    steps: Tuple[DeploymentStep, ...]
    name: Optional[str] = None

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[DeploymentStep]:
        return iter(self.steps)

    def step_ids(self) -> List[str]:
        return [step.id for step in self.steps]

    def steps_for_network(self, network: Optional[str] = None) -> List[DeploymentStep]:
        return [step for step in self.steps if step.applies_to(network)]


@dataclass
class DeployedContract:
    """A step that completed during a run."""

    index: int  # Position of the step in the plan
    step_id: str
    contract: str
    address: str
    args: List[Any]  # Resolved constructor arguments
    value: Optional[int] = None


class RunStatus(Enum):
    """Lifecycle of a sequencer run."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(eq=False)
class DeploymentResult(Mapping):
    """
    Append-only mapping of step id to deployed address.

    Iterates in completion order. Owned by a single sequencer run.
    """

    records: List[DeployedContract] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._addresses: Dict[str, str] = {r.step_id: r.address for r in self.records}

    def __getitem__(self, step_id: str) -> str:
        return self._addresses[step_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._addresses)

    def __len__(self) -> int:
        return len(self._addresses)

    def record(self, deployed: DeployedContract) -> None:
        """
        Append a completed step.

        Raises:
            ValueError: If the step id was already recorded
        """
        if deployed.step_id in self._addresses:
            raise ValueError(f"Step '{deployed.step_id}' already recorded")
        self.records.append(deployed)
        self._addresses[deployed.step_id] = deployed.address

    def to_dict(self) -> Dict[str, str]:
        return dict(self._addresses)

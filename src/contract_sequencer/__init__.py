"""
contract-sequencer: Python library for running ordered smart contract deployment plans
"""

from importlib.metadata import PackageNotFoundError, version

from .deployer import DeployerCapability
from .exceptions import (
    ArtifactNotFoundError,
    DeployError,
    PlanNotFoundError,
    PlanValidationError,
    SequencerError,
)
from .parsers import load_plan, parse_plan
from .sequencer import DeploymentSequencer, execute, resolve_args
from .types import (
    DeployedContract,
    DeploymentPlan,
    DeploymentResult,
    DeploymentStep,
    Reference,
    RunStatus,
)
from .validation import validate_plan

try:
    __version__ = version("contract-sequencer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentSequencer",
    "execute",
    "resolve_args",
    "validate_plan",
    "load_plan",
    "parse_plan",
    "DeployerCapability",
    "DeploymentPlan",
    "DeploymentStep",
    "DeploymentResult",
    "DeployedContract",
    "Reference",
    "RunStatus",
    "SequencerError",
    "PlanValidationError",
    "PlanNotFoundError",
    "ArtifactNotFoundError",
    "DeployError",
]

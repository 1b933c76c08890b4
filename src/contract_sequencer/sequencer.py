"""Main API for contract-sequencer library."""

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .deployer import DeployerCapability
from .exceptions import DeployError, PlanValidationError
from .parsers import is_address
from .paths import get_default_network
from .types import DeployedContract, DeploymentPlan, DeploymentResult, Reference, RunStatus
from .validation import validate_plan

logger = logging.getLogger(__name__)


def resolve_args(args: Any, result: Mapping[str, str]) -> List[Any]:
    """
    Replace references with deployed addresses.

    Literals pass through unchanged; tuples (nested argument arrays) come back
    as lists.

    Args:
        args: Constructor arguments of a step
        result: Addresses deployed so far

    Returns:
        Resolved argument list

    Raises:
        PlanValidationError: If a referenced step has not been deployed
    """
    return [_resolve(arg, result) for arg in args]


def _resolve(value: Any, result: Mapping[str, str]) -> Any:
    if isinstance(value, Reference):
        if value.step_id not in result:
            raise PlanValidationError(
                f"Reference to '{value.step_id}' cannot be resolved: step not deployed",
                reference=value.step_id,
            )
        return result[value.step_id]
    if isinstance(value, (list, tuple)):
        return [_resolve(item, result) for item in value]
    return value


class DeploymentSequencer:
    """Runs a deployment plan, one step at a time, in declared order."""

    def __init__(
        self,
        plan: DeploymentPlan,
        deployer: DeployerCapability,
        network: Optional[str] = None,
        artifacts_dir: Optional[Union[Path, str]] = None,
    ):
        """
        Initialize the sequencer.

        Args:
            plan: Plan to execute
            deployer: Capability that performs each deployment
            network: Target network (defaults to $CONTRACT_SEQUENCER_NETWORK;
                     None runs every step)
            artifacts_dir: Project root with compiled artifacts to check the plan
                           against before deploying
        """
        self.plan = plan
        self.deployer = deployer
        self.network = network if network is not None else get_default_network()
        self.artifacts_dir = artifacts_dir
        self.status = RunStatus.PENDING
        self.current_index: Optional[int] = None
        self.result = DeploymentResult()

    @property
    def state(self) -> str:
        """Readable run state, e.g. "running-step-1" or "failed-at-step-2"."""
        match self.status:
            case RunStatus.RUNNING:
                return f"running-step-{self.current_index}"
            case RunStatus.FAILED if self.current_index is not None:
                return f"failed-at-step-{self.current_index}"
            case _:
                return self.status.value

    def run(self) -> DeploymentResult:
        """
        Validate and execute the plan.

        Returns:
            DeploymentResult mapping step ids to addresses

        Raises:
            PlanValidationError: If the plan is malformed (nothing is deployed)
            DeployError: If a step fails; carries the step and the partial result
            RuntimeError: If this sequencer has already run
        """
        if self.status is not RunStatus.PENDING:
            raise RuntimeError(f"Sequencer already ran ({self.state})")

        try:
            validate_plan(self.plan, self.network, self.artifacts_dir)
        except PlanValidationError:
            self.status = RunStatus.FAILED
            raise

        self.status = RunStatus.RUNNING
        logger.info(
            "Deploying plan %s (%d steps) to %s",
            self.plan.name or "<unnamed>",
            len(self.plan),
            self.network or "default network",
        )

        for index, step in enumerate(self.plan.steps):
            if not step.applies_to(self.network):
                logger.debug("Skipping step '%s': not enabled on %s", step.id, self.network)
                continue

            self.current_index = index
            args = resolve_args(step.args, self.result)
            logger.info("Deploying %s as '%s'", step.contract, step.id)
            logger.debug("Arguments for '%s': %r (value=%r)", step.id, args, step.value)

            try:
                address = self.deployer.deploy(step.contract, args, step.value)
                if not is_address(address):
                    raise DeployError(f"Deployer returned an invalid address: {address!r}")
            except Exception as e:
                self.status = RunStatus.FAILED
                logger.error("Step %d ('%s') failed: %s", index, step.id, e)
                raise DeployError(
                    f"Deployment of step '{step.id}' ({step.contract}) failed: {e}",
                    step_id=step.id,
                    step_index=index,
                    result=self.result,
                ) from e

            self.result.record(
                DeployedContract(
                    index=index,
                    step_id=step.id,
                    contract=step.contract,
                    address=address,
                    args=args,
                    value=step.value,
                )
            )
            logger.info("Deployed '%s' at %s", step.id, address)

        self.status = RunStatus.SUCCEEDED
        logger.info("Plan complete: %d contracts deployed", len(self.result))
        return self.result


def execute(
    plan: DeploymentPlan,
    deployer: DeployerCapability,
    network: Optional[str] = None,
    artifacts_dir: Optional[Union[Path, str]] = None,
) -> DeploymentResult:
    """
    Execute a deployment plan with a fresh sequencer.

    Args:
        plan: Plan to execute
        deployer: Capability that performs each deployment
        network: Target network (defaults to $CONTRACT_SEQUENCER_NETWORK)
        artifacts_dir: Project root with compiled artifacts (optional pre-flight check)

    Returns:
        DeploymentResult mapping step ids to addresses

    Raises:
        PlanValidationError: If the plan is malformed
        DeployError: If a step fails
    """
    return DeploymentSequencer(plan, deployer, network, artifacts_dir).run()

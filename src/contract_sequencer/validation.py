"""Plan validation for contract-sequencer library."""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from .artifacts import find_artifact, load_artifact
from .exceptions import ArtifactNotFoundError, PlanValidationError
from .types import DeploymentPlan, DeploymentStep


def validate_plan(
    plan: DeploymentPlan,
    network: Optional[str] = None,
    artifacts_dir: Optional[Union[Path, str]] = None,
) -> None:
    """
    Check a plan before any transaction is sent.

    References must point backwards: every Reference in a step names a step
    declared earlier that also runs on the selected network. This rules out
    forward and cyclic references.

    Args:
        plan: Plan to check
        network: Target network (None selects every step)
        artifacts_dir: Project root with compiled artifacts; when given, every
                       contract must have an artifact whose constructor takes
                       as many arguments as the step supplies

    Raises:
        PlanValidationError: On the first problem found
    """
    if len(plan) == 0:
        raise PlanValidationError("Deployment plan has no steps")

    # Position of every step id, to tell forward references from unknown ones
    positions: Dict[str, int] = {}
    for index, step in enumerate(plan.steps):
        if step.id in positions:
            raise PlanValidationError(
                f"Duplicate step id '{step.id}' at positions "
                f"{positions[step.id]} and {index}",
                step_id=step.id,
            )
        positions[step.id] = index

    if not plan.steps_for_network(network):
        raise PlanValidationError(f"Deployment plan has no steps for network '{network}'")

    for index, step in enumerate(plan.steps):
        if not step.applies_to(network):
            continue

        if step.value is not None and step.value < 0:
            raise PlanValidationError(
                f"Step '{step.id}' sends a negative value: {step.value}", step_id=step.id
            )

        for reference in step.references():
            target = reference.step_id
            if target not in positions:
                raise PlanValidationError(
                    f"Step '{step.id}' references unknown step '{target}'",
                    step_id=step.id,
                    reference=target,
                )
            if positions[target] >= index:
                raise PlanValidationError(
                    f"Step '{step.id}' references step '{target}' "
                    "which is not declared before it",
                    step_id=step.id,
                    reference=target,
                )
            if not plan.steps[positions[target]].applies_to(network):
                raise PlanValidationError(
                    f"Step '{step.id}' references step '{target}' "
                    f"which does not run on network '{network}'",
                    step_id=step.id,
                    reference=target,
                )

        if artifacts_dir is not None:
            _check_artifact(step, Path(artifacts_dir))


def _check_artifact(step: DeploymentStep, artifacts_dir: Path) -> None:
    try:
        artifact = load_artifact(find_artifact(artifacts_dir, step.contract))
    except ArtifactNotFoundError as e:
        raise PlanValidationError(str(e), step_id=step.id) from e
    except (KeyError, json.JSONDecodeError) as e:
        raise PlanValidationError(
            f"Artifact for contract '{step.contract}' is unreadable: {e!r}",
            step_id=step.id,
        ) from e

    expected = len(artifact.constructor_inputs)
    if expected != len(step.args):
        raise PlanValidationError(
            f"Step '{step.id}' passes {len(step.args)} arguments but "
            f"{step.contract} constructor takes {expected}",
            step_id=step.id,
        )

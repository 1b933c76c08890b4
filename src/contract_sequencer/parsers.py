"""Plan document parsers for contract-sequencer library."""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import requests
from eth_utils import from_wei, to_wei
from eth_utils import is_address as is_eth_address

from .constants import HTTP_TIMEOUT, REFERENCE_KEY
from .exceptions import PlanNotFoundError, PlanValidationError
from .paths import get_plan_path, is_url
from .types import DeploymentPlan, DeploymentStep, Reference

logger = logging.getLogger(__name__)


def is_address(value: Any) -> bool:
    """Check for a 0x-prefixed address; mixed case must be a valid EIP-55 checksum."""
    return isinstance(value, str) and value.startswith("0x") and is_eth_address(value)


def parse_reference(value: Any) -> Optional[Reference]:
    """
    Recognise a back-reference.

    Args:
        value: Decoded JSON value

    Returns:
        Reference for {"$ref": "<step id>"}, None for anything else
    """
    if isinstance(value, dict) and REFERENCE_KEY in value:
        target = value[REFERENCE_KEY]
        if len(value) != 1 or not isinstance(target, str) or not target:
            raise PlanValidationError(f"Malformed reference: {value!r}")
        return Reference(target)
    return None


def parse_argument(value: Any) -> Any:
    """
    Convert one decoded constructor argument.

    References become Reference objects, lists become tuples (recursively),
    everything else passes through unchanged.
    """
    reference = parse_reference(value)
    if reference is not None:
        return reference
    if isinstance(value, list):
        return tuple(parse_argument(item) for item in value)
    return value


def parse_amount(value: Union[int, str]) -> int:
    """
    Convert an amount to wei.

    Args:
        value: Integer wei, or a string such as "0.5 ether" or "20 gwei"

    Returns:
        Amount in wei

    Raises:
        PlanValidationError: If the amount is malformed or not a whole number of wei
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise PlanValidationError(f"Invalid amount: {value!r}")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise PlanValidationError(f"Invalid amount: {value!r}")

    parts = value.split()
    if len(parts) == 1:
        number, unit = parts[0], "wei"
    elif len(parts) == 2:
        number, unit = parts[0], parts[1].lower()
    else:
        raise PlanValidationError(f"Invalid amount: {value!r}")

    try:
        wei = to_wei(number, unit)
        # to_wei truncates anything below one wei
        whole = from_wei(wei, unit) == Decimal(number)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise PlanValidationError(f"Invalid amount {value!r}: {e}") from e

    if not whole:
        raise PlanValidationError(f"Amount {value!r} is not a whole number of wei")
    return wei


def parse_step(data: Dict[str, Any], index: int) -> DeploymentStep:
    """
    Parse one step entry of a plan document.

    Args:
        data: Step dictionary
        index: Position in the plan (for error messages)

    Returns:
        DeploymentStep
    """
    if not isinstance(data, dict):
        raise PlanValidationError(f"Step {index} is not an object")

    contract = data.get("contract")
    if not isinstance(contract, str) or not contract:
        raise PlanValidationError(f"Step {index} is missing a contract name")

    step_id = data.get("id")
    if step_id is not None and (not isinstance(step_id, str) or not step_id):
        raise PlanValidationError(f"Step {index} has an invalid id: {step_id!r}")

    ident = step_id or contract

    args = data.get("args", [])
    if not isinstance(args, list):
        raise PlanValidationError(f"Arguments of step '{ident}' must be a list", step_id=ident)

    value = None
    if data.get("value") is not None:
        try:
            value = parse_amount(data["value"])
        except PlanValidationError as e:
            raise PlanValidationError(f"Step '{ident}': {e}", step_id=ident) from e

    networks: Optional[Tuple[str, ...]] = None
    if data.get("networks") is not None:
        raw_networks = data["networks"]
        if not isinstance(raw_networks, list) or not all(
            isinstance(n, str) for n in raw_networks
        ):
            raise PlanValidationError(
                f"Networks of step '{ident}' must be a list of names", step_id=ident
            )
        networks = tuple(raw_networks)

    try:
        parsed_args = tuple(parse_argument(arg) for arg in args)
    except PlanValidationError as e:
        raise PlanValidationError(f"Step '{ident}': {e}", step_id=ident) from e

    return DeploymentStep(
        contract=contract,
        args=parsed_args,
        value=value,
        networks=networks,
        step_id=step_id,
    )


def parse_plan(data: Dict[str, Any]) -> DeploymentPlan:
    """
    Build a plan from a decoded plan document.

    Args:
        data: Dictionary with a "steps" list and an optional "name"

    Returns:
        DeploymentPlan (not yet validated for references)

    Raises:
        PlanValidationError: If the document structure is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("steps"), list):
        raise PlanValidationError("Plan document must contain a 'steps' list")

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise PlanValidationError(f"Plan name must be a string: {name!r}")

    steps = tuple(parse_step(entry, i) for i, entry in enumerate(data["steps"]))
    return DeploymentPlan(steps=steps, name=name)


def _fetch_plan_document(url: str) -> Dict[str, Any]:
    try:
        response = requests.get(url, timeout=HTTP_TIMEOUT)

        if response.status_code != 200:
            raise RuntimeError(
                f"Plan request failed with status {response.status_code}"
            )

        return response.json()

    # Subclass of RequestException, so it must come first
    except requests.JSONDecodeError as e:
        raise PlanValidationError(f"Plan at {url} is not valid JSON: {e}") from e
    except requests.RequestException as e:
        raise RuntimeError(f"Network error fetching plan: {e}") from e


def load_plan(source: Optional[Union[Path, str]] = None) -> DeploymentPlan:
    """
    Load a plan from a local JSON file or an http(s) URL.

    Args:
        source: File path or URL (defaults to $CONTRACT_SEQUENCER_PLAN,
                then ./deployment-plan.json)

    Returns:
        DeploymentPlan

    Raises:
        PlanNotFoundError: If a local plan file does not exist
        PlanValidationError: If the document structure is malformed
        RuntimeError: If fetching a remote plan fails
    """
    if source is not None and is_url(source):
        logger.info("Fetching plan from %s", source)
        data = _fetch_plan_document(str(source))
    else:
        plan_path = get_plan_path(source)
        if not plan_path.exists():
            raise PlanNotFoundError(f"Deployment plan not found at {plan_path}")
        logger.info("Loading plan from %s", plan_path)
        try:
            with open(plan_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise PlanValidationError(f"Plan at {plan_path} is not valid JSON: {e}") from e

    plan = parse_plan(data)
    logger.info("Loaded plan %s with %d steps", plan.name or "<unnamed>", len(plan))
    return plan

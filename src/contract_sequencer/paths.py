"""Path and environment helpers for contract-sequencer library."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import DEFAULT_PLAN_FILENAME, NETWORK_ENV, PLAN_ENV


def get_default_plan_path() -> Path:
    """
    Get default plan file path.

    Returns:
        $CONTRACT_SEQUENCER_PLAN if set, otherwise ./deployment-plan.json
    """
    env_path = os.environ.get(PLAN_ENV)
    if env_path:
        return Path(env_path).absolute()
    return Path.cwd() / DEFAULT_PLAN_FILENAME


def get_plan_path(plan_path: Optional[Union[Path, str]] = None) -> Path:
    """
    Get absolute plan file path.

    Args:
        plan_path: Custom plan file (defaults to get_default_plan_path())

    Returns:
        Absolute path to the plan file
    """
    if plan_path is None:
        return get_default_plan_path()
    return Path(plan_path).absolute()


def get_default_network() -> Optional[str]:
    """Target network from $CONTRACT_SEQUENCER_NETWORK, or None when unset."""
    return os.environ.get(NETWORK_ENV) or None


def is_url(source: Union[Path, str]) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))

"""Custom exception classes for contract-sequencer library."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import DeploymentResult


class SequencerError(Exception):
    """Base exception for sequencer errors."""

    pass


class PlanValidationError(SequencerError, ValueError):
    """Raised when a deployment plan is malformed.

    Detected before any transaction is sent.
    """

    def __init__(
        self,
        message: str,
        step_id: Optional[str] = None,
        reference: Optional[str] = None,
    ):
        super().__init__(message)
        self.step_id = step_id
        self.reference = reference


class PlanNotFoundError(SequencerError, FileNotFoundError):
    """Raised when a plan file is not found."""

    pass


class ArtifactNotFoundError(SequencerError, FileNotFoundError):
    """Raised when a compiled contract artifact is not found."""

    pass


class DeployError(SequencerError, RuntimeError):
    """Raised when a contract deployment fails.

    Deployers raise it for their own failures; the sequencer re-raises it with
    the failing step and the partial result attached.
    """

    def __init__(
        self,
        message: str,
        step_id: Optional[str] = None,
        step_index: Optional[int] = None,
        result: Optional["DeploymentResult"] = None,
    ):
        super().__init__(message)
        self.step_id = step_id
        self.step_index = step_index
        self.result = result

"""Custom exception classes for deployment-sequencer library."""

from typing import Any, Optional, Sequence


class SequencerError(Exception):
    """Base exception for sequencer-related errors."""

    pass


class EmptyPlanError(SequencerError, ValueError):
    """Raised when a deployment plan has no steps."""

    pass


class InvalidReferenceError(SequencerError, ValueError):
    """Raised when a step references itself or a later step."""

    pass


class UnresolvedReferenceError(SequencerError, LookupError):
    """Raised when a referenced step has no recorded result."""

    pass


class PlanFormatError(SequencerError, ValueError):
    """Raised when a plan file or plan dict is malformed."""

    pass


class PlanNotFoundError(SequencerError, FileNotFoundError):
    """Raised when a plan file is not found."""

    pass


class CollaboratorError(SequencerError, RuntimeError):
    """Raised by a deployer when it fails to instantiate a blueprint."""

    pass


class DeploymentError(SequencerError, RuntimeError):
    """
    Raised when a step fails and the run halts.

    Attributes:
        step_index: Position of the failed step in the plan
        blueprint: Blueprint identifier of the failed step
        cause: Exception raised by the deployer
        completed: Results of the steps that succeeded before the failure
    """

    def __init__(
        self,
        step_index: int,
        blueprint: str,
        cause: BaseException,
        completed: Optional[Sequence[Any]] = None,
        message: Optional[str] = None,
    ):
        super().__init__(message or f"Step {step_index} ({blueprint}) failed: {cause}")
        self.step_index = step_index
        self.blueprint = blueprint
        self.cause = cause
        self.completed = tuple(completed or ())


class ResultRecordingError(DeploymentError):
    """
    Raised when a step deployed but its result could not be recorded.

    The contract is live; its result is the last entry of completed.
    """

    def __init__(
        self,
        step_index: int,
        blueprint: str,
        cause: BaseException,
        completed: Optional[Sequence[Any]] = None,
    ):
        completed = tuple(completed or ())
        address = completed[-1].address if completed else None
        super().__init__(
            step_index,
            blueprint,
            cause,
            completed,
            message=(
                f"Step {step_index} ({blueprint}) deployed at {address} "
                f"but recording the result failed: {cause}"
            ),
        )


class ArtifactNotFoundError(SequencerError, FileNotFoundError):
    """Raised when no compiled artifact exists for a blueprint."""

    pass


class DefectiveArtifactError(SequencerError, ValueError):
    """Raised when an artifact file has no deployable bytecode."""

    pass


class ConstructorArityError(SequencerError, ValueError):
    """Raised when a step's argument count does not match the constructor."""

    pass


class ArgumentEncodingError(SequencerError, ValueError):
    """Raised when constructor arguments cannot be ABI-encoded."""

    pass


class NetworkNotFoundError(SequencerError, ValueError):
    """Raised when requested network is not configured."""

    pass


class RecordNotFoundError(SequencerError, FileNotFoundError):
    """Raised when a deployment record file is not found."""

    pass


class ContractNotFoundError(SequencerError, ValueError):
    """Raised when requested contract is not in a deployment record."""

    pass


class RecordFormatError(SequencerError, ValueError):
    """Raised when a deployment record file is malformed."""

    pass

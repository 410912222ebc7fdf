"""Sequential execution of deployment plans."""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .exceptions import DeploymentError, ResultRecordingError
from .plan import resolve_arguments, validate_plan
from .types import DeploymentPlan, DeploymentResult

logger = logging.getLogger(__name__)


class Deployer(Protocol):
    """External collaborator that instantiates a blueprint on-chain."""

    def deploy(self, blueprint: str, args: Sequence[Any]) -> str:
        """
        Deploy one contract and wait for it to be confirmed.

        Args:
            blueprint: Blueprint identifier (e.g., contract name)
            args: Resolved constructor arguments

        Returns:
            Address of the new contract

        Raises:
            CollaboratorError: If the deployment fails
        """
        ...


class DeploymentSequencer:
    """Runs deployment plans one step at a time."""

    def __init__(
        self,
        deployer: Deployer,
        on_result: Optional[Callable[[DeploymentResult], None]] = None,
    ):
        """
        Initialize the sequencer.

        Args:
            deployer: Collaborator used for every step
            on_result: Called after each successful step with its result
        """
        self._deployer = deployer
        self._on_result = on_result

    def run(self, plan: DeploymentPlan) -> List[DeploymentResult]:
        """
        Execute every step of a plan in order.

        Step i starts only after step i-1 has returned its address. The first
        failure halts the run; contracts already deployed stay deployed.

        Args:
            plan: Plan to execute

        Returns:
            One DeploymentResult per step, in plan order

        Raises:
            EmptyPlanError: If plan has no steps
            InvalidReferenceError: If a step references itself or a later step
            UnresolvedReferenceError: If a referenced result is missing
            DeploymentError: If the deployer fails on a step
            ResultRecordingError: If on_result fails after a step deployed
        """
        validate_plan(plan)

        results: Dict[int, DeploymentResult] = {}
        for index, step in enumerate(plan):
            args = resolve_arguments(step.args, results)

            logger.info("Deploying step %d: %s%r", index, step.blueprint, tuple(args))
            try:
                address = self._deployer.deploy(step.blueprint, args)
            except Exception as e:
                logger.error("Step %d (%s) failed: %s", index, step.blueprint, e)
                raise DeploymentError(
                    index, step.blueprint, e, completed=list(results.values())
                ) from e

            result = DeploymentResult(index=index, blueprint=step.blueprint, address=address)
            results[index] = result
            logger.info("Deployed step %d: %s at %s", index, step.blueprint, address)

            if self._on_result is not None:
                try:
                    self._on_result(result)
                except Exception as e:
                    logger.error(
                        "Step %d (%s) deployed at %s but recording failed: %s",
                        index,
                        step.blueprint,
                        address,
                        e,
                    )
                    raise ResultRecordingError(
                        index, step.blueprint, e, completed=list(results.values())
                    ) from e

        return list(results.values())


def run(plan: DeploymentPlan, deployer: Deployer) -> List[DeploymentResult]:
    """
    Execute a plan with a one-off sequencer.

    Args:
        plan: Plan to execute
        deployer: Collaborator used for every step

    Returns:
        One DeploymentResult per step, in plan order
    """
    return DeploymentSequencer(deployer).run(plan)

"""Main API for deployment-sequencer library."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from .artifacts import ArtifactStore, check_plan_against_artifacts
from .config import NetworkConfig
from .paths import get_record_path
from .plan import load_plan, validate_plan
from .records import save_deployment_record
from .sequencer import Deployer, DeploymentSequencer
from .types import DeploymentPlan, DeploymentResult

logger = logging.getLogger(__name__)


def migrate(
    plan: Union[DeploymentPlan, Path, str],
    deployer: Deployer,
    record_path: Optional[Union[Path, str]] = None,
    network: Optional[NetworkConfig] = None,
    store: Optional[ArtifactStore] = None,
) -> List[DeploymentResult]:
    """
    Validate, run and record a deployment plan.

    The record is rewritten after every successful step, so when a step
    fails the contracts deployed before it remain on record.

    Args:
        plan: Plan object or path to a JSON plan file
        deployer: Collaborator performing each deployment
        record_path: Where to save the deployment record
                     (defaults to ./.deployment-sequencer/<network>.json when
                     network is given; nothing is saved otherwise)
        network: Network the deployer targets, stored in the record
        store: Artifacts to preflight the plan against before deploying

    Returns:
        One DeploymentResult per step, in plan order

    Raises:
        PlanNotFoundError: If a plan path does not exist
        PlanFormatError: If a plan file is malformed
        EmptyPlanError: If plan has no steps
        InvalidReferenceError: If a step references itself or a later step
        ArtifactNotFoundError: If preflight finds a blueprint without artifact
        ConstructorArityError: If preflight finds a wrong argument count
        DeploymentError: If the deployer fails on a step
        ResultRecordingError: If the record cannot be written after a step deployed
    """
    if not isinstance(plan, DeploymentPlan):
        plan = load_plan(plan)

    validate_plan(plan)
    if store is not None:
        check_plan_against_artifacts(plan, store)

    if record_path is None and network is not None:
        record_path = get_record_path(network.name)

    completed: List[DeploymentResult] = []

    def persist(result: DeploymentResult) -> None:
        completed.append(result)
        save_deployment_record(completed, Path(record_path), network)

    on_result = persist if record_path is not None else None

    logger.info(
        "Migrating %d steps%s",
        len(plan),
        f" to {network.name} (chain {network.chain_id})" if network else "",
    )
    results = DeploymentSequencer(deployer, on_result=on_result).run(plan)

    if record_path is not None:
        logger.info("Deployment record saved to %s", record_path)
    return results

"""
deployment-sequencer: ordered smart contract deployment with cross-step address references
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ArtifactFormat, ArtifactStore, check_plan_against_artifacts
from .config import NetworkConfig, load_network_config
from .deployers import DryRunDeployer
from .exceptions import (
    ArgumentEncodingError,
    ArtifactNotFoundError,
    CollaboratorError,
    ConstructorArityError,
    ContractNotFoundError,
    DefectiveArtifactError,
    DeploymentError,
    EmptyPlanError,
    InvalidReferenceError,
    NetworkNotFoundError,
    PlanFormatError,
    PlanNotFoundError,
    RecordFormatError,
    RecordNotFoundError,
    ResultRecordingError,
    SequencerError,
    UnresolvedReferenceError,
)
from .migrations import migrate
from .plan import load_plan, parse_plan, validate_plan
from .records import DeploymentRecord, save_deployment_record
from .sequencer import Deployer, DeploymentSequencer, run
from .types import Blueprint, DeploymentPlan, DeploymentResult, DeploymentStep, Reference, ref

try:
    __version__ = version("deployment-sequencer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentSequencer",
    "Deployer",
    "run",
    "migrate",
    "DeploymentPlan",
    "DeploymentStep",
    "DeploymentResult",
    "Reference",
    "ref",
    "Blueprint",
    "validate_plan",
    "parse_plan",
    "load_plan",
    "ArtifactFormat",
    "ArtifactStore",
    "check_plan_against_artifacts",
    "DryRunDeployer",
    "NetworkConfig",
    "load_network_config",
    "DeploymentRecord",
    "save_deployment_record",
    "SequencerError",
    "EmptyPlanError",
    "InvalidReferenceError",
    "UnresolvedReferenceError",
    "PlanFormatError",
    "PlanNotFoundError",
    "CollaboratorError",
    "DeploymentError",
    "ArtifactNotFoundError",
    "DefectiveArtifactError",
    "ConstructorArityError",
    "ArgumentEncodingError",
    "NetworkNotFoundError",
    "RecordNotFoundError",
    "RecordFormatError",
    "ResultRecordingError",
    "ContractNotFoundError",
]

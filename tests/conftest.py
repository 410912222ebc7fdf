"""Shared pytest fixtures for deployment-sequencer tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

from deployment_sequencer import ArtifactStore, DeploymentPlan, DeploymentStep, ref
from deployment_sequencer.exceptions import CollaboratorError

TOKEN_ADDRESS = "0x" + "aa" * 20
CHEF_ADDRESS = "0x" + "cc" * 20

TOKEN_ABI: List[Dict[str, Any]] = [
    {
        "type": "function",
        "name": "totalSupply",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
]

CHEF_ABI: List[Dict[str, Any]] = [
    {
        "type": "constructor",
        "inputs": [
            {"internalType": "contract HKSToken", "name": "_hks", "type": "address"},
            {"internalType": "string", "name": "_devaddr", "type": "string"},
            {"internalType": "string", "name": "_feeAddress", "type": "string"},
            {"internalType": "uint256", "name": "_hksPerBlock", "type": "uint256"},
            {"internalType": "uint256", "name": "_startBlock", "type": "uint256"},
        ],
        "stateMutability": "nonpayable",
    },
]


class RecordingDeployer:
    """Test double that returns canned addresses and records every call."""

    def __init__(
        self,
        addresses: Optional[Sequence[str]] = None,
        fail_at: Optional[int] = None,
    ):
        self.addresses = list(addresses or [])
        self.fail_at = fail_at
        self.calls: List[tuple] = []

    def deploy(self, blueprint: str, args: Sequence[Any]) -> str:
        call_index = len(self.calls)
        self.calls.append((blueprint, list(args)))
        if call_index == self.fail_at:
            raise CollaboratorError(f"transaction reverted deploying {blueprint}")
        if call_index < len(self.addresses):
            return self.addresses[call_index]
        return "0x" + f"{call_index + 1:040x}"


def write_artifact(path: Path, data: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path


@pytest.fixture
def make_deployer():
    """Factory for RecordingDeployer instances with custom addresses or failures."""
    return RecordingDeployer


@pytest.fixture
def recording_deployer() -> RecordingDeployer:
    """Deployer returning the token and chef addresses in order."""
    return RecordingDeployer([TOKEN_ADDRESS, CHEF_ADDRESS])


@pytest.fixture
def masterchef_plan() -> DeploymentPlan:
    """Token deployment followed by a MasterChef taking the token address."""
    return DeploymentPlan(
        [
            DeploymentStep("HKSToken"),
            DeploymentStep("MasterChef", (ref(0), "", "", 0, 0)),
        ]
    )


@pytest.fixture
def truffle_build_dir(tmp_path: Path) -> Path:
    """Create a truffle build/contracts directory with sample artifacts."""
    build_dir = tmp_path / "build" / "contracts"
    write_artifact(
        build_dir / "HKSToken.json",
        {
            "contractName": "HKSToken",
            "abi": TOKEN_ABI,
            "bytecode": "0x6080604052",
            "deployedBytecode": "0x6080",
            "networks": {},
        },
    )
    write_artifact(
        build_dir / "MasterChef.json",
        {
            "contractName": "MasterChef",
            "abi": CHEF_ABI,
            "bytecode": "0x60806040",
            "deployedBytecode": "0x6080",
            "networks": {},
        },
    )
    write_artifact(
        build_dir / "IHKSToken.json",
        {
            "contractName": "IHKSToken",
            "abi": TOKEN_ABI,
            "bytecode": "0x",
            "deployedBytecode": "0x",
            "networks": {},
        },
    )
    return build_dir


@pytest.fixture
def artifact_store(truffle_build_dir: Path) -> ArtifactStore:
    """ArtifactStore over the sample truffle build directory."""
    return ArtifactStore(truffle_build_dir)


@pytest.fixture
def plan_file(tmp_path: Path) -> Path:
    """Write the MasterChef migration as a JSON plan file."""
    plan_path = tmp_path / "plan.json"
    with open(plan_path, "w") as f:
        json.dump(
            {
                "steps": [
                    {"blueprint": "HKSToken", "label": "token"},
                    {"blueprint": "MasterChef", "args": [{"ref": "token"}, "", "", 0, 0]},
                ]
            },
            f,
            indent=2,
        )
    return plan_path

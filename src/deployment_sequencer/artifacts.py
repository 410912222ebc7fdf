"""Compiled artifact loading for deployment-sequencer library."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .encoding import constructor_inputs
from .exceptions import ArtifactNotFoundError, ConstructorArityError, DefectiveArtifactError
from .types import Blueprint, DeploymentPlan


class ArtifactFormat(Enum):
    """
    Compiled artifact file format types.

    Value strings appear as source_format on loaded blueprints:
    - TRUFFLE: build/contracts/<Name>.json written by truffle compile
    - HARDHAT: artifacts/**/<Name>.json written by hardhat compile
    - FOUNDRY: out/<File>.sol/<Name>.json written by forge build
    """

    TRUFFLE = "truffle"
    HARDHAT = "hardhat"
    FOUNDRY = "foundry"


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect which toolchain wrote an artifact.

    Args:
        data: Decoded artifact JSON

    Returns:
        ArtifactFormat.HARDHAT if a hh-sol-artifact "_format" marker is present
        ArtifactFormat.FOUNDRY if "bytecode" is an object with an "object" key
        ArtifactFormat.TRUFFLE if "contractName" and a string "bytecode" are present
        None if the file is not a recognised artifact
    """
    if str(data.get("_format", "")).startswith("hh-sol-artifact"):
        return ArtifactFormat.HARDHAT

    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict) and "object" in bytecode:
        return ArtifactFormat.FOUNDRY

    if "contractName" in data and isinstance(bytecode, str):
        return ArtifactFormat.TRUFFLE

    return None


def parse_artifact(file_path: Path) -> Blueprint:
    """
    Parse a compiled artifact file.

    Args:
        file_path: Path to artifact JSON file

    Returns:
        Blueprint with 0x-prefixed creation bytecode

    Raises:
        DefectiveArtifactError: If the file is not an artifact, has no bytecode
            (interfaces, abstract contracts) or has unlinked library references
    """
    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DefectiveArtifactError(f"Artifact file is not valid JSON: {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise DefectiveArtifactError(f"Unrecognised artifact format: {file_path}")

    artifact_format = detect_artifact_format(data)

    match artifact_format:
        case ArtifactFormat.FOUNDRY:
            bytecode = data["bytecode"].get("object")
        case ArtifactFormat.HARDHAT | ArtifactFormat.TRUFFLE:
            bytecode = data.get("bytecode")
        case _:
            raise DefectiveArtifactError(f"Unrecognised artifact format: {file_path}")

    if not isinstance(bytecode, str):
        bytecode = ""
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    if bytecode == "0x":
        raise DefectiveArtifactError(
            f"Artifact has no creation bytecode (interface or abstract contract?): {file_path}"
        )

    # Placeholders look like __$<hash>$__ (solc >= 0.5) or __LibName____ (older)
    if "__" in bytecode:
        raise DefectiveArtifactError(f"Artifact has unlinked library references: {file_path}")

    return Blueprint(
        name=data.get("contractName") or file_path.stem,
        abi=data.get("abi", []),
        bytecode=bytecode,
        source_format=artifact_format.value,
    )


class ArtifactStore:
    """Looks up compiled blueprints by contract name under a build directory."""

    def __init__(self, root: Union[Path, str]):
        """
        Initialize the store.

        Args:
            root: Directory searched recursively for <Name>.json artifacts
                  (e.g., build/contracts, artifacts/ or out/)

        Raises:
            ArtifactNotFoundError: If root does not exist
        """
        self._root = Path(root).absolute()
        if not self._root.is_dir():
            raise ArtifactNotFoundError(f"Artifact directory not found at {self._root}")

        self._index: Optional[Dict[str, Path]] = None
        self._loaded: Dict[str, Blueprint] = {}

    @property
    def root(self) -> Path:
        return self._root

    def _paths(self) -> Dict[str, Path]:
        if self._index is None:
            index: Dict[str, Path] = {}
            for path in sorted(self._root.rglob("*.json")):
                # Skip hardhat debug files and build-info dumps
                if path.name.endswith(".dbg.json") or "build-info" in path.parts:
                    continue
                index.setdefault(path.stem, path)
            self._index = index
        return self._index

    def has(self, name: str) -> bool:
        """Check if an artifact exists for a contract name."""
        return name in self._paths()

    def get(self, name: str) -> Blueprint:
        """
        Load the blueprint for a contract name.

        Args:
            name: Contract name (artifact file stem)

        Returns:
            Blueprint

        Raises:
            ArtifactNotFoundError: If no artifact file matches the name
            DefectiveArtifactError: If the artifact cannot be deployed
        """
        if name not in self._loaded:
            paths = self._paths()
            if name not in paths:
                raise ArtifactNotFoundError(
                    f"No artifact for '{name}' under {self._root}"
                )
            self._loaded[name] = parse_artifact(paths[name])
        return self._loaded[name]


def check_plan_against_artifacts(plan: DeploymentPlan, store: ArtifactStore) -> None:
    """
    Preflight a plan before anything is deployed.

    Every blueprint must load and every step must pass as many arguments
    as its constructor declares.

    Args:
        plan: Plan to check
        store: Artifacts to check against

    Raises:
        ArtifactNotFoundError: If a blueprint has no artifact
        DefectiveArtifactError: If an artifact cannot be deployed
        ConstructorArityError: If a step's argument count is wrong
    """
    for index, step in enumerate(plan):
        blueprint = store.get(step.blueprint)
        expected = len(constructor_inputs(blueprint.abi))
        if len(step.args) != expected:
            raise ConstructorArityError(
                f"Step {index} ({step.blueprint}) passes {len(step.args)} arguments, "
                f"constructor takes {expected}"
            )

"""Unit tests for compiled artifact loading."""

import json
from pathlib import Path

import pytest

from deployment_sequencer import (
    ArtifactFormat,
    ArtifactNotFoundError,
    ArtifactStore,
    ConstructorArityError,
    DefectiveArtifactError,
    DeploymentPlan,
    DeploymentStep,
    check_plan_against_artifacts,
    ref,
)
from deployment_sequencer.artifacts import detect_artifact_format, parse_artifact


class TestDetectArtifactFormat:
    """Test the detect_artifact_format function."""

    def test_detects_truffle(self):
        """Test truffle build/contracts artifacts."""
        data = {"contractName": "A", "abi": [], "bytecode": "0x60", "networks": {}}
        assert detect_artifact_format(data) == ArtifactFormat.TRUFFLE

    def test_detects_hardhat(self):
        """Test hardhat artifacts by their _format marker."""
        data = {"_format": "hh-sol-artifact-1", "contractName": "A", "abi": [], "bytecode": "0x60"}
        assert detect_artifact_format(data) == ArtifactFormat.HARDHAT

    def test_detects_foundry(self):
        """Test foundry artifacts by their bytecode object."""
        data = {"abi": [], "bytecode": {"object": "0x60", "linkReferences": {}}}
        assert detect_artifact_format(data) == ArtifactFormat.FOUNDRY

    def test_returns_none_for_unknown_json(self):
        """Test that arbitrary JSON is not an artifact."""
        assert detect_artifact_format({"solcVersion": "0.8.20"}) is None


class TestParseArtifact:
    """Test the parse_artifact function."""

    def test_parses_truffle_artifact(self, truffle_build_dir: Path):
        """Test loading a truffle artifact."""
        blueprint = parse_artifact(truffle_build_dir / "MasterChef.json")

        assert blueprint.name == "MasterChef"
        assert blueprint.bytecode == "0x60806040"
        assert blueprint.source_format == "truffle"
        assert blueprint.abi[0]["type"] == "constructor"

    def test_parses_foundry_artifact_and_prefixes_bytecode(self, tmp_path: Path):
        """Test foundry artifacts, whose bytecode may lack 0x."""
        path = tmp_path / "out" / "Token.sol" / "Token.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"abi": [], "bytecode": {"object": "6080"}}))

        blueprint = parse_artifact(path)

        assert blueprint.name == "Token"
        assert blueprint.bytecode == "0x6080"
        assert blueprint.source_format == "foundry"

    def test_parses_hardhat_artifact(self, tmp_path: Path):
        """Test hardhat artifacts."""
        path = tmp_path / "Token.json"
        path.write_text(
            json.dumps(
                {
                    "_format": "hh-sol-artifact-1",
                    "contractName": "Token",
                    "sourceName": "contracts/Token.sol",
                    "abi": [],
                    "bytecode": "0x6080",
                }
            )
        )
        assert parse_artifact(path).source_format == "hardhat"

    def test_interface_raises_defective(self, truffle_build_dir: Path):
        """Test that an artifact with empty bytecode cannot be deployed."""
        with pytest.raises(DefectiveArtifactError):
            parse_artifact(truffle_build_dir / "IHKSToken.json")

    def test_unlinked_library_raises_defective(self, tmp_path: Path):
        """Test that library placeholders are rejected."""
        path = tmp_path / "Pool.json"
        path.write_text(
            json.dumps({"contractName": "Pool", "abi": [], "bytecode": "0x6080__$1234abcd$__6040"})
        )
        with pytest.raises(DefectiveArtifactError, match="unlinked"):
            parse_artifact(path)

    def test_hardhat_without_bytecode_raises_defective(self, tmp_path: Path):
        """Test that a hardhat artifact missing its bytecode key is rejected."""
        path = tmp_path / "Foo.json"
        path.write_text(json.dumps({"_format": "hh-sol-artifact-1", "contractName": "Foo", "abi": []}))

        with pytest.raises(DefectiveArtifactError, match="no creation bytecode"):
            parse_artifact(path)

    def test_foundry_without_object_raises_defective(self, tmp_path: Path):
        """Test that a foundry bytecode object without hex is rejected."""
        path = tmp_path / "Foo.json"
        path.write_text(json.dumps({"abi": [], "bytecode": {"object": None}}))

        with pytest.raises(DefectiveArtifactError):
            parse_artifact(path)

    def test_corrupted_json_raises_defective(self, tmp_path: Path):
        """Test that an artifact file that is not JSON is rejected."""
        path = tmp_path / "Foo.json"
        path.write_text("{not json")

        with pytest.raises(DefectiveArtifactError, match="not valid JSON"):
            parse_artifact(path)

    def test_non_object_json_raises_defective(self, tmp_path: Path):
        """Test that a JSON list is not an artifact."""
        path = tmp_path / "Foo.json"
        path.write_text("[]")

        with pytest.raises(DefectiveArtifactError):
            parse_artifact(path)

    def test_unknown_format_raises_defective(self, tmp_path: Path):
        """Test that non-artifact JSON is rejected."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"networks": {}}))
        with pytest.raises(DefectiveArtifactError):
            parse_artifact(path)


class TestArtifactStore:
    """Test ArtifactStore lookups."""

    def test_get_returns_blueprint(self, artifact_store: ArtifactStore):
        """Test loading a blueprint by name."""
        assert artifact_store.get("HKSToken").name == "HKSToken"

    def test_get_caches_blueprints(self, artifact_store: ArtifactStore):
        """Test that repeated lookups return the same object."""
        assert artifact_store.get("HKSToken") is artifact_store.get("HKSToken")

    def test_has(self, artifact_store: ArtifactStore):
        """Test has() for present and absent names."""
        assert artifact_store.has("MasterChef")
        assert not artifact_store.has("Nonexistent")

    def test_missing_artifact_raises(self, artifact_store: ArtifactStore):
        """Test that unknown names raise ArtifactNotFoundError."""
        with pytest.raises(ArtifactNotFoundError):
            artifact_store.get("Nonexistent")

    def test_missing_artifact_catchable_as_file_not_found(self, artifact_store: ArtifactStore):
        """Test that ArtifactNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            artifact_store.get("Nonexistent")

    def test_missing_root_raises(self, tmp_path: Path):
        """Test that a missing build directory is reported."""
        with pytest.raises(ArtifactNotFoundError):
            ArtifactStore(tmp_path / "build")

    def test_searches_nested_directories(self, tmp_path: Path):
        """Test that foundry-style out/<File>.sol/<Name>.json is found."""
        path = tmp_path / "out" / "Token.sol" / "Token.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"abi": [], "bytecode": {"object": "0x6080"}}))

        store = ArtifactStore(tmp_path / "out")

        assert store.get("Token").bytecode == "0x6080"

    def test_skips_hardhat_debug_files(self, tmp_path: Path):
        """Test that <Name>.dbg.json files are not mistaken for artifacts."""
        (tmp_path / "Token.dbg.json").write_text(json.dumps({"buildInfo": "x"}))

        store = ArtifactStore(tmp_path)

        assert not store.has("Token.dbg")
        assert not store.has("Token")


class TestCheckPlanAgainstArtifacts:
    """Test preflight checks of plans against artifacts."""

    def test_accepts_matching_plan(self, artifact_store, masterchef_plan):
        """Test that the MasterChef migration passes preflight."""
        check_plan_against_artifacts(masterchef_plan, artifact_store)

    def test_rejects_wrong_argument_count(self, artifact_store):
        """Test that a missing constructor argument is caught."""
        plan = DeploymentPlan([DeploymentStep("HKSToken"), DeploymentStep("MasterChef", (ref(0), "", ""))])

        with pytest.raises(ConstructorArityError, match="Step 1"):
            check_plan_against_artifacts(plan, artifact_store)

    def test_rejects_arguments_without_constructor(self, artifact_store):
        """Test that arguments to a constructor-less contract are caught."""
        plan = DeploymentPlan([DeploymentStep("HKSToken", ("unexpected",))])

        with pytest.raises(ConstructorArityError):
            check_plan_against_artifacts(plan, artifact_store)

    def test_rejects_unknown_blueprint(self, artifact_store):
        """Test that a blueprint without artifact is caught."""
        with pytest.raises(ArtifactNotFoundError):
            check_plan_against_artifacts(DeploymentPlan([DeploymentStep("Nope")]), artifact_store)

    def test_rejects_corrupted_artifact(self, truffle_build_dir: Path):
        """Test that a corrupted artifact fails preflight as DefectiveArtifactError."""
        (truffle_build_dir / "Broken.json").write_text("{not json")
        store = ArtifactStore(truffle_build_dir)

        with pytest.raises(DefectiveArtifactError):
            check_plan_against_artifacts(DeploymentPlan([DeploymentStep("Broken")]), store)

    def test_rejects_interface_blueprint(self, artifact_store):
        """Test that an undeployable blueprint is caught."""
        with pytest.raises(DefectiveArtifactError):
            check_plan_against_artifacts(DeploymentPlan([DeploymentStep("IHKSToken")]), artifact_store)

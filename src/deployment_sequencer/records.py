"""Deployment record persistence for deployment-sequencer library."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .config import NetworkConfig
from .exceptions import ContractNotFoundError, RecordFormatError, RecordNotFoundError
from .types import DeploymentResult


def save_deployment_record(
    results: Sequence[DeploymentResult],
    record_path: Path,
    network: Optional[NetworkConfig] = None,
) -> None:
    """
    Save deployed addresses to disk.

    Only what later plans need to reference is kept: step index,
    blueprint and address.

    Args:
        results: Results of a (possibly partial) run, in plan order
        record_path: Path to record JSON file
        network: Network the results were deployed to

    Creates parent directories if they don't exist.
    """
    record: Dict[str, Any] = {
        "network": network.name if network else None,
        "chain_id": network.chain_id if network else None,
        "deployed_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
        "contracts": [
            {"index": r.index, "blueprint": r.blueprint, "address": r.address}
            for r in results
        ],
    }

    record_path.parent.mkdir(parents=True, exist_ok=True)
    with open(record_path, "w") as f:
        json.dump(record, f, indent=2)


class DeploymentRecord:
    """Read access to a saved deployment record."""

    def __init__(self, record_path: Union[Path, str]):
        """
        Load a deployment record.

        Args:
            record_path: Path to record JSON file

        Raises:
            RecordNotFoundError: If record file not found
            RecordFormatError: If record file is not valid JSON
        """
        record_path = Path(record_path)
        if not record_path.exists():
            raise RecordNotFoundError(f"Deployment record not found at {record_path}")

        try:
            with open(record_path) as f:
                self._record = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordFormatError(
                f"Deployment record {record_path} is not valid JSON: {e}"
            ) from e

        if not isinstance(self._record, dict):
            raise RecordFormatError(f"Deployment record {record_path} is not an object")

    def results(self) -> List[DeploymentResult]:
        """
        Get all recorded results in plan order.

        Returns:
            List of DeploymentResult objects
        """
        return [
            DeploymentResult(
                index=entry["index"],
                blueprint=entry["blueprint"],
                address=entry["address"],
            )
            for entry in sorted(self._record.get("contracts", []), key=lambda e: e["index"])
        ]

    def address(self, contract: Union[str, int]) -> str:
        """
        Get the address of a recorded deployment.

        Args:
            contract: Blueprint name (latest step deploying it wins) or step index

        Returns:
            Contract address

        Raises:
            ContractNotFoundError: If no recorded step matches
        """
        matches = [
            r
            for r in self.results()
            if (r.index == contract if isinstance(contract, int) else r.blueprint == contract)
        ]
        if not matches:
            raise ContractNotFoundError(f"Contract '{contract}' not found in deployment record")
        return matches[-1].address

    def has_contract(self, blueprint: str) -> bool:
        """
        Check if a blueprint was deployed.

        Args:
            blueprint: Blueprint name

        Returns:
            True if at least one recorded step deployed it
        """
        return any(r.blueprint == blueprint for r in self.results())

    def metadata(self) -> Dict[str, Any]:
        """
        Get record metadata (network, chain ID, deployment time).

        Returns:
            Metadata dictionary
        """
        return {
            "network": self._record.get("network"),
            "chain_id": self._record.get("chain_id"),
            "deployed_at": self._record.get("deployed_at"),
        }

"""Offline deployer used to rehearse plans."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import rlp
from eth_utils import keccak, to_canonical_address, to_checksum_address

from .artifacts import ArtifactStore
from .config import NetworkConfig
from .encoding import deployment_data
from .exceptions import CollaboratorError, SequencerError

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x" + "00" * 20


def create_address(sender: str, nonce: int) -> str:
    """
    Compute the address of a contract created with CREATE.

    Args:
        sender: Account sending the creation transaction
        nonce: Sender's transaction count at that point

    Returns:
        Checksummed contract address: keccak256(rlp([sender, nonce]))[12:]
    """
    return to_checksum_address(keccak(rlp.encode([to_canonical_address(sender), nonce]))[12:])


class DryRunDeployer:
    """
    Deployer that never touches a network.

    Each call loads the blueprint and builds the full creation data, so
    missing artifacts and arguments that do not encode fail here the same
    way they would fail against a node. Addresses are the ones CREATE would
    give the configured account starting from nonce 0 (or start_nonce).
    """

    def __init__(
        self,
        store: ArtifactStore,
        config: Optional[NetworkConfig] = None,
        start_nonce: int = 0,
    ):
        """
        Initialize the deployer.

        Args:
            store: Artifacts to load blueprints from
            config: Network and sending account (zero address when unset)
            start_nonce: Sender's current transaction count

        Raises:
            ValueError: If the configured account is not a valid address
        """
        self._store = store
        account = config.account if config and config.account else ZERO_ADDRESS
        self._sender = to_checksum_address(account)
        self._nonce = start_nonce
        self.deployments: List[Dict[str, Any]] = []

    def deploy(self, blueprint: str, args: Sequence[Any]) -> str:
        try:
            data = deployment_data(self._store.get(blueprint), args)
        except SequencerError as e:
            raise CollaboratorError(f"Cannot deploy {blueprint}: {e}") from e

        address = create_address(self._sender, self._nonce)
        self._nonce += 1
        self.deployments.append(
            {"blueprint": blueprint, "args": list(args), "data": data, "address": address}
        )
        logger.debug("Dry run: %s would be deployed at %s", blueprint, address)
        return address

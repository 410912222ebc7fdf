"""Network configuration for deployment-sequencer library."""

import os
from dataclasses import dataclass
from typing import Optional

from .constants import DEPLOYER_ACCOUNT_ENV, NETWORK_CONFIG
from .exceptions import NetworkNotFoundError


@dataclass(frozen=True)
class NetworkConfig:
    """Network and account a deployer targets."""

    name: str  # e.g., "sepolia"
    chain_id: int
    chain_name: str
    account: Optional[str] = None  # Sending account; deployer default when None


def load_network_config(network: str, account: Optional[str] = None) -> NetworkConfig:
    """
    Build the configuration for a known network.

    Args:
        network: Network name ("development", "sepolia" or "mainnet")
        account: Deployer account (defaults to $DEPLOYER_ACCOUNT)

    Returns:
        NetworkConfig

    Raises:
        NetworkNotFoundError: If network is not configured
    """
    if network not in NETWORK_CONFIG:
        raise NetworkNotFoundError(
            f"Network '{network}' is not configured; "
            f"known networks: {', '.join(sorted(NETWORK_CONFIG))}"
        )

    if account is None:
        account = os.environ.get(DEPLOYER_ACCOUNT_ENV)

    network_config = NETWORK_CONFIG[network]
    return NetworkConfig(
        name=network,
        chain_id=network_config["chain_id"],
        chain_name=network_config["chain_name"],
        account=account,
    )

"""Configuration constants for deployment-sequencer library."""

# Environment variable consulted when no deployer account is passed explicitly
DEPLOYER_ACCOUNT_ENV = "DEPLOYER_ACCOUNT"

# Network configuration based on ethereum-lists/chains
NETWORK_CONFIG = {
    "development": {
        "chain_id": 1337,
        "chain_name": "Ganache",
    },
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
    },
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
    },
}

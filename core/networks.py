"""
Registry of the EVM networks the dashboard tracks.

Chain ids come from the webhook payloads, network names are what the rest
of the service stores and filters on.
"""

NETWORK_CONFIG = {
    "ethereum": {"chain_id": 1, "name": "Ethereum", "explorer": "https://etherscan.io/tx/"},
    "sepolia": {"chain_id": 11155111, "name": "Sepolia", "explorer": "https://sepolia.etherscan.io/tx/"},
    "base": {"chain_id": 8453, "name": "Base", "explorer": "https://basescan.org/tx/"},
    "base-sepolia": {"chain_id": 84532, "name": "Base Sepolia", "explorer": "https://sepolia.basescan.org/tx/"},
    "arbitrum": {"chain_id": 42161, "name": "Arbitrum", "explorer": "https://arbiscan.io/tx/"},
    "arbitrum-sepolia": {"chain_id": 421614, "name": "Arbitrum Sepolia", "explorer": "https://sepolia.arbiscan.io/tx/"},
    "lisk": {"chain_id": 1135, "name": "Lisk", "explorer": "https://blockscout.lisk.com/tx/"},
    "bsc": {"chain_id": 56, "name": "BSC", "explorer": "https://bscscan.com/tx/"},
}

SUPPORTED_NETWORKS = list(NETWORK_CONFIG)


class UnsupportedNetworkError(ValueError):
    pass


def get_chain_id(network: str) -> int:
    config = NETWORK_CONFIG.get(network)
    if not config:
        raise UnsupportedNetworkError(f"Unsupported network: {network}")
    return config["chain_id"]


def get_network_from_chain_id(chain_id: int) -> str:
    for network, config in NETWORK_CONFIG.items():
        if config["chain_id"] == chain_id:
            return network
    raise UnsupportedNetworkError(f"Unknown chain ID: {chain_id}")


def is_supported_network(network: str) -> bool:
    return network in NETWORK_CONFIG


def get_network_name(network: str) -> str:
    config = NETWORK_CONFIG.get(network.lower())
    return config["name"] if config else network


def get_block_explorer_url(network: str, tx_hash: str) -> str:
    config = NETWORK_CONFIG.get(network.lower(), NETWORK_CONFIG["ethereum"])
    return f"{config['explorer']}{tx_hash}"

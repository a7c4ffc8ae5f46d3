"""
Network configuration for contract deployment.

Contains RPC URLs and block explorer endpoints for the supported chains.
The active chain comes from the CHAIN environment variable (default: base).
"""

import os
from typing import Any


DEFAULT_CHAIN = "base"

# =============================================================================
# CHAIN CONFIGURATIONS
# =============================================================================

CHAINS: dict[str, dict[str, Any]] = {
    "base": {
        "chain_id": 8453,
        "name": "Base",
        "currency": "ETH",
        "poa": False,
        "block_time": 2,
        "rpc_urls": [
            "https://mainnet.base.org",
            "https://base.publicnode.com",
            "https://rpc.ankr.com/base",
        ],
        "explorer": {
            "name": "BaseScan",
            "url": "https://basescan.org",
            "api_url": "https://api.basescan.org/api",
        },
    },
    "base_sepolia": {
        "chain_id": 84532,
        "name": "Base Sepolia",
        "currency": "ETH",
        "poa": False,
        "block_time": 2,
        "rpc_urls": [
            "https://sepolia.base.org",
            "https://base-sepolia.publicnode.com",
        ],
        "explorer": {
            "name": "BaseScan Sepolia",
            "url": "https://sepolia.basescan.org",
            "api_url": "https://api-sepolia.basescan.org/api",
        },
    },
    "gnosis": {
        "chain_id": 100,
        "name": "Gnosis Chain",
        "currency": "xDAI",
        "poa": True,
        "block_time": 5,
        "rpc_urls": [
            "https://rpc.gnosischain.com",
            "https://gnosis-mainnet.public.blastapi.io",
        ],
        "explorer": {
            "name": "Gnosisscan",
            "url": "https://gnosisscan.io",
            "api_url": "https://api.gnosisscan.io/api",
        },
    },
    "chiado": {
        "chain_id": 10200,
        "name": "Chiado Testnet",
        "currency": "xDAI",
        "poa": True,
        "block_time": 5,
        "rpc_urls": [
            "https://rpc.chiadochain.net",
        ],
        "explorer": {
            "name": "Chiado Explorer",
            "url": "https://gnosis-chiado.blockscout.com",
            "api_url": "https://gnosis-chiado.blockscout.com/api",
        },
    },
}

# Chain ID to name mapping
CHAIN_ID_TO_NAME: dict[int, str] = {
    config["chain_id"]: name for name, config in CHAINS.items()
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_chain_config(chain: str | int | None = None) -> dict[str, Any]:
    """Get configuration for a specific chain.

    Args:
        chain: Chain name (e.g., 'base', 'gnosis') or chain ID.
               If None, uses CHAIN environment variable or defaults to 'base'.

    Returns:
        Chain configuration dictionary.

    Raises:
        ValueError: If chain is not supported.
    """
    if chain is None:
        chain = os.getenv("CHAIN") or DEFAULT_CHAIN

    if isinstance(chain, int):
        name = CHAIN_ID_TO_NAME.get(chain)
        if name is None:
            raise ValueError(f"Unsupported chain ID: {chain}")
        chain = name

    chain = chain.lower()
    if chain not in CHAINS:
        raise ValueError(f"Unsupported chain: {chain}. Supported: {list(CHAINS.keys())}")

    return CHAINS[chain]


def get_rpc_url(chain: str | int | None = None) -> str:
    """Get the primary RPC URL for a chain.

    Uses RPC_URL environment variable if set, otherwise returns first default.
    """
    env_rpc = os.getenv("RPC_URL")
    if env_rpc:
        return env_rpc

    config = get_chain_config(chain)
    return config["rpc_urls"][0]


def get_chain_id(chain: str | None = None) -> int:
    """Get the chain ID for a chain name."""
    config = get_chain_config(chain)
    return config["chain_id"]


def get_explorer_url(chain: str | int | None = None) -> str:
    """Get the block explorer URL for a chain."""
    config = get_chain_config(chain)
    return config["explorer"]["url"]


def get_explorer_api_url(chain: str | int | None = None) -> str:
    """Get the block explorer API URL for a chain."""
    config = get_chain_config(chain)
    return config["explorer"]["api_url"]


def explorer_address_url(address: str, explorer_url: str) -> str:
    """Public explorer page for ``address``, e.g. https://basescan.org/address/0x..."""
    return f"{explorer_url.rstrip('/')}/address/{address}"

"""
Web3 setup helper - builds the async web3 instance used for deployment.

Public API
----------
get_async_web3(rpc_url=None, poa=False)
    Return an AsyncWeb3 instance connected to the specified RPC URL.
    Falls back to the RPC_URL environment variable.
"""
from __future__ import annotations

import os

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import ExtraDataToPOAMiddleware

__all__ = ["get_async_web3"]


def get_async_web3(rpc_url: str | None = None, poa: bool = False) -> AsyncWeb3:
    """
    Get an AsyncWeb3 instance connected to the specified RPC URL.

    Args:
        rpc_url: Optional RPC URL. If not provided, uses the RPC_URL env var.
        poa: Inject the extra-data middleware needed by proof-of-authority chains.

    Returns:
        AsyncWeb3 instance

    Raises:
        RuntimeError: If no RPC URL is available
    """
    if rpc_url is None:
        rpc_url = os.getenv("RPC_URL")

    if rpc_url is None:
        raise RuntimeError("No RPC URL available. Set RPC_URL environment variable.")

    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    if poa:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3

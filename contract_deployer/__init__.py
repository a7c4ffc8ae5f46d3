"""
Deploy a single compiled contract, wait for confirmations, then verify its
source on an Etherscan-compatible block explorer.
"""

__version__ = "0.1.0"

"""
Configuration package for the contract deployer.
"""

from contract_deployer.config.network import (
    CHAINS,
    DEFAULT_CHAIN,
    get_chain_config,
    get_chain_id,
    get_rpc_url,
    get_explorer_url,
    get_explorer_api_url,
    explorer_address_url,
)

from contract_deployer.config.settings import (
    DEFAULT_CONFIRMATIONS,
    DEFAULT_CONTRACT_NAME,
    DeploySettings,
)

from contract_deployer.config.logging_config import (
    setup_logger,
    get_deployer_logger,
)

__all__ = [
    # Network
    'CHAINS',
    'DEFAULT_CHAIN',
    'get_chain_config',
    'get_chain_id',
    'get_rpc_url',
    'get_explorer_url',
    'get_explorer_api_url',
    'explorer_address_url',

    # Settings
    'DEFAULT_CONFIRMATIONS',
    'DEFAULT_CONTRACT_NAME',
    'DeploySettings',

    # Logging
    'setup_logger',
    'get_deployer_logger',
]

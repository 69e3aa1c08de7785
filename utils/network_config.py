"""
Network Configuration
Compiler version, network endpoints and credential injection from .env
"""

import os
import re
import json
from pathlib import Path
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_FILE = Path('config') / 'network_config.json'
DEFAULT_CONFIG_PATH = PROJECT_ROOT / CONFIG_FILE

_PRIVATE_KEY_RE = re.compile(r'^[0-9a-fA-F]{64}$')


class ConfigError(ValueError):
    """Invalid or incomplete deployment configuration"""


class NetworkConnectionError(ConnectionError):
    """Configured endpoint is unreachable"""


class ChainIdMismatchError(ConnectionError):
    """Node reports a different chain id than the one configured"""


def normalize_private_key(raw: str, env_name: str) -> str:
    """
    Normalize a hex private key to 0x-prefixed lowercase form

    Args:
        raw: Key as read from the environment
        env_name: Variable name, used in error messages

    Returns:
        0x-prefixed key
    """
    value = raw.strip()
    if value[:2].lower() == '0x':
        value = value[2:]

    if not _PRIVATE_KEY_RE.match(value):
        raise ConfigError(f"{env_name} is not a 32-byte hex private key")

    return '0x' + value.lower()


class NetworkConfig:
    """
    A single resolved network: endpoint, chain id and signing keys
    """

    def __init__(self, name: str, url: str, chain_id: int, accounts: Optional[List[str]] = None):
        self.name = name
        self.url = url
        self.chain_id = chain_id
        self.accounts = accounts or []

    @property
    def has_local_accounts(self) -> bool:
        return bool(self.accounts)

    def connect(self, request_timeout: int = 30) -> Web3:
        """
        Connect to the network endpoint and check its chain id

        Returns:
            Connected Web3 instance
        """
        w3 = Web3(Web3.HTTPProvider(self.url, request_kwargs={'timeout': request_timeout}))

        if not w3.is_connected():
            raise NetworkConnectionError(f"Failed to connect to {self.name} at {self.url}")

        node_chain_id = w3.eth.chain_id
        if node_chain_id != self.chain_id:
            raise ChainIdMismatchError(
                f"Network {self.name} is configured with chain id {self.chain_id}, "
                f"but the node at {self.url} reports {node_chain_id}"
            )

        logger.info(f"Connected to {self.name} (chain id {self.chain_id})")
        return w3

    def __repr__(self):
        # keys stay out of reprs and logs
        return (
            f"NetworkConfig(name={self.name!r}, url={self.url!r}, "
            f"chain_id={self.chain_id}, accounts={len(self.accounts)})"
        )


class ProjectConfig:
    """
    Whole build/deploy configuration as read from config/network_config.json
    """

    def __init__(self, data: Dict, root: Path = PROJECT_ROOT):
        if 'networks' not in data or not isinstance(data['networks'], dict):
            raise ConfigError("Configuration must define a 'networks' mapping")

        self.solidity = data.get('solidity')
        self.default_network = data.get('default_network', 'hardhat')
        self.networks = data['networks']

        paths = data.get('paths', {})
        self.root = Path(root)
        self.sources_path = self.root / paths.get('sources', 'contracts')
        self.artifacts_path = self.root / paths.get('artifacts', 'artifacts')

    @property
    def network_names(self) -> List[str]:
        return list(self.networks.keys())

    def get_network(self, name: Optional[str] = None) -> NetworkConfig:
        """
        Resolve a network by name, reading its credentials from the environment

        Args:
            name: Network name (None = default network)

        Returns:
            NetworkConfig
        """
        network_name = name if name else self.default_network

        if network_name not in self.networks:
            raise ConfigError(
                f"Unknown network '{network_name}'. "
                f"Available: {', '.join(self.network_names)}"
            )

        network_data = self.networks[network_name]

        url = network_data.get('url')
        url_env = network_data.get('url_env')
        if url_env and os.getenv(url_env):
            url = os.getenv(url_env)

        if not url:
            raise ConfigError(f"Network '{network_name}' has no url")

        if 'chain_id' not in network_data:
            raise ConfigError(f"Network '{network_name}' has no chain_id")

        try:
            chain_id = int(network_data['chain_id'])
        except (TypeError, ValueError):
            raise ConfigError(f"Network '{network_name}' has an invalid chain_id")

        accounts = []
        for env_name in network_data.get('accounts_env', []):
            raw = os.getenv(env_name)
            if not raw:
                raise ConfigError(f"{env_name} must be set in the environment or .env")
            accounts.append(normalize_private_key(raw, env_name))

        return NetworkConfig(network_name, url, chain_id, accounts)


def default_config_path() -> Path:
    """config/network_config.json under the working directory, else the checkout's"""
    local = Path.cwd() / CONFIG_FILE
    return local if local.is_file() else DEFAULT_CONFIG_PATH


def load_config(path=None) -> ProjectConfig:
    """
    Load the deployment configuration file

    Args:
        path: Config file path (None = config/network_config.json)

    Returns:
        ProjectConfig
    """
    config_path = Path(path) if path else default_config_path()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}")

    # paths in the file are relative to the project root, one level above config/
    root = config_path.resolve().parent.parent
    config = ProjectConfig(data, root=root)

    logger.debug(f"Loaded configuration from {config_path} (solidity {config.solidity})")
    return config

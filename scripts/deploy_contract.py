"""
Smart Contract Deployment Script
Deploys the Tanda contract to the selected network

Usage:
    python -m scripts.deploy_contract --network testnet_aurora
"""

import os
import sys
import argparse
from loguru import logger
from dotenv import load_dotenv

from utils.logging_setup import configure_logging
from utils.network_config import load_config
from blockchain.signer_manager import SignerManager
from blockchain.contract_factory import get_contract_factory

load_dotenv()

CONTRACT_NAME = "Tanda"
CONSTRUCTOR_ARGS = ("MetaTanda", "Tanda test", 2, 1)


def deploy_contract(network_name=None, config_path=None):
    """
    Deploy Tanda with the fixed constructor arguments

    Args:
        network_name: Network from the config (None = default network)
        config_path: Config file (None = config/network_config.json)

    Returns:
        DeployedContract
    """
    config = load_config(config_path)
    network = config.get_network(network_name)

    logger.info(f"Deploying to {network.name} network")

    w3 = network.connect()
    deployer = SignerManager(w3, network).get_signer(0)

    logger.info(f"Deploy contracts with: {deployer.address}")

    factory = get_contract_factory(w3, CONTRACT_NAME, deployer, config, chain_id=network.chain_id)
    deployed = factory.deploy(*CONSTRUCTOR_ARGS)

    logger.success(f"Contract deployed: {deployed.address}")
    return deployed


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"Deploy the {CONTRACT_NAME} contract")
    parser.add_argument(
        "--network",
        default=os.getenv("DEPLOY_NETWORK"),
        help="Network name from the config (default: DEPLOY_NETWORK or the config default)"
    )
    parser.add_argument("--config", default=None, help="Path to network_config.json")
    parser.add_argument("--log-level", default="INFO", help="Console log level")
    parser.add_argument("--no-log-file", action="store_true", help="Log to stderr only")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the deployment, returning the process exit code"""
    args = parse_args(argv)
    configure_logging(args.log_level, log_to_file=not args.no_log_file)

    try:
        deploy_contract(args.network, args.config)
    except Exception as e:
        logger.opt(exception=e).error(f"Deployment failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

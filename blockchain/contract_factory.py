"""
Contract Factory
Binds a compiled contract's ABI and bytecode to deployment
"""

import json
from pathlib import Path
from typing import Dict, List, Optional
from web3 import Web3
from loguru import logger

from blockchain.compiler import compile_sources
from blockchain.signer_manager import Signer

DEFAULT_GAS_LIMIT = 6000000
GAS_BUFFER = 1.2


class ArtifactNotFoundError(FileNotFoundError):
    """No deployable artifact for the requested contract name"""


class DeploymentError(RuntimeError):
    """Deployment transaction was mined but reverted"""


class DeployedContract:
    """A contract instance created by a deployment transaction"""

    def __init__(self, name: str, address: str, tx_hash: bytes, receipt, contract=None):
        self.name = name
        self.address = address
        self.tx_hash = tx_hash
        self.receipt = receipt
        self.contract = contract

    @property
    def gas_used(self) -> int:
        return self.receipt['gasUsed']

    def __repr__(self):
        return f"DeployedContract({self.name} at {self.address})"


def find_artifact(artifacts_path, name: str) -> Optional[Path]:
    """
    Locate the artifact JSON for a contract name

    Looks for the Hardhat layout first (contracts/<Name>.sol/<Name>.json)
    then anywhere under the artifacts directory. Debug files are ignored.
    """
    artifacts_path = Path(artifacts_path)

    direct = artifacts_path / 'contracts' / f"{name}.sol" / f"{name}.json"
    if direct.is_file():
        return direct

    if not artifacts_path.is_dir():
        return None

    matches = sorted(
        p for p in artifacts_path.rglob(f"{name}.json")
        if 'build-info' not in p.parts
    )

    if len(matches) > 1:
        logger.warning(f"Multiple artifacts named {name}, using {matches[0]}")

    return matches[0] if matches else None


def load_artifact(path) -> Dict:
    with open(path, 'r') as f:
        return json.load(f)


class ContractFactory:
    """
    Deploys new instances of one compiled contract from one signer
    """

    def __init__(self, w3: Web3, name: str, abi: List[Dict], bytecode: str, signer: Signer, chain_id: int):
        self.w3 = w3
        self.name = name
        self.abi = abi
        self.bytecode = bytecode
        self.signer = signer
        self.chain_id = chain_id

    def _build_transaction(self, constructor) -> Dict:
        """Build the constructor transaction with nonce, gas and chain id"""
        sender = self.signer.address

        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            gas_limit = int(gas_estimate * GAS_BUFFER)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            gas_limit = DEFAULT_GAS_LIMIT

        params = {
            'from': sender,
            'gas': gas_limit,
            'chainId': self.chain_id
        }

        if self.signer.is_local:
            params['nonce'] = self.w3.eth.get_transaction_count(sender, 'pending')
            params['gasPrice'] = self.w3.eth.gas_price

        logger.debug(f"Gas limit: {gas_limit}")
        return constructor.build_transaction(params)

    def deploy(self, *args, timeout: int = 120) -> DeployedContract:
        """
        Deploy a new instance of the contract

        Args:
            *args: Constructor arguments
            timeout: Seconds to wait for the receipt

        Returns:
            DeployedContract
        """
        Contract = self.w3.eth.contract(abi=self.abi, bytecode=self.bytecode)
        constructor = Contract.constructor(*args)

        transaction = self._build_transaction(constructor)

        logger.info(f"Sending {self.name} deployment transaction...")
        tx_hash = self.signer.send_transaction(transaction)
        logger.debug(f"Transaction sent: {Web3.to_hex(tx_hash)}")

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

        if receipt['status'] != 1:
            raise DeploymentError(
                f"{self.name} deployment reverted (tx {Web3.to_hex(tx_hash)})"
            )

        address = receipt['contractAddress']
        contract = self.w3.eth.contract(address=address, abi=self.abi)

        logger.debug(f"Gas used: {receipt['gasUsed']}")
        return DeployedContract(self.name, address, tx_hash, receipt, contract)


def get_contract_factory(w3: Web3, name: str, signer: Signer, config, chain_id: Optional[int] = None) -> ContractFactory:
    """
    Resolve a contract by name and bind it to a signer

    Compiles the project sources first when no artifact exists but
    contracts/<Name>.sol does.

    Args:
        w3: Web3 instance
        name: Contract name, e.g. "Tanda"
        signer: Account that will send the deployment
        config: ProjectConfig (paths and solidity version)
        chain_id: Chain id for the transaction (None = ask the node)

    Returns:
        ContractFactory
    """
    artifact_path = find_artifact(config.artifacts_path, name)

    if artifact_path is None:
        source_file = config.sources_path / f"{name}.sol"

        if not source_file.is_file():
            raise ArtifactNotFoundError(
                f"Artifact for contract {name} not found in {config.artifacts_path} "
                f"and no source at {source_file}"
            )

        compile_sources(config.sources_path, config.artifacts_path, config.solidity)
        artifact_path = find_artifact(config.artifacts_path, name)

        if artifact_path is None:
            raise ArtifactNotFoundError(f"{source_file} compiled but produced no contract {name}")

    artifact = load_artifact(artifact_path)

    bytecode = artifact.get('bytecode', '')
    if not bytecode or bytecode == '0x':
        raise ArtifactNotFoundError(
            f"{name} has no bytecode (abstract contract or interface): {artifact_path}"
        )

    if artifact.get('linkReferences'):
        raise ArtifactNotFoundError(f"{name} requires library linking, which is not supported")

    logger.debug(f"Using artifact {artifact_path}")

    return ContractFactory(
        w3,
        name,
        artifact['abi'],
        bytecode,
        signer,
        chain_id if chain_id is not None else w3.eth.chain_id
    )

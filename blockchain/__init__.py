"""
Blockchain Interaction Package
Handles signer resolution, contract compilation and deployment
"""

from .signer_manager import Signer, SignerManager
from .contract_factory import ContractFactory, DeployedContract, get_contract_factory

__all__ = ['Signer', 'SignerManager', 'ContractFactory', 'DeployedContract', 'get_contract_factory']

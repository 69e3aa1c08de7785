"""
Signer Manager
Resolves the accounts allowed to send transactions on the selected network
"""

from typing import Dict, List
from web3 import Web3
from eth_account import Account
from loguru import logger

from utils.network_config import NetworkConfig


class NoSignersError(RuntimeError):
    """Network exposes no account able to sign"""


class Signer:
    """
    An account that can submit transactions

    Local signers hold a private key and send raw signed transactions.
    Node-managed signers (unlocked accounts on a development node) let the
    node sign through eth_sendTransaction.
    """

    def __init__(self, w3: Web3, address: str, account=None):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = account

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def sign_transaction(self, transaction: Dict):
        """Sign a transaction dict with the local key"""
        if not self.is_local:
            raise ValueError(f"Signer {self.address} has no local key")

        return self.account.sign_transaction(transaction)

    def send_transaction(self, transaction: Dict) -> bytes:
        """
        Submit a transaction from this signer

        Args:
            transaction: Transaction dict (from, nonce, gas, ... already set)

        Returns:
            Transaction hash
        """
        if self.is_local:
            signed_tx = self.sign_transaction(transaction)
            return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        return self.w3.eth.send_transaction(transaction)

    def __repr__(self):
        kind = 'local' if self.is_local else 'node'
        return f"Signer({self.address}, {kind})"


class SignerManager:
    """
    Builds the signer list for a network: configured private keys first,
    otherwise the node's unlocked accounts
    """

    def __init__(self, w3: Web3, network: NetworkConfig):
        self.w3 = w3
        self.network = network

    def get_signers(self) -> List[Signer]:
        """
        Get all signers available on the network

        Returns:
            Non-empty list of signers
        """
        if self.network.has_local_accounts:
            signers = [
                Signer(self.w3, account.address, account)
                for account in (Account.from_key(key) for key in self.network.accounts)
            ]
        else:
            signers = [Signer(self.w3, address) for address in self.w3.eth.accounts]

        if not signers:
            raise NoSignersError(
                f"No signers available on {self.network.name}: "
                f"configure private keys or use a node with unlocked accounts"
            )

        logger.debug(f"{len(signers)} signer(s) available on {self.network.name}")
        return signers

    def get_signer(self, index: int = 0) -> Signer:
        """Get a single signer by position"""
        signers = self.get_signers()

        if index < 0 or index >= len(signers):
            raise NoSignersError(
                f"Signer #{index} requested but only {len(signers)} available on {self.network.name}"
            )

        return signers[index]

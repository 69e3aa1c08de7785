"""
Unit Tests for Signer Manager
"""

import pytest
from unittest.mock import Mock
from eth_account import Account

from blockchain.signer_manager import NoSignersError, Signer, SignerManager
from utils.network_config import NetworkConfig

TEST_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
NODE_ACCOUNTS = [
    '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266',
    '0x70997970C51812dc3A010C7d01b50e0d17dc79C8',
]


@pytest.fixture
def w3():
    """Mock Web3 instance"""
    return Mock()


@pytest.fixture
def remote_network():
    return NetworkConfig('testnet_aurora', 'https://testnet.aurora.dev', 1313161555, [TEST_KEY])


@pytest.fixture
def local_network():
    return NetworkConfig('hardhat', 'http://127.0.0.1:8545', 1337)


class TestSignerManager:
    """Test signer resolution"""

    def test_configured_keys(self, w3, remote_network):
        signers = SignerManager(w3, remote_network).get_signers()

        assert len(signers) == 1
        assert signers[0].is_local
        assert signers[0].address == Account.from_key(TEST_KEY).address

    def test_configured_keys_skip_node_accounts(self, w3, remote_network):
        w3.eth.accounts = NODE_ACCOUNTS

        signers = SignerManager(w3, remote_network).get_signers()

        assert signers[0].address == Account.from_key(TEST_KEY).address

    def test_node_accounts(self, w3, local_network):
        w3.eth.accounts = NODE_ACCOUNTS

        signers = SignerManager(w3, local_network).get_signers()

        assert [s.address for s in signers] == NODE_ACCOUNTS
        assert not any(s.is_local for s in signers)

    def test_first_signer(self, w3, local_network):
        w3.eth.accounts = NODE_ACCOUNTS

        assert SignerManager(w3, local_network).get_signer().address == NODE_ACCOUNTS[0]

    def test_no_signers(self, w3, local_network):
        w3.eth.accounts = []

        with pytest.raises(NoSignersError):
            SignerManager(w3, local_network).get_signers()

    def test_signer_index_out_of_range(self, w3, local_network):
        w3.eth.accounts = NODE_ACCOUNTS

        with pytest.raises(NoSignersError):
            SignerManager(w3, local_network).get_signer(5)

    def test_negative_signer_index(self, w3, local_network):
        w3.eth.accounts = NODE_ACCOUNTS

        with pytest.raises(NoSignersError):
            SignerManager(w3, local_network).get_signer(-1)


class TestSigner:
    """Test transaction submission"""

    def test_checksums_address(self, w3):
        signer = Signer(w3, NODE_ACCOUNTS[0].lower())

        assert signer.address == NODE_ACCOUNTS[0]

    def test_local_sends_raw(self, w3):
        account = Mock()
        account.sign_transaction.return_value = Mock(raw_transaction=b'raw')
        signer = Signer(w3, NODE_ACCOUNTS[0], account)

        signer.send_transaction({'nonce': 0})

        account.sign_transaction.assert_called_once_with({'nonce': 0})
        w3.eth.send_raw_transaction.assert_called_once_with(b'raw')
        w3.eth.send_transaction.assert_not_called()

    def test_node_managed_sends_through_node(self, w3):
        signer = Signer(w3, NODE_ACCOUNTS[0])

        signer.send_transaction({'from': NODE_ACCOUNTS[0]})

        w3.eth.send_transaction.assert_called_once_with({'from': NODE_ACCOUNTS[0]})
        w3.eth.send_raw_transaction.assert_not_called()

    def test_node_managed_cannot_sign(self, w3):
        with pytest.raises(ValueError):
            Signer(w3, NODE_ACCOUNTS[0]).sign_transaction({})

    def test_real_signature(self, w3):
        account = Account.from_key(TEST_KEY)
        signer = Signer(w3, account.address, account)

        signer.send_transaction({
            'nonce': 0,
            'gas': 100000,
            'gasPrice': 1000000000,
            'chainId': 1337,
            'value': 0,
            'data': '0x6080',
        })

        raw = w3.eth.send_raw_transaction.call_args[0][0]
        assert isinstance(raw, bytes)
        assert len(raw) > 0

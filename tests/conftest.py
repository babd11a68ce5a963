"""Shared pytest fixtures for deployer tests."""

from unittest.mock import MagicMock, Mock

import pytest

from blockchain.chain_client import ChainClient
from blockchain.compiler import CompiledArtifact
from blockchain.contract_source import COUNTER_CONTRACT_NAME, COUNTER_FILE_NAME
from blockchain.wallet_manager import WalletManager
from deployer.config import DeployConfig

from sample_data import (
    COUNTER_ABI,
    COUNTER_BYTECODE,
    TEST_ADDRESS,
    TEST_PRIVATE_KEY,
    TEST_RPC_URL
)


@pytest.fixture
def env():
    """Minimal valid environment"""
    return {
        'PRIVATE_KEY': TEST_PRIVATE_KEY,
        'RPC_URL': TEST_RPC_URL
    }


@pytest.fixture
def config():
    return DeployConfig(private_key=TEST_PRIVATE_KEY, rpc_url=TEST_RPC_URL)


@pytest.fixture
def counter_artifact():
    return CompiledArtifact(contract_name=COUNTER_CONTRACT_NAME, abi=COUNTER_ABI, bytecode=COUNTER_BYTECODE)


@pytest.fixture
def solc_output():
    """solc standard JSON output for the Counter contract"""
    return {
        'contracts': {
            COUNTER_FILE_NAME: {
                COUNTER_CONTRACT_NAME: {
                    'abi': COUNTER_ABI,
                    'evm': {'bytecode': {'object': COUNTER_BYTECODE}}
                }
            }
        },
        'sources': {COUNTER_FILE_NAME: {'id': 0}}
    }


@pytest.fixture
def w3():
    """Mock Web3 instance"""
    w3 = MagicMock()
    w3.is_connected.return_value = True
    w3.eth.chain_id = 1337
    return w3


@pytest.fixture
def wallet():
    """Mock deployer wallet"""
    wallet = Mock(spec=WalletManager)
    wallet.address = TEST_ADDRESS
    wallet.sign_transaction.return_value = Mock(raw_transaction=b'\xf8signed')
    return wallet


@pytest.fixture
def client(w3, wallet):
    return ChainClient(w3, wallet)

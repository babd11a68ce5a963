"""
Counter Integration Tests
Real solc + in-memory EVM (web3's EthereumTesterProvider)

Requires: pip install "web3[tester]" and network access for the first solc download
"""

import pytest
from web3 import Web3, EthereumTesterProvider

from blockchain.chain_client import ChainClient
from blockchain.compiler import SolidityCompiler
from blockchain.contract_manager import CounterContract
from blockchain.contract_source import COUNTER_CONTRACT, COUNTER_FILE_NAME, ContractSource
from blockchain.wallet_manager import WalletManager
from deployer.config import DEFAULT_SOLC_VERSION
from deployer.exceptions import CompilationError
from deployer.pipeline import DeploymentPipeline

from sample_data import TEST_ADDRESS, TEST_PRIVATE_KEY

pytest.importorskip('eth_tester')


@pytest.fixture(scope='module')
def compiler():
    compiler = SolidityCompiler(DEFAULT_SOLC_VERSION)
    try:
        compiler.ensure_installed()
    except CompilationError as e:
        pytest.skip(f"solc unavailable: {e}")
    return compiler


@pytest.fixture(scope='module')
def counter_artifact(compiler):
    return compiler.compile(COUNTER_CONTRACT)


@pytest.fixture
def tester_w3():
    """Fresh chain with the test wallet funded from a tester account"""
    w3 = Web3(EthereumTesterProvider())
    tx_hash = w3.eth.send_transaction({
        'from': w3.eth.accounts[0],
        'to': TEST_ADDRESS,
        'value': w3.to_wei(10, 'ether')
    })
    w3.eth.wait_for_transaction_receipt(tx_hash)
    return w3


@pytest.fixture
def tester_client(tester_w3):
    return ChainClient(tester_w3, WalletManager(TEST_PRIVATE_KEY))


@pytest.fixture
def pipeline(compiler, tester_client):
    return DeploymentPipeline(compiler, tester_client, confirmation_timeout=10)


class TestCompileCounter:

    def test_abi_and_bytecode(self, counter_artifact):
        names = {entry.get('name') for entry in counter_artifact.abi}

        assert {'increment', 'getCount', 'CountIncremented'} <= names
        assert counter_artifact.bytecode

    def test_invalid_source(self, compiler):
        source = ContractSource.single('pragma solidity ^0.8.0; contract Counter {', COUNTER_FILE_NAME, 'Counter')

        with pytest.raises(CompilationError):
            compiler.compile(source)


class TestDeployCounter:

    def test_deploy(self, pipeline, tester_w3):
        result = pipeline.run().unwrap()

        assert Web3.is_checksum_address(result.contract_address)
        assert result.transaction_hash.startswith('0x')
        assert tester_w3.eth.get_code(result.contract_address) != b''

    def test_two_runs_two_contracts(self, pipeline):
        first = pipeline.run().unwrap()
        second = pipeline.run().unwrap()

        assert first.contract_address != second.contract_address
        assert first.transaction_hash != second.transaction_hash

    def test_increment_and_get_count(self, pipeline, tester_client):
        outcome = pipeline.run()
        counter = CounterContract(tester_client, outcome.result.contract_address, outcome.artifact.abi)

        assert counter.get_count() == 0

        assert counter.increment() == 1
        assert counter.get_count() == 1

        assert counter.increment() == 2
        assert counter.get_count() == 2

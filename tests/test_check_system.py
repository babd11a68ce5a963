"""
System Check Script Tests
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from scripts import check_system

from sample_data import TEST_PRIVATE_KEY, TEST_RPC_URL


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch('deployer.config.load_dotenv'):
        yield


class TestChecks:

    def test_environment_missing(self, monkeypatch):
        monkeypatch.delenv('PRIVATE_KEY', raising=False)
        monkeypatch.delenv('RPC_URL', raising=False)

        assert check_system.check_environment_variables() is None

    def test_environment_present(self, monkeypatch):
        monkeypatch.setenv('PRIVATE_KEY', TEST_PRIVATE_KEY)
        monkeypatch.setenv('RPC_URL', TEST_RPC_URL)

        config = check_system.check_environment_variables()

        assert config is not None
        assert config.rpc_url == TEST_RPC_URL

    def test_compiler_installed(self, config):
        with patch('scripts.check_system.solcx') as solcx:
            solcx.get_installed_solc_versions.return_value = [config.solc_version]

            assert check_system.check_compiler(config)

    def test_compiler_downloadable_is_a_warning(self, config):
        with patch('scripts.check_system.solcx') as solcx:
            solcx.get_installed_solc_versions.return_value = []
            solcx.get_installable_solc_versions.return_value = [config.solc_version]

            assert check_system.check_compiler(config)

    def test_compiler_unavailable_fails(self, config):
        with patch('scripts.check_system.solcx') as solcx:
            solcx.get_installed_solc_versions.return_value = []
            solcx.get_installable_solc_versions.return_value = ['0.4.26']

            assert not check_system.check_compiler(config)

    def test_compiler_release_list_unreachable_fails(self, config):
        with patch('scripts.check_system.solcx') as solcx:
            solcx.get_installed_solc_versions.return_value = []
            solcx.get_installable_solc_versions.side_effect = ConnectionError('offline')

            assert not check_system.check_compiler(config)

    def test_low_balance(self, config):
        with patch('scripts.check_system.WalletManager.get_balance', return_value=Decimal('0')):
            assert not check_system.check_wallet_balance(config)

    def test_sufficient_balance(self, config):
        with patch('scripts.check_system.WalletManager.get_balance', return_value=Decimal('1.5')):
            assert check_system.check_wallet_balance(config)

    def test_rpc_unreachable(self, config):
        with patch('scripts.check_system.Web3') as web3_cls:
            web3_cls.return_value.is_connected.return_value = False

            assert not check_system.check_rpc_connection(config)


class TestMain:

    def test_missing_environment_fails(self, monkeypatch):
        monkeypatch.delenv('PRIVATE_KEY', raising=False)
        monkeypatch.delenv('RPC_URL', raising=False)

        assert check_system.main() == 1

    def test_all_checks_pass(self, monkeypatch):
        monkeypatch.setenv('PRIVATE_KEY', TEST_PRIVATE_KEY)
        monkeypatch.setenv('RPC_URL', TEST_RPC_URL)

        with patch.object(check_system, 'check_rpc_connection', return_value=True), \
                patch.object(check_system, 'check_wallet_balance', return_value=True), \
                patch.object(check_system, 'check_compiler', return_value=True):
            assert check_system.main() == 0

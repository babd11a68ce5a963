"""
System Check Script
Verifies configuration, node connectivity, deployer balance and compiler before deploying
"""

import sys

import solcx
from web3 import Web3
from loguru import logger

from blockchain.wallet_manager import WalletManager
from deployer.config import load_config
from deployer.exceptions import ConfigurationError

MIN_BALANCE_ETH = 0.001


def check_environment_variables():
    """Check required environment variables; returns the loaded config or None"""
    logger.info("Checking environment variables...")

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(str(e))
        return None

    logger.success("✓ All environment variables set")
    return config


def check_rpc_connection(config) -> bool:
    """Check the RPC endpoint answers"""
    logger.info("Checking RPC connection...")

    try:
        w3 = Web3(Web3.HTTPProvider(config.rpc_url))
        if not w3.is_connected():
            logger.error(f"  ✗ {config.rpc_url}: Connection failed")
            return False

        logger.success(f"  ✓ Connected (Chain: {w3.eth.chain_id}, Block: {w3.eth.block_number})")
        return True
    except Exception as e:
        logger.error(f"  ✗ {config.rpc_url}: {e}")
        return False


def check_wallet_balance(config) -> bool:
    """Check the deployer key is valid and holds funds"""
    logger.info("Checking wallet balance...")

    try:
        wallet = WalletManager(config.private_key)
    except ConfigurationError as e:
        logger.error(f"  ✗ {e}")
        return False

    try:
        balance = wallet.get_balance(Web3(Web3.HTTPProvider(config.rpc_url)))
    except Exception as e:
        logger.error(f"  Error checking deployer balance: {e}")
        return False

    logger.info(f"  Deployer: {balance:.6f} ETH")

    if balance < MIN_BALANCE_ETH:
        logger.warning(f"  ⚠ Deployer balance low (need at least {MIN_BALANCE_ETH} ETH for gas)")
        return False

    logger.success("  ✓ Deployer balance sufficient")
    return True


def check_compiler(config) -> bool:
    """Check the configured solc version is installed or downloadable"""
    logger.info("Checking Solidity compiler...")

    installed = {str(version) for version in solcx.get_installed_solc_versions()}

    if config.solc_version not in installed:
        try:
            installable = {str(version) for version in solcx.get_installable_solc_versions()}
        except Exception as e:
            logger.error(f"  ✗ solc {config.solc_version} not installed and release list unavailable: {e}")
            return False

        if config.solc_version not in installable:
            logger.error(f"  ✗ solc {config.solc_version} is not installed and cannot be downloaded")
            return False

        logger.warning(f"  solc {config.solc_version} not installed (will be downloaded on first deploy)")
        return True

    logger.success(f"  ✓ solc {config.solc_version}")
    return True


def main():
    """Run all system checks"""
    logger.info("=" * 70)
    logger.info("Counter Deployer System Check")
    logger.info("=" * 70)

    config = check_environment_variables()
    results = [("Environment Variables", config is not None)]

    if config is not None:
        checks = [
            ("RPC Connection", check_rpc_connection),
            ("Wallet Balance", check_wallet_balance),
            ("Solidity Compiler", check_compiler)
        ]

        for name, check_func in checks:
            logger.info("")
            try:
                result = check_func(config)
                results.append((name, result))
            except Exception as e:
                logger.error(f"Error in {name}: {e}")
                results.append((name, False))

    # Summary
    logger.info("")
    logger.info("=" * 70)
    logger.info("Summary")
    logger.info("=" * 70)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✓ PASS" if result else "✗ FAIL"
        logger.info(f"  {status}: {name}")

    logger.info("")
    logger.info(f"Total: {passed}/{total} checks passed")

    if passed == total and config is not None:
        logger.success("=" * 70)
        logger.success("✅ Ready to deploy!")
        logger.success("=" * 70)
        logger.info("Deploy: python main.py")
        return 0
    else:
        logger.error("=" * 70)
        logger.error("❌ Not ready - fix issues above")
        logger.error("=" * 70)
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Wallet Manager
Signing identity for the deployer account
"""

from decimal import Decimal
from typing import Dict

from web3 import Web3
from eth_account import Account
from eth_account.signers.local import LocalAccount
from loguru import logger

from deployer.exceptions import ConfigurationError


class WalletManager:
    """
    Holds the deployer account derived from a private key.
    The key itself is never logged.
    """

    def __init__(self, private_key: str):
        """
        Initialize wallet manager

        Args:
            private_key: Hex-encoded secp256k1 private key
        """
        try:
            self.account: LocalAccount = Account.from_key(private_key)
        except (ValueError, TypeError):
            # Key text must never reach logs or tracebacks
            raise ConfigurationError("PRIVATE_KEY is not a valid private key") from None

        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self, w3: Web3) -> Decimal:
        """Native balance of the deployer in ether"""
        balance_wei = w3.eth.get_balance(self.address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))

"""
Chain Client
Connection to an EVM node paired with the deployer's signing identity
"""

from contextlib import contextmanager
from typing import Optional

from web3 import Web3
from web3.contract import Contract
from web3.exceptions import TimeExhausted, Web3Exception
from web3.types import TxReceipt
from loguru import logger

from deployer.exceptions import DeploymentError
from .compiler import CompiledArtifact
from .wallet_manager import WalletManager

# Anything a node, the transport or the signer can throw at us
CHAIN_ERRORS = (Web3Exception, ValueError, OSError)


@contextmanager
def chain_errors(action: str):
    """Convert low-level chain failures into DeploymentError"""
    try:
        yield
    except TimeExhausted as e:
        raise DeploymentError(f"Timed out while {action}: {e}") from e
    except CHAIN_ERRORS as e:
        raise DeploymentError(f"Failed while {action}: {e}") from e


class ChainClient:
    """
    Reads and writes against one node on behalf of one wallet
    """

    DEFAULT_GAS_LIMIT = 3_000_000
    GAS_BUFFER = 1.2

    def __init__(self, w3: Web3, wallet: WalletManager):
        """
        Initialize Chain Client

        Args:
            w3: Web3 instance
            wallet: Wallet used to sign every transaction
        """
        self.w3 = w3
        self.wallet = wallet

    @classmethod
    def from_config(cls, config, wallet: Optional[WalletManager] = None) -> 'ChainClient':
        """Build an HTTP-backed client from DeployConfig"""
        w3 = Web3(Web3.HTTPProvider(config.rpc_url))
        return cls(w3, wallet or WalletManager(config.private_key))

    @property
    def address(self) -> str:
        return self.wallet.address

    def ensure_connected(self):
        """Fail with DeploymentError if the node cannot be reached"""
        with chain_errors("connecting to the node"):
            if not self.w3.is_connected():
                raise DeploymentError("Failed to connect to network")

            chain_id = self.w3.eth.chain_id

        logger.info(f"Connected to chain {chain_id}")

    def contract_factory(self, artifact: CompiledArtifact):
        """Contract class bound to ABI + bytecode, ready to build a creation transaction"""
        return self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

    def contract_at(self, address: str, abi) -> Contract:
        """Contract instance for an already deployed address"""
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def _estimate_gas(self, call) -> int:
        try:
            gas_estimate = call.estimate_gas({'from': self.address})
            return int(gas_estimate * self.GAS_BUFFER)
        except CHAIN_ERRORS as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.DEFAULT_GAS_LIMIT

    def _sign_and_send(self, call, action: str) -> bytes:
        with chain_errors(action):
            gas_limit = self._estimate_gas(call)
            logger.info(f"Gas limit: {gas_limit}")

            transaction = call.build_transaction({
                'from': self.address,
                'nonce': self.w3.eth.get_transaction_count(self.address, 'pending'),
                'gas': gas_limit
            })

            signed_tx = self.wallet.sign_transaction(transaction)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        return tx_hash

    def submit_creation(self, factory, *constructor_args) -> bytes:
        """
        Build, sign and broadcast a contract-creation transaction

        Args:
            factory: Contract class from contract_factory()
            constructor_args: Constructor arguments, if any

        Returns:
            Transaction hash

        Raises:
            DeploymentError: Node rejected the transaction or was unreachable
        """
        logger.info("Building deployment transaction...")
        return self._sign_and_send(factory.constructor(*constructor_args), "submitting the deployment transaction")

    def wait_for_confirmation(self, tx_hash: bytes, timeout: float = 120, poll_latency: float = 0.1) -> TxReceipt:
        """
        Block until the transaction is mined

        Raises:
            DeploymentError: Timeout, node failure or reverted transaction
        """
        logger.info("Waiting for transaction confirmation...")

        with chain_errors("waiting for confirmation"):
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=timeout,
                poll_latency=poll_latency
            )

        if receipt['status'] != 1:
            raise DeploymentError(f"Transaction {Web3.to_hex(tx_hash)} reverted")

        return receipt

    def transact(self, call, timeout: float = 120, poll_latency: float = 0.1) -> TxReceipt:
        """Sign, send and confirm a state-changing contract call"""
        tx_hash = self._sign_and_send(call, f"sending {call.fn_name}()")
        return self.wait_for_confirmation(tx_hash, timeout=timeout, poll_latency=poll_latency)

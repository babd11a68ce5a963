"""
Blockchain Interaction Package
Handles compilation, signing, contract deployment and contract calls
"""

from .contract_source import ContractSource, COUNTER_CONTRACT
from .compiler import SolidityCompiler, CompiledArtifact
from .wallet_manager import WalletManager
from .chain_client import ChainClient
from .contract_manager import CounterContract

__all__ = [
    'ContractSource',
    'COUNTER_CONTRACT',
    'SolidityCompiler',
    'CompiledArtifact',
    'WalletManager',
    'ChainClient',
    'CounterContract'
]

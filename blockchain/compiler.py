"""
Solidity Compiler
Compiles contract sources with solc (standard JSON) and extracts ABI + bytecode
"""

from dataclasses import dataclass
from typing import Dict, List

import solcx
from solcx.exceptions import SolcError, SolcInstallationError, SolcNotInstalled
from loguru import logger

from deployer.exceptions import CompilationError
from .contract_source import ContractSource

OUTPUT_SELECTION = ['abi', 'evm.bytecode']


@dataclass(frozen=True)
class CompiledArtifact:
    """ABI and creation bytecode of one compiled contract"""

    contract_name: str
    abi: List[Dict]
    bytecode: str


class SolidityCompiler:
    """
    Thin adapter over py-solc-x's standard JSON interface
    """

    def __init__(self, solc_version: str, auto_install: bool = True):
        """
        Initialize compiler

        Args:
            solc_version: Exact solc version to compile with (e.g. '0.8.20')
            auto_install: Download the compiler if it is not installed yet
        """
        self.solc_version = solc_version
        self.auto_install = auto_install

    @staticmethod
    def build_input(source: ContractSource) -> Dict:
        """Build the solc standard JSON input for a source set"""
        return {
            'language': 'Solidity',
            'sources': {
                file_name: {'content': content}
                for file_name, content in source.sources.items()
            },
            'settings': {
                'outputSelection': {
                    '*': {
                        '*': list(OUTPUT_SELECTION)
                    }
                }
            }
        }

    def ensure_installed(self):
        """Install the configured solc version when missing"""
        installed = {str(version) for version in solcx.get_installed_solc_versions()}

        if self.solc_version in installed:
            return

        if not self.auto_install:
            raise CompilationError(f"solc {self.solc_version} is not installed")

        logger.info(f"Installing solc {self.solc_version}...")
        try:
            solcx.install_solc(self.solc_version)
        except (SolcInstallationError, OSError, ValueError) as e:
            raise CompilationError(f"Could not install solc {self.solc_version}: {e}") from e

    def compile(self, source: ContractSource) -> CompiledArtifact:
        """
        Compile sources and extract the entry contract

        Args:
            source: Sources plus the (file, contract) lookup key

        Returns:
            CompiledArtifact

        Raises:
            CompilationError: Compiler failed or the contract is missing from its output
        """
        self.ensure_installed()

        logger.info(f"Compiling {source.qualified_name} with solc {self.solc_version}...")

        try:
            output = solcx.compile_standard(self.build_input(source), solc_version=self.solc_version)
        except SolcNotInstalled as e:
            raise CompilationError(f"solc {self.solc_version} is not installed") from e
        except SolcError as e:
            raise CompilationError(f"Compilation of {source.qualified_name} failed: {e}") from e

        return self.extract(output, source)

    def extract(self, output: Dict, source: ContractSource) -> CompiledArtifact:
        """Pull the entry contract's ABI and bytecode out of solc output"""
        errors = [
            entry for entry in output.get('errors', [])
            if entry.get('severity') == 'error'
        ]
        for entry in output.get('errors', []):
            if entry.get('severity') != 'error':
                logger.warning(f"solc: {entry.get('formattedMessage', entry.get('message', '')).strip()}")

        if errors:
            messages = '\n'.join(
                entry.get('formattedMessage', entry.get('message', '')).strip()
                for entry in errors
            )
            raise CompilationError(f"Compilation of {source.qualified_name} failed:\n{messages}")

        file_contracts = output.get('contracts', {}).get(source.file_name)
        if not file_contracts:
            raise CompilationError(f"No contracts compiled from {source.file_name}")

        contract = file_contracts.get(source.contract_name)
        if contract is None:
            raise CompilationError(
                f"Contract {source.contract_name} not found in {source.file_name} "
                f"(compiled: {', '.join(sorted(file_contracts))})"
            )

        abi = contract.get('abi') or []
        bytecode = contract.get('evm', {}).get('bytecode', {}).get('object') or ''

        if not abi:
            raise CompilationError(f"{source.qualified_name} produced an empty ABI")

        if not bytecode:
            raise CompilationError(
                f"{source.qualified_name} produced no bytecode (abstract contract or interface?)"
            )

        logger.success(f"Contract compiled successfully! ({len(abi)} ABI entries, {len(bytecode) // 2} bytes)")
        return CompiledArtifact(contract_name=source.contract_name, abi=abi, bytecode=bytecode)

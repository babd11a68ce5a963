"""
Contract Sources
The embedded Counter contract and the lookup key used to find it after compilation
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

COUNTER_FILE_NAME = 'Counter.sol'
COUNTER_CONTRACT_NAME = 'Counter'

COUNTER_SOURCE = """
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.0;

contract Counter {
    uint256 private count;

    event CountIncremented(uint256 newCount);

    function increment() public {
        count += 1;
        emit CountIncremented(count);
    }

    function getCount() public view returns (uint256) {
        return count;
    }
}
"""


@dataclass(frozen=True)
class ContractSource:
    """
    Solidity sources plus the (file, contract) key of the contract to deploy

    Attributes:
        sources: File name -> source text
        file_name: Source file holding the entry contract
        contract_name: Name of the entry contract inside that file
    """

    sources: Mapping[str, str]
    file_name: str
    contract_name: str

    def __post_init__(self):
        if self.file_name not in self.sources:
            raise ValueError(f"Entry file {self.file_name} not among sources: {sorted(self.sources)}")

        # Freeze the mapping so the instance stays immutable
        object.__setattr__(self, 'sources', MappingProxyType(dict(self.sources)))

    @classmethod
    def single(cls, source: str, file_name: str, contract_name: str) -> 'ContractSource':
        """Build a source set holding one file"""
        return cls(sources={file_name: source}, file_name=file_name, contract_name=contract_name)

    @property
    def qualified_name(self) -> str:
        return f"{self.file_name}:{self.contract_name}"


COUNTER_CONTRACT = ContractSource.single(COUNTER_SOURCE, COUNTER_FILE_NAME, COUNTER_CONTRACT_NAME)

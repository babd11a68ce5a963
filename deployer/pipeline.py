"""
Deployment Pipeline
Compile -> submit -> confirm, as a linear state machine with a tagged outcome
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from web3 import Web3
from loguru import logger

from blockchain.chain_client import ChainClient
from blockchain.compiler import CompiledArtifact, SolidityCompiler
from blockchain.contract_source import COUNTER_CONTRACT, ContractSource
from .exceptions import CompilationError, DeployerError, DeploymentError


class PipelineStage(Enum):
    START = 'start'
    COMPILED = 'compiled'
    SUBMITTED = 'submitted'
    CONFIRMED = 'confirmed'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class DeploymentResult:
    """Where the contract landed"""

    contract_address: str
    transaction_hash: str
    block_number: Optional[int] = None
    gas_used: Optional[int] = None


@dataclass(frozen=True)
class DeploymentOutcome:
    """
    Result of one pipeline run: either a DeploymentResult or the error that stopped it.

    On failure `failed_after` is the last stage the pipeline completed.
    """

    stage: PipelineStage
    result: Optional[DeploymentResult] = None
    failed_after: Optional[PipelineStage] = None
    error: Optional[DeployerError] = None
    artifact: Optional[CompiledArtifact] = None

    @property
    def ok(self) -> bool:
        return self.stage is PipelineStage.DONE

    def unwrap(self) -> DeploymentResult:
        """Return the result or raise the stored error"""
        if self.error is not None:
            raise self.error
        return self.result


class DeploymentPipeline:
    """
    Deploys one contract per run() call. Not re-entrant; every call deploys a new instance.
    """

    def __init__(
        self,
        compiler: SolidityCompiler,
        client: ChainClient,
        source: ContractSource = COUNTER_CONTRACT,
        confirmation_timeout: float = 120,
        poll_latency: float = 0.1
    ):
        """
        Initialize pipeline

        Args:
            compiler: Compiler adapter
            client: Chain client (node + signer)
            source: Sources and entry contract to deploy
            confirmation_timeout: Seconds to wait for the receipt
            poll_latency: Seconds between receipt polls
        """
        self.compiler = compiler
        self.client = client
        self.source = source
        self.confirmation_timeout = confirmation_timeout
        self.poll_latency = poll_latency
        self.stage = PipelineStage.START

    def _advance(self, stage: PipelineStage):
        logger.debug(f"Pipeline: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def run(self) -> DeploymentOutcome:
        """
        Execute the pipeline once

        Returns:
            DeploymentOutcome (never raises DeployerError)
        """
        self.stage = PipelineStage.START
        artifact = None

        try:
            artifact = self.compiler.compile(self.source)
            self._advance(PipelineStage.COMPILED)

            logger.info("Deploying contract to blockchain...")
            self.client.ensure_connected()
            factory = self.client.contract_factory(artifact)
            tx_hash = self.client.submit_creation(factory)
            self._advance(PipelineStage.SUBMITTED)

            receipt = self.client.wait_for_confirmation(
                tx_hash,
                timeout=self.confirmation_timeout,
                poll_latency=self.poll_latency
            )
            self._advance(PipelineStage.CONFIRMED)

            result = self._extract_result(receipt, tx_hash)

        except (CompilationError, DeploymentError) as e:
            failed_at = self.stage
            logger.error(f"Pipeline failed after stage '{failed_at.value}': {e}")
            self._advance(PipelineStage.FAILED)
            return DeploymentOutcome(
                stage=PipelineStage.FAILED,
                failed_after=failed_at,
                error=e,
                artifact=artifact
            )

        self._advance(PipelineStage.DONE)
        logger.success("Contract deployed successfully!")
        return DeploymentOutcome(stage=PipelineStage.DONE, result=result, artifact=artifact)

    @staticmethod
    def _extract_result(receipt, tx_hash: bytes) -> DeploymentResult:
        contract_address = receipt.get('contractAddress')

        if not contract_address:
            raise DeploymentError(f"Receipt for {Web3.to_hex(tx_hash)} has no contract address")

        return DeploymentResult(
            contract_address=contract_address,
            transaction_hash=Web3.to_hex(receipt.get('transactionHash') or tx_hash),
            block_number=receipt.get('blockNumber'),
            gas_used=receipt.get('gasUsed')
        )

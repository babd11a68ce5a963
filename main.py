"""
Counter Deployer - Main Entry Point
Compiles the embedded Counter contract and deploys it to RPC_URL
"""

import os
import sys
from typing import Callable, Mapping, Optional

from loguru import logger

from blockchain.chain_client import ChainClient
from blockchain.compiler import SolidityCompiler
from deployer.config import DeployConfig, load_config
from deployer.exceptions import ConfigurationError, DeployerError
from deployer.pipeline import DeploymentPipeline

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Configure logging sinks"""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


def print_banner():
    logger.info("=" * 70)
    logger.info("🚀 Deploying Counter contract...")
    logger.info("=" * 70)


def build_pipeline(config: DeployConfig) -> DeploymentPipeline:
    """Wire compiler, wallet and chain client from configuration"""
    compiler = SolidityCompiler(config.solc_version)
    client = ChainClient.from_config(config)

    return DeploymentPipeline(
        compiler,
        client,
        confirmation_timeout=config.confirmation_timeout,
        poll_latency=config.poll_latency
    )


def main(
    env: Optional[Mapping[str, str]] = None,
    pipeline_factory: Callable[[DeployConfig], DeploymentPipeline] = build_pipeline
) -> int:
    """
    Run one deployment

    Returns:
        Process exit code (0 on success)
    """
    setup_logging()

    try:
        config = load_config(env)
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return 1

    setup_logging(config.log_level, (env if env is not None else os.environ).get("LOG_FILE"))
    print_banner()

    try:
        pipeline = pipeline_factory(config)
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return 1

    outcome = pipeline.run()

    try:
        result = outcome.unwrap()
    except DeployerError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return 1

    logger.success(f"📌 Contract Address: {result.contract_address}")
    logger.success(f"📜 Transaction Hash: {result.transaction_hash}")
    if result.gas_used is not None:
        logger.info(f"Gas used: {result.gas_used} (block {result.block_number})")
    logger.success("✅ Deployment complete! 🎉")

    return 0


if __name__ == "__main__":
    sys.exit(main())

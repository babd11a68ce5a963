"""
Configuration Loader
Reads deployment settings from the environment (and .env)
"""

import math
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

from .exceptions import ConfigurationError

REQUIRED_VARS = ('PRIVATE_KEY', 'RPC_URL')

DEFAULT_SOLC_VERSION = '0.8.20'
DEFAULT_CONFIRMATION_TIMEOUT = 120.0
DEFAULT_POLL_LATENCY = 0.1
DEFAULT_LOG_LEVEL = 'INFO'


@dataclass(frozen=True)
class DeployConfig:
    """Settings for a single deployment run"""

    private_key: str = field(repr=False)
    rpc_url: str
    solc_version: str = DEFAULT_SOLC_VERSION
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_latency: float = DEFAULT_POLL_LATENCY
    log_level: str = DEFAULT_LOG_LEVEL


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = (env.get(name) or '').strip()
    if not raw:
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None

    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {raw!r}")

    return value


def _log_level(env: Mapping[str, str]) -> str:
    raw = (env.get('LOG_LEVEL') or '').strip()
    if not raw:
        return DEFAULT_LOG_LEVEL

    name = raw.upper()
    try:
        logger.level(name)
    except ValueError:
        raise ConfigurationError(f"LOG_LEVEL is not a known log level, got {raw!r}") from None

    return name


def load_config(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> DeployConfig:
    """
    Load and validate deployment configuration

    Args:
        env: Mapping to read from (defaults to os.environ)
        dotenv: Whether to merge a local .env file into os.environ first

    Returns:
        DeployConfig

    Raises:
        ConfigurationError: A required variable is missing or a value is invalid
    """
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    values: Dict[str, str] = {name: (env.get(name) or '').strip() for name in REQUIRED_VARS}
    missing = [name for name, value in values.items() if not value]

    if missing:
        raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

    config = DeployConfig(
        private_key=values['PRIVATE_KEY'],
        rpc_url=values['RPC_URL'],
        solc_version=(env.get('SOLC_VERSION') or '').strip() or DEFAULT_SOLC_VERSION,
        confirmation_timeout=_positive_float(env, 'CONFIRMATION_TIMEOUT', DEFAULT_CONFIRMATION_TIMEOUT),
        poll_latency=_positive_float(env, 'POLL_LATENCY', DEFAULT_POLL_LATENCY),
        log_level=_log_level(env)
    )

    logger.debug(f"Configuration loaded for {config.rpc_url} (solc {config.solc_version})")
    return config

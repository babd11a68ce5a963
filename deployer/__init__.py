"""
Deployer Package
Configuration, error taxonomy and the deployment pipeline
"""

from .exceptions import DeployerError, ConfigurationError, CompilationError, DeploymentError
from .config import DeployConfig, load_config

__all__ = [
    'DeployerError',
    'ConfigurationError',
    'CompilationError',
    'DeploymentError',
    'DeployConfig',
    'load_config'
]

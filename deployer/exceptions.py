"""
Deployment Errors
Fatal error kinds raised while configuring, compiling and deploying
"""


class DeployerError(Exception):
    """Base exception for every fatal deployment failure"""

    pass


class ConfigurationError(DeployerError, ValueError):
    """Raised when required settings are missing or malformed"""

    pass


class CompilationError(DeployerError):
    """Raised when the compiler fails or the expected contract is absent"""

    pass


class DeploymentError(DeployerError, RuntimeError):
    """Raised on network, signing or chain failures during submission or confirmation"""

    pass

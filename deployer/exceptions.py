"""
Deployment Errors
Typed failures raised by the deployer, each mapped to a process exit code
"""


class DeploymentError(Exception):
    """Base exception for deployment failures."""

    exit_code = 1


class ConfigurationError(DeploymentError, ValueError):
    """Raised when RPC_URL or PRIVATE_KEY is missing or malformed."""

    exit_code = 2


class ArtifactError(DeploymentError, ValueError):
    """Raised when the contract metadata artifact cannot be loaded."""

    exit_code = 3


class TransportError(DeploymentError, RuntimeError):
    """Raised when the node is unreachable or rejects a request."""

    exit_code = 4


class ConfirmationTimeoutError(TransportError):
    """Raised when no receipt arrives within the configured timeout."""

    pass


class DeploymentRevertedError(TransportError):
    """Raised when the creation transaction is mined with status 0."""

    exit_code = 5


class FilesystemError(DeploymentError, OSError):
    """Raised when the network config file cannot be written."""

    exit_code = 6

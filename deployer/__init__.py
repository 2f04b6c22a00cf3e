"""
Contract Deployer Package
Handles settings, signing and the deployment flow
"""

from .exceptions import (
    ArtifactError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentError,
    DeploymentRevertedError,
    FilesystemError,
    TransportError,
)
from .types import ContractArtifact, DeployedContractRecord, DeploymentCredentials, NetworkTarget
from .settings import DeploymentSettings, load_credentials
from .wallet_manager import WalletManager
from .deployer import Deployer, deploy

__all__ = [
    'Deployer',
    'deploy',
    'DeploymentSettings',
    'load_credentials',
    'WalletManager',
    'ContractArtifact',
    'DeployedContractRecord',
    'DeploymentCredentials',
    'NetworkTarget',
    'DeploymentError',
    'ConfigurationError',
    'ArtifactError',
    'TransportError',
    'ConfirmationTimeoutError',
    'DeploymentRevertedError',
    'FilesystemError',
]

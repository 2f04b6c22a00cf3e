"""
Deployment Settings
Loads credentials from the environment once, at process entry
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from .constants import (
    DEFAULT_ENV_FILE,
    DEFAULT_METADATA_PATH,
    DEFAULT_NETWORK,
    DEFAULT_OUTPUT_PATHS,
    DEFAULT_POLL_INTERVAL,
    REQUIRED_ENV_VARS,
)
from .exceptions import ConfigurationError
from .types import DeploymentCredentials, NetworkTarget


@dataclass
class DeploymentSettings:
    """Everything a deployment run needs, built once and passed down."""

    credentials: DeploymentCredentials
    metadata_path: Path = Path(DEFAULT_METADATA_PATH)
    output_path: Path = Path(DEFAULT_OUTPUT_PATHS["json"])
    output_format: str = "json"
    merge: bool = True
    poll_interval: float = DEFAULT_POLL_INTERVAL
    receipt_timeout: Optional[float] = None  # None waits indefinitely
    network: NetworkTarget = field(default=DEFAULT_NETWORK)


def load_environment(env_file: Optional[str] = DEFAULT_ENV_FILE) -> bool:
    """
    Load a dotenv file into the process environment if it exists.

    Variables already present in the environment are not overridden.

    Args:
        env_file: Path to the dotenv file

    Returns:
        True if the file was found and loaded
    """
    if env_file is None:
        return False

    path = Path(env_file)
    if not path.is_file():
        logger.debug(f"No env file at {path}, using process environment only")
        return False

    load_dotenv(path)
    logger.debug(f"Loaded environment from {path}")
    return True


def load_credentials(env_file: Optional[str] = DEFAULT_ENV_FILE) -> DeploymentCredentials:
    """
    Build DeploymentCredentials from RPC_URL and PRIVATE_KEY.

    Only presence is checked here. A malformed key is rejected when the
    signing identity is derived; a malformed URL fails on first RPC call.

    Raises:
        ConfigurationError: If a required variable is unset or empty
    """
    load_environment(env_file)

    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var, "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing environment variables: {', '.join(missing)} "
            f"(set them in the environment or in {env_file})"
        )

    return DeploymentCredentials(
        rpc_url=os.environ["RPC_URL"].strip(),
        private_key=os.environ["PRIVATE_KEY"].strip(),
    )

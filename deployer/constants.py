"""
Deployment Constants
Built-in network target and default file locations
"""

from .types import NetworkTarget

# Written into the network config as-is; not read back from the node
DEFAULT_NETWORK = NetworkTarget(name="Sonic", chain_id=14601)

DEFAULT_ENV_FILE = ".env.local"
DEFAULT_METADATA_PATH = "artifacts/Metadata.json"
DEFAULT_OUTPUT_PATHS = {
    "json": "config/networks.json",
    "ts": "config/config.ts",
}
DEFAULT_LOG_FILE = "data/logs/deploy.log"

# Seconds between eth_getTransactionReceipt polls
DEFAULT_POLL_INTERVAL = 2.0

REQUIRED_ENV_VARS = ["RPC_URL", "PRIVATE_KEY"]

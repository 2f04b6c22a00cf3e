"""
Deployment Types
Dataclasses passed between the loader, deployer and config writer
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DeploymentCredentials:
    """Endpoint and signing key for a single run."""

    rpc_url: str
    private_key: str = field(repr=False)


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract interface and creation bytecode."""

    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed hex
    name: Optional[str] = None


@dataclass(frozen=True)
class NetworkTarget:
    """Network name and chain id written alongside the deployed address."""

    name: str
    chain_id: int


@dataclass(frozen=True)
class DeployedContractRecord:
    """A confirmed deployment."""

    # Written to the network config
    network: str
    chain_id: int
    url: str
    address: str  # Checksummed

    # Log only
    transaction_hash: Optional[str] = None
    block_number: Optional[int] = None

    def to_config_entry(self) -> Dict[str, Any]:
        """Entry stored under networks.<network> in the config file."""
        return {
            "url": self.url,
            "chainId": self.chain_id,
            "address": self.address,
        }

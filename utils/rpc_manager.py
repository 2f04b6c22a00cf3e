"""
RPC Manager
Connection context for the single JSON-RPC endpoint
"""

from typing import Optional

from loguru import logger
from web3 import Web3


class RPCManager:
    """
    Wraps one HTTP endpoint.

    The Web3 instance is created on first use and no liveness check is made
    up front; an unreachable endpoint fails on the first real request.
    """

    def __init__(self, rpc_url: str, request_timeout: int = 30):
        """
        Initialize RPC Manager

        Args:
            rpc_url: HTTP(S) JSON-RPC endpoint
            request_timeout: Per-request HTTP timeout in seconds
        """
        self.rpc_url = rpc_url
        self.request_timeout = request_timeout
        self._w3: Optional[Web3] = None

    def get_web3(self) -> Web3:
        """
        Get Web3 instance bound to the endpoint

        Returns:
            Web3 instance
        """
        if self._w3 is None:
            provider = Web3.HTTPProvider(
                self.rpc_url,
                request_kwargs={'timeout': self.request_timeout}
            )
            self._w3 = Web3(provider)
            logger.debug(f"Created HTTP provider for {self.rpc_url}")

        return self._w3

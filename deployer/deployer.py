"""
Deployer - Core deployment flow
Submits a contract-creation transaction, waits for the receipt and records the address
"""

import asyncio
import time
from typing import Dict, Optional

import requests
from loguru import logger
from web3 import Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from blockchain.transaction_builder import TransactionBuilder
from utils.rpc_manager import RPCManager

from .constants import DEFAULT_NETWORK, DEFAULT_POLL_INTERVAL
from .exceptions import (
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentRevertedError,
    TransportError,
)
from .types import ContractArtifact, DeployedContractRecord, DeploymentCredentials, NetworkTarget
from .wallet_manager import WalletManager

# Errors raised by the HTTP provider or returned by the node
TRANSPORT_ERRORS = (requests.RequestException, Web3Exception, ValueError)


class Deployer:
    """
    Deploys one contract artifact to the configured endpoint

    Flow: build + sign creation tx -> send -> poll for receipt ->
    DeployedContractRecord -> config writer. Nothing is written unless the
    receipt reports success.
    """

    def __init__(
        self,
        credentials: DeploymentCredentials,
        network: NetworkTarget = DEFAULT_NETWORK,
        config_writer=None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        receipt_timeout: Optional[float] = None,
        w3: Optional[Web3] = None
    ):
        """
        Initialize Deployer

        Args:
            credentials: RPC endpoint and private key
            network: Network name and chain id written with the address
            config_writer: NetworkConfigWriter, or None to skip persisting
            poll_interval: Seconds between receipt polls
            receipt_timeout: Give up waiting after this many seconds (None = never)
            w3: Pre-built Web3 instance (defaults to an HTTP provider on rpc_url)

        Raises:
            ConfigurationError: If the endpoint or key is empty or the key is malformed
        """
        if not credentials.rpc_url:
            raise ConfigurationError("RPC_URL must not be empty")
        if not credentials.private_key:
            raise ConfigurationError("PRIVATE_KEY must not be empty")

        self.credentials = credentials
        self.network = network
        self.config_writer = config_writer
        self.poll_interval = poll_interval
        self.receipt_timeout = receipt_timeout

        # Connection context, no liveness check here
        if w3 is None:
            self.rpc_manager = RPCManager(credentials.rpc_url)
            w3 = self.rpc_manager.get_web3()
        else:
            self.rpc_manager = None
        self.w3 = w3

        self.wallet_manager = WalletManager(self.w3, credentials.private_key)
        self.tx_builder = TransactionBuilder(self.w3, self.wallet_manager)

    async def deploy(self, artifact: ContractArtifact) -> DeployedContractRecord:
        """
        Deploy the artifact and persist the resulting address

        Args:
            artifact: Contract ABI and creation bytecode

        Returns:
            DeployedContractRecord for the confirmed deployment

        Raises:
            TransportError: If the node is unreachable or rejects the transaction
            ConfirmationTimeoutError: If receipt_timeout elapses first
            DeploymentRevertedError: If the creation transaction reverts
            FilesystemError: If the config file cannot be written
        """
        logger.info(f"🚀 Deploying {artifact.name or 'contract'} to {self.network.name}...")

        tx_hash, tx = await self._send_deployment(artifact)
        tx_hash_hex = Web3.to_hex(tx_hash)

        logger.info(f"Transaction sent: {tx_hash_hex}")
        logger.info("Waiting for confirmation...")

        receipt = await self._wait_for_confirmation(tx_hash)

        if receipt['status'] != 1:
            raise DeploymentRevertedError(
                f"Deployment transaction {tx_hash_hex} reverted in block {receipt.get('blockNumber')}"
            )

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise TransportError(f"Receipt for {tx_hash_hex} has no contract address")

        self._check_chain_id(tx)

        record = DeployedContractRecord(
            network=self.network.name,
            chain_id=self.network.chain_id,
            url=self.credentials.rpc_url,
            address=Web3.to_checksum_address(contract_address),
            transaction_hash=tx_hash_hex,
            block_number=receipt.get('blockNumber')
        )

        logger.success(f"✅ Contract deployed to {record.address}")
        logger.info(f"Block: {record.block_number}, gas used: {receipt.get('gasUsed')}")

        if self.config_writer is not None:
            self.config_writer.write(record)

        return record

    async def _send_deployment(self, artifact: ContractArtifact):
        """Build, sign and submit the creation transaction"""
        try:
            tx = self.tx_builder.build_deployment_tx(artifact)
            signed_tx = self.wallet_manager.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        except TRANSPORT_ERRORS as e:
            raise TransportError(f"Failed to submit deployment to {self.credentials.rpc_url}: {e}") from e

        return tx_hash, tx

    async def _wait_for_confirmation(self, tx_hash: bytes) -> Dict:
        """Poll for the receipt until it exists or receipt_timeout elapses"""
        start_time = time.monotonic()

        while True:
            try:
                return self.w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                pass
            except TRANSPORT_ERRORS as e:
                raise TransportError(f"Failed to fetch receipt for {Web3.to_hex(tx_hash)}: {e}") from e

            elapsed = time.monotonic() - start_time
            if self.receipt_timeout is not None and elapsed >= self.receipt_timeout:
                raise ConfirmationTimeoutError(
                    f"No receipt for {Web3.to_hex(tx_hash)} after {elapsed:.0f}s"
                )

            await asyncio.sleep(self.poll_interval)

    def _check_chain_id(self, tx: Dict):
        """Warn when the node's chain id differs from the one being recorded"""
        reported = tx.get('chainId')

        if reported is not None and int(reported) != self.network.chain_id:
            logger.warning(
                f"Node reported chain id {int(reported)} but {self.network.name} "
                f"is recorded as {self.network.chain_id}"
            )


async def deploy(
    credentials: DeploymentCredentials,
    artifact: ContractArtifact,
    config_writer=None,
    **kwargs
) -> DeployedContractRecord:
    """
    Deploy an artifact with the given credentials.

    Extra keyword arguments are passed to Deployer.
    """
    deployer = Deployer(credentials, config_writer=config_writer, **kwargs)
    return await deployer.deploy(artifact)

"""
Transaction Builder
Constructs the contract-creation transaction
"""

from typing import Dict

from loguru import logger
from web3 import Web3

from deployer.types import ContractArtifact


class TransactionBuilder:
    """
    Builds deployment transactions for the deployer wallet
    """

    def __init__(self, w3: Web3, wallet_manager):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            wallet_manager: Wallet manager for the sender address
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager

    def build_deployment_tx(self, artifact: ContractArtifact) -> Dict:
        """
        Build a contract-creation transaction with no constructor arguments

        Gas limit, fee fields and chainId are filled in by web3 from the
        node. The nonce is the sender's pending transaction count.

        Args:
            artifact: Contract ABI and creation bytecode

        Returns:
            Unsigned transaction dict
        """
        sender = self.wallet_manager.address

        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

        nonce = self.w3.eth.get_transaction_count(sender, 'pending')

        tx = factory.constructor().build_transaction({
            'from': sender,
            'nonce': nonce
        })

        logger.debug(
            f"Built deployment tx: nonce={tx.get('nonce')} gas={tx.get('gas')} "
            f"chainId={tx.get('chainId')}"
        )
        return tx

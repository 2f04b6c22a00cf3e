"""
Wallet Manager
Holds the deployer's signing identity
"""

from decimal import Decimal
from typing import Dict

from eth_account import Account
from loguru import logger
from web3 import Web3

from .exceptions import ConfigurationError


class WalletManager:
    """
    Signing identity derived from PRIVATE_KEY, bound to one connection.
    """

    def __init__(self, w3: Web3, private_key: str):
        """
        Initialize wallet manager

        Args:
            w3: Web3 instance the wallet signs for
            private_key: Hex private key, with or without 0x

        Raises:
            ConfigurationError: If the key is not a valid secp256k1 key
        """
        self.w3 = w3

        try:
            self.account = Account.from_key(private_key)
        except Exception as e:
            # Do not echo the key itself
            raise ConfigurationError(f"PRIVATE_KEY is not a valid private key: {type(e).__name__}") from e

        self.address = self.account.address

        logger.info(f"Deployer wallet: {self.address}")

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deployer key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        signed_tx = self.account.sign_transaction(transaction)
        logger.debug(f"Signed transaction with nonce {transaction.get('nonce')}")
        return signed_tx

    def get_balance(self) -> Decimal:
        """Native balance of the deployer wallet, in ether units"""
        balance_wei = self.w3.eth.get_balance(self.address)
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))

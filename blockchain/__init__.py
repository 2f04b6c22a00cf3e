"""
Blockchain Interaction Package
Handles contract metadata loading and transaction building
"""

from .artifact_loader import load_artifact, parse_artifact
from .transaction_builder import TransactionBuilder

__all__ = ['load_artifact', 'parse_artifact', 'TransactionBuilder']

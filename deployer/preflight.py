"""
Preflight Checks
Verifies configuration and connectivity before a deployment is attempted
"""

import os
from typing import Optional

from loguru import logger
from web3 import Web3

from blockchain.artifact_loader import load_artifact
from utils.rpc_manager import RPCManager

from .constants import REQUIRED_ENV_VARS
from .exceptions import ArtifactError, ConfigurationError
from .settings import DeploymentSettings
from .wallet_manager import WalletManager


def check_environment_variables() -> bool:
    """Check if the required environment variables are set"""
    logger.info("Checking environment variables...")

    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var, "").strip()]

    if missing:
        logger.error(f"Missing environment variables: {', '.join(missing)}")
        return False

    logger.success("✓ All environment variables set")
    return True


def check_rpc_connection(w3: Web3) -> bool:
    """Check the RPC endpoint answers"""
    logger.info("Checking RPC connection...")

    try:
        if not w3.is_connected():
            logger.error("  ✗ Connection failed")
            return False
        block = w3.eth.block_number
    except Exception as e:
        logger.error(f"  ✗ {e}")
        return False

    logger.success(f"✓ Connected (Block: {block})")
    return True


def check_wallet_balance(wallet_manager: WalletManager) -> bool:
    """Check the deployer wallet can pay for gas"""
    logger.info("Checking wallet balance...")

    try:
        balance = wallet_manager.get_balance()
    except Exception as e:
        logger.error(f"  ✗ Could not read balance: {e}")
        return False

    if balance <= 0:
        logger.error(f"  ✗ {wallet_manager.address} has no balance for gas")
        return False

    logger.success(f"✓ {wallet_manager.address}: {balance}")
    return True


def check_chain_id(w3: Web3, expected_chain_id: int) -> bool:
    """
    Compare the node's chain id with the one that will be recorded

    A mismatch is only a warning: the recorded chain id is fixed.
    """
    logger.info("Checking chain id...")

    try:
        reported = w3.eth.chain_id
    except Exception as e:
        logger.error(f"  ✗ Could not read chain id: {e}")
        return False

    if reported != expected_chain_id:
        logger.warning(f"  ! Node chain id {reported} differs from recorded chain id {expected_chain_id}")
    else:
        logger.success(f"✓ Chain id {reported}")

    return True


def check_artifact(settings: DeploymentSettings) -> bool:
    """Check the contract metadata loads"""
    logger.info("Checking contract metadata...")

    try:
        load_artifact(settings.metadata_path)
    except ArtifactError as e:
        logger.error(f"  ✗ {e}")
        return False

    logger.success(f"✓ {settings.metadata_path}")
    return True


def run_preflight(settings: DeploymentSettings, w3: Optional[Web3] = None) -> bool:
    """
    Run all checks

    Args:
        settings: Deployment settings to check
        w3: Web3 instance (defaults to an HTTP provider on the settings' rpc_url)

    Returns:
        True if every check passed
    """
    logger.info("=" * 70)
    logger.info("Deployment Preflight Check")
    logger.info("=" * 70)

    if w3 is None:
        w3 = RPCManager(settings.credentials.rpc_url).get_web3()

    results = {
        'environment': check_environment_variables(),
        'artifact': check_artifact(settings),
        'rpc': check_rpc_connection(w3),
    }

    if results['rpc']:
        results['chain_id'] = check_chain_id(w3, settings.network.chain_id)

        try:
            wallet_manager = WalletManager(w3, settings.credentials.private_key)
        except ConfigurationError as e:
            logger.error(f"  ✗ {e}")
            results['wallet'] = False
        else:
            results['wallet'] = check_wallet_balance(wallet_manager)

    passed = all(results.values())

    logger.info("=" * 70)
    if passed:
        logger.success("✅ Ready to deploy")
    else:
        failed = [name for name, ok in results.items() if not ok]
        logger.error(f"❌ Failed checks: {', '.join(failed)}")
    logger.info("=" * 70)

    return passed

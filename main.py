"""
Contract Deployer - Main Entry Point
Deploys the compiled contract and writes its address to the network config
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from blockchain.artifact_loader import load_artifact
from deployer import Deployer, DeploymentError, DeploymentSettings, DeployedContractRecord, load_credentials
from deployer.constants import (
    DEFAULT_ENV_FILE,
    DEFAULT_LOG_FILE,
    DEFAULT_METADATA_PATH,
    DEFAULT_OUTPUT_PATHS,
    DEFAULT_POLL_INTERVAL,
)
from utils.network_config import OUTPUT_FORMATS, NetworkConfigWriter

EXIT_OK = 0
EXIT_INTERRUPTED = 130


def configure_logging(log_file: Optional[str] = DEFAULT_LOG_FILE):
    """Send INFO to stderr and DEBUG to a rotating log file"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="INFO"
    )
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Deploy the compiled contract and record its address.")
    parser.add_argument("--env-file", default=DEFAULT_ENV_FILE,
                        help=f"dotenv file with RPC_URL and PRIVATE_KEY (default: {DEFAULT_ENV_FILE})")
    parser.add_argument("--metadata", default=DEFAULT_METADATA_PATH,
                        help=f"contract metadata JSON with abi and bytecode (default: {DEFAULT_METADATA_PATH})")
    parser.add_argument("--output", default=None,
                        help="network config to write (default depends on --format)")
    parser.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS, default="json",
                        help="json merges into an existing config, ts rewrites it")
    parser.add_argument("--overwrite", action="store_true",
                        help="replace the whole JSON config instead of merging")
    parser.add_argument("--receipt-timeout", type=float, default=None,
                        help="seconds to wait for the receipt (default: wait indefinitely)")
    parser.add_argument("--poll-interval", type=float, default=DEFAULT_POLL_INTERVAL,
                        help=f"seconds between receipt polls (default: {DEFAULT_POLL_INTERVAL})")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE,
                        help="debug log file, empty string to disable")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> DeploymentSettings:
    """
    Build DeploymentSettings from CLI arguments and the environment

    Raises:
        ConfigurationError: If RPC_URL or PRIVATE_KEY is missing
    """
    credentials = load_credentials(args.env_file)
    output = args.output or DEFAULT_OUTPUT_PATHS[args.output_format]

    return DeploymentSettings(
        credentials=credentials,
        metadata_path=Path(args.metadata),
        output_path=Path(output),
        output_format=args.output_format,
        merge=not args.overwrite,
        poll_interval=args.poll_interval,
        receipt_timeout=args.receipt_timeout
    )


async def run(settings: DeploymentSettings) -> DeployedContractRecord:
    """Load the artifact, deploy it and write the network config"""
    artifact = load_artifact(settings.metadata_path)

    writer = NetworkConfigWriter(
        settings.output_path,
        output_format=settings.output_format,
        merge=settings.merge
    )

    deployer = Deployer(
        settings.credentials,
        network=settings.network,
        config_writer=writer,
        poll_interval=settings.poll_interval,
        receipt_timeout=settings.receipt_timeout
    )

    return await deployer.deploy(artifact)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a deployment and map the outcome to an exit code

    Returns:
        0 on success, the error's exit_code on DeploymentError, 130 on interrupt
    """
    args = parse_args(argv)
    configure_logging(args.log_file or None)

    try:
        settings = build_settings(args)
        record = asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.warning("Interrupted, nothing was written")
        return EXIT_INTERRUPTED
    except DeploymentError as e:
        logger.error(f"❌ {type(e).__name__}: {e}")
        return e.exit_code

    logger.success(f"{record.network} ({record.chain_id}): {record.address}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

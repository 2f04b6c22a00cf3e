"""
System Check Script
Verifies configuration and connectivity before running a deployment

Run from the repository root as a module so the project packages resolve
without installing them:

    python -m scripts.check_system [--env-file .env.local] [--metadata artifacts/Metadata.json]
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from deployer import ConfigurationError, DeploymentSettings, load_credentials
from deployer.constants import DEFAULT_ENV_FILE, DEFAULT_METADATA_PATH
from deployer.preflight import run_preflight


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check deployment prerequisites.")
    parser.add_argument("--env-file", default=DEFAULT_ENV_FILE)
    parser.add_argument("--metadata", default=DEFAULT_METADATA_PATH)
    args = parser.parse_args(argv)

    try:
        credentials = load_credentials(args.env_file)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    settings = DeploymentSettings(credentials=credentials, metadata_path=Path(args.metadata))

    return 0 if run_preflight(settings) else 1


if __name__ == "__main__":
    sys.exit(main())

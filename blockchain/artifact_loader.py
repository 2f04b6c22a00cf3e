"""
Artifact Loader
Reads compiled contract metadata (ABI + creation bytecode) from JSON
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from loguru import logger

from deployer.exceptions import ArtifactError
from deployer.types import ContractArtifact


def _extract_bytecode(raw: Any) -> str:
    """
    Normalize the bytecode field.

    Hardhat and generated metadata store a hex string; Foundry stores
    {"object": "0x..."}.
    """
    if isinstance(raw, dict):
        raw = raw.get("object")

    if not isinstance(raw, str):
        return ""

    bytecode = raw.strip()
    if bytecode and not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode

    return bytecode


def parse_artifact(data: Dict[str, Any], source: str = "<metadata>") -> ContractArtifact:
    """
    Build a ContractArtifact from an already-decoded metadata document.

    Args:
        data: Document with "abi" and "bytecode" keys
        source: Where the document came from, for error messages

    Returns:
        ContractArtifact

    Raises:
        ArtifactError: If abi or bytecode is missing or empty, or bytecode is not hex
    """
    if not isinstance(data, dict):
        raise ArtifactError(f"Metadata in {source} must be a JSON object")

    abi = data.get("abi")
    if not isinstance(abi, list) or not abi:
        raise ArtifactError(f"Missing or empty 'abi' in {source}")

    bytecode = _extract_bytecode(data.get("bytecode"))
    if bytecode in ("", "0x"):
        raise ArtifactError(f"Missing or empty 'bytecode' in {source}")

    try:
        bytes.fromhex(bytecode[2:])
    except ValueError as e:
        # Also catches unlinked library placeholders (__$...$__)
        raise ArtifactError(f"'bytecode' in {source} is not valid hex: {e}") from e

    return ContractArtifact(
        abi=abi,
        bytecode=bytecode,
        name=data.get("contractName"),
    )


def load_artifact(path: Union[Path, str]) -> ContractArtifact:
    """
    Load contract metadata from a JSON file.

    Args:
        path: Path to the metadata JSON

    Returns:
        ContractArtifact

    Raises:
        ArtifactError: If the file is missing, unreadable, not JSON, or incomplete
    """
    path = Path(path)

    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ArtifactError(
            f"Contract metadata not found: {path}. Run the contract build first."
        ) from e
    except json.JSONDecodeError as e:
        raise ArtifactError(f"Contract metadata is not valid JSON: {path}: {e}") from e
    except OSError as e:
        raise ArtifactError(f"Cannot read contract metadata {path}: {e}") from e

    artifact = parse_artifact(data, source=str(path))

    # Hex chars, two per byte, minus 0x
    size = (len(artifact.bytecode) - 2) // 2
    logger.info(
        f"Loaded {artifact.name or 'contract'} metadata from {path} "
        f"({len(artifact.abi)} ABI entries, {size} bytes)"
    )
    return artifact

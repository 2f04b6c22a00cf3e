"""
Network Config Writer
Persists deployed contract addresses for other tooling to import
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from loguru import logger

from deployer.exceptions import FilesystemError
from deployer.types import DeployedContractRecord

OUTPUT_FORMATS = ("json", "ts")

TS_TEMPLATE = """const Network = {{
    networks: {{
        {name}: {{
            url: {url},
            chainId: {chain_id},
            address: {address}
        }},
    }},
}};

export default Network;
"""


def render_typescript(record: DeployedContractRecord) -> str:
    """
    Render the record as a TypeScript module exporting a Network object.

    String values are emitted as JSON string literals, which are valid
    TypeScript and escape quotes in the URL.
    """
    return TS_TEMPLATE.format(
        name=record.network,
        url=json.dumps(record.url),
        chain_id=record.chain_id,
        address=json.dumps(record.address),
    )


def load_network_config(path: Union[Path, str]) -> Dict[str, Any]:
    """
    Load an existing JSON network config or return an empty one.

    Args:
        path: Path to the JSON config

    Returns:
        Config dict with a "networks" mapping
        Empty config if the file doesn't exist or is corrupted

    Raises:
        FilesystemError: If the file exists but cannot be read
    """
    try:
        with open(path, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return {"networks": {}}
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Existing network config {path} is not valid JSON ({e}), replacing it")
        return {"networks": {}}
    except OSError as e:
        raise FilesystemError(f"Cannot read network config {path}: {e}") from e

    if not isinstance(config, dict) or not isinstance(config.get("networks"), dict):
        logger.warning(f"Existing network config {path} has no 'networks' mapping, replacing it")
        return {"networks": {}}

    return config


class NetworkConfigWriter:
    """
    Writes DeployedContractRecords to a JSON or TypeScript config file

    JSON output merges into the existing file by default, replacing only the
    entry for the record's network. TypeScript output always replaces the
    whole file.
    """

    def __init__(self, path: Union[Path, str], output_format: str = "json", merge: bool = True):
        """
        Initialize Network Config Writer

        Args:
            path: Destination file
            output_format: "json" or "ts"
            merge: Keep other networks already in a JSON config

        Raises:
            ValueError: If output_format is unknown
        """
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format '{output_format}', expected one of {OUTPUT_FORMATS}")

        self.path = Path(path)
        self.output_format = output_format
        self.merge = merge

    def render(self, record: DeployedContractRecord) -> str:
        """Build the full file content for a record"""
        if self.output_format == "ts":
            return render_typescript(record)

        if self.merge:
            config = load_network_config(self.path)
            previous = config["networks"].get(record.network)
            if isinstance(previous, dict):
                logger.info(f"Replacing {record.network} entry (was {previous.get('address')})")
            elif previous is not None:
                logger.warning(f"Existing {record.network} entry is not an object ({previous!r}), replacing it")
        else:
            config = {"networks": {}}

        config["networks"][record.network] = record.to_config_entry()
        return json.dumps(config, indent=2) + "\n"

    def _target_mode(self) -> int:
        """Permission bits for the written file"""
        try:
            return stat.S_IMODE(os.stat(self.path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def write(self, record: DeployedContractRecord) -> Path:
        """
        Write the record to disk

        The content goes to a temporary file in the destination directory
        and is then moved over the destination. The file keeps the mode of
        the file it replaces, or gets the umask default when it is new.

        Args:
            record: Confirmed deployment

        Returns:
            Path that was written

        Raises:
            FilesystemError: If the destination cannot be read or written
        """
        try:
            content = self.render(record)
            mode = self._target_mode()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                # mkstemp creates the file as 0600
                os.chmod(tmp_name, mode)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except FilesystemError:
            raise
        except OSError as e:
            raise FilesystemError(f"Cannot write network config {self.path}: {e}") from e

        logger.success(f"Wrote {record.network} address to {self.path}")
        return self.path

"""
Unit Tests for the command line entry point
"""

import json
import sys
from unittest.mock import AsyncMock, patch

import pytest
import requests
from loguru import logger

import main
from deployer import DeployedContractRecord, TransportError
from utils.network_config import NetworkConfigWriter

from conftest import TEST_CONTRACT_ADDRESS_CHECKSUM, TEST_PRIVATE_KEY, TEST_RPC_URL


@pytest.fixture(autouse=True)
def env(monkeypatch):
    for var in ("RPC_URL", "PRIVATE_KEY"):
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.setenv("RPC_URL", TEST_RPC_URL)
    monkeypatch.setenv("PRIVATE_KEY", TEST_PRIVATE_KEY)


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def argv(tmp_path, metadata_file):
    return [
        "--env-file", str(tmp_path / "missing.env"),
        "--metadata", str(metadata_file),
        "--output", str(tmp_path / "config" / "networks.json"),
        "--log-file", "",
        "--poll-interval", "0",
    ]


@pytest.fixture
def record():
    return DeployedContractRecord(
        network="Sonic", chain_id=14601, url=TEST_RPC_URL, address=TEST_CONTRACT_ADDRESS_CHECKSUM
    )


class TestArguments:
    """Test CLI parsing"""

    def test_defaults(self):
        args = main.parse_args([])

        assert args.env_file == ".env.local"
        assert args.output_format == "json"
        assert args.overwrite is False
        assert args.receipt_timeout is None

    def test_default_output_follows_format(self):
        settings = main.build_settings(main.parse_args(["--format", "ts", "--env-file", ""]))

        assert str(settings.output_path).endswith("config.ts")
        assert settings.output_format == "ts"

    def test_overwrite_disables_merge(self):
        settings = main.build_settings(main.parse_args(["--overwrite", "--env-file", ""]))

        assert settings.merge is False


class TestExitCodes:
    """Each outcome maps to its own exit code"""

    def test_success(self, argv, record, tmp_path):
        with patch("main.Deployer") as deployer_cls:
            deployer_cls.return_value.deploy = AsyncMock(return_value=record)

            assert main.main(argv) == 0

        kwargs = deployer_cls.call_args.kwargs
        assert isinstance(kwargs["config_writer"], NetworkConfigWriter)
        assert kwargs["config_writer"].path == tmp_path / "config" / "networks.json"
        assert kwargs["receipt_timeout"] is None

    def test_missing_configuration(self, argv, monkeypatch):
        monkeypatch.delenv("PRIVATE_KEY")

        assert main.main(argv) == 2

    def test_missing_artifact(self, argv, tmp_path):
        argv[argv.index("--metadata") + 1] = str(tmp_path / "missing.json")

        assert main.main(argv) == 3

    def test_non_hex_bytecode(self, argv, metadata_file, metadata_json, w3):
        metadata_file.write_text(json.dumps({**metadata_json, "bytecode": "0xZZ"}))

        with patch("deployer.deployer.RPCManager") as rpc_manager_cls:
            rpc_manager_cls.return_value.get_web3.return_value = w3

            assert main.main(argv) == 3

        w3.eth.contract.assert_not_called()

    def test_transport_error(self, argv, tmp_path):
        with patch("main.Deployer") as deployer_cls:
            deployer_cls.return_value.deploy = AsyncMock(side_effect=TransportError("Connection refused"))

            assert main.main(argv) == 4

        assert not (tmp_path / "config" / "networks.json").exists()

    def test_interrupted(self, argv):
        with patch("main.Deployer") as deployer_cls:
            deployer_cls.return_value.deploy = AsyncMock(side_effect=KeyboardInterrupt)

            assert main.main(argv) == 130


class TestEndToEnd:
    """Full run with the node mocked at the RPC layer"""

    def test_writes_receipt_address(self, argv, w3, tmp_path):
        with patch("deployer.deployer.RPCManager") as rpc_manager_cls:
            rpc_manager_cls.return_value.get_web3.return_value = w3

            assert main.main(argv) == 0

        rpc_manager_cls.assert_called_once_with(TEST_RPC_URL)

        with open(tmp_path / "config" / "networks.json") as f:
            entry = json.load(f)["networks"]["Sonic"]

        assert entry == {
            "url": TEST_RPC_URL,
            "chainId": 14601,
            "address": TEST_CONTRACT_ADDRESS_CHECKSUM,
        }

    def test_unreachable_endpoint(self, argv, w3, tmp_path):
        w3.eth.get_transaction_count.side_effect = requests.exceptions.ConnectionError("refused")

        with patch("deployer.deployer.RPCManager") as rpc_manager_cls:
            rpc_manager_cls.return_value.get_web3.return_value = w3
            exit_code = main.main(argv)

        assert exit_code == 4
        assert not (tmp_path / "config" / "networks.json").exists()

    def test_refused_connection_real_provider(self, argv, monkeypatch, tmp_path):
        # Nothing listens on the discard port
        monkeypatch.setenv("RPC_URL", "http://127.0.0.1:9")

        assert main.main(argv) == 4
        assert not (tmp_path / "config" / "networks.json").exists()

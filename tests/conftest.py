"""Shared pytest fixtures for deployer tests."""

import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from loguru import logger

from deployer.types import ContractArtifact, DeploymentCredentials

# First Hardhat / Anvil development account
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

TEST_RPC_URL = "http://localhost:9999"
TEST_TX_HASH = "0x" + "ab" * 32
TEST_CONTRACT_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
TEST_CONTRACT_ADDRESS_CHECKSUM = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

# Init code that deploys a runtime returning 42 for any call
ANSWER_BYTECODE = "0x600a600c600039600a6000f3602a60005260206000f3"
ANSWER_ABI = [
    {
        "type": "function",
        "name": "answer",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    }
]


@pytest.fixture
def credentials() -> DeploymentCredentials:
    """Credentials pointing at a dummy endpoint."""
    return DeploymentCredentials(rpc_url=TEST_RPC_URL, private_key=TEST_PRIVATE_KEY)


@pytest.fixture
def artifact() -> ContractArtifact:
    """Trivial no-argument-constructor contract."""
    return ContractArtifact(abi=ANSWER_ABI, bytecode=ANSWER_BYTECODE, name="Answer")


@pytest.fixture
def metadata_json() -> Dict[str, Any]:
    """Metadata document as produced by the contract build."""
    return {"contractName": "Answer", "abi": ANSWER_ABI, "bytecode": ANSWER_BYTECODE}


@pytest.fixture
def metadata_file(tmp_path: Path, metadata_json: Dict[str, Any]) -> Path:
    """Metadata document written to a temporary file."""
    path = tmp_path / "artifacts" / "Metadata.json"
    path.parent.mkdir(parents=True)
    with open(path, "w") as f:
        json.dump(metadata_json, f)
    return path


@pytest.fixture
def receipt() -> Dict[str, Any]:
    """Successful contract-creation receipt."""
    return {
        "status": 1,
        "contractAddress": TEST_CONTRACT_ADDRESS,
        "blockNumber": 7,
        "gasUsed": 60000,
    }


@pytest.fixture
def w3(receipt: Dict[str, Any]) -> MagicMock:
    """
    Mock Web3 instance that accepts a deployment.

    build_transaction fills the same defaults web3 would from a node
    reporting chain id 14601.
    """
    w3 = MagicMock()
    w3.eth.get_transaction_count.return_value = 0

    def build_transaction(params):
        return {
            **params,
            "value": 0,
            "gas": 100000,
            "gasPrice": 10**9,
            "chainId": 14601,
            "data": ANSWER_BYTECODE,
        }

    factory = w3.eth.contract.return_value
    factory.constructor.return_value.build_transaction.side_effect = build_transaction

    w3.eth.send_raw_transaction.return_value = HexBytes(TEST_TX_HASH)
    w3.eth.get_transaction_receipt.return_value = receipt
    return w3


@pytest.fixture
def log_messages():
    """Collect loguru messages at WARNING and above."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)

"""Shared pytest fixtures for pumplaunch tests.

This module provides fixtures for:
- Isolated settings and config files under tmp_path
- Keypairs and a config store with credentials
- Serialized unsigned transactions as returned by PumpPortal
- Mocked adapters for the launch workflow

Usage:
    def test_something(store, wallet):
        store.create_wallet(Network.DEVNET)
"""

import json
from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import VersionedTransaction

from pumplaunch.config.settings import Settings, get_settings
from pumplaunch.data.config_store import ConfigStore

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Run every test from tmp_path with default settings and logging."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "PUMPLAUNCH_CONFIG_FILE",
        "PUMPLAUNCH_LOG_LEVEL",
        "PUMPLAUNCH_DEBUG",
        "PUMPLAUNCH_DEVNET_RPC_URL",
        "PUMPLAUNCH_MAINNET_RPC_URL",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any .env file."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


# =============================================================================
# Config and Wallets
# =============================================================================


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


@pytest.fixture
def write_config(config_path: Path) -> Callable[..., Path]:
    """Write a config file with the given Pinata keys."""

    def _write(api_key: str = "test-key", secret_api_key: str = "test-secret") -> Path:
        config_path.write_text(
            json.dumps(
                {
                    "devnet": {"wallet": "devnet-wallet.json"},
                    "mainnet": {"wallet": "mainnet-wallet.json"},
                    "pinata": {"apiKey": api_key, "secretApiKey": secret_api_key},
                }
            )
        )
        return config_path

    return _write


@pytest.fixture
def store(write_config: Callable[..., Path]) -> ConfigStore:
    """Config store with Pinata credentials and no wallets yet."""
    return ConfigStore.open(write_config())


@pytest.fixture
def wallet() -> Keypair:
    return Keypair()


# =============================================================================
# Transactions
# =============================================================================


@pytest.fixture
def build_unsigned_tx() -> Callable[[Pubkey, Pubkey], bytes]:
    """Serialize an unsigned v0 transaction needing payer and mint signatures.

    Stands in for the create transaction PumpPortal returns.
    """

    def _build(payer: Pubkey, mint: Pubkey) -> bytes:
        instructions = [
            transfer(TransferParams(from_pubkey=payer, to_pubkey=mint, lamports=1)),
            transfer(TransferParams(from_pubkey=mint, to_pubkey=payer, lamports=1)),
        ]
        message = MessageV0.try_compile(payer, instructions, [], Hash.default())
        tx = VersionedTransaction.populate(message, [Signature.default(), Signature.default()])
        return bytes(tx)

    return _build


# =============================================================================
# Mock Adapters
# =============================================================================


@pytest.fixture
def mock_pinning_client() -> MagicMock:
    """Mock pinning adapter returning fixed gateway URIs."""
    mock = MagicMock()
    mock.upload_image = AsyncMock(return_value="https://gateway.pinata.cloud/ipfs/QmImage")
    mock.upload_metadata = AsyncMock(return_value="https://gateway.pinata.cloud/ipfs/QmMeta")
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_network_client() -> MagicMock:
    """Mock network adapter for a funded wallet."""
    mock = MagicMock()
    mock.check_balance = AsyncMock(return_value=1.5)
    mock.get_latest_blockhash = AsyncMock(return_value=Hash.new_unique())
    mock.send_transaction = AsyncMock(return_value="5VERYrealLookingSignature")
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def mock_trade_client(build_unsigned_tx: Callable[[Pubkey, Pubkey], bytes]) -> MagicMock:
    """Mock trade adapter building a transaction for the requested keys."""

    async def _request(wallet_public_key, mint_public_key, ticker, metadata_uri, params=None):
        return build_unsigned_tx(
            Pubkey.from_string(wallet_public_key), Pubkey.from_string(mint_public_key)
        )

    mock = MagicMock()
    mock.request_trade_transaction = AsyncMock(side_effect=_request)
    mock.close = AsyncMock()
    return mock

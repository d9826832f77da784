"""Config file and wallet keypair storage.

The config file maps each network to a wallet keypair file and holds the
Pinata credentials. Wallet files hold the 64 secret key bytes as a JSON
array, the format used by the Solana CLI.

SECURITY NOTES:
- Secret keys are NEVER logged
- Writes are not atomic; a crash mid-write can leave a truncated file
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError
from solders.keypair import Keypair

from pumplaunch.core.exceptions import ConfigError, CredentialsError, WalletNotFoundError
from pumplaunch.models.config import AppConfig, PinataConfig
from pumplaunch.models.wallet import Network, WalletInfo

log = structlog.get_logger(__name__)


def load_config(path: str | Path) -> AppConfig:
    """Load the config file, writing the default skeleton if it is absent.

    Args:
        path: Config file path.

    Returns:
        Parsed config.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON,
            or does not match the config schema.
    """
    path = Path(path)

    if not path.exists():
        config = AppConfig()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(config.to_file_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot write default config {path}: {e}") from e
        log.info("config_created", path=str(path))
        return config

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log.error("config_load_failed", path=str(path), error=str(e))
        raise ConfigError(f"Error loading config {path}: {e}") from e

    try:
        config = AppConfig.model_validate(raw)
    except ValidationError as e:
        log.error("config_invalid", path=str(path), errors=e.error_count())
        raise ConfigError(f"Invalid config {path}: {e}") from e

    log.debug("config_loaded", path=str(path))
    return config


class ConfigStore:
    """Access to the config and the per-network wallet files.

    Loaded once at process start and passed to whatever needs it.

    Example:
        store = ConfigStore.open("config.json")
        info = store.create_wallet(Network.DEVNET)
        keypair = store.load_wallet(Network.DEVNET)
    """

    def __init__(self, path: str | Path, config: AppConfig) -> None:
        self.path = Path(path)
        self.config = config

    @classmethod
    def open(cls, path: str | Path) -> ConfigStore:
        """Load the config at path and wrap it in a store."""
        return cls(path, load_config(path))

    def wallet_path(self, network: Network) -> Path:
        """Wallet file path for a network.

        Relative paths resolve against the config file's directory.
        """
        wallet = Path(self.config.network(network).wallet)
        if wallet.is_absolute():
            return wallet
        return self.path.parent / wallet

    def create_wallet(self, network: Network) -> WalletInfo:
        """Generate a new keypair and save it as the network's wallet.

        Any existing wallet file at that path is overwritten without
        confirmation.
        """
        wallet_file = self.wallet_path(network)
        keypair = Keypair()

        try:
            wallet_file.parent.mkdir(parents=True, exist_ok=True)
            wallet_file.write_text(json.dumps(list(bytes(keypair))), encoding="utf-8")
        except OSError as e:
            log.error("wallet_create_failed", path=str(wallet_file), error=str(e))
            raise ConfigError(f"Cannot write wallet file {wallet_file}: {e}") from e

        address = str(keypair.pubkey())
        log.info(
            "wallet_created",
            network=network.value,
            path=str(wallet_file),
            public_key=address,
        )
        return WalletInfo.for_address(str(wallet_file), address, network)

    def load_wallet(self, network: Network) -> Keypair:
        """Load the network's wallet keypair.

        Raises:
            WalletNotFoundError: If the wallet file does not exist.
            ConfigError: If the file is not a 64-byte JSON array.
        """
        wallet_file = self.wallet_path(network)
        if not wallet_file.exists():
            raise WalletNotFoundError(str(wallet_file))

        try:
            secret = json.loads(wallet_file.read_text(encoding="utf-8"))
            keypair = Keypair.from_bytes(bytes(secret))
        except (OSError, TypeError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            log.error("wallet_load_failed", path=str(wallet_file), error=type(e).__name__)
            raise ConfigError(f"Invalid wallet file {wallet_file}: {e}") from e

        log.info(
            "wallet_loaded",
            network=network.value,
            path=str(wallet_file),
            public_key=str(keypair.pubkey()),
        )
        return keypair

    def pinata_credentials(self) -> PinataConfig:
        """Pinata credentials from the config.

        Raises:
            CredentialsError: If either key is missing.
        """
        credentials = self.config.pinata
        if not credentials.is_complete:
            raise CredentialsError(
                f"Pinata API credentials not found in {self.path}. "
                "Please add them to continue."
            )
        log.debug("pinata_credentials_loaded")
        return credentials

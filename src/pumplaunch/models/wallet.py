"""Wallet data models.

SECURITY: Secret keys are NEVER stored in these models. Only the
keypair file path and the public address are kept.
"""

from __future__ import annotations

from enum import Enum

import base58
from pydantic import BaseModel, Field, field_validator

EXPLORER_URL = "https://explorer.solana.com"
FAUCET_URL = "https://faucet.solana.com"


class Network(str, Enum):
    """Solana cluster a wallet belongs to."""

    DEVNET = "devnet"
    MAINNET = "mainnet"

    @classmethod
    def from_flag(cls, mainnet: bool) -> Network:
        """Map the --mainnet flag to a network."""
        return cls.MAINNET if mainnet else cls.DEVNET

    @property
    def is_production(self) -> bool:
        return self == Network.MAINNET


class WalletInfo(BaseModel):
    """Result of creating a wallet."""

    path: str = Field(..., description="Keypair file the secret key was written to")
    address: str = Field(..., description="Base58 public key")
    network: Network
    explorer_url: str
    faucet_url: str | None = Field(None, description="Faucet link, devnet only")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Validate address is a 32-byte base58 public key."""
        try:
            decoded = base58.b58decode(v)
        except ValueError as e:
            raise ValueError(f"Invalid base58 address: {e}") from e
        if len(decoded) != 32:
            raise ValueError("Invalid address length")
        return v

    @classmethod
    def for_address(cls, path: str, address: str, network: Network) -> WalletInfo:
        """Build the info block with explorer and faucet links."""
        return cls(
            path=path,
            address=address,
            network=network,
            explorer_url=f"{EXPLORER_URL}/address/{address}?cluster={network.value}",
            faucet_url=None if network.is_production else FAUCET_URL,
        )

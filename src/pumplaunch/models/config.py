"""Models for the on-disk JSON config file.

Field aliases keep the file format camelCase:

    {
      "devnet": {"wallet": "devnet-wallet.json"},
      "mainnet": {"wallet": "mainnet-wallet.json"},
      "pinata": {"apiKey": "", "secretApiKey": ""}
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pumplaunch.models.wallet import Network


class NetworkConfig(BaseModel):
    """Per-network settings stored in the config file."""

    wallet: str = Field(..., min_length=1, description="Wallet file path")


class PinataConfig(BaseModel):
    """Pinata API credentials.

    SECURITY: secret_api_key must never be logged.
    """

    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(default="", alias="apiKey")
    secret_api_key: str = Field(default="", alias="secretApiKey")

    @property
    def is_complete(self) -> bool:
        """Both keys are present."""
        return bool(self.api_key and self.secret_api_key)


class AppConfig(BaseModel):
    """Complete config file contents."""

    devnet: NetworkConfig = Field(
        default_factory=lambda: NetworkConfig(wallet="devnet-wallet.json")
    )
    mainnet: NetworkConfig = Field(
        default_factory=lambda: NetworkConfig(wallet="mainnet-wallet.json")
    )
    pinata: PinataConfig = Field(default_factory=PinataConfig)

    def network(self, network: Network) -> NetworkConfig:
        """Get the settings block for a network."""
        if network == Network.MAINNET:
            return self.mainnet
        return self.devnet

    def to_file_dict(self) -> dict:
        """Serialize with the aliases used in the file."""
        return self.model_dump(by_alias=True)

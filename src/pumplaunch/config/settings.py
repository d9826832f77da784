"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """pumplaunch process configuration from environment variables.

    Pinata credentials and wallet paths live in the JSON config file,
    not here. See pumplaunch.data.config_store.
    """

    model_config = SettingsConfigDict(
        env_prefix="PUMPLAUNCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    debug: bool = Field(default=False, description="Pretty console logs instead of JSON")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Minimum log level"
    )

    # Local files
    config_file: str = Field(default="config.json", description="Path of the JSON config file")

    # Solana RPC
    devnet_rpc_url: str = Field(
        default="https://api.devnet.solana.com",
        description="Solana devnet RPC endpoint URL",
    )
    mainnet_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com",
        description="Solana mainnet RPC endpoint URL",
    )

    # Pinata
    pinata_api_url: str = Field(
        default="https://api.pinata.cloud", description="Pinata pinning API base URL"
    )
    pinata_gateway_url: str = Field(
        default="https://gateway.pinata.cloud", description="IPFS gateway for pinned content"
    )

    # PumpPortal
    pumpportal_url: str = Field(
        default="https://pumpportal.fun", description="PumpPortal trade API base URL"
    )

    http_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    @field_validator(
        "devnet_rpc_url",
        "mainnet_rpc_url",
        "pinata_api_url",
        "pinata_gateway_url",
        "pumpportal_url",
    )
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate endpoint URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

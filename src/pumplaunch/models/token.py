"""Token launch data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field
from solders.keypair import Keypair


class TokenMetadata(BaseModel):
    """Metadata JSON pinned to IPFS and referenced by the mint."""

    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1)
    description: str
    image: str = Field(..., description="Gateway URI of the pinned image")

    @classmethod
    def for_ticker(cls, ticker: str, image_uri: str) -> TokenMetadata:
        """Default metadata for a ticker."""
        return cls(
            name=ticker,
            symbol=ticker,
            description=f"This is {ticker} token.",
            image=image_uri,
        )


class TradeParameters(BaseModel):
    """Fixed parameters of the initial dev buy on token creation."""

    amount: float = Field(default=0.2, gt=0, description="Initial buy amount")
    slippage: float = Field(default=10, ge=0, le=100, description="Slippage percent")
    priority_fee: float = Field(default=0.0005, ge=0, description="Priority fee in SOL")
    pool: str = Field(default="pump")
    denominated_in_sol: bool = Field(default=True)

    def to_request_fields(self) -> dict[str, Any]:
        """Trade fields as the PumpPortal API expects them."""
        return {
            "denominatedInSol": "true" if self.denominated_in_sol else "false",
            "amount": self.amount,
            "slippage": self.slippage,
            "priorityFee": self.priority_fee,
            "pool": self.pool,
        }


@dataclass
class TokenSubmission:
    """State of one token launch, kept in memory for one invocation.

    Attributes:
        ticker: Token name and symbol.
        image_ref: Local path or URL the image was read from.
        mint_keypair: Fresh keypair whose pubkey becomes the mint address,
            generated once the metadata is pinned.
        image_uri: Gateway URI of the pinned image, once uploaded.
        metadata_uri: Gateway URI of the pinned metadata, once uploaded.
        signature: Broadcast transaction signature, once sent.
    """

    ticker: str
    image_ref: str
    mint_keypair: Keypair | None = None
    image_uri: str | None = None
    metadata_uri: str | None = None
    signature: str | None = None

    @property
    def mint_address(self) -> str | None:
        if self.mint_keypair is None:
            return None
        return str(self.mint_keypair.pubkey())

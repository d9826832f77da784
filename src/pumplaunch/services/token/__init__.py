"""Token launch orchestration."""

from pumplaunch.services.token.submitter import (
    NetworkClient,
    PinningClient,
    TokenSubmitter,
    TradeClient,
    sign_transaction,
)

__all__ = [
    "NetworkClient",
    "PinningClient",
    "TokenSubmitter",
    "TradeClient",
    "sign_transaction",
]

"""Solana network adapter."""

from pumplaunch.services.solana.network import (
    LAMPORTS_PER_SOL,
    SolanaNetworkClient,
    check_balance,
    get_connection,
)

__all__ = ["LAMPORTS_PER_SOL", "SolanaNetworkClient", "check_balance", "get_connection"]

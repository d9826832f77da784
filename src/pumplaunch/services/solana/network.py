"""Solana network adapter.

Thin wrapper over solana-py's AsyncClient for the three RPC calls the
launch flow needs: balance lookup, latest blockhash, raw transaction
broadcast. No retry and no connection pooling beyond the SDK's own.
"""

from __future__ import annotations

import structlog
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Processed
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from pumplaunch.config.settings import Settings, get_settings
from pumplaunch.core.exceptions import NetworkError

log = structlog.get_logger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000

_RPC_ERRORS = (SolanaRpcException, RPCException)


def lamports_to_sol(lamports: int) -> float:
    """Convert lamports to SOL."""
    return lamports / LAMPORTS_PER_SOL


class SolanaNetworkClient:
    """Client bound to one Solana cluster.

    Example:
        connection = get_connection(is_production=False)
        try:
            balance = await connection.check_balance(keypair.pubkey())
        finally:
            await connection.close()
    """

    SERVICE_NAME = "Solana RPC"

    def __init__(self, rpc_url: str, is_production: bool = False) -> None:
        self.rpc_url = rpc_url
        self.is_production = is_production
        self._client = AsyncClient(rpc_url)
        log.info(
            "solana_connected",
            cluster="mainnet" if is_production else "devnet",
            rpc_url=rpc_url,
        )

    def _error(self, action: str, e: Exception) -> NetworkError:
        log.error("solana_rpc_failed", action=action, error=str(e))
        return NetworkError(service=self.SERVICE_NAME, message=f"{action} failed: {e}")

    async def get_balance_lamports(self, pubkey: Pubkey) -> int:
        """Raw balance in lamports."""
        try:
            resp = await self._client.get_balance(pubkey)
        except _RPC_ERRORS as e:
            raise self._error("getBalance", e) from e
        return resp.value

    async def check_balance(self, pubkey: Pubkey) -> float:
        """Balance in SOL. Zero is a valid result."""
        balance = lamports_to_sol(await self.get_balance_lamports(pubkey))
        log.info("solana_balance_checked", public_key=str(pubkey)[:8] + "...", sol=balance)
        return balance

    async def get_latest_blockhash(self) -> Hash:
        """Latest blockhash for a new transaction."""
        try:
            resp = await self._client.get_latest_blockhash()
        except _RPC_ERRORS as e:
            raise self._error("getLatestBlockhash", e) from e
        blockhash = resp.value.blockhash
        log.debug("solana_blockhash_fetched", blockhash=str(blockhash))
        return blockhash

    async def send_transaction(self, tx: VersionedTransaction) -> str:
        """Broadcast a signed transaction with preflight at processed commitment.

        Returns:
            Base58 transaction signature.

        Raises:
            NetworkError: If the node rejects the transaction or is unreachable.
        """
        opts = TxOpts(skip_preflight=False, preflight_commitment=Processed)
        try:
            resp = await self._client.send_raw_transaction(bytes(tx), opts=opts)
        except _RPC_ERRORS as e:
            raise self._error("sendTransaction", e) from e
        signature = str(resp.value)
        log.info("solana_transaction_sent", signature=signature)
        return signature

    async def close(self) -> None:
        """Close the underlying RPC client."""
        await self._client.close()


def get_connection(is_production: bool, settings: Settings | None = None) -> SolanaNetworkClient:
    """Client bound to mainnet when is_production, devnet otherwise."""
    settings = settings or get_settings()
    url = settings.mainnet_rpc_url if is_production else settings.devnet_rpc_url
    return SolanaNetworkClient(url, is_production=is_production)


async def check_balance(connection: SolanaNetworkClient, wallet: Keypair) -> float:
    """Balance of a wallet keypair in SOL."""
    return await connection.check_balance(wallet.pubkey())

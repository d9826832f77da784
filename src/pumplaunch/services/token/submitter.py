"""Token launch orchestration.

Sequences the three external adapters and local signing:

    upload image -> upload metadata -> new mint keypair -> trade request
    -> latest blockhash -> sign (mint + wallet) -> broadcast

Any failure aborts the launch and propagates unchanged. Nothing is reused
between attempts; a retried launch pins a new image.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message, MessageV0
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from pumplaunch.core.exceptions import TradeRequestError
from pumplaunch.models.token import TokenMetadata, TokenSubmission, TradeParameters

log = structlog.get_logger(__name__)


class PinningClient(Protocol):
    """Stores token assets and returns their content URIs."""

    async def upload_image(self, image_ref: str) -> str: ...

    async def upload_metadata(self, metadata: TokenMetadata | dict[str, Any]) -> str: ...


class TradeClient(Protocol):
    """Builds unsigned token-creation transactions."""

    async def request_trade_transaction(
        self,
        wallet_public_key: str,
        mint_public_key: str,
        ticker: str,
        metadata_uri: str,
        params: TradeParameters | None = None,
    ) -> bytes: ...


class NetworkClient(Protocol):
    """Solana cluster access."""

    async def check_balance(self, pubkey: Pubkey) -> float: ...

    async def get_latest_blockhash(self) -> Hash: ...

    async def send_transaction(self, tx: VersionedTransaction) -> str: ...


def _with_blockhash(message: Message | MessageV0, blockhash: Hash) -> Message | MessageV0:
    """Copy of a compiled message with a new recent blockhash."""
    if isinstance(message, MessageV0):
        return MessageV0(
            message.header,
            message.account_keys,
            blockhash,
            message.instructions,
            message.address_table_lookups,
        )
    header = message.header
    return Message.new_with_compiled_instructions(
        header.num_required_signatures,
        header.num_readonly_signed_accounts,
        header.num_readonly_unsigned_accounts,
        message.account_keys,
        blockhash,
        message.instructions,
    )


def sign_transaction(
    raw_tx: bytes,
    blockhash: Hash,
    fee_payer: Keypair,
    signers: list[Keypair],
) -> VersionedTransaction:
    """Attach a blockhash to a serialized transaction and sign it.

    The fee payer is the first account key of the message, so it must
    already be the wallet's public key.

    Args:
        raw_tx: Serialized unsigned transaction.
        blockhash: Recent blockhash to attach.
        fee_payer: Wallet paying the fees.
        signers: Every keypair whose signature the message requires.

    Raises:
        TradeRequestError: If the transaction cannot be decoded, pays fees
            from another account, or needs a signer not given.
    """
    try:
        unsigned = VersionedTransaction.from_bytes(raw_tx)
    except Exception as e:
        raise TradeRequestError(
            service="PumpPortal", message=f"Undecodable transaction: {e}"
        ) from e

    message = unsigned.message
    if not message.account_keys or message.account_keys[0] != fee_payer.pubkey():
        raise TradeRequestError(
            service="PumpPortal",
            message=f"Transaction fee payer is not {fee_payer.pubkey()}",
        )

    try:
        return VersionedTransaction(_with_blockhash(message, blockhash), signers)
    except Exception as e:
        raise TradeRequestError(service="PumpPortal", message=f"Signing failed: {e}") from e


class TokenSubmitter:
    """Launches a token from a funded wallet.

    Example:
        submitter = TokenSubmitter(pinata, pumpportal, connection)
        signature = await submitter.submit_token(wallet, "./logo.png", "FOO")
    """

    def __init__(
        self,
        pinning: PinningClient,
        trade: TradeClient,
        network: NetworkClient,
        params: TradeParameters | None = None,
    ) -> None:
        self.pinning = pinning
        self.trade = trade
        self.network = network
        self.params = params or TradeParameters()

    async def submit_token(self, wallet: Keypair, image_ref: str, ticker: str) -> str:
        """Run the whole launch sequence.

        Args:
            wallet: Creator keypair, pays fees and the initial buy.
            image_ref: Local image path or URL.
            ticker: Token name and symbol.

        Returns:
            Signature of the broadcast transaction.
        """
        submission = TokenSubmission(ticker=ticker, image_ref=image_ref)
        bound_log = log.bind(ticker=ticker)
        bound_log.info("token_submission_started")

        try:
            submission.image_uri = await self.pinning.upload_image(image_ref)

            metadata = TokenMetadata.for_ticker(ticker, submission.image_uri)
            submission.metadata_uri = await self.pinning.upload_metadata(metadata)

            mint = Keypair()
            submission.mint_keypair = mint
            mint_address = str(mint.pubkey())
            bound_log = bound_log.bind(mint=mint_address)

            raw_tx = await self.trade.request_trade_transaction(
                str(wallet.pubkey()),
                mint_address,
                ticker,
                submission.metadata_uri,
                self.params,
            )

            blockhash = await self.network.get_latest_blockhash()
            tx = sign_transaction(raw_tx, blockhash, wallet, [mint, wallet])

            submission.signature = await self.network.send_transaction(tx)
        except Exception as e:
            bound_log.error("token_submission_failed", error=str(e))
            raise

        bound_log.info("token_submission_sent", signature=submission.signature)
        return submission.signature

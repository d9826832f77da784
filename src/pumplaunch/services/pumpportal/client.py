"""PumpPortal trade-local API client.

The trade-local endpoint builds an unsigned transaction for the caller to
sign and send. For action "create" it launches a pump.fun token and makes
the initial dev buy in the same transaction.

API Documentation: https://pumpportal.fun/local-trading-api/trading-api
"""

import structlog

from pumplaunch.config.settings import Settings, get_settings
from pumplaunch.core.exceptions import TradeRequestError
from pumplaunch.models.token import TradeParameters
from pumplaunch.services.base import BaseAPIClient

log = structlog.get_logger(__name__)


class PumpPortalClient(BaseAPIClient):
    """Async client for the PumpPortal trade-local endpoint.

    Only public keys are sent; signing happens locally.
    """

    SERVICE_NAME = "PumpPortal"
    ERROR_CLASS = TradeRequestError
    TRADE_PATH = "/api/trade-local"

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        super().__init__(
            base_url=settings.pumpportal_url,
            timeout=settings.http_timeout,
            headers={"Content-Type": "application/json"},
        )
        log.debug("pumpportal_client_initialized", base_url=self.base_url)

    async def request_trade_transaction(
        self,
        wallet_public_key: str,
        mint_public_key: str,
        ticker: str,
        metadata_uri: str,
        params: TradeParameters | None = None,
    ) -> bytes:
        """Request an unsigned token-creation transaction.

        Args:
            wallet_public_key: Base58 creator wallet address (fee payer).
            mint_public_key: Base58 address of the new mint.
            ticker: Token name and symbol.
            metadata_uri: Gateway URI of the pinned metadata.
            params: Initial buy parameters (default: fixed defaults).

        Returns:
            Serialized unsigned transaction.

        Raises:
            TradeRequestError: On any status other than 200.
        """
        params = params or TradeParameters()
        payload = {
            "publicKey": wallet_public_key,
            "action": "create",
            "tokenMetadata": {
                "name": ticker,
                "symbol": ticker,
                "uri": metadata_uri,
            },
            "mint": mint_public_key,
            **params.to_request_fields(),
        }

        log.info(
            "pumpportal_create_requested",
            ticker=ticker,
            mint=mint_public_key,
            amount=params.amount,
            pool=params.pool,
        )

        response = await self.post(self.TRADE_PATH, json=payload, ok_statuses={200})
        if not response.content:
            raise TradeRequestError(
                service=self.SERVICE_NAME,
                message="Empty transaction body",
                status_code=response.status_code,
            )

        log.debug("pumpportal_transaction_received", size=len(response.content))
        return response.content

"""pumplaunch exception hierarchy.

This module defines the base exception class and specialized exceptions
for each failure category of the launch workflow. Every error raised by
the package derives from PumpLaunchError so the CLI can report it and
exit with status 1.
"""


class PumpLaunchError(Exception):
    """Base exception for all pumplaunch errors."""

    pass


class ConfigError(PumpLaunchError):
    """Raised when the config file or a wallet file cannot be read.

    Example:
        raise ConfigError("config.json: Expecting value: line 1 column 1")
    """

    pass


class WalletNotFoundError(PumpLaunchError):
    """Raised when the wallet file for a network does not exist.

    Attributes:
        path: Wallet file path that was looked up.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Wallet file not found: {path}. "
            "Please create a wallet using --create-wallet"
        )


class CredentialsError(PumpLaunchError):
    """Raised when Pinata API credentials are missing from the config."""

    pass


class InsufficientBalanceError(PumpLaunchError):
    """Raised when the wallet cannot pay for the launch transaction.

    Attributes:
        balance: Wallet balance in SOL at the time of the check.
    """

    def __init__(self, balance: float) -> None:
        self.balance = balance
        super().__init__(f"Wallet balance is {balance} SOL")


class ExternalServiceError(PumpLaunchError):
    """Raised when an external service call fails.

    Upstream status and body are kept verbatim for diagnosis.

    Attributes:
        service: Name of the external service that failed.
        status_code: HTTP status code if available, None otherwise.
        body: Raw upstream response body if available.

    Example:
        raise ExternalServiceError(service="Pinata", message="Unauthorized", status_code=401)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        self.body = body
        detail = f"{service}: {message}"
        if status_code is not None:
            detail += f" (status {status_code})"
        if body:
            detail += f": {body}"
        super().__init__(detail)


class UploadError(ExternalServiceError):
    """Raised when the pinning service rejects or fails an upload."""

    pass


class TradeRequestError(ExternalServiceError):
    """Raised when the trade endpoint does not return a usable transaction."""

    pass


class NetworkError(ExternalServiceError):
    """Raised when a Solana RPC call fails."""

    pass

"""Command-line entry point.

Usage:
    pumplaunch --create-wallet [--mainnet]
    pumplaunch [--mainnet] IMAGE_PATH TICKER

Exit status is 0 on success and 1 on any handled error.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from typing import NoReturn

import structlog
from pydantic import ValidationError
from solders.keypair import Keypair

from pumplaunch import __version__
from pumplaunch.config.logging import configure_logging
from pumplaunch.config.settings import Settings, get_settings
from pumplaunch.core.exceptions import InsufficientBalanceError, PumpLaunchError
from pumplaunch.data.config_store import ConfigStore
from pumplaunch.models.wallet import FAUCET_URL, Network
from pumplaunch.services.pinata.client import PinataClient
from pumplaunch.services.pumpportal.client import PumpPortalClient
from pumplaunch.services.solana.network import check_balance, get_connection
from pumplaunch.services.token.submitter import TokenSubmitter

log = structlog.get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

SOLSCAN_TX_URL = "https://solscan.io/tx/{signature}"

EXAMPLES = """\
Examples:
  Create a wallet:  pumplaunch --create-wallet
  Submit a token:   pumplaunch --mainnet ./path-to-image.png TOKEN
"""


class LaunchArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = LaunchArgumentParser(
        prog="pumplaunch",
        description="Manage Solana wallets and launch tokens on pump.fun.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image_path", nargs="?", metavar="imagePath", help="Image file or URL")
    parser.add_argument("ticker", nargs="?", help="Token name and symbol")
    parser.add_argument(
        "--mainnet", action="store_true", help="Use Mainnet (production environment)"
    )
    parser.add_argument("--create-wallet", action="store_true", help="Create a new wallet")
    parser.add_argument("--config", metavar="PATH", help="Config file (default: config.json)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def confirm_mainnet() -> None:
    """Block until the user confirms a mainnet operation.

    Raises:
        KeyboardInterrupt: On Ctrl+C.
        EOFError: If stdin is closed.
    """
    print("WARNING: You are about to perform an operation on the Mainnet.")
    input("Press Enter to confirm or Ctrl+C to cancel: ")


def print_wallet_created(store: ConfigStore, network: Network) -> None:
    print(f"Creating a new {network.value} wallet...")
    info = store.create_wallet(network)
    print(f"Wallet saved to: {info.path}")
    print(f"Wallet Address: {info.address}")
    print(f"View on Explorer: {info.explorer_url}")
    if info.faucet_url:
        print(f"To fund your wallet, visit the Solana Faucet: {info.faucet_url}")


async def launch_token(
    store: ConfigStore,
    wallet: Keypair,
    network: Network,
    image_path: str,
    ticker: str,
    settings: Settings,
) -> str:
    """Check the wallet balance and launch the token.

    Raises:
        InsufficientBalanceError: If the wallet holds no SOL. Nothing is
            uploaded in that case.
    """
    connection = get_connection(network.is_production, settings)
    pinata = PinataClient(store.pinata_credentials, settings)
    pumpportal = PumpPortalClient(settings)

    try:
        balance = await check_balance(connection, wallet)
        print(f"Wallet balance: {balance} SOL")
        if balance == 0:
            raise InsufficientBalanceError(balance)

        print("Preparing submission to PumpFun...")
        submitter = TokenSubmitter(pinata, pumpportal, connection)
        return await submitter.submit_token(wallet, image_path, ticker)
    finally:
        await pinata.close()
        await pumpportal.close()
        await connection.close()


def run(args: argparse.Namespace, settings: Settings) -> int:
    network = Network.from_flag(args.mainnet)

    if network.is_production:
        confirm_mainnet()

    store = ConfigStore.open(args.config or settings.config_file)

    if args.create_wallet:
        print_wallet_created(store, network)
        return EXIT_SUCCESS

    if not args.image_path or not args.ticker:
        print("Error: Both imagePath and ticker are required.", file=sys.stderr)
        print("Run 'pumplaunch --help' for usage information.", file=sys.stderr)
        return EXIT_FAILURE

    wallet = store.load_wallet(network)
    print(f"Using wallet: {wallet.pubkey()}")

    signature = asyncio.run(
        launch_token(store, wallet, network, args.image_path, args.ticker, settings)
    )
    print("Token creation successful! View transaction:")
    print(SOLSCAN_TX_URL.format(signature=signature))
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the command and return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return EXIT_FAILURE
    configure_logging(settings)

    try:
        return run(args, settings)
    except InsufficientBalanceError as e:
        print(f"Error: {e}. Please fund your wallet using {FAUCET_URL}", file=sys.stderr)
    except PumpLaunchError as e:
        log.debug("command_failed", error_type=type(e).__name__)
        print(f"Operation failed: {e}", file=sys.stderr)
    except (KeyboardInterrupt, EOFError):
        print("\nCancelled.", file=sys.stderr)
    except Exception as e:
        log.exception("command_crashed", error_type=type(e).__name__)
        print(f"Operation failed: {type(e).__name__}: {e}", file=sys.stderr)
    return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())

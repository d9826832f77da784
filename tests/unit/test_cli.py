"""Unit tests for the command-line entry point."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import respx

from pumplaunch.cli import EXIT_FAILURE, EXIT_SUCCESS, main
from pumplaunch.core.exceptions import UploadError
from pumplaunch.data.config_store import ConfigStore
from pumplaunch.models.wallet import Network
from pumplaunch.services.pinata.client import PinataClient


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep structlog unconfigured so output stays in capsys."""
    with patch("pumplaunch.cli.configure_logging"):
        yield


@pytest.fixture
def adapters(mock_pinning_client, mock_trade_client, mock_network_client):
    """Replace the real adapters built by the CLI."""
    with (
        patch("pumplaunch.cli.get_connection", return_value=mock_network_client) as connection,
        patch("pumplaunch.cli.PinataClient", return_value=mock_pinning_client) as pinata,
        patch("pumplaunch.cli.PumpPortalClient", return_value=mock_trade_client) as pumpportal,
    ):
        yield MagicMock(connection=connection, pinata=pinata, pumpportal=pumpportal)


@pytest.fixture
def funded_store(store: ConfigStore) -> ConfigStore:
    store.create_wallet(Network.DEVNET)
    return store


def run_cli(config_path: Path, *args: str) -> int:
    return main(["--config", str(config_path), *args])


class TestCreateWallet:
    """Tests for --create-wallet."""

    def test_devnet_wallet(self, config_path: Path, capsys: pytest.CaptureFixture) -> None:
        exit_code = run_cli(config_path, "--create-wallet")

        out = capsys.readouterr().out
        wallet_file = config_path.parent / "devnet-wallet.json"
        assert exit_code == EXIT_SUCCESS
        assert wallet_file.exists()
        assert f"Wallet saved to: {wallet_file}" in out
        assert "explorer.solana.com/address/" in out
        assert "https://faucet.solana.com" in out

    def test_mainnet_wallet_asks_for_confirmation(
        self, config_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        with patch("builtins.input", return_value="") as mock_input:
            exit_code = run_cli(config_path, "--mainnet", "--create-wallet")

        out = capsys.readouterr().out
        assert exit_code == EXIT_SUCCESS
        mock_input.assert_called_once()
        assert "WARNING" in out
        assert (config_path.parent / "mainnet-wallet.json").exists()
        assert "faucet" not in out

    def test_mainnet_cancelled(self, config_path: Path) -> None:
        with patch("builtins.input", side_effect=KeyboardInterrupt):
            exit_code = run_cli(config_path, "--mainnet", "--create-wallet")

        assert exit_code == EXIT_FAILURE
        assert not (config_path.parent / "mainnet-wallet.json").exists()


class TestSubmitToken:
    """Tests for the token launch command."""

    def test_missing_arguments(
        self, funded_store: ConfigStore, adapters, capsys: pytest.CaptureFixture
    ) -> None:
        exit_code = run_cli(funded_store.path, "./img.png")

        assert exit_code == EXIT_FAILURE
        assert "Both imagePath and ticker are required" in capsys.readouterr().err
        adapters.connection.assert_not_called()

    def test_missing_wallet(
        self, store: ConfigStore, adapters, capsys: pytest.CaptureFixture
    ) -> None:
        exit_code = run_cli(store.path, "./img.png", "FOO")

        err = capsys.readouterr().err
        assert exit_code == EXIT_FAILURE
        assert "Operation failed: Wallet file not found" in err
        assert not store.wallet_path(Network.DEVNET).exists()

    def test_invalid_config(self, config_path: Path, capsys: pytest.CaptureFixture) -> None:
        config_path.write_text("{broken")

        exit_code = run_cli(config_path, "./img.png", "FOO")

        assert exit_code == EXIT_FAILURE
        assert "Error loading config" in capsys.readouterr().err

    def test_zero_balance_aborts_before_uploads(
        self,
        funded_store: ConfigStore,
        adapters,
        mock_pinning_client,
        mock_trade_client,
        mock_network_client,
        capsys: pytest.CaptureFixture,
    ) -> None:
        """
        Given: An unfunded wallet
        When: A token launch is requested
        Then: Exit code is 1 and neither pinning nor trade adapters are called
        """
        mock_network_client.check_balance.return_value = 0

        exit_code = run_cli(funded_store.path, "./img.png", "FOO")

        assert exit_code == EXIT_FAILURE
        assert "Please fund your wallet" in capsys.readouterr().err
        mock_pinning_client.upload_image.assert_not_called()
        mock_pinning_client.upload_metadata.assert_not_called()
        mock_trade_client.request_trade_transaction.assert_not_called()
        mock_network_client.send_transaction.assert_not_called()
        mock_network_client.close.assert_awaited_once()

    def test_successful_launch(
        self,
        funded_store: ConfigStore,
        adapters,
        mock_network_client,
        capsys: pytest.CaptureFixture,
    ) -> None:
        exit_code = run_cli(funded_store.path, "./img.png", "FOO")

        out = capsys.readouterr().out
        assert exit_code == EXIT_SUCCESS
        assert "https://solscan.io/tx/5VERYrealLookingSignature" in out
        adapters.connection.assert_called_once()
        assert adapters.connection.call_args.args[0] is False
        mock_network_client.send_transaction.assert_awaited_once()

    def test_pinata_credentials_come_from_config(
        self, funded_store: ConfigStore, adapters
    ) -> None:
        run_cli(funded_store.path, "./img.png", "FOO")

        credentials_provider = adapters.pinata.call_args.args[0]
        assert credentials_provider().api_key == "test-key"

    def test_upload_error_is_reported(
        self,
        funded_store: ConfigStore,
        adapters,
        mock_pinning_client,
        mock_network_client,
        capsys: pytest.CaptureFixture,
    ) -> None:
        mock_pinning_client.upload_image.side_effect = UploadError(
            service="Pinata", message="Unauthorized", status_code=401, body="bad key"
        )

        exit_code = run_cli(funded_store.path, "./img.png", "FOO")

        err = capsys.readouterr().err
        assert exit_code == EXIT_FAILURE
        assert "Operation failed: Pinata: Unauthorized (status 401): bad key" in err
        mock_pinning_client.close.assert_awaited_once()
        mock_network_client.close.assert_awaited_once()

    def test_unexpected_error_is_reported_with_exit_code(
        self,
        funded_store: ConfigStore,
        adapters,
        mock_pinning_client,
        capsys: pytest.CaptureFixture,
    ) -> None:
        """
        Given: An adapter failing with an error outside the domain hierarchy
        When: A token launch is requested
        Then: main() reports it and returns 1 instead of raising
        """
        mock_pinning_client.upload_image.side_effect = RuntimeError("socket closed")

        exit_code = run_cli(funded_store.path, "./img.png", "FOO")

        assert exit_code == EXIT_FAILURE
        assert "Operation failed: RuntimeError: socket closed" in capsys.readouterr().err
        mock_pinning_client.close.assert_awaited_once()

    @respx.mock
    def test_non_json_pinata_response_is_reported(
        self, funded_store: ConfigStore, mock_network_client, capsys: pytest.CaptureFixture
    ) -> None:
        respx.post("https://api.pinata.cloud/pinning/pinFileToIPFS").mock(
            return_value=httpx.Response(200, text="<html>gateway</html>")
        )
        image = funded_store.path.parent / "img.png"
        image.write_bytes(b"\x89PNG")

        with patch("pumplaunch.cli.get_connection", return_value=mock_network_client):
            exit_code = run_cli(funded_store.path, str(image), "FOO")

        err = capsys.readouterr().err
        assert exit_code == EXIT_FAILURE
        assert "Operation failed: Pinata: Response is not JSON (status 200)" in err
        mock_network_client.send_transaction.assert_not_called()


class TestMissingCredentials:
    """Launch with a config that has no Pinata keys."""

    def test_fails_with_credentials_error(
        self,
        write_config: Callable[..., Path],
        capsys: pytest.CaptureFixture,
    ) -> None:
        config_path = write_config(api_key="", secret_api_key="")
        ConfigStore.open(config_path).create_wallet(Network.DEVNET)

        network = MagicMock()
        network.check_balance = AsyncMock(return_value=1.0)
        network.close = AsyncMock()

        with (
            patch("pumplaunch.cli.get_connection", return_value=network),
            patch.object(PinataClient, "post", new_callable=AsyncMock) as post,
            patch.object(PinataClient, "get", new_callable=AsyncMock) as get,
        ):
            exit_code = run_cli(config_path, "./img.png", "FOO")

        assert exit_code == EXIT_FAILURE
        assert "Pinata API credentials not found" in capsys.readouterr().err
        post.assert_not_called()
        get.assert_not_called()


def test_version(capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert "pumplaunch 1.0.0" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv", [["--bogus"], ["./img.png", "FOO", "extra"]], ids=["unknown-flag", "extra-positional"]
)
def test_usage_errors_exit_with_failure(argv: list[str], capsys: pytest.CaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)

    assert exc_info.value.code == EXIT_FAILURE
    assert "error:" in capsys.readouterr().err


def test_default_config_is_created_in_working_directory(tmp_path: Path) -> None:
    exit_code = main(["--create-wallet"])

    assert exit_code == EXIT_SUCCESS
    config = json.loads((tmp_path / "config.json").read_text())
    assert config["devnet"]["wallet"] == "devnet-wallet.json"
    assert (tmp_path / "devnet-wallet.json").exists()

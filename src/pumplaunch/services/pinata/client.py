"""Pinata API client for pinning token assets to IPFS.

API Documentation: https://docs.pinata.cloud/api-reference
Auth: pinata_api_key / pinata_secret_api_key headers, read from the
config file at call time.
"""

import mimetypes
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
import structlog

from pumplaunch.config.settings import Settings, get_settings
from pumplaunch.core.exceptions import UploadError
from pumplaunch.models.config import PinataConfig
from pumplaunch.models.token import TokenMetadata
from pumplaunch.services.base import BaseAPIClient

log = structlog.get_logger(__name__)

DEFAULT_IMAGE_NAME = "image.png"
DEFAULT_IMAGE_TYPE = "image/png"


def is_url(image_ref: str) -> bool:
    """Check whether an image reference is a remote http(s) URL."""
    parsed = urlparse(image_ref)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class PinataClient(BaseAPIClient):
    """Async client for the Pinata pinning API.

    Endpoints used:
        - POST /pinning/pinFileToIPFS - Pin an image file
        - POST /pinning/pinJSONToIPFS - Pin a metadata JSON object

    Example:
        client = PinataClient(store.pinata_credentials)
        try:
            image_uri = await client.upload_image("./logo.png")
        finally:
            await client.close()
    """

    SERVICE_NAME = "Pinata"
    ERROR_CLASS = UploadError

    def __init__(
        self,
        credentials_provider: Callable[[], PinataConfig],
        settings: Settings | None = None,
    ) -> None:
        """Initialize Pinata client.

        Args:
            credentials_provider: Returns the API keys, raising
                CredentialsError when they are missing.
            settings: Process settings (default: cached settings).
        """
        settings = settings or get_settings()
        super().__init__(base_url=settings.pinata_api_url, timeout=settings.http_timeout)
        self.gateway_url = settings.pinata_gateway_url
        self._credentials_provider = credentials_provider
        log.debug("pinata_client_initialized", base_url=self.base_url)

    def _auth_headers(self) -> dict[str, str]:
        credentials = self._credentials_provider()
        return {
            "pinata_api_key": credentials.api_key,
            "pinata_secret_api_key": credentials.secret_api_key,
        }

    def _gateway_uri(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError as e:
            raise UploadError(
                service=self.SERVICE_NAME,
                message="Response is not JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e

        ipfs_hash = data.get("IpfsHash") if isinstance(data, dict) else None
        if not ipfs_hash:
            raise UploadError(
                service=self.SERVICE_NAME,
                message="Response has no IpfsHash",
                body=str(data),
            )
        return f"{self.gateway_url}/ipfs/{ipfs_hash}"

    async def _read_image(self, image_ref: str) -> tuple[str, bytes, str]:
        """Resolve an image reference to (filename, content, content type)."""
        if is_url(image_ref):
            log.info("pinata_downloading_remote_image", url=image_ref)
            response = await self.get(
                image_ref, headers={"Accept": "image/*"}, follow_redirects=True
            )
            filename = urlparse(image_ref).path.rstrip("/").split("/")[-1] or DEFAULT_IMAGE_NAME
            content_type = response.headers.get("content-type") or DEFAULT_IMAGE_TYPE
            return filename, response.content, content_type

        path = Path(image_ref)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise UploadError(
                service=self.SERVICE_NAME,
                message=f"Cannot read image {image_ref}: {e}",
            ) from e
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return path.name, content, content_type

    async def upload_image(self, image_ref: str) -> str:
        """Pin an image to IPFS.

        Args:
            image_ref: Local file path or http(s) URL. Remote images are
                downloaded first and keep the server's content type.

        Returns:
            Gateway URI of the pinned file.

        Raises:
            CredentialsError: If API keys are missing (before any request).
            UploadError: If the download or upload fails.
        """
        headers = self._auth_headers()
        filename, content, content_type = await self._read_image(image_ref)

        response = await self.post(
            "/pinning/pinFileToIPFS",
            files={"file": (filename, content, content_type)},
            headers=headers,
        )
        uri = self._gateway_uri(response)
        log.info("pinata_image_uploaded", filename=filename, size=len(content), uri=uri)
        return uri

    async def upload_metadata(self, metadata: TokenMetadata | dict[str, Any]) -> str:
        """Pin a metadata JSON object to IPFS.

        Returns:
            Gateway URI of the pinned JSON.

        Raises:
            CredentialsError: If API keys are missing (before any request).
            UploadError: If the upload fails.
        """
        headers = self._auth_headers()
        if isinstance(metadata, TokenMetadata):
            metadata = metadata.model_dump()

        response = await self.post("/pinning/pinJSONToIPFS", json=metadata, headers=headers)
        uri = self._gateway_uri(response)
        log.info("pinata_metadata_uploaded", uri=uri)
        return uri

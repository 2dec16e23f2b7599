"""Cloudinary image uploader.

Uses signed uploads: the request parameters (excluding file, api_key and
the signature itself) are sorted, joined as ``k=v&k=v``, suffixed with the
API secret and hashed with SHA-1.
"""

from __future__ import annotations

import hashlib
import logging
import time

import httpx

from mentor.core.errors import UploadFailure
from mentor.storage.base import ImageUploader

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Compute the Cloudinary request signature."""
    payload = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1((payload + api_secret).encode("utf-8")).hexdigest()  # nosec B324


class CloudinaryUploader(ImageUploader):
    """Upload images to Cloudinary over its REST API."""

    host_marker = "cloudinary.com"

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self._transport = transport

    async def upload(self, data_uri: str, folder: str) -> str:
        params = {"folder": folder, "timestamp": str(int(time.time()))}
        form = {
            **params,
            "file": data_uri,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        url = UPLOAD_URL.format(cloud_name=self.cloud_name)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, data=form)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Cloudinary upload to %s failed: %s", folder, e)
            raise UploadFailure("Failed to upload image") from e

        try:
            secure_url = response.json().get("secure_url")
        except ValueError as e:
            raise UploadFailure("Image host returned an invalid response") from e
        if not secure_url:
            raise UploadFailure("Image host returned no URL")
        logger.info("Uploaded image to %s", secure_url)
        return str(secure_url)

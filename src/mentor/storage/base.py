"""Image upload interface.

Profile photos arrive as base64 data URIs and are pushed to an external
asset host, which returns a public URL to store instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from mentor.core.errors import UploadFailure


def is_data_uri_image(value: str | None) -> bool:
    """True if ``value`` is an inline base64 image rather than a URL."""
    return isinstance(value, str) and value.startswith("data:image")


class ImageUploader(ABC):
    """Abstract base class for image hosts."""

    #: Substring identifying URLs already served by this host
    host_marker: str = ""

    def is_hosted(self, value: str) -> bool:
        """True if ``value`` already points at this host."""
        return bool(self.host_marker) and self.host_marker in value

    @abstractmethod
    async def upload(self, data_uri: str, folder: str) -> str:
        """Upload an image and return its public URL.

        Raises:
            UploadFailure: If the host rejects the image or is unreachable.
        """
        ...


class DisabledUploader(ImageUploader):
    """Uploader used when no image host is configured."""

    async def upload(self, data_uri: str, folder: str) -> str:
        raise UploadFailure("Image uploads are not configured")

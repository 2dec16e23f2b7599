"""Image upload for profile photos."""

from __future__ import annotations

from mentor.config import settings
from mentor.storage.base import DisabledUploader, ImageUploader, is_data_uri_image
from mentor.storage.cloudinary import CloudinaryUploader

_uploader: ImageUploader | None = None


def get_image_uploader() -> ImageUploader:
    """Return a singleton ImageUploader based on settings."""
    global _uploader
    if _uploader is None:
        if (
            settings.cloudinary_cloud_name
            and settings.cloudinary_api_key
            and settings.cloudinary_api_secret
        ):
            _uploader = CloudinaryUploader(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
                timeout=settings.cloudinary_timeout,
            )
        else:
            _uploader = DisabledUploader()
    return _uploader


__all__ = [
    "CloudinaryUploader",
    "DisabledUploader",
    "ImageUploader",
    "get_image_uploader",
    "is_data_uri_image",
]

"""Helpers for turning API media paths into fetchable URLs."""

from typing import Optional

from propdesk.config import ClientConfig
from propdesk.logger import get_logger

logger = get_logger(__name__)


def get_image_url(image_url: Optional[str], config: ClientConfig) -> str:
    """
    Build a full image URL from what the API returned.

    Absolute URLs pass through; relative paths are joined to the backend
    root. Empty input yields an empty string.
    """
    if not image_url:
        logger.warning("No image URL provided")
        return ""

    if image_url.startswith(("http://", "https://")):
        return image_url

    path = image_url if image_url.startswith("/") else "/" + image_url
    return f"{config.backend_url}{path}"

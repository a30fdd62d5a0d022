"""Normalization of chat completion responses into image references.

Providers return generated images in two ways: as an ``images`` list on the
assistant message, or inlined into ``content`` as one or more base64 data URIs.
Both are collected, in that order.
"""

import re
from typing import Any

from nano_banana.exceptions import (
    EmptyImageError,
    MalformedResponseError,
    TextInsteadOfImageError,
)

DATA_URI_PREFIX = "data:image/"

# Matches every inline base64 image, not only the first. Standard and URL-safe
# alphabets are accepted; whitespace ends the payload, so line-wrapped base64
# is cut at the first line break.
DATA_URI_PATTERN = re.compile(r"data:image/[A-Za-z0-9.+-]+;base64,[A-Za-z0-9+/=_-]+")


def get_message(data: Any) -> dict[str, Any]:
    """Return ``choices[0].message`` or raise MalformedResponseError."""
    if not isinstance(data, dict):
        raise MalformedResponseError("Invalid response from API")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise MalformedResponseError("Invalid response from API")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise MalformedResponseError("Invalid response from API")
    return message


def _listed_images(message: dict[str, Any]) -> list[str]:
    images = message.get("images")
    if not isinstance(images, list):
        return []
    urls = []
    for image in images:
        if not isinstance(image, dict):
            continue
        image_url = image.get("image_url")
        url = image_url.get("url") if isinstance(image_url, dict) else None
        if isinstance(url, str) and url:
            urls.append(url)
    return urls


def _inline_images(content: str) -> list[str]:
    if not content.startswith(DATA_URI_PREFIX):
        return []
    matches = DATA_URI_PATTERN.findall(content)
    # Unusual encodings the pattern misses are passed through whole
    return matches or [content]


def extract_image_urls(data: Any) -> list[str]:
    """Extract image references from a decoded completion response.

    Args:
        data: Decoded JSON body.

    Returns:
        Non-empty ordered list of image URLs or data URIs.

    Raises:
        MalformedResponseError: If there is no first choice with a message.
        TextInsteadOfImageError: If the model answered with prose only.
        EmptyImageError: If the message holds neither images nor text.
    """
    message = get_message(data)
    content = message.get("content")
    text = content if isinstance(content, str) else ""

    urls = _listed_images(message) + _inline_images(text)
    if urls:
        return urls

    if text.strip():
        raise TextInsteadOfImageError(text)
    raise EmptyImageError("Model did not return a valid image")


def extract_model_list(data: Any) -> list[Any]:
    """Return the first non-empty list under ``data`` or ``models``."""
    if not isinstance(data, dict):
        return []
    for field in ("data", "models"):
        value = data.get(field)
        if isinstance(value, list) and value:
            return value
    return []

"""Model catalog endpoint resolution.

Derives the "list models" URL from a completion-style endpoint, so a user
only has to configure one URL:

    https://host/v1/chat/completions -> https://host/v1/models
    https://host/v1/generate         -> https://host/v1/models
    https://host/custom              -> https://host/custom/models
    https://host                     -> https://host/models
"""

import logging

import httpx

from nano_banana.constants import COMPLETION_SEGMENTS

logger = logging.getLogger(__name__)


def _rewrite_segments(segments: list[str]) -> list[str]:
    """Rewrite path segments so they point at the models listing."""
    if not segments:
        return ["models"]

    if segments[-1] == "models":
        return segments

    segments = list(segments)
    if segments[-1] in COMPLETION_SEGMENTS:
        segments.pop()
        if segments and segments[-1] == "chat":
            segments[-1] = "models"
            return segments

    segments.append("models")
    return segments


def resolve_models_endpoint(endpoint: str) -> str:
    """Derive the models listing URL from a completion endpoint.

    Applying this to its own output returns the same URL.

    Args:
        endpoint: Completion endpoint URL.

    Returns:
        Models listing URL.
    """
    try:
        url = httpx.URL(endpoint)
        if not url.scheme or not url.host:
            raise httpx.InvalidURL(f"Not an absolute URL: {endpoint!r}")
    except httpx.InvalidURL as e:
        logger.warning(f"Could not parse models endpoint, using default rule: {e}")
        trimmed = endpoint.removesuffix("/")
        if trimmed.rsplit("/", 1)[-1] == "models":
            return trimmed
        return trimmed + "/models"

    segments = [segment for segment in url.path.split("/") if segment]
    if segments and segments[-1] == "models":
        return str(url)

    path = "/" + "/".join(_rewrite_segments(segments))
    return str(url.copy_with(path=path))

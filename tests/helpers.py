"""Response builders shared by the client tests."""

from typing import Any

ENDPOINT = "https://api.test/v1/chat/completions"
MODELS_URL = "https://api.test/v1/models"
PNG_A = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAE="
PNG_B = "data:image/png;base64,R0lGODlhAQABAAAAACw="


def image_response(*urls: str, content: str | None = None) -> dict[str, Any]:
    """Chat completion body with images listed on the message."""
    message: dict[str, Any] = {
        "role": "assistant",
        "images": [{"type": "image_url", "image_url": {"url": url}} for url in urls],
    }
    if content is not None:
        message["content"] = content
    return {"choices": [{"index": 0, "message": message}]}


def text_response(content: str) -> dict[str, Any]:
    """Chat completion body whose message only carries content."""
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}

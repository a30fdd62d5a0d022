"""Nano Banana Python Client.

Sync and async clients for generating images through OpenAI-compatible
chat completion endpoints.

Example usage:

    # Sync client
    from nano_banana import GenerationRequest, NanoBananaClient

    with NanoBananaClient() as client:
        result = client.generate(
            GenerationRequest(prompt="A banana wearing sunglasses", apikey="sk-...")
        )
        print(result.image_urls)

    # Async client with reference images
    from nano_banana import AsyncNanoBananaClient

    async with AsyncNanoBananaClient() as client:
        result = await client.generate(
            {
                "prompt": "Same scene at night",
                "images": ["https://example.com/day.png"],
                "apikey": "sk-...",
                "aspectRatio": "16:9",
            }
        )

        # Model selector
        models = await client.fetch_models(
            apikey="sk-...", endpoint="https://host/v1/chat/completions"
        )
"""

from nano_banana.catalog import resolve_models_endpoint
from nano_banana.client import AsyncNanoBananaClient, NanoBananaClient
from nano_banana.config import Settings, get_settings
from nano_banana.constants import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_MODEL_ID,
    GEMINI_FLASH_IMAGE,
    GEMINI_PRO_IMAGE,
)
from nano_banana.exceptions import (
    EmptyImageError,
    EmptyModelListError,
    GenerationFailedError,
    HttpStatusError,
    MalformedResponseError,
    NanoBananaError,
    TextInsteadOfImageError,
    TransportError,
)
from nano_banana.models import GenerationRequest, GenerationResult, ModelDescriptor
from nano_banana.storage import ConfigStore, KeyValueStore, SQLiteKeyValueStore

__version__ = "0.1.0"
__all__ = [
    # Clients
    "NanoBananaClient",
    "AsyncNanoBananaClient",
    "resolve_models_endpoint",
    # Configuration
    "Settings",
    "get_settings",
    "ConfigStore",
    "KeyValueStore",
    "SQLiteKeyValueStore",
    # Model constants
    "DEFAULT_API_ENDPOINT",
    "DEFAULT_MODEL_ID",
    "GEMINI_FLASH_IMAGE",
    "GEMINI_PRO_IMAGE",
    # Models
    "GenerationRequest",
    "GenerationResult",
    "ModelDescriptor",
    # Exceptions
    "NanoBananaError",
    "TransportError",
    "HttpStatusError",
    "MalformedResponseError",
    "TextInsteadOfImageError",
    "EmptyImageError",
    "EmptyModelListError",
    "GenerationFailedError",
]

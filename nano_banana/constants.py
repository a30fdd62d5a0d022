"""Model and endpoint constants for Nano Banana.

Single source of truth for model identifiers and storage keys.
Update here when new model versions are released.
"""

# Gemini image models (served through an OpenAI-compatible gateway)
GEMINI_FLASH_IMAGE = "google/gemini-2.5-flash-image-preview"
GEMINI_PRO_IMAGE = "google/gemini-3-pro-image-preview"

DEFAULT_MODEL_ID = GEMINI_FLASH_IMAGE
DEFAULT_API_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"

# Case-insensitive substring marking the "pro image" variant, which accepts
# image_size and the google_search tool
PRO_IMAGE_MARKER = "gemini-3-pro-image"

DEFAULT_MAX_RETRIES = 5

# Final path segments of completion-style endpoints
COMPLETION_SEGMENTS = frozenset({"completions", "complete", "generate"})

# Storage keys
API_KEY_STORAGE_KEY = "nano-banana-api-key"
API_ENDPOINT_STORAGE_KEY = "nano-banana-api-endpoint"
MODEL_ID_STORAGE_KEY = "nano-banana-model-id"

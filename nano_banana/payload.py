"""Request payload construction for image generation."""

from nano_banana.constants import PRO_IMAGE_MARKER
from nano_banana.models import (
    ChatMessage,
    ContentPart,
    GenerationRequest,
    ImageConfig,
    ImagePayload,
    ImageUrlPart,
    TextPart,
)


def resolve_endpoint(endpoint: str | None, default: str) -> str:
    """Return the stripped override, or the default when it is blank."""
    if endpoint and endpoint.strip():
        return endpoint.strip()
    return default


def resolve_model(model: str | None, default: str) -> str:
    """Return the stripped model override, or the default when it is blank."""
    if model and model.strip():
        return model.strip()
    return default


def is_pro_image_model(model: str) -> bool:
    """Check whether the model is the pro image variant."""
    return PRO_IMAGE_MARKER in model.lower()


def build_message_content(prompt: str, images: list[str]) -> str | list[ContentPart]:
    """Build user message content.

    Text-only prompts are sent as a plain string. With reference images the
    content becomes a text part followed by one image part per image.
    """
    if not images:
        return prompt
    parts: list[ContentPart] = [TextPart(text=prompt)]
    parts.extend(ImageUrlPart.from_url(url) for url in images)
    return parts


def build_image_config(request: GenerationRequest, model: str) -> ImageConfig | None:
    """Build vendor image options, or None when nothing applies.

    image_size is only honoured by the pro image model.
    """
    config = ImageConfig()
    if request.aspect_ratio:
        config.aspect_ratio = request.aspect_ratio
    if request.image_size and is_pro_image_model(model):
        config.image_size = request.image_size
    return None if config.is_empty() else config


def build_payload(request: GenerationRequest, model: str) -> ImagePayload:
    """Build the chat completion payload for an already-resolved model.

    Args:
        request: Generation request.
        model: Model identifier after applying defaults.

    Returns:
        ImagePayload ready to serialize with ``to_json()``.
    """
    payload = ImagePayload(
        model=model,
        messages=[ChatMessage(content=build_message_content(request.prompt, request.images))],
        image_config=build_image_config(request, model),
    )
    if request.enable_google_search and is_pro_image_model(model):
        payload.tools = [{"google_search": {}}]
    return payload

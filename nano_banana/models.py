"""Pydantic models for Nano Banana client."""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    """Image generation request.

    Accepts both snake_case field names and the camelCase keys used by
    browser front ends (``aspectRatio``, ``imageSize``, ``enableGoogleSearch``).
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(..., description="Text prompt")
    images: list[str] = Field(
        default_factory=list,
        description="Reference images as URLs or data URIs, in order",
    )
    model: str | None = Field(default=None, description="Model identifier override")
    endpoint: str | None = Field(default=None, description="Completion endpoint override")
    apikey: str = Field(..., description="Bearer token for the endpoint")
    aspect_ratio: str | None = Field(default=None, alias="aspectRatio")
    image_size: str | None = Field(default=None, alias="imageSize")
    enable_google_search: bool = Field(default=False, alias="enableGoogleSearch")


class GenerationResult(BaseModel):
    """Generated image references, in the order the provider returned them."""

    image_urls: list[str] = Field(..., min_length=1)


class ModelDescriptor(BaseModel):
    """Model listing entry. Provider metadata is kept verbatim."""

    model_config = ConfigDict(extra="allow")

    id: str


# Wire payload


class TextPart(BaseModel):
    """Text content part."""

    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    url: str


class ImageUrlPart(BaseModel):
    """Image reference content part (URL or data URI)."""

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl

    @classmethod
    def from_url(cls, url: str) -> "ImageUrlPart":
        return cls(image_url=ImageUrl(url=url))


ContentPart = Union[TextPart, ImageUrlPart]


class ChatMessage(BaseModel):
    """User message for the chat completion payload."""

    role: Literal["user"] = "user"
    content: str | list[ContentPart]


class ImageConfig(BaseModel):
    """Vendor image options. Only present when at least one field is set."""

    aspect_ratio: str | None = None
    image_size: str | None = None

    def is_empty(self) -> bool:
        return self.aspect_ratio is None and self.image_size is None


class ImagePayload(BaseModel):
    """Request body for an OpenAI-compatible chat completion producing images."""

    model: str
    messages: list[ChatMessage]
    modalities: list[str] = Field(default_factory=lambda: ["image", "text"])
    image_config: ImageConfig | None = None
    tools: list[dict[str, Any]] | None = None

    def to_json(self) -> dict[str, Any]:
        """Serialize for the wire, omitting unset optional sections."""
        return self.model_dump(exclude_none=True)

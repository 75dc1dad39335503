"""Client for the hosted chat-completion provider (OpenRouter, OpenAI-compatible)."""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import openai
from openai import AsyncOpenAI

from ..core.config import settings
from ..core.exceptions import ConfigurationError, NoImageReturnedError, ProviderError
from ..models.thumbnail import GeneratedImage
from ..utils.logging import CorrelatedLogger
from ..utils.validators import ImageValidator

Message = Dict[str, Any]
ContentPart = Dict[str, Any]


class ImageResponseShape(str, Enum):
    """Where a model family puts generated images in a chat response."""
    SIDE_CHANNEL = "side_channel"  # message.images[]
    INLINE = "inline"  # image_url part inside message.content


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from either a parsed SDK object or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _first_message(completion: Any) -> Any:
    choices = _field(completion, "choices") or []
    if not choices:
        return None
    return _field(choices[0], "message")


def extract_text(content: Union[str, List[ContentPart], None]) -> Optional[str]:
    """Text of a message: the string itself, or the first text part."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        for part in content:
            if _field(part, "type") == "text":
                return _field(part, "text")
    return None


def _image_url_of(part: Any) -> Optional[str]:
    if _field(part, "type") != "image_url":
        return None
    return _field(_field(part, "image_url"), "url") or None


def _side_channel_image(message: Any) -> Optional[str]:
    for image in _field(message, "images") or []:
        url = _image_url_of(image)
        if url:
            return url
    return None


def _inline_image(message: Any) -> Optional[str]:
    content = _field(message, "content")
    if not isinstance(content, list):
        return None
    for part in content:
        url = _image_url_of(part)
        if url:
            return url
    return None


def expected_image_shape(model: str) -> ImageResponseShape:
    """Response shape a model family is known to use."""
    model_lower = model.lower()
    if "gemini" in model_lower or model_lower.startswith("openai/"):
        return ImageResponseShape.SIDE_CHANNEL
    return ImageResponseShape.INLINE


def normalize_image_response(completion: Any, model: str) -> GeneratedImage:
    """
    Collapse both image response shapes into one GeneratedImage.

    The shape expected for the model family is tried first and the other shape
    second, so a provider switching formats still resolves.

    Raises:
        NoImageReturnedError: If neither shape carries an image.
    """
    message = _first_message(completion)

    readers = {
        ImageResponseShape.SIDE_CHANNEL: _side_channel_image,
        ImageResponseShape.INLINE: _inline_image,
    }
    first = expected_image_shape(model)
    order = [first] + [shape for shape in readers if shape != first]

    for shape in order:
        url = readers[shape](message)
        if url:
            revised_prompt = extract_text(_field(message, "content")) or None
            return GeneratedImage(
                image_base64=ImageValidator.strip_data_url(url),
                revised_prompt=revised_prompt,
            )

    raise NoImageReturnedError(model)


class ProviderClient:
    """Thin adapter over the hosted completion and image endpoints."""

    def __init__(self, api_key: Optional[str] = None, client: Optional[AsyncOpenAI] = None):
        self.api_key = api_key if api_key is not None else settings.openrouter_api_key
        self._client = client
        self.logger = CorrelatedLogger(__name__)

    def _get_client(self) -> AsyncOpenAI:
        """Create the SDK client lazily; a missing key fails before any network call."""
        if not self.api_key:
            raise ConfigurationError("OPENROUTER_API_KEY", "not set")

        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=settings.openrouter_base_url,
                timeout=settings.provider_timeout,
                max_retries=0,
                default_headers={
                    "HTTP-Referer": settings.app_referer,
                    "X-Title": settings.app_title,
                },
            )
        return self._client

    async def _create(self, operation: str, **kwargs) -> Any:
        client = self._get_client()
        try:
            return await client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            raise ProviderError(e.status_code, e.response.text, operation)
        except openai.APIConnectionError as e:  # includes APITimeoutError
            raise ProviderError(None, str(e) or type(e).__name__, operation)

    async def text_completion(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        request_id: Optional[str] = None
    ) -> str:
        """Request a completion and return its text; empty string if there is none."""
        model = model or settings.analysis_model
        logger = self.logger.bind(request_id)
        logger.debug(f"Text completion: model={model} temperature={temperature} max_tokens={max_tokens}")

        completion = await self._create(
            "completion",
            model=model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        message = _first_message(completion)
        return extract_text(_field(message, "content")) or ""

    async def generate_image(
        self,
        prompt: str,
        model: Optional[str] = None,
        reference_image_base64: Optional[str] = None,
        request_id: Optional[str] = None
    ) -> GeneratedImage:
        """Generate one image, optionally conditioned on a reference photo."""
        model = model or settings.image_model
        logger = self.logger.bind(request_id)

        content: List[ContentPart] = [{"type": "text", "text": prompt}]
        if reference_image_base64:
            content.insert(0, {
                "type": "image_url",
                "image_url": {"url": ImageValidator.to_data_url(reference_image_base64)},
            })

        extra_body: Dict[str, Any] = {"modalities": ["image", "text"]}
        if "gemini" in model.lower():
            extra_body["provider"] = {"order": ["google"]}

        logger.debug(
            f"Image generation: model={model} reference_image={bool(reference_image_base64)} "
            f"prompt_chars={len(prompt)}"
        )

        completion = await self._create(
            "image",
            model=model,
            messages=[{"role": "user", "content": content}],
            extra_body=extra_body,
        )
        return normalize_image_response(completion, model)

"""Thumbnail generation from analysis concepts."""
import time
from typing import List, Optional

from ..core.config import settings, ThumbnailConfig
from ..core.exceptions import ConfigurationError, NoThumbnailsGeneratedError
from ..models.analysis import ThumbnailConcept, VideoAnalysis
from ..models.thumbnail import GeneratedThumbnail
from ..utils.logging import CorrelatedLogger
from .provider_client import ProviderClient

RESOLUTION_INSTRUCTION = (
    f"Generate a professional YouTube thumbnail image at {ThumbnailConfig.WIDTH}x{ThumbnailConfig.HEIGHT} "
    "resolution (16:9 aspect ratio)."
)

COMPOSITION_RULES = (
    "IMPORTANT THUMBNAIL RULES: Single clear focal point. High contrast between subject and background. "
    "Bold, attention-grabbing composition. The image should make viewers curious and want to click. "
    "Professional YouTube thumbnail quality."
)

EXCLUSIONS = (
    "DO NOT include: small or unreadable text, cluttered backgrounds, more than 4 words of text, "
    "anything in the bottom-right corner (YouTube puts duration badge there)."
)

CUSTOM_EPILOGUE = (
    "IMPORTANT: High contrast, single focal point, bold composition. Professional YouTube thumbnail "
    "quality. Avoid cluttering the bottom-right corner."
)


def face_clause(expression: str, face_description: Optional[str] = None) -> str:
    if face_description:
        return (
            f"The main person in the thumbnail: {face_description}. Their expression should be "
            f"{expression}. The person's face should occupy about 30-40% of the frame, positioned on "
            "one side with their eyes in the upper third."
        )
    return (
        f"Include a person with a {expression} expression. The person's face should occupy about "
        "30-40% of the frame, positioned on one side."
    )


def build_image_prompt(
    concept: ThumbnailConcept,
    analysis: VideoAnalysis,
    face_description: Optional[str] = None
) -> str:
    """Image-generation prompt for one concept."""
    parts = [
        RESOLUTION_INSTRUCTION,
        f"Visual style: {concept.visual_style}.",
        f"Scene: {concept.description}",
        face_clause(concept.face_expression, face_description),
        f"Mood: {concept.mood}. Use high-contrast colors from this palette: {', '.join(analysis.color_palette)}.",
        COMPOSITION_RULES,
    ]

    if concept.text_overlay:
        parts.append(
            f'Include bold text overlay reading "{concept.text_overlay}" in large, high-contrast letters '
            "with a dark outline/stroke for readability. Position the text prominently but don't cover "
            "the person's face. Use Impact or a similar bold sans-serif font style."
        )

    parts.append(EXCLUSIONS)
    return "\n\n".join(parts)


def build_custom_prompt(prompt: str, face_description: Optional[str] = None) -> str:
    """Wrap a user-written prompt in the fixed thumbnail preamble."""
    parts = [RESOLUTION_INSTRUCTION, prompt.strip()]
    if face_description:
        parts.append(face_clause("natural", face_description))
    parts.append(CUSTOM_EPILOGUE)
    return "\n\n".join(parts)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class ThumbnailGenerator:
    """Turns thumbnail concepts into images, one provider call at a time."""

    def __init__(self, provider: Optional[ProviderClient] = None):
        self.provider = provider or ProviderClient()
        self.logger = CorrelatedLogger(__name__)

    async def generate_thumbnails(
        self,
        analysis: VideoAnalysis,
        face_image_base64: Optional[str] = None,
        face_description: Optional[str] = None,
        model: Optional[str] = None,
        count: Optional[int] = None,
        request_id: Optional[str] = None
    ) -> List[GeneratedThumbnail]:
        """
        Generate one thumbnail per concept, up to ``count``.

        Concepts are processed sequentially to stay under provider rate limits.
        A failed concept is logged and left out of the result. A missing
        provider key fails the whole batch.

        Raises:
            NoThumbnailsGeneratedError: If every concept failed
            ConfigurationError: If the provider is not configured
        """
        logger = self.logger.bind(request_id)
        model = model or settings.image_model
        count = min(count or ThumbnailConfig.DEFAULT_COUNT, len(analysis.thumbnail_concepts))
        concepts = analysis.thumbnail_concepts[:count]

        results: List[GeneratedThumbnail] = []
        for index, concept in enumerate(concepts):
            prompt = build_image_prompt(concept, analysis, face_description)

            try:
                image = await self.provider.generate_image(
                    prompt,
                    model=model,
                    reference_image_base64=face_image_base64,
                    request_id=request_id,
                )
            except ConfigurationError:
                raise
            except Exception as e:
                logger.error(f"Failed to generate thumbnail {index + 1}/{len(concepts)}: {e}")
                continue

            results.append(GeneratedThumbnail(
                id=f"thumb-{_epoch_ms()}-{index}",
                image_base64=image.image_base64,
                concept=concept.model_copy(
                    update={"description": image.revised_prompt or concept.description}
                ),
                text_overlay=concept.text_overlay,
            ))

        logger.info(f"Generated {len(results)}/{len(concepts)} thumbnails with {model}")

        if not results:
            raise NoThumbnailsGeneratedError(len(concepts))

        return results

    async def generate_custom_thumbnail(
        self,
        prompt: str,
        face_image_base64: Optional[str] = None,
        face_description: Optional[str] = None,
        model: Optional[str] = None,
        request_id: Optional[str] = None
    ) -> GeneratedThumbnail:
        """Generate a single thumbnail from a user-written prompt."""
        image = await self.provider.generate_image(
            build_custom_prompt(prompt, face_description),
            model=model or settings.image_model,
            reference_image_base64=face_image_base64,
            request_id=request_id,
        )

        return GeneratedThumbnail(
            id=f"thumb-custom-{_epoch_ms()}",
            image_base64=image.image_base64,
            concept=ThumbnailConcept(
                description=prompt,
                text_overlay="",
                mood="custom",
                visual_style="custom",
                face_expression="natural",
            ),
            text_overlay="",
        )

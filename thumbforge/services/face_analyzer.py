"""Face likeness analysis using a multimodal completion model."""
from typing import List, Optional

from ..core.config import settings
from ..config.templates import get_template_engine
from ..models.face import FaceAnalysis
from ..utils.logging import CorrelatedLogger
from ..utils.validators import ContentValidator, ImageValidator
from .provider_client import ProviderClient


class FaceAnalyzer:
    """Describes a person's appearance from 1-5 reference photos."""

    TEMPERATURE = 0.3  # consistency over creativity
    MAX_TOKENS = 1024

    def __init__(self, provider: Optional[ProviderClient] = None):
        self.provider = provider or ProviderClient()
        self.template_engine = get_template_engine()
        self.logger = CorrelatedLogger(__name__)

    def build_messages(self, face_images: List[str]) -> list:
        """One user message: every photo followed by the analysis instruction."""
        content = [
            {"type": "image_url", "image_url": {"url": ImageValidator.to_data_url(image)}}
            for image in face_images
        ]
        content.append({
            "type": "text",
            "text": self.template_engine.render_prompt("face_analysis", photo_count=len(face_images)),
        })
        return [{"role": "user", "content": content}]

    async def analyze_face(self, face_images: List[str], request_id: Optional[str] = None) -> FaceAnalysis:
        """
        Analyze face photos into a description for image generation prompts.

        Malformed model output does not fail the call; the raw text becomes the
        description instead.

        Raises:
            InvalidInputError: If no photos (or more than the maximum) are given
        """
        face_images = ImageValidator.validate_face_images(face_images, settings.max_face_images)
        logger = self.logger.bind(request_id)
        logger.info(f"Analyzing {len(face_images)} face photo(s)")

        response = await self.provider.text_completion(
            self.build_messages(face_images),
            model=settings.analysis_model,
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
            request_id=request_id,
        )
        return self.parse_face_analysis(response, len(face_images), request_id)

    def parse_face_analysis(self, response: str, photo_count: int, request_id: Optional[str] = None) -> FaceAnalysis:
        try:
            parsed = ContentValidator.parse_json(response)
            if not isinstance(parsed, dict) or not isinstance(parsed.get("description"), str):
                raise ValueError("missing description")

            key_features = parsed.get("keyFeatures") or []
            if not isinstance(key_features, list):
                key_features = []

            return FaceAnalysis(
                description=parsed["description"],
                key_features=[str(feature) for feature in key_features],
                age_range=str(parsed.get("ageRange") or "unknown"),
                gender_presentation=str(parsed.get("genderPresentation") or "unknown"),
                photo_count=photo_count,
            )
        except ValueError:  # includes json.JSONDecodeError
            self.logger.bind(request_id).error("Failed to parse face analysis JSON, using raw response")
            return FaceAnalysis(
                description=response.strip(),
                key_features=[],
                age_range="unknown",
                gender_presentation="unknown",
                photo_count=photo_count,
            )

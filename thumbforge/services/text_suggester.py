"""Thumbnail text overlay suggestions."""
import json
from typing import List, Optional

from ..core.config import settings
from ..core.exceptions import AnalysisParseError, InvalidInputError
from ..config.templates import get_template_engine
from ..utils.logging import CorrelatedLogger
from ..utils.validators import ContentValidator
from .provider_client import ProviderClient


class TextSuggester:
    """Asks the completion model for short, punchy overlay texts."""

    SUGGESTION_COUNT = 8
    TEMPERATURE = 0.9
    MAX_TOKENS = 256

    def __init__(self, provider: Optional[ProviderClient] = None):
        self.provider = provider or ProviderClient()
        self.template_engine = get_template_engine()
        self.logger = CorrelatedLogger(__name__)

    async def suggest(
        self,
        topic: str,
        mood: Optional[str] = None,
        current_text: Optional[str] = None,
        request_id: Optional[str] = None
    ) -> List[str]:
        if not topic or not topic.strip():
            raise InvalidInputError("Please provide a topic")

        prompt = self.template_engine.render_prompt(
            "text_suggestions",
            topic=topic,
            mood=mood or "engaging",
            current_text=current_text or "",
            count=self.SUGGESTION_COUNT,
        )

        result = await self.provider.text_completion(
            [{"role": "user", "content": prompt}],
            model=settings.analysis_model,
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
            request_id=request_id,
        )

        try:
            suggestions = ContentValidator.parse_json(result)
        except json.JSONDecodeError as e:
            self.logger.bind(request_id).warning(f"Invalid suggestions JSON: {e}")
            raise AnalysisParseError("text suggestions", str(e))

        if not isinstance(suggestions, list) or not all(isinstance(s, str) for s in suggestions):
            raise AnalysisParseError("text suggestions", "expected a JSON array of strings")

        return suggestions[:self.SUGGESTION_COUNT]

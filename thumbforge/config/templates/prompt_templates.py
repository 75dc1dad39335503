"""
Prompt Template Engine for dynamic prompt generation.
Handles template loading, rendering, and validation.
"""
import yaml
from typing import Dict, Any, Optional, List
from pathlib import Path
from jinja2 import Environment, StrictUndefined, TemplateError
from dataclasses import dataclass

from thumbforge.core.config import settings
from thumbforge.core.exceptions import ConfigurationError
from thumbforge.utils.logging import CorrelatedLogger


@dataclass
class PromptConfig:
    """Configuration for a complete prompt template."""
    name: str
    language: str
    template: str
    system_role: str = ""


class PromptTemplateEngine:
    """
    Template engine for managing and rendering model prompts.

    Prompts live in ``config/prompts/<name>/<language>.yaml`` with a
    ``template`` key (Jinja2 source) and an optional ``system_role`` that is
    prepended to the rendered text.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize the template engine.

        Args:
            config_dir: Path to configuration directory. Defaults to thumbforge/config/
        """
        self.logger = CorrelatedLogger(__name__)

        if config_dir is None:
            config_dir = Path(__file__).parent.parent

        self.config_dir = Path(config_dir)
        self.prompts_dir = self.config_dir / "prompts"

        self.jinja_env = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

        # Cache for loaded configurations
        self._config_cache: Dict[str, PromptConfig] = {}

        self.logger.info(f"PromptTemplateEngine initialized with config_dir: {config_dir}")

    def load_prompt_config(self, name: str, language: Optional[str] = None) -> PromptConfig:
        """
        Load prompt configuration for a prompt name and language.

        Raises:
            ConfigurationError: If configuration cannot be loaded
        """
        language = language or settings.default_prompt_language
        cache_key = f"{name}_{language}"

        if cache_key in self._config_cache:
            return self._config_cache[cache_key]

        config_path = self.prompts_dir / name / f"{language}.yaml"

        if not config_path.exists():
            raise ConfigurationError(
                f"prompt {name}/{language}",
                f"not found at {config_path}; available languages: {self.get_available_languages(name)}"
            )

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"prompt {name}/{language}", str(e))

        template = config_data.get("template")
        if not template or not str(template).strip():
            raise ConfigurationError(f"prompt {name}/{language}", "template cannot be empty")

        config = PromptConfig(
            name=name,
            language=language,
            template=str(template),
            system_role=str(config_data.get("system_role", "") or ""),
        )
        self._config_cache[cache_key] = config

        self.logger.info(f"Loaded prompt configuration: {name}/{language}")
        return config

    def render_prompt(
        self,
        name: str,
        language: Optional[str] = None,
        **template_vars
    ) -> str:
        """
        Render the complete prompt with template variables.

        Returns:
            Rendered prompt string
        """
        config = self.load_prompt_config(name, language)

        try:
            body = self.jinja_env.from_string(config.template).render(**template_vars)
        except TemplateError as e:
            self.logger.error(f"Failed to render prompt: {name}/{config.language} - {str(e)}")
            raise ConfigurationError(f"prompt {name}/{config.language}", f"rendering failed: {e}")

        parts = [config.system_role.strip(), body.strip()]
        full_prompt = "\n\n".join(part for part in parts if part)

        self.logger.debug(f"Rendered prompt for {name}/{config.language} ({len(full_prompt)} chars)")
        return full_prompt

    def get_available_languages(self, name: str) -> List[str]:
        """Get available language codes for a prompt."""
        prompt_dir = self.prompts_dir / name

        if not prompt_dir.exists():
            return []

        return sorted(
            item.stem for item in prompt_dir.iterdir()
            if item.is_file() and item.suffix == '.yaml'
        )


# Global template engine instance
_template_engine = None

def get_template_engine() -> PromptTemplateEngine:
    """Get global template engine instance (singleton pattern)."""
    global _template_engine
    if _template_engine is None:
        _template_engine = PromptTemplateEngine()
    return _template_engine

"""Unit tests for the prompt template engine."""
import pytest

from thumbforge.config.templates import PromptTemplateEngine, get_template_engine
from thumbforge.core.exceptions import ConfigurationError


@pytest.fixture
def engine():
    return PromptTemplateEngine()


class TestPromptTemplateEngine:

    def test_singleton(self):
        assert get_template_engine() is get_template_engine()

    @pytest.mark.parametrize("name", ["video_analysis", "description_analysis", "face_analysis", "text_suggestions"])
    def test_shipped_prompts_have_english(self, engine, name):
        assert "en" in engine.get_available_languages(name)

    def test_render_video_analysis(self, engine):
        prompt = engine.render_prompt(
            "video_analysis", title="", author="Some Channel", transcript="hello", transcript_chars=3000
        )

        assert prompt.startswith("You are a YouTube thumbnail expert.")
        assert "VIDEO TITLE: Unknown" in prompt
        assert "CHANNEL: Some Channel" in prompt
        assert "TRANSCRIPT (first 3000 chars): hello" in prompt
        assert "Generate exactly 4 thumbnail concepts" in prompt

    def test_render_face_analysis_plural(self, engine):
        prompt = engine.render_prompt("face_analysis", photo_count=4)

        assert "Analyze these 4 photos" in prompt
        assert "Analyze this photo" not in prompt

    def test_missing_variable_fails(self, engine):
        with pytest.raises(ConfigurationError):
            engine.render_prompt("description_analysis")

    def test_unknown_prompt(self, engine):
        with pytest.raises(ConfigurationError):
            engine.load_prompt_config("does_not_exist", "en")

    def test_unknown_language(self, engine):
        assert engine.get_available_languages("does_not_exist") == []
        with pytest.raises(ConfigurationError):
            engine.load_prompt_config("video_analysis", "xx")

    def test_custom_config_dir(self, tmp_path):
        prompt_dir = tmp_path / "prompts" / "greeting"
        prompt_dir.mkdir(parents=True)
        (prompt_dir / "en.yaml").write_text("system_role: Be brief.\ntemplate: \"Hello {{ name }}\"\n")
        (prompt_dir / "empty.yaml").write_text("template: ''\n")

        engine = PromptTemplateEngine(config_dir=str(tmp_path))

        assert engine.render_prompt("greeting", "en", name="Ada") == "Be brief.\n\nHello Ada"
        assert engine.get_available_languages("greeting") == ["empty", "en"]
        with pytest.raises(ConfigurationError):
            engine.load_prompt_config("greeting", "empty")

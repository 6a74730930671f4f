import pytest
from unittest.mock import patch

from voice_html.config import DEFAULT_API_URL, DEFAULT_MODEL, Config, load_config_from_env
from voice_html.prompt import PromptPolicy


@pytest.mark.unit
class TestLoadConfigFromEnv:
    """Tests for environment-driven configuration."""

    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            cfg = load_config_from_env()

        assert cfg.api_key == ""
        assert not cfg.is_configured
        assert cfg.model == DEFAULT_MODEL
        assert cfg.api_url == DEFAULT_API_URL
        assert cfg.prompt_policy is PromptPolicy.CDN_ALLOWED
        assert cfg.timeout_s == 60.0

    def test_from_env(self):
        env = {
            "OPENROUTER_API_KEY": "sk-or-test",
            "OPENROUTER_MODEL": "anthropic/claude-3.5-sonnet",
            "OPENROUTER_API_URL": "https://example.com/v1/chat/completions",
            "PROMPT_POLICY": "inline_only",
            "LLM_TIMEOUT_S": "12.5",
        }
        with patch.dict("os.environ", env, clear=True):
            cfg = load_config_from_env()

        assert cfg.is_configured
        assert cfg.api_key == "sk-or-test"
        assert cfg.model == "anthropic/claude-3.5-sonnet"
        assert cfg.api_url == "https://example.com/v1/chat/completions"
        assert cfg.prompt_policy is PromptPolicy.INLINE_ONLY
        assert cfg.timeout_s == 12.5

    def test_policy_is_case_insensitive(self):
        with patch.dict("os.environ", {"PROMPT_POLICY": " INLINE_ONLY "}, clear=True):
            assert load_config_from_env().prompt_policy is PromptPolicy.INLINE_ONLY

    def test_blank_model_falls_back_to_default(self):
        with patch.dict("os.environ", {"OPENROUTER_MODEL": ""}, clear=True):
            assert load_config_from_env().model == DEFAULT_MODEL

    def test_unknown_policy_raises(self):
        with patch.dict("os.environ", {"PROMPT_POLICY": "anything_goes"}, clear=True):
            with pytest.raises(RuntimeError, match="PROMPT_POLICY"):
                load_config_from_env()

    def test_bad_timeout_raises(self):
        with patch.dict("os.environ", {"LLM_TIMEOUT_S": "soon"}, clear=True):
            with pytest.raises(RuntimeError, match="LLM_TIMEOUT_S"):
                load_config_from_env()

    def test_whitespace_key_is_not_configured(self):
        assert not Config(api_key="   ").is_configured

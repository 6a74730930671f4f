from __future__ import annotations

import os
from dataclasses import dataclass

from .prompt import PromptPolicy

DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "openai/gpt-4o-mini"


@dataclass(frozen=True)
class Config:
    # Blank means "not configured"; reported at generate time, not load time.
    api_key: str = ""
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL

    prompt_policy: PromptPolicy = PromptPolicy.CDN_ALLOWED
    timeout_s: float = 60.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip())


def load_config_from_env() -> Config:
    policy_name = os.getenv("PROMPT_POLICY", PromptPolicy.CDN_ALLOWED.value).strip().lower()
    try:
        policy = PromptPolicy(policy_name)
    except ValueError:
        choices = ", ".join(p.value for p in PromptPolicy)
        raise RuntimeError(f"Invalid PROMPT_POLICY: {policy_name!r} (expected one of: {choices})")

    timeout = os.getenv("LLM_TIMEOUT_S", "60")
    try:
        timeout_s = float(timeout)
    except ValueError:
        raise RuntimeError(f"Invalid LLM_TIMEOUT_S: {timeout!r}")

    return Config(
        api_key=os.getenv("OPENROUTER_API_KEY", ""),
        model=os.getenv("OPENROUTER_MODEL") or DEFAULT_MODEL,
        api_url=os.getenv("OPENROUTER_API_URL") or DEFAULT_API_URL,
        prompt_policy=policy,
        timeout_s=timeout_s,
    )

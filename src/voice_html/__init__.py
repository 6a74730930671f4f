"""voice_html package.

Turns a spoken request into a complete HTML document through a
chat-completions LLM API. The prompt builder and response sanitizer are
pure; the gateway and session handle the single network call per request.
"""

from .errors import ErrorKind, GenerationError, GenerationResult, StaleResultError
from .prompt import PromptPair, PromptPolicy, build_messages, build_prompt
from .render import sanitize_html
from .session import Session
from .speech import Ended, Error, Result, SpeechError, SpeechErrorKind, SpeechInteraction, Started

__all__ = [
    "Ended",
    "Error",
    "ErrorKind",
    "GenerationError",
    "GenerationResult",
    "PromptPair",
    "PromptPolicy",
    "Result",
    "Session",
    "SpeechError",
    "SpeechErrorKind",
    "SpeechInteraction",
    "StaleResultError",
    "Started",
    "build_messages",
    "build_prompt",
    "sanitize_html",
]

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PromptPolicy(str, Enum):
    """Which external resources the generated document may reference."""

    CDN_ALLOWED = "cdn_allowed"
    INLINE_ONLY = "inline_only"


@dataclass(frozen=True)
class PromptPair:
    system_instructions: str
    user_instructions: str

    def to_messages(self) -> list[dict[str, str]]:
        return build_messages(self)


_CONTEXT = """\
You are an HTML generator for a mobile app interface. Your task is to generate standalone, complete HTML that implements the user's request.

CONTEXT UNDERSTANDING:
- The HTML that is currently being rendered is the KEY SOURCE of context - it tells you exactly what the user is seeing
- Analyze its structure, elements, styles and JavaScript to understand which interface elements exist, what functionality is present, and what the user can currently do
- Use the HTML as the foundation for understanding the user's current state

REQUEST INTERPRETATION:
- Interpret the user's request in light of what they are seeing
- Consider how the request relates to the existing interface (e.g. if they ask to "add a button", where should it go given what is already there?)

DECISION PROCESS:
- FIRST PRIORITY: keep the same HTML but upgrade it (modify, enhance, add to, or improve the existing HTML)
- Replace part of the HTML only if a specific section needs complete replacement
- Replace all of the HTML only if the user explicitly wants something completely different or the request cannot be fulfilled by upgrading
- When upgrading, preserve the existing structure, styles and functionality while making the requested changes
- When replacing, ensure the new HTML is complete and functional
"""

_REQUIREMENTS = """\
REQUIREMENTS:
- Generate complete, standalone HTML (include <!DOCTYPE html>, <html>, <head>, <body> tags)
{resources}
- Mobile-friendly design: touch targets at least 48dp, responsive viewport (<meta name="viewport" content="width=device-width, initial-scale=1">), works on small screens
- Make the interface intuitive, functional, visually appealing and modern
- Use appropriate HTML5 elements and semantic markup
- If the request is vague, create a reasonable implementation
"""

_RESOURCE_RULES: dict[PromptPolicy, str] = {
    PromptPolicy.CDN_ALLOWED: (
        "- You may use CDN links for icon libraries (Font Awesome, Material Icons, Heroicons, etc.), "
        "CSS frameworks, and JavaScript libraries as needed\n"
        "- You may also include CSS inline in <style> tags and JavaScript inline in <script> tags\n"
        "- The HTML must work when loaded in a WebView with an internet connection for CDN resources"
    ),
    PromptPolicy.INLINE_ONLY: (
        "- Do NOT reference any external resources: no CDN links, web fonts, remote images, "
        "external stylesheets or external scripts\n"
        "- All CSS must be inline in <style> tags and all JavaScript inline in <script> tags\n"
        "- The HTML must work when loaded in a WebView with no network access"
    ),
}

_OUTPUT = """\
OUTPUT:
- Return ONLY the HTML code, nothing else
- Do not include markdown code blocks (no ```html or ```)
- Do not include explanations or comments outside the HTML
- Return the complete HTML that should be rendered (either the upgraded existing HTML or completely new HTML)"""


def build_system_instructions(policy: PromptPolicy = PromptPolicy.CDN_ALLOWED) -> str:
    requirements = _REQUIREMENTS.format(resources=_RESOURCE_RULES[PromptPolicy(policy)])
    return "\n".join([_CONTEXT, requirements, _OUTPUT])


def build_user_instructions(transcript: str, current_document: Optional[str] = None) -> str:
    if current_document is not None and current_document.strip():
        return (
            f"CURRENT HTML BEING RENDERED:\n{current_document}\n\n"
            f"USER REQUEST:\n{transcript}\n\n"
            "Based on the current HTML above, prioritize keeping and upgrading the existing HTML "
            "to fulfill the user's request. Only replace it if the request cannot be satisfied "
            "by upgrading the existing HTML."
        )
    return f"Generate HTML that allows the user to: {transcript}"


def build_prompt(
    transcript: str,
    current_document: Optional[str] = None,
    policy: PromptPolicy = PromptPolicy.CDN_ALLOWED,
) -> PromptPair:
    """Return the system/user instruction pair for one generation request.

    The transcript and the current document are interpolated verbatim; they end
    up inside a JSON-encoded chat message, never in literal HTML.
    """

    return PromptPair(
        system_instructions=build_system_instructions(policy),
        user_instructions=build_user_instructions(transcript, current_document),
    )


def build_messages(pair: PromptPair) -> list[dict[str, str]]:
    """Return provider-neutral message list."""

    return [
        {"role": "system", "content": pair.system_instructions},
        {"role": "user", "content": pair.user_instructions},
    ]

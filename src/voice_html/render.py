from __future__ import annotations

import html
import re

from .errors import ErrorKind

FENCE = "```"

# Language tag after an opening fence, only when it ends the line or meets markup.
_LANGUAGE_TAG = re.compile(r"[\w+-]+[ \t]*(?=\r?\n|\Z|<)")

DEFAULT_DOCUMENT = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Voice HTML</title>
    <style>
        body {
            margin: 0;
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #fff8dc;
            color: #333;
            text-align: center;
            padding: 24px;
            box-sizing: border-box;
        }
        h1 { font-size: 24px; margin-bottom: 8px; }
        p { font-size: 16px; color: #666; }
    </style>
</head>
<body>
    <div>
        <h1>Say what you want to build</h1>
        <p>Tap the microphone and describe a feature.</p>
    </div>
</body>
</html>
"""

_ERROR_PAGE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
        body {{
            margin: 0;
            padding: 20px;
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f5f5f5;
            display: flex;
            align-items: center;
            justify-content: center;
            min-height: 100vh;
            box-sizing: border-box;
        }}
        .error {{
            background: white;
            padding: 24px;
            border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
            max-width: 400px;
            text-align: center;
        }}
        .error-title {{ font-size: 20px; font-weight: bold; color: #d32f2f; margin-bottom: 12px; }}
        .error-message {{ font-size: 16px; color: #666; line-height: 1.5; }}
    </style>
</head>
<body>
    <div class="error">
        <div class="error-title">Error</div>
        <div class="error-message">{message}</div>
    </div>
</body>
</html>
"""

USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_CONFIGURED: "API key not configured. Please set OPENROUTER_API_KEY.",
    ErrorKind.TRANSPORT: "Network error. Please check your connection and try again.",
    ErrorKind.PROTOCOL: "The generation service returned an unexpected response. Please try again.",
    ErrorKind.EMPTY_RESULT: "Nothing was generated. Try rephrasing your request.",
}


def sanitize_html(raw: str) -> str:
    """Strip one outer markdown fence pair from a model reply.

    Only a leading ```/```lang marker and a trailing ``` are removed; fences
    inside the document are left alone. Stripping repeats until nothing
    changes, so the result is stable under a second pass.
    """

    text = raw.strip()
    while True:
        stripped = _strip_fences(text)
        if stripped == text:
            return text
        text = stripped


def _strip_fences(text: str) -> str:
    if text.startswith(FENCE):
        text = text[len(FENCE):]
        m = _LANGUAGE_TAG.match(text)
        if m:
            text = text[m.end():]
    if text.endswith(FENCE):
        text = text[: -len(FENCE)]
    return text.strip()


def user_message(kind: ErrorKind) -> str:
    return USER_MESSAGES[kind]


def render_error_page(message: str) -> str:
    """Standalone error document shown in place of a failed generation."""

    return _ERROR_PAGE.format(message=html.escape(message))

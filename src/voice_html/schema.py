from __future__ import annotations

# Minimal shape of an OpenAI-compatible chat completion reply. Only
# choices[0].message.content is consumed; everything else is ignored.
CHAT_COMPLETION_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "choices": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "message": {
                        "type": "object",
                        "properties": {"content": {"type": "string"}},
                        "required": ["content"],
                    },
                },
                "required": ["message"],
            },
        },
    },
    "required": ["choices"],
}

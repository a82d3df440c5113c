"""Prompt vocabulary for room restyling."""

from .vocabulary import DEFAULT_STYLE, ROOM_PROMPTS, STYLE_PROMPTS, build_prompt

__all__ = [
    "DEFAULT_STYLE",
    "ROOM_PROMPTS",
    "STYLE_PROMPTS",
    "build_prompt",
]

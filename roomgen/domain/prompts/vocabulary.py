"""Style and room vocabulary used to compose provider prompts."""

from __future__ import annotations

DEFAULT_STYLE = "modern"
DEFAULT_ROOM = "room"

STYLE_PROMPTS: dict[str, str] = {
    "modern": "modern contemporary style, clean lines, neutral colors, minimalist furniture",
    "minimalist": "minimalist style, white walls, simple furniture, zen aesthetic, uncluttered",
    "scandinavian": "scandinavian style, light wood, cozy textiles, hygge atmosphere, natural light",
    "industrial": "industrial style, exposed brick, metal accents, Edison bulbs, raw materials",
    "bohemian": "bohemian style, colorful textiles, plants, eclectic decor, layered patterns",
    "mid-century": "mid-century modern style, retro furniture, warm wood tones, vintage accents",
    "japanese": "japanese style, zen minimalism, natural materials, tatami, shoji screens",
    "luxury": "luxury style, elegant furniture, marble accents, gold details, crystal chandeliers",
}

ROOM_PROMPTS: dict[str, str] = {
    "living-room": "living room",
    "bedroom": "bedroom",
    "kitchen": "kitchen",
    "bathroom": "bathroom",
    "office": "home office",
    "outdoor": "outdoor patio",
}

PROMPT_TEMPLATE = (
    "Beautiful {style} {room}, interior design photograph, professional photography, "
    "8k, high resolution, photorealistic, well-lit, architectural digest quality"
)


def build_prompt(style: str, room_type: str) -> str:
    """Compose the prompt; unknown styles fall back to modern, unknown rooms to "room"."""
    style_prompt = STYLE_PROMPTS.get(style) or STYLE_PROMPTS[DEFAULT_STYLE]
    room_prompt = ROOM_PROMPTS.get(room_type) or DEFAULT_ROOM
    return PROMPT_TEMPLATE.format(style=style_prompt, room=room_prompt)

"""Style and room vocabulary listing."""
from fastapi import APIRouter

from roomgen.domain.prompts import DEFAULT_STYLE, ROOM_PROMPTS, STYLE_PROMPTS
from roomgen.schemas import StyleCatalogResponse, StyleOption

router = APIRouter()


@router.get("/styles", response_model=StyleCatalogResponse, summary="List known styles and room types")
async def list_styles() -> StyleCatalogResponse:
    return StyleCatalogResponse(
        styles=[StyleOption(id=key, prompt=value) for key, value in STYLE_PROMPTS.items()],
        room_types=[StyleOption(id=key, prompt=value) for key, value in ROOM_PROMPTS.items()],
        default_style=DEFAULT_STYLE,
    )

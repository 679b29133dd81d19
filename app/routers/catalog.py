"""
Voice, model and style preset catalog endpoints.
"""
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query

from app import catalog
from app.schemas.catalog import (
    VoiceResponse,
    VoiceListResponse,
    ModelResponse,
    ModelListResponse,
    StylePresetResponse,
    StylePresetListResponse,
)


router = APIRouter(tags=['catalog'])


@router.get('/voices', response_model=VoiceListResponse)
async def list_voices(
    gender: Optional[Literal['male', 'female']] = Query(default=None),
) -> VoiceListResponse:
    """List prebuilt voices, optionally filtered by gender."""
    return VoiceListResponse(
        voices=[VoiceResponse.model_validate(v) for v in catalog.get_voices(gender)]
    )


@router.get('/voices/{name}', response_model=VoiceResponse)
async def get_voice(name: str) -> VoiceResponse:
    """
    Get details for a specific voice.

    Raises:
        404: Voice not found
    """
    voice = catalog.get_voice(name)
    if not voice:
        raise HTTPException(status_code=404, detail=f'Voice not found: {name}')
    return VoiceResponse.model_validate(voice)


@router.get('/models', response_model=ModelListResponse)
async def list_models() -> ModelListResponse:
    return ModelListResponse(models=[ModelResponse.model_validate(m) for m in catalog.MODELS])


@router.get('/styles/presets', response_model=StylePresetListResponse)
async def list_style_presets() -> StylePresetListResponse:
    return StylePresetListResponse(
        presets=[StylePresetResponse.model_validate(p) for p in catalog.STYLE_PRESETS]
    )

"""
Style generation endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.config import ConfigurationError, get_api_key
from app.schemas.style import (
    StyleGenerateRequest,
    StyleGenerateResponse,
    StyleRefineRequest,
    StyleRefineResponse,
)
from app.services.style_client import StyleClient, StyleGenerationError


router = APIRouter(prefix='/styles', tags=['styles'])


def get_style_client() -> StyleClient:
    """Build a style client; fails when no API key is configured."""
    try:
        return StyleClient(get_api_key())
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post('/generate', response_model=StyleGenerateResponse)
async def generate_styles(
    request: StyleGenerateRequest,
    client: StyleClient = Depends(get_style_client),
) -> StyleGenerateResponse:
    """
    Generate style directives for a description.

    The results can be submitted as custom styles of a batch.
    """
    try:
        styles = await client.generate_styles(request.description)
    except StyleGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return StyleGenerateResponse(styles=styles)


@router.post('/refine', response_model=StyleRefineResponse)
async def refine_style(
    request: StyleRefineRequest,
    client: StyleClient = Depends(get_style_client),
) -> StyleRefineResponse:
    """
    Write a single style directive.

    Send earlier turns in `history` to adjust a previous answer; the model
    keeps what the new description does not ask to change.
    """
    try:
        style = await client.refine_style(
            request.description,
            [turn.model_dump() for turn in request.history],
        )
    except StyleGenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return StyleRefineResponse(style=style)

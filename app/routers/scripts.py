"""
Script upgrade endpoint.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.config import ConfigurationError, get_api_key
from app.schemas.script import ScriptUpgradeRequest, ScriptUpgradeResponse
from app.services.script_client import ScriptClient, ScriptUpgradeError


router = APIRouter(prefix='/scripts', tags=['scripts'])


def get_script_client() -> ScriptClient:
    try:
        return ScriptClient(get_api_key())
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post('/upgrade', response_model=ScriptUpgradeResponse)
async def upgrade_script(
    request: ScriptUpgradeRequest,
    client: ScriptClient = Depends(get_script_client),
) -> ScriptUpgradeResponse:
    """
    Add inline performance tags to a script.

    The tagged script can be submitted as the text of a batch.
    """
    try:
        tagged = await client.upgrade_script(request.script, request.style)
    except ScriptUpgradeError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ScriptUpgradeResponse(tagged_script=tagged)

"""
History endpoints for saved generations.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.schemas.history import HistoryEntryResponse, HistoryListResponse
from app.services.history_store import HistoryStore, get_history_store
from app.services.transcoder import file_extension


router = APIRouter(prefix='/history', tags=['history'])


@router.get('', response_model=HistoryListResponse)
async def list_history(
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    store: HistoryStore = Depends(get_history_store),
) -> HistoryListResponse:
    """
    List saved generations with pagination.

    Returns entries ordered by creation time (newest first).
    """
    total = await store.count()
    entries = await store.list_all(limit=limit, offset=offset)

    return HistoryListResponse(
        entries=[HistoryEntryResponse.model_validate(entry) for entry in entries],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get('/{entry_id}', response_model=HistoryEntryResponse)
async def get_history_entry(
    entry_id: str,
    store: HistoryStore = Depends(get_history_store),
) -> HistoryEntryResponse:
    entry = await store.get(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=f'History entry not found: {entry_id}')
    return HistoryEntryResponse.model_validate(entry)


@router.get('/{entry_id}/audio')
async def get_history_audio(
    entry_id: str,
    store: HistoryStore = Depends(get_history_store),
):
    """
    Return the saved audio for replay or download.

    Raises:
        404: Entry not found
    """
    entry = await store.get(entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail=f'History entry not found: {entry_id}')

    timestamp_part = entry.created_at.strftime('%Y%m%d-%H%M%S')
    filename = f'tts-{entry.voice}-{timestamp_part}.{file_extension(entry.mime_type)}'

    return Response(
        content=entry.audio,
        media_type=entry.mime_type,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@router.delete('/{entry_id}', status_code=204)
async def delete_history_entry(
    entry_id: str,
    store: HistoryStore = Depends(get_history_store),
):
    """Delete a saved generation. Unknown ids are ignored."""
    await store.delete(entry_id)


@router.delete('', status_code=204)
async def clear_history(store: HistoryStore = Depends(get_history_store)):
    """Delete all saved generations."""
    await store.clear()

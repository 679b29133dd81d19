"""
Playback coordination endpoints.

Clients report when rendered results start or stop playing and pause
whatever the response lists, so only one result is audible at a time.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.schemas.playback import PlaybackResponse
from app.services.playback import PlaybackCoordinator, get_playback_coordinator


router = APIRouter(prefix='/playback', tags=['playback'])


@router.get('', response_model=PlaybackResponse)
async def get_playback(
    coordinator: PlaybackCoordinator = Depends(get_playback_coordinator),
) -> PlaybackResponse:
    return PlaybackResponse(playing=coordinator.playing())


@router.post('/{artifact_id}/play', response_model=PlaybackResponse)
async def play(
    artifact_id: str,
    coordinator: PlaybackCoordinator = Depends(get_playback_coordinator),
) -> PlaybackResponse:
    """Report that an artifact started playing; returns the ids to pause."""
    try:
        paused = coordinator.play_started(artifact_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f'Artifact not found: {artifact_id}')
    return PlaybackResponse(playing=artifact_id, paused=paused)


@router.post('/{artifact_id}/stop', response_model=PlaybackResponse)
async def stop(
    artifact_id: str,
    coordinator: PlaybackCoordinator = Depends(get_playback_coordinator),
) -> PlaybackResponse:
    try:
        coordinator.play_stopped(artifact_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f'Artifact not found: {artifact_id}')
    return PlaybackResponse(playing=coordinator.playing())


@router.put('/{artifact_id}', status_code=204)
async def register(
    artifact_id: str,
    coordinator: PlaybackCoordinator = Depends(get_playback_coordinator),
):
    """Register a rendered artifact, e.g. a history entry shown for replay."""
    coordinator.register(artifact_id)


@router.delete('/{artifact_id}', status_code=204)
async def unregister(
    artifact_id: str,
    coordinator: PlaybackCoordinator = Depends(get_playback_coordinator),
):
    coordinator.unregister(artifact_id)

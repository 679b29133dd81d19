"""
Batch endpoints for multi-voice speech generation.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from app.config import ConfigurationError
from app.models.job import JobStatus
from app.services.transcoder import file_extension
from app.schemas.batch import BatchCreate, BatchResponse
from app.services.batch_manager import (
    BatchManager,
    BatchNotFoundError,
    BatchValidationError,
    get_batch_manager,
)


router = APIRouter(prefix='/batches', tags=['batches'])


def _get_batch_or_404(manager: BatchManager, batch_id: str):
    try:
        return manager.get_batch(batch_id)
    except BatchNotFoundError:
        raise HTTPException(status_code=404, detail=f'Batch not found: {batch_id}')


@router.post('', response_model=BatchResponse, status_code=201)
async def create_batch(
    batch_data: BatchCreate,
    wait: bool = Query(default=False, description='Respond only once every job has finished'),
    manager: BatchManager = Depends(get_batch_manager),
) -> BatchResponse:
    """
    Submit a batch of synthesis jobs.

    Returns immediately with every job pending unless `wait` is set.
    Invalid requests are rejected before any job is created.
    """
    try:
        batch = await manager.submit(
            text=batch_data.text,
            voices=batch_data.voices,
            model=batch_data.model,
            style_tags=batch_data.style_tags,
            custom_styles=batch_data.custom_styles,
        )
    except BatchValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if wait:
        try:
            batch = await manager.wait(batch.id)
        except BatchNotFoundError:
            raise HTTPException(status_code=404, detail=f'Batch not found: {batch.id}')

    return BatchResponse.from_batch(batch)


@router.get('', response_model=List[BatchResponse])
async def list_batches(manager: BatchManager = Depends(get_batch_manager)):
    """List batches held in memory, newest first."""
    return [BatchResponse.from_batch(b) for b in manager.list_batches()]


@router.get('/{batch_id}', response_model=BatchResponse)
async def get_batch(
    batch_id: str,
    manager: BatchManager = Depends(get_batch_manager),
) -> BatchResponse:
    """Get a batch with the current status of each job."""
    return BatchResponse.from_batch(_get_batch_or_404(manager, batch_id))


@router.get('/{batch_id}/jobs/{job_id}/audio')
async def get_job_audio(
    batch_id: str,
    job_id: str,
    manager: BatchManager = Depends(get_batch_manager),
):
    """
    Return the audio for a succeeded job.

    Raises:
        404: Batch or job not found, or audio not ready
    """
    batch = _get_batch_or_404(manager, batch_id)
    job = batch.get_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail=f'Job not found: {job_id}')

    if job.status != JobStatus.succeeded or job.artifact is None:
        raise HTTPException(
            status_code=404,
            detail=f'Audio not ready. Job status: {job.status.value}'
        )

    extension = file_extension(job.artifact.mime_type)
    timestamp_part = job.created_at.strftime('%Y%m%d-%H%M%S')
    filename = f'tts-{job.spec.voice}-{timestamp_part}.{extension}'

    return Response(
        content=job.artifact.data,
        media_type=job.artifact.mime_type,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )


@router.delete('/{batch_id}', status_code=204)
async def release_batch(
    batch_id: str,
    manager: BatchManager = Depends(get_batch_manager),
):
    """
    Release a batch's in-memory results.

    Saved history entries are not affected.
    """
    try:
        manager.release(batch_id)
    except BatchNotFoundError:
        raise HTTPException(status_code=404, detail=f'Batch not found: {batch_id}')

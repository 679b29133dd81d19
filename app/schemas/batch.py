"""
Pydantic schemas for batch generation.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from app.catalog import DEFAULT_MODEL
from app.models.job import Job
from app.services.batch_manager import Batch


class BatchCreate(BaseModel):
    """Schema for submitting a batch: every voice crossed with every style."""
    text: str = Field(..., description='The text to synthesize')
    voices: List[str] = Field(default_factory=list, description='Voice names')
    model: str = Field(DEFAULT_MODEL, description='Synthesis model id')
    style_tags: List[str] = Field(default_factory=list, description='Style tags, e.g. [whispering]')
    custom_styles: List[str] = Field(
        default_factory=list,
        description='Free-text style directives, each one a separate variant',
    )


class JobResponse(BaseModel):
    """Schema for job response."""
    id: str
    voice: str
    model: str
    style_tag: Optional[str]
    custom_style: Optional[str]
    status: str
    error_message: Optional[str]
    mime_type: Optional[str]
    audio_size: Optional[int]
    created_at: datetime
    completed_at: Optional[datetime]
    duration_ms: Optional[int]

    @classmethod
    def from_job(cls, job: Job) -> 'JobResponse':
        return cls(
            id=job.id,
            voice=job.spec.voice,
            model=job.spec.model,
            style_tag=job.spec.style_tag,
            custom_style=job.spec.custom_style,
            status=job.status.value,
            error_message=job.error_message,
            mime_type=job.artifact.mime_type if job.artifact else None,
            audio_size=job.artifact.size if job.artifact else None,
            created_at=job.created_at,
            completed_at=job.completed_at,
            duration_ms=job.duration_ms,
        )


class BatchResponse(BaseModel):
    """Schema for batch response."""
    id: str
    status: str
    created_at: datetime
    completed_at: Optional[datetime]
    jobs: List[JobResponse]
    warnings: List[str]
    saved_count: int

    @classmethod
    def from_batch(cls, batch: Batch) -> 'BatchResponse':
        return cls(
            id=batch.id,
            status=batch.status,
            created_at=batch.created_at,
            completed_at=batch.completed_at,
            jobs=[JobResponse.from_job(job) for job in batch.jobs],
            warnings=list(batch.warnings),
            saved_count=batch.saved_count,
        )

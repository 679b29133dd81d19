"""
Pydantic schemas for generation history.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict


class HistoryEntryResponse(BaseModel):
    """Schema for a history entry. Audio is served separately."""
    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    id: str
    voice: str
    model: str
    model_label: str
    style_preset: str
    style_label: str
    custom_style: str
    text: str
    mime_type: str
    audio_size: int
    created_at: datetime


class HistoryListResponse(BaseModel):
    """Schema for paginated history list response."""
    entries: List[HistoryEntryResponse]
    total: int
    limit: int
    offset: int

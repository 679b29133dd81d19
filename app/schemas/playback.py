"""
Pydantic schemas for playback coordination.
"""
from typing import List, Optional
from pydantic import BaseModel


class PlaybackResponse(BaseModel):
    """Which artifact is playing, and which were paused to allow it."""
    playing: Optional[str]
    paused: List[str] = []

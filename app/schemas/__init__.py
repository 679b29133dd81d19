"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.batch import BatchCreate, BatchResponse, JobResponse
from app.schemas.catalog import (
    VoiceResponse,
    VoiceListResponse,
    ModelResponse,
    ModelListResponse,
    StylePresetResponse,
    StylePresetListResponse,
)
from app.schemas.history import HistoryEntryResponse, HistoryListResponse
from app.schemas.playback import PlaybackResponse
from app.schemas.script import ScriptUpgradeRequest, ScriptUpgradeResponse
from app.schemas.style import (
    StyleGenerateRequest,
    StyleGenerateResponse,
    ConversationTurn,
    StyleRefineRequest,
    StyleRefineResponse,
)

__all__ = [
    'BatchCreate',
    'BatchResponse',
    'JobResponse',
    'VoiceResponse',
    'VoiceListResponse',
    'ModelResponse',
    'ModelListResponse',
    'StylePresetResponse',
    'StylePresetListResponse',
    'HistoryEntryResponse',
    'HistoryListResponse',
    'PlaybackResponse',
    'StyleGenerateRequest',
    'StyleGenerateResponse',
    'ConversationTurn',
    'StyleRefineRequest',
    'StyleRefineResponse',
    'ScriptUpgradeRequest',
    'ScriptUpgradeResponse',
]

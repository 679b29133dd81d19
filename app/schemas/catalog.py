"""
Pydantic schemas for the voice, model and style preset catalogs.
"""
from typing import List
from pydantic import BaseModel, ConfigDict


class VoiceResponse(BaseModel):
    """Schema for voice response."""
    model_config = ConfigDict(from_attributes=True)

    name: str
    gender: str


class VoiceListResponse(BaseModel):
    """Schema for voice list response."""
    voices: List[VoiceResponse]


class ModelResponse(BaseModel):
    """Schema for model response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    description: str


class ModelListResponse(BaseModel):
    models: List[ModelResponse]


class StylePresetResponse(BaseModel):
    """Schema for style preset response. An empty tag means no directive."""
    model_config = ConfigDict(from_attributes=True)

    label: str
    tag: str


class StylePresetListResponse(BaseModel):
    presets: List[StylePresetResponse]

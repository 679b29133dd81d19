"""
Pydantic schemas for style generation.
"""
from typing import List, Literal
from pydantic import BaseModel, Field


class StyleGenerateRequest(BaseModel):
    description: str = Field(..., min_length=1, description='What the voices should sound like')


class StyleGenerateResponse(BaseModel):
    styles: List[str]


class ConversationTurn(BaseModel):
    """One earlier message of a style refinement conversation."""
    role: Literal['user', 'model']
    content: str


class StyleRefineRequest(BaseModel):
    """Schema for asking for a single style, optionally refining earlier answers."""
    description: str = Field(..., min_length=1, description='What to write or change')
    history: List[ConversationTurn] = Field(default_factory=list)


class StyleRefineResponse(BaseModel):
    style: str

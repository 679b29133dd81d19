"""
Pydantic schemas for script upgrades.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ScriptUpgradeRequest(BaseModel):
    script: str = Field(..., min_length=1, description='Script to tag; its words are kept')
    style: Optional[str] = Field(None, description='Style directive the script will be read with')


class ScriptUpgradeResponse(BaseModel):
    tagged_script: str

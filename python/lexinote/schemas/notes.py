"""Translation notebook schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class NoteCreate(BaseModel):
    """Request schema for saving a translation to the notebook."""

    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str


class NoteOut(BaseModel):
    """Response schema for a saved translation."""

    id: UUID
    user_id: UUID
    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

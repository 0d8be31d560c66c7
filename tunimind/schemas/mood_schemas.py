from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal

MoodTag = Literal["happy", "sad", "angry", "anxious", "neutral", "excited", "tired", "content"]
ISO_DAY = r"^\d{4}-\d{2}-\d{2}$"


class MoodEntryCreate(BaseModel):
    date: str = Field(pattern=ISO_DAY)
    mood: MoodTag
    intensity: int = Field(ge=1, le=10)
    note: Optional[str] = None
    activities: List[str] = []


class MoodEntryUpdate(BaseModel):
    date: Optional[str] = Field(default=None, pattern=ISO_DAY)
    mood: Optional[MoodTag] = None
    intensity: Optional[int] = Field(default=None, ge=1, le=10)
    note: Optional[str] = None
    activities: Optional[List[str]] = None


class MoodImport(MoodEntryCreate):
    # Exported records carry id, user_id and timestamps as well
    model_config = ConfigDict(extra="allow")

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Literal, Annotated

from tunimind.schemas.mood_schemas import ISO_DAY

EmotionTag = Literal["happy", "sad", "angry", "surprised", "fearful", "disgusted", "neutral"]
Score = Annotated[float, Field(ge=0, le=1)]


class EmotionEntryCreate(BaseModel):
    date: Optional[str] = Field(default=None, pattern=ISO_DAY)
    emotion: EmotionTag
    confidence: Score
    image_url: Optional[str] = None


class DetectionRequest(BaseModel):
    # Raw expression scores from the face detector, e.g. {"happy": 0.91, "neutral": 0.05}
    expressions: Dict[str, Score]
    save: bool = False  # also append an emotion entry


class MoodFromEmotionRequest(BaseModel):
    emotion: str
    confidences: Dict[str, Score] = {}


class EmotionImport(EmotionEntryCreate):
    model_config = ConfigDict(extra="allow")

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from tunimind.schemas.emotion_schemas import EmotionEntryCreate, DetectionRequest, MoodFromEmotionRequest
from tunimind.services.data_service import DataService
from tunimind.services.emotion_service import EmotionService, dominant_expression, confidence_scores
from tunimind.storage import LocalStorage, get_storage

router = APIRouter(prefix="/api/v1/emotions", tags=["Emotions"])


@router.get("")
async def list_emotions(limit: int = 30, storage: LocalStorage = Depends(get_storage)):
    return DataService(storage).get_emotions(limit)


@router.get("/recent")
async def recent_emotions(limit: int = 20, storage: LocalStorage = Depends(get_storage)):
    return DataService(storage).get_recent_emotions(limit)


@router.post("")
async def save_emotion(entry: EmotionEntryCreate, storage: LocalStorage = Depends(get_storage)):
    try:
        record = DataService(storage).save_emotion(entry.model_dump(exclude_none=True))
        return {"status": "success", "data": record}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/detections")
async def record_detection(body: DetectionRequest, storage: LocalStorage = Depends(get_storage)):
    """
    Take one frame's expression scores, keep the dominant one as the latest
    emotion and optionally store it as an emotion entry.
    """
    emotion = dominant_expression(body.expressions)
    if emotion is None:
        raise HTTPException(status_code=400, detail="No expressions detected")

    try:
        service = EmotionService(storage)
        confidences = confidence_scores(body.expressions)
        result = service.record_detection(emotion, confidences)
        if body.save:
            stamp = str(int(datetime.now(timezone.utc).timestamp() * 1000))
            image = DataService.upload_emotion_image(stamp)
            result["entry"] = service.data.save_emotion({
                "emotion": emotion,
                "confidence": confidences.get(emotion, 0.0),
                "image_url": image["url"],
            })
        return {"status": "success", "data": result}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/mood")
async def save_mood_from_emotion(body: MoodFromEmotionRequest, storage: LocalStorage = Depends(get_storage)):
    """Log today's mood from a detected emotion."""
    try:
        record = EmotionService(storage).save_mood_from_emotion(body.emotion, body.confidences)
        return {"status": "success", "data": record}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/history")
async def detection_history(storage: LocalStorage = Depends(get_storage)):
    service = EmotionService(storage)
    return {"last": service.last_emotion(), "history": service.history()}

from fastapi import APIRouter, Depends, HTTPException

from tunimind.exceptions import MoodNotFoundError
from tunimind.schemas.mood_schemas import MoodEntryCreate, MoodEntryUpdate
from tunimind.services.data_service import DataService
from tunimind.storage import LocalStorage, get_storage

router = APIRouter(prefix="/api/v1/moods", tags=["Moods"])


@router.get("")
async def list_moods(limit: int = 30, storage: LocalStorage = Depends(get_storage)):
    return DataService(storage).get_moods(limit)


@router.post("")
async def save_mood(entry: MoodEntryCreate, storage: LocalStorage = Depends(get_storage)):
    """Log today's (or entry.date's) mood, replacing an earlier entry for the same day."""
    try:
        record = DataService(storage).save_mood(entry.model_dump())
        return {"status": "success", "data": record}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{mood_id}")
async def update_mood(mood_id: str, changes: MoodEntryUpdate, storage: LocalStorage = Depends(get_storage)):
    try:
        record = DataService(storage).update_mood(mood_id, changes.model_dump(exclude_unset=True))
        return {"status": "success", "data": record}
    except MoodNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{mood_id}")
async def delete_mood(mood_id: str, storage: LocalStorage = Depends(get_storage)):
    try:
        deleted = DataService(storage).delete_mood(mood_id)
        return {"status": "success", "data": {"deleted": deleted}}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

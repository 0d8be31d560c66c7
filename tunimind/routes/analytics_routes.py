from fastapi import APIRouter, Depends, HTTPException

from tunimind.services.analytics_service import AnalyticsService
from tunimind.services.data_service import DataService
from tunimind.storage import LocalStorage, get_storage

router = APIRouter(prefix="/api/v1/analytics", tags=["Analytics"])


@router.get("/moods")
async def mood_analytics(limit: int = 30, storage: LocalStorage = Depends(get_storage)):
    """Dashboard aggregates over the user's latest moods."""
    try:
        moods = DataService(storage).get_moods(limit)
        return {
            "summary": AnalyticsService.summary(moods),
            "distribution": AnalyticsService.mood_distribution(moods),
            "weekly": AnalyticsService.weekly_pattern(moods),
            "activities": AnalyticsService.activity_correlation(moods),
            "timeline": AnalyticsService.mood_timeline(moods),
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

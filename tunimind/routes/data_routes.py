# ---------- routes/data_routes.py ----------
"""
Backup, restore, reset and preference routes for the caller's namespace.
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from tunimind.exceptions import DataFormatError
from tunimind.services.data_service import DataService
from tunimind.storage import LocalStorage, get_storage

router = APIRouter(prefix="/api/v1/data", tags=["Data"])


@router.post("/setup")
async def setup_storage(storage: LocalStorage = Depends(get_storage)):
    try:
        DataService(storage).setup_storage()
        return {"status": "success"}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/export")
async def export_data(storage: LocalStorage = Depends(get_storage)):
    return DataService(storage).export_data()


@router.post("/import")
async def import_data(doc: Any = Body(...), storage: LocalStorage = Depends(get_storage)):
    """Restore an export document, replacing the current user's moods (and emotions if present)."""
    try:
        DataService(storage).import_data(doc)
        return {"status": "success"}
    except DataFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("")
async def clear_all_data(storage: LocalStorage = Depends(get_storage)):
    try:
        DataService(storage).clear_all_data()
        return {"status": "success"}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/sample")
async def load_sample_data(storage: LocalStorage = Depends(get_storage)):
    try:
        counts = DataService(storage).load_sample_data()
        return {"status": "success", "data": counts}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/reset")
async def reset_with_sample_data(days: int = Query(30, ge=1, le=365), storage: LocalStorage = Depends(get_storage)):
    """Replace the user's moods with `days` days of random entries."""
    try:
        moods = DataService(storage).reset_with_sample_data(days)
        return {"status": "success", "data": moods}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


# ── Preferences ───────────────────────────────────────────────────
@router.get("/preferences")
async def get_preferences(storage: LocalStorage = Depends(get_storage)):
    return DataService(storage).get_all_preferences()


@router.get("/preferences/{key}")
async def get_preference(key: str, storage: LocalStorage = Depends(get_storage)):
    return {"key": key, "value": DataService(storage).get_preference(key)}


@router.put("/preferences/{key}")
async def save_preference(key: str, value: Any = Body(..., embed=True), storage: LocalStorage = Depends(get_storage)):
    try:
        return {"status": "success", "data": DataService(storage).save_preference(key, value)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

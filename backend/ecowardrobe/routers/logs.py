from datetime import date
from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional

from ecowardrobe.dependencies import flag_persistence_warning, get_store
from ecowardrobe.reco.activity import logs_for_day, weekly_activity
from ecowardrobe.schemas import DayStatus, OutfitLog, OutfitLogCreate
from ecowardrobe.storage.wardrobe_store import WardrobeStore

router = APIRouter()


@router.get("", response_model=List[OutfitLog])
async def get_logs(
    store: WardrobeStore = Depends(get_store),
    day: Optional[date] = Query(None, description="Only logs for this day (YYYY-MM-DD)"),
):
    """Outfit logs, most recent first"""
    if day is not None:
        return logs_for_day(day, store.logs)
    return list(store.logs)


@router.get("/weekly", response_model=List[DayStatus])
async def get_weekly_activity(
    store: WardrobeStore = Depends(get_store),
    today: Optional[date] = Query(None, description="Last day of the window; defaults to today (UTC)"),
):
    """Worn counts for the last 7 days, oldest first"""
    return weekly_activity(today or store.today(), store.logs)


@router.post("", response_model=OutfitLog, status_code=201)
async def log_outfit(payload: OutfitLogCreate, response: Response, store: WardrobeStore = Depends(get_store)):
    """
    Log an outfit. Wear counts of the selected items still in the closet
    go up by one; ids of removed items are kept in the log.
    """
    log = store.log_outfit(payload.item_ids, day=payload.date, mood_name=payload.mood_name)
    flag_persistence_warning(response, store)
    return log

from fastapi import APIRouter, Depends, Response
from typing import List

from ecowardrobe.core.exceptions import NotFoundError, ValidationError
from ecowardrobe.dependencies import flag_persistence_warning, get_store, get_stylist
from ecowardrobe.reco.resolver import resolve_recommendations
from ecowardrobe.schemas import RecommendationResponse, StyleMood, StyleMoodCreate
from ecowardrobe.storage.wardrobe_store import WardrobeStore
from ecowardrobe.utils.gemini_client import GeminiStylist

router = APIRouter()

# Outfit ideas need at least two pieces to combine
MIN_ITEMS_FOR_IDEAS = 2


@router.get("", response_model=List[StyleMood])
async def get_moods(store: WardrobeStore = Depends(get_store)):
    """All style moods in creation order"""
    return list(store.moods)


@router.post("", response_model=StyleMood, status_code=201)
async def create_mood(payload: StyleMoodCreate, response: Response, store: WardrobeStore = Depends(get_store)):
    """Define a new style mood"""
    mood = store.create_mood(
        name=payload.name,
        description=payload.description,
        keywords=payload.keywords,
        mood_image_url=payload.mood_image_url,
    )
    flag_persistence_warning(response, store)
    return mood


@router.delete("/{mood_id}", status_code=204)
async def delete_mood(mood_id: str, store: WardrobeStore = Depends(get_store)):
    """Remove a style mood (idempotent)"""
    store.remove_mood(mood_id)
    response = Response(status_code=204)
    flag_persistence_warning(response, store)
    return response


@router.post("/{mood_id}/recommendations", response_model=RecommendationResponse)
async def recommend_for_mood(
    mood_id: str,
    store: WardrobeStore = Depends(get_store),
    stylist: GeminiStylist = Depends(get_stylist),
):
    """
    Outfit ideas from the current closet for one style mood.
    Item references are resolved when the answer arrives; pieces removed
    in the meantime come back with known=false.
    """
    mood = store.get_mood(mood_id)
    if mood is None:
        raise NotFoundError("StyleMood", mood_id)
    if len(store.items) < MIN_ITEMS_FOR_IDEAS:
        raise ValidationError(f"Add at least {MIN_ITEMS_FOR_IDEAS} items to get outfit ideas", field="items")

    stylist.profiler.reset()
    recommendations = await stylist.personalized_recommendations(mood, store.items)
    stylist.profiler.log_summary("[Mood ideas] ")
    return RecommendationResponse(
        mood_id=mood.id,
        recommendations=resolve_recommendations(store, recommendations),
    )

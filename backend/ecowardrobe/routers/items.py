from fastapi import APIRouter, Depends, Query, Response
from typing import List, Literal, Optional

from ecowardrobe.core.exceptions import NotFoundError
from ecowardrobe.dependencies import flag_persistence_warning, get_store, get_stylist
from ecowardrobe.reco.resolver import resolve_recommendations
from ecowardrobe.reco.scoring import is_high_score, rank_items, total_score, utility_score
from ecowardrobe.schemas import Category, Item, ItemCreate, ScanRequest, ScanResponse, ScoredItem
from ecowardrobe.storage.wardrobe_store import WardrobeStore
from ecowardrobe.utils.gemini_client import GeminiStylist

router = APIRouter()


def _scored(item: Item) -> ScoredItem:
    return ScoredItem(
        item=item,
        utility_score=utility_score(item),
        total_score=total_score(item),
        high_score=is_high_score(item),
    )


@router.get("", response_model=List[ScoredItem])
async def get_items(
    response: Response,
    store: WardrobeStore = Depends(get_store),
    category: Optional[Category] = Query(None, description="Filter by closet category"),
    sort: Literal["recent", "score"] = Query("recent", description="recent = newest first, score = best total score first"),
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    page_size: int = Query(100, ge=1, le=100, description="Items per page (max 100)"),
):
    """
    Closet items with their utility and total scores.
    """
    items = store.items_in_category(category)
    if sort == "score":
        items = rank_items(items)

    # Set total count header for pagination
    response.headers["X-Total-Count"] = str(len(items))

    offset = (page - 1) * page_size
    return [_scored(item) for item in items[offset:offset + page_size]]


@router.post("/scan", response_model=ScanResponse)
async def scan_item(
    payload: ScanRequest,
    store: WardrobeStore = Depends(get_store),
    stylist: GeminiStylist = Depends(get_stylist),
):
    """
    Analyze a photo and suggest outfits around it. Nothing is saved;
    confirm with POST /items to add the piece to the closet.
    """
    stylist.profiler.reset()
    analysis = await stylist.identify_clothing_item(payload.image)
    try_on = []
    if payload.with_try_on and store.items:
        recommendations = await stylist.try_on_recommendations(analysis, store.items)
        # Resolve against the closet as it is now; items may have been removed meanwhile
        try_on = resolve_recommendations(store, recommendations)
    stylist.profiler.log_summary("[Scan] ")
    return ScanResponse(analysis=analysis, try_on=try_on)


@router.get("/{item_id}", response_model=ScoredItem)
async def get_item(item_id: str, store: WardrobeStore = Depends(get_store)):
    """
    Get a specific closet item by ID
    """
    item = store.get_item(item_id)
    if item is None:
        raise NotFoundError("Item", item_id)
    return _scored(item)


@router.post("", response_model=Item, status_code=201)
async def create_item(payload: ItemCreate, response: Response, store: WardrobeStore = Depends(get_store)):
    """
    Add an analyzed item to the closet (fresh id, never worn)
    """
    item = store.catalog_item(payload.analysis, payload.image_url)
    flag_persistence_warning(response, store)
    return item


@router.delete("/{item_id}", status_code=204)
async def delete_item(item_id: str, store: WardrobeStore = Depends(get_store)):
    """
    Remove an item. Removing an unknown id is not an error; outfit logs
    that reference the item are left untouched.
    """
    store.remove_item(item_id)
    response = Response(status_code=204)
    flag_persistence_warning(response, store)
    return response

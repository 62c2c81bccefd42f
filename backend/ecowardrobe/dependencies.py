"""
FastAPI dependencies shared by the routers.
"""
from fastapi import Request, Response

from ecowardrobe.storage.wardrobe_store import WardrobeStore
from ecowardrobe.utils.gemini_client import GeminiStylist

PERSISTENCE_WARNING_HEADER = "X-Persistence-Warning"


def get_store(request: Request) -> WardrobeStore:
    """The process-wide store created at startup"""
    return request.app.state.store


def get_stylist(request: Request) -> GeminiStylist:
    """Recognition / recommendation client created at startup"""
    return request.app.state.stylist


def flag_persistence_warning(response: Response, store: WardrobeStore) -> None:
    """Tell the client its change is only held in memory"""
    if store.last_persistence_error is not None:
        response.headers[PERSISTENCE_WARNING_HEADER] = store.last_persistence_error.message

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging

from ecowardrobe.config import settings
from ecowardrobe.core.exceptions import (
    WardrobeException,
    generic_exception_handler,
    http_exception_handler,
    wardrobe_exception_handler,
)
from ecowardrobe.dependencies import get_store
from ecowardrobe.routers import items, logs, moods
from ecowardrobe.schemas import HealthResponse
from ecowardrobe.storage import InMemoryKeyValueStore, SQLKeyValueStore, WardrobeStore, create_tables
from ecowardrobe.utils.gemini_client import GeminiStylist

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Eco Wardrobe API",
    description="Backend API for cataloging clothes, logging outfits and mood-based outfit ideas",
    version="1.0.0",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins if settings.ENVIRONMENT == "production" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count", "X-Persistence-Warning"],
)

app.add_exception_handler(WardrobeException, wardrobe_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


def build_store() -> WardrobeStore:
    """Create the store on the configured backend and load persisted state"""
    if settings.STORAGE_BACKEND == "memory":
        logger.warning("STORAGE_BACKEND=memory: wardrobe changes will not survive a restart")
        persistence = InMemoryKeyValueStore()
    else:
        create_tables()
        persistence = SQLKeyValueStore()
    store = WardrobeStore(persistence)
    store.load()
    return store


@app.on_event("startup")
async def load_wardrobe() -> None:
    """Load the wardrobe once; a malformed stored blob aborts startup"""
    if getattr(app.state, "store", None) is None:
        app.state.store = build_store()
    if getattr(app.state, "stylist", None) is None:
        app.state.stylist = GeminiStylist()
        if not settings.gemini_configured:
            logger.warning("GEMINI_API_KEY not set: scanning and outfit ideas will fail")
    logger.info("Eco Wardrobe API started")


# Include routers
app.include_router(items.router, prefix="/items", tags=["items"])
app.include_router(moods.router, prefix="/moods", tags=["moods"])
app.include_router(logs.router, prefix="/logs", tags=["logs"])


@app.get("/health", response_model=HealthResponse)
@app.head("/health")
async def health_check(store: WardrobeStore = Depends(get_store)):
    """
    Health check endpoint. Reports "degraded" while the last persistence
    write failed (state is then only held in memory).
    """
    return HealthResponse(
        status="ok" if store.last_persistence_error is None else "degraded",
        items=len(store.items),
        logs=len(store.logs),
        moods=len(store.moods),
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Welcome to the Eco Wardrobe API",
        "version": app.version,
        "docs": "/docs"
    }

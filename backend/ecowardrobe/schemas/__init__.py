"""
Pydantic schemas for the Eco Wardrobe API.

Import all schemas here for easy access.
"""
from .common import HealthResponse
from .wardrobe import Category, ItemAttributes, AnalysisResult, Item, ItemCreate, ScanRequest, ScoredItem
from .mood import StyleMood, StyleMoodCreate
from .outfit import (
    OutfitLog,
    OutfitLogCreate,
    DayStatus,
    Recommendation,
    ResolvedItem,
    ResolvedRecommendation,
    RecommendationResponse,
    ScanResponse,
)

__all__ = [
    # Common
    "HealthResponse",
    # Wardrobe
    "Category",
    "ItemAttributes",
    "AnalysisResult",
    "Item",
    "ItemCreate",
    "ScanRequest",
    "ScoredItem",
    # Mood
    "StyleMood",
    "StyleMoodCreate",
    # Outfit
    "OutfitLog",
    "OutfitLogCreate",
    "DayStatus",
    "Recommendation",
    "ResolvedItem",
    "ResolvedRecommendation",
    "RecommendationResponse",
    "ScanResponse",
]

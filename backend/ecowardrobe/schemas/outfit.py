"""
Outfit log, activity and recommendation schemas.
"""
from datetime import date as Date
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .wardrobe import AnalysisResult, Item


class OutfitLog(BaseModel):
    """A record that a set of items was worn on a calendar day"""
    model_config = ConfigDict(frozen=True)

    id: str
    date: Date = Field(..., description="Calendar day (YYYY-MM-DD), no time component")
    item_ids: Tuple[str, ...] = Field(..., min_length=1)
    mood_name: Optional[str] = Field(None, description="Mood the outfit was worn for, if any")


class OutfitLogCreate(BaseModel):
    """Schema for logging an outfit"""
    item_ids: List[str] = Field(default_factory=list, description="Selected item ids")
    date: Optional[Date] = Field(None, description="Defaults to today (UTC)")
    mood_name: Optional[str] = None


class DayStatus(BaseModel):
    """Worn / not-worn status of one calendar day"""
    date: Date
    worn_count: int = 0

    @computed_field
    @property
    def active(self) -> bool:
        return self.worn_count > 0


class Recommendation(BaseModel):
    """Outfit idea produced by the recommendation service"""
    id: str
    title: str
    description: str
    item_ids: List[str] = Field(default_factory=list)
    vibe_alignment: str = Field("", description="Why the textures and atmosphere match")
    sustainability_note: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator("item_ids", mode="before")
    @classmethod
    def coerce_item_ids(cls, v):
        if isinstance(v, list):
            return [str(x) for x in v]
        return v


class ResolvedItem(BaseModel):
    """Recommendation reference resolved against the current closet"""
    id: str
    known: bool
    item: Optional[Item] = None


class ResolvedRecommendation(Recommendation):
    """Recommendation with its item references resolved for display"""
    items: List[ResolvedItem] = Field(default_factory=list)


class RecommendationResponse(BaseModel):
    """Outfit ideas for one style mood"""
    mood_id: str
    recommendations: List[ResolvedRecommendation]


class ScanResponse(BaseModel):
    """Recognition result plus optional try-on ideas"""
    analysis: AnalysisResult
    try_on: List[ResolvedRecommendation] = Field(default_factory=list)

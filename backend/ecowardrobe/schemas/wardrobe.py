"""
Wardrobe item schemas.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Fixed set of closet categories"""
    TOPS = "Tops"
    BOTTOMS = "Bottoms"
    OUTERWEAR = "Outerwear"
    SHOES = "Shoes"
    ACCESSORIES = "Accessories"
    DRESSES = "Dresses"


def _parse_category(value):
    """Accept category names in any case ("tops", "TOPS", "Tops")."""
    if isinstance(value, str):
        for member in Category:
            if member.value.lower() == value.strip().lower():
                return member
    return value


class ItemAttributes(BaseModel):
    """Descriptive attributes shared by analysis results and stored items"""
    name: str = Field(..., description="Display name of the piece")
    category: Category = Field(..., description="Closet category")
    color: str = Field(..., description="Primary color")
    material: str = Field(..., description="Material name, e.g. organic cotton")
    texture: str = Field(..., description="Tactile feel, e.g. heavy-knit")
    vibe: str = Field(..., description="Atmosphere, e.g. minimalist-industrial")
    tags: Tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        return _parse_category(v)


class AnalysisResult(ItemAttributes):
    """Structured output of the recognition service for one photographed item"""
    material_score: int = Field(..., ge=1, le=100, description="Ecological score of the material")
    sustainability_tip: str = Field("", description="Care or sourcing advice")

    @field_validator("material_score", mode="before")
    @classmethod
    def round_fractional_score(cls, v):
        if isinstance(v, float):
            from ecowardrobe.reco.scoring import round_half_up
            return round_half_up(v)
        return v


class Item(ItemAttributes):
    """A cataloged clothing piece"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for the item")
    image_url: str = Field("", description="Image reference (URL or data URL)")
    material_score: int = Field(..., ge=0, le=100, description="Material eco-score")
    times_worn: int = Field(0, ge=0, description="Number of logged outfits including this item")
    last_worn_at: Optional[datetime] = None
    added_at: datetime

    @classmethod
    def from_analysis(
        cls,
        analysis: AnalysisResult,
        item_id: str,
        image_url: str,
        added_at: datetime,
    ) -> "Item":
        """Build a fresh, never-worn item from recognition output"""
        return cls(
            id=item_id,
            name=analysis.name,
            category=analysis.category,
            color=analysis.color,
            material=analysis.material,
            texture=analysis.texture,
            vibe=analysis.vibe,
            tags=analysis.tags,
            image_url=image_url,
            material_score=analysis.material_score,
            times_worn=0,
            added_at=added_at,
        )


class ItemCreate(BaseModel):
    """Schema for cataloging an analyzed item into the closet"""
    analysis: AnalysisResult
    image_url: str = Field(..., min_length=1, description="Image reference for the item")


class ScanRequest(BaseModel):
    """Photo of a clothing item to analyze"""
    image: str = Field(..., min_length=1, description="Base64 data URL of the photo")
    with_try_on: bool = Field(True, description="Also suggest outfits built around the new item")


class ScoredItem(BaseModel):
    """Item with its utility and total scores"""
    item: Item
    utility_score: int
    total_score: int
    high_score: bool = Field(False, description="True when the total score is above 70")

"""
Style mood schemas.
"""
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StyleMood(BaseModel):
    """A user-authored aesthetic profile"""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    keywords: Tuple[str, ...] = Field(default_factory=tuple, description="Ordered, duplicates allowed")
    mood_image_url: Optional[str] = None


class StyleMoodCreate(BaseModel):
    """Schema for defining a new style mood"""
    name: str = Field(..., description="e.g. Ethereal Utility")
    description: str = Field(..., description="What this mood means to the user")
    keywords: Union[List[str], str] = Field(
        default_factory=list,
        description="Keyword list, or a comma-separated string such as 'silk, heavy, tech'"
    )
    mood_image_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("keywords")
    @classmethod
    def split_keywords(cls, v):
        if isinstance(v, str):
            return [kw.strip() for kw in v.split(",") if kw.strip()]
        return v

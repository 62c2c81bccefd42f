"""
Common/shared schemas used across the application.
"""
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    items: int = 0
    logs: int = 0
    moods: int = 0

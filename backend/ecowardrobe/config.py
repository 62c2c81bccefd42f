"""
Configuration management for the Eco Wardrobe backend
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_RECOGNITION_MODEL = "gemini-3-flash-preview"
DEFAULT_RECOMMENDATION_MODEL = "gemini-3-pro-preview"


class Settings:
    """Application settings and configuration"""

    # Database Configuration (backs the key-value persistence adapter)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ecowardrobe.db")

    # "sql" persists through DATABASE_URL, "memory" keeps state for the process only
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sql").lower()

    # Frontend URL (for CORS)
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "")

    # Google Gemini Configuration (recognition + recommendations)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_RECOGNITION_MODEL: str = os.getenv("GEMINI_RECOGNITION_MODEL", DEFAULT_RECOGNITION_MODEL)
    GEMINI_RECOMMENDATION_MODEL: str = os.getenv("GEMINI_RECOMMENDATION_MODEL", DEFAULT_RECOMMENDATION_MODEL)
    GEMINI_TIMEOUT: float = float(os.getenv("GEMINI_TIMEOUT", "30"))

    # Runtime
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def gemini_configured(self) -> bool:
        """Check if the Gemini API key is present"""
        return bool(self.GEMINI_API_KEY)

    @property
    def allowed_origins(self) -> list:
        """Comma-separated CORS_ORIGINS, falling back to FRONTEND_URL"""
        if self.CORS_ORIGINS:
            return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return [self.FRONTEND_URL]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("development", "dev", "local")


settings = Settings()

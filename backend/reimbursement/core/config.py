"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    APP_NAME: str = "Rimborsi"
    DEBUG: bool = False
    
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./rimborsi.db"
    DB_ECHO: bool = False
    
    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:5173"]
    
    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v
    
    # Toll booths
    TOLL_STRICT_VALIDATION: bool = False  # Raise ValidationFailure on blank stations / non-positive fares instead of ignoring
    TOLL_SUGGESTION_LIMIT: int = 10  # Max stations returned by autocomplete (0 = no limit)
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

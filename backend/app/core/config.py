"""
Configuration module for the RestaurantOS Menu Builder API.
Loads settings from environment variables.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Database (use relative path or set via environment variable)
    database_url: str = "sqlite:///./restaurantos.db"

    # Deleting a menu removes its items only when enabled here;
    # otherwise cleanup is left to a database-level constraint.
    menu_delete_cascade: bool = False

    # Logging
    log_level: str = "INFO"

    # LLM Configuration ("openai" or "ollama")
    llm_provider: str = "openai"
    llm_base_url: str = "https://api.openai.com/v1"
    llm_model: str = "gpt-3.5-turbo"
    openai_api_key: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

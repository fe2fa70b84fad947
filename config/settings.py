"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # OpenAI Configuration
    openai_api_key: str = ""
    
    # Anthropic Configuration (Optional)
    anthropic_api_key: str = ""
    
    # Database Configuration
    mongodb_url: str = "mongodb://localhost:27017/neurotrack"
    
    # Application Configuration
    app_name: str = "NeuroTrack"
    app_version: str = "1.0.0"
    debug: bool = True
    log_level: str = "INFO"
    
    # Calendar day boundaries (streaks, vanishing reports, report gate)
    timezone: str = "UTC"
    streak_window_days: int = 365
    chat_history_window: int = 5
    
    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    
    # CORS Configuration
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    
    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()

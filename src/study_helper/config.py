"""
Configuration settings for the Study Helper backend.

Every field can be overridden by an environment variable of the same name.
Use .env file for local development. Values are read once at process start.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings for the explain/solve backend."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Study Helper Backend"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # === Server ===
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    
    # === Primary provider (Gemini) ===
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_API_URL: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-1.5-flash-latest:generateContent"
    )
    
    # === Secondary provider (OpenAI-compatible chat) ===
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_CHAT_URL: str = "https://api.openai.com/v1/chat/completions"
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float = 0.2
    
    PROVIDER_TIMEOUT: int = 60  # seconds
    
    # === Cache & Backoff ===
    CACHE_TTL_SECONDS: int = 1800  # 30 minutes
    RATE_LIMIT_DEFAULT_SECONDS: int = Field(default=60, gt=0)  # used when a 429 carries no hint
    OVERLOAD_DEFAULT_SECONDS: int = Field(default=45, gt=0)  # used when a 503 carries no hint
    
    # === Solver ===
    SOLVER_FORCE_GEMINI: bool = False  # skip the local solver for every /api/solve call
    
    # === Prompts ===
    GRADE_LEVEL: str = "10"
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = templates bundled with the package
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Imported directly by main.py; routes get it through get_settings()
settings = Settings()

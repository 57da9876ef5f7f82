"""Application configuration and settings."""

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "adaptive-interview"
    interview_port: int = 8005
    environment: str = "development"

    # MongoDB Configuration (session snapshots)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "adaptive_interview"
    mongodb_collection_sessions: str = "interview_sessions"

    # Reasoning Oracle (OpenAI-compatible chat endpoint)
    oracle_api_key: Optional[str] = None
    oracle_endpoint: str = "https://openrouter.ai/api/v1"
    oracle_model: str = "openai/gpt-4o-mini"
    model_temperature: float = 0.3
    model_max_tokens: int = 1500
    llm_invoke_timeout: float = 50.0
    oracle_max_retries: int = Field(default=5, ge=1)
    oracle_retry_delay: float = 2.0

    # Interview defaults
    max_questions: int = Field(default=20, ge=1)
    target_confidence: float = Field(default=70.0, ge=0.0, le=85.0)
    default_language: str = "en"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    class Config:
        env_file = ".env"
        case_sensitive = False
        protected_namespaces = ("settings_",)


# Global settings instance
settings = Settings()

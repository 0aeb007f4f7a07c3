"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "stress-advisor"
    log_level: str = "INFO"

    # External text-generation service (explanations fall back locally when no key is set)
    gemini_api_key: str | None = None
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"
    gemini_temperature: float = 0.2

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()

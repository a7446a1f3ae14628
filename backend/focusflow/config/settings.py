"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App info
    app_name: str = "FocusFlow"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage
    local_storage_path: str = "./data"
    history_key: str = "focusflow_history.json"  # single fixed key holding the whole history
    export_filename: str = "focusflow_history.json"

    # Sessions
    default_session_title: str = "Focus Session"

    # LLM Provider settings
    llm_provider: str = "gemini"  # "gemini", "openai" or "volcengine"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # uses provider default if not set
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_timeout: float = 60.0
    llm_temperature: float = 0.7

    # Legacy key name used by the browser build
    gemini_api_key: Optional[str] = None

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/focusflow.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log every API request with status and duration

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()

"""
Configuration management for the ContextAnchor client
Uses pydantic-settings for environment variable validation
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings loaded from environment variables (CONTEXTANCHOR_*)"""

    # API
    BASE_URL: str = "http://localhost:8080/api/v1"
    TIMEOUT: float = 60.0
    USER_AGENT: str = ""  # Empty: contextanchor-python/<version>

    # Static API key for server-to-server callers (bypasses session renewal)
    API_KEY: str = ""

    # Session persistence (empty: keep the session in memory only)
    SESSION_FILE: str = ""

    # Document processing
    POLL_INTERVAL: float = 3.0  # Seconds between document status refreshes
    UPLOAD_CHUNK_SIZE: int = 64 * 1024  # Bytes per streamed upload chunk

    model_config = SettingsConfigDict(
        env_prefix="CONTEXTANCHOR_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def session_file(self) -> Optional[str]:
        return self.SESSION_FILE or None


# Global settings instance
settings = ClientSettings()

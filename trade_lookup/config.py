"""Application configuration."""

import os
from dataclasses import dataclass


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # API settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Trade Service (backend collaborator)
    trade_service_url: str = "http://localhost:8080/api"
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0

    # Search defaults
    page_size: int = 20

    # Sessions
    session_idle_timeout: float = 1800.0
    max_sessions: int = 1000

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            trade_service_url=os.getenv(
                "TRADE_SERVICE_URL",
                "http://localhost:8080/api"
            ),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30.0")),
            max_retries=int(os.getenv("MAX_RETRIES", "3")),
            retry_delay=float(os.getenv("RETRY_DELAY", "1.0")),
            page_size=int(os.getenv("PAGE_SIZE", "20")),
            session_idle_timeout=float(os.getenv("SESSION_IDLE_TIMEOUT", "1800.0")),
            max_sessions=int(os.getenv("MAX_SESSIONS", "1000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

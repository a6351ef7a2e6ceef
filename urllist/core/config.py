from pydantic_settings import SettingsConfigDict, BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server settings
    server_host: str = "0.0.0.0"
    server_port: int = 8000
    server_reload: bool = False

    # CORS settings
    cors_origins: List[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    cors_allow_headers: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_to_file: bool = True

    # Cache settings
    cache_maxsize: int = 1000  # 0 keeps every entry for the process lifetime
    cache_ttl_seconds: Optional[float] = None

    # Fetching settings
    fetch_timeout: float = 15.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    fetch_accept: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    fetch_accept_language: str = "en-US,en;q=0.5"
    fetch_follow_redirects: bool = True
    fetch_max_redirects: int = 10
    block_private_hosts: bool = True

    # Resolution settings
    favicon_service_url: str = "https://www.google.com/s2/favicons?domain={domain}&sz=32"
    synthesize_missing_description: bool = True
    batch_max_urls: int = 50

    # Environment
    environment: str = "development"  # development, staging, production

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env file if it exists
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields in env file
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"


# Create a single instance of settings
settings = Settings()

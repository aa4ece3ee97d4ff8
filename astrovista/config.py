"""Application configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """AstroVista settings loaded from environment variables."""

    # NASA API key: sent upstream and required in x-api-key for ingest
    nasa_api_key: str = ""
    nasa_api_url: str = "https://api.nasa.gov/planetary/apod"
    upstream_timeout: float = 15.0

    # Data store
    db_path: Path = Path("/data/astrovista.db")

    # CORS (comma-separated allowed origins)
    cors_origins: str = ""

    # Ingest rate limiting
    ingest_rate_limit: int = 1
    ingest_rate_window_seconds: int = 60

    # Search
    default_per_page: int = 10

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "ASTROVISTA_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Singleton instance
settings = Settings()

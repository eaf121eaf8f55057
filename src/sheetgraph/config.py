"""
Configuration management for sheetgraph
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Store
    store_provider: str = "memory"  # 'memory', 'spreadsheet'
    spreadsheet_id: str | None = None

    # Relationships
    relationships_sheet: str = "RELATIONSHIPS"
    max_nesting_depth: int = 32

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    cors_origins: list[str] = ["http://localhost:3000"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "SHEETGRAPH_"
        case_sensitive = False


# Global settings instance
settings = Settings()

# ration_store/config/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    # App Info
    app_name: str = "Ration Store API"
    version: str = "1.0.0"
    debug: bool = False
    api_prefix: str = "/api"

    # Database
    database_url: str = "sqlite:///./ration_store.db"
    db_sslmode: Optional[str] = None

    # Security
    secret_key: str = "change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 720

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["*"]

    # Business rules: recompute client-supplied derived fields on the server
    derive_sale_total: bool = False
    derive_member_count: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def database_host(self) -> str:
        """Database location without credentials, for log output"""
        if "@" in self.database_url:
            return self.database_url.split("@", 1)[1]
        return self.database_url


settings = Settings()

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Painel de Sites"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: str = "prefer"  # disable, prefer, require, verify-ca, verify-full

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1
    login_rate_limit: str = "5/minute"

    # Public URLs
    app_url: str = "http://localhost:3000"  # Base for /formulario share links
    login_path: str = "/login"
    confirmation_path: str = "/confirmacao"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Redis (optional - app works without it)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    redis_pool_size: int = 10

    # Object storage (Supabase Storage REST API)
    storage_url: str = "http://localhost:54321"
    storage_service_key: str | None = None
    storage_bucket: str = "site_personalizacoes"
    storage_signed_url_ttl_seconds: int = 3600

    # Uploads
    upload_max_size_mb: int = 10
    upload_max_retries: int = 3
    upload_timeout_seconds: float = 30.0
    upload_backoff_base_seconds: float = 1.0
    upload_backoff_max_seconds: float = 10.0

    # Notifications
    notification_dedup_window_seconds: int = 60
    display_timezone: str = "America/Sao_Paulo"
    state_file_path: str = ".painel_state.json"  # Used when Redis is not configured
    state_key_prefix: str = "painel:state:"

    # Model templates
    default_model_id: str = "modelo1"

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list so share links never point elsewhere."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        hostname = urlparse(v).hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v.rstrip("/")

    @field_validator("upload_max_retries")
    @classmethod
    def validate_upload_max_retries(cls, v: int) -> int:
        if v < 1:
            raise ValueError("UPLOAD_MAX_RETRIES must be at least 1")
        return v

    @property
    def upload_max_size_bytes(self) -> int:
        return self.upload_max_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()

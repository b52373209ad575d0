import re
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_SECRETS = {"change-me", "change-me-too", "change-this-to-a-secure-random-string"}
MIN_SECRET_LENGTH = 32

# Token TTLs: <int><s|m|h|d>
TTL_PATTERN = re.compile(r"(\d+)([smhd])", re.ASCII)
TTL_UNIT_SECONDS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}
MAX_TTL_SECONDS = 365 * 24 * 60 * 60


def ttl_seconds(ttl: str) -> int | None:
    """Seconds for a compact duration such as "15m", or None if ttl does not parse."""
    match = TTL_PATTERN.fullmatch(ttl)
    if match is None:
        return None
    value, unit = match.groups()
    return int(value) * TTL_UNIT_SECONDS[unit]


class Settings(BaseSettings):
    """Environment-driven configuration. Secrets and DATABASE_URL have no defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Memora API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production
    log_level: str = "INFO"  # Ignored when debug is on

    # Security
    log_user_emails: bool = False  # Keep off in production, emails are personal data
    # Stricter CSP used once the Swagger UI is disabled; empty string drops the header
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Tokens - two independent secrets
    jwt_access_secret: str
    jwt_refresh_secret: str
    jwt_algorithm: str = "HS256"
    jwt_access_ttl: str = "15m"  # <int><s|m|h|d>
    jwt_refresh_ttl: str = "7d"

    # Password hashing (Argon2id)
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Rate limiting - any `limits` storage URI, in-memory when unset
    rate_limit_storage_uri: str | None = None

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires X-Metrics-Key

    # Temporal (expired session sweep)
    temporal_host: str = "localhost:7233"
    temporal_namespace: str = "default"
    temporal_task_queue: str = "memora-jobs"
    session_cleanup_schedule: str | None = None  # Cron, e.g. "0 * * * *" for hourly

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"

    @field_validator("jwt_access_secret", "jwt_refresh_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v in PLACEHOLDER_SECRETS:
            raise ValueError(
                "JWT secrets must be changed from the placeholder value. "
                "Generate one with: openssl rand -hex 32"
            )
        if len(v) < MIN_SECRET_LENGTH:
            raise ValueError(f"JWT secrets must be at least {MIN_SECRET_LENGTH} characters")
        return v

    @field_validator("jwt_access_ttl", "jwt_refresh_ttl")
    @classmethod
    def validate_token_ttl(cls, v: str) -> str:
        # Unparsable values are left to the runtime fallback in TokenIssuer
        seconds = ttl_seconds(v)
        if seconds is not None and seconds > MAX_TTL_SECONDS:
            raise ValueError(f"Token TTL {v!r} exceeds the maximum of {MAX_TTL_SECONDS}s (365d)")
        return v

    @model_validator(mode="after")
    def validate_distinct_secrets(self) -> "Settings":
        # A refresh token must never verify as an access token
        if self.jwt_access_secret == self.jwt_refresh_secret:
            raise ValueError("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must differ")
        return self

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject the wildcard (credentials are allowed) and drop trailing slashes."""
        if "*" in v:
            raise ValueError("CORS wildcard '*' cannot be combined with credentials")
        return [origin.rstrip("/") for origin in v]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()

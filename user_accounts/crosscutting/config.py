"""
Name: User Accounts Settings

Responsibilities:
  - Typed view over the environment (pydantic-settings, optional .env)
  - Refuse to start production with a guessable JWT secret or the dev seed on

Collaborators:
  - container.py: APP_ENV=test selects the in-memory repository
  - api/main.py: CORS, pool sizing, dev seed
  - identity/auth_users.py: JWT secret and TTL
  - crosscutting/logger.py: LOG_LEVEL / LOG_JSON
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_WEAK_JWT_SECRETS = frozenset({"dev-secret", "changeme", "change-me", "password"})
_MIN_PRODUCTION_SECRET_LENGTH = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    database_url: str
    app_env: str = "development"

    # CORS: "*" o lista separada por comas
    allowed_origins: str = "*"
    cors_allow_credentials: bool = False

    db_pool_min_size: int = Field(default=2, gt=0)
    db_pool_max_size: int = Field(default=10, gt=0)
    # 0 deshabilita el timeout
    db_statement_timeout_ms: int = Field(default=30_000, ge=0)

    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = Field(default=30, gt=0)

    log_level: str = "INFO"
    log_json: bool = True

    # Admin de desarrollo (sólo APP_ENV local/development)
    dev_seed_admin: bool = False
    dev_seed_admin_username: str = "admin"
    dev_seed_admin_email: str = "admin@local.dev"
    dev_seed_admin_password: str = "admin123"
    dev_seed_admin_force_reset: bool = False

    @model_validator(mode="after")
    def _pool_bounds(self) -> "Settings":
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"DB_POOL_MIN_SIZE ({self.db_pool_min_size}) must be <= "
                f"DB_POOL_MAX_SIZE ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def _production_hardening(self) -> "Settings":
        if not self.is_production():
            return self
        secret = self.jwt_secret.strip()
        if secret in _WEAK_JWT_SECRETS or len(secret) < _MIN_PRODUCTION_SECRET_LENGTH:
            raise ValueError(
                "JWT_SECRET must be a non-default value of at least "
                f"{_MIN_PRODUCTION_SECRET_LENGTH} characters in production"
            )
        if self.dev_seed_admin:
            raise ValueError("DEV_SEED_ADMIN must be false in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}


@lru_cache
def get_settings() -> Settings:
    """Raises pydantic.ValidationError if DATABASE_URL is missing or values are invalid."""
    return Settings()

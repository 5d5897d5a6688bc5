"""Application settings loaded from environment with safe fallbacks.

Environment precedence:
- Loads `.env` from the repo root before reading process env vars.
- Most values are pulled straight from env; booleans go through `_env_flag` so `"0"/"false"` work.
- CORS is normalized from `CORS_ORIGINS` (comma-separated) with a permissive default for local use.
- Redis is optional: when `REDIS_URL` is empty the key-value store runs in process memory.

Key expectations (defaults in parentheses):
- `APP_ENV` controls settings class selection (`production` default).
- `API_PREFIX` (`/api`) is the fixed path prefix every marketplace route lives under.
- Identity: `IDENTITY_JWT_SECRET` enables local token verification; otherwise tokens are checked
  against `IDENTITY_PROVIDER_URL` using `IDENTITY_SERVICE_KEY`.
- `ENFORCE_ORDER_TRANSITIONS` (true) toggles the order status state machine.
"""

import logging
import os
from pathlib import Path
from typing import ClassVar, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Base directory of the project; used for resolving relative paths reliably.
# (__file__ is farm_market/core/config/settings.py, so we need to traverse three levels up)
BASE_DIR = Path(__file__).resolve().parents[3]


load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)


def _env_flag(name: str, *, default: Optional[bool] = False) -> Optional[bool]:
    """
    Helper to parse boolean-like environment variables.
    """
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Behavior highlights:
    - Loads `.env` at repo root, then lets process env override.
    - Feature toggles parsed via `_env_flag` to accept common truthy/falsey strings.
    - Redis optional: absence keeps the store in memory but does not stop startup.
    - CORS normalized once to avoid mutation side effects in settings instances.
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = os.getenv("APP_NAME", "farm-market")
    environment: str = os.getenv("APP_ENV", "production")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_dir: Optional[str] = os.getenv("LOG_DIR", "logs")
    use_json_logs: bool = _env_flag("USE_JSON_LOGS", default=True)
    # Populated from CORS_ORIGINS in __init__; kept off the env mapping so a comma list is not JSON-parsed.
    allowed_origins: list[str] = []

    # Key-value store
    redis_url: Optional[str] = os.getenv("REDIS_URL")
    kv_key_namespace: str = os.getenv("KV_KEY_NAMESPACE", "")
    kv_scan_batch_size: int = int(os.getenv("KV_SCAN_BATCH_SIZE", 500))

    # Hosted identity provider
    identity_provider_url: Optional[str] = os.getenv("IDENTITY_PROVIDER_URL")
    identity_service_key: Optional[str] = os.getenv("IDENTITY_SERVICE_KEY")
    identity_jwt_secret: Optional[str] = os.getenv("IDENTITY_JWT_SECRET")
    identity_jwt_algorithm: str = os.getenv("IDENTITY_JWT_ALGORITHM", "HS256")
    identity_jwt_audience: Optional[str] = os.getenv(
        "IDENTITY_JWT_AUDIENCE", "authenticated"
    )
    identity_timeout_seconds: float = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", 5))

    # Marketplace rules
    enforce_order_transitions: bool = bool(
        _env_flag("ENFORCE_ORDER_TRANSITIONS", default=True)
    )
    recent_orders_limit: int = int(os.getenv("RECENT_ORDERS_LIMIT", 10))

    # Rate limiting / monitoring
    rate_limit_defaults: str = os.getenv(
        "RATE_LIMIT_DEFAULTS", "300 per minute;5000 per day"
    )
    signup_rate_limit: str = os.getenv("SIGNUP_RATE_LIMIT", "10/minute")
    message_rate_limit: str = os.getenv("MESSAGE_RATE_LIMIT", "60/minute")
    enable_metrics: bool = bool(_env_flag("ENABLE_METRICS", default=True))

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        env_override = os.getenv("APP_ENV")
        if env_override:
            object.__setattr__(self, "environment", env_override)

        cors_env = os.getenv("CORS_ORIGINS")
        if cors_env:
            origins = [
                origin.strip() for origin in cors_env.split(",") if origin.strip()
            ]
        elif self.allowed_origins:
            origins = self.allowed_origins
        else:
            origins = ["*"]
        object.__setattr__(self, "allowed_origins", origins)

        prefix = "/" + (self.api_prefix or "").strip("/")
        object.__setattr__(self, "api_prefix", "" if prefix == "/" else prefix)

        if not self.redis_url:
            logger.warning(
                "REDIS_URL is not set, records will be kept in process memory."
            )

    @property
    def uses_local_token_verification(self) -> bool:
        return bool(self.identity_jwt_secret)

    @property
    def default_rate_limits(self) -> list[str]:
        return [
            limit.strip()
            for limit in self.rate_limit_defaults.split(";")
            if limit.strip()
        ]

"""
Application settings.

Every setting is a flat, env-overridable field (``REDIS_HOST``,
``INVENTORY_MAX_IMPORT_BYTES``). Fields sharing a prefix are also exposed as
a read-only grouped view, so code reads ``settings.redis.host``.
"""
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_PASSWORD = "ChangeMe123"
SUPPORTED_DATABASE_SCHEMES = ("postgresql://", "postgresql+asyncpg://", "sqlite+aiosqlite://")


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class APIView(BaseModel):
    title: str
    description: str
    version: str
    host: str
    port: int


class DatabaseView(BaseModel):
    url: str
    pool_size: int
    max_overflow: int
    pool_recycle: int

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class SecurityView(BaseModel):
    secret_key: SecretStr
    algorithm: str
    access_token_expire_minutes: int
    password_min_length: int

    @property
    def secret_key_str(self) -> str:
        return self.secret_key.get_secret_value()


class LoggingView(BaseModel):
    level: str
    format: str


class RedisView(BaseModel):
    host: str
    port: int
    db: int
    password: Optional[SecretStr] = None

    @property
    def password_str(self) -> Optional[str]:
        return self.password.get_secret_value() if self.password else None


class CacheView(BaseModel):
    enabled: bool
    ttl: int
    prefix: str


class InventoryView(BaseModel):
    max_import_bytes: int
    recent_equipment_limit: int
    enforce_scope_on_record_reads: bool


class Settings(BaseSettings):
    """Base settings shared by every environment."""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    create_tables_on_startup: bool = False

    api_title: str = "Agricultural University Inventory API"
    api_description: str = (
        "Department-scoped equipment and asset inventory for the university "
        "and its research institutes"
    )
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    database_url: str
    database_pool_size: int = 20
    database_max_overflow: int = 30
    database_pool_recycle: int = 3600

    secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    password_min_length: int = 8

    logging_level: str = "INFO"
    logging_format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[SecretStr] = None

    cache_enabled: bool = True
    cache_ttl: int = 300
    cache_prefix: str = "agri:"

    inventory_max_import_bytes: int = 10 * 1024 * 1024
    inventory_recent_equipment_limit: int = 10
    inventory_enforce_scope_on_record_reads: bool = True

    seed_admin_email: str = "admin@mnsuam.edu.pk"
    seed_admin_name: str = "System Administrator"
    seed_admin_password: SecretStr = SecretStr(DEFAULT_SEED_PASSWORD)

    frontend_urls_raw: str = Field(default="http://localhost:3000", alias="FRONTEND_URLS", exclude=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    @field_validator("debug")
    @classmethod
    def debug_not_in_production(cls, v, info):
        if v and info.data.get("environment") == Environment.PRODUCTION:
            raise ValueError("Debug mode should not be enabled in production")
        return v

    @field_validator("database_url")
    @classmethod
    def async_database_url(cls, v):
        if not v.startswith(SUPPORTED_DATABASE_SCHEMES):
            raise ValueError("Invalid database URL format")
        # Plain postgres URLs get the asyncpg driver
        if v.startswith("postgresql://"):
            v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    def _group(self, prefix: str) -> Dict[str, Any]:
        return {
            name[len(prefix):]: getattr(self, name)
            for name in type(self).model_fields
            if name.startswith(prefix)
        }

    @property
    def frontend_urls(self) -> list[str]:
        """CORS origins from the comma-separated ``FRONTEND_URLS``."""
        urls = [url.strip() for url in self.frontend_urls_raw.split(",") if url.strip()]
        for url in urls:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"Invalid URL in FRONTEND_URLS: {url}")
        return urls

    @property
    def api(self) -> APIView:
        return APIView(**self._group("api_"))

    @property
    def database(self) -> DatabaseView:
        return DatabaseView(**self._group("database_"))

    @property
    def security(self) -> SecurityView:
        return SecurityView(
            secret_key=self.secret_key,
            algorithm=self.jwt_algorithm,
            access_token_expire_minutes=self.access_token_expire_minutes,
            password_min_length=self.password_min_length,
        )

    @property
    def logging(self) -> LoggingView:
        return LoggingView(**self._group("logging_"))

    @property
    def redis(self) -> RedisView:
        return RedisView(**self._group("redis_"))

    @property
    def cache(self) -> CacheView:
        return CacheView(**self._group("cache_"))

    @property
    def inventory(self) -> InventoryView:
        return InventoryView(**self._group("inventory_"))


class DevelopmentSettings(Settings):
    debug: bool = True
    logging_level: str = "DEBUG"
    create_tables_on_startup: bool = True


class TestingSettings(Settings):
    database_url: str = "sqlite+aiosqlite:///:memory:"
    logging_level: str = "DEBUG"
    redis_db: int = 1
    cache_enabled: bool = False


class ProductionSettings(Settings):
    debug: bool = False
    seed_admin_password: SecretStr = Field(default=SecretStr(DEFAULT_SEED_PASSWORD), validate_default=True)

    @field_validator("seed_admin_password")
    @classmethod
    def seed_password_changed(cls, v):
        if v.get_secret_value() == DEFAULT_SEED_PASSWORD:
            raise ValueError("SEED_ADMIN_PASSWORD must be changed in production")
        return v


SETTINGS_BY_ENVIRONMENT = {
    Environment.PRODUCTION: ProductionSettings,
    Environment.TESTING: TestingSettings,
}


def get_settings() -> Settings:
    """Settings class matching ``ENVIRONMENT``; development by default."""
    environment = Settings().environment
    return SETTINGS_BY_ENVIRONMENT.get(environment, DevelopmentSettings)()


settings = get_settings()

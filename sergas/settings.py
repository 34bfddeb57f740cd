"""SERGAS - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失关键密钥/连接串/上传凭据会直接抛出 ValueError.
"""

from __future__ import annotations

import json
import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "1.0.0"
DEFAULT_JWT_ACCESS_TOKEN_EXPIRES_SECONDS = 12 * 3600

DEFAULT_DB_CONNECTION_TIMEOUT_SECONDS = 30
DEFAULT_DB_MAX_CONNECTIONS = 10
DEFAULT_SQLALCHEMY_POOL_RECYCLE_SECONDS = 280
DEFAULT_SQLALCHEMY_MAX_OVERFLOW = 5

DEFAULT_BCRYPT_LOG_ROUNDS = 10
BCRYPT_LOG_ROUNDS_MIN = 4

DEFAULT_MAX_CONTENT_LENGTH_BYTES = 25 * 1024 * 1024

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "userdata/logs/app.log"
DEFAULT_LOG_MAX_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")

DEFAULT_REORDER_BASE_OFFSET = 0
DEFAULT_REORDER_TIMEOUT_SECONDS = 10.0
DEFAULT_REORDER_LOCK_TIMEOUT_SECONDS = 5.0

UPLOAD_BACKENDS = frozenset({"ftp", "s3"})
DEFAULT_UPLOAD_BACKEND = "ftp"
DEFAULT_UPLOAD_TIMEOUT_SECONDS = 30.0
DEFAULT_UPLOAD_ALLOWED_EXTENSIONS = ("jpg", "jpeg", "png", "gif", "webp", "svg", "pdf", "doc", "docx", "xls", "xlsx")
DEFAULT_FTP_PORT = 21
DEFAULT_FTP_UPLOAD_DIR = "/public_html/uploads"
DEFAULT_S3_REGION = "us-east-1"
DEFAULT_S3_KEY_PREFIX = "uploads"


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


def _resolve_sqlite_fallback_url() -> str:
    db_path = _resolve_sqlite_fallback_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.absolute()}"


def _resolve_sqlite_fallback_path() -> Path:
    return PROJECT_ROOT / "userdata" / "sergas_dev.db"


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # `CORS_ORIGINS` / `UPLOAD_ALLOWED_EXTENSIONS` 使用逗号分隔,由 field_validator 解析.
        enable_decoding=False,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="SERGAS", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")
    jwt_secret_key: str = Field(default="", validation_alias="JWT_SECRET_KEY")
    jwt_access_token_expires_seconds: int = Field(
        default=DEFAULT_JWT_ACCESS_TOKEN_EXPIRES_SECONDS,
        validation_alias="JWT_ACCESS_TOKEN_EXPIRES",
    )

    database_url: str = Field(default="", validation_alias="DATABASE_URL")
    db_connection_timeout_seconds: int = Field(
        default=DEFAULT_DB_CONNECTION_TIMEOUT_SECONDS,
        validation_alias="DB_CONNECTION_TIMEOUT",
    )
    db_max_connections: int = Field(default=DEFAULT_DB_MAX_CONNECTIONS, validation_alias="DB_MAX_CONNECTIONS")

    bcrypt_log_rounds: int = Field(default=DEFAULT_BCRYPT_LOG_ROUNDS, validation_alias="BCRYPT_LOG_ROUNDS")

    max_content_length_bytes: int = Field(
        default=DEFAULT_MAX_CONTENT_LENGTH_BYTES, validation_alias="MAX_CONTENT_LENGTH"
    )

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    log_file: str = Field(default=DEFAULT_LOG_FILE, validation_alias="LOG_FILE")
    log_max_size_bytes: int = Field(default=DEFAULT_LOG_MAX_SIZE_BYTES, validation_alias="LOG_MAX_SIZE")
    log_backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, validation_alias="LOG_BACKUP_COUNT")

    cors_origins: tuple[str, ...] = Field(default=DEFAULT_CORS_ORIGINS, validation_alias="CORS_ORIGINS")

    api_docs_enabled: bool = Field(default=True, validation_alias="API_DOCS_ENABLED")

    reorder_base_offset: int = Field(default=DEFAULT_REORDER_BASE_OFFSET, validation_alias="REORDER_BASE_OFFSET")
    reorder_timeout_seconds: float = Field(
        default=DEFAULT_REORDER_TIMEOUT_SECONDS,
        validation_alias="REORDER_TIMEOUT",
    )
    reorder_lock_timeout_seconds: float = Field(
        default=DEFAULT_REORDER_LOCK_TIMEOUT_SECONDS,
        validation_alias="REORDER_LOCK_TIMEOUT",
    )
    reorder_strict_ids: bool = Field(default=False, validation_alias="REORDER_STRICT_IDS")

    upload_backend: str = Field(default=DEFAULT_UPLOAD_BACKEND, validation_alias="UPLOAD_BACKEND")
    upload_timeout_seconds: float = Field(default=DEFAULT_UPLOAD_TIMEOUT_SECONDS, validation_alias="UPLOAD_TIMEOUT")
    upload_public_base_url: str = Field(default="", validation_alias="UPLOAD_PUBLIC_BASE_URL")
    upload_allowed_extensions: tuple[str, ...] = Field(
        default=DEFAULT_UPLOAD_ALLOWED_EXTENSIONS,
        validation_alias="UPLOAD_ALLOWED_EXTENSIONS",
    )

    ftp_host: str = Field(default="", validation_alias="FTP_HOST")
    ftp_port: int = Field(default=DEFAULT_FTP_PORT, validation_alias="FTP_PORT")
    ftp_user: str = Field(default="", validation_alias="FTP_USER")
    ftp_password: str = Field(default="", validation_alias="FTP_PASSWORD")
    ftp_upload_dir: str = Field(default=DEFAULT_FTP_UPLOAD_DIR, validation_alias="FTP_UPLOAD_DIR")
    ftp_use_tls: bool = Field(default=False, validation_alias="FTP_USE_TLS")

    s3_bucket: str = Field(default="", validation_alias="S3_BUCKET")
    s3_region: str = Field(default=DEFAULT_S3_REGION, validation_alias="S3_REGION")
    s3_endpoint_url: str | None = Field(default=None, validation_alias="S3_ENDPOINT_URL")
    s3_key_prefix: str = Field(default=DEFAULT_S3_KEY_PREFIX, validation_alias="S3_KEY_PREFIX")

    @field_validator("upload_backend")
    @classmethod
    def _normalize_upload_backend(cls, value: str) -> str:
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("s3_endpoint_url", mode="before")
    @classmethod
    def _strip_blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("cors_origins", "upload_allowed_extensions", mode="before")
    @classmethod
    def _parse_csv_values(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            raw = value.strip()
            if not raw:
                return ()
            if raw.startswith("["):
                parsed = json.loads(raw)
                if not isinstance(parsed, list):
                    raise ValueError("must be a JSON array or a comma-separated string")
                return tuple(item for item in (str(v).strip() for v in parsed) if item)
            return _parse_csv(raw)
        if isinstance(value, (list, tuple, set)):
            return tuple(text for text in (str(item).strip() for item in value) if text)
        return value

    @field_validator("upload_allowed_extensions")
    @classmethod
    def _normalize_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(item.lower().lstrip(".") for item in value)

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def is_testing(self) -> bool:
        """当前是否为测试环境."""
        return self.environment.strip().lower() in {"testing", "test"}

    @property
    def sqlalchemy_engine_options(self) -> dict[str, object]:
        """生成 SQLAlchemy Engine 配置选项."""
        if self.database_url.startswith("sqlite"):
            return {"pool_pre_ping": True, "connect_args": {"check_same_thread": False}}
        return {
            "pool_pre_ping": True,
            "pool_recycle": DEFAULT_SQLALCHEMY_POOL_RECYCLE_SECONDS,
            "pool_timeout": self.db_connection_timeout_seconds,
            "max_overflow": DEFAULT_SQLALCHEMY_MAX_OVERFLOW,
            "pool_size": self.db_max_connections,
        }

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "TESTING": self.is_testing,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "JWT_SECRET_KEY": self.jwt_secret_key,
            "JWT_ACCESS_TOKEN_EXPIRES": self.jwt_access_token_expires_seconds,
            "JWT_TOKEN_LOCATION": ["headers"],
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_ENGINE_OPTIONS": dict(self.sqlalchemy_engine_options),
            "BCRYPT_LOG_ROUNDS": self.bcrypt_log_rounds,
            "MAX_CONTENT_LENGTH": self.max_content_length_bytes,
            "LOG_LEVEL": self.log_level,
            "LOG_FILE": self.log_file,
            "LOG_MAX_SIZE": self.log_max_size_bytes,
            "LOG_BACKUP_COUNT": self.log_backup_count,
            "CORS_ORIGINS": ",".join(self.cors_origins),
            "API_DOCS_ENABLED": self.api_docs_enabled,
            "REORDER_BASE_OFFSET": self.reorder_base_offset,
            "UPLOAD_BACKEND": self.upload_backend,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_keys(debug)
        self._ensure_database_url(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_keys(self, debug: bool) -> None:
        if not self.secret_key:
            if not debug:
                raise ValueError("SECRET_KEY environment variable must be set in production")
            object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
            logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

        if not self.jwt_secret_key:
            if not debug:
                raise ValueError("JWT_SECRET_KEY environment variable must be set in production")
            object.__setattr__(self, "jwt_secret_key", secrets.token_urlsafe(32))
            logger.warning("⚠️  开发环境使用随机生成的JWT_SECRET_KEY,重启后已签发的令牌将失效")

    def _ensure_database_url(self, environment_normalized: str) -> None:
        if self.database_url:
            return
        if environment_normalized == "production":
            raise ValueError("DATABASE_URL environment variable must be set in production")

        object.__setattr__(self, "database_url", _resolve_sqlite_fallback_url())
        if environment_normalized not in {"testing", "test"}:
            logger.warning(
                "⚠️  未设置 DATABASE_URL, 非 production 环境将回退 SQLite (sqlite_db_file=%s)",
                _resolve_sqlite_fallback_path().name,
            )

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        errors: list[str] = []
        checks: list[tuple[str, bool]] = [
            ("DB_CONNECTION_TIMEOUT 必须为正整数", self.db_connection_timeout_seconds <= 0),
            ("DB_MAX_CONNECTIONS 必须为正整数", self.db_max_connections <= 0),
            (f"BCRYPT_LOG_ROUNDS 不应小于 {BCRYPT_LOG_ROUNDS_MIN}", self.bcrypt_log_rounds < BCRYPT_LOG_ROUNDS_MIN),
            ("JWT_ACCESS_TOKEN_EXPIRES 必须为正整数(秒)", self.jwt_access_token_expires_seconds <= 0),
            ("REORDER_TIMEOUT 必须为正数(秒)", self.reorder_timeout_seconds <= 0),
            ("REORDER_LOCK_TIMEOUT 必须为正数(秒)", self.reorder_lock_timeout_seconds <= 0),
            ("UPLOAD_TIMEOUT 必须为正数(秒)", self.upload_timeout_seconds <= 0),
            ("UPLOAD_BACKEND 仅支持 ftp/s3", self.upload_backend not in UPLOAD_BACKENDS),
            (
                "生产环境使用 UPLOAD_BACKEND=ftp 时必须设置 FTP_HOST/FTP_USER/FTP_PASSWORD",
                self.is_production
                and self.upload_backend == "ftp"
                and not (self.ftp_host and self.ftp_user and self.ftp_password),
            ),
            (
                "生产环境使用 UPLOAD_BACKEND=s3 时必须设置 S3_BUCKET",
                self.is_production and self.upload_backend == "s3" and not self.s3_bucket,
            ),
            ("生产环境必须设置 UPLOAD_PUBLIC_BASE_URL", self.is_production and not self.upload_public_base_url),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)

        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")

import logging

import pytest

from sergas.settings import PROJECT_ROOT, Settings


@pytest.mark.unit
def test_settings_fails_fast_when_database_url_missing_in_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-jwt-secret-key")
    # Prevent `load_dotenv()` from injecting a value from local `.env`.
    monkeypatch.setenv("DATABASE_URL", "")

    with pytest.raises(ValueError, match=r"DATABASE_URL.*production"):
        Settings.load()


@pytest.mark.unit
def test_settings_requires_secrets_in_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.setenv("SECRET_KEY", "")

    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings.load()


@pytest.mark.unit
def test_settings_requires_upload_credentials_in_production(monkeypatch) -> None:
    monkeypatch.setenv("FLASK_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("JWT_SECRET_KEY", "test-jwt-secret-key")
    monkeypatch.setenv("DATABASE_URL", "mysql+pymysql://sergas:pw@db/sergas")
    monkeypatch.setenv("UPLOAD_BACKEND", "ftp")
    monkeypatch.delenv("FTP_HOST", raising=False)

    with pytest.raises(ValueError, match="FTP_HOST"):
        Settings.load()


@pytest.mark.unit
def test_settings_does_not_log_database_url_when_sqlite_fallback(monkeypatch, caplog) -> None:
    monkeypatch.setenv("FLASK_ENV", "development")
    monkeypatch.setenv("DATABASE_URL", "")

    caplog.set_level(logging.WARNING, logger="sergas.settings")

    settings = Settings.load()

    assert settings.database_url.startswith("sqlite:///")
    assert "sqlite:" not in caplog.text
    assert str(PROJECT_ROOT) not in caplog.text


@pytest.mark.unit
def test_settings_parses_csv_values(monkeypatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "https://sergas.com.ar, https://admin.sergas.com.ar")
    monkeypatch.setenv("UPLOAD_ALLOWED_EXTENSIONS", ".PDF,jpg")

    settings = Settings.load()

    assert settings.cors_origins == ("https://sergas.com.ar", "https://admin.sergas.com.ar")
    assert settings.upload_allowed_extensions == ("pdf", "jpg")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("UPLOAD_BACKEND", "dropbox"),
        ("REORDER_TIMEOUT", "0"),
        ("REORDER_LOCK_TIMEOUT", "-1"),
        ("BCRYPT_LOG_ROUNDS", "2"),
    ],
)
def test_settings_rejects_invalid_values(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match="配置校验失败"):
        Settings.load()


@pytest.mark.unit
def test_settings_to_flask_config_exposes_reorder_and_jwt_options(monkeypatch) -> None:
    monkeypatch.setenv("REORDER_BASE_OFFSET", "1")
    monkeypatch.setenv("JWT_ACCESS_TOKEN_EXPIRES", "3600")

    config = Settings.load().to_flask_config()

    assert config["REORDER_BASE_OFFSET"] == 1
    assert config["JWT_ACCESS_TOKEN_EXPIRES"] == 3600
    assert config["JWT_TOKEN_LOCATION"] == ["headers"]
    assert config["TESTING"] is True

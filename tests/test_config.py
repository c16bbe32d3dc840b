from taskgate.core.config import DEFAULT_TOKEN_EXPIRE_MINUTES, Settings


def test_from_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")

    settings = Settings.from_env()
    assert settings.jwt_secret_key == "from-env"
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.port == 8080
    assert settings.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert settings.access_token_expires.total_seconds() == 15 * 60


def test_missing_secret_is_generated(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MINUTES", raising=False)

    first = Settings.from_env()
    second = Settings.from_env()
    assert first.jwt_secret_key
    assert first.jwt_secret_key != second.jwt_secret_key
    assert first.access_token_expire_minutes == DEFAULT_TOKEN_EXPIRE_MINUTES

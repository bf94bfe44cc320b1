import pytest

from caltodo.app.config import Config, check_production_secrets, is_production_env, require_secret


def test_is_production_env(monkeypatch):
    monkeypatch.setenv("FLASK_ENV", "production")
    assert is_production_env() is True
    monkeypatch.setenv("FLASK_ENV", "development")
    assert is_production_env() is False
    monkeypatch.delenv("FLASK_ENV")
    assert is_production_env() is False


def test_require_secret_missing():
    with pytest.raises(RuntimeError, match="SESSION_SECRET must be set"):
        require_secret("", "SESSION_SECRET")
    with pytest.raises(RuntimeError, match="SESSION_SECRET must be set"):
        require_secret(None, "SESSION_SECRET")


def test_require_secret_too_short():
    with pytest.raises(RuntimeError, match="must be at least 32 characters long"):
        require_secret("a" * 31, "SESSION_SECRET")


def test_require_secret_valid():
    assert require_secret("a" * 32, "SESSION_SECRET") == "a" * 32


def test_check_production_secrets_reads_secret_key():
    check_production_secrets({"SECRET_KEY": "s" * 40})
    with pytest.raises(RuntimeError, match="SESSION_SECRET"):
        check_production_secrets({})


def test_config_defaults():
    assert Config.SQLALCHEMY_TRACK_MODIFICATIONS is False
    assert Config.SESSION_COOKIE_HTTPONLY is True
    assert Config.MAX_CONTENT_LENGTH == 100 * 1024

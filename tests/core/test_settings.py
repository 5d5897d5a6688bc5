from farm_market.core.config import environment
from farm_market.core.config.settings import Settings


def test_cors_origins_parsed_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    settings = Settings()
    assert settings.allowed_origins == ["http://a.test", "http://b.test"]


def test_cors_defaults_to_wildcard(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert Settings().allowed_origins == ["*"]


def test_api_prefix_normalized():
    assert Settings(api_prefix="api/").api_prefix == "/api"
    assert Settings(api_prefix="/").api_prefix == ""


def test_default_rate_limits_split():
    settings = Settings(rate_limit_defaults="10 per minute; 100 per day;")
    assert settings.default_rate_limits == ["10 per minute", "100 per day"]


def test_local_token_verification_flag():
    assert Settings(identity_jwt_secret="s").uses_local_token_verification is True
    assert Settings(identity_jwt_secret=None).uses_local_token_verification is False


def test_environment_selection(monkeypatch):
    environment.get_settings.cache_clear()
    try:
        monkeypatch.setenv("APP_ENV", "development")
        dev = environment.get_settings()
        assert isinstance(dev, environment.DevelopmentSettings)
        assert dev.use_json_logs is False

        environment.get_settings.cache_clear()
        monkeypatch.setenv("APP_ENV", "test")
        test_settings = environment.get_settings()
        assert isinstance(test_settings, environment.TestSettings)
        assert test_settings.log_dir is None
        assert test_settings.enable_metrics is False
    finally:
        environment.get_settings.cache_clear()

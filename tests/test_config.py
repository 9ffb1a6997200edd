from impact_api import config


def test_defaults(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    for name in ("NASA_API_KEY", "NASA_API_URL", "NEO_CACHE_TTL_S", "HTTP_TIMEOUT_S", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = config.load_settings()
    assert s == config.Settings()
    assert s.nasa_api_key == "DEMO_KEY"


def test_environment_overrides(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    monkeypatch.setenv("NASA_API_KEY", "abc")
    monkeypatch.setenv("NEO_CACHE_TTL_S", "120")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = config.load_settings()
    assert s.nasa_api_key == "abc"
    assert s.neo_cache_ttl_s == 120.0
    assert s.log_level == "DEBUG"


def test_malformed_number_falls_back(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    monkeypatch.setenv("HTTP_TIMEOUT_S", "soon")
    assert config.load_settings().http_timeout_s == 10.0

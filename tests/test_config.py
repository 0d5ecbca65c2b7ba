# tests/test_config.py
from productapi.config import Settings

def test_defaults(monkeypatch):
    for name in ("PORT", "API_KEY", "CORS_ORIGINS", "SEED_SAMPLE_DATA"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.port == 3000
    assert s.api_key == "12345"
    assert s.cors_origins == ["*"]
    assert s.seed_sample_data is True

def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8085")
    monkeypatch.setenv("API_KEY", "abc")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "false")
    monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:5173", "https://shop.example.com"]')
    s = Settings(_env_file=None)
    assert s.port == 8085
    assert s.api_key == "abc"
    assert s.seed_sample_data is False
    assert s.cors_origins == ["http://localhost:5173", "https://shop.example.com"]

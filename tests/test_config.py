from config_hub.config import Settings
from config_hub.services.introspection import IntrospectionOptions


def test_comma_separated_lists_are_split(monkeypatch) -> None:
    monkeypatch.setenv("FRONTEND_ORIGINS", "https://hub.example.com, http://localhost:3000")
    monkeypatch.setenv("SSL_HOST_MARKERS", "neon.tech,supabase.co")
    monkeypatch.setenv("INTROSPECTION_TIMEOUT_SECONDS", "4")

    settings = Settings(_env_file=None)

    assert settings.frontend_origins == ["https://hub.example.com", "http://localhost:3000"]
    assert settings.ssl_host_markers == ["neon.tech", "supabase.co"]

    options = IntrospectionOptions.from_settings(settings)
    assert options.timeout_seconds == 4
    assert options.ssl_host_markers == ("neon.tech", "supabase.co")


def test_defaults(monkeypatch) -> None:
    for name in ("FRONTEND_ORIGINS", "SSL_HOST_MARKERS", "INTROSPECTION_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.introspection_timeout_seconds == 10
    assert "neon.tech" in settings.ssl_host_markers
    assert settings.log_level == "INFO"

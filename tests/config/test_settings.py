from imginfo_backend.config import DEFAULT_FETCH_TIMEOUT_S, DEFAULT_MAX_FETCH_BYTES, load_settings
from imginfo_backend.utils import parse_bool


def test_defaults(monkeypatch):
    for name in ("IMGINFO_FETCH_TIMEOUT", "IMGINFO_MAX_FETCH_BYTES", "IMGINFO_ALLOW_FILE_LOCATORS", "IMGINFO_PORT"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.fetch_timeout_s == DEFAULT_FETCH_TIMEOUT_S
    assert settings.max_fetch_bytes == DEFAULT_MAX_FETCH_BYTES
    assert settings.allow_file_locators is False


def test_env_overrides_and_clamping(monkeypatch):
    monkeypatch.setenv("IMGINFO_FETCH_TIMEOUT", "9999")
    monkeypatch.setenv("IMGINFO_MAX_FETCH_BYTES", "10")
    monkeypatch.setenv("IMGINFO_ALLOW_FILE_LOCATORS", "yes")
    monkeypatch.setenv("IMGINFO_PORT", "not-a-number")
    settings = load_settings()
    assert settings.fetch_timeout_s == 600.0
    assert settings.max_fetch_bytes == 1024
    assert settings.allow_file_locators is True
    assert settings.port == 8188


def test_parse_bool():
    assert parse_bool("on") is True
    assert parse_bool("Disabled") is False
    assert parse_bool("maybe", default=True) is True
    assert parse_bool(0) is False

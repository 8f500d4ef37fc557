import pytest
from pydantic import ValidationError

from app.config import Settings, get_settings


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv('CORS_ORIGINS', 'http://a.test, http://b.test,')
    monkeypatch.setenv('API_V1_PREFIX', '/api/v2/')
    monkeypatch.setenv('MAX_PAGE_LIMIT', '50')
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    settings = Settings()

    assert settings.cors_origins == ['http://a.test', 'http://b.test']
    assert settings.api_v1_prefix == '/api/v2'
    assert settings.max_page_limit == 50
    assert settings.log_level == 'DEBUG'
    assert settings.app_env == 'test'


def test_defaults():
    settings = Settings(app_env='local', storage_backend='sql',
                        database_url='postgresql://u:p@db:5432/subs')
    assert settings.default_page_limit == 20
    assert settings.server_port == 8080
    assert settings.cors_origins == []
    assert not settings.is_sqlite


@pytest.mark.parametrize(
    'overrides',
    [
        {'database_url': 'mysql://u:p@db/subs'},
        {'api_v1_prefix': 'api'},
        {'storage_backend': 'redis'},
        {'log_level': 'LOUD'},
        {'default_page_limit': 30, 'max_page_limit': 10},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()

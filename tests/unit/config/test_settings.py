# nosec B101


from datetime import timedelta

import pytest
from pydantic import ValidationError

from config.settings import Settings


def test_defaults(monkeypatch):
    for key in ('API_CREDENTIAL', 'OPENEXCHANGE_APP_ID', 'BASE_CURRENCY', 'REFRESH_INTERVAL', 'RATE_PROVIDER'):
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.RATE_PROVIDER == 'openexchange'
    assert settings.BASE_CURRENCY == 'USD'
    assert settings.REFRESH_INTERVAL == timedelta(hours=1)
    assert settings.FETCH_TIMEOUT == timedelta(seconds=10)
    assert settings.MAX_STALENESS is None
    assert settings.REDIS_URL is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv('BASE_CURRENCY', 'eur')
    monkeypatch.setenv('REFRESH_INTERVAL', 'PT30M')
    monkeypatch.setenv('FETCH_TIMEOUT', 'PT5S')
    monkeypatch.setenv('api_credential', 'secret')

    settings = Settings(_env_file=None)

    assert settings.BASE_CURRENCY == 'EUR'
    assert settings.REFRESH_INTERVAL == timedelta(minutes=30)
    assert settings.FETCH_TIMEOUT == timedelta(seconds=5)
    assert settings.provider_credential == 'secret'


def test_provider_specific_credential_fallback():
    openexchange = Settings(_env_file=None, API_CREDENTIAL='', OPENEXCHANGE_APP_ID='oxr', FIXERIO_API_KEY='fixer')
    fixerio = Settings(_env_file=None, API_CREDENTIAL='', RATE_PROVIDER='fixerio', FIXERIO_API_KEY='fixer')

    assert openexchange.provider_credential == 'oxr'
    assert fixerio.provider_credential == 'fixer'


@pytest.mark.parametrize('base', ['US', 'DOLLAR', '12$'])
def test_invalid_base_currency_rejected(base):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, BASE_CURRENCY=base)


def test_retry_attempts_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, FETCH_RETRY_ATTEMPTS=0)


def test_unknown_provider_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, RATE_PROVIDER='ecb')

# nosec B101

from datetime import timedelta

import pytest
from pydantic import ValidationError

from config.settings import Settings
from domain.models.units import CurrencyUnit


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.RATE_PROVIDER == "currencyapi"
    assert settings.max_age == timedelta(hours=24)
    assert settings.supported_units == list(CurrencyUnit)
    assert settings.RATE_FETCH_TIMEOUT > 0


def test_supported_currencies_from_env(monkeypatch):
    monkeypatch.setenv("SUPPORTED_CURRENCIES", "eur, gbp,eur")
    monkeypatch.setenv("RATE_MAX_AGE_HOURS", "0.5")

    settings = Settings(_env_file=None)

    assert settings.SUPPORTED_CURRENCIES == ["USD", "EUR", "GBP"]
    assert settings.supported_units == [CurrencyUnit.USD, CurrencyUnit.EUR, CurrencyUnit.GBP]
    assert settings.max_age == timedelta(minutes=30)


def test_supported_currencies_accepts_json_list(monkeypatch):
    monkeypatch.setenv("SUPPORTED_CURRENCIES", '["USD", "JPY"]')

    settings = Settings(_env_file=None)

    assert settings.supported_units == [CurrencyUnit.USD, CurrencyUnit.JPY]


def test_unknown_currency_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, SUPPORTED_CURRENCIES="USD,XYZ")


def test_negative_max_age_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, RATE_MAX_AGE_HOURS=-1)


def test_provider_name_is_normalized(monkeypatch):
    monkeypatch.setenv("RATE_PROVIDER", " OpenExchange ")

    assert Settings(_env_file=None).RATE_PROVIDER == "openexchange"

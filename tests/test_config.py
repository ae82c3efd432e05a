# tests/test_config.py
import pytest
from pydantic import ValidationError

from dealgrade.adapters.config import AppConfig
from dealgrade.domain.inputs import InvestmentInputs


def test_defaults():
    cfg = AppConfig()
    assert cfg.DEFAULT_MANAGEMENT_FEE_PCT == 10.0
    assert cfg.DEFAULT_VACANCY_RATE_PCT == 5.0
    assert cfg.MAX_COMPARABLES == 20


def test_env_overrides_accept_percent_strings(monkeypatch):
    monkeypatch.setenv("DEALGRADE_DEFAULT_MANAGEMENT_FEE_PCT", "8%")
    monkeypatch.setenv("DEALGRADE_DEFAULT_VACANCY_RATE_PCT", " 7.5 ")
    monkeypatch.setenv("DEALGRADE_MAX_COMPARABLES", "5")

    cfg = AppConfig()
    assert cfg.DEFAULT_MANAGEMENT_FEE_PCT == 8.0
    assert cfg.DEFAULT_VACANCY_RATE_PCT == 7.5
    assert cfg.MAX_COMPARABLES == 5


@pytest.mark.parametrize(
    "name, value",
    [
        ("DEALGRADE_DEFAULT_VACANCY_RATE_PCT", "-1"),
        ("DEALGRADE_DEFAULT_MANAGEMENT_FEE_PCT", "lots"),
        ("DEALGRADE_MAX_COMPARABLES", "0"),
    ],
)
def test_invalid_env_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        AppConfig()


def test_input_defaults_follow_config(monkeypatch):
    from dealgrade.adapters import config as config_module

    monkeypatch.setattr(config_module.config, "DEFAULT_MANAGEMENT_FEE_PCT", 12.0)
    assert InvestmentInputs.from_raw({}).management_fees == 12.0

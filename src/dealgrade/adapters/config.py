# src/dealgrade/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # Input defaults (percent points, not fractions: 10 means 10%)
    DEFAULT_MANAGEMENT_FEE_PCT: float = Field(default=10.0)
    DEFAULT_VACANCY_RATE_PCT: float = Field(default=5.0)

    # -----------------------------
    # Similar homes normalization
    # -----------------------------
    MAX_COMPARABLES: int = Field(default=20)

    model_config = SettingsConfigDict(
        env_prefix="DEALGRADE_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator(
        "DEFAULT_MANAGEMENT_FEE_PCT",
        "DEFAULT_VACANCY_RATE_PCT",
        mode="before",
    )
    @classmethod
    def _to_non_negative_percent(cls, v: Any) -> Any:
        if v is None:
            return v
        if isinstance(v, str):
            v = v.strip().replace("%", "")
        try:
            f = float(v)
        except Exception as err:
            raise ValueError("percent must be numeric or percent-like") from err
        if f < 0:
            raise ValueError("percent must be non-negative")
        return f

    @field_validator("MAX_COMPARABLES", mode="before")
    @classmethod
    def _limit_positive(cls, v: Any) -> Any:
        n = int(v)
        if n <= 0:
            raise ValueError("MAX_COMPARABLES must be > 0")
        return n


config = AppConfig()

# src/dealgrade/domain/comparables.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from dealgrade.domain.inputs import parse_float

MIN_VALID_COMPARABLES = 3
INSUFFICIENT_DATA_MESSAGE = "Insufficient similar homes data for analysis"


class ComparableHome(BaseModel):
    """
    A nearby similar property.

    Only the numeric fields are consumed by the summarizer; everything else
    is carried along for display. Accepts both the normalized snake_case keys
    and the upstream camelCase keys (rentZestimate, livingArea, ...).
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    zpid: Optional[str] = Field(default=None, validation_alias=AliasChoices("zpid", "id"))
    address: str = ""

    price: float = 0.0
    zestimate: float = 0.0
    rent_zestimate: float = Field(
        default=0.0,
        validation_alias=AliasChoices("rent_zestimate", "rentZestimate"),
    )
    living_area: float = Field(
        default=0.0,
        validation_alias=AliasChoices("living_area", "livingArea", "sqft"),
    )
    days_on_market: float = Field(
        default=0.0,
        validation_alias=AliasChoices("days_on_market", "days_on_zillow", "daysOnZillow"),
    )
    price_per_sqft: float = 0.0

    beds: float = Field(default=0.0, validation_alias=AliasChoices("beds", "bedrooms"))
    baths: float = Field(default=0.0, validation_alias=AliasChoices("baths", "bathrooms"))
    year_built: float = Field(default=0.0, validation_alias=AliasChoices("year_built", "yearBuilt"))
    home_type: str = Field(default="Unknown", validation_alias=AliasChoices("home_type", "homeType", "property_type"))
    home_status: str = Field(default="Unknown", validation_alias=AliasChoices("home_status", "homeStatus"))

    @field_validator("zpid", mode="before")
    @classmethod
    def _zpid_to_str(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator(
        "price",
        "zestimate",
        "rent_zestimate",
        "living_area",
        "days_on_market",
        "price_per_sqft",
        "beds",
        "baths",
        "year_built",
        mode="before",
    )
    @classmethod
    def _lenient_number(cls, v: Any) -> float:
        return parse_float(v, 0.0)

    @field_validator("address", "home_type", "home_status", mode="before")
    @classmethod
    def _text_or_default(cls, v: Any, info) -> Any:
        if v is None or v == "":
            return cls.model_fields[info.field_name].default
        return str(v)

    @property
    def is_valid(self) -> bool:
        return self.price > 0 or self.zestimate > 0

    @property
    def price_for_calc(self) -> float:
        """Listed price, falling back to the automated valuation."""
        return self.price if self.price > 0 else self.zestimate

    @property
    def effective_price_per_sqft(self) -> float:
        if self.price_per_sqft > 0:
            return self.price_per_sqft
        if self.living_area > 0 and self.price_for_calc > 0:
            return self.price_for_calc / self.living_area
        return 0.0


@dataclass(frozen=True)
class PriceStatistics:
    median_price: float
    average_price: float
    min_price: float
    max_price: float


@dataclass(frozen=True)
class RentalStatistics:
    median_rent_estimate: float
    average_rent_estimate: float
    min_rent_estimate: float
    max_rent_estimate: float


@dataclass(frozen=True)
class PricePerSqftStatistics:
    median_price_per_sqft: float
    average_price_per_sqft: float


@dataclass(frozen=True)
class MarketTiming:
    average_days_on_market: float
    median_days_on_market: float


@dataclass(frozen=True)
class ComparablesSummary:
    total_similar_homes: int
    price_statistics: Optional[PriceStatistics] = None
    rental_statistics: Optional[RentalStatistics] = None
    price_per_sqft_statistics: Optional[PricePerSqftStatistics] = None
    market_timing: Optional[MarketTiming] = None
    market_insights: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InsufficientComparables:
    """
    Returned instead of a summary when too few comparables are usable.
    Callers treat it as "no market context", never as a failure.
    """
    valid_count: int
    error: str = INSUFFICIENT_DATA_MESSAGE

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "valid_count": self.valid_count}

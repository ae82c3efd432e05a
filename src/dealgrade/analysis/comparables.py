from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np

from dealgrade.adapters.logging_utils import get_logger
from dealgrade.analysis.formatting import format_currency
from dealgrade.domain.comparables import (
    MIN_VALID_COMPARABLES,
    ComparableHome,
    ComparablesSummary,
    InsufficientComparables,
    MarketTiming,
    PricePerSqftStatistics,
    PriceStatistics,
    RentalStatistics,
)

logger = get_logger(__name__)

# Average days on market upper bounds for the market temperature insight
_MARKET_TEMPERATURE = (
    (20.0, "Very hot market - similar homes selling quickly"),
    (45.0, "Active market - normal absorption rate"),
    (90.0, "Moderate market - longer time to sell"),
)
_SLOW_MARKET = "Slower market - extended marketing time"


def _as_home(home: Union[ComparableHome, Mapping[str, Any]]) -> ComparableHome:
    if isinstance(home, ComparableHome):
        return home
    return ComparableHome.model_validate(dict(home))


def _positive(values: Iterable[float]) -> np.ndarray:
    arr = np.asarray(list(values), dtype=float)
    return arr[arr > 0]


def median(values: Iterable[float]) -> float:
    """Even counts average the two middle values."""
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        raise ValueError("median of empty sequence")
    return float(np.median(arr))


def mean(values: Iterable[float]) -> float:
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        raise ValueError("mean of empty sequence")
    return float(np.mean(arr))


def _market_temperature(avg_dom: float) -> str:
    for upper, insight in _MARKET_TEMPERATURE:
        if avg_dom < upper:
            return insight
    return _SLOW_MARKET


def _insights(
    prices: Optional[PriceStatistics],
    rents: Optional[RentalStatistics],
    timing: Optional[MarketTiming],
) -> List[str]:
    insights: List[str] = []
    if prices is not None:
        insights.append(
            f"Similar homes range: {format_currency(prices.min_price)} - {format_currency(prices.max_price)}"
        )
        insights.append(f"Median similar home price: {format_currency(prices.median_price)}")
    if rents is not None:
        insights.append(
            f"Area rental range: {format_currency(rents.min_rent_estimate)} - "
            f"{format_currency(rents.max_rent_estimate)}/month"
        )
    if timing is not None:
        insights.append(_market_temperature(timing.average_days_on_market))
    return insights


def summarize_comparables(
    homes: Iterable[Union[ComparableHome, Mapping[str, Any]]] | None,
) -> Union[ComparablesSummary, InsufficientComparables]:
    """
    Reduce a list of similar homes to market statistics.

    Homes count as valid when they carry a price or a zestimate. With fewer
    than MIN_VALID_COMPARABLES valid homes an InsufficientComparables marker
    is returned instead of partial statistics.

    Each facet (price, rent, price/sqft, days on market) only looks at its
    strictly positive values; a facet with none is left as None.
    """
    valid = [h for h in (_as_home(h) for h in (homes or [])) if h.is_valid]

    if len(valid) < MIN_VALID_COMPARABLES:
        logger.info(
            "comparables_insufficient",
            extra={"context": {"valid_count": len(valid), "required": MIN_VALID_COMPARABLES}},
        )
        return InsufficientComparables(valid_count=len(valid))

    prices = _positive(h.price_for_calc for h in valid)
    rents = _positive(h.rent_zestimate for h in valid)
    ppsf = _positive(h.effective_price_per_sqft for h in valid)
    dom = _positive(h.days_on_market for h in valid)

    price_stats = None
    if prices.size:
        price_stats = PriceStatistics(
            median_price=median(prices),
            average_price=mean(prices),
            min_price=float(prices.min()),
            max_price=float(prices.max()),
        )

    rental_stats = None
    if rents.size:
        rental_stats = RentalStatistics(
            median_rent_estimate=median(rents),
            average_rent_estimate=mean(rents),
            min_rent_estimate=float(rents.min()),
            max_rent_estimate=float(rents.max()),
        )

    ppsf_stats = None
    if ppsf.size:
        ppsf_stats = PricePerSqftStatistics(
            median_price_per_sqft=median(ppsf),
            average_price_per_sqft=mean(ppsf),
        )

    timing = None
    if dom.size:
        timing = MarketTiming(
            average_days_on_market=mean(dom),
            median_days_on_market=median(dom),
        )

    return ComparablesSummary(
        total_similar_homes=len(valid),
        price_statistics=price_stats,
        rental_statistics=rental_stats,
        price_per_sqft_statistics=ppsf_stats,
        market_timing=timing,
        market_insights=_insights(price_stats, rental_stats, timing),
    )


def summarize_similar_homes_payload(
    payload: Mapping[str, Any] | None,
) -> Union[ComparablesSummary, InsufficientComparables, None]:
    """
    Summarize a `{"similar_homes": [...]}` envelope as produced by the
    similar-homes lookup. Returns None when there is no list at all.
    """
    if not payload or not payload.get("similar_homes"):
        return None
    return summarize_comparables(payload["similar_homes"])

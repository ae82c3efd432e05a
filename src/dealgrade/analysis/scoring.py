# src/dealgrade/analysis/scoring.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

from dealgrade.analysis.formatting import format_amount
from dealgrade.domain.comparables import ComparablesSummary, InsufficientComparables
from dealgrade.domain.metrics import InvestmentMetrics
from dealgrade.domain.recommendation import Confidence, Label, Recommendation

# Safety margin under the 70% cap that earns an extra note (no extra points)
SAFETY_MARGIN_NOTE = 20_000.0

MARKET_DATA_BONUS = 5
HOT_MARKET_DOM = 30.0
SLOW_MARKET_DOM = 90.0


@dataclass(frozen=True)
class Band:
    """
    One scoring band. Bands of a factor are checked in order and the first
    one whose `applies` returns True is the only one that counts.
    """
    applies: Callable[[float], bool]
    points: int
    message: str
    warning: bool = False


# =====================================================================
# Band tables (descending thresholds, first match wins)
# =====================================================================

CASH_FLOW_BANDS: Tuple[Band, ...] = (
    Band(lambda v: v > 300, 25, "Excellent monthly cash flow (>$300)"),
    Band(lambda v: v > 200, 20, "Strong monthly cash flow (>$200)"),
    Band(lambda v: v > 100, 15, "Good monthly cash flow (>$100)"),
    Band(lambda v: v > 0, 10, "Positive monthly cash flow"),
    Band(lambda v: True, -25, "Negative monthly cash flow", warning=True),
)

CASH_ON_CASH_BANDS: Tuple[Band, ...] = (
    Band(lambda v: v > 15, 25, "Outstanding cash-on-cash return (>15%)"),
    Band(lambda v: v > 12, 20, "Excellent cash-on-cash return (>12%)"),
    Band(lambda v: v > 8, 15, "Good cash-on-cash return (>8%)"),
    Band(lambda v: v > 5, 10, "Adequate cash-on-cash return (>5%)"),
    Band(lambda v: v > 0, 5, "Positive cash-on-cash return"),
    Band(lambda v: True, -20, "Negative cash-on-cash return", warning=True),
)

# cap rate of exactly 0 means "no NOI supplied": no band applies
CAP_RATE_BANDS: Tuple[Band, ...] = (
    Band(lambda v: v > 10, 20, "Exceptional cap rate (>10%)"),
    Band(lambda v: v > 8, 15, "Strong cap rate (>8%)"),
    Band(lambda v: v > 6, 10, "Decent cap rate (>6%)"),
    Band(lambda v: v > 4, 5, "Low but acceptable cap rate"),
    Band(lambda v: v > 0, -10, "Very low cap rate (<4%)", warning=True),
)

DSCR_BANDS: Tuple[Band, ...] = (
    Band(lambda v: v > 1.5, 10, "Excellent debt service coverage (>1.5)"),
    Band(lambda v: v > 1.25, 8, "Strong debt service coverage (>1.25)"),
    Band(lambda v: v > 1.0, 5, "Adequate debt service coverage"),
    Band(lambda v: v > 0, -10, "Insufficient debt service coverage (<1.0)", warning=True),
)

LTV_BANDS: Tuple[Band, ...] = (
    Band(lambda v: 0 < v < 70, 5, "Conservative loan-to-value ratio"),
    Band(lambda v: v > 85, -10, "High loan-to-value ratio (>85%)", warning=True),
)

# ARV relative to the median similar-home price
PRICE_RATIO_BANDS: Tuple[Band, ...] = (
    Band(lambda r: r <= 0.85, 10, "Property significantly below similar homes median"),
    Band(lambda r: r <= 0.95, 8, "Property priced below similar homes median"),
    Band(lambda r: r <= 1.05, 5, "Property competitively priced with similar homes"),
    Band(lambda r: r <= 1.15, -3, "Property above similar homes median", warning=True),
    Band(lambda r: True, -8, "Property significantly overpriced vs similar homes", warning=True),
)

# Monthly rent relative to the median rent estimate
RENT_RATIO_BANDS: Tuple[Band, ...] = (
    Band(lambda r: r >= 1.1, 5, "Rent above market median - strong income potential"),
    Band(lambda r: r >= 0.95, 0, "Rent competitive with market"),
    Band(lambda r: True, 0, "Rent below market median", warning=True),
)

DAYS_ON_MARKET_BANDS: Tuple[Band, ...] = (
    Band(lambda d: d < HOT_MARKET_DOM, 0, "Hot market - quick sales expected"),
    Band(lambda d: d > SLOW_MARKET_DOM, 0, "Slower market - extended selling times", warning=True),
)

# (minimum score, label, confidence), checked top-down
LABEL_THRESHOLDS: Tuple[Tuple[int, Label, Confidence], ...] = (
    (85, "STRONG BUY", "Very High"),
    (70, "BUY", "High"),
    (50, "CONSIDER", "Medium"),
    (30, "WEAK CONSIDER", "Low"),
    (10, "AVOID", "Medium"),
)
FLOOR_LABEL: Tuple[Label, Confidence] = ("STRONG AVOID", "High")


class _Tally:
    def __init__(self) -> None:
        self.score = 0
        self.reasons: List[str] = []
        self.warnings: List[str] = []

    def add(self, points: int, message: str, warning: bool = False) -> None:
        self.score += points
        (self.warnings if warning else self.reasons).append(message)

    def apply(self, bands: Sequence[Band], value: float) -> Optional[Band]:
        for band in bands:
            if band.applies(value):
                self.add(band.points, band.message, band.warning)
                return band
        return None


def label_for_score(score: int) -> Tuple[Label, Confidence]:
    for minimum, label, confidence in LABEL_THRESHOLDS:
        if score >= minimum:
            return label, confidence
    return FLOOR_LABEL


def _score_seventy_percent_rule(tally: _Tally, metrics: InvestmentMetrics) -> None:
    if metrics.total_investment <= metrics.max_total_investment:
        tally.add(20, "Meets 70% rule investment criteria")
        margin = metrics.max_total_investment - metrics.total_investment
        if margin > SAFETY_MARGIN_NOTE:
            tally.add(0, f"Strong safety margin (${format_amount(margin)})")
    else:
        excess = metrics.total_investment - metrics.max_total_investment
        tally.add(-25, f"Exceeds 70% rule by ${format_amount(excess)}", warning=True)


def _score_market_context(
    tally: _Tally,
    metrics: InvestmentMetrics,
    summary: ComparablesSummary,
) -> None:
    # Having usable market data at all is worth a little; no message
    tally.score += MARKET_DATA_BONUS

    prices = summary.price_statistics
    if prices is not None and metrics.arv > 0 and prices.median_price > 0:
        tally.apply(PRICE_RATIO_BANDS, metrics.arv / prices.median_price)

    rents = summary.rental_statistics
    if rents is not None and metrics.monthly_rent > 0 and rents.median_rent_estimate > 0:
        tally.apply(RENT_RATIO_BANDS, metrics.monthly_rent / rents.median_rent_estimate)

    timing = summary.market_timing
    if timing is not None:
        tally.apply(DAYS_ON_MARKET_BANDS, timing.average_days_on_market)


def score_investment(
    metrics: InvestmentMetrics,
    comparables: Union[ComparablesSummary, InsufficientComparables, None] = None,
) -> Recommendation:
    """
    Turn deal metrics (and optional market comparables) into a graded
    recommendation.

    Factors, each contributing at most one band:
      - monthly cash flow       (+25 .. -25)
      - cash-on-cash return     (+25 .. -20)
      - cap rate                (+20 .. -10)
      - 70% rule                (+20 / -25)
      - market comparables      (+20 .. -3), skipped without a summary
      - debt service coverage   (+10 .. -10)
      - loan-to-value           (+5 / -10)

    break_even_ratio is reported by the calculator but not scored.
    """
    tally = _Tally()

    tally.apply(CASH_FLOW_BANDS, metrics.monthly_cash_flow)
    tally.apply(CASH_ON_CASH_BANDS, metrics.cash_on_cash_return)
    tally.apply(CAP_RATE_BANDS, metrics.cap_rate)
    _score_seventy_percent_rule(tally, metrics)

    if isinstance(comparables, ComparablesSummary):
        _score_market_context(tally, metrics, comparables)

    tally.apply(DSCR_BANDS, metrics.debt_service_coverage_ratio)
    tally.apply(LTV_BANDS, metrics.ltv_ratio)

    label, confidence = label_for_score(tally.score)

    return Recommendation(
        score=tally.score,
        recommendation=label,
        confidence=confidence,
        reasons=tally.reasons,
        warnings=tally.warnings,
    )

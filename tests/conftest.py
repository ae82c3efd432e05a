# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from dealgrade.api.http import app  # ensures imports resolve; run tests from repo root
from dealgrade.domain.comparables import (
    ComparablesSummary,
    MarketTiming,
    PriceStatistics,
    RentalStatistics,
)
from dealgrade.domain.metrics import InvestmentMetrics


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def scenario_a_inputs() -> dict:
    """
    250k purchase, 25k repairs, 5k closing, comps at 280k.
    Positive cash flow but total investment blows through the 70% cap.
    """
    return {
        "purchasePrice": "250000",
        "repairCosts": "25000",
        "closingCosts": "5000",
        "marketValueComparables": "280000",
        "monthlyRent": "2000",
        "mortgagePayment": "1200",
        "propertyTaxes": "3600",
        "insurance": "1800",
        "managementFees": "10",
        "vacancyRate": "5",
        "noi": "18000",
        "annualDebtService": "14400",
        "loanAmount": "200000",
    }


@pytest.fixture
def scenario_b_inputs(scenario_a_inputs) -> dict:
    """Same deal, comps at 450k: comfortably inside the 70% cap."""
    return dict(scenario_a_inputs, marketValueComparables="450000")


def _zero_metrics() -> dict:
    return {name: 0.0 for name in InvestmentMetrics.__dataclass_fields__}


@pytest.fixture
def make_metrics():
    """
    Build InvestmentMetrics directly so scoring tests can pin each factor.
    Everything not overridden is 0.0.
    """
    def _make(**overrides) -> InvestmentMetrics:
        fields = _zero_metrics()
        fields.update(overrides)
        return InvestmentMetrics(**fields)

    return _make


@pytest.fixture
def market_summary() -> ComparablesSummary:
    """Median comp 300k, median rent 1800/mo, average 25 days on market."""
    return ComparablesSummary(
        total_similar_homes=5,
        price_statistics=PriceStatistics(
            median_price=300_000.0,
            average_price=310_000.0,
            min_price=250_000.0,
            max_price=380_000.0,
        ),
        rental_statistics=RentalStatistics(
            median_rent_estimate=1800.0,
            average_rent_estimate=1850.0,
            min_rent_estimate=1600.0,
            max_rent_estimate=2100.0,
        ),
        price_per_sqft_statistics=None,
        market_timing=MarketTiming(average_days_on_market=25.0, median_days_on_market=22.0),
        market_insights=[],
    )


@pytest.fixture
def similar_homes_raw() -> list:
    """Upstream-shaped similar homes (camelCase keys, nested address)."""
    return [
        {
            "zpid": 1001,
            "address": {"streetAddress": "1 Oak St", "city": "Detroit", "state": "MI", "zipcode": "48201"},
            "price": 100000,
            "zestimate": 105000,
            "rentZestimate": 1500,
            "livingArea": 1000,
            "daysOnZillow": 10,
            "bedrooms": 3,
            "bathrooms": 1,
            "homeType": "SINGLE_FAMILY",
        },
        {
            "zpid": 1002,
            "address": {"streetAddress": "2 Oak St"},
            "price": 0,
            "zestimate": 150000,
            "rentZestimate": 1700,
            "livingArea": 1250,
            "daysOnZillow": 20,
        },
        {
            "zpid": 1003,
            "address": {"streetAddress": "3 Oak St"},
            "price": 200000,
            "rentZestimate": 1900,
            "livingArea": 1600,
            "daysOnZillow": 30,
        },
        {
            # no price and no zestimate: ignored by the summarizer
            "zpid": 1004,
            "address": {"streetAddress": "4 Oak St"},
            "rentZestimate": 5000,
        },
    ]

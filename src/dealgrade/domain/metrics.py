from __future__ import annotations

from dataclasses import asdict, dataclass, fields

# Keys the deal form and its exports have always used
_ALIASES = {
    "arv": "arv",
    "max_total_investment": "maxTotalInvestment",
    "max_purchase_price": "maxPurchasePrice",
    "total_investment": "totalInvestment",
    "available_rehab_budget": "availableRehabBudget",
    "monthly_cash_flow": "monthlyCashFlow",
    "annual_cash_flow": "annualCashFlow",
    "cash_on_cash_return": "cashOnCashReturn",
    "cap_rate": "capRate",
    "ltv_ratio": "ltvRatio",
    "gross_rent_multiplier": "grossRentMultiplier",
    "debt_service_coverage_ratio": "debtServiceCoverageRatio",
    "break_even_ratio": "breakEvenRatio",
    "forced_appreciation": "forcedAppreciation",
    "total_roi": "totalROI",
    "annual_vacancy_cost": "annualVacancyCost",
    "annual_maintenance": "annualMaintenance",
    "vacancy_rate": "vacancyRate",
    "monthly_expenses": "monthlyExpenses",
    "annual_expenses": "annualExpenses",
    "monthly_rent": "monthlyRent",
    "estimated_noi": "estimatedNoi",
    "purchase_price": "purchasePrice",
    "repair_costs": "repairCosts",
    "closing_costs": "closingCosts",
}


@dataclass(frozen=True)
class InvestmentMetrics:
    """
    Derived investment figures for a single deal.

    Percent-style metrics (cash_on_cash_return, cap_rate, ltv_ratio,
    total_roi, vacancy_rate) are in percent points; ratios
    (gross_rent_multiplier, debt_service_coverage_ratio, break_even_ratio)
    are plain multiples.
    """
    # valuation / 70% rule
    arv: float
    max_total_investment: float
    max_purchase_price: float
    total_investment: float
    available_rehab_budget: float

    # cash flow
    monthly_cash_flow: float
    annual_cash_flow: float

    # ratios
    cash_on_cash_return: float
    cap_rate: float
    ltv_ratio: float
    gross_rent_multiplier: float
    debt_service_coverage_ratio: float
    break_even_ratio: float  # reported only, not scored

    # profitability
    forced_appreciation: float
    total_roi: float

    # expense detail
    annual_vacancy_cost: float
    annual_maintenance: float
    vacancy_rate: float
    monthly_expenses: float
    annual_expenses: float
    monthly_rent: float
    estimated_noi: float

    # echoed inputs
    purchase_price: float
    repair_costs: float
    closing_costs: float

    def to_dict(self, by_alias: bool = False) -> dict[str, float]:
        data = asdict(self)
        if not by_alias:
            return data
        return {_ALIASES[f.name]: data[f.name] for f in fields(self)}

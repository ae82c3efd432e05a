from typing import Any, Mapping, Union

from dealgrade.domain.inputs import InvestmentInputs
from dealgrade.domain.metrics import InvestmentMetrics

# 70% rule: purchase + repairs + closing should stay under 70% of ARV
MAX_INVESTMENT_TO_ARV = 0.70

# Annual maintenance reserve as a share of ARV
MAINTENANCE_RESERVE_RATE = 0.015


def _safe_div(numerator: float, denominator: float) -> float:
    """Ratio, or 0.0 when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator
    return 0.0


def _after_repair_value(inputs: InvestmentInputs) -> float:
    """
    Comparables-based market value wins when supplied; otherwise fall back
    to the owner's property value.
    """
    if inputs.market_value_comparables > 0:
        return inputs.market_value_comparables
    return inputs.property_value


def _monthly_expenses(inputs: InvestmentInputs) -> float:
    """
    Monthly outflow: mortgage + taxes + insurance + management.
    Vacancy and maintenance are reported separately and NOT deducted here.
    """
    monthly_taxes = inputs.property_taxes / 12
    monthly_insurance = inputs.insurance / 12
    monthly_management = inputs.monthly_rent * (inputs.management_fees / 100)
    return inputs.mortgage_payment + monthly_taxes + monthly_insurance + monthly_management


def compute_metrics(inputs: Union[InvestmentInputs, Mapping[str, Any]]) -> InvestmentMetrics:
    """
    Core underwriting calculator.

    Pure function of its inputs: no I/O, no config reads beyond the input
    defaults already applied by InvestmentInputs. Never raises for bad
    numbers; every ratio is 0.0 when its denominator is not positive.
    """
    inputs = InvestmentInputs.from_raw(inputs)

    vacancy_rate = inputs.vacancy_rate / 100

    # --- valuation / 70% rule ---
    arv = _after_repair_value(inputs)
    max_total_investment = arv * MAX_INVESTMENT_TO_ARV
    total_investment = inputs.purchase_price + inputs.repair_costs + inputs.closing_costs
    max_purchase_price = max_total_investment - inputs.repair_costs - inputs.closing_costs
    available_rehab_budget = max_total_investment - inputs.purchase_price - inputs.closing_costs

    # --- monthly ---
    monthly_expenses = _monthly_expenses(inputs)
    monthly_cash_flow = inputs.monthly_rent - monthly_expenses

    # --- annual ---
    annual_rent = inputs.monthly_rent * 12
    annual_expenses = monthly_expenses * 12
    annual_cash_flow = monthly_cash_flow * 12
    annual_vacancy_cost = annual_rent * vacancy_rate
    annual_maintenance = arv * MAINTENANCE_RESERVE_RATE

    # --- ratios ---
    cash_on_cash = _safe_div(annual_cash_flow, total_investment) * 100
    # A negative NOI is treated as "not supplied" for cap rate.
    cap_rate = 0.0
    if arv > 0 and inputs.noi > 0:
        cap_rate = inputs.noi / arv * 100
    ltv = _safe_div(inputs.loan_amount, arv) * 100
    grm = _safe_div(arv, annual_rent)
    dscr = _safe_div(inputs.noi, inputs.annual_debt_service)
    break_even = _safe_div(inputs.operating_expenses + inputs.annual_debt_service, annual_rent)

    # --- profitability ---
    forced_appreciation = arv - inputs.purchase_price
    total_return_1yr = annual_cash_flow + forced_appreciation
    total_roi = _safe_div(total_return_1yr, total_investment) * 100

    # --- NOI fallback when not supplied ---
    if inputs.noi > 0:
        estimated_noi = inputs.noi
    else:
        estimated_noi = (
            annual_rent * (1 - vacancy_rate)
            - inputs.operating_expenses
            - annual_maintenance
        )

    return InvestmentMetrics(
        arv=arv,
        max_total_investment=max_total_investment,
        max_purchase_price=max_purchase_price,
        total_investment=total_investment,
        available_rehab_budget=available_rehab_budget,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=annual_cash_flow,
        cash_on_cash_return=cash_on_cash,
        cap_rate=cap_rate,
        ltv_ratio=ltv,
        gross_rent_multiplier=grm,
        debt_service_coverage_ratio=dscr,
        break_even_ratio=break_even,
        forced_appreciation=forced_appreciation,
        total_roi=total_roi,
        annual_vacancy_cost=annual_vacancy_cost,
        annual_maintenance=annual_maintenance,
        vacancy_rate=inputs.vacancy_rate,
        monthly_expenses=monthly_expenses,
        annual_expenses=annual_expenses,
        monthly_rent=inputs.monthly_rent,
        estimated_noi=estimated_noi,
        purchase_price=inputs.purchase_price,
        repair_costs=inputs.repair_costs,
        closing_costs=inputs.closing_costs,
    )

# src/dealgrade/domain/inputs.py
from __future__ import annotations

import math
import numbers
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from dealgrade.adapters.config import config

# Leading numeric prefix, e.g. "1200/mo" -> 1200, "6.5%" -> 6.5
_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_float(val: Any, default: float = 0.0) -> float:
    """
    Lenient converter for form-style numeric fields.

    Accepts:
      - 250000 / 250000.0
      - "250000", " 250,000 ", "$250,000"
      - "6.5%", "1200/mo"
      - numpy scalars, Decimal
    Returns `default` when missing/blank/garbage or not finite.
    """
    if val is None or isinstance(val, bool):
        return default
    if isinstance(val, numbers.Real):
        try:
            f = float(val)
        except (OverflowError, ValueError, TypeError):
            return default
        return f if math.isfinite(f) else default
    # Decimal and other number-likes go through their text form
    s = str(val).strip().replace(",", "").replace("$", "")
    m = _NUMERIC_PREFIX.match(s)
    if not m:
        return default
    try:
        f = float(m.group(0))
    except ValueError:
        return default
    return f if math.isfinite(f) else default


class InvestmentInputs(BaseModel):
    """
    Snapshot of the deal form.

    Every field is optional and never fails validation: anything that does
    not parse as a number falls back to the field default. Both the form's
    camelCase keys and snake_case names are accepted.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    purchase_price: float = Field(default=0.0, alias="purchasePrice")
    closing_costs: float = Field(default=0.0, alias="closingCosts")
    repair_costs: float = Field(default=0.0, alias="repairCosts")
    monthly_rent: float = Field(default=0.0, alias="monthlyRent")
    mortgage_payment: float = Field(default=0.0, alias="mortgagePayment")
    property_taxes: float = Field(default=0.0, alias="propertyTaxes", description="Annual")
    insurance: float = Field(default=0.0, alias="insurance", description="Annual")
    management_fees: float = Field(
        default_factory=lambda: config.DEFAULT_MANAGEMENT_FEE_PCT,
        alias="managementFees",
        description="Percent of monthly rent, 10 means 10%",
    )
    vacancy_rate: float = Field(
        default_factory=lambda: config.DEFAULT_VACANCY_RATE_PCT,
        alias="vacancyRate",
        description="Percent of annual rent, 5 means 5%",
    )
    loan_amount: float = Field(default=0.0, alias="loanAmount")
    property_value: float = Field(default=0.0, alias="propertyValue")
    market_value_comparables: float = Field(default=0.0, alias="marketValueComparables")
    noi: float = Field(default=0.0, alias="noi", description="Annual net operating income")
    annual_debt_service: float = Field(default=0.0, alias="annualDebtService")
    operating_expenses: float = Field(default=0.0, alias="operatingExpenses", description="Annual")

    @field_validator("*", mode="before")
    @classmethod
    def _parse_with_default(cls, v: Any, info: ValidationInfo) -> float:
        field = cls.model_fields[info.field_name]
        default = field.get_default(call_default_factory=True)
        return parse_float(v, default)

    @classmethod
    def from_raw(cls, raw: Any) -> "InvestmentInputs":
        if isinstance(raw, cls):
            return raw
        return cls.model_validate(dict(raw or {}))

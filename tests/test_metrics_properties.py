# tests/test_metrics_properties.py

import math

from hypothesis import given, strategies as st

from dealgrade.analysis.finance import MAX_INVESTMENT_TO_ARV, compute_metrics
from dealgrade.analysis.scoring import label_for_score, score_investment

# Zero or at least one dollar: subnormal denominators would overflow the ratios
money = st.one_of(st.just(0.0), st.floats(min_value=1.0, max_value=2_000_000.0))
monthly = st.one_of(st.just(0.0), st.floats(min_value=1.0, max_value=20_000.0))
pct = st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False)

deal_forms = st.fixed_dictionaries(
    {
        "purchasePrice": money,
        "repairCosts": money,
        "closingCosts": money,
        "propertyValue": money,
        "marketValueComparables": money,
        "monthlyRent": monthly,
        "mortgagePayment": monthly,
        "propertyTaxes": money,
        "insurance": money,
        "managementFees": pct,
        "vacancyRate": pct,
        "noi": st.floats(min_value=-200_000.0, max_value=500_000.0),
        "annualDebtService": money,
        "loanAmount": money,
        "operatingExpenses": money,
    }
)


@given(form=deal_forms)
def test_metrics_are_finite_and_deterministic(form):
    m1 = compute_metrics(form)
    m2 = compute_metrics(dict(form))

    assert m1 == m2
    assert all(math.isfinite(v) for v in m1.to_dict().values())
    assert m1.max_total_investment == m1.arv * MAX_INVESTMENT_TO_ARV
    assert m1.cap_rate >= 0.0


@given(form=deal_forms, as_strings=st.booleans())
def test_string_and_numeric_forms_agree(form, as_strings):
    variant = {k: repr(v) for k, v in form.items()} if as_strings else form
    assert compute_metrics(variant) == compute_metrics(form)


@given(
    form=deal_forms,
    delta=st.floats(min_value=50.0, max_value=2_000.0),
)
def test_higher_rent_never_lowers_cash_flow(form, delta):
    m1 = compute_metrics(form)
    m2 = compute_metrics(dict(form, monthlyRent=form["monthlyRent"] + delta))

    # management is a share of rent below 100%, so the rest flows through
    assert m2.monthly_cash_flow >= m1.monthly_cash_flow - 1e-6


@given(form=deal_forms)
def test_recommendation_label_matches_score(form):
    rec = score_investment(compute_metrics(form))

    assert isinstance(rec.score, int)
    assert (rec.recommendation, rec.confidence) == label_for_score(rec.score)
    assert not set(rec.reasons) & set(rec.warnings)

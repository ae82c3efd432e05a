from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

from dealgrade.adapters.logging_utils import get_logger
from dealgrade.adapters.property_data import normalize_property_record, prefill_inputs
from dealgrade.analysis.comparables import summarize_comparables, summarize_similar_homes_payload
from dealgrade.analysis.finance import compute_metrics
from dealgrade.analysis.presentation import recommendation_style
from dealgrade.analysis.scoring import score_investment
from dealgrade.domain.comparables import (
    ComparableHome,
    ComparablesSummary,
    InsufficientComparables,
)
from dealgrade.domain.inputs import InvestmentInputs

logger = get_logger(__name__)

ComparablesArg = Union[
    ComparablesSummary,
    InsufficientComparables,
    Mapping[str, Any],
    Iterable[Union[ComparableHome, Mapping[str, Any]]],
    None,
]


def _resolve_comparables(
    comparables: ComparablesArg,
) -> Union[ComparablesSummary, InsufficientComparables, None]:
    """
    Accept whatever the caller has on hand:
      - an already-built summary or insufficient-data marker
      - a {"similar_homes": [...]} envelope
      - a plain list of homes
    """
    if comparables is None:
        return None
    if isinstance(comparables, (ComparablesSummary, InsufficientComparables)):
        return comparables
    if isinstance(comparables, Mapping):
        return summarize_similar_homes_payload(comparables)
    return summarize_comparables(comparables)


def analyze_deal(
    raw_inputs: Mapping[str, Any] | InvestmentInputs | None,
    comparables: ComparablesArg = None,
    property_payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Main analysis entrypoint.

    - property_payload (optional) is a property lookup response; its
      zestimate / rent estimate pre-fill the form before parsing.
    - comparables (optional) feeds the market context factor.

    Never raises on bad numeric input; missing market data just means the
    market factor is skipped.
    """
    if isinstance(raw_inputs, InvestmentInputs):
        inputs = raw_inputs
        property_record = None
    else:
        property_record = normalize_property_record(property_payload) if property_payload else None
        inputs = InvestmentInputs.from_raw(prefill_inputs(raw_inputs, property_record))

    metrics = compute_metrics(inputs)
    summary = _resolve_comparables(comparables)
    rec = score_investment(metrics, summary)

    result: dict[str, Any] = {
        "inputs": inputs.model_dump(),
        "metrics": metrics.to_dict(),
        "comparables": summary.to_dict() if summary is not None else None,
        "recommendation": rec.to_dict(),
        "presentation": recommendation_style(rec.recommendation),
    }
    if property_record is not None:
        result["property"] = {k: v for k, v in property_record.items() if k != "raw"}

    logger.info(
        "deal_analyzed",
        extra={
            "context": {
                "score": rec.score,
                "recommendation": rec.recommendation,
                "has_market_context": isinstance(summary, ComparablesSummary),
                "warnings": len(rec.warnings),
            }
        },
    )
    return result

from __future__ import annotations

from typing import Any, List, Mapping

from pydantic import ValidationError

from dealgrade.adapters.config import config
from dealgrade.adapters.logging_utils import get_logger
from dealgrade.domain.comparables import ComparableHome
from dealgrade.domain.inputs import parse_float
from dealgrade.domain.property import PropertyRecord

logger = get_logger(__name__)

# Share of gross rent assumed to survive operating costs in the quick
# per-comp cap rate estimate.
COMP_NOI_FACTOR = 0.6


def _unwrap(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    payload = dict(payload or {})
    data = payload.get("data")
    if isinstance(data, dict):
        return data
    return payload


def _fact_value(fact: Mapping[str, Any]) -> Any:
    value = fact.get("value")
    if isinstance(value, dict):
        return value.get("fullValue")
    return value


def _rent_zestimate_from_facts(main: Mapping[str, Any]) -> float:
    """
    Rent estimate lives in formattedChip.additionalFacts as a display
    string like "$2,150/mo".
    """
    chip = main.get("formattedChip") or {}
    for fact in chip.get("additionalFacts") or []:
        if fact.get("elementType") == "rentZestimate":
            return parse_float(_fact_value(fact), 0.0)
    return 0.0


def normalize_property_record(payload: Mapping[str, Any] | None) -> PropertyRecord:
    """
    Map a property lookup payload -> PropertyRecord.

    Accepts the full response (with a top-level "data" object) or the inner
    object itself. Missing pieces get display defaults, never errors.
    """
    main = _unwrap(payload)
    reso = main.get("resoFacts") or {}
    chip = main.get("formattedChip") or {}

    # Rent: explicit field first, then the formatted facts
    rent = parse_float(main.get("rentZestimate") or main.get("rent_zestimate"), 0.0)
    if rent <= 0:
        rent = _rent_zestimate_from_facts(main)

    heating = "Not available"
    for fact in reso.get("atAGlanceFacts") or []:
        if fact.get("factLabel") == "Heating":
            heating = fact.get("factValue") or "Not available"
            break

    beds = "N/A"
    baths = "N/A"
    for fact in chip.get("quickFacts") or []:
        if fact.get("elementType") == "beds":
            beds = str(_fact_value(fact) or "N/A")
        elif fact.get("elementType") == "baths":
            baths = str(_fact_value(fact) or "N/A")

    zpid = main.get("zpid")

    return PropertyRecord(
        zpid=str(zpid) if zpid is not None else None,
        home_type=str(main.get("homeType") or "Unknown"),
        zestimate=parse_float(main.get("zestimate"), 0.0),
        rent_zestimate=rent,
        living_area=parse_float(main.get("livingAreaValue") or main.get("livingArea"), 0.0),
        lot_area=parse_float(main.get("lotAreaValue"), 0.0),
        lot_units=str(main.get("lotAreaUnits") or ""),
        hoa_fee=parse_float(main.get("hoaFee"), 0.0),
        year_built=int(parse_float(reso.get("yearBuilt") or main.get("yearBuilt"), 0.0)),
        heating=str(heating),
        beds=beds,
        baths=baths,
        image_link=main.get("imageLink") or None,
        street_view=main.get("streetViewImageUrl") or None,
        raw=main,
    )


def normalize_comparable(raw: Mapping[str, Any]) -> ComparableHome:
    """
    Map one similar-home item -> ComparableHome, adding the quick investment
    ratios shown next to each comp (price/sqft, GRM, cap rate estimate).
    """
    address_obj = raw.get("address") or {}
    if isinstance(address_obj, str):
        address = address_obj
    else:
        address = address_obj.get("streetAddress") or raw.get("streetAddress") or ""

    data: dict[str, Any] = {
        "zpid": raw.get("zpid") or raw.get("id"),
        "address": address,
        "price": raw.get("price"),
        "zestimate": raw.get("zestimate"),
        "rent_zestimate": raw.get("rentZestimate") or raw.get("rent_zestimate"),
        "living_area": raw.get("livingArea") or raw.get("sqft") or raw.get("living_area"),
        "days_on_market": raw.get("daysOnZillow") or raw.get("days_on_zillow") or raw.get("days_on_market"),
        "price_per_sqft": raw.get("price_per_sqft"),
        "beds": raw.get("bedrooms") or raw.get("beds"),
        "baths": raw.get("bathrooms") or raw.get("baths"),
        "year_built": raw.get("yearBuilt") or raw.get("year_built"),
        "home_type": raw.get("homeType") or raw.get("home_type"),
        "home_status": raw.get("homeStatus") or raw.get("home_status"),
    }
    home = ComparableHome.model_validate(data)

    price = home.price_for_calc
    extras: dict[str, Any] = {"price_per_sqft": home.effective_price_per_sqft}
    if home.rent_zestimate > 0 and price > 0:
        annual_rent = home.rent_zestimate * 12
        extras["gross_rent_multiplier"] = price / annual_rent
        extras["cap_rate_estimate"] = annual_rent * COMP_NOI_FACTOR / price * 100

    return ComparableHome.model_validate({**data, **extras})


def normalize_similar_homes(
    payload: Mapping[str, Any] | List[Mapping[str, Any]] | None,
    limit: int | None = None,
) -> List[ComparableHome]:
    """
    Normalize a similar-homes response (list, {"similarHomes": [...]},
    {"similar_homes": [...]}, or wrapped in "data").

    Items that fail validation are logged and skipped.
    """
    limit = limit or config.MAX_COMPARABLES

    if isinstance(payload, list):
        items = payload
    else:
        body = _unwrap(payload)
        items = body.get("similarHomes") or body.get("similar_homes") or []

    homes: List[ComparableHome] = []
    for item in items[:limit]:
        try:
            homes.append(normalize_comparable(item))
        except (ValidationError, AttributeError, TypeError) as exc:
            logger.warning(
                "comparable_normalize_failed",
                extra={"context": {"error": str(exc), "snippet": str(item)[:400]}},
            )
    return homes


def prefill_inputs(raw_inputs: Mapping[str, Any] | None, record: PropertyRecord | None) -> dict[str, Any]:
    """
    Copy lookup values into the deal form: zestimate -> market value and
    property value, rent estimate -> monthly rent. Only positive values are
    copied. Returns a new dict; the caller's mapping is untouched.
    """
    filled = dict(raw_inputs or {})
    if not record:
        return filled

    zestimate = parse_float(record.get("zestimate"), 0.0)
    if zestimate > 0:
        filled["marketValueComparables"] = zestimate
        filled["propertyValue"] = zestimate

    rent = parse_float(record.get("rent_zestimate"), 0.0)
    if rent > 0:
        filled["monthlyRent"] = rent

    return filled

# src/dealgrade/domain/property.py
from __future__ import annotations

from typing import Any, TypedDict


class PropertyRecord(TypedDict, total=False):
    """
    Best-effort normalized result of a third-party property lookup.

    Only zestimate and rent_zestimate feed the calculator (through
    prefill_inputs); the rest is descriptive.
    """
    zpid: str | None
    home_type: str
    zestimate: float
    rent_zestimate: float
    living_area: float
    lot_area: float
    lot_units: str
    hoa_fee: float
    year_built: int
    heating: str
    beds: str
    baths: str
    image_link: str | None
    street_view: str | None
    raw: dict[str, Any]

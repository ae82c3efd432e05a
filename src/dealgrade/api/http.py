# src/dealgrade/api/http.py
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException

from dealgrade.adapters.logging_utils import get_logger
from dealgrade.adapters.property_data import normalize_similar_homes
from dealgrade.services.deal_analyzer import analyze_deal
from .schemas import AnalyzeRequest, AnalyzeResponse, HealthResponse

logger = get_logger(__name__)

app = FastAPI(title="dealgrade")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze_endpoint(payload: AnalyzeRequest) -> AnalyzeResponse:
    """
    Score one deal. Comparables arrive in upstream shape and are normalized
    here before summarizing.
    """
    try:
        homes = normalize_similar_homes(payload.comparables) if payload.comparables else None
        result = analyze_deal(
            raw_inputs=payload.inputs,
            comparables=homes,
            property_payload=payload.property_lookup,
        )
        return AnalyzeResponse(**result)
    except Exception as e:
        logger.error("analyze_failed", extra={"context": {"error": str(e)}})
        raise HTTPException(status_code=400, detail=str(e)) from e

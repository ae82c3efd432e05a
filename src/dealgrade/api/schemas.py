# src/dealgrade/api/schemas.py
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# --------------------------------------------
# Analyze
# --------------------------------------------


class AnalyzeRequest(BaseModel):
    """
    Request for /analyze.

    `inputs` is the raw deal form (camelCase or snake_case keys, numbers or
    strings). `comparables` is an optional list of similar homes, and
    `property_lookup` an optional property lookup payload used to
    pre-fill market value and rent.
    """
    model_config = ConfigDict(extra="allow")

    inputs: dict[str, Any] = Field(default_factory=dict)
    comparables: list[dict[str, Any]] | None = None
    property_lookup: dict[str, Any] | None = None


class RecommendationOut(BaseModel):
    score: int
    recommendation: Literal[
        "STRONG BUY",
        "BUY",
        "CONSIDER",
        "WEAK CONSIDER",
        "AVOID",
        "STRONG AVOID",
    ]
    confidence: str
    reasons: list[str]
    warnings: list[str]


class AnalyzeResponse(BaseModel):
    """
    Response for /analyze. Nested metric/comparable dicts are left open so
    new fields do not break clients.
    """
    model_config = ConfigDict(extra="allow")

    inputs: dict[str, Any]
    metrics: dict[str, float]
    comparables: dict[str, Any] | None = None
    recommendation: RecommendationOut
    presentation: dict[str, str]


class HealthResponse(BaseModel):
    status: str
    timestamp: str

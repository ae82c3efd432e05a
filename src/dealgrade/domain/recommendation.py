from dataclasses import asdict, dataclass, field
from typing import List, Literal

Label = Literal[
    "STRONG BUY",
    "BUY",
    "CONSIDER",
    "WEAK CONSIDER",
    "AVOID",
    "STRONG AVOID",
]

Confidence = Literal["Very High", "High", "Medium", "Low"]


@dataclass(frozen=True)
class Recommendation:
    score: int                    # additive, unbounded; roughly -80..+110 in practice
    recommendation: Label
    confidence: Confidence
    reasons: List[str] = field(default_factory=list)   # positive signals, in factor order
    warnings: List[str] = field(default_factory=list)  # negative signals, in factor order

    def to_dict(self) -> dict:
        return asdict(self)

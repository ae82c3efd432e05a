# src/dealgrade/analysis/presentation.py
"""
Label -> display style. Kept apart from scoring so headless callers can
ignore it entirely.
"""
from __future__ import annotations

from typing import Dict

_STYLES: Dict[str, Dict[str, str]] = {
    "STRONG BUY": {
        "color": "#059669",
        "bg_gradient": "linear-gradient(135deg, #059669 0%, #047857 100%)",
    },
    "BUY": {
        "color": "#10b981",
        "bg_gradient": "linear-gradient(135deg, #10b981 0%, #059669 100%)",
    },
    "CONSIDER": {
        "color": "#f59e0b",
        "bg_gradient": "linear-gradient(135deg, #f59e0b 0%, #d97706 100%)",
    },
    "WEAK CONSIDER": {
        "color": "#f97316",
        "bg_gradient": "linear-gradient(135deg, #f97316 0%, #ea580c 100%)",
    },
    "AVOID": {
        "color": "#ef4444",
        "bg_gradient": "linear-gradient(135deg, #ef4444 0%, #dc2626 100%)",
    },
    "STRONG AVOID": {
        "color": "#b91c1c",
        "bg_gradient": "linear-gradient(135deg, #b91c1c 0%, #991b1b 100%)",
    },
}


def recommendation_style(label: str) -> Dict[str, str]:
    try:
        return dict(_STYLES[label])
    except KeyError:
        raise ValueError(f"Unknown recommendation label: {label}") from None

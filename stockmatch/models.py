"""
Value types passed between the request boundary, the catalog and the scorer.

All of them are plain in-memory snapshots: nothing here talks to the
database, and nothing is mutated once built.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

FEATURE_KEYS = ("model", "paint", "fuel_type", "derivative", "trim_code")

Pairs = Tuple[Tuple[str, str], ...]


def is_selected(value: Optional[str]) -> bool:
    """A target value takes part in scoring unless it is None or empty."""
    return value is not None and value != ""


@dataclass(frozen=True)
class TargetSpec:
    """Desired feature and option values for one match request."""

    features: Dict[str, Optional[str]] = field(default_factory=dict)
    options: Dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TargetSpec":
        return cls(
            features=dict(data.get("features") or {}),
            options=dict(data.get("options") or {}),
        )

    def selected_features(self) -> List[Tuple[str, str]]:
        return [(k, v) for k, v in self.features.items() if is_selected(v)]

    def selected_options(self) -> List[Tuple[str, str]]:
        return [(k, v) for k, v in self.options.items() if is_selected(v)]

    def is_empty(self) -> bool:
        return not self.selected_features() and not self.selected_options()


@dataclass(frozen=True)
class Candidate:
    """Read-only snapshot of a stock vehicle and its attributes."""

    id: Optional[int]
    order_number: str
    features: Pairs = ()
    options: Pairs = ()
    customer_name: Optional[str] = None
    type: str = "stock"
    status: str = "available"
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "order_number": self.order_number,
            "customer_name": self.customer_name,
            "type": self.type,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "features": [{"feature_type": k, "feature_value": v} for k, v in self.features],
            "options": [{"option_name": k, "option_value": v} for k, v in self.options],
        }


@dataclass(frozen=True)
class MatchResult:
    candidate: Candidate
    score: int
    matched_features: Sequence[str] = ()
    matched_options: Sequence[str] = ()
    missing_features: Sequence[str] = ()
    missing_options: Sequence[str] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "order": self.candidate.to_dict(),
            "match_score": self.score,
            "matched_features": list(self.matched_features),
            "matched_options": list(self.matched_options),
            "missing_features": list(self.missing_features),
            "missing_options": list(self.missing_options),
        }

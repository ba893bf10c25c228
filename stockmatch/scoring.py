"""
Match scoring between a target specification and one stock vehicle.

Responsibilities:
- Compare selected features (weighted) and options (uniform) exactly.
- Report which keys matched and which did not.

Non-Responsibilities:
- No database access.
- No filtering, sorting or limits.

Invariant:
Given identical inputs, this module must always return the same result.
"""

import math
from typing import Dict, List

from .models import Candidate, MatchResult, Pairs, TargetSpec

FEATURE_WEIGHTS: Dict[str, int] = {
    "model": 35,
    "paint": 20,
    "fuel_type": 25,
    "derivative": 20,
    "trim_code": 15,
}
DEFAULT_FEATURE_WEIGHT = 20

FEATURE_POINTS = 80
OPTION_POINTS = 20


def feature_weight(feature_type: str) -> int:
    return FEATURE_WEIGHTS.get(feature_type, DEFAULT_FEATURE_WEIGHT)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _first_values(pairs: Pairs) -> Dict[str, str]:
    # Duplicate keys keep the first value seen
    values: Dict[str, str] = {}
    for key, value in pairs:
        values.setdefault(key, value)
    return values


def score_candidate(target: TargetSpec, candidate: Candidate) -> MatchResult:
    """
    Score a candidate against the target specification.

    Selected features share up to 80 points in proportion to their weights
    and selected options share up to 20. When only options are selected
    they are scored on the full 100 point scale.

    Args:
        target: Desired feature and option values
        candidate: Stock vehicle snapshot

    Returns:
        MatchResult with the rounded score and matched/missing keys
    """
    if target is None or candidate is None:
        raise ValueError("score_candidate requires a target and a candidate")

    matched_features: List[str] = []
    missing_features: List[str] = []
    matched_options: List[str] = []
    missing_options: List[str] = []

    candidate_features = _first_values(candidate.features)
    selected_features = target.selected_features()
    max_feature_score = sum(feature_weight(key) for key, _ in selected_features)
    raw_feature_score = 0

    for feature_type, target_value in selected_features:
        if candidate_features.get(feature_type) == target_value:
            raw_feature_score += feature_weight(feature_type)
            matched_features.append(feature_type)
        else:
            # Wrong value and no value are both "missing"
            missing_features.append(feature_type)

    candidate_options = _first_values(candidate.options)
    option_matches = 0
    total_options = 0

    for option_name, target_value in target.selected_options():
        total_options += 1
        if candidate_options.get(option_name) == target_value:
            option_matches += 1
            matched_options.append(option_name)
        else:
            missing_options.append(option_name)

    if not selected_features and total_options > 0:
        score = option_matches / total_options * 100
    else:
        feature_ratio = raw_feature_score / max_feature_score if max_feature_score > 0 else 0
        option_ratio = option_matches / total_options if total_options > 0 else 0
        score = feature_ratio * FEATURE_POINTS + option_ratio * OPTION_POINTS

    return MatchResult(
        candidate=candidate,
        score=round_half_up(score),
        matched_features=tuple(matched_features),
        matched_options=tuple(matched_options),
        missing_features=tuple(missing_features),
        missing_options=tuple(missing_options),
    )

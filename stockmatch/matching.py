"""
Match pipeline: fetch available stock, score, filter, rank and limit.
"""

from typing import List, Protocol, Sequence

from .logger import get_logger
from .models import Candidate, MatchResult, TargetSpec
from .scoring import score_candidate

DEFAULT_MIN_SCORE = 50
DEFAULT_LIMIT = 20


class CandidateSource(Protocol):
    def fetch_available_stock(self) -> Sequence[Candidate]:
        ...


def find_matches(
    target: TargetSpec,
    catalog: CandidateSource,
    min_score: int = DEFAULT_MIN_SCORE,
    limit: int = DEFAULT_LIMIT,
) -> List[MatchResult]:
    """
    Find available stock vehicles that match a target specification.

    Candidates are fetched before any scoring; a failing fetch propagates
    unchanged. Results are sorted by score descending and ties keep the
    catalog's order (newest first).

    Args:
        target: Validated target specification
        catalog: Anything exposing fetch_available_stock()
        min_score: Lowest score to keep (inclusive)
        limit: Maximum number of results

    Returns:
        Ranked list of MatchResult, possibly empty
    """
    logger = get_logger()
    candidates = list(catalog.fetch_available_stock())

    scored = [score_candidate(target, c) for c in candidates]
    logger.record_scores(r.score for r in scored)

    matches = sorted(
        (r for r in scored if r.score >= min_score),
        key=lambda r: r.score,
        reverse=True,
    )[:limit]

    logger.info(
        f"Found {len(candidates)} stock vehicles, {len(matches)} matches above score {min_score}",
        candidates=len(candidates),
        matches=len(matches),
        min_score=min_score,
        limit=limit,
    )
    return matches

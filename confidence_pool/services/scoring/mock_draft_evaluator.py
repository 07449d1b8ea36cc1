"""
Mock Draft Accuracy Evaluator

Grades third-party mock drafts against the announced results. A mock
draft carries no confidence values, so each pick is weighted by its
position (derived confidence): with N picks, possible points are always
``N * (N + 1) / 2``.

Before any pick is announced a draft is reported as "no results yet"
(``has_results=False``, no grade) rather than as 0% accurate.
"""
import logging
from datetime import datetime
from typing import List, Mapping, Optional, Sequence

from confidence_pool.services.scoring.confidence_engine import score_with_derived_confidence
from confidence_pool.services.scoring.types import (
    EvaluatedMockDraft,
    Grade,
    MockDraftAccuracy,
    Pick,
)

logger = logging.getLogger(__name__)

# (minimum percentage, grade), best first
GRADE_BANDS = (
    (70, Grade("S+", "God Mode")),
    (60, Grade("A+", "Amazing")),
    (50, Grade("A", "Great")),
    (40, Grade("B+", "Very Good")),
    (30, Grade("B", "Pretty Good")),
    (20, Grade("B-", "Decent")),
    (15, Grade("C+", "Below Average")),
    (10, Grade("C", "Poor")),
)
LOWEST_GRADE = Grade("D", "Very Poor")

SORT_OPTIONS = ("accuracy", "date")


def grade_for_percentage(percentage: float) -> Grade:
    for minimum, grade in GRADE_BANDS:
        if percentage >= minimum:
            return grade
    return LOWEST_GRADE


def evaluate_mock_draft(picks: Sequence[Pick], actual: Mapping[int, str]) -> MockDraftAccuracy:
    """
    Evaluate one mock draft.

    Args:
        picks: The mock draft's picks; any declared confidence is ignored
        actual: Announced results as ``{position: player_id}``

    Returns:
        MockDraftAccuracy; zeroed with ``has_results=False`` when nothing
        has been announced
    """
    if not actual:
        logger.debug("No announced picks yet, mock draft left ungraded")
        return MockDraftAccuracy(
            correct_picks=0,
            total_picks=len(picks),
            points=0,
            possible_points=0,
            percentage=0.0,
            has_results=False,
        )

    breakdown = score_with_derived_confidence(picks, actual)
    percentage = breakdown.percentage
    return MockDraftAccuracy(
        correct_picks=breakdown.correct_count,
        total_picks=len(picks),
        points=breakdown.total_points,
        possible_points=breakdown.possible_points,
        percentage=percentage,
        has_results=True,
        grade=grade_for_percentage(percentage),
        per_pick=breakdown.per_pick,
    )


def _timestamp(value: Optional[datetime]) -> float:
    return value.timestamp() if value is not None else float("-inf")


def rank_mock_drafts(
    evaluated: Sequence[EvaluatedMockDraft],
    sort_by: str = "accuracy"
) -> List[EvaluatedMockDraft]:
    """
    Order evaluated mock drafts for display.

    ``accuracy`` sorts by percentage descending, then most recently
    updated; ``date`` sorts by most recently updated only. Drafts without
    a timestamp go last.

    Raises:
        ValueError: If sort_by is not a known option
    """
    if sort_by not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option '{sort_by}', expected one of {SORT_OPTIONS}")

    if sort_by == "date":
        return sorted(evaluated, key=lambda e: _timestamp(e.draft.updated_at), reverse=True)
    return sorted(
        evaluated,
        key=lambda e: (e.accuracy.percentage, _timestamp(e.draft.updated_at)),
        reverse=True,
    )

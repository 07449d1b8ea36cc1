"""
Scoring core: pure functions over immutable snapshots.

Nothing in this package touches the database; services fetch rows,
convert them to the types in ``types`` and call in here.
"""
from confidence_pool.services.scoring.confidence_engine import (
    build_actual_map,
    score,
    score_with_declared_confidence,
    score_with_derived_confidence,
)
from confidence_pool.services.scoring.mock_draft_evaluator import (
    evaluate_mock_draft,
    grade_for_percentage,
    rank_mock_drafts,
)
from confidence_pool.services.scoring.prediction_validator import (
    ValidationResult,
    is_confidence_permutation,
    validate_prediction_picks,
)
from confidence_pool.services.scoring.standings import rank_league

__all__ = [
    "build_actual_map",
    "score",
    "score_with_declared_confidence",
    "score_with_derived_confidence",
    "evaluate_mock_draft",
    "grade_for_percentage",
    "rank_mock_drafts",
    "ValidationResult",
    "is_confidence_permutation",
    "validate_prediction_picks",
    "rank_league",
]

"""
Models Module

Usage:
    from confidence_pool.models import League, Prediction, ActualPick

    predictions = db.query(Prediction).filter(Prediction.league_id == league_id).all()
"""

from confidence_pool.models.models import (
    Base,
    SPORT_TYPES,
    DEFAULT_TOTAL_PICKS,
    parse_sport_type,
    utcnow,
    UserProfile,
    Player,
    League,
    Prediction,
    ActualPick,
    MockDraft,
    DraftSettings,
)

__all__ = [
    "Base",
    "SPORT_TYPES",
    "DEFAULT_TOTAL_PICKS",
    "parse_sport_type",
    "utcnow",
    "UserProfile",
    "Player",
    "League",
    "Prediction",
    "ActualPick",
    "MockDraft",
    "DraftSettings",
]

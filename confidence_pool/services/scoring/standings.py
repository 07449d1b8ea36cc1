"""
League Standings Aggregator

Turns a league's predictions into a ranked leaderboard. Every member gets
a row, including members who never submitted; ranking uses competition
ranking (1, 1, 3) so shared places are visible in the data rather than
hidden behind list order.
"""
import logging
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence

from confidence_pool.services.scoring.confidence_engine import score_with_declared_confidence
from confidence_pool.services.scoring.prediction_validator import is_confidence_permutation
from confidence_pool.services.scoring.types import (
    DraftLifecycle,
    LeagueSnapshot,
    PredictionSnapshot,
    Standings,
    UserScore,
)

logger = logging.getLogger(__name__)

WINNER_SLOTS = 3


def fallback_display_name(user_id: str) -> str:
    """Display name used when a member has no profile name."""
    return f"User {user_id[:5]}"


def _resolve_name(user_id: str, display_names: Optional[Mapping[str, str]]) -> str:
    if display_names:
        name = display_names.get(user_id)
        if name:
            return name
    return fallback_display_name(user_id)


def competition_ranks(points: Sequence[int]) -> List[int]:
    """
    Rank values so that ties share a rank and the next rank skips.

    ``[15, 15, 10]`` ranks as ``[1, 1, 3]``. Input order is preserved.
    """
    return [1 + sum(1 for other in points if other > value) for value in points]


def rank_league(
    league: LeagueSnapshot,
    predictions: Sequence[PredictionSnapshot],
    actual: Mapping[int, str],
    lifecycle: DraftLifecycle = DraftLifecycle(),
    display_names: Optional[Mapping[str, str]] = None,
    photo_urls: Optional[Mapping[str, str]] = None,
    payment_infos: Optional[Mapping[str, str]] = None
) -> Standings:
    """
    Rank the members of a league.

    Args:
        league: League members and size
        predictions: Stored predictions; entries from non-members or other
            leagues are ignored
        actual: Announced results as ``{position: player_id}``
        lifecycle: Draft flags; winners are only named once completed
        display_names: Profile names by user id
        photo_urls: Profile photos by user id
        payment_infos: How each member wants to be paid; attached to every
            entry once the draft is completed, withheld before

    Returns:
        Standings with one entry per member, sorted by points descending
    """
    members = list(dict.fromkeys(league.members))
    by_user: Dict[str, PredictionSnapshot] = {}
    for prediction in predictions:
        if prediction.league_id != league.league_id or prediction.user_id not in members:
            logger.debug(
                f"Ignoring prediction of {prediction.user_id} for league {prediction.league_id}",
                extra={"league_id": league.league_id},
            )
            continue
        by_user[prediction.user_id] = prediction

    payments = payment_infos if lifecycle.is_completed and payment_infos else {}

    unsorted: List[UserScore] = []
    for user_id in members:
        name = _resolve_name(user_id, display_names)
        photo = photo_urls.get(user_id) if photo_urls else None
        payment = payments.get(user_id)
        prediction = by_user.get(user_id)
        if prediction is None:
            unsorted.append(UserScore(
                user_id=user_id, display_name=name, rank=0, photo_url=photo, payment_info=payment
            ))
            continue

        breakdown = score_with_declared_confidence(prediction.picks, actual, total_picks=league.total_picks)
        unsorted.append(UserScore(
            user_id=user_id,
            display_name=name,
            rank=0,
            total_points=breakdown.total_points,
            possible_points=breakdown.possible_points,
            potential_points=breakdown.potential_points,
            correct_picks=breakdown.correct_count,
            total_picks=breakdown.total_count,
            remaining_picks=breakdown.pending_count,
            has_prediction=True,
            is_verified=is_confidence_permutation(prediction.picks, league.total_picks),
            photo_url=photo,
            payment_info=payment,
        ))

    # sorted() is stable: equal scores keep member order
    ordered = sorted(unsorted, key=lambda s: s.total_points, reverse=True)
    ranks = competition_ranks([s.total_points for s in ordered])
    entries = tuple(replace(s, rank=r) for s, r in zip(ordered, ranks))

    winners = entries[:WINNER_SLOTS] if lifecycle.is_completed else ()
    return Standings(league_id=league.league_id, entries=entries, winners=winners, lifecycle=lifecycle)

"""
Confidence Scoring Engine

Scores a set of picks against the announced draft results. A pick earns
its full confidence when the announced player id at its position equals
the predicted id (exact, case-sensitive); otherwise it earns nothing.

There are two ways a pick gets its confidence, both routed through the
same primitive so the correctness rule cannot drift between them:

- declared: the confidence the predictor assigned (league predictions)
- derived: ``len(picks) - position + 1`` (mock drafts)

Malformed picks are skipped, logged and counted rather than raised, so a
single bad document never takes a leaderboard down.
"""
import logging
import time
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from confidence_pool.core.metrics import (
    record_malformed_pick,
    scoring_duration_seconds,
    scoring_runs_total,
)
from confidence_pool.services.scoring.types import (
    ConfidenceMode,
    Pick,
    PickResult,
    PickStatus,
    ScoreBreakdown,
)

logger = logging.getLogger(__name__)

ActualMap = Mapping[int, str]


def build_actual_map(rows: Iterable) -> Dict[int, str]:
    """
    Build ``{position: player_id}`` from announced pick rows.

    Rows may be ORM objects or dicts (``playerId`` or ``player_id``).
    Rows without a player id are not announced yet and are left out.
    """
    actual: Dict[int, str] = {}
    for row in rows:
        if isinstance(row, Mapping):
            position = row.get("position")
            player_id = row.get("playerId", row.get("player_id"))
        else:
            position = getattr(row, "position", None)
            player_id = getattr(row, "player_id", None)
        if position is None or not player_id:
            continue
        actual[int(position)] = str(player_id)
    return actual


def derive_confidence(position: int, total_picks: int) -> int:
    """Confidence implied by draft position: the first pick is worth the most."""
    return total_picks - position + 1


def _malformed_reason(
    pick: Pick,
    total_picks: Optional[int],
    seen_positions: set,
    check_confidence: bool = True
) -> Optional[str]:
    if pick.position < 1 or (total_picks is not None and pick.position > total_picks):
        return "position_out_of_range"
    if pick.position in seen_positions:
        return "duplicate_position"
    if not pick.player_id:
        return "missing_player"
    if not check_confidence:
        return None
    if pick.confidence < 1 or (total_picks is not None and pick.confidence > total_picks):
        return "confidence_out_of_range"
    return None


def _weighted(picks: Sequence[Pick], mode: ConfidenceMode) -> List[Pick]:
    if mode is ConfidenceMode.DECLARED:
        return list(picks)
    total = len(picks)
    return [
        Pick(position=p.position, player_id=p.player_id, confidence=derive_confidence(p.position, total))
        for p in picks
    ]


def score(
    picks: Sequence[Pick],
    actual: ActualMap,
    mode: ConfidenceMode = ConfidenceMode.DECLARED,
    total_picks: Optional[int] = None
) -> ScoreBreakdown:
    """
    Score picks against the announced results.

    Args:
        picks: Predicted picks
        actual: Announced results as ``{position: player_id}``
        mode: Where each pick's confidence comes from
        total_picks: Size of the draft, when known; bounds position and
            confidence in declared mode. Derived mode uses ``len(picks)``
            and never skips a pick for its weight.

    Returns:
        ScoreBreakdown with totals and one PickResult per scored pick,
        ordered by position
    """
    mode = ConfidenceMode(mode)
    started = time.perf_counter()

    weighted = _weighted(picks, mode)
    declared = mode is ConfidenceMode.DECLARED
    # Derived weights of a mock draft with gaps can drop to zero or below;
    # such picks are still scored
    bound = total_picks if declared else None

    results: List[PickResult] = []
    seen_positions: set = set()
    skipped = 0
    for pick in weighted:
        reason = _malformed_reason(pick, bound, seen_positions, check_confidence=declared)
        if reason is not None:
            skipped += 1
            record_malformed_pick(reason)
            logger.warning(
                f"Skipping malformed pick at position {pick.position}: {reason}",
                extra={"position": pick.position, "reason": reason},
            )
            continue
        seen_positions.add(pick.position)

        actual_player_id = actual.get(pick.position)
        if actual_player_id is None:
            status = PickStatus.PENDING
        elif actual_player_id == pick.player_id:
            status = PickStatus.CORRECT
        else:
            status = PickStatus.WRONG

        results.append(PickResult(
            position=pick.position,
            predicted_player_id=pick.player_id,
            actual_player_id=actual_player_id,
            status=status,
            confidence=pick.confidence,
            points=pick.confidence if status is PickStatus.CORRECT else 0,
        ))

    results.sort(key=lambda r: r.position)
    breakdown = _summarize(results, skipped)

    scoring_runs_total.labels(mode=mode.value).inc()
    scoring_duration_seconds.labels(mode=mode.value).observe(time.perf_counter() - started)
    return breakdown


def _summarize(results: List[PickResult], skipped: int) -> ScoreBreakdown:
    total_points = sum(r.points for r in results)
    pending_points = sum(r.confidence for r in results if r.status is PickStatus.PENDING)
    return ScoreBreakdown(
        total_points=total_points,
        possible_points=sum(r.confidence for r in results),
        potential_points=total_points + pending_points,
        correct_count=sum(1 for r in results if r.status is PickStatus.CORRECT),
        total_count=len(results),
        pending_count=sum(1 for r in results if r.status is PickStatus.PENDING),
        skipped_count=skipped,
        per_pick=tuple(results),
    )


def score_with_declared_confidence(
    picks: Sequence[Pick],
    actual: ActualMap,
    total_picks: Optional[int] = None
) -> ScoreBreakdown:
    """Score a league prediction; each pick weighs its own confidence."""
    return score(picks, actual, ConfidenceMode.DECLARED, total_picks=total_picks)


def score_with_derived_confidence(picks: Sequence[Pick], actual: ActualMap) -> ScoreBreakdown:
    """Score a mock draft; each pick weighs ``len(picks) - position + 1``."""
    return score(picks, actual, ConfidenceMode.DERIVED)


def picks_from_documents(documents: Iterable[Mapping]) -> Tuple[Pick, ...]:
    """Convert stored pick documents into Pick values, dropping non-objects."""
    picks = []
    for doc in documents or ():
        if not isinstance(doc, Mapping):
            record_malformed_pick("not_an_object")
            logger.warning(f"Skipping pick document of type {type(doc).__name__}")
            continue
        picks.append(Pick.from_dict(doc))
    return tuple(picks)

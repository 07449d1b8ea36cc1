"""
Prediction validation.

Submitted predictions are checked here before they are stored. The
scoring engine trusts what it is given beyond skipping obviously broken
picks, so a confidence set that is not exactly ``1..total_picks`` is
caught at write time, and standings mark any stored prediction that
slipped through as unverified.
"""
from dataclasses import dataclass, field
from typing import List, Sequence

from confidence_pool.services.scoring.types import Pick


@dataclass
class ValidationResult:
    """Result of validating a prediction."""
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)


def validate_prediction_picks(
    picks: Sequence[Pick],
    total_picks: int,
    require_complete: bool = True
) -> ValidationResult:
    """
    Validate a prediction against a league of ``total_picks`` slots.

    Args:
        picks: Submitted picks
        total_picks: Number of slots in the league's draft
        require_complete: Whether every position must be filled

    Returns:
        ValidationResult; ``errors`` lists every problem found
    """
    result = ValidationResult()
    seen_positions = set()
    seen_players = {}
    seen_confidence = {}

    for pick in picks:
        if pick.position < 1 or pick.position > total_picks:
            result.add_error(f"Position {pick.position} is outside 1..{total_picks}")
        elif pick.position in seen_positions:
            result.add_error(f"Position {pick.position} is picked more than once")
        seen_positions.add(pick.position)

        if not pick.player_id:
            result.add_error(f"Pick at position {pick.position} has no player")
        elif pick.player_id in seen_players:
            result.add_error(
                f"Player {pick.player_id} is picked at positions "
                f"{seen_players[pick.player_id]} and {pick.position}"
            )
        else:
            seen_players[pick.player_id] = pick.position

        if pick.confidence < 1 or pick.confidence > total_picks:
            result.add_error(
                f"Confidence {pick.confidence} at position {pick.position} is outside 1..{total_picks}"
            )
        elif pick.confidence in seen_confidence:
            result.add_error(
                f"Confidence {pick.confidence} is used at positions "
                f"{seen_confidence[pick.confidence]} and {pick.position}"
            )
        else:
            seen_confidence[pick.confidence] = pick.position

    missing = [p for p in range(1, total_picks + 1) if p not in seen_positions]
    if missing:
        message = f"Missing picks for positions: {', '.join(str(p) for p in missing)}"
        if require_complete:
            result.add_error(message)
        else:
            result.add_warning(message)

    return result


def is_confidence_permutation(picks: Sequence[Pick], total_picks: int) -> bool:
    """True when the confidence values are exactly ``1..total_picks``, each used once."""
    return sorted(p.confidence for p in picks) == list(range(1, total_picks + 1))

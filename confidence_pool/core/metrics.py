"""
Prometheus metrics for the confidence pool API.

HTTP request metrics come from prometheus-fastapi-instrumentator; the
metrics here cover scoring, leaderboards, prediction writes, league
membership and the entity store.
"""
from prometheus_client import Counter, Histogram

# Scoring Metrics
scoring_runs_total = Counter(
    "scoring_runs_total",
    "Total prediction sets scored",
    ["mode"]
)

scoring_duration_seconds = Histogram(
    "scoring_duration_seconds",
    "Time spent scoring a single prediction set",
    ["mode"]
)

malformed_picks_skipped_total = Counter(
    "malformed_picks_skipped_total",
    "Picks excluded from scoring because of invalid position, confidence or player",
    ["reason"]
)

# Leaderboard Metrics
leaderboards_computed_total = Counter(
    "leaderboards_computed_total",
    "Total league standings computed",
    ["sport"]
)

mock_drafts_evaluated_total = Counter(
    "mock_drafts_evaluated_total",
    "Total mock drafts evaluated against actual results",
    ["sport"]
)

# Prediction write Metrics
predictions_saved_total = Counter(
    "predictions_saved_total",
    "Total predictions saved",
    ["sport"]
)

predictions_rejected_total = Counter(
    "predictions_rejected_total",
    "Total prediction submissions rejected",
    ["reason"]
)

# League membership Metrics
league_changes_total = Counter(
    "league_changes_total",
    "League lifecycle changes (created, joined, member_removed, deleted)",
    ["action"]
)

# Entity store Metrics
entity_store_errors_total = Counter(
    "entity_store_errors_total",
    "Total entity store failures",
    ["operation"]
)


def record_malformed_pick(reason: str):
    """Record a pick skipped during scoring."""
    malformed_picks_skipped_total.labels(reason=reason).inc()


def record_entity_store_error(operation: str):
    """Record a failed entity store operation."""
    entity_store_errors_total.labels(operation=operation).inc()


def record_prediction_rejected(reason: str):
    """Record a rejected prediction submission."""
    predictions_rejected_total.labels(reason=reason).inc()

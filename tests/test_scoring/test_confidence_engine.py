"""Unit tests for the confidence scoring engine.

Test Strategy:
1. Declared confidence: points on exact matches, nothing otherwise
2. Pending vs wrong: unannounced positions are pending, not wrong
3. Derived confidence: weights follow draft position
4. Malformed picks: skipped and counted, never raised
5. Properties: determinism, totals never exceed possible points

Each test follows the pattern:
- Given: Picks and an actual results map
- When: score() or one of its modes is called
- Then: Totals and per-pick statuses match expected values
"""
import pytest

from confidence_pool.services.scoring.confidence_engine import (
    build_actual_map,
    derive_confidence,
    picks_from_documents,
    score,
    score_with_declared_confidence,
    score_with_derived_confidence,
)
from confidence_pool.services.scoring.types import ConfidenceMode, Pick, PickStatus


def picks(*triples):
    return [Pick(position=pos, player_id=pid, confidence=conf) for pos, pid, conf in triples]


LEAGUE_PICKS = picks((1, "p1", 4), (2, "p2", 3), (3, "p3", 2), (4, "p4", 1))


class TestDeclaredConfidence:
    """Test suite for scoring league predictions."""

    def test_scores_correct_picks_with_their_confidence(self):
        """Should award each correct pick its declared confidence."""
        actual = {1: "p1", 2: "px", 3: "p3", 4: "p4"}

        result = score_with_declared_confidence(LEAGUE_PICKS, actual, total_picks=4)

        assert result.total_points == 7
        assert result.possible_points == 10
        assert result.correct_count == 3
        assert result.total_count == 4

    def test_wrong_pick_awards_zero(self):
        """Should give no partial credit for a wrong player."""
        actual = {1: "p1", 2: "px", 3: "p3", 4: "p4"}

        result = score_with_declared_confidence(LEAGUE_PICKS, actual)

        wrong = result.per_pick[1]
        assert wrong.status is PickStatus.WRONG
        assert wrong.points == 0
        assert wrong.actual_player_id == "px"

    def test_match_is_case_sensitive(self):
        """Should treat player ids as opaque, case-sensitive strings."""
        result = score_with_declared_confidence(picks((1, "P1", 1)), {1: "p1"})

        assert result.total_points == 0
        assert result.per_pick[0].status is PickStatus.WRONG

    def test_empty_actual_marks_every_pick_pending(self):
        """Should mark picks pending, not wrong, before anything is announced."""
        result = score_with_declared_confidence(LEAGUE_PICKS, {}, total_picks=4)

        assert result.total_points == 0
        assert result.correct_count == 0
        assert result.pending_count == 4
        assert all(r.status is PickStatus.PENDING for r in result.per_pick)
        assert not any(r.status is PickStatus.WRONG for r in result.per_pick)

    def test_potential_points_include_pending_confidence(self):
        """Should report earned points plus confidence still in play."""
        actual = {1: "p1", 2: "px"}

        result = score_with_declared_confidence(LEAGUE_PICKS, actual, total_picks=4)

        assert result.total_points == 4
        assert result.pending_count == 2
        assert result.potential_points == 4 + 2 + 1

    def test_per_pick_sorted_by_position(self):
        """Should return per-pick detail in position order regardless of input order."""
        shuffled = list(reversed(LEAGUE_PICKS))

        result = score_with_declared_confidence(shuffled, {})

        assert [r.position for r in result.per_pick] == [1, 2, 3, 4]

    def test_percentage_is_zero_without_possible_points(self):
        """Should not divide by zero for an empty prediction."""
        result = score_with_declared_confidence([], {1: "p1"})

        assert result.possible_points == 0
        assert result.percentage == 0.0


class TestDerivedConfidence:
    """Test suite for position-derived confidence."""

    def test_derives_confidence_from_position(self):
        """Should weight pick 1 of 3 as 3 and pick 3 as 1."""
        mock = picks((1, "p1", 0), (2, "p2", 0), (3, "p3", 0))

        result = score_with_derived_confidence(mock, {1: "p1", 2: "pX", 3: "p3"})

        assert [r.confidence for r in result.per_pick] == [3, 2, 1]
        assert result.total_points == 4
        assert result.possible_points == 6

    def test_ignores_declared_confidence(self):
        """Should replace any confidence carried by the picks."""
        mock = picks((1, "p1", 99), (2, "p2", 99))

        result = score_with_derived_confidence(mock, {1: "p1"})

        assert result.total_points == 2
        assert result.possible_points == 3

    @pytest.mark.parametrize("n", [1, 5, 32])
    def test_possible_points_is_triangular_number(self, n):
        """Should always total N*(N+1)/2 for N picks, whatever their order."""
        mock = [Pick(position=p, player_id=f"p{p}") for p in reversed(range(1, n + 1))]

        result = score_with_derived_confidence(mock, {})

        assert result.possible_points == n * (n + 1) // 2

    def test_gapped_draft_keeps_every_pick(self):
        """Should score a pick whose derived weight is zero or negative instead of skipping it."""
        mock = picks((1, "a", 0), (4, "d", 0), (5, "e", 0))

        result = score_with_derived_confidence(mock, {1: "a", 4: "d", 5: "e"})

        assert result.skipped_count == 0
        assert result.total_count == 3
        assert result.correct_count == 3
        assert [r.confidence for r in result.per_pick] == [3, 0, -1]
        assert all(r.status is PickStatus.CORRECT for r in result.per_pick)

    def test_derive_confidence(self):
        assert derive_confidence(1, 32) == 32
        assert derive_confidence(32, 32) == 1

    def test_score_dispatches_on_mode(self):
        """Should route both modes through the same primitive."""
        mock = picks((1, "p1", 1), (2, "p2", 2))
        actual = {1: "p1", 2: "p2"}

        declared = score(mock, actual, ConfidenceMode.DECLARED)
        derived = score(mock, actual, "derived")

        assert declared.total_points == 3
        assert derived.total_points == 3
        assert [r.confidence for r in declared.per_pick] == [1, 2]
        assert [r.confidence for r in derived.per_pick] == [2, 1]


class TestMalformedPicks:
    """Test suite for graceful handling of bad pick data."""

    def test_skips_position_out_of_range(self):
        """Should skip positions below 1 or beyond the draft size."""
        bad = picks((0, "p1", 1), (5, "p5", 2), (1, "p1", 3))

        result = score_with_declared_confidence(bad, {1: "p1"}, total_picks=4)

        assert result.skipped_count == 2
        assert result.total_count == 1
        assert result.total_points == 3

    def test_skips_repeated_position(self):
        """Should score only the first pick for a position."""
        bad = picks((1, "p1", 4), (1, "p2", 3))

        result = score_with_declared_confidence(bad, {1: "p2"}, total_picks=4)

        assert result.skipped_count == 1
        assert result.total_points == 0
        assert result.per_pick[0].predicted_player_id == "p1"

    def test_skips_missing_player(self):
        result = score_with_declared_confidence(picks((1, "", 4)), {1: "p1"})

        assert result.skipped_count == 1
        assert result.possible_points == 0

    def test_skips_confidence_out_of_range(self):
        """Should skip non-positive confidence, and confidence beyond the draft size when known."""
        bad = picks((1, "p1", 0), (2, "p2", -3), (3, "p3", 9))

        result = score_with_declared_confidence(bad, {1: "p1", 2: "p2", 3: "p3"}, total_picks=4)

        assert result.skipped_count == 3
        assert result.total_points == 0

    def test_duplicate_confidence_is_still_scored(self):
        """Should score duplicate confidence values; standings flag them instead."""
        dup = picks((1, "p1", 2), (2, "p2", 2))

        result = score_with_declared_confidence(dup, {1: "p1", 2: "p2"}, total_picks=2)

        assert result.skipped_count == 0
        assert result.total_points == 4

    def test_documents_with_missing_fields_become_malformed_picks(self):
        """Should turn unparseable documents into picks the engine skips."""
        documents = [
            {"position": 1, "playerId": "p1", "confidence": 2},
            {"position": "two", "playerId": "p2", "confidence": 1},
            {"position": 3, "confidence": 1},
            "not a pick",
        ]

        parsed = picks_from_documents(documents)
        result = score_with_declared_confidence(parsed, {1: "p1"}, total_picks=3)

        assert len(parsed) == 3
        assert result.skipped_count == 2
        assert result.total_points == 2


class TestScoringProperties:
    """Test suite for properties that hold for any input."""

    def test_deterministic(self):
        """Should return identical output for identical input."""
        actual = {1: "p1", 3: "p3"}

        first = score_with_declared_confidence(LEAGUE_PICKS, actual, total_picks=4)
        second = score_with_declared_confidence(LEAGUE_PICKS, actual, total_picks=4)

        assert first == second

    def test_does_not_mutate_inputs(self):
        given = list(LEAGUE_PICKS)
        actual = {1: "p1"}

        score_with_derived_confidence(given, actual)

        assert given == LEAGUE_PICKS
        assert actual == {1: "p1"}

    @pytest.mark.parametrize("actual", [
        {},
        {1: "p1"},
        {1: "p1", 2: "p2", 3: "p3", 4: "p4"},
        {1: "x", 2: "y", 3: "z", 4: "w"},
    ])
    def test_total_never_exceeds_possible(self, actual):
        result = score_with_declared_confidence(LEAGUE_PICKS, actual, total_picks=4)

        assert result.total_points <= result.possible_points
        assert result.total_points <= result.potential_points <= result.possible_points


class TestBuildActualMap:
    """Test suite for turning announced picks into a position map."""

    def test_accepts_rows_and_dicts(self):
        class Row:
            def __init__(self, position, player_id):
                self.position = position
                self.player_id = player_id

        rows = [Row(1, "p1"), {"position": 2, "playerId": "p2"}, {"position": 3, "player_id": "p3"}]

        assert build_actual_map(rows) == {1: "p1", 2: "p2", 3: "p3"}

    def test_skips_unannounced_rows(self):
        rows = [{"position": 1, "playerId": ""}, {"position": 2, "playerId": None}, {"playerId": "p3"}]

        assert build_actual_map(rows) == {}

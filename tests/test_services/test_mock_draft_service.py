"""
Tests for MockDraftService and MockDraftImportService.

Test Strategy:
1. Listing: accuracy and date ordering over the shared fixtures
2. Slug lookup: latest version of an expert's draft wins
3. Import: name resolution methods, unmatched names, placeholders
4. Import updates: same sportscaster and version replaces the picks
"""
import pytest

from confidence_pool.core.exceptions import (
    MalformedMockDraftError,
    MockDraftNotFoundError,
    UnknownSportError,
)
from confidence_pool.models import MockDraft
from confidence_pool.services.mock_draft_import import ImportRow, MockDraftImportService
from confidence_pool.services.mock_draft_service import MockDraftService
from tests.conftest import SPORT, YEAR


@pytest.fixture
def service(db_session):
    return MockDraftService(db_session)


@pytest.fixture
def importer(db_session):
    return MockDraftImportService(db_session)


class TestListEvaluated:
    """Test suite for evaluated mock draft listings."""

    def test_sorted_by_accuracy(self, service, sample_mock_drafts, sample_actual_picks):
        evaluated = service.list_evaluated(SPORT, YEAR)

        assert [e.draft.id for e in evaluated] == ["mock-kiper-v2", "mock-kiper-v1", "mock-jeremiah"]
        assert [e.accuracy.grade.letter for e in evaluated] == ["S+", "B-", "D"]
        assert evaluated[0].accuracy.points == 7
        assert evaluated[0].accuracy.possible_points == 10

    def test_sorted_by_date(self, service, sample_mock_drafts, sample_actual_picks):
        evaluated = service.list_evaluated(SPORT, YEAR, sort_by="date")

        assert [e.draft.id for e in evaluated] == ["mock-jeremiah", "mock-kiper-v2", "mock-kiper-v1"]

    def test_before_any_result(self, service, sample_mock_drafts):
        evaluated = service.list_evaluated(SPORT, YEAR)

        assert len(evaluated) == 3
        assert all(e.accuracy.has_results is False for e in evaluated)
        assert all(e.accuracy.grade is None for e in evaluated)

    def test_sport_is_case_insensitive(self, service, sample_mock_drafts):
        assert len(service.list_evaluated("nfl", YEAR)) == 3

    def test_unknown_sport(self, service):
        with pytest.raises(UnknownSportError):
            service.list_evaluated("XFL", YEAR)

    def test_other_year_is_empty(self, service, sample_mock_drafts):
        assert service.list_evaluated(SPORT, YEAR + 1) == []


class TestGetBySlug:
    """Test suite for expert slug lookups."""

    def test_latest_version_wins(self, service, sample_mock_drafts, sample_actual_picks):
        evaluated = service.get_by_slug(SPORT, YEAR, "mel-kiper-jr")

        assert evaluated.draft.id == "mock-kiper-v2"
        assert evaluated.slug == "mel-kiper-jr"
        assert evaluated.accuracy.percentage == 70

    def test_slug_is_case_insensitive(self, service, sample_mock_drafts):
        assert service.get_by_slug(SPORT, YEAR, "Daniel-Jeremiah").draft.id == "mock-jeremiah"

    def test_unknown_slug(self, service, sample_mock_drafts):
        with pytest.raises(MockDraftNotFoundError):
            service.get_by_slug(SPORT, YEAR, "todd-mcshay")

    def test_get_by_id(self, service, sample_mock_drafts, sample_actual_picks):
        evaluated = service.get_by_id("mock-kiper-v1")

        assert evaluated.accuracy.percentage == 20
        assert evaluated.accuracy.grade.label == "Decent"

        with pytest.raises(MockDraftNotFoundError):
            service.get_by_id("missing")


class TestImportRows:
    """Test suite for mock draft imports."""

    def test_resolves_names(self, importer, sample_players, db_session):
        rows = [
            ImportRow(1, "Cam Ward"),
            ImportRow(2, "T. Hunter"),
            ImportRow(3, "Abdul Cartr"),
            ImportRow(4, "Marvin Harrison"),
            ImportRow(5, "Nobody Known"),
        ]

        result = importer.import_rows("Todd McShay", "v1", "nfl", YEAR, rows)

        assert result.created is True
        assert result.count == 4
        assert result.match_methods == {"exact": 2, "last_name": 1, "fuzzy": 1}
        assert result.missing_players == [ImportRow(5, "Nobody Known")]

        stored = db_session.get(MockDraft, result.mock_draft_id)
        assert stored.sport_type == "NFL"
        assert [p["playerId"] for p in stored.picks] == ["p1", "p2", "p3", "p6"]

    def test_placeholders_when_nothing_matches(self, importer, sample_players, db_session):
        result = importer.import_rows(
            "Todd McShay", "v1", SPORT, YEAR, [ImportRow(1, "Zzz Qqq"), ImportRow(2, "Xxx Www")]
        )

        assert result.count == 2
        assert len(result.missing_players) == 2
        stored = db_session.get(MockDraft, result.mock_draft_id)
        assert [p["playerId"] for p in stored.picks] == ["placeholder_1", "placeholder_2"]

    def test_skips_unusable_rows_and_keeps_last_duplicate(self, importer, sample_players):
        rows = [
            ImportRow(0, "Cam Ward"),
            ImportRow(2, "   "),
            ImportRow(1, "Travis Hunter"),
            ImportRow(1, "Cam Ward"),
        ]

        result = importer.import_rows("Todd McShay", "v1", SPORT, YEAR, rows)

        assert result.count == 1
        assert result.match_methods == {"exact": 1}

    def test_no_usable_rows(self, importer, sample_players):
        with pytest.raises(MalformedMockDraftError):
            importer.import_rows("Todd McShay", "v1", SPORT, YEAR, [ImportRow(0, "Cam Ward"), ImportRow(1, "")])

    def test_reimport_updates_existing_draft(self, importer, sample_players, db_session):
        first = importer.import_rows("Todd McShay", "v1", SPORT, YEAR, [ImportRow(1, "Cam Ward")])
        second = importer.import_rows("Todd McShay", "v1", SPORT, YEAR, [ImportRow(1, "Abdul Carter")])

        assert first.created is True
        assert second.created is False
        assert second.mock_draft_id == first.mock_draft_id
        assert db_session.query(MockDraft).count() == 1
        assert db_session.get(MockDraft, first.mock_draft_id).picks == [{"position": 1, "playerId": "p3"}]

    def test_new_version_is_a_new_draft(self, importer, sample_players, db_session):
        importer.import_rows("Todd McShay", "v1", SPORT, YEAR, [ImportRow(1, "Cam Ward")])
        result = importer.import_rows("Todd McShay", "v2", SPORT, YEAR, [ImportRow(1, "Cam Ward")])

        assert result.created is True
        assert db_session.query(MockDraft).count() == 2

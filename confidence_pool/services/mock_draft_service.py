"""
Mock Draft Service

Lists the mock drafts of a (sport, year) draft with their accuracy
against the announced picks, and looks up a single expert's draft by
the slug of their name.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from confidence_pool.core.exceptions import MockDraftNotFoundError
from confidence_pool.core.metrics import mock_drafts_evaluated_total
from confidence_pool.models import MockDraft, parse_sport_type
from confidence_pool.repositories import DraftResultRepository, MockDraftRepository
from confidence_pool.services.scoring.mock_draft_evaluator import evaluate_mock_draft, rank_mock_drafts
from confidence_pool.services.scoring.types import EvaluatedMockDraft
from confidence_pool.services.snapshots import mock_draft_snapshot
from confidence_pool.utils.name_normalizer import slugify

logger = logging.getLogger(__name__)


class MockDraftService:
    """Service for evaluated mock drafts."""

    def __init__(self, db: Session):
        self.db = db
        self.mock_drafts = MockDraftRepository(db)
        self.results = DraftResultRepository(db)

    def list_evaluated(self, sport_type: str, draft_year: int, sort_by: str = "accuracy") -> List[EvaluatedMockDraft]:
        """
        Every mock draft of a draft, evaluated and ordered.

        Raises:
            UnknownSportError: If the sport is not supported
            ValueError: If sort_by is not "accuracy" or "date"
            EntityStoreError: If drafts or results could not be loaded
        """
        sport_type = parse_sport_type(sport_type)
        drafts = self.mock_drafts.find_by_draft(sport_type, draft_year)
        actual = self.results.get_actual_map(sport_type, draft_year)

        evaluated = [self._evaluate(draft, actual) for draft in drafts]
        mock_drafts_evaluated_total.labels(sport=sport_type).inc(len(evaluated))
        logger.debug(f"Evaluated {len(evaluated)} mock drafts for {draft_year} {sport_type}")
        return rank_mock_drafts(evaluated, sort_by=sort_by)

    def get_by_slug(self, sport_type: str, draft_year: int, expert_slug: str) -> EvaluatedMockDraft:
        """
        The mock draft of the expert whose name slugifies to ``expert_slug``.

        When an expert has several versions, the most recently updated
        one is returned.

        Raises:
            MockDraftNotFoundError: If no draft matches
        """
        sport_type = parse_sport_type(sport_type)
        slug = expert_slug.lower()
        matches = [
            draft for draft in self.mock_drafts.find_by_draft(sport_type, draft_year)
            if slugify(draft.sportscaster) == slug
        ]
        if not matches:
            raise MockDraftNotFoundError(f"{draft_year} {sport_type} {expert_slug}")

        latest = max(matches, key=lambda d: d.updated_at or d.created_at)
        actual = self.results.get_actual_map(sport_type, draft_year)
        mock_drafts_evaluated_total.labels(sport=sport_type).inc()
        return self._evaluate(latest, actual)

    def get_by_id(self, mock_draft_id: str) -> EvaluatedMockDraft:
        """
        Raises:
            MockDraftNotFoundError: If no draft has this id
        """
        draft = self.mock_drafts.find_by_id(mock_draft_id)
        if draft is None:
            raise MockDraftNotFoundError(mock_draft_id)
        actual = self.results.get_actual_map(draft.sport_type, draft.draft_year)
        mock_drafts_evaluated_total.labels(sport=draft.sport_type).inc()
        return self._evaluate(draft, actual)

    @staticmethod
    def _evaluate(draft: MockDraft, actual) -> EvaluatedMockDraft:
        snapshot = mock_draft_snapshot(draft)
        return EvaluatedMockDraft(
            draft=snapshot,
            slug=slugify(snapshot.sportscaster),
            accuracy=evaluate_mock_draft(snapshot.picks, actual),
        )


def get_mock_draft_service(db: Session) -> MockDraftService:
    """Get a MockDraftService instance."""
    return MockDraftService(db)

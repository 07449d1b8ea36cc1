"""
Mock Draft Import Service

Stores a mock draft from already-parsed rows of ``(position, player_name)``.
Names are resolved to prospect ids with ``NameIndex``; unresolved names
are reported back rather than failing the import.

If not a single name resolves, the draft is still stored with
``placeholder_{position}`` ids so the expert shows up in listings; those
picks can never be correct.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from sqlalchemy.orm import Session

from confidence_pool.core.config import settings
from confidence_pool.core.exceptions import MalformedMockDraftError
from confidence_pool.core.logging import log_context
from confidence_pool.models import parse_sport_type
from confidence_pool.repositories import MockDraftRepository, PlayerRepository
from confidence_pool.utils.name_normalizer import NameIndex

logger = logging.getLogger(__name__)


@dataclass
class ImportRow:
    """One parsed mock draft line."""
    position: int
    player_name: str


@dataclass
class ImportResult:
    """Outcome of a mock draft import."""
    created: bool
    mock_draft_id: str
    count: int
    missing_players: List[ImportRow] = field(default_factory=list)
    match_methods: Dict[str, int] = field(default_factory=dict)


def placeholder_player_id(position: int) -> str:
    return f"placeholder_{position}"


class MockDraftImportService:
    """Service for importing parsed mock drafts."""

    def __init__(self, db: Session):
        self.db = db
        self.mock_drafts = MockDraftRepository(db)
        self.players = PlayerRepository(db)

    def import_rows(
        self,
        sportscaster: str,
        version: str,
        sport_type: str,
        draft_year: int,
        rows: Sequence[ImportRow]
    ) -> ImportResult:
        """
        Create or replace a sportscaster's mock draft.

        Rows with a position below 1 or an empty name are skipped. A later
        row for an already-seen position replaces the earlier one.

        Raises:
            UnknownSportError: If the sport is not supported
            MalformedMockDraftError: If no usable row was given
            EntityStoreError: If prospects could not be read or the draft not stored
        """
        sport_type = parse_sport_type(sport_type)
        with log_context(sportscaster=sportscaster, sport_type=sport_type, draft_year=draft_year):
            return self._import(sportscaster, version, sport_type, draft_year, rows)

    def _import(self, sportscaster, version, sport_type, draft_year, rows) -> ImportResult:
        usable = self._usable_rows(rows)
        if not usable:
            raise MalformedMockDraftError("No valid picks found in the mock draft")

        prospects = self.players.find_by_draft(sport_type, draft_year)
        index = NameIndex([(p.id, p.name) for p in prospects], threshold=settings.NAME_MATCH_THRESHOLD)
        logger.info(
            f"Importing {len(usable)} picks from {sportscaster} ({version}) "
            f"against {len(index)} {draft_year} {sport_type} prospects"
        )

        picks: List[Dict[str, Any]] = []
        missing: List[ImportRow] = []
        methods: Dict[str, int] = {}
        for row in usable:
            player_id, method = index.resolve(row.player_name)
            if player_id is None:
                logger.debug(f"No prospect matches '{row.player_name}' at position {row.position}")
                missing.append(row)
                continue
            methods[method] = methods.get(method, 0) + 1
            picks.append({"position": row.position, "playerId": player_id})

        if not picks:
            logger.warning(
                f"No prospect names matched for {sportscaster} ({version}); storing placeholder ids"
            )
            picks = [{"position": row.position, "playerId": placeholder_player_id(row.position)} for row in missing]

        draft, created = self.mock_drafts.upsert(sportscaster, version, sport_type, draft_year, picks)
        self.mock_drafts.commit()

        logger.info(
            f"{'Created' if created else 'Updated'} mock draft {draft.id}: "
            f"{len(picks)} picks, {len(missing)} unmatched"
        )
        return ImportResult(
            created=created,
            mock_draft_id=draft.id,
            count=len(picks),
            missing_players=missing,
            match_methods=methods,
        )

    @staticmethod
    def _usable_rows(rows: Sequence[ImportRow]) -> List[ImportRow]:
        by_position: Dict[int, ImportRow] = {}
        for row in rows:
            name = (row.player_name or "").strip()
            if row.position < 1 or not name:
                logger.debug(f"Skipping mock draft row {row!r}")
                continue
            by_position[row.position] = ImportRow(position=row.position, player_name=name)
        return [by_position[p] for p in sorted(by_position)]


def get_mock_draft_import_service(db: Session) -> MockDraftImportService:
    """Get a MockDraftImportService instance."""
    return MockDraftImportService(db)

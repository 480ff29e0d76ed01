"""
Data access for the scoring engine.
Only read/write operations; scoring rules live in goalcrush.scoring.
"""

import logging
from typing import Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, selectinload

from .db_models import (
    FantasyMatchPerformance,
    FantasyPlayerSelection,
    FantasySeason,
    FantasyTeam,
    Match,
)
from .models import PointBreakdown

logger = logging.getLogger('goalcrush.repository')

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    'postgresql': postgresql_insert,
    'sqlite': sqlite_insert,
}


class ScoringRepository:
    """Queries against the league and fantasy tables within one session."""

    def __init__(self, session: Session):
        self.session = session

    # ---------- matches ----------

    def get_match(self, match_id: int) -> Optional[Match]:
        """Match with both teams and all player stats rows, or None."""
        stmt = (
            select(Match)
            .where(Match.match_id == match_id)
            .options(
                selectinload(Match.home_team),
                selectinload(Match.away_team),
                selectinload(Match.player_match_stats),
            )
        )
        return self.session.scalars(stmt).first()

    def finished_match_ids(self, season_id: int, status: str) -> list[int]:
        stmt = (
            select(Match.match_id)
            .where(Match.season_id == season_id, Match.status == status)
            .order_by(Match.match_id)
        )
        return list(self.session.scalars(stmt))

    # ---------- fantasy seasons & selections ----------

    def active_fantasy_seasons(self, season_id: Optional[int]) -> list[FantasySeason]:
        """
        Active fantasy seasons for a real-world season.

        A match without a season link is scored against every active
        fantasy season.
        """
        stmt = select(FantasySeason).where(FantasySeason.is_active.is_(True))
        if season_id is not None:
            stmt = stmt.where(FantasySeason.season_id == season_id)
        return list(self.session.scalars(stmt.order_by(FantasySeason.fantasy_season_id)))

    def selections_for_player(self, player_id: int, fantasy_season_id: int) -> list[FantasyPlayerSelection]:
        stmt = (
            select(FantasyPlayerSelection)
            .join(FantasyTeam, FantasyPlayerSelection.fantasy_team_id == FantasyTeam.fantasy_team_id)
            .where(
                FantasyPlayerSelection.player_id == player_id,
                FantasyTeam.fantasy_season_id == fantasy_season_id,
            )
            .order_by(FantasyPlayerSelection.selection_id)
        )
        return list(self.session.scalars(stmt))

    # ---------- match performances ----------

    def get_match_performance(self, selection_id: int, match_id: int) -> Optional[FantasyMatchPerformance]:
        stmt = select(FantasyMatchPerformance).where(
            FantasyMatchPerformance.selection_id == selection_id,
            FantasyMatchPerformance.match_id == match_id,
        )
        return self.session.scalars(stmt).first()

    def has_match_performance(self, selection_id: int, match_id: int) -> bool:
        stmt = select(FantasyMatchPerformance.performance_id).where(
            FantasyMatchPerformance.selection_id == selection_id,
            FantasyMatchPerformance.match_id == match_id,
        )
        return self.session.scalar(stmt) is not None

    def upsert_match_performance(
        self,
        selection_id: int,
        match_id: int,
        breakdown: PointBreakdown,
        player_id: Optional[int] = None,
    ) -> bool:
        """
        Write a breakdown keyed by (selection_id, match_id).

        An existing row has all point columns overwritten; otherwise a row is
        inserted. On PostgreSQL and SQLite this is a single
        ``INSERT ... ON CONFLICT DO UPDATE``, so concurrent first-time passes
        over the same match converge instead of hitting the unique key. Other
        dialects read then write and assume a single writer per match.

        Returns:
            True if no row existed when the write started
        """
        values = breakdown.as_dict()
        created = not self.has_match_performance(selection_id, match_id)

        insert = UPSERT_INSERTS.get(self.session.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(FantasyMatchPerformance).values(
                selection_id=selection_id,
                match_id=match_id,
                player_id=player_id,
                **values,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=['selection_id', 'match_id'],
                set_={**values, 'player_id': stmt.excluded.player_id, 'updated_at': func.now()},
            )
            self.session.execute(stmt)
            return created

        row = self.get_match_performance(selection_id, match_id)
        if row is not None:
            for name, value in values.items():
                setattr(row, name, value)
            return False

        self.session.add(
            FantasyMatchPerformance(
                selection_id=selection_id,
                match_id=match_id,
                player_id=player_id,
                **values,
            )
        )
        return True

    # ---------- fantasy teams ----------

    def fantasy_teams_for_season(self, fantasy_season_id: int) -> list[FantasyTeam]:
        """Teams with their selections and each selection's performance rows."""
        stmt = (
            select(FantasyTeam)
            .where(FantasyTeam.fantasy_season_id == fantasy_season_id)
            .options(
                selectinload(FantasyTeam.player_selections).selectinload(
                    FantasyPlayerSelection.match_performances
                )
            )
            .order_by(FantasyTeam.fantasy_team_id)
        )
        return list(self.session.scalars(stmt))

    def get_fantasy_team(self, fantasy_team_id: int) -> Optional[FantasyTeam]:
        return self.session.get(FantasyTeam, fantasy_team_id)

    def ranked_fantasy_teams(self, fantasy_season_id: int, offset: int, limit: int) -> list[FantasyTeam]:
        """Leaderboard order: most points first, earliest created first on ties."""
        stmt = (
            select(FantasyTeam)
            .where(FantasyTeam.fantasy_season_id == fantasy_season_id)
            .order_by(
                FantasyTeam.total_points.desc(),
                FantasyTeam.created_at.asc(),
                FantasyTeam.fantasy_team_id.asc(),
            )
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def count_fantasy_teams(self, fantasy_season_id: int) -> int:
        stmt = select(func.count(FantasyTeam.fantasy_team_id)).where(
            FantasyTeam.fantasy_season_id == fantasy_season_id
        )
        return self.session.scalar(stmt) or 0

    def count_teams_ranked_above(self, team: FantasyTeam) -> int:
        stmt = select(func.count(FantasyTeam.fantasy_team_id)).where(
            FantasyTeam.fantasy_season_id == team.fantasy_season_id,
            or_(
                FantasyTeam.total_points > team.total_points,
                and_(
                    FantasyTeam.total_points == team.total_points,
                    or_(
                        FantasyTeam.created_at < team.created_at,
                        and_(
                            FantasyTeam.created_at == team.created_at,
                            FantasyTeam.fantasy_team_id < team.fantasy_team_id,
                        ),
                    ),
                ),
            ),
        )
        return self.session.scalar(stmt) or 0

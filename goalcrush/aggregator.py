"""Recompute fantasy team and selection totals from stored match performances."""

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from .repository import ScoringRepository

logger = logging.getLogger('goalcrush.aggregator')


def recompute_team_totals(session: Session, fantasy_season_ids: Iterable[int]) -> int:
    """
    Rebuild point totals for every team in the given fantasy seasons.

    Each selection's ``points_earned`` becomes the sum of its match
    performance totals and each team's ``total_points`` the sum of its
    selections. Totals are always rebuilt from scratch, never incremented,
    so repeated calls converge on the same values.

    Args:
        session: Open session; the caller owns the transaction
        fantasy_season_ids: Fantasy seasons to recompute

    Returns:
        Number of fantasy teams recomputed
    """
    repo = ScoringRepository(session)
    teams_updated = 0

    for fantasy_season_id in dict.fromkeys(fantasy_season_ids):
        teams = repo.fantasy_teams_for_season(fantasy_season_id)

        for team in teams:
            team_total = 0
            for selection in team.player_selections:
                selection_points = sum(perf.total_points for perf in selection.match_performances)
                selection.points_earned = selection_points
                team_total += selection_points
            team.total_points = team_total
            teams_updated += 1

        logger.debug(f'Fantasy season {fantasy_season_id}: recomputed {len(teams)} team totals')

    session.flush()
    return teams_updated

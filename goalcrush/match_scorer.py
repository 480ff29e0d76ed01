"""Score a finished match for every fantasy team that selected its players."""

import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from .aggregator import recompute_team_totals
from .db import session_scope
from .errors import IncompleteMatchError, NotFoundError
from .models import MatchScoringResult, PlayerMatchPerformance, PointBreakdown
from .repository import ScoringRepository
from .rules import get_rules
from .schemas import FantasyRules
from .scoring import build_team_match_data, calculate_points, infer_starter

logger = logging.getLogger('goalcrush.match_scorer')


class MatchScorer:
    """
    Scores matches into fantasy match performance rows.

    One ``score_match`` call is one transaction: either every selection's
    row for the match is written or none is. Team totals are recomputed in a
    second transaction after the rows are committed.
    """

    def __init__(self, session_factory: sessionmaker, rules: Optional[FantasyRules] = None):
        """
        Args:
            session_factory: Factory for sessions against the league database
            rules: Ruleset to score with (default: configured version)
        """
        self.session_factory = session_factory
        self.rules = rules or get_rules()

    def score_match(self, match_id: int) -> MatchScoringResult:
        """
        Score one match and refresh the totals of the fantasy seasons it touches.

        Safe to repeat: rows are keyed by (selection, match) and overwritten,
        so rescoring after a stats correction replaces the old values.

        Raises:
            NotFoundError: If the match doesn't exist
            IncompleteMatchError: If the home or away team can't be resolved
        """
        with session_scope(self.session_factory) as session:
            repo = ScoringRepository(session)

            match = repo.get_match(match_id)
            if match is None:
                raise NotFoundError(f'Match {match_id} not found')
            if match.home_team is None or match.away_team is None:
                raise IncompleteMatchError(f'Match {match_id} is missing home or away team data')

            home_data, away_data = build_team_match_data(
                match.home_team.team_id,
                match.away_team.team_id,
                match.home_score,
                match.away_score,
            )

            fantasy_seasons = repo.active_fantasy_seasons(match.season_id)
            fantasy_season_ids = [fs.fantasy_season_id for fs in fantasy_seasons]

            staged: dict[tuple[int, int], tuple[int, PointBreakdown]] = {}

            for stats_row in match.player_match_stats:
                performance = PlayerMatchPerformance.from_stats_row(stats_row, match_id)

                if performance.team_id == home_data.team_id:
                    team_data = home_data
                else:
                    if performance.team_id != away_data.team_id:
                        logger.warning(
                            f'Match {match_id}: player {performance.player_id} has team '
                            f'{performance.team_id}, scoring against the away side'
                        )
                    team_data = away_data

                breakdown = calculate_points(
                    performance,
                    team_data,
                    is_starter=infer_starter(performance.minutes_played),
                    rules=self.rules,
                )

                for fantasy_season_id in fantasy_season_ids:
                    for selection in repo.selections_for_player(performance.player_id, fantasy_season_id):
                        staged[(selection.selection_id, match_id)] = (performance.player_id, breakdown)

            created = 0
            for (selection_id, _), (player_id, breakdown) in staged.items():
                if repo.upsert_match_performance(selection_id, match_id, breakdown, player_id=player_id):
                    created += 1

            logger.debug(f'Match {match_id}: {created} new, {len(staged) - created} updated performances')

        if fantasy_season_ids:
            with session_scope(self.session_factory) as session:
                recompute_team_totals(session, fantasy_season_ids)

        logger.info(
            f'Scored match {match_id}: {len(staged)} performances across '
            f'{len(fantasy_season_ids)} fantasy seasons'
        )

        return MatchScoringResult(
            match_id=match_id,
            performances_processed=len(staged),
            fantasy_season_ids=fantasy_season_ids,
        )

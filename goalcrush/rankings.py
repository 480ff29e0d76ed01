"""Fantasy leaderboard ordering."""

import math
from typing import Any, Optional

from sqlalchemy.orm import Session

from .constants import DEFAULT_RANKING_PAGE_SIZE, MAX_RANKING_PAGE_SIZE
from .models import TeamRanking
from .repository import ScoringRepository


def rank_fantasy_teams(
    session: Session,
    fantasy_season_id: int,
    page: int = 1,
    limit: int = DEFAULT_RANKING_PAGE_SIZE,
) -> tuple[list[TeamRanking], dict[str, Any]]:
    """
    One page of a fantasy season's leaderboard.

    Teams are ordered by total points, highest first; ties go to the team
    created first.

    Returns:
        Tuple of (rankings, pagination) where pagination holds current_page,
        total_pages, total_teams and per_page
    """
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_RANKING_PAGE_SIZE)
    offset = (page - 1) * limit

    repo = ScoringRepository(session)
    teams = repo.ranked_fantasy_teams(fantasy_season_id, offset, limit)
    total_teams = repo.count_fantasy_teams(fantasy_season_id)

    rankings = [
        TeamRanking(
            fantasy_team_id=team.fantasy_team_id,
            team_name=team.team_name,
            total_points=team.total_points,
            rank_position=offset + index + 1,
            created_at=team.created_at,
        )
        for index, team in enumerate(teams)
    ]
    pagination = {
        'current_page': page,
        'total_pages': math.ceil(total_teams / limit),
        'total_teams': total_teams,
        'per_page': limit,
    }
    return rankings, pagination


def get_team_rank(session: Session, fantasy_team_id: int) -> Optional[TeamRanking]:
    """Leaderboard position of a single team, or None if it doesn't exist."""
    repo = ScoringRepository(session)
    team = repo.get_fantasy_team(fantasy_team_id)
    if team is None:
        return None

    return TeamRanking(
        fantasy_team_id=team.fantasy_team_id,
        team_name=team.team_name,
        total_points=team.total_points,
        rank_position=repo.count_teams_ranked_above(team) + 1,
        created_at=team.created_at,
    )

"""Fantasy point calculation for a single player in a single match."""

import logging
from typing import Optional, Tuple

from .constants import (
    DEFENSIVE_POSITIONS,
    MULTIPLE_CONTRIBUTION_THRESHOLD,
    SAVES_PER_UNIT,
    STARTER_MINUTES_THRESHOLD,
)
from .models import PlayerMatchPerformance, PointBreakdown, TeamMatchData
from .rules import get_rules
from .schemas import FantasyRules

logger = logging.getLogger('goalcrush.scoring')


def is_defensive_position(position: Optional[str]) -> bool:
    """True for GK, CB, LB, RB, LWB and RWB in any letter case."""
    if not position:
        return False
    return position.upper() in DEFENSIVE_POSITIONS


def infer_starter(minutes_played: Optional[int]) -> bool:
    """
    Guess whether a player started from minutes played.

    Lineups do not record starters, so 60+ minutes stands in for a start.
    This is an approximation: a substitute on for 60 minutes counts as a
    starter and a starter withdrawn early does not.
    """
    return (minutes_played or 0) >= STARTER_MINUTES_THRESHOLD


def build_team_match_data(
    home_team_id: Optional[int],
    away_team_id: Optional[int],
    home_score: Optional[int],
    away_score: Optional[int],
) -> Tuple[TeamMatchData, TeamMatchData]:
    """
    Derive (home, away) defensive outcomes from the final score.

    A team concedes the opponent's score. A missing score counts as zero,
    which hands the other side a clean sheet; this mirrors how incomplete
    match entry has always been scored.
    """
    if home_score is None or away_score is None:
        logger.warning(
            f'Match between teams {home_team_id} and {away_team_id} has a missing score '
            f'(home={home_score}, away={away_score}); treating it as 0'
        )
    home = TeamMatchData.from_conceded(home_team_id, away_score or 0)
    away = TeamMatchData.from_conceded(away_team_id, home_score or 0)
    return home, away


def calculate_points(
    performance: PlayerMatchPerformance,
    team_data: TeamMatchData,
    is_starter: bool = False,
    rules: Optional[FantasyRules] = None,
) -> PointBreakdown:
    """
    Score one player's match.

    Scoring (values from the ruleset):
        - Appearance: ``played`` for any minutes, plus ``starter_bonus`` for starters
        - Goals: ``goal`` each
        - Assists: ``assist`` each
        - Bonus: flat ``multiple_goal_contribution_bonus`` for 2+ goals and assists
        - Clean sheet: ``clean_sheet`` for defenders and keepers whose team kept one
        - Saves: ``goalkeeper_save_per_2`` per two saves
        - Cards: ``yellow_card`` / ``red_card`` deductions each

    Args:
        performance: Raw match stats for the player
        team_data: Defensive outcome for the player's team
        is_starter: Whether the player started the match
        rules: Ruleset to apply (default: configured version)

    Returns:
        PointBreakdown whose total is the sum of the nine categories
    """
    if rules is None:
        rules = get_rules()
    table = rules.rules

    minutes = performance.minutes_played or 0
    goals = performance.goals or 0
    assists = performance.assists or 0
    saves = performance.saves or 0
    yellow_cards = performance.yellow_cards or 0
    red_cards = performance.red_cards or 0

    appearance_points = 0
    if minutes > 0:
        appearance_points = table.appearance.played
        if is_starter:
            appearance_points += table.appearance.starter_bonus

    goal_points = goals * table.attack.goal if goals > 0 else 0

    bonus_points = 0
    if goals + assists >= MULTIPLE_CONTRIBUTION_THRESHOLD:
        bonus_points += table.attack.multiple_goal_contribution_bonus

    assist_points = assists * table.attack.assist if assists > 0 else 0

    clean_sheet_points = 0
    if team_data.is_clean_sheet and is_defensive_position(performance.position):
        clean_sheet_points = table.defense.clean_sheet

    save_points = 0
    if saves > 0:
        save_points = (saves // SAVES_PER_UNIT) * table.defense.goalkeeper_save_per_2

    # Not yet recorded upstream: blocks/tackles, missed penalties, own goals
    defensive_points = 0
    penalty_points = 0

    card_points = yellow_cards * table.deductions.yellow_card + red_cards * table.deductions.red_card

    total_points = (
        appearance_points
        + goal_points
        + assist_points
        + clean_sheet_points
        + save_points
        + defensive_points
        + penalty_points
        + card_points
        + bonus_points
    )

    return PointBreakdown(
        appearance_points=appearance_points,
        goal_points=goal_points,
        assist_points=assist_points,
        clean_sheet_points=clean_sheet_points,
        save_points=save_points,
        defensive_points=defensive_points,
        penalty_points=penalty_points,
        card_points=card_points,
        bonus_points=bonus_points,
        total_points=total_points,
    )

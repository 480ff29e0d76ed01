"""Consistency checks for point breakdowns and stored fantasy totals."""

from sqlalchemy.orm import Session

from .models import PointBreakdown
from .repository import ScoringRepository


def validate_breakdown(breakdown: PointBreakdown, label: str = 'breakdown') -> list[str]:
    """
    Check that a point breakdown is internally consistent.

    Sanity checks:
    - Total equals the sum of the nine categories
    - Card and penalty points are never positive
    - Reserved categories are still zero
    - Total in a plausible range (-10 to 50)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    component_sum = breakdown.component_sum()
    if component_sum != breakdown.total_points:
        warnings.append(f'{label}: category sum ({component_sum}) != total ({breakdown.total_points})')

    if breakdown.card_points > 0:
        warnings.append(f'{label}: card points are positive ({breakdown.card_points})')
    if breakdown.penalty_points > 0:
        warnings.append(f'{label}: penalty points are positive ({breakdown.penalty_points})')

    if breakdown.defensive_points or breakdown.penalty_points:
        warnings.append(f'{label}: reserved categories are non-zero')

    if breakdown.total_points > 50:
        warnings.append(f'{label}: {breakdown.total_points} pts (unusually high - check match stats)')
    elif breakdown.total_points < -10:
        warnings.append(f'{label}: {breakdown.total_points} pts (unusually low - check match stats)')

    return warnings


def validate_season_totals(session: Session, fantasy_season_id: int) -> list[str]:
    """
    Compare stored totals of a fantasy season against their source rows.

    Returns:
        List of error messages (empty if every selection and team total matches)
    """
    errors = []

    for team in ScoringRepository(session).fantasy_teams_for_season(fantasy_season_id):
        selection_sum = 0
        for selection in team.player_selections:
            expected = sum(perf.total_points for perf in selection.match_performances)
            if selection.points_earned != expected:
                errors.append(
                    f'Selection {selection.selection_id} ({team.team_name}) has '
                    f'{selection.points_earned} points, performances sum to {expected}'
                )
            selection_sum += selection.points_earned

        if team.total_points != selection_sum:
            errors.append(
                f'Team {team.fantasy_team_id} ({team.team_name}) has {team.total_points} points, '
                f'selections sum to {selection_sum}'
            )

    return errors

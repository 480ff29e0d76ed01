from .models import (
    PlayerMatchPerformance,
    TeamMatchData,
    PointBreakdown,
    MatchScoringResult,
    MatchFailure,
    SeasonRecalculationResult,
    TeamRanking,
)
from .errors import ScoringError, NotFoundError, IncompleteMatchError, UnknownRulesetError
from .schemas import FantasyRules
from .rules import FANTASY_RULES_V1, RULESETS, get_rules
from .scoring import (
    calculate_points,
    build_team_match_data,
    infer_starter,
    is_defensive_position,
)
from .db import make_engine, make_session_factory, init_db, session_scope
from .aggregator import recompute_team_totals
from .match_scorer import MatchScorer
from .season import recalculate_season
from .rankings import rank_fantasy_teams, get_team_rank
from .validators import validate_breakdown, validate_season_totals
from .service import handle_scoring_request

__all__ = [
    # Models
    'PlayerMatchPerformance',
    'TeamMatchData',
    'PointBreakdown',
    'MatchScoringResult',
    'MatchFailure',
    'SeasonRecalculationResult',
    'TeamRanking',
    # Errors
    'ScoringError',
    'NotFoundError',
    'IncompleteMatchError',
    'UnknownRulesetError',
    # Rules
    'FantasyRules',
    'FANTASY_RULES_V1',
    'RULESETS',
    'get_rules',
    # Point calculation
    'calculate_points',
    'build_team_match_data',
    'infer_starter',
    'is_defensive_position',
    # Database
    'make_engine',
    'make_session_factory',
    'init_db',
    'session_scope',
    # Scoring pipeline
    'recompute_team_totals',
    'MatchScorer',
    'recalculate_season',
    # Leaderboards & checks
    'rank_fantasy_teams',
    'get_team_rank',
    'validate_breakdown',
    'validate_season_totals',
    'handle_scoring_request',
]

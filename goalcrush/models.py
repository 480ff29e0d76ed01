"""Data models for the fantasy scoring engine."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, List, Optional


@dataclass
class PlayerMatchPerformance:
    """One player's raw statistics for one match."""
    player_id: int
    match_id: int
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    minutes_played: int = 0
    saves: int = 0
    position: Optional[str] = None
    team_id: Optional[int] = None

    @classmethod
    def from_stats_row(cls, row: Any, match_id: int) -> 'PlayerMatchPerformance':
        """Build from a player_match_stats row, treating missing counts as zero."""
        return cls(
            player_id=row.player_id or 0,
            match_id=match_id,
            goals=row.goals or 0,
            assists=row.assists or 0,
            yellow_cards=row.yellow_cards or 0,
            red_cards=row.red_cards or 0,
            minutes_played=row.minutes_played or 0,
            saves=row.saves or 0,
            position=row.position,
            team_id=row.team_id,
        )


@dataclass
class TeamMatchData:
    """A team's defensive outcome in one match."""
    team_id: Optional[int]
    goals_conceded: int
    is_clean_sheet: bool

    @classmethod
    def from_conceded(cls, team_id: Optional[int], goals_conceded: int) -> 'TeamMatchData':
        return cls(team_id=team_id, goals_conceded=goals_conceded, is_clean_sheet=goals_conceded == 0)


@dataclass(frozen=True)
class PointBreakdown:
    """
    Fantasy points for one player in one match, split by category.

    ``defensive_points`` and ``penalty_points`` are reserved: upstream match
    entry does not yet record blocks, tackles, missed penalties or own goals,
    so both stay zero under the current rules.
    """
    appearance_points: int = 0
    goal_points: int = 0
    assist_points: int = 0
    clean_sheet_points: int = 0
    save_points: int = 0
    defensive_points: int = 0
    penalty_points: int = 0
    card_points: int = 0
    bonus_points: int = 0
    total_points: int = 0

    COMPONENT_FIELDS = (
        'appearance_points',
        'goal_points',
        'assist_points',
        'clean_sheet_points',
        'save_points',
        'defensive_points',
        'penalty_points',
        'card_points',
        'bonus_points',
    )

    def component_sum(self) -> int:
        return sum(getattr(self, name) for name in self.COMPONENT_FIELDS)

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class MatchScoringResult:
    """Outcome of scoring one match."""
    match_id: int
    performances_processed: int = 0
    fantasy_season_ids: List[int] = field(default_factory=list)

    @property
    def fantasy_seasons_touched(self) -> int:
        return len(self.fantasy_season_ids)

    def as_dict(self) -> dict[str, Any]:
        return {
            'match_id': self.match_id,
            'processed_performances': self.performances_processed,
            'fantasy_seasons': self.fantasy_seasons_touched,
            'fantasy_season_ids': list(self.fantasy_season_ids),
        }


@dataclass
class MatchFailure:
    """A match that could not be scored during a season recalculation."""
    match_id: int
    reason: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SeasonRecalculationResult:
    """Outcome of rescoring every finished match of a season."""
    season_id: int
    results: List[MatchScoringResult] = field(default_factory=list)
    failures: List[MatchFailure] = field(default_factory=list)
    skipped_match_ids: List[int] = field(default_factory=list)
    cancelled: bool = False

    @property
    def matches_processed(self) -> int:
        return len(self.results)

    @property
    def failed_match_ids(self) -> List[int]:
        return [f.match_id for f in self.failures]

    def as_dict(self) -> dict[str, Any]:
        return {
            'season_id': self.season_id,
            'processed_matches': self.matches_processed,
            'results': [r.as_dict() for r in self.results],
            'failures': [f.as_dict() for f in self.failures],
            'skipped_match_ids': list(self.skipped_match_ids),
            'cancelled': self.cancelled,
        }


@dataclass
class TeamRanking:
    """A fantasy team's leaderboard position."""
    fantasy_team_id: int
    team_name: str
    total_points: int
    rank_position: int
    created_at: Optional[datetime] = None

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        return data

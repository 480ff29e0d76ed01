"""Pydantic schemas for rulesets, configuration and scoring requests."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from .constants import DEFAULT_RULES_VERSION, MATCH_STATUS_FINISHED


class AppearanceRules(BaseModel):
    """Points for taking the field."""

    played: int
    starter_bonus: int

    class Config:
        extra = 'forbid'
        frozen = True


class AttackRules(BaseModel):
    """Points for goal contributions."""

    goal: int
    assist: int
    multiple_goal_contribution_bonus: int

    class Config:
        extra = 'forbid'
        frozen = True


class DefenseRules(BaseModel):
    """Points for defensive work."""

    clean_sheet: int
    goalkeeper_save_per_2: int
    important_block_or_tackle: int

    class Config:
        extra = 'forbid'
        frozen = True


class DeductionRules(BaseModel):
    """Point deductions. Every value must be zero or negative."""

    yellow_card: int = Field(..., le=0)
    red_card: int = Field(..., le=0)
    own_goal: int = Field(..., le=0)
    missed_penalty: int = Field(..., le=0)

    class Config:
        extra = 'forbid'
        frozen = True


class RuleTable(BaseModel):
    """Event category -> sub-rule -> point delta."""

    appearance: AppearanceRules
    attack: AttackRules
    defense: DefenseRules
    deductions: DeductionRules

    class Config:
        extra = 'forbid'
        frozen = True


class FantasyRules(BaseModel):
    """
    Versioned, immutable fantasy scoring ruleset.

    Historical scores stay reproducible because a changed rule means a new
    version, never an edit of an existing one.
    """

    version: str = Field(..., pattern=r'^\d+\.\d+\.\d+$')
    effective_date: date
    rules: RuleTable

    class Config:
        extra = 'forbid'
        frozen = True


class ScoringConfig(BaseModel):
    """Engine configuration loaded from data/scoring_config.json."""

    database_url: str = Field(..., min_length=1)
    rules_version: str = Field(default=DEFAULT_RULES_VERSION, pattern=r'^\d+\.\d+\.\d+$')
    finished_match_status: str = Field(default=MATCH_STATUS_FINISHED, min_length=1)
    log_dir: str = 'logs'

    class Config:
        extra = 'forbid'


class MatchScoringRequest(BaseModel):
    """Request to score a single match."""

    type: Literal['match']
    match_id: int = Field(..., ge=1)

    class Config:
        extra = 'ignore'


class SeasonScoringRequest(BaseModel):
    """Request to recalculate every finished match of a season."""

    type: Literal['season']
    season_id: int = Field(..., ge=1)
    isolate_failures: bool = False

    class Config:
        extra = 'ignore'

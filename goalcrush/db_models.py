"""
SQLAlchemy models for the league and fantasy tables read and written by the
scoring engine.

League data (seasons, teams, players, matches, player_match_stats) is entered
by admin match-entry flows; the engine only reads it. The engine owns the
point columns of the fantasy tables.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .db import Base


class Season(Base):
    __tablename__ = 'seasons'

    season_id = Column(Integer, primary_key=True, autoincrement=True)
    season_name = Column(String, nullable=False)
    year = Column(Integer, nullable=True)

    matches = relationship('Match', back_populates='season')
    fantasy_seasons = relationship('FantasySeason', back_populates='season')


class Team(Base):
    __tablename__ = 'teams'

    team_id = Column(Integer, primary_key=True, autoincrement=True)
    team_name = Column(String, nullable=False)


class Player(Base):
    __tablename__ = 'players'

    player_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)


class Match(Base):
    __tablename__ = 'matches'

    match_id = Column(Integer, primary_key=True, autoincrement=True)
    season_id = Column(Integer, ForeignKey('seasons.season_id'), nullable=True, index=True)
    home_team_id = Column(Integer, ForeignKey('teams.team_id'), nullable=True)
    away_team_id = Column(Integer, ForeignKey('teams.team_id'), nullable=True)
    home_score = Column(Integer, nullable=True)
    away_score = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default='scheduled')
    match_date = Column(Date, nullable=True)

    season = relationship('Season', back_populates='matches')
    home_team = relationship('Team', foreign_keys=[home_team_id])
    away_team = relationship('Team', foreign_keys=[away_team_id])
    player_match_stats = relationship(
        'PlayerMatchStats', back_populates='match', order_by='PlayerMatchStats.stat_id'
    )

    __table_args__ = (Index('ix_matches_season_status', 'season_id', 'status'),)

    def __repr__(self):
        return f'<Match(id={self.match_id}, {self.home_team_id} {self.home_score}-{self.away_score} {self.away_team_id})>'


class PlayerMatchStats(Base):
    """One row per (player, match); counts default to 0 but may be NULL in old rows."""

    __tablename__ = 'player_match_stats'

    stat_id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(Integer, ForeignKey('matches.match_id'), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey('players.player_id'), nullable=True, index=True)
    team_id = Column(Integer, ForeignKey('teams.team_id'), nullable=True)
    goals = Column(Integer, nullable=True, default=0)
    assists = Column(Integer, nullable=True, default=0)
    yellow_cards = Column(Integer, nullable=True, default=0)
    red_cards = Column(Integer, nullable=True, default=0)
    minutes_played = Column(Integer, nullable=True, default=0)
    saves = Column(Integer, nullable=True, default=0)
    position = Column(String, nullable=True)

    match = relationship('Match', back_populates='player_match_stats')


class FantasySeason(Base):
    """A month-long fantasy competition tied to a real-world season."""

    __tablename__ = 'fantasy_seasons'

    fantasy_season_id = Column(Integer, primary_key=True, autoincrement=True)
    season_id = Column(Integer, ForeignKey('seasons.season_id'), nullable=True, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=False)
    lock_date = Column(DateTime, nullable=True)

    season = relationship('Season', back_populates='fantasy_seasons')
    fantasy_teams = relationship('FantasyTeam', back_populates='fantasy_season')

    __table_args__ = (UniqueConstraint('season_id', 'year', 'month', name='uq_fantasy_season_month'),)


class FantasyTeam(Base):
    __tablename__ = 'fantasy_teams'

    fantasy_team_id = Column(Integer, primary_key=True, autoincrement=True)
    fantasy_season_id = Column(
        Integer, ForeignKey('fantasy_seasons.fantasy_season_id'), nullable=False, index=True
    )
    user_id = Column(String, nullable=False)
    team_name = Column(String, nullable=False)
    total_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    fantasy_season = relationship('FantasySeason', back_populates='fantasy_teams')
    player_selections = relationship(
        'FantasyPlayerSelection',
        back_populates='fantasy_team',
        cascade='all, delete-orphan',
        order_by='FantasyPlayerSelection.selection_id',
    )

    __table_args__ = (
        UniqueConstraint('user_id', 'fantasy_season_id', name='uq_fantasy_team_user_season'),
        Index('ix_fantasy_teams_ranking', 'fantasy_season_id', 'total_points', 'created_at'),
    )

    def __repr__(self):
        return f'<FantasyTeam(id={self.fantasy_team_id}, name={self.team_name!r}, points={self.total_points})>'


class FantasyPlayerSelection(Base):
    __tablename__ = 'fantasy_player_selections'

    selection_id = Column(Integer, primary_key=True, autoincrement=True)
    fantasy_team_id = Column(
        Integer, ForeignKey('fantasy_teams.fantasy_team_id', ondelete='CASCADE'), nullable=False, index=True
    )
    player_id = Column(Integer, ForeignKey('players.player_id'), nullable=False, index=True)
    position = Column(String, nullable=False)
    points_earned = Column(Integer, nullable=False, default=0)

    fantasy_team = relationship('FantasyTeam', back_populates='player_selections')
    match_performances = relationship(
        'FantasyMatchPerformance',
        back_populates='selection',
        cascade='all, delete-orphan',
        order_by='FantasyMatchPerformance.match_id',
    )

    __table_args__ = (UniqueConstraint('fantasy_team_id', 'player_id', name='uq_selection_team_player'),)


class FantasyMatchPerformance(Base):
    """Point breakdown for one selection in one match; one row per (selection, match)."""

    __tablename__ = 'fantasy_match_performances'

    performance_id = Column(Integer, primary_key=True, autoincrement=True)
    selection_id = Column(
        Integer,
        ForeignKey('fantasy_player_selections.selection_id', ondelete='CASCADE'),
        nullable=False,
    )
    match_id = Column(Integer, ForeignKey('matches.match_id'), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey('players.player_id'), nullable=True)
    appearance_points = Column(Integer, nullable=False, default=0)
    goal_points = Column(Integer, nullable=False, default=0)
    assist_points = Column(Integer, nullable=False, default=0)
    clean_sheet_points = Column(Integer, nullable=False, default=0)
    save_points = Column(Integer, nullable=False, default=0)
    defensive_points = Column(Integer, nullable=False, default=0)
    penalty_points = Column(Integer, nullable=False, default=0)
    card_points = Column(Integer, nullable=False, default=0)
    bonus_points = Column(Integer, nullable=False, default=0)
    total_points = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    selection = relationship('FantasyPlayerSelection', back_populates='match_performances')

    __table_args__ = (UniqueConstraint('selection_id', 'match_id', name='uq_performance_selection_match'),)

    def __repr__(self):
        return f'<FantasyMatchPerformance(selection={self.selection_id}, match={self.match_id}, total={self.total_points})>'

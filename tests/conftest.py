"""Shared fixtures: an in-memory league database with a scored-match scenario."""

from datetime import datetime

import pytest
from sqlalchemy.pool import StaticPool

from goalcrush.db import init_db, make_engine, make_session_factory, session_scope
from goalcrush.db_models import (
    FantasyPlayerSelection,
    FantasySeason,
    FantasyTeam,
    Match,
    Player,
    PlayerMatchStats,
    Season,
    Team,
)
from goalcrush.match_scorer import MatchScorer
from goalcrush.rules import FANTASY_RULES_V1


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = make_engine('sqlite://', poolclass=StaticPool)
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


def seed_league(session_factory):
    """
    Seed a small league.

    Season 1 has three finished matches (1, 2, 3) and one scheduled match (4).
    Season 2 has a finished match with no away team (10) and a good one (11).

    Fantasy season 1 (active, season 1):
        Team A (created first): players 1 (FW) and 2 (GK)
        Team B: players 1 (FW) and 3 (CB)
    Fantasy season 2 (inactive, season 1):
        Team C: player 1
    Fantasy season 3 (active, season 2):
        Team D: player 2
    """
    with session_scope(session_factory) as session:
        session.add_all([
            Season(season_id=1, season_name='2025 Spring'),
            Season(season_id=2, season_name='2025 Autumn'),
            Team(team_id=1, team_name='FC Seoul Strikers'),
            Team(team_id=2, team_name='Busan Waves'),
            Player(player_id=1, name='Kim Min-jae'),
            Player(player_id=2, name='Jo Hyeon-woo'),
            Player(player_id=3, name='Park Ji-sung'),
            Player(player_id=4, name='Lee Kang-in'),
        ])
        session.flush()

        session.add_all([
            Match(match_id=1, season_id=1, home_team_id=1, away_team_id=2,
                  home_score=2, away_score=0, status='finished'),
            Match(match_id=2, season_id=1, home_team_id=2, away_team_id=1,
                  home_score=1, away_score=1, status='finished'),
            Match(match_id=3, season_id=1, home_team_id=1, away_team_id=2,
                  home_score=0, away_score=0, status='finished'),
            Match(match_id=4, season_id=1, home_team_id=2, away_team_id=1,
                  home_score=None, away_score=None, status='scheduled'),
            Match(match_id=10, season_id=2, home_team_id=1, away_team_id=None,
                  home_score=1, away_score=0, status='finished'),
            Match(match_id=11, season_id=2, home_team_id=2, away_team_id=1,
                  home_score=1, away_score=0, status='finished'),
        ])
        session.flush()

        session.add_all([
            # Match 1: home side keeps a clean sheet
            PlayerMatchStats(match_id=1, player_id=1, team_id=1, goals=2, assists=1,
                             yellow_cards=1, minutes_played=70, position='FW'),
            PlayerMatchStats(match_id=1, player_id=2, team_id=1, saves=5,
                             minutes_played=90, position='GK'),
            PlayerMatchStats(match_id=1, player_id=3, team_id=2, red_cards=1,
                             minutes_played=30, position='CB'),
            PlayerMatchStats(match_id=1, player_id=4, team_id=1, minutes_played=90,
                             position=None),
            # Match 2: one goal for player 1, legacy NULL counts elsewhere
            PlayerMatchStats(match_id=2, player_id=1, team_id=1, goals=1,
                             minutes_played=90, position='FW'),
            PlayerMatchStats(match_id=2, player_id=3, team_id=2, goals=None, assists=None,
                             yellow_cards=None, red_cards=None, minutes_played=None,
                             saves=None, position='CB'),
        ])

        session.add_all([
            FantasySeason(fantasy_season_id=1, season_id=1, year=2025, month=4, is_active=True),
            FantasySeason(fantasy_season_id=2, season_id=1, year=2025, month=5, is_active=False),
            FantasySeason(fantasy_season_id=3, season_id=2, year=2025, month=9, is_active=True),
        ])
        session.flush()

        session.add_all([
            FantasyTeam(fantasy_team_id=1, fantasy_season_id=1, user_id='user-a',
                        team_name='Team A', created_at=datetime(2025, 4, 1, 9, 0)),
            FantasyTeam(fantasy_team_id=2, fantasy_season_id=1, user_id='user-b',
                        team_name='Team B', created_at=datetime(2025, 4, 1, 10, 0)),
            FantasyTeam(fantasy_team_id=3, fantasy_season_id=2, user_id='user-c',
                        team_name='Team C', created_at=datetime(2025, 5, 1, 9, 0)),
            FantasyTeam(fantasy_team_id=4, fantasy_season_id=3, user_id='user-d',
                        team_name='Team D', created_at=datetime(2025, 9, 1, 9, 0)),
        ])
        session.flush()

        session.add_all([
            FantasyPlayerSelection(selection_id=1, fantasy_team_id=1, player_id=1, position='FW'),
            FantasyPlayerSelection(selection_id=2, fantasy_team_id=1, player_id=2, position='GK'),
            FantasyPlayerSelection(selection_id=3, fantasy_team_id=2, player_id=1, position='FW'),
            FantasyPlayerSelection(selection_id=4, fantasy_team_id=2, player_id=3, position='DF'),
            FantasyPlayerSelection(selection_id=5, fantasy_team_id=3, player_id=1, position='FW'),
            FantasyPlayerSelection(selection_id=6, fantasy_team_id=4, player_id=2, position='GK'),
        ])


@pytest.fixture
def league(session_factory):
    """The seeded league's session factory."""
    seed_league(session_factory)
    return session_factory


@pytest.fixture
def scorer(league):
    """MatchScorer over the seeded league using the 1.0.0 ruleset."""
    return MatchScorer(league, rules=FANTASY_RULES_V1)


@pytest.fixture
def league_db_url(tmp_path):
    """URL of a seeded SQLite file, for code that builds its own engine."""
    url = f'sqlite:///{tmp_path / "league.db"}'
    engine = make_engine(url)
    init_db(engine)
    seed_league(make_session_factory(engine))
    engine.dispose()
    return url

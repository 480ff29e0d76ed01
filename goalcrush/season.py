"""Rescore every finished match of a real-world season."""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from .config import get_finished_match_status
from .db import session_scope
from .errors import ScoringError
from .match_scorer import MatchScorer
from .models import MatchFailure, SeasonRecalculationResult
from .repository import ScoringRepository

logger = logging.getLogger('goalcrush.season')


def recalculate_season(
    scorer: MatchScorer,
    season_id: int,
    isolate_failures: bool = False,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SeasonRecalculationResult:
    """
    Score each finished match of a season in turn, in match id order.

    By default the first failing match aborts the run and its error
    propagates. With ``isolate_failures`` the failure is recorded and the
    remaining matches are still scored.

    Args:
        scorer: MatchScorer used for every match
        season_id: Real-world season to recalculate
        isolate_failures: Record per-match failures instead of raising
        should_stop: Checked before each match; returning True cancels the
            run and reports the unscored matches as skipped

    Returns:
        SeasonRecalculationResult with one result per scored match
    """
    with session_scope(scorer.session_factory) as session:
        match_ids = ScoringRepository(session).finished_match_ids(season_id, get_finished_match_status())

    logger.info(f'Recalculating season {season_id}: {len(match_ids)} finished matches')
    result = SeasonRecalculationResult(season_id=season_id)

    for index, match_id in enumerate(match_ids):
        if should_stop is not None and should_stop():
            result.cancelled = True
            result.skipped_match_ids = match_ids[index:]
            logger.warning(
                f'Season {season_id} recalculation cancelled before match {match_id}; '
                f'{len(result.skipped_match_ids)} matches not scored'
            )
            break

        try:
            result.results.append(scorer.score_match(match_id))
        except (ScoringError, SQLAlchemyError) as e:
            if not isolate_failures:
                logger.error(f'Season {season_id} recalculation aborted at match {match_id}: {e}')
                raise
            logger.error(f'Match {match_id} failed, continuing: {e}')
            result.failures.append(MatchFailure(match_id=match_id, reason=str(e)))

    logger.info(
        f'Season {season_id} recalculated: {result.matches_processed} matches scored, '
        f'{len(result.failures)} failed'
    )
    return result

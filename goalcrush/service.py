"""Request handling for the two scoring operations exposed to admin tools."""

import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from .errors import ScoringError
from .match_scorer import MatchScorer
from .schemas import MatchScoringRequest, SeasonScoringRequest
from .season import recalculate_season

logger = logging.getLogger('goalcrush.service')

REQUEST_SCHEMAS = {
    'match': MatchScoringRequest,
    'season': SeasonScoringRequest,
}


def _validation_details(error: ValidationError) -> list[dict[str, Any]]:
    return [
        {'loc': list(item['loc']), 'msg': item['msg'], 'type': item['type']}
        for item in error.errors()
    ]


def handle_scoring_request(payload: Any, scorer: MatchScorer) -> tuple[int, dict[str, Any]]:
    """
    Run a scoring request and build the response.

    Payloads:
        {"type": "match", "match_id": 12}
        {"type": "season", "season_id": 3, "isolate_failures": false}

    Returns:
        Tuple of (HTTP status code, JSON-serializable body)
    """
    if not isinstance(payload, dict):
        return 400, {'error': 'Request body must be a JSON object'}

    request_type = payload.get('type')
    schema = REQUEST_SCHEMAS.get(request_type)
    if schema is None:
        return 400, {'error': 'Invalid type. Specify "match" or "season".'}

    try:
        request = schema.model_validate(payload)
    except ValidationError as e:
        return 400, {'error': 'Invalid input', 'details': _validation_details(e)}

    try:
        if isinstance(request, MatchScoringRequest):
            result = scorer.score_match(request.match_id)
            return 200, {'message': 'Match fantasy scoring complete', 'result': result.as_dict()}

        season_result = recalculate_season(
            scorer, request.season_id, isolate_failures=request.isolate_failures
        )
        return 200, {
            'message': 'Season fantasy scoring recalculated',
            'result': season_result.as_dict(),
        }
    except ScoringError as e:
        logger.error(f'Scoring request {payload} failed: {e}')
        return e.status_code, {'error': str(e)}
    except SQLAlchemyError as e:
        logger.exception(f'Database error while scoring {payload}: {e}')
        return 500, {'error': 'An error occurred while calculating scores'}
    except Exception as e:
        logger.exception(f'Unexpected error while scoring {payload}: {e}')
        return 500, {'error': 'An error occurred while calculating scores'}

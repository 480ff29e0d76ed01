"""
Goal Crush fantasy scoring CLI

Scores a single finished match, or rescores every finished match of a
season, and refreshes fantasy team totals.

Usage:
    goalcrush-score --match 42
    goalcrush-score --season 3 --isolate-failures --output results/season_3.json
    goalcrush-score --season 3 --validate
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import get_database_url, get_log_dir
from .db import init_db, make_engine, make_session_factory, session_scope
from .errors import ScoringError
from .logging_config import setup_logging
from .match_scorer import MatchScorer
from .rules import get_rules
from .season import recalculate_season
from .utils import save_json
from .validators import validate_season_totals


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Goal Crush fantasy scoring engine')
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        '--match', '-m',
        type=int,
        help='Match id to score',
    )
    target.add_argument(
        '--season', '-s',
        type=int,
        help='Real-world season id to rescore (finished matches only)',
    )
    parser.add_argument(
        '--database-url',
        default=None,
        help='SQLAlchemy database URL (defaults to DATABASE_URL or data/scoring_config.json)',
    )
    parser.add_argument(
        '--rules-version',
        default=None,
        help='Ruleset version to score with (defaults to the configured version)',
    )
    parser.add_argument(
        '--isolate-failures',
        action='store_true',
        help='Keep rescoring a season when one match fails, and report the failures',
    )
    parser.add_argument(
        '--validate',
        action='store_true',
        help='Check stored fantasy totals after scoring',
    )
    parser.add_argument(
        '--init-db',
        action='store_true',
        help='Create missing tables before scoring',
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Write the scoring result as JSON to this path',
    )
    parser.add_argument(
        '--log-dir',
        default=None,
        help='Directory for log files (defaults to the configured log_dir)',
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log warnings and errors to the console',
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log_dir = Path(args.log_dir) if args.log_dir else get_log_dir()
    run_name = f'match_{args.match}' if args.match is not None else f'season_{args.season}'
    logger = setup_logging(
        log_dir=log_dir,
        run_name=run_name,
        console_level=logging.WARNING if args.quiet else logging.INFO,
    )

    engine = make_engine(args.database_url or get_database_url())
    if args.init_db:
        init_db(engine)
    session_factory = make_session_factory(engine)

    try:
        scorer = MatchScorer(session_factory, rules=get_rules(args.rules_version))
        logger.info(f'Scoring with ruleset {scorer.rules.version}')

        if args.match is not None:
            result = scorer.score_match(args.match)
            print(
                f'Match {result.match_id}: {result.performances_processed} performances, '
                f'{result.fantasy_seasons_touched} fantasy seasons'
            )
            fantasy_season_ids = result.fantasy_season_ids
        else:
            result = recalculate_season(scorer, args.season, isolate_failures=args.isolate_failures)
            print(f'Season {result.season_id}: {result.matches_processed} matches scored')
            for failure in result.failures:
                print(f'  ✗ match {failure.match_id}: {failure.reason}')
            fantasy_season_ids = sorted(
                {fs_id for r in result.results for fs_id in r.fantasy_season_ids}
            )
    except ScoringError as e:
        logger.error(str(e))
        return 1

    if args.output:
        save_json(args.output, result.as_dict())
        print(f'Result saved to {args.output}')

    exit_code = 0
    if args.validate:
        with session_scope(session_factory) as session:
            for fantasy_season_id in fantasy_season_ids:
                errors = validate_season_totals(session, fantasy_season_id)
                for error in errors:
                    logger.error(error)
                if errors:
                    exit_code = 1
        if exit_code == 0:
            print('Stored totals are consistent')

    if args.season is not None and result.failures:
        exit_code = 1

    return exit_code


if __name__ == '__main__':
    sys.exit(main())

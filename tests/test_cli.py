"""Tests for the goalcrush-score command."""

import json
import logging
from datetime import datetime

import pytest

from goalcrush.cli import build_parser, main
from goalcrush.logging_config import log_file_name


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger('goalcrush')
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(logging.NOTSET)


class TestParser:
    """Tests for argument parsing."""

    def test_match_or_season_required(self):
        """Test one target must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_match_and_season_exclusive(self):
        """Test match and season can't both be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--match', '1', '--season', '1'])

    def test_defaults(self):
        args = build_parser().parse_args(['-m', '5'])
        assert args.match == 5
        assert args.season is None
        assert not args.isolate_failures
        assert args.rules_version is None


class TestMain:
    """Tests for running the command against a league database."""

    def test_score_match(self, league_db_url, tmp_path, capsys):
        """Test scoring one match and writing the result."""
        output = tmp_path / 'match_1.json'
        code = main([
            '--match', '1', '--database-url', league_db_url,
            '--output', str(output), '--validate', '--log-dir', str(tmp_path / 'logs'),
        ])

        assert code == 0
        assert json.loads(output.read_text()) == {
            'match_id': 1,
            'processed_performances': 4,
            'fantasy_seasons': 1,
            'fantasy_season_ids': [1],
        }
        assert 'Stored totals are consistent' in capsys.readouterr().out

    def test_season_with_isolated_failures(self, league_db_url, tmp_path, capsys):
        """Test failed matches are printed and make the exit code non-zero."""
        code = main([
            '--season', '2', '--isolate-failures', '--database-url', league_db_url,
            '--log-dir', str(tmp_path / 'logs'), '--quiet',
        ])

        assert code == 1
        out = capsys.readouterr().out
        assert 'Season 2: 1 matches scored' in out
        assert 'match 10' in out

    def test_unknown_match(self, league_db_url, tmp_path):
        """Test a scoring error gives exit code 1."""
        code = main(['--match', '999', '--database-url', league_db_url, '--log-dir', str(tmp_path / 'logs')])
        assert code == 1

    def test_init_db_on_empty_database(self, tmp_path):
        """Test --init-db creates the schema so an empty season scores cleanly."""
        url = f'sqlite:///{tmp_path / "empty.db"}'
        code = main(['--season', '1', '--init-db', '--database-url', url, '--log-dir', str(tmp_path / 'logs')])
        assert code == 0

    def test_unknown_rules_version(self, league_db_url, tmp_path, capsys):
        """Test an unregistered ruleset is reported and exits 1 without scoring."""
        code = main([
            '--match', '1', '--rules-version', '9.0.0', '--database-url', league_db_url,
            '--log-dir', str(tmp_path / 'logs'),
        ])

        assert code == 1
        out = capsys.readouterr().out
        assert 'ERROR: No fantasy ruleset registered for version 9.0.0' in out
        assert 'Match 1:' not in out


class TestRunLogs:
    """Tests for per-run log files."""

    def test_log_file_named_after_run(self, league_db_url, tmp_path):
        """Test each run writes its own log file named after what was scored."""
        log_dir = tmp_path / 'logs'
        main(['--match', '1', '--database-url', league_db_url, '--log-dir', str(log_dir)])
        main(['--season', '1', '--database-url', league_db_url, '--log-dir', str(log_dir)])

        names = sorted(path.name for path in log_dir.iterdir())
        assert len(names) == 2
        assert names[0].startswith('scoring_match_1_')
        assert names[1].startswith('scoring_season_1_')

    def test_quiet_keeps_full_log_file(self, league_db_url, tmp_path, capsys):
        """Test --quiet silences info on the console but not in the log file."""
        log_dir = tmp_path / 'logs'
        main(['--match', '1', '--quiet', '--database-url', league_db_url, '--log-dir', str(log_dir)])

        assert 'Scored match 1' not in capsys.readouterr().out
        log_text = next(log_dir.iterdir()).read_text(encoding='utf-8')
        assert 'Scoring with ruleset 1.0.0' in log_text
        assert 'Scored match 1' in log_text

    def test_log_file_name(self):
        started = datetime(2025, 9, 6, 14, 15, 0)
        assert log_file_name('match_42', started) == 'scoring_match_42_20250906_141500.log'
        assert log_file_name(None, started) == 'scoring_20250906_141500.log'

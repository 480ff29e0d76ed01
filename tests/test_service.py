"""Tests for scoring request handling."""

from sqlalchemy.exc import OperationalError

from goalcrush.service import handle_scoring_request


class TestMatchRequests:
    """Tests for {"type": "match"} payloads."""

    def test_success(self, scorer):
        """Test a valid match request returns 200 with the result."""
        status, body = handle_scoring_request({'type': 'match', 'match_id': 1}, scorer)
        assert status == 200
        assert body['message'] == 'Match fantasy scoring complete'
        assert body['result']['processed_performances'] == 4
        assert body['result']['fantasy_seasons'] == 1
        assert body['result']['fantasy_season_ids'] == [1]

    def test_unknown_match(self, scorer):
        """Test an unknown match is a 404."""
        status, body = handle_scoring_request({'type': 'match', 'match_id': 999}, scorer)
        assert status == 404
        assert '999' in body['error']

    def test_incomplete_match(self, scorer):
        """Test a match without both teams is a 400."""
        status, body = handle_scoring_request({'type': 'match', 'match_id': 10}, scorer)
        assert status == 400
        assert 'error' in body

    def test_invalid_match_id(self, scorer):
        """Test non-positive ids fail validation with details."""
        status, body = handle_scoring_request({'type': 'match', 'match_id': 0}, scorer)
        assert status == 400
        assert body['error'] == 'Invalid input'
        assert body['details'][0]['loc'] == ['match_id']

    def test_missing_match_id(self, scorer):
        """Test a match request without an id fails validation."""
        status, body = handle_scoring_request({'type': 'match'}, scorer)
        assert status == 400
        assert body['details'][0]['type'] == 'missing'

    def test_database_error(self, scorer, monkeypatch):
        """Test database failures become a generic 500."""
        def broken(match_id):
            raise OperationalError('SELECT 1', {}, Exception('database is locked'))

        monkeypatch.setattr(scorer, 'score_match', broken)
        status, body = handle_scoring_request({'type': 'match', 'match_id': 1}, scorer)
        assert status == 500
        assert body == {'error': 'An error occurred while calculating scores'}

    def test_unexpected_error(self, scorer, monkeypatch, caplog):
        """Test any other failure is logged and becomes a generic 500."""
        def broken(match_id):
            raise RuntimeError('connection lost')

        monkeypatch.setattr(scorer, 'score_match', broken)
        status, body = handle_scoring_request({'type': 'match', 'match_id': 1}, scorer)
        assert status == 500
        assert body == {'error': 'An error occurred while calculating scores'}
        assert 'connection lost' in caplog.text


class TestSeasonRequests:
    """Tests for {"type": "season"} payloads."""

    def test_success(self, scorer):
        """Test a season request reports every processed match."""
        status, body = handle_scoring_request({'type': 'season', 'season_id': 1}, scorer)
        assert status == 200
        assert body['message'] == 'Season fantasy scoring recalculated'
        assert body['result']['processed_matches'] == 3
        assert [r['match_id'] for r in body['result']['results']] == [1, 2, 3]

    def test_failure_aborts(self, scorer):
        """Test a bad match fails the whole request by default."""
        status, _ = handle_scoring_request({'type': 'season', 'season_id': 2}, scorer)
        assert status == 400

    def test_isolated_failures(self, scorer):
        """Test isolate_failures reports the bad match in a 200 response."""
        status, body = handle_scoring_request(
            {'type': 'season', 'season_id': 2, 'isolate_failures': True}, scorer
        )
        assert status == 200
        assert body['result']['processed_matches'] == 1
        assert body['result']['failures'][0]['match_id'] == 10


class TestPayloads:
    """Tests for malformed payloads."""

    def test_unknown_type(self, scorer):
        """Test an unrecognized type is rejected."""
        status, body = handle_scoring_request({'type': 'week', 'week': 3}, scorer)
        assert status == 400
        assert body == {'error': 'Invalid type. Specify "match" or "season".'}

    def test_missing_type(self, scorer):
        """Test a payload without a type is rejected."""
        status, _ = handle_scoring_request({'match_id': 1}, scorer)
        assert status == 400

    def test_not_an_object(self, scorer):
        """Test non-object payloads are rejected."""
        status, body = handle_scoring_request([1, 2], scorer)
        assert status == 400
        assert 'JSON object' in body['error']

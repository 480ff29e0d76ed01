"""Vercel Serverless Function for fantasy scoring runs."""

from http.server import BaseHTTPRequestHandler
import json
import logging
import os

from goalcrush import MatchScorer, handle_scoring_request, make_engine, make_session_factory

logger = logging.getLogger("goalcrush.api")

_scorer = None


def get_scorer() -> MatchScorer:
    """Build the scorer once per warm function instance."""
    global _scorer
    if _scorer is None:
        engine = make_engine(os.environ.get("DATABASE_URL"), pool_pre_ping=True)
        _scorer = MatchScorer(make_session_factory(engine))
    return _scorer


def is_authorized(headers) -> bool:
    """Scoring runs are admin-only; require the shared admin token."""
    expected = (os.environ.get("ADMIN_TOKEN", "") or "").strip()
    received = (headers.get("X-Admin-Token", "") or "").strip()
    return bool(expected) and received == expected


class handler(BaseHTTPRequestHandler):
    def do_OPTIONS(self):
        """Handle CORS preflight - no auth needed."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type, X-Admin-Token")
        self.send_header("Access-Control-Max-Age", "86400")
        self.send_header("Content-Length", "0")
        self.end_headers()

    def do_POST(self):
        """Score a match or recalculate a season."""
        if not is_authorized(self.headers):
            return self._send_json(401, {"error": "Unauthorized"})

        try:
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length)
            data = json.loads(body.decode()) if body else {}
        except (ValueError, UnicodeDecodeError):
            return self._send_json(400, {"error": "Invalid JSON"})

        try:
            status, payload = handle_scoring_request(data, get_scorer())
            return self._send_json(status, payload)
        except Exception as e:
            logger.exception(f"Scoring request failed: {e}")
            return self._send_json(500, {"error": "An error occurred while calculating scores"})

    def _send_json(self, status_code: int, data: dict):
        """Send JSON response with CORS headers."""
        body = json.dumps(data).encode()
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        """Suppress default logging."""
        pass

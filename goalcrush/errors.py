"""Exceptions raised by the fantasy scoring engine."""


class ScoringError(Exception):
    """Base class for scoring failures reported to the caller."""

    status_code = 500


class NotFoundError(ScoringError):
    """A match or team referenced by a scoring request does not exist."""

    status_code = 404


class IncompleteMatchError(NotFoundError):
    """The match exists but one of its two teams cannot be resolved."""

    status_code = 400


class UnknownRulesetError(ScoringError, KeyError):
    """No ruleset is registered under the requested version."""

    status_code = 500

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else 'Unknown ruleset'

"""Constants for the Goal Crush fantasy scoring engine."""

# Positions that earn clean sheet credit (compared upper-cased)
DEFENSIVE_POSITIONS = frozenset({'GK', 'CB', 'LB', 'RB', 'LWB', 'RWB'})

# Starters are not tracked upstream; a player with at least this many
# minutes is treated as a starter.
STARTER_MINUTES_THRESHOLD = 60

# Multiple goal contributions (goals + assists) that earn the flat bonus
MULTIPLE_CONTRIBUTION_THRESHOLD = 2

# Saves are rewarded in groups of this size
SAVES_PER_UNIT = 2

# Match status marking a completed match
MATCH_STATUS_FINISHED = 'finished'

DEFAULT_RULES_VERSION = '1.0.0'

# Leaderboard paging defaults
DEFAULT_RANKING_PAGE_SIZE = 20
MAX_RANKING_PAGE_SIZE = 100

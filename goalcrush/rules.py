"""
Versioned fantasy scoring rulesets.

Rulesets are registered by version and never edited in place, so a match can
always be rescored under the rules that were in force when it was played.
"""

from datetime import date
from typing import Optional

from .config import get_rules_version
from .errors import UnknownRulesetError
from .schemas import (
    AppearanceRules,
    AttackRules,
    DeductionRules,
    DefenseRules,
    FantasyRules,
    RuleTable,
)

FANTASY_RULES_V1 = FantasyRules(
    version='1.0.0',
    effective_date=date(2025, 9, 5),
    rules=RuleTable(
        appearance=AppearanceRules(played=2, starter_bonus=1),
        attack=AttackRules(goal=4, assist=2, multiple_goal_contribution_bonus=1),
        defense=DefenseRules(clean_sheet=3, goalkeeper_save_per_2=1, important_block_or_tackle=2),
        deductions=DeductionRules(yellow_card=-1, red_card=-2, own_goal=-2, missed_penalty=-2),
    ),
)

RULESETS: dict[str, FantasyRules] = {
    FANTASY_RULES_V1.version: FANTASY_RULES_V1,
}


def get_rules(version: Optional[str] = None) -> FantasyRules:
    """
    Look up a ruleset by version.

    Args:
        version: Semantic version string; defaults to the configured rules_version

    Raises:
        UnknownRulesetError: If no ruleset is registered under that version
    """
    version = version or get_rules_version()
    try:
        return RULESETS[version]
    except KeyError:
        raise UnknownRulesetError(f'No fantasy ruleset registered for version {version}') from None


def latest_rules(as_of: Optional[date] = None) -> FantasyRules:
    """Most recent ruleset effective on or before ``as_of`` (default: today)."""
    as_of = as_of or date.today()
    effective = [r for r in RULESETS.values() if r.effective_date <= as_of]
    if not effective:
        raise UnknownRulesetError(f'No fantasy ruleset effective on {as_of.isoformat()}')
    return max(effective, key=lambda r: r.effective_date)

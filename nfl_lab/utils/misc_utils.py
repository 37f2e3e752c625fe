# nfl_lab/utils/misc_utils.py
from typing import Tuple


def matchup_key(*team_ids: str) -> Tuple[str, ...]:
    """Order-independent key for a game between the given teams."""
    return tuple(sorted(team_ids))


def matchup_label(*team_ids: str) -> str:
    """Human-readable form of `matchup_key`, e.g. DAL-PHI."""
    return "-".join(matchup_key(*team_ids))

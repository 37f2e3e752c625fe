WIN_PROBABILITY_FLOOR = 0.10
WIN_PROBABILITY_CEILING = 0.90


def win_probability(self_wins: int, opponent_wins: int) -> float:
    """Naive win probability used for the schedule bars.

    This is a bounded ratio of season wins, not a forecast. When neither
    side has a win the denominator falls back to 1, which yields the floor.
    """
    denominator = (self_wins + opponent_wins) or 1
    ratio = self_wins / denominator
    return min(max(ratio, WIN_PROBABILITY_FLOOR), WIN_PROBABILITY_CEILING)

"""Prometheus metrics for game activity"""
from prometheus_client import Counter, Histogram

GAME_ACTIONS = Counter(
    'scorekeeper_game_actions_total',
    'Accepted game actions',
    ['game', 'outcome']
)

REJECTED_ACTIONS = Counter(
    'scorekeeper_rejected_actions_total',
    'Actions rejected before any state change',
    ['action', 'status']
)

POINTS_AWARDED = Counter(
    'scorekeeper_points_awarded_total',
    'Points added to scores by games and bonuses',
    ['source']
)

DUEL_STAKES = Histogram(
    'scorekeeper_duel_stake_points',
    'Points staked in settled duels',
    buckets=(1, 2, 5, 10, 25, 50, 100, 250, 1000)
)

SETTLEMENT_FAILURES = Counter(
    'scorekeeper_settlement_failures_total',
    'Duels whose two-account write could not be confirmed'
)


def track_action(game: str, outcome: str, points: int = 0) -> None:
    GAME_ACTIONS.labels(game=game, outcome=outcome).inc()
    if points > 0:
        POINTS_AWARDED.labels(source=game).inc(points)


def track_rejection(action: str, status: int) -> None:
    REJECTED_ACTIONS.labels(action=action, status=str(status)).inc()

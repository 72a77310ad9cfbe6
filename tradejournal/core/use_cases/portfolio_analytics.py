from collections import OrderedDict
from typing import List, Sequence, Union

from ..entities.analytics import NO_DATA, AnalyticsSnapshot, BreakdownResponse, MonthlyBucket, NoData
from ..entities.trade import Direction, Trade


def _streaks(results: Sequence[float]) -> tuple:
    """Longest run of wins (> 0) and of non-wins (<= 0), in the order given."""
    max_wins = max_losses = 0
    current_wins = current_losses = 0

    for r in results:
        if r > 0:
            current_wins += 1
            current_losses = 0
            max_wins = max(max_wins, current_wins)
        else:
            # break-even counts against the win streak
            current_losses += 1
            current_wins = 0
            max_losses = max(max_losses, current_losses)

    return max_wins, max_losses


def compute_analytics(trades: Sequence[Trade]) -> Union[AnalyticsSnapshot, NoData]:
    """
    Aggregate a trade history.

    trades must be ordered oldest-first; streaks are read in that order and
    nothing is re-sorted here. A trade with result_usd == 0 is neither a
    winner nor a loser for the averages, but it breaks a win streak and
    extends a loss streak. It still counts toward the win-rate denominator.

    Returns NO_DATA for an empty history.
    """
    if not trades:
        return NO_DATA

    results = [t.result_usd for t in trades]
    wins = [r for r in results if r > 0]
    losses = [r for r in results if r < 0]

    total_trades = len(results)
    average_win = sum(wins) / len(wins) if wins else 0.0
    average_loss = abs(sum(losses) / len(losses)) if losses else 0.0
    profit_factor = average_win / average_loss if average_loss > 0 else 0.0
    max_wins, max_losses = _streaks(results)

    return AnalyticsSnapshot(
        total_trades=total_trades,
        winning_trades=len(wins),
        losing_trades=len(losses),
        total_pnl=sum(results),
        win_rate=len(wins) / total_trades * 100,
        average_win=average_win,
        average_loss=average_loss,
        profit_factor=profit_factor,
        best_trade=max(results),
        worst_trade=min(results),
        max_win_streak=max_wins,
        max_loss_streak=max_losses,
        last_trade_at=max(t.created_at for t in trades),
    )


def monthly_buckets(trades: Sequence[Trade]) -> List[MonthlyBucket]:
    """P&L and trade count per calendar month of created_at, oldest month first."""
    buckets = OrderedDict()
    for t in sorted(trades, key=lambda t: t.created_at):
        key = t.created_at.strftime("%Y-%m")
        if key not in buckets:
            buckets[key] = MonthlyBucket(month=key, label=t.created_at.strftime("%b %Y"), pnl=0.0, trades=0)
        buckets[key].pnl += t.result_usd
        buckets[key].trades += 1
    return list(buckets.values())


def breakdown(trades: Sequence[Trade]) -> BreakdownResponse:
    return BreakdownResponse(
        buy=sum(1 for t in trades if t.direction == Direction.BUY),
        sell=sum(1 for t in trades if t.direction == Direction.SELL),
        wins=sum(1 for t in trades if t.result_usd > 0),
        losses=sum(1 for t in trades if t.result_usd <= 0),
    )

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class AnalyticsSnapshot(BaseModel):
    """
    Aggregate performance over a trade history. Recomputed from the full
    list on every refresh, never stored.
    """
    has_data: Literal[True] = True
    total_trades: int
    winning_trades: int
    losing_trades: int
    total_pnl: float
    win_rate: float  # percent
    average_win: float
    average_loss: float  # absolute value
    profit_factor: float  # 0.0 when there are no losses
    best_trade: float
    worst_trade: float
    max_win_streak: int
    max_loss_streak: int
    last_trade_at: Optional[datetime] = None


class NoData(BaseModel):
    """Empty-history marker. Render an empty state for this."""
    has_data: Literal[False] = False
    total_trades: int = 0


NO_DATA = NoData()


class MonthlyBucket(BaseModel):
    month: str  # "YYYY-MM"
    label: str  # "Mar 2024"
    pnl: float
    trades: int


class BreakdownResponse(BaseModel):
    buy: int
    sell: int
    wins: int
    losses: int  # includes break-even trades

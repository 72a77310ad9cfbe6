from typing import Dict, List

from tradejournal.core.entities.trade import Trade
from tradejournal.core.interfaces.datasource import ITradeSource


class InMemoryTradeSource(ITradeSource):
    """Process-local trade storage, used when no database is configured and in tests."""

    def __init__(self):
        self._trades: Dict[str, List[Trade]] = {}

    async def get_trades(self, user: str) -> List[Trade]:
        return sorted(self._trades.get(user, []), key=lambda t: t.created_at, reverse=True)

    async def add_trade(self, user: str, trade: Trade) -> Trade:
        self._trades.setdefault(user, []).append(trade)
        return trade

    async def delete_trade(self, user: str, trade_id: str) -> bool:
        trades = self._trades.get(user, [])
        remaining = [t for t in trades if t.id != trade_id]
        if len(remaining) == len(trades):
            return False
        if remaining:
            self._trades[user] = remaining
        else:
            del self._trades[user]
        return True

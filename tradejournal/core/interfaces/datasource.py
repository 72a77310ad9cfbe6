from abc import ABC, abstractmethod
from typing import List

from tradejournal.core.entities.trade import Trade


class ITradeSource(ABC):
    @abstractmethod
    async def get_trades(self, user: str) -> List[Trade]:
        """
        Returns the user's trades newest-first (created_at descending).
        """
        pass

    @abstractmethod
    async def add_trade(self, user: str, trade: Trade) -> Trade:
        pass

    @abstractmethod
    async def delete_trade(self, user: str, trade_id: str) -> bool:
        """
        Returns False when the user has no trade with that id.
        """
        pass

import logging
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from tradejournal.core.config import InstrumentConfig
from tradejournal.core.entities.analytics import AnalyticsSnapshot, BreakdownResponse, MonthlyBucket, NoData, NO_DATA
from tradejournal.core.entities.pnl import PnLResult
from tradejournal.core.entities.sizing import PositionPlan
from tradejournal.core.entities.trade import Direction, Trade
from tradejournal.core.errors import TradeNotFoundError
from tradejournal.core.interfaces.datasource import ITradeSource
from tradejournal.core.use_cases.pnl_calculator import compute_pnl
from tradejournal.core.use_cases.portfolio_analytics import breakdown, compute_analytics, monthly_buckets
from tradejournal.core.use_cases.position_sizer import compute_lot_size, compute_risk_reward, plan_position
from tradejournal.core.validation import Rejected, require_positive, validate_trade

logger = logging.getLogger(__name__)


def oldest_first(trades: List[Trade]) -> List[Trade]:
    return sorted(trades, key=lambda t: t.created_at)


def closed_oldest_first(trades: List[Trade]) -> List[Trade]:
    """Trades with an exit price, oldest-first. Open trades have no result to score."""
    return oldest_first([t for t in trades if t.exit_price is not None])


# --- Store ---

class StoreState(BaseModel):
    trades: List[Trade]  # newest-first, as displayed, open trades included
    analytics: Union[AnalyticsSnapshot, NoData]  # closed trades only


Listener = Callable[[StoreState], Any]


class TradeStore:
    """
    Holds one user's trade list and the analytics derived from it.

    Every change recomputes the snapshot from the full list and pushes the
    new state to subscribers. Pass the store to whatever needs it; there is
    no module-level instance.
    """

    def __init__(self):
        self._state = StoreState(trades=[], analytics=NO_DATA)
        self._listeners: List[Listener] = []

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, trades: List[Trade]):
        ordered = sorted(trades, key=lambda t: t.created_at, reverse=True)
        self._state = StoreState(trades=ordered, analytics=compute_analytics(closed_oldest_first(ordered)))
        self._notify()

    def add(self, trade: Trade):
        self.replace(self._state.trades + [trade])

    def remove(self, trade_id: str) -> bool:
        remaining = [t for t in self._state.trades if t.id != trade_id]
        if len(remaining) == len(self._state.trades):
            return False
        self.replace(remaining)
        return True

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.warning(f"Store listener {listener!r} failed: {e}")


# --- Business Logic Services ---

class JournalService:
    def __init__(self, datasource: ITradeSource, config: Optional[InstrumentConfig] = None):
        self.db = datasource
        self.config = config or InstrumentConfig()
        self._stores: Dict[str, TradeStore] = {}

    def store(self, user: str) -> TradeStore:
        if user not in self._stores:
            self._stores[user] = TradeStore()
        return self._stores[user]

    async def refresh(self, user: str) -> StoreState:
        trades = await self.db.get_trades(user)
        store = self._stores.get(user)
        if store is None:
            store = TradeStore()
            if trades:
                self._stores[user] = store
        store.replace(trades)
        if not trades and not store.has_listeners:
            # nothing to hold and nobody listening
            self._stores.pop(user, None)
        return store.state

    async def submit(self, user: str, raw: Mapping[str, Any]) -> Union[Trade, Rejected]:
        """
        Validate a trade form, fill in the derived fields and persist it.
        Raises ZeroRiskDistanceError if sizing is impossible.
        """
        result = validate_trade(raw)
        if isinstance(result, Rejected):
            return result
        entry = result.trade
        cfg = self.config

        lot_size = entry.lot_size
        if lot_size is None:
            # Auto-size from risk percent against the reference balance
            lot_size = compute_lot_size(
                cfg.account_balance, entry.risk_percent, entry.entry_price,
                entry.stop_loss, cfg.pip_size, cfg.contract_size,
            ).lot_size

        risk_reward = None
        if entry.stop_loss is not None and entry.take_profit is not None:
            risk_reward = compute_risk_reward(entry.entry_price, entry.stop_loss, entry.take_profit, cfg.pip_size)

        pnl = compute_pnl(
            entry.direction, entry.entry_price, entry.exit_price,
            lot_size, cfg.contract_size, cfg.idr_rate,
        )

        trade = Trade(
            id=uuid.uuid4().hex,
            user=user,
            contract_size=cfg.contract_size,
            risk_reward=risk_reward,
            result_usd=pnl.result_primary,
            pnl_idr=pnl.result_secondary,
            result_usd_cent=pnl.result_subunit,
            pnl_percent=pnl.pnl_percent,
            lot_size=lot_size,
            **entry.model_dump(exclude={"lot_size"}),
        )

        try:
            await self.db.add_trade(user, trade)
        except Exception as e:
            logger.error(f"Failed to persist trade for {user}: {e}")
            raise
        logger.info(f"Trade {trade.id} added for {user}: {trade.direction.value} {lot_size:.2f} lots, P&L {trade.result_usd:.2f}")

        await self.refresh(user)
        return trade

    async def list_trades(self, user: str) -> List[Trade]:
        return (await self.refresh(user)).trades

    async def delete_trade(self, user: str, trade_id: str):
        deleted = await self.db.delete_trade(user, trade_id)
        if not deleted:
            raise TradeNotFoundError(trade_id)
        logger.info(f"Trade {trade_id} deleted for {user}")
        await self.refresh(user)

    async def analytics(self, user: str) -> Union[AnalyticsSnapshot, NoData]:
        # Always from a fresh fetch; no cached aggregate
        return (await self.refresh(user)).analytics

    async def monthly(self, user: str) -> List[MonthlyBucket]:
        return monthly_buckets(closed_oldest_first((await self.refresh(user)).trades))

    async def breakdown(self, user: str) -> BreakdownResponse:
        return breakdown(closed_oldest_first((await self.refresh(user)).trades))

    # --- Previews (no persistence) ---

    def preview_sizing(
        self,
        entry_price: float,
        stop_loss: float,
        risk_percent: float,
        take_profit: Optional[float] = None,
        account_balance: Optional[float] = None,
    ) -> PositionPlan:
        cfg = self.config
        balance = account_balance if account_balance is not None else cfg.account_balance
        return plan_position(balance, risk_percent, entry_price, stop_loss, take_profit, cfg.pip_size, cfg.contract_size)

    def preview_pnl(self, direction: Direction, entry_price: float, exit_price: Optional[float], lot_size: float) -> PnLResult:
        require_positive(entry_price=entry_price, exit_price=exit_price, lot_size=lot_size)
        cfg = self.config
        return compute_pnl(direction, entry_price, exit_price, lot_size, cfg.contract_size, cfg.idr_rate)

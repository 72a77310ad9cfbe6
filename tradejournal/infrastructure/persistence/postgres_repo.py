import asyncio
import logging
from contextlib import closing
from typing import List

import psycopg2
from psycopg2.extras import RealDictCursor

from tradejournal.core.entities.trade import Trade
from tradejournal.core.interfaces.datasource import ITradeSource

logger = logging.getLogger(__name__)

_COLUMNS = [
    "id", "user", "pair", "direction", "entry_price", "exit_price", "stop_loss",
    "take_profit", "lot_size", "contract_size", "risk_percent", "risk_reward",
    "result_usd", "pnl_idr", "result_usd_cent", "pnl_percent", "created_at",
    "session", "strategy", "confidence", "emotional_psychology", "notes", "screenshot_url",
]
_COLUMN_SQL = ", ".join(f'"{c}"' for c in _COLUMNS)


class PostgresTradeRepo(ITradeSource):
    def __init__(self, dsn: str):
        self.dsn = dsn
        self._init_db()

    def _connect(self):
        return closing(psycopg2.connect(self.dsn))

    def _init_db(self):
        # `with conn` commits on success and rolls back on error; closing() releases it either way
        with self._connect() as conn, conn, conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id VARCHAR PRIMARY KEY,
                    "user" VARCHAR NOT NULL,
                    pair VARCHAR NOT NULL,
                    direction VARCHAR NOT NULL CHECK (direction IN ('buy', 'sell')),
                    entry_price DECIMAL NOT NULL,
                    exit_price DECIMAL,
                    stop_loss DECIMAL,
                    take_profit DECIMAL,
                    lot_size DECIMAL NOT NULL,
                    contract_size INTEGER NOT NULL,
                    risk_percent DECIMAL,
                    risk_reward DECIMAL,
                    result_usd DECIMAL NOT NULL,
                    pnl_idr DECIMAL NOT NULL,
                    result_usd_cent DECIMAL NOT NULL,
                    pnl_percent DECIMAL NOT NULL,
                    created_at TIMESTAMPTZ NOT NULL,
                    session VARCHAR,
                    strategy VARCHAR,
                    confidence INTEGER,
                    emotional_psychology VARCHAR,
                    notes TEXT,
                    screenshot_url VARCHAR
                );
            """)
            cur.execute('CREATE INDEX IF NOT EXISTS idx_trades_user_created ON trades ("user", created_at)')
        logger.info("Trades table ready.")

    # Blocking helpers, run off the event loop

    def _select_trades(self, user: str) -> List[Trade]:
        with self._connect() as conn, conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f'SELECT {_COLUMN_SQL} FROM trades WHERE "user" = %s ORDER BY created_at DESC',
                (user,),
            )
            rows = cur.fetchall()
        # DECIMAL columns come back as Decimal; the model coerces them to float
        return [Trade.model_validate(dict(row)) for row in rows]

    def _insert_trade(self, trade: Trade):
        data = trade.model_dump()
        data["direction"] = trade.direction.value
        placeholders = ", ".join(["%s"] * len(_COLUMNS))
        with self._connect() as conn, conn, conn.cursor() as cur:
            cur.execute(
                f"INSERT INTO trades ({_COLUMN_SQL}) VALUES ({placeholders})",
                [data[c] for c in _COLUMNS],
            )

    def _delete_trade(self, user: str, trade_id: str) -> bool:
        with self._connect() as conn, conn, conn.cursor() as cur:
            cur.execute('DELETE FROM trades WHERE "user" = %s AND id = %s', (user, trade_id))
            return cur.rowcount > 0

    # ITradeSource Implementation
    async def get_trades(self, user: str) -> List[Trade]:
        return await asyncio.to_thread(self._select_trades, user)

    async def add_trade(self, user: str, trade: Trade) -> Trade:
        await asyncio.to_thread(self._insert_trade, trade)
        return trade

    async def delete_trade(self, user: str, trade_id: str) -> bool:
        return await asyncio.to_thread(self._delete_trade, user, trade_id)

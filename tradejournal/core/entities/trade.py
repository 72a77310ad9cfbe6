from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Direction(str, Enum):
    BUY = "buy"
    SELL = "sell"


class TradeInput(BaseModel):
    """
    A trade as entered by the user, before any derived values exist.
    Produced by validation, consumed by the journal service.
    """
    pair: str = "XAUUSD"
    direction: Direction
    entry_price: float
    exit_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    lot_size: Optional[float] = None  # None = size from risk_percent
    risk_percent: Optional[float] = None

    # Journal metadata, carried through untouched
    session: Optional[str] = None
    strategy: Optional[str] = None
    confidence: Optional[int] = None
    emotional_psychology: Optional[str] = None
    notes: Optional[str] = None
    screenshot_url: Optional[str] = None


class Trade(BaseModel):
    """
    Stored journal entry. The result_* and pnl_percent fields are derived
    from prices and size at submission time.
    """
    id: str
    user: str
    pair: str = "XAUUSD"
    direction: Direction
    entry_price: float
    exit_price: Optional[float] = None
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None
    lot_size: float
    contract_size: int = 100
    risk_percent: Optional[float] = None
    risk_reward: Optional[float] = None

    result_usd: float = 0.0
    pnl_idr: float = 0.0
    result_usd_cent: float = 0.0
    pnl_percent: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    session: Optional[str] = None
    strategy: Optional[str] = None
    confidence: Optional[int] = None
    emotional_psychology: Optional[str] = None
    notes: Optional[str] = None
    screenshot_url: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "6f1c2a4e",
                "user": "trader-1",
                "pair": "XAUUSD",
                "direction": "buy",
                "entry_price": 2050.0,
                "exit_price": 2060.0,
                "stop_loss": 2045.0,
                "take_profit": 2060.0,
                "lot_size": 0.04,
                "contract_size": 100,
                "risk_percent": 2.0,
                "risk_reward": 2.0,
                "result_usd": 40.0,
                "pnl_idr": 620000.0,
                "result_usd_cent": 4000.0,
                "pnl_percent": 0.4878,
                "created_at": "2024-03-01T09:30:00Z",
            }
        }

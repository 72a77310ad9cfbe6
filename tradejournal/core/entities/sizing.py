from typing import Optional

from pydantic import BaseModel


class PositionSize(BaseModel):
    lot_size: float
    risk_amount: float
    risk_pips: float


class PositionPlan(BaseModel):
    """
    Live preview of a planned trade: how big to go and what it can make.
    Reward fields are empty when no take-profit was given.
    """
    lot_size: float
    risk_amount: float
    risk_pips: float
    reward_pips: Optional[float] = None
    risk_reward: Optional[float] = None

"""
Position sizing for a planned trade.

Works from entry, stop and target only; the exit price of a closed trade is
never consulted here (see pnl_calculator for that).
"""
from typing import Optional

from ..entities.sizing import PositionPlan, PositionSize
from ..errors import ZeroRiskDistanceError
from ..validation import require_positive


def _risk_pips(entry_price: float, stop_loss: float, pip_size: float) -> float:
    risk_pips = abs(entry_price - stop_loss) / pip_size
    if risk_pips == 0:
        raise ZeroRiskDistanceError(entry_price, stop_loss)
    return risk_pips


def compute_lot_size(
    account_balance: float,
    risk_percent: float,
    entry_price: float,
    stop_loss: float,
    pip_size: float = 0.01,
    contract_size: int = 100,
) -> PositionSize:
    """
    Lot size that loses exactly risk_percent of account_balance if the stop
    is hit. Raises ZeroRiskDistanceError when stop_loss == entry_price and
    InvalidTradeError for non-positive inputs.
    """
    require_positive(
        account_balance=account_balance, risk_percent=risk_percent, entry_price=entry_price,
        stop_loss=stop_loss, pip_size=pip_size, contract_size=contract_size,
    )
    risk_pips = _risk_pips(entry_price, stop_loss, pip_size)
    risk_amount = account_balance * risk_percent / 100
    lot_size = risk_amount / (risk_pips * pip_size * contract_size)
    return PositionSize(lot_size=lot_size, risk_amount=risk_amount, risk_pips=risk_pips)


def compute_risk_reward(
    entry_price: float,
    stop_loss: float,
    take_profit: float,
    pip_size: float = 0.01,
) -> float:
    require_positive(entry_price=entry_price, stop_loss=stop_loss, take_profit=take_profit, pip_size=pip_size)
    risk_pips = _risk_pips(entry_price, stop_loss, pip_size)
    reward_pips = abs(take_profit - entry_price) / pip_size
    return reward_pips / risk_pips


def plan_position(
    account_balance: float,
    risk_percent: float,
    entry_price: float,
    stop_loss: float,
    take_profit: Optional[float] = None,
    pip_size: float = 0.01,
    contract_size: int = 100,
) -> PositionPlan:
    size = compute_lot_size(account_balance, risk_percent, entry_price, stop_loss, pip_size, contract_size)
    plan = PositionPlan(**size.model_dump())
    if take_profit is not None:
        plan.reward_pips = abs(take_profit - entry_price) / pip_size
        plan.risk_reward = compute_risk_reward(entry_price, stop_loss, take_profit, pip_size)
    return plan

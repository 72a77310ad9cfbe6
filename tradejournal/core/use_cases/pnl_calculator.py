import math
from typing import Optional

from ..entities.pnl import PnLResult
from ..entities.trade import Direction


def _finite(*values: Optional[float]) -> bool:
    return all(v is not None and math.isfinite(v) for v in values)


def compute_pnl(
    direction: Direction,
    entry_price: float,
    exit_price: Optional[float],
    lot_size: float,
    contract_size: int = 100,
    conversion_rate: float = 15500.0,
) -> PnLResult:
    """
    Score a closed trade.

    move = exit - entry for a buy, entry - exit for a sell, so a buy profits
    when price rises and a sell when it falls.

    result_primary   = move * lot_size * contract_size
    result_secondary = result_primary * conversion_rate
    result_subunit   = result_primary * 100
    pnl_percent      = result_primary / (entry * lot_size * contract_size) * 100

    Missing or non-finite inputs (trade still open) give the all-zero result.
    A non-positive entry price also gives zeros; validation rejects it before
    it gets here.
    """
    if not _finite(entry_price, exit_price, lot_size, contract_size, conversion_rate):
        return PnLResult()
    if entry_price <= 0:
        return PnLResult()

    if Direction(direction) == Direction.BUY:
        move = exit_price - entry_price
    else:
        move = entry_price - exit_price

    result_primary = move * lot_size * contract_size
    notional = entry_price * lot_size * contract_size
    pnl_percent = result_primary / notional * 100 if notional != 0 else 0.0

    return PnLResult(
        result_primary=result_primary,
        result_secondary=result_primary * conversion_rate,
        result_subunit=result_primary * 100,
        pnl_percent=pnl_percent,
    )

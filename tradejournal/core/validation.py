"""
Turns a loosely-typed trade form into a TradeInput, or a list of reasons
why it cannot be one.

Parsing and rule checks are kept apart from the calculators: nothing here
computes P&L or size.
"""
import logging
import math
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from tradejournal.core.entities.trade import Direction, TradeInput
from tradejournal.core.errors import InvalidTradeError

logger = logging.getLogger(__name__)


class Accepted(BaseModel):
    ok: bool = True
    trade: TradeInput


class Rejected(BaseModel):
    ok: bool = False
    errors: List[str]


ValidationResult = Union[Accepted, Rejected]


def _blank_to_none(raw: Mapping[str, Any]) -> dict:
    # HTML forms send "" for untouched optional inputs
    return {k: (None if isinstance(v, str) and v.strip() == "" else v) for k, v in raw.items()}


def number_errors(**values: Optional[float]) -> List[str]:
    """Finite-and-positive check for each named value; None means not supplied."""
    errors: List[str] = []
    for name, value in values.items():
        if value is None:
            continue
        if not math.isfinite(value):
            errors.append(f"{name} must be a finite number")
        elif value <= 0:
            errors.append(f"{name} must be positive")
    return errors


def require_positive(**values: Optional[float]):
    """Raise InvalidTradeError unless every supplied value is finite and positive."""
    errors = number_errors(**values)
    if errors:
        raise InvalidTradeError(errors)


def check_levels(trade: TradeInput) -> List[str]:
    """Price, size and SL/TP ordering rules. Empty list = well-formed."""
    errors = number_errors(
        entry_price=trade.entry_price,
        exit_price=trade.exit_price,
        stop_loss=trade.stop_loss,
        take_profit=trade.take_profit,
        lot_size=trade.lot_size,
        risk_percent=trade.risk_percent,
    )
    if errors:
        return errors

    entry, sl, tp = trade.entry_price, trade.stop_loss, trade.take_profit
    if trade.direction == Direction.BUY:
        if sl is not None and not sl < entry:
            errors.append("stop_loss must be below entry_price for a buy")
        if tp is not None and not tp > entry:
            errors.append("take_profit must be above entry_price for a buy")
    else:
        if sl is not None and not sl > entry:
            errors.append("stop_loss must be above entry_price for a sell")
        if tp is not None and not tp < entry:
            errors.append("take_profit must be below entry_price for a sell")

    if trade.lot_size is None and (trade.risk_percent is None or sl is None):
        errors.append("lot_size is required unless risk_percent and stop_loss are given")

    return errors


def validate_trade(raw: Mapping[str, Any]) -> ValidationResult:
    try:
        trade = TradeInput.model_validate(_blank_to_none(raw))
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        logger.warning(f"Trade form failed to parse: {errors}")
        return Rejected(errors=errors)

    errors = check_levels(trade)
    if errors:
        logger.warning(f"Trade rejected: {errors}")
        return Rejected(errors=errors)
    return Accepted(trade=trade)

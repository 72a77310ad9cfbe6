"""
Tests for trade form validation.
"""
import pytest

from tradejournal.core.entities.trade import Direction
from tradejournal.core.validation import Accepted, Rejected, validate_trade


def form(**overrides):
    data = {
        "direction": "buy",
        "entry_price": "2050",
        "exit_price": "2060",
        "stop_loss": "2045",
        "take_profit": "2060",
        "lot_size": "0.04",
        "notes": "London open breakout",
        "emotional_psychology": "calm",
    }
    data.update(overrides)
    return data


def test_valid_buy_parses_strings():
    result = validate_trade(form())
    assert isinstance(result, Accepted)
    assert result.trade.direction == Direction.BUY
    assert result.trade.entry_price == 2050.0
    assert result.trade.notes == "London open breakout"


def test_valid_sell():
    result = validate_trade(form(direction="sell", stop_loss="2055", take_profit="2040", exit_price="2041"))
    assert isinstance(result, Accepted)


@pytest.mark.parametrize("overrides", [
    {"stop_loss": "2055"},  # buy stop above entry
    {"take_profit": "2040"},  # buy target below entry
    {"stop_loss": "2050"},  # stop on entry
    {"direction": "sell"},  # sell with buy-side levels
])
def test_level_ordering_rejected(overrides):
    result = validate_trade(form(**overrides))
    assert isinstance(result, Rejected)
    assert result.errors


@pytest.mark.parametrize("overrides", [
    {"entry_price": "0"},
    {"entry_price": "-5"},
    {"lot_size": "0"},
    {"exit_price": "-1"},
    {"entry_price": "nan"},
])
def test_non_positive_or_non_finite_rejected(overrides):
    assert isinstance(validate_trade(form(**overrides)), Rejected)


def test_unparseable_fields_rejected():
    result = validate_trade(form(direction="long", entry_price="abc"))
    assert isinstance(result, Rejected)
    assert any("direction" in e for e in result.errors)
    assert any("entry_price" in e for e in result.errors)


def test_blank_optional_fields_are_absent():
    result = validate_trade(form(stop_loss="", take_profit="", exit_price=""))
    assert isinstance(result, Accepted)
    assert result.trade.stop_loss is None
    assert result.trade.exit_price is None


def test_lot_size_may_come_from_risk():
    assert isinstance(validate_trade(form(lot_size="", risk_percent="2")), Accepted)
    assert isinstance(validate_trade(form(lot_size="")), Rejected)
    assert isinstance(validate_trade(form(lot_size="", risk_percent="2", stop_loss="")), Rejected)

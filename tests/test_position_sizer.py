"""
Tests for risk-based position sizing.
"""
import pytest

from tradejournal.core.errors import DomainError, InvalidTradeError, ZeroRiskDistanceError
from tradejournal.core.use_cases.position_sizer import compute_lot_size, compute_risk_reward, plan_position


def test_end_to_end_example():
    size = compute_lot_size(10000, 2, 2050.00, 2045.00, 0.01, 100)
    assert size.risk_pips == pytest.approx(500)
    assert size.risk_amount == pytest.approx(200)
    assert size.lot_size == pytest.approx(0.4)
    assert compute_risk_reward(2050.00, 2045.00, 2060.00, 0.01) == pytest.approx(2.0)


def test_sell_side_uses_distance():
    # stop above entry for a sell; distance is what matters
    size = compute_lot_size(10000, 1, 2050.00, 2055.00)
    assert size.risk_pips == pytest.approx(500)
    assert size.lot_size == pytest.approx(0.2)
    assert compute_risk_reward(2050.00, 2055.00, 2035.00) == pytest.approx(3.0)


def test_position_loses_exactly_the_risk_amount_at_the_stop():
    size = compute_lot_size(25000, 1.5, 1987.40, 1981.15)
    loss_at_stop = (1987.40 - 1981.15) * size.lot_size * 100
    assert loss_at_stop == pytest.approx(size.risk_amount)


def test_zero_risk_distance_is_a_domain_error():
    with pytest.raises(ZeroRiskDistanceError):
        compute_lot_size(10000, 2, 2000.0, 2000.0)
    with pytest.raises(DomainError):
        compute_risk_reward(2000.0, 2000.0, 2010.0)


def test_plan_with_take_profit():
    plan = plan_position(10000, 2, 2050.00, 2045.00, 2060.00)
    assert plan.lot_size == pytest.approx(0.4)
    assert plan.reward_pips == pytest.approx(1000)
    assert plan.risk_reward == pytest.approx(2.0)


def test_plan_without_take_profit():
    plan = plan_position(10000, 2, 2050.00, 2045.00)
    assert plan.reward_pips is None
    assert plan.risk_reward is None


@pytest.mark.parametrize("kwargs", [
    {"risk_percent": -2},
    {"risk_percent": 0},
    {"account_balance": 0},
    {"entry_price": -2050.0, "stop_loss": -2045.0},
    {"stop_loss": -1.0},
    {"pip_size": 0},
    {"entry_price": float("nan")},
])
def test_lot_size_rejects_non_positive_inputs(kwargs):
    args = {"account_balance": 10000, "risk_percent": 2, "entry_price": 2050.0, "stop_loss": 2045.0, "pip_size": 0.01}
    args.update(kwargs)
    with pytest.raises(InvalidTradeError):
        compute_lot_size(**args)


def test_risk_reward_rejects_non_positive_target():
    with pytest.raises(InvalidTradeError):
        compute_risk_reward(2050.0, 2045.0, -2060.0)
    with pytest.raises(InvalidTradeError):
        plan_position(10000, 2, 2050.0, 2045.0, 0.0)

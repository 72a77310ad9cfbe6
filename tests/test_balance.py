import pytest

from tradejournal.core.entities.balance import Balance
from tradejournal.core.entities.pnl import Denomination
from tradejournal.core.use_cases.balance_updater import apply_result


@pytest.mark.parametrize("denomination,field", [
    (Denomination.USD, "usd_balance"),
    (Denomination.IDR, "idr_balance"),
    (Denomination.USD_CENT, "usd_cent_balance"),
])
def test_apply_touches_one_field(denomination, field):
    start = Balance(idr_balance=100.0, usd_balance=100.0, usd_cent_balance=100.0)
    updated = apply_result(start, denomination, -40.0)
    assert getattr(updated, field) == pytest.approx(60.0)
    untouched = {"usd_balance", "idr_balance", "usd_cent_balance"} - {field}
    assert all(getattr(updated, f) == 100.0 for f in untouched)
    # original unchanged
    assert getattr(start, field) == 100.0

from ..entities.balance import Balance
from ..entities.pnl import Denomination

_FIELDS = {
    Denomination.IDR: "idr_balance",
    Denomination.USD: "usd_balance",
    Denomination.USD_CENT: "usd_cent_balance",
}


def apply_result(balance: Balance, denomination: Denomination, amount: float) -> Balance:
    """Return a copy of balance with amount added to the given denomination only."""
    field = _FIELDS[Denomination(denomination)]
    return balance.model_copy(update={field: getattr(balance, field) + amount})

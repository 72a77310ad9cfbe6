from enum import Enum

from pydantic import BaseModel


class Denomination(str, Enum):
    USD = "USD"
    IDR = "IDR"
    USD_CENT = "USD_CENT"


class PnLResult(BaseModel):
    """
    Profit/loss of a closed trade in every denomination the journal reports.
    All zeros means the trade is incomplete (no exit price yet).
    """
    result_primary: float = 0.0  # USD
    result_secondary: float = 0.0  # IDR at the static rate
    result_subunit: float = 0.0  # USD cents
    pnl_percent: float = 0.0

    def amount(self, denomination: Denomination) -> float:
        if denomination == Denomination.IDR:
            return self.result_secondary
        if denomination == Denomination.USD_CENT:
            return self.result_subunit
        return self.result_primary

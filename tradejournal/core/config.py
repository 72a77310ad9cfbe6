import os

from pydantic import BaseModel


class InstrumentConfig(BaseModel):
    """
    Numeric conventions for the one supported instrument (XAUUSD) and the
    placeholder account used for risk-percent sizing.
    """
    pair: str = "XAUUSD"
    contract_size: int = 100
    pip_size: float = 0.01
    idr_rate: float = 15500.0  # IDR per USD, static
    account_balance: float = 10000.0

    @classmethod
    def from_env(cls) -> "InstrumentConfig":
        return cls(
            pair=os.getenv("TJ_PAIR", "XAUUSD"),
            contract_size=int(os.getenv("TJ_CONTRACT_SIZE", "100")),
            pip_size=float(os.getenv("TJ_PIP_SIZE", "0.01")),
            idr_rate=float(os.getenv("TJ_IDR_RATE", "15500")),
            account_balance=float(os.getenv("TJ_ACCOUNT_BALANCE", "10000")),
        )

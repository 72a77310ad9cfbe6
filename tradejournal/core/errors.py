class DomainError(Exception):
    """Base class for rule violations raised by the journal core."""


class ZeroRiskDistanceError(DomainError):
    """Stop loss sits on the entry price, so there is no distance to size against."""

    def __init__(self, entry_price: float, stop_loss: float):
        self.entry_price = entry_price
        self.stop_loss = stop_loss
        super().__init__(
            f"Cannot size position: stop loss {stop_loss} equals entry price {entry_price}"
        )


class TradeNotFoundError(DomainError):
    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"Trade {trade_id} not found")


class InvalidTradeError(DomainError):
    """Inputs that can never describe a real trade (non-positive or non-finite numbers)."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))

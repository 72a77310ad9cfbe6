from pydantic import BaseModel


class Balance(BaseModel):
    """
    Account balance kept per denomination.
    """
    idr_balance: float = 0.0
    usd_balance: float = 0.0
    usd_cent_balance: float = 0.0

    class Config:
        json_schema_extra = {
            "example": {
                "idr_balance": 155000000.0,
                "usd_balance": 10000.0,
                "usd_cent_balance": 1000000.0,
            }
        }

import logging
import os
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Dict, List, Optional, Union

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# --- Imports ---
from tradejournal.core.config import InstrumentConfig
from tradejournal.core.entities.analytics import AnalyticsSnapshot, BreakdownResponse, MonthlyBucket, NoData
from tradejournal.core.entities.balance import Balance
from tradejournal.core.entities.pnl import Denomination, PnLResult
from tradejournal.core.entities.sizing import PositionPlan
from tradejournal.core.entities.trade import Direction, Trade
from tradejournal.core.errors import DomainError, InvalidTradeError, TradeNotFoundError, ZeroRiskDistanceError
from tradejournal.core.interfaces.datasource import ITradeSource
from tradejournal.core.services import JournalService
from tradejournal.core.use_cases.balance_updater import apply_result
from tradejournal.core.validation import Rejected
from tradejournal.infrastructure.persistence.memory_repo import InMemoryTradeSource

# Setup Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("TradeJournal")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Connect storage before serving so a bad DATABASE_URL stops the process
    get_service()
    yield


app = FastAPI(title="Trade Journal API", version="1.0.0", description="Gold trade journal: P&L, position sizing and performance analytics", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ZeroRiskDistanceError)
async def zero_risk_handler(request: Request, exc: ZeroRiskDistanceError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": "zero_risk_distance"})


@app.exception_handler(InvalidTradeError)
async def invalid_trade_handler(request: Request, exc: InvalidTradeError):
    return JSONResponse(status_code=422, content={"detail": exc.errors, "error": "invalid_trade"})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# --- Request Models ---

class SizingRequest(BaseModel):
    entry_price: float
    stop_loss: float
    risk_percent: float
    take_profit: Optional[float] = None
    account_balance: Optional[float] = None


class PnLRequest(BaseModel):
    direction: Direction
    entry_price: float
    exit_price: Optional[float] = None
    lot_size: float


class BalanceApplyRequest(BaseModel):
    balance: Balance
    denomination: Denomination
    amount: float


# --- Dependency Injection ---

@lru_cache
def get_datasource() -> ITradeSource:
    db_url = os.getenv("DATABASE_URL")
    if db_url:
        from tradejournal.infrastructure.persistence.postgres_repo import PostgresTradeRepo
        try:
            return PostgresTradeRepo(db_url)
        except Exception as e:
            logger.error(f"Failed to connect to DB: {e}")
            raise
    logger.info("DATABASE_URL not set. Using in-memory storage.")
    return InMemoryTradeSource()


@lru_cache
def get_config() -> InstrumentConfig:
    return InstrumentConfig.from_env()


@lru_cache
def get_service() -> JournalService:
    return JournalService(get_datasource(), get_config())


# --- Endpoints ---

@app.get("/health")
async def health(config: InstrumentConfig = Depends(get_config)):
    return {"status": "healthy", "pair": config.pair}


@app.get("/v1/trades", response_model=List[Trade])
async def list_trades(
    user: str = Query(..., description="Journal owner"),
    service: JournalService = Depends(get_service),
):
    return await service.list_trades(user)


@app.post("/v1/trades", response_model=Trade, status_code=201)
async def add_trade(
    user: str = Query(..., description="Journal owner"),
    form: Dict[str, Any] = Body(...),
    service: JournalService = Depends(get_service),
):
    """
    Record a trade. lot_size may be omitted when risk_percent and stop_loss
    are given; it is then sized against the configured account balance.
    """
    result = await service.submit(user, form)
    if isinstance(result, Rejected):
        raise HTTPException(status_code=422, detail=result.errors)
    return result


@app.delete("/v1/trades/{trade_id}", status_code=204)
async def delete_trade(
    trade_id: str,
    user: str = Query(...),
    service: JournalService = Depends(get_service),
):
    try:
        await service.delete_trade(user, trade_id)
    except TradeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/v1/analytics", response_model=Union[AnalyticsSnapshot, NoData])
async def get_analytics(
    user: str = Query(...),
    service: JournalService = Depends(get_service),
):
    return await service.analytics(user)


@app.get("/v1/analytics/monthly", response_model=List[MonthlyBucket])
async def get_monthly(
    user: str = Query(...),
    service: JournalService = Depends(get_service),
):
    return await service.monthly(user)


@app.get("/v1/analytics/breakdown", response_model=BreakdownResponse)
async def get_breakdown(
    user: str = Query(...),
    service: JournalService = Depends(get_service),
):
    return await service.breakdown(user)


@app.post("/v1/sizing/preview", response_model=PositionPlan)
async def preview_sizing(req: SizingRequest, service: JournalService = Depends(get_service)):
    return service.preview_sizing(
        req.entry_price, req.stop_loss, req.risk_percent, req.take_profit, req.account_balance
    )


@app.post("/v1/pnl/preview", response_model=PnLResult)
async def preview_pnl(req: PnLRequest, service: JournalService = Depends(get_service)):
    return service.preview_pnl(req.direction, req.entry_price, req.exit_price, req.lot_size)


@app.post("/v1/balance/apply", response_model=Balance)
async def apply_balance(req: BalanceApplyRequest):
    return apply_result(req.balance, req.denomination, req.amount)

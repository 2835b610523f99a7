from typing import Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictFloat, StrictInt

from spinpool.config import AppConfig
from spinpool.core.catalog import all_symbols
from spinpool.core.engine import SpinEngine
from spinpool.core.ledger import mask_wallet
from spinpool.core.logger import get_logger

logger = get_logger("api")

router = APIRouter()

# ==================== Request Models ====================

class SpinRequest(BaseModel):
    # Strict: JSON booleans and numeric strings are not stakes
    betAmount: Union[StrictInt, StrictFloat]
    walletAddress: Optional[str] = None


# ==================== Helpers ====================

def get_engine(request: Request) -> SpinEngine:
    return request.app.state.engine


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def invalid_bet_response() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid bet amount"})


def serialize_win(win) -> dict:
    return {
        "id": win.id,
        "address": win.address,
        "amount": float(win.amount),
        "symbol": win.symbol.value,
        "timestamp": win.timestamp,
    }


# ==================== Wallet Endpoints ====================

@router.get("/balance/{address}")
def get_balance(address: str, engine: SpinEngine = Depends(get_engine)):
    balance = engine.get_balance(address)
    return {"balance": float(balance)}


# ==================== Game Endpoints ====================

@router.post("/spin")
def spin(
    data: SpinRequest,
    engine: SpinEngine = Depends(get_engine),
    config: AppConfig = Depends(get_config),
):
    slots = config.slots
    if not slots.request_min_bet <= data.betAmount <= slots.request_max_bet:
        logger.info(f"Rejected spin request with bet {data.betAmount}")
        return invalid_bet_response()

    wallet = data.walletAddress or slots.default_wallet
    outcome = engine.spin(wallet, data.betAmount)

    logger.debug(
        f"Spin {mask_wallet(wallet)} bet={data.betAmount} "
        f"win={outcome.result.win_amount} balance={outcome.balance}"
    )
    return {"result": outcome.result.to_dict(), "balance": float(outcome.balance)}


# ==================== Feed Endpoints ====================

@router.get("/recent-wins")
def get_recent_wins(engine: SpinEngine = Depends(get_engine)):
    wins = engine.get_recent_wins()
    return {"wins": [serialize_win(win) for win in wins]}


@router.get("/pool-stats")
def get_pool_stats(engine: SpinEngine = Depends(get_engine)):
    stats = engine.get_pool_stats()
    return {
        "totalLiquidity": float(stats.total_liquidity),
        "userShare": float(stats.user_share),
        "volume24h": float(stats.volume_24h),
        "apy": float(stats.apy),
    }


@router.get("/symbols")
def get_symbols():
    """Symbol table for the reel renderer."""
    return {"symbols": [symbol.to_dict() for symbol in all_symbols()]}

# app/routes/health.py
from fastapi import APIRouter, Depends
import time

from app.context import AppContext
from app.database.dependencies import get_context

router = APIRouter(tags=["health"])


@router.get("/health")
@router.head("/health")
async def health_check(ctx: AppContext = Depends(get_context)):
    """Health check endpoint. Reports the store without failing on it."""
    database = "up" if await ctx.database.ping() else "down"
    return {"status": "ok", "timestamp": time.time(), "database": database}


@router.get("/wake")
@router.head("/wake")
async def wake_up():
    """Wake up endpoint for keeping service alive."""
    return {"status": "awake", "timestamp": time.time()}

"""
HakooLab History API
====================
Recent successful calculations.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException

from ..core.config import get_settings
from ..models import SessionLocal
from ..services.history import CalculationHistory

router = APIRouter(prefix="/api/history", tags=["History"])

_history: Optional[CalculationHistory] = None


def get_history() -> CalculationHistory:
    """Process-wide history, capped by HAKOOLAB_HISTORY_LIMIT."""
    global _history
    if _history is None:
        _history = CalculationHistory(SessionLocal, limit=get_settings().history_limit)
    return _history


@router.get("")
async def list_history(search: Optional[str] = None, category: Optional[str] = None,
                       favorites_only: bool = False):
    """List runs newest first, optionally filtered by text, category and favorite flag."""
    runs = get_history().list(search=search, category=category, favorites_only=favorites_only)
    return {"runs": runs, "total": len(runs)}


@router.post("/{run_id}/favorite")
async def toggle_run_favorite(run_id: str):
    """Star or unstar one run."""
    try:
        run = get_history().toggle_favorite(run_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if run is None:
        raise HTTPException(status_code=404, detail=f"Run '{run_id}' not found")
    return run


@router.delete("")
async def clear_history():
    try:
        removed = get_history().clear()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "cleared", "removed": removed}

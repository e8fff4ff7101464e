"""
HakooLab API
FastAPI server for the HakooLab engineering calculators

Features:
- Calculator catalog, search and execution
- Favorites drawer persistence
- Calculation history
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import psutil
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from sqlalchemy import text

from . import __version__
from .api import calculators_router, favorites_router, history_router
from .api.favorites import get_favorites_store
from .calculators import calculator_registry
from .core.config import get_settings
from .core.logger import configure_from_settings, get_logger, log_dir
from .models import SessionLocal, init_db

log = get_logger(__name__)

app = FastAPI(
    title="HakooLab API",
    description="Water-treatment engineering calculators: hydraulics, RO, dosing, indices",
    version=__version__,
)

app.include_router(calculators_router)
app.include_router(favorites_router)
app.include_router(history_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

startup_time = datetime.now()


def _uptime_seconds() -> int:
    return int((datetime.now() - startup_time).total_seconds())


def _nearest_existing(path: Path) -> Path:
    """The path itself, or its closest ancestor that exists on disk."""
    while not path.exists() and path != path.parent:
        path = path.parent
    return path


@app.on_event("startup")
async def startup_event():
    """Configure logging, create tables and load favorites."""
    configure_from_settings()
    init_db()
    get_favorites_store()

    calculators = calculator_registry.list_all()
    log.info(f"Calculator catalog: {len(calculators)} calculators loaded")
    for calculator in calculators:
        log.debug(f"  {calculator.metadata.id}: {calculator.metadata.name}")


class SystemStatus(BaseModel):
    system: str
    status: str
    version: str
    calculators: int
    timestamp: str
    uptime_seconds: Optional[int] = None


@app.get("/api/status", response_model=SystemStatus)
async def get_status():
    """
    Get system status.
    Returns the current state of the HakooLab API.
    """
    return SystemStatus(
        system="HakooLab",
        status="LIVE",
        version=__version__,
        calculators=len(calculator_registry.list_all()),
        timestamp=datetime.now().isoformat(),
        uptime_seconds=_uptime_seconds(),
    )


@app.get("/api/health")
async def health_check():
    """
    Health check endpoint.
    Checks the database, disk space and memory.
    """
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok, db_message = True, "OK"
    except Exception as e:
        log.error(f"Database health check failed: {e}")
        db_ok, db_message = False, str(e)
    finally:
        db.close()

    disk = psutil.disk_usage(str(_nearest_existing(log_dir())))
    disk_free_gb = disk.free / (1024 ** 3)
    disk_ok = disk_free_gb > 1.0

    memory = psutil.virtual_memory()
    memory_ok = memory.percent < 90

    all_ok = db_ok and disk_ok and memory_ok

    return {
        "status": "healthy" if all_ok else "degraded",
        "checks": {
            "database": {"ok": db_ok, "message": db_message},
            "disk": {
                "ok": disk_ok,
                "free_gb": round(disk_free_gb, 2),
                "message": "OK" if disk_ok else "Low disk space",
            },
            "memory": {
                "ok": memory_ok,
                "used_percent": memory.percent,
                "message": "OK" if memory_ok else "High memory usage",
            },
        },
        "uptime_seconds": _uptime_seconds(),
    }


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "message": "Welcome to HakooLab API",
        "docs": "/docs",
        "status_endpoint": "/api/status",
    }


def run():
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    configure_from_settings()
    log.info(f"Starting HakooLab API on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

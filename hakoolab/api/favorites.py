"""
HakooLab Favorites API
======================
Bookmark calculators for the favorites drawer.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, field_validator

from ..calculators import calculator_registry
from ..models import SessionLocal
from ..services.favorites import FavoritesStore

router = APIRouter(prefix="/api/favorites", tags=["Favorites"])

_store: Optional[FavoritesStore] = None


def get_favorites_store() -> FavoritesStore:
    """Process-wide store, hydrated on first use."""
    global _store
    if _store is None:
        _store = FavoritesStore(SessionLocal)
    if not _store.has_hydrated:
        _store.hydrate()
    return _store


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class FavoriteToggleRequest(BaseModel):
    """
    Toggle request. Title and route default to the catalog entry
    when the key is a registered calculator id.
    """
    key: str
    title: Optional[str] = None
    route: Optional[str] = None
    group: Optional[str] = None

    @field_validator('key')
    @classmethod
    def validate_key(cls, v):
        if not v or not v.strip():
            raise ValueError('Favorite key must not be empty')
        return v.strip()


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("")
async def list_favorites():
    store = get_favorites_store()
    items = [item.to_dict() for item in store.list()]
    return {"favorites": items, "total": len(items), "error": store.error}


@router.get("/{key}")
async def get_favorite(key: str):
    store = get_favorites_store()
    item = store.get(key)
    return {"key": key, "is_favorite": item is not None, "item": item.to_dict() if item else None}


@router.post("/toggle")
async def toggle_favorite(data: FavoriteToggleRequest):
    """
    Add or remove a favorite.

    Returns the new state of the key.
    """
    title, route, group = data.title, data.route, data.group
    calculator = calculator_registry.get(data.key)
    if calculator:
        meta = calculator.metadata
        title = title or meta.name
        route = route or meta.route
        group = group or meta.category.value

    if not title or not route:
        raise HTTPException(status_code=422, detail="Title and route are required for unknown keys")

    try:
        is_favorite = get_favorites_store().toggle(data.key, title, route, group)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"key": data.key, "is_favorite": is_favorite}


@router.delete("/{key}")
async def remove_favorite(key: str):
    store = get_favorites_store()
    if not store.is_favorite(key):
        raise HTTPException(status_code=404, detail=f"Favorite '{key}' not found")
    try:
        store.remove(key)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"key": key, "is_favorite": False}


@router.delete("")
async def clear_favorites():
    try:
        get_favorites_store().clear()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "cleared"}

"""
HakooLab Favorites Store
========================
Bookmarked calculators, kept in memory and persisted to the database.

The store is gated on hydration: until `hydrate()` has loaded the
persisted rows, reads answer empty and writes are ignored, so a screen
rendered before loading finishes never shows or overwrites stale state.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.logger import get_logger
from ..models import FavoriteRecord

log = get_logger(__name__)


@dataclass
class FavoriteItem:
    key: str
    title: str
    route: str
    added_at: int  # epoch ms
    group: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _is_valid(record: FavoriteRecord) -> bool:
    return bool(record.key and record.title and record.route) and isinstance(record.added_at, int)


class FavoritesStore:
    """
    Favorites keyed by calculator id.

    Args:
        session_factory: Callable returning a new SQLAlchemy session
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._favorites: Dict[str, FavoriteItem] = {}
        self.has_hydrated = False
        self.error: Optional[str] = None

    # =========================================================================
    # HYDRATION
    # =========================================================================

    def hydrate(self) -> None:
        """
        Load persisted favorites, dropping incomplete rows.

        A failed load still marks the store hydrated, with `error` set, so
        the UI can proceed with an empty list.
        """
        try:
            favorites, removed = self._load()
            self._favorites = favorites
            self.error = None
            log.info(f"Favorites hydrated: {len(favorites)} item(s), {removed} invalid removed")
        except Exception as e:
            self._favorites = {}
            self.error = "Failed to load saved favorites"
            log.error(f"Failed to hydrate favorites: {e}")
        finally:
            self.has_hydrated = True

    def _load(self) -> Tuple[Dict[str, FavoriteItem], int]:
        db = self._session_factory()
        try:
            favorites: Dict[str, FavoriteItem] = {}
            removed = 0
            for record in db.query(FavoriteRecord).all():
                if _is_valid(record):
                    favorites[record.key] = FavoriteItem(
                        key=record.key,
                        title=record.title,
                        route=record.route,
                        added_at=record.added_at,
                        group=record.group,
                    )
                else:
                    log.warning(f"Removed invalid favorite: {record.to_dict()}")
                    db.delete(record)
                    removed += 1
            if removed:
                db.commit()
            return favorites, removed
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    # =========================================================================
    # QUERIES
    # =========================================================================

    def is_favorite(self, key: str) -> bool:
        if not key or not self.has_hydrated:
            return False
        return key in self._favorites

    def get(self, key: str) -> Optional[FavoriteItem]:
        if not self.has_hydrated:
            return None
        return self._favorites.get(key)

    def list(self) -> List[FavoriteItem]:
        """Favorites, most recently added first. Empty before hydration."""
        if not self.has_hydrated:
            return []
        return sorted(self._favorites.values(), key=lambda item: item.added_at, reverse=True)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def toggle(self, key: str, title: str, route: str, group: Optional[str] = None) -> bool:
        """
        Add the favorite if absent, remove it if present.

        Returns:
            True if the key is a favorite after the call
        """
        if not key or not self.has_hydrated:
            log.warning("Cannot toggle favorite: store not hydrated or key missing")
            return False

        if key in self._favorites:
            self.remove(key)
            log.info(f"Removed favorite: {key}")
            return False

        item = FavoriteItem(key=key, title=title, route=route, group=group, added_at=_now_ms())
        db = self._session_factory()
        try:
            db.merge(FavoriteRecord(**item.to_dict()))
            db.commit()
        except Exception as e:
            db.rollback()
            log.error(f"Failed to add favorite {key}: {e}")
            raise
        finally:
            db.close()

        self._favorites[key] = item
        self.error = None
        log.info(f"Added favorite: {key}")
        return True

    def remove(self, key: str) -> None:
        if not key or key not in self._favorites:
            return

        db = self._session_factory()
        try:
            db.query(FavoriteRecord).filter(FavoriteRecord.key == key).delete()
            db.commit()
        except Exception as e:
            db.rollback()
            log.error(f"Failed to remove favorite {key}: {e}")
            raise
        finally:
            db.close()

        del self._favorites[key]
        self.error = None

    def clear(self) -> None:
        db = self._session_factory()
        try:
            db.query(FavoriteRecord).delete()
            db.commit()
        except Exception as e:
            db.rollback()
            log.error(f"Failed to clear favorites: {e}")
            raise
        finally:
            db.close()

        self._favorites = {}
        self.error = None
        log.info("Cleared all favorites")

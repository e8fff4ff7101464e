"""
HakooLab Calculation History
============================
Successful calculator runs, newest first, capped at `limit` entries.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..calculators.base import CalculationResult, Calculator
from ..core.logger import get_logger
from ..models import CalculationRun

log = get_logger(__name__)

DEFAULT_LIMIT = 200


class CalculationHistory:
    """Persisted run log with search and category filtering."""

    def __init__(self, session_factory: Callable[[], Session], limit: int = DEFAULT_LIMIT):
        self._session_factory = session_factory
        self.limit = limit

    def record(self, calculator: Calculator, result: CalculationResult,
               tags: Optional[Iterable[str]] = None) -> dict:
        """
        Store one run and drop the oldest entries beyond the limit.

        Tags default to the calculator's own catalog tags.
        """
        meta = calculator.metadata
        run = CalculationRun(
            id=result.run_id,
            calculator_id=meta.id,
            calculator_name=meta.name,
            category=meta.category.value,
            created_at=result.completed_at or result.started_at,
            duration_ms=result.duration_ms or 0,
        )
        run.set_payload(result.inputs, result.outputs, result.display)
        run.set_tags(meta.tags if tags is None else tags)

        db = self._session_factory()
        try:
            db.add(run)
            db.flush()
            stale = (
                db.query(CalculationRun.id)
                .order_by(CalculationRun.created_at.desc())
                .offset(self.limit)
                .all()
            )
            if stale:
                db.query(CalculationRun).filter(
                    CalculationRun.id.in_([row.id for row in stale])
                ).delete(synchronize_session=False)
            db.commit()
            db.refresh(run)
            log.debug(f"Recorded run {run.id} of {meta.id}")
            return run.to_dict()
        except Exception as e:
            db.rollback()
            log.error(f"Failed to record run of {meta.id}: {e}")
            raise
        finally:
            db.close()

    def list(self, search: Optional[str] = None, category: Optional[str] = None,
             favorites_only: bool = False) -> List[dict]:
        """Runs newest first, filtered by calculator id/name/tags, category and favorite flag."""
        db = self._session_factory()
        try:
            query = db.query(CalculationRun)
            if category:
                query = query.filter(CalculationRun.category == category)
            if search:
                pattern = f"%{search.strip()}%"
                query = query.filter(or_(
                    CalculationRun.calculator_id.ilike(pattern),
                    CalculationRun.calculator_name.ilike(pattern),
                    CalculationRun.tags_json.ilike(pattern),
                ))
            if favorites_only:
                query = query.filter(CalculationRun.favorite.is_(True))
            return [run.to_dict() for run in query.order_by(CalculationRun.created_at.desc()).all()]
        finally:
            db.close()

    def toggle_favorite(self, run_id: str) -> Optional[dict]:
        """Flip the favorite flag of one run. Returns None when the run is gone."""
        db = self._session_factory()
        try:
            run = db.query(CalculationRun).filter(CalculationRun.id == run_id).first()
            if run is None:
                return None
            run.favorite = not run.favorite
            db.commit()
            db.refresh(run)
            log.debug(f"Run {run_id} favorite={run.favorite}")
            return run.to_dict()
        except Exception as e:
            db.rollback()
            log.error(f"Failed to toggle favorite on run {run_id}: {e}")
            raise
        finally:
            db.close()

    def clear(self) -> int:
        """Delete every run. Returns the number removed."""
        db = self._session_factory()
        try:
            count = db.query(CalculationRun).delete()
            db.commit()
            log.info(f"Cleared calculation history ({count} runs)")
            return count
        except Exception as e:
            db.rollback()
            log.error(f"Failed to clear history: {e}")
            raise
        finally:
            db.close()

"""
HakooLab Calculators API
========================
Catalog browsing, search and calculator execution.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

from ..calculators import calculator_registry, CalculatorCategory, ExecutionStatus
from ..core.logger import get_logger
from .history import get_history

log = get_logger(__name__)

router = APIRouter(prefix="/api/calculators", tags=["Calculators"])


class CalculatorSearchRequest(BaseModel):
    """Search request for calculators."""
    query: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None


class CalculatorRunRequest(BaseModel):
    """Raw form values, as typed by the user."""
    inputs: Dict[str, Any] = Field(default_factory=dict)
    locale: Optional[str] = None
    tags: Optional[List[str]] = None


def _summary(calculator) -> dict:
    meta = calculator.metadata
    return {**meta.model_dump(mode="json"), "route": meta.route}


@router.get("/catalog")
async def get_calculator_catalog():
    """
    Get Full Calculator Catalog

    Returns all registered calculators grouped by category, in drawer order.
    """
    catalog = calculator_registry.to_catalog()
    return {
        "categories": catalog,
        "total_calculators": sum(len(entries) for entries in catalog.values()),
        "category_counts": {cat: len(entries) for cat, entries in catalog.items()},
    }


@router.post("/search")
async def search_calculators(request: CalculatorSearchRequest):
    """
    Search Calculators

    Matches the query against id, name, description and tags.
    An unknown category yields no results.
    """
    category = None
    if request.category:
        try:
            category = CalculatorCategory(request.category)
        except ValueError:
            return {"results": [], "total": 0}

    calculators = calculator_registry.search(request.query, category, request.tags)
    return {
        "results": [_summary(c) for c in calculators],
        "total": len(calculators),
    }


@router.get("/{calculator_id}")
async def get_calculator(calculator_id: str):
    """
    Get Calculator Definition

    Metadata, input schema (also as JSON Schema) and output units.
    """
    calculator = calculator_registry.get(calculator_id)
    if not calculator:
        raise HTTPException(status_code=404, detail=f"Calculator '{calculator_id}' not found")
    return calculator.to_dict()


@router.post("/{calculator_id}/run")
async def run_calculator(calculator_id: str, request: CalculatorRunRequest):
    """
    Run a Calculator

    Input errors return 422 with the message and the offending field.
    Successful runs are added to the calculation history.
    """
    calculator = calculator_registry.get(calculator_id)
    if not calculator:
        raise HTTPException(status_code=404, detail=f"Calculator '{calculator_id}' not found")

    result = calculator.run(request.inputs, locale=request.locale)
    if result.status == ExecutionStatus.FAILED:
        raise HTTPException(
            status_code=422,
            detail={"message": result.error, "field": result.field},
        )

    try:
        get_history().record(calculator, result, tags=request.tags)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    log.info(f"[{calculator_id}] calculated in {result.duration_ms} ms")
    return result.model_dump(mode="json")

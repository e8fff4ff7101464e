"""
HakooLab Calculator Catalog
===========================
The Contract - every calculator inherits from Calculator.

Features:
- Declarative input schema (JSON Schema for auto-form generation)
- Raw string inputs parsed with to_num, then guarded by the formulas
- Standardized run interface returning numbers plus display strings
- Metadata for catalog browsing and favorites
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional, Type
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from datetime import datetime
import math
import uuid

from ..core.logger import get_logger
from ..modules.formatting import fmt
from ..modules.validation import ValidationError, to_num

log = get_logger(__name__)


class FieldType(str, Enum):
    """Supported input field types for dynamic forms."""
    NUMBER = "number"
    SELECT = "select"
    TEXT = "text"
    BOOLEAN = "boolean"


class InputField(BaseModel):
    """Definition of a single calculator input."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Field identifier (snake_case)")
    label: str = Field(..., description="Display label for UI")
    type: FieldType = Field(default=FieldType.NUMBER)
    required: bool = Field(default=True)
    default: Optional[Any] = Field(default=None)
    unit: Optional[str] = Field(default=None)
    placeholder: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    # For SELECT
    options: Optional[List[Dict[str, str]]] = Field(default=None, description="[{value, label}]")
    # For NUMBER
    min_value: Optional[float] = Field(default=None, alias="min")
    max_value: Optional[float] = Field(default=None, alias="max")
    step: Optional[float] = Field(default=None)


class InputSchema(BaseModel):
    """Complete input schema for a calculator."""
    fields: List[InputField] = Field(default_factory=list)

    def to_json_schema(self) -> Dict[str, Any]:
        """Convert to standard JSON Schema for form generators."""
        properties = {}
        required = []

        type_map = {
            FieldType.NUMBER: {"type": "number"},
            FieldType.SELECT: {"type": "string"},
            FieldType.TEXT: {"type": "string"},
            FieldType.BOOLEAN: {"type": "boolean"},
        }

        for field in self.fields:
            prop = {
                "title": field.label,
                "description": field.description or "",
            }
            prop.update(type_map.get(field.type, {"type": "string"}))

            if field.options:
                prop["enum"] = [opt["value"] for opt in field.options]
            if field.min_value is not None:
                prop["minimum"] = field.min_value
            if field.max_value is not None:
                prop["maximum"] = field.max_value
            if field.default is not None:
                prop["default"] = field.default

            properties[field.name] = prop

            if field.required and field.default is None:
                required.append(field.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }


class CalculatorCategory(str, Enum):
    """Catalog sections, in drawer order."""
    HYDRAULICS = "hydraulics"
    ELECTRICAL = "electrical"
    RO = "ro"
    DOSING = "dosing"
    INDICES = "indices"
    CONVERSIONS = "conversions"
    GENERAL = "general"


class Difficulty(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CalculatorMetadata(BaseModel):
    """Metadata for catalog display and discovery."""
    id: str = Field(..., description="Stable catalog id, also the favorites key")
    name: str = Field(..., description="Human-readable name")
    description: str = Field(..., description="What does this calculator compute?")
    category: CalculatorCategory
    icon: str = Field(default="calculator", description="Lucide icon name")
    tags: List[str] = Field(default_factory=list)
    featured: bool = Field(default=False)
    difficulty: Difficulty = Field(default=Difficulty.BASIC)

    @property
    def route(self) -> str:
        return f"/calculators/{self.category.value}/{self.id}"


class ExecutionStatus(str, Enum):
    """Calculation status."""
    SUCCESS = "success"
    FAILED = "failed"


class CalculationResult(BaseModel):
    """Result of one calculator run."""
    status: ExecutionStatus
    calculator_id: str
    run_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    duration_ms: Optional[int] = None
    inputs: Dict[str, Any] = Field(default_factory=dict)
    outputs: Dict[str, Any] = Field(default_factory=dict)
    display: Dict[str, str] = Field(default_factory=dict)
    message: str = ""
    error: Optional[str] = None
    field: Optional[str] = None


class Calculator(ABC):
    """
    Base class for all HakooLab calculators.

    To create a new calculator:
    1. Inherit from Calculator
    2. Define metadata -> CalculatorMetadata
    3. Define input_schema -> InputSchema
    4. Implement compute(values) -> dict of outputs
    5. Optionally map outputs to units in `output_units`

    Example:
        @register_calculator
        class RecoveryCalculator(Calculator):
            output_units = {"recovery": "%"}

            @property
            def metadata(self) -> CalculatorMetadata:
                return CalculatorMetadata(
                    id="recovery",
                    name="RO Recovery",
                    description="Permeate over feed",
                    category=CalculatorCategory.RO,
                )

            @property
            def input_schema(self) -> InputSchema:
                return InputSchema(fields=[
                    InputField(name="qf", label="Feed flow", unit="m3/h"),
                    InputField(name="qp", label="Permeate flow", unit="m3/h"),
                ])

            def compute(self, values):
                return {"recovery": recovery_pct(values["qp"], values["qf"])}
    """

    output_units: Dict[str, str] = {}

    @property
    @abstractmethod
    def metadata(self) -> CalculatorMetadata:
        """Return calculator metadata for the catalog."""

    @property
    @abstractmethod
    def input_schema(self) -> InputSchema:
        """Return the input schema for dynamic form generation."""

    @abstractmethod
    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Run the formulas on parsed inputs."""

    def parse_inputs(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """
        Coerce raw form values to typed inputs.

        Numbers go through to_num (comma decimals accepted, garbage becomes
        0 and is caught by the formula guards). Missing optional fields take
        their default, or None when there is none.
        """
        values: Dict[str, Any] = {}

        for field in self.input_schema.fields:
            value = raw.get(field.name)
            if value is None or (isinstance(value, str) and not value.strip()):
                value = field.default
            if value is None:
                if field.required:
                    raise ValidationError(field.label, f"{field.label} is required")
                values[field.name] = None
                continue

            if field.type == FieldType.NUMBER:
                num = to_num(value)
                if field.min_value is not None and num < field.min_value:
                    raise ValidationError(field.label, f"{field.label} must be >= {field.min_value}")
                if field.max_value is not None and num > field.max_value:
                    raise ValidationError(field.label, f"{field.label} must be <= {field.max_value}")
                values[field.name] = num

            elif field.type == FieldType.SELECT:
                allowed = [opt["value"] for opt in field.options or []]
                if str(value) not in allowed:
                    raise ValidationError(field.label, f"{field.label} must be one of: {', '.join(allowed)}")
                values[field.name] = str(value)

            elif field.type == FieldType.BOOLEAN:
                if isinstance(value, str):
                    value = value.strip().lower() in ("1", "true", "yes", "on")
                values[field.name] = bool(value)

            else:
                values[field.name] = str(value).strip()

        return values

    def format_outputs(self, outputs: Dict[str, Any], locale: Optional[str] = None) -> Dict[str, str]:
        """Display strings for the outputs: numbers via fmt, the rest as text."""
        display = {}
        for name, value in outputs.items():
            if isinstance(value, bool) or value is None:
                continue
            if isinstance(value, (int, float)) and math.isfinite(value):
                display[name] = fmt(value, self.output_units.get(name), locale=locale)
            elif isinstance(value, str):
                display[name] = value
        return display

    def run(self, raw: Dict[str, Any], locale: Optional[str] = None) -> CalculationResult:
        """Parse, compute and format. Input errors become a failed result."""
        start_time = datetime.now()
        calculator_id = self.metadata.id

        try:
            values = self.parse_inputs(raw)
            outputs = self.compute(values)
            self._check_finite(outputs)
        except ValidationError as e:
            log.warning(f"[{calculator_id}] rejected input: {e.message}")
            return self._failed(calculator_id, raw, start_time, e.message, e.field)
        except ValueError as e:
            log.warning(f"[{calculator_id}] inconsistent input: {e}")
            return self._failed(calculator_id, raw, start_time, str(e), None)
        except ArithmeticError as e:
            log.warning(f"[{calculator_id}] inputs out of numeric range: {e!r}")
            return self._failed(calculator_id, raw, start_time, "Inputs are out of numeric range", None)

        completed_at = datetime.now()
        return CalculationResult(
            status=ExecutionStatus.SUCCESS,
            calculator_id=calculator_id,
            started_at=start_time,
            completed_at=completed_at,
            duration_ms=int((completed_at - start_time).total_seconds() * 1000),
            inputs=values,
            outputs=outputs,
            display=self.format_outputs(outputs, locale),
            message="Calculated",
        )

    @staticmethod
    def _check_finite(outputs: Dict[str, Any]) -> None:
        for name, value in outputs.items():
            if isinstance(value, float) and not math.isfinite(value):
                raise ValidationError(name, f"{name} is out of range")

    @staticmethod
    def _failed(calculator_id: str, raw: Dict[str, Any], start_time: datetime,
                error: str, field: Optional[str]) -> CalculationResult:
        completed_at = datetime.now()
        return CalculationResult(
            status=ExecutionStatus.FAILED,
            calculator_id=calculator_id,
            started_at=start_time,
            completed_at=completed_at,
            duration_ms=int((completed_at - start_time).total_seconds() * 1000),
            inputs=dict(raw),
            error=error,
            field=field,
            message="Input validation failed",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize calculator for API response."""
        return {
            "metadata": {**self.metadata.model_dump(mode="json"), "route": self.metadata.route},
            "input_schema": self.input_schema.model_dump(mode="json"),
            "json_schema": self.input_schema.to_json_schema(),
            "output_units": dict(self.output_units),
        }


# ============================================================================
# CALCULATOR REGISTRY
# ============================================================================

class CalculatorRegistry:
    """Central registry for all available calculators."""

    _instance: Optional["CalculatorRegistry"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._calculators = {}
        return cls._instance

    def register(self, calculator: Calculator) -> None:
        """Register a calculator instance."""
        calculator_id = calculator.metadata.id
        if calculator_id in self._calculators:
            raise ValueError(f"Calculator '{calculator_id}' is already registered")
        self._calculators[calculator_id] = calculator

    def get(self, calculator_id: str) -> Optional[Calculator]:
        return self._calculators.get(calculator_id)

    def list_all(self) -> List[Calculator]:
        return list(self._calculators.values())

    def list_by_category(self, category: CalculatorCategory) -> List[Calculator]:
        return [c for c in self._calculators.values() if c.metadata.category == category]

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[CalculatorCategory] = None,
        tags: Optional[List[str]] = None,
    ) -> List[Calculator]:
        """Search calculators by name, description or tags, optionally filtered."""
        query = (query or "").strip().lower()
        wanted_tags = {tag.lower() for tag in tags or []}
        results = []
        for calculator in self._calculators.values():
            meta = calculator.metadata
            if category is not None and meta.category != category:
                continue
            meta_tags = {tag.lower() for tag in meta.tags}
            if wanted_tags and not wanted_tags <= meta_tags:
                continue
            if query and not (
                query in meta.id
                or query in meta.name.lower()
                or query in meta.description.lower()
                or any(query in tag for tag in meta_tags)
            ):
                continue
            results.append(calculator)
        return results

    def to_catalog(self) -> Dict[str, List[Dict[str, Any]]]:
        """Catalog grouped by category, in category order."""
        catalog: Dict[str, List[Dict[str, Any]]] = {}
        for category in CalculatorCategory:
            entries = [
                {**c.metadata.model_dump(mode="json"), "route": c.metadata.route}
                for c in self.list_by_category(category)
            ]
            if entries:
                catalog[category.value] = entries
        return catalog


# Global registry instance
calculator_registry = CalculatorRegistry()


def register_calculator(calculator_class: Type[Calculator]) -> Type[Calculator]:
    """Decorator to auto-register a calculator class."""
    calculator_registry.register(calculator_class())
    return calculator_class

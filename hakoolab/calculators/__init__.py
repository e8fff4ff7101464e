"""
HakooLab Calculator System
==========================
Declarative calculators with auto-registration.

Features:
- Calculator base class with parse / compute / format
- InputSchema for dynamic form generation
- CalculatorRegistry for catalog browsing and search
- @register_calculator decorator for auto-registration
"""

from .base import (
    Calculator,
    CalculatorMetadata,
    CalculatorCategory,
    Difficulty,
    InputSchema,
    InputField,
    FieldType,
    CalculationResult,
    ExecutionStatus,
    calculator_registry,
    register_calculator,
)

# Import the library to register every calculator
from . import library

__all__ = [
    "Calculator",
    "CalculatorMetadata",
    "CalculatorCategory",
    "Difficulty",
    "InputSchema",
    "InputField",
    "FieldType",
    "CalculationResult",
    "ExecutionStatus",
    "calculator_registry",
    "register_calculator",
]

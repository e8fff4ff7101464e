"""
HakooLab Engineering Modules
Pure formula library: hydraulics, RO, indices, dosing, conversions
"""

from .validation import ValidationError, to_num, must_positive, clamp
from .formatting import fmt

__all__ = ["ValidationError", "to_num", "must_positive", "clamp", "fmt"]

"""
General Calculators
===================
Surface areas, molecular weight and the ideal gas law.
"""

from typing import Dict, Any

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory, Difficulty,
    InputSchema, InputField, FieldType, register_calculator,
)
from ...modules import chemistry
from ...modules.engineering import SHAPES, surface_area


@register_calculator
class SurfaceAreaCalculator(Calculator):
    """Square (side), rectangle (length x width) or circle (radius)."""

    output_units = {"area_m2": "m2"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="surface-area",
            name="Surface Area",
            description="Area of a square, rectangle or circle",
            category=CalculatorCategory.GENERAL,
            icon="square",
            tags=["area", "geometry", "basin"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="shape", label="Shape", type=FieldType.SELECT, default="rectangle",
                       options=[{"value": shape, "label": shape.title()} for shape in SHAPES]),
            InputField(name="a", label="Side / length / radius", unit="m", placeholder="10"),
            InputField(name="b", label="Width", unit="m", required=False,
                       description="Rectangle only"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        shape = values["shape"]
        if shape == "rectangle":
            dims = (values["a"], values["b"] or 0)
        else:
            dims = (values["a"],)
        return {"area_m2": surface_area(shape, *dims)}


@register_calculator
class MolecularWeightCalculator(Calculator):

    output_units = {"molecular_weight": "g/mol"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="molecular-weight",
            name="Molecular Weight",
            description="Molar mass of a chemical formula such as Ca(OH)2",
            category=CalculatorCategory.GENERAL,
            icon="atom",
            tags=["chemistry", "molar-mass", "formula"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="formula", label="Formula", type=FieldType.TEXT, placeholder="CaCO3",
                       description=", ".join(chemistry.COMMON_COMPOUNDS)),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        formula = values["formula"]
        return {
            "formula": formula,
            "name": chemistry.COMMON_COMPOUNDS.get(formula, ""),
            "molecular_weight": chemistry.molecular_weight(formula),
        }


@register_calculator
class IdealGasCalculator(Calculator):
    """PV = nRT, leave the unknown blank."""

    output_units = {"p_atm": "atm", "v_l": "L", "n_mol": "mol", "t_k": "K"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="ideal-gas",
            name="Ideal Gas Law",
            description="Solve PV = nRT for pressure, volume, moles or temperature",
            category=CalculatorCategory.GENERAL,
            icon="wind",
            tags=["chemistry", "gas", "pv=nrt"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="p_atm", label="Pressure", unit="atm", required=False),
            InputField(name="v_l", label="Volume", unit="L", required=False),
            InputField(name="n_mol", label="Amount", unit="mol", required=False),
            InputField(name="t_k", label="Temperature", unit="K", required=False),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        gas = chemistry.ideal_gas(values["p_atm"], values["v_l"], values["n_mol"], values["t_k"])
        return {
            "p_atm": gas.p_atm,
            "v_l": gas.v_l,
            "n_mol": gas.n_mol,
            "t_k": gas.t_k,
            "solved_for": gas.solved_for,
        }

"""
Chemical Dosing Calculators
===========================
Dilution, hypochlorite and acid/alkali dosing pumps, solution strength.
"""

from typing import Dict, Any

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory, Difficulty,
    InputSchema, InputField, register_calculator,
)
from ...modules import dosing


@register_calculator
class DilutionCalculator(Calculator):
    """C1.V1 = C2.V2, leave the unknown blank."""

    output_units = {"c1": "", "v1": "", "c2": "", "v2": ""}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="c1v1",
            name="Dilution C1V1 = C2V2",
            description="Solve the dilution equation for the missing quantity",
            category=CalculatorCategory.DOSING,
            icon="test-tube",
            tags=["dilution", "c1v1", "chemistry"],
            featured=True,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name=name, label=name.upper(), required=False,
                       description="Leave blank to solve for it")
            for name in dosing.DILUTION_FIELDS
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        result = dosing.c1v1_c2v2(**{name: values[name] for name in dosing.DILUTION_FIELDS})
        return {
            "c1": result.c1,
            "v1": result.v1,
            "c2": result.c2,
            "v2": result.v2,
            "solved_for": result.solved_for,
        }


@register_calculator
class ChlorineDoseCalculator(Calculator):
    """Hypochlorite dosing pump flow for a target residual dose."""

    output_units = {"c_stock_mgl": "mg/L", "q_dose_lph": "L/h", "daily_lpd": "L/day"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="chlorine-dose",
            name="Chlorine Dosing",
            description="Hypochlorite stock strength and dosing pump flow",
            category=CalculatorCategory.DOSING,
            icon="syringe",
            tags=["chlorine", "hypochlorite", "disinfection", "dosing"],
            featured=True,
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="flow_m3h", label="Water flow", unit="m3/h", placeholder="20"),
            InputField(name="dose_mgl", label="Target dose", unit="mg/L", placeholder="2"),
            InputField(name="available_pct", label="Available chlorine", unit="%", default=12.5),
            InputField(name="density_g_per_ml", label="Solution density", unit="g/mL", default=1.2),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        dose = dosing.chlorine_dose_pump_flow_lph(
            values["flow_m3h"], values["dose_mgl"],
            values["available_pct"], values["density_g_per_ml"],
        )
        return {
            "c_stock_mgl": dose.c_stock_mgl,
            "q_dose_lph": dose.q_dose_lph,
            "daily_lpd": dose.daily_lpd,
        }


@register_calculator
class AcidAlkaliDoseCalculator(Calculator):

    output_units = {"delta_meql": "meq/L", "q_chem_lph": "L/h", "daily_lpd": "L/day"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="acid-alkali-dose",
            name="Acid / Alkali Dosing",
            description="Dosing pump flow for an alkalinity adjustment",
            category=CalculatorCategory.DOSING,
            icon="pipette",
            tags=["acid", "alkali", "alkalinity", "ph", "dosing"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="flow_m3h", label="Water flow", unit="m3/h", placeholder="50"),
            InputField(name="delta_alk_mgl", label="Alkalinity change", unit="mg/L CaCO3",
                       placeholder="30"),
            InputField(name="normality", label="Chemical normality", unit="N", placeholder="1"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        dose = dosing.acid_alkali_dose_lph(values["flow_m3h"], values["delta_alk_mgl"], values["normality"])
        return {
            "delta_meql": dose.delta_meql,
            "q_chem_lph": dose.q_chem_lph,
            "daily_lpd": dose.daily_lpd,
        }


@register_calculator
class SolutionStrengthCalculator(Calculator):
    """Weight percent to molarity and normality."""

    output_units = {"molarity": "M", "normality": "N", "g_per_l": "g/L"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="solution-strength",
            name="Solution Strength",
            description="Molarity and normality of a commercial chemical from its weight percent",
            category=CalculatorCategory.DOSING,
            icon="flask-round",
            tags=["molarity", "normality", "wt%", "chemistry"],
            difficulty=Difficulty.ADVANCED,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="wt_percent", label="Concentration", unit="wt%", placeholder="98"),
            InputField(name="density_g_per_ml", label="Density", unit="g/mL", placeholder="1.84"),
            InputField(name="mw_g_per_mol", label="Molar mass", unit="g/mol", placeholder="98.08"),
            InputField(name="equivalence", label="Equivalents per mole", default=1,
                       description="H2SO4: 2, HCl / NaOH: 1"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        m = dosing.wt_percent_to_molarity(values["wt_percent"], values["density_g_per_ml"], values["mw_g_per_mol"])
        return {
            "molarity": m,
            "normality": dosing.normality_from_molarity(m, values["equivalence"]),
            "g_per_l": m * values["mw_g_per_mol"],
        }

"""
Electrical Calculators
======================
Three-phase motor current, voltage drop and energy cost.
"""

from typing import Dict, Any

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory, Difficulty,
    InputSchema, InputField, register_calculator,
)
from ...modules import engineering as eng


@register_calculator
class ThreePhaseCalculator(Calculator):
    """
    Motor line current and first cable estimate.
    I = P x 1000 / (sqrt(3) x V x pf x eta)
    """

    output_units = {
        "current_a": "A",
        "apparent_kva": "kVA",
        "real_kw": "kW",
        "cable_mm2": "mm2",
    }

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="three-phase",
            name="Three-Phase Current",
            description="Line current, apparent power and cable cross-section for a motor",
            category=CalculatorCategory.ELECTRICAL,
            icon="plug-zap",
            tags=["electrical", "motor", "current", "cable"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="p_kw", label="Motor power", unit="kW", placeholder="30"),
            InputField(name="v_line", label="Line voltage", unit="V", default=400),
            InputField(name="pf", label="Power factor", default=0.85, min=0, max=1, step=0.01),
            InputField(name="eff", label="Motor efficiency", default=0.92, min=0, max=1, step=0.01),
            InputField(name="current_density", label="Current density", unit="A/mm2", default=3),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        current = eng.three_phase_current_a(values["p_kw"], values["v_line"], values["pf"], values["eff"])
        kva = eng.apparent_power_kva(values["v_line"], current)
        return {
            "current_a": current,
            "apparent_kva": kva,
            "real_kw": eng.real_power_kw(kva, values["pf"]),
            "cable_mm2": eng.cable_size_estimate_mm2(current, values["current_density"]),
        }


@register_calculator
class VoltageDropCalculator(Calculator):

    output_units = {"drop_pct": "%", "drop_v": "V"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="voltage-drop",
            name="Voltage Drop",
            description="Three-phase cable voltage drop from R and X per km",
            category=CalculatorCategory.ELECTRICAL,
            icon="cable",
            tags=["electrical", "cable", "voltage-drop"],
            difficulty=Difficulty.ADVANCED,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="i_a", label="Current", unit="A", placeholder="55"),
            InputField(name="l_m", label="Cable length", unit="m", placeholder="80"),
            InputField(name="v_line", label="Line voltage", unit="V", default=400),
            InputField(name="r_ohm_per_km", label="Resistance", unit="ohm/km", placeholder="1.15"),
            InputField(name="x_ohm_per_km", label="Reactance", unit="ohm/km", default=0.08),
            InputField(name="cosphi", label="Power factor", default=0.85, min=0, max=1, step=0.01),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        drop_pct = eng.voltage_drop_percent(
            values["i_a"], values["l_m"], values["v_line"],
            values["r_ohm_per_km"], values["x_ohm_per_km"], values["cosphi"],
        )
        return {"drop_pct": drop_pct, "drop_v": drop_pct / 100 * values["v_line"]}


@register_calculator
class EnergyCostCalculator(Calculator):

    output_units = {"energy_kwh": "kWh"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="energy-cost",
            name="Energy Cost",
            description="Energy consumption and cost of running equipment",
            category=CalculatorCategory.ELECTRICAL,
            icon="receipt",
            tags=["energy", "cost", "tariff"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="power_kw", label="Power", unit="kW", placeholder="30"),
            InputField(name="hours", label="Running time", unit="h", default=24),
            InputField(name="tariff", label="Tariff", unit="per kWh", placeholder="0.12"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        kwh = eng.energy_kwh(values["power_kw"], values["hours"])
        return {"energy_kwh": kwh, "cost": eng.energy_cost(kwh, values["tariff"])}

"""
RO & Desalination Calculators
=============================
Recovery / flux / SEC / rejection, brine balance, osmotic pressure and
TDS <-> conductivity.
"""

from typing import Dict, Any

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory, Difficulty,
    InputSchema, InputField, FieldType, register_calculator,
)
from ...modules import ro
from ...modules.conversions import (
    DEFAULT_TDS_FACTOR, c_to_k, ec_us_cm_to_tds_mgl, tds_mgl_to_ec_us_cm,
)
from ...modules.validation import must_positive

BAR_TO_PSI = 14.5038


@register_calculator
class ROBasicsCalculator(Calculator):
    """Recovery, flux, SEC and salt rejection of an RO train."""

    output_units = {
        "recovery_pct": "%",
        "flux_lmh": "LMH",
        "sec_kwh_per_m3": "kWh/m3",
        "rejection_pct": "%",
        "concentration_factor": "x",
    }

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="ro-basics",
            name="RO Basics",
            description="Recovery, flux, specific energy and salt rejection",
            category=CalculatorCategory.RO,
            icon="percent",
            tags=["RO", "recovery", "rejection", "flux", "sec"],
            featured=True,
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="qf", label="Feed flow", unit="m3/h", placeholder="20"),
            InputField(name="qp", label="Permeate flow", unit="m3/h", placeholder="15"),
            InputField(name="area_m2", label="Membrane area", unit="m2", placeholder="200"),
            InputField(name="p_kw", label="Input power", unit="kW", placeholder="30"),
            InputField(name="cf", label="Feed TDS", unit="mg/L", placeholder="35000"),
            InputField(name="cp", label="Permeate TDS", unit="mg/L", placeholder="350"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        perf = ro.ro_performance(
            values["qf"], values["qp"], values["area_m2"],
            values["p_kw"], values["cf"], values["cp"],
        )
        return {
            "recovery_pct": perf.recovery_pct,
            "flux_lmh": perf.flux_lmh,
            "sec_kwh_per_m3": perf.sec_kwh_per_m3,
            "rejection_pct": perf.rejection_pct,
            "concentration_factor": ro.concentration_factor(perf.recovery_pct),
        }


@register_calculator
class BrineCalculator(Calculator):
    """Concentrate flow and TDS from a feed/permeate mass balance."""

    output_units = {"qb_m3h": "m3/h", "cb_mgl": "mg/L", "recovery_pct": "%", "concentration_factor": "x"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="brine",
            name="Brine Mass Balance",
            description="Concentrate flow and TDS with the concentration factor",
            category=CalculatorCategory.RO,
            icon="beaker",
            tags=["RO", "brine", "concentrate", "mass-balance"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="qf", label="Feed flow", unit="m3/h", placeholder="20"),
            InputField(name="cf", label="Feed TDS", unit="mg/L", placeholder="35000"),
            InputField(name="qp", label="Permeate flow", unit="m3/h", placeholder="8"),
            InputField(name="cp", label="Permeate TDS", unit="mg/L", default=0),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        brine = ro.brine_tds_simple(values["qf"], values["cf"], values["qp"], values["cp"])
        recovery = ro.recovery_pct(values["qp"], values["qf"])
        return {
            "qb_m3h": brine.qb,
            "cb_mgl": brine.cb,
            "recovery_pct": recovery,
            "concentration_factor": ro.concentration_factor(recovery),
        }


@register_calculator
class OsmoticPressureCalculator(Calculator):
    """Van't Hoff osmotic pressure from TDS or molarity, temperature entered in C."""

    output_units = {"osmotic_bar": "bar", "osmotic_atm": "atm", "osmotic_psi": "psi", "t_k": "K"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="osmotic-pressure",
            name="Osmotic Pressure",
            description="Osmotic pressure of a saline solution (Van't Hoff)",
            category=CalculatorCategory.RO,
            icon="droplet",
            tags=["RO", "osmotic", "pressure", "van't hoff"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="mode", label="Input", type=FieldType.SELECT, default="tds",
                       options=[
                           {"value": "tds", "label": "TDS"},
                           {"value": "molarity", "label": "Molarity"},
                       ]),
            InputField(name="tds_mgl", label="TDS", unit="mg/L", placeholder="35000", required=False),
            InputField(name="molarity", label="Molarity", unit="mol/L", placeholder="0.6", required=False),
            InputField(name="t_c", label="Temperature", unit="C", default=25),
            InputField(name="i", label="Van't Hoff factor", default=2),
            InputField(name="mw_kg_per_mol", label="Equivalent molar mass", unit="kg/mol",
                       default=0.05844, description="NaCl: 0.05844"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        t_k = c_to_k(values["t_c"])
        if values["mode"] == "molarity":
            atm = ro.osmotic_pressure_atm_from_molarity(values["molarity"] or 0, t_k, values["i"])
            bar = atm * ro.BAR_PER_ATM
        else:
            bar = ro.osmotic_pressure_bar(values["tds_mgl"] or 0, t_k, values["i"], values["mw_kg_per_mol"])
            atm = bar / ro.BAR_PER_ATM
        return {"osmotic_bar": bar, "osmotic_atm": atm, "osmotic_psi": bar * BAR_TO_PSI, "t_k": t_k}


@register_calculator
class TDSConverterCalculator(Calculator):
    """TDS <-> EC with an empirical water-type factor."""

    output_units = {"tds_mgl": "mg/L", "ec_us_cm": "uS/cm"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="tds-converter",
            name="TDS Converter",
            description="Convert between TDS and electrical conductivity",
            category=CalculatorCategory.RO,
            icon="droplets",
            tags=["RO", "TDS", "EC", "conductivity"],
            featured=True,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="value", label="Value", placeholder="1000"),
            InputField(name="input_unit", label="Input", type=FieldType.SELECT, default="ec",
                       options=[
                           {"value": "ec", "label": "Conductivity (uS/cm)"},
                           {"value": "tds", "label": "TDS (mg/L)"},
                       ]),
            InputField(name="factor", label="Conversion factor", default=DEFAULT_TDS_FACTOR,
                       min=0.4, max=1.0, step=0.01,
                       description="0.5 - 0.7 depending on water type"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        value, factor = values["value"], values["factor"]
        must_positive(value, "Value")
        if values["input_unit"] == "ec":
            return {"ec_us_cm": value, "tds_mgl": ec_us_cm_to_tds_mgl(value, factor)}
        return {"tds_mgl": value, "ec_us_cm": tds_mgl_to_ec_us_cm(value, factor)}

"""
Unit Converters
===============
Flow, temperature and hardness converters built on the conversion
identities, plus table-driven converters (pressure, length, mass, volume,
volume flow) that show the value in every unit of their table.
"""

from typing import Dict, Any, List

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory,
    InputSchema, InputField, FieldType, register_calculator,
)
from ...modules import conversions as conv


def _unit_options(units: List[str]) -> List[Dict[str, str]]:
    return [{"value": unit, "label": unit} for unit in units]


def _from_unit_field(units: List[str], default: str) -> InputField:
    return InputField(name="from_unit", label="From", type=FieldType.SELECT,
                      default=default, options=_unit_options(units))


# ==============================================================================
# IDENTITY-BASED CONVERTERS
# ==============================================================================

@register_calculator
class FlowConverterCalculator(Calculator):
    """m3/h, L/s and US gpm."""

    output_units = {"m3h": "m3/h", "ls": "L/s", "gpm": "gpm"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="flow-converter",
            name="Flow Converter",
            description="Convert between m3/h, L/s and US gpm",
            category=CalculatorCategory.CONVERSIONS,
            icon="arrow-left-right",
            tags=["flow", "units", "gpm"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="value", label="Value", placeholder="100"),
            _from_unit_field(["m3h", "ls", "gpm"], "m3h"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        value, unit = values["value"], values["from_unit"]
        if unit == "ls":
            m3h = conv.ls_to_m3h(value)
        elif unit == "gpm":
            m3h = conv.gpm_to_m3h(value)
        else:
            m3h = value
        return {"m3h": m3h, "ls": conv.m3h_to_ls(m3h), "gpm": conv.m3h_to_gpm(m3h)}


@register_calculator
class TemperatureConverterCalculator(Calculator):

    output_units = {"c": "C", "f": "F", "k": "K"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="temperature-converter",
            name="Temperature Converter",
            description="Convert between Celsius, Fahrenheit and Kelvin",
            category=CalculatorCategory.CONVERSIONS,
            icon="thermometer",
            tags=["temperature", "units"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="value", label="Value", placeholder="25"),
            _from_unit_field(["c", "f", "k"], "c"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        value, unit = values["value"], values["from_unit"]
        if unit == "f":
            c = conv.f_to_c(value)
        elif unit == "k":
            c = conv.k_to_c(value)
        else:
            c = value
        return {"c": c, "f": conv.c_to_f(c), "k": conv.c_to_k(c)}


@register_calculator
class HardnessConverterCalculator(Calculator):
    """mg/L as CaCO3, German and French degrees, meq/L and ppm."""

    output_units = {
        "mgl_caco3": "mg/L CaCO3", "dh": "dH", "fh": "fH", "meql": "meq/L", "ppm": "ppm",
    }

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="hardness-converter",
            name="Hardness Converter",
            description="Convert hardness between mg/L as CaCO3, German or French degrees, meq/L and ppm",
            category=CalculatorCategory.CONVERSIONS,
            icon="gem",
            tags=["hardness", "units", "caco3"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="value", label="Value", placeholder="250"),
            _from_unit_field(["mgl_caco3", "dh", "fh", "meql", "ppm"], "mgl_caco3"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        value, unit = values["value"], values["from_unit"]
        if unit == "dh":
            mgl = conv.dh_to_mgl_caco3(value)
        elif unit == "fh":
            mgl = conv.fh_to_mgl_caco3(value)
        elif unit == "meql":
            mgl = conv.meql_to_mgl_caco3(value)
        elif unit == "ppm":
            mgl = conv.ppm_to_mgl_caco3(value)
        else:
            mgl = value
        return {
            "mgl_caco3": mgl,
            "dh": conv.mgl_caco3_to_dh(mgl),
            "fh": conv.mgl_caco3_to_fh(mgl),
            "meql": conv.mgl_caco3_to_meql(mgl),
            "ppm": conv.mgl_caco3_to_ppm(mgl),
        }


# ==============================================================================
# TABLE-DRIVEN CONVERTERS
# ==============================================================================

class TableConverter(Calculator):
    """
    Converter over one factor table.

    Subclasses only set the class attributes; outputs are keyed by unit.
    """

    calculator_id: str = ""
    name: str = ""
    icon: str = "arrow-left-right"
    table: Dict[str, float] = {}
    default_unit: str = ""
    tags: List[str] = []

    @property
    def output_units(self) -> Dict[str, str]:
        return {unit: unit for unit in self.table}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id=self.calculator_id,
            name=self.name,
            description=f"Convert between {', '.join(self.table)}",
            category=CalculatorCategory.CONVERSIONS,
            icon=self.icon,
            tags=["units", *self.tags],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="value", label="Value", placeholder="1"),
            _from_unit_field(list(self.table), self.default_unit),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return conv.convert_all(values["value"], values["from_unit"], self.table)


@register_calculator
class PressureConverterCalculator(TableConverter):
    calculator_id = "pressure-converter"
    name = "Pressure Converter"
    icon = "gauge"
    table = conv.PRESSURE_TO_KPA
    default_unit = "bar"
    tags = ["pressure"]


@register_calculator
class LengthConverterCalculator(TableConverter):
    calculator_id = "length-converter"
    name = "Length Converter"
    icon = "ruler"
    table = conv.LENGTH_TO_M
    default_unit = "m"
    tags = ["length"]


@register_calculator
class MassConverterCalculator(TableConverter):
    calculator_id = "mass-converter"
    name = "Mass Converter"
    icon = "weight"
    table = conv.MASS_TO_KG
    default_unit = "kg"
    tags = ["mass"]


@register_calculator
class VolumeConverterCalculator(TableConverter):
    calculator_id = "volume-converter"
    name = "Volume Converter"
    icon = "cylinder"
    table = conv.VOLUME_TO_L
    default_unit = "L"
    tags = ["volume"]


@register_calculator
class VolumeFlowConverterCalculator(TableConverter):
    calculator_id = "volume-flow-converter"
    name = "Volume Flow Converter"
    table = conv.VOLUME_FLOW_TO_M3S
    default_unit = "m3h"
    tags = ["flow"]

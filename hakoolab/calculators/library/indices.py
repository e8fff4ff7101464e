"""
Water Stability Indices
=======================
LSI with the legacy RSI shortcut, and LSI with the Ryznar index.
"""

from typing import Dict, Any

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory, Difficulty,
    InputSchema, InputField, register_calculator,
)
from ...modules import indices
from ...modules.indices import RsiScale


def _water_fields():
    return [
        InputField(name="ph", label="pH", default=7.8, min=0, max=14, step=0.1),
        InputField(name="t_c", label="Temperature", unit="C", default=25),
        InputField(name="tds_mgl", label="TDS", unit="mg/L", default=500),
        InputField(name="ca_mgl", label="Calcium hardness", unit="mg/L CaCO3", default=120),
        InputField(name="alk_mgl", label="Alkalinity", unit="mg/L CaCO3", default=100),
    ]


@register_calculator
class LSICalculator(Calculator):
    """
    Langelier index with the `2 - LSI` stability shortcut.

    The shortcut is read on the 6.5 / 7.5 scale it was published with.
    """

    output_units = {"phs": "", "lsi": "", "rsi": ""}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="lsi",
            name="Langelier Index (LSI)",
            description="Calcium carbonate saturation index with a quick stability reading",
            category=CalculatorCategory.INDICES,
            icon="flask-conical",
            tags=["LSI", "RSI", "scaling", "corrosion"],
            featured=True,
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=_water_fields())

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        phs = indices.phs(values["t_c"], values["tds_mgl"], values["ca_mgl"], values["alk_mgl"])
        lsi = values["ph"] - phs
        rsi = indices.rsi_from_lsi(lsi)
        return {
            "phs": phs,
            "lsi": lsi,
            "rsi": rsi,
            "lsi_tendency": indices.interpret_lsi(lsi).value,
            "rsi_tendency": indices.interpret_rsi(rsi, RsiScale.LEGACY).value,
        }


@register_calculator
class LSIRSICalculator(Calculator):
    """LSI and the Ryznar stability index RSI = 2.pHs - pH."""

    output_units = {"phs": "", "lsi": "", "rsi": ""}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="lsi-rsi",
            name="LSI & Ryznar Index",
            description="Langelier and Ryznar indices with scaling / corrosion tendency",
            category=CalculatorCategory.INDICES,
            icon="activity",
            tags=["LSI", "RSI", "ryznar", "scaling", "corrosion"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=_water_fields())

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        result = indices.saturation_indices(
            values["ph"], values["t_c"], values["tds_mgl"], values["ca_mgl"], values["alk_mgl"],
            scale=RsiScale.RYZNAR,
        )
        return {
            "phs": result.phs,
            "lsi": result.lsi,
            "rsi": result.rsi,
            "lsi_tendency": result.lsi_tendency.value,
            "rsi_tendency": result.rsi_tendency.value,
        }

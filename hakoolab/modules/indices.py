"""
HakooLab Water Chemistry Indices

Langelier Saturation Index: LSI = pH - pHs
Ryznar Stability Index:     RSI = 2 x pHs - pH

pHs = (9.3 + A + B) - (C + D)
    A = (log10(TDS) - 1) / 10               TDS in mg/L
    B = -13.12 x log10(T + 273) + 34.55     T in C
    C = log10(Ca hardness as CaCO3) - 0.4   mg/L
    D = log10(Alkalinity as CaCO3)          mg/L

Field approximations. Two RSI variants coexist: the Ryznar form and a
legacy `2 - LSI` shortcut. They are not equivalent and are exposed
separately, each with its own interpretation scale.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .validation import must_positive


class WaterTendency(str, Enum):
    """Scaling / corrosion tendency of a water."""
    SCALING = "scaling"
    BALANCED = "balanced"
    CORROSIVE = "corrosive"


class RsiScale(Enum):
    """RSI interpretation thresholds (scaling below, corrosive above)."""
    RYZNAR = (6.0, 7.0)
    LEGACY = (6.5, 7.5)

    def __init__(self, scaling_below: float, corrosive_above: float):
        self.scaling_below = scaling_below
        self.corrosive_above = corrosive_above


LSI_BAND = 0.1


@dataclass
class SaturationIndices:
    phs: float
    lsi: float
    rsi: float
    rsi_legacy: float
    lsi_tendency: WaterTendency
    rsi_tendency: WaterTendency


def _log10(x: float, name: str) -> float:
    return math.log10(must_positive(x, name))


def phs(t_c: float, tds_mgl: float, ca_mgl: float, alk_mgl: float) -> float:
    """Saturation pH of calcium carbonate."""
    a = (_log10(tds_mgl, "TDS (mg/L)") - 1) / 10
    b = -13.12 * _log10(t_c + 273, "Temperature (K)") + 34.55
    c = _log10(ca_mgl, "Calcium hardness (mg/L as CaCO3)") - 0.4
    d = _log10(alk_mgl, "Alkalinity (mg/L as CaCO3)")
    return (9.3 + a + b) - (c + d)


def lsi(ph: float, t_c: float, tds_mgl: float, ca_mgl: float, alk_mgl: float) -> float:
    return ph - phs(t_c, tds_mgl, ca_mgl, alk_mgl)


def rsi(ph: float, phs_value: float) -> float:
    """Ryznar Stability Index from a precomputed pHs."""
    return 2 * phs_value - ph


def rsi_from_lsi(lsi_value: float) -> float:
    """Legacy shortcut kept for older results; not the Ryznar index."""
    return 2 - lsi_value


def interpret_lsi(lsi_value: float) -> WaterTendency:
    if lsi_value > LSI_BAND:
        return WaterTendency.SCALING
    if lsi_value < -LSI_BAND:
        return WaterTendency.CORROSIVE
    return WaterTendency.BALANCED


def interpret_rsi(rsi_value: float, scale: RsiScale = RsiScale.RYZNAR) -> WaterTendency:
    if rsi_value < scale.scaling_below:
        return WaterTendency.SCALING
    if rsi_value > scale.corrosive_above:
        return WaterTendency.CORROSIVE
    return WaterTendency.BALANCED


def saturation_indices(
    ph: float,
    t_c: float,
    tds_mgl: float,
    ca_mgl: float,
    alk_mgl: float,
    scale: RsiScale = RsiScale.RYZNAR,
) -> SaturationIndices:
    """pHs, LSI and both RSI variants; `rsi_tendency` follows the Ryznar value."""
    phs_value = phs(t_c, tds_mgl, ca_mgl, alk_mgl)
    lsi_value = ph - phs_value
    rsi_value = rsi(ph, phs_value)
    return SaturationIndices(
        phs=phs_value,
        lsi=lsi_value,
        rsi=rsi_value,
        rsi_legacy=rsi_from_lsi(lsi_value),
        lsi_tendency=interpret_lsi(lsi_value),
        rsi_tendency=interpret_rsi(rsi_value, scale),
    )

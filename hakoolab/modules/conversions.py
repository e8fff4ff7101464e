"""
HakooLab Unit Conversions

Implements:
- Flow (m3/h, L/s, US gpm)
- Temperature (C, F, K)
- Hardness (mg/L as CaCO3, German and French degrees, meq/L, ppm)
- TDS <-> electrical conductivity (empirical factor)
- Table-driven converters for pressure, length, mass, volume and volume flow

These are algebraic identities: no validation, negative or zero input is
the caller's concern.
"""

from __future__ import annotations

from typing import Dict


# ==============================================================================
# FACTORS
# ==============================================================================

M3H_PER_LS = 3.6
GPM_PER_M3H = 4.402
MGL_CACO3_PER_DH = 17.848
MGL_CACO3_PER_MEQL = 50.0
MGL_CACO3_PER_FH = 10.0
MGL_CACO3_PER_PPM = 1.0  # dilute water, density ~1 kg/L
DEFAULT_TDS_FACTOR = 0.65  # typical 0.5 - 0.7 depending on water type
KELVIN_OFFSET = 273.15


# ==============================================================================
# LENGTH / FLOW
# ==============================================================================

def m_to_mm(m: float) -> float:
    return m * 1000


def mm_to_m(mm: float) -> float:
    return mm / 1000


def m3h_to_ls(m3h: float) -> float:
    return m3h * 1000 / 3600


def ls_to_m3h(ls: float) -> float:
    return ls * M3H_PER_LS


def m3h_to_gpm(m3h: float) -> float:
    return m3h * GPM_PER_M3H


def gpm_to_m3h(gpm: float) -> float:
    return gpm / GPM_PER_M3H


# ==============================================================================
# TEMPERATURE
# ==============================================================================

def c_to_f(c: float) -> float:
    return c * 9 / 5 + 32


def f_to_c(f: float) -> float:
    return (f - 32) * 5 / 9


def c_to_k(c: float) -> float:
    return c + KELVIN_OFFSET


def k_to_c(k: float) -> float:
    return k - KELVIN_OFFSET


# ==============================================================================
# HARDNESS
# ==============================================================================

def mgl_caco3_to_dh(mgl: float) -> float:
    return mgl / MGL_CACO3_PER_DH


def dh_to_mgl_caco3(dh: float) -> float:
    return dh * MGL_CACO3_PER_DH


def mgl_caco3_to_meql(mgl: float) -> float:
    return mgl / MGL_CACO3_PER_MEQL


def meql_to_mgl_caco3(meq: float) -> float:
    return meq * MGL_CACO3_PER_MEQL


def mgl_caco3_to_fh(mgl: float) -> float:
    return mgl / MGL_CACO3_PER_FH


def fh_to_mgl_caco3(fh: float) -> float:
    return fh * MGL_CACO3_PER_FH


def mgl_caco3_to_ppm(mgl: float) -> float:
    return mgl / MGL_CACO3_PER_PPM


def ppm_to_mgl_caco3(ppm: float) -> float:
    return ppm * MGL_CACO3_PER_PPM


# ==============================================================================
# TDS / CONDUCTIVITY
# ==============================================================================

def ec_us_cm_to_tds_mgl(ec: float, factor: float = DEFAULT_TDS_FACTOR) -> float:
    """TDS (mg/L) = EC (uS/cm) x factor."""
    return ec * factor


def tds_mgl_to_ec_us_cm(tds: float, factor: float = DEFAULT_TDS_FACTOR) -> float:
    """EC (uS/cm) = TDS (mg/L) / factor."""
    return tds / factor


# ==============================================================================
# TABLE-DRIVEN CONVERTERS
# Each table maps a unit to its size in the table's base unit.
# ==============================================================================

PRESSURE_TO_KPA: Dict[str, float] = {
    "bar": 100,
    "kPa": 1,
    "psi": 6.89476,
    "atm": 101.325,
    "MPa": 1000,
    "mmHg": 0.133322,
    "mH2O": 9.80665,
}

LENGTH_TO_M: Dict[str, float] = {
    "km": 1000,
    "m": 1,
    "cm": 0.01,
    "mm": 0.001,
    "inch": 0.0254,
    "ft": 0.3048,
}

MASS_TO_KG: Dict[str, float] = {
    "kg": 1,
    "g": 0.001,
    "mg": 0.000001,
    "ton": 1000,
    "lb": 0.453592,
    "oz": 0.0283495,
}

VOLUME_TO_L: Dict[str, float] = {
    "m3": 1000,
    "L": 1,
    "ml": 0.001,
    "cm3": 0.001,
    "gallon": 3.785,
}

VOLUME_FLOW_TO_M3S: Dict[str, float] = {
    "m3s": 1,
    "m3h": 1 / 3600,
    "Ls": 0.001,
    "gpm": 0.00006309,
}


def _factor(unit: str, table: Dict[str, float]) -> float:
    try:
        return table[unit]
    except KeyError:
        raise ValueError(f"Unknown unit '{unit}'. Expected one of: {', '.join(table)}")


def convert(value: float, from_unit: str, to_unit: str, table: Dict[str, float]) -> float:
    """
    Convert between two units of the same table.

    Example:
        >>> convert(1, "bar", "kPa", PRESSURE_TO_KPA)
        100.0
    """
    return value * _factor(from_unit, table) / _factor(to_unit, table)


def convert_all(value: float, from_unit: str, table: Dict[str, float]) -> Dict[str, float]:
    """Convert `value` into every unit of the table."""
    base = value * _factor(from_unit, table)
    return {unit: base / factor for unit, factor in table.items()}

"""
HakooLab Reverse Osmosis / Desalination Formulas

Recovery, salt rejection, flux, concentration factor, brine mass balance,
Van't Hoff osmotic pressure and specific energy consumption.

Typical seawater RO values: recovery 40-50 %, rejection 99.0-99.7 %,
flux 12-18 LMH, SEC 2.5-4.5 kWh/m3.
"""

from __future__ import annotations

from dataclasses import dataclass

from .validation import ValidationError, must_non_negative, must_positive

R_BAR_L_PER_MOL_K = 0.08314
R_ATM_L_PER_MOL_K = 0.0821
BAR_PER_ATM = 1.01325
NACL_MW_KG_PER_MOL = 0.05844


@dataclass
class BrineResult:
    """Concentrate stream from a simple TDS mass balance."""
    qb: float  # m3/h
    cb: float  # mg/L


@dataclass
class ROPerformance:
    recovery_pct: float
    flux_lmh: float
    sec_kwh_per_m3: float
    rejection_pct: float


def recovery_pct(qp: float, qf: float) -> float:
    """Recovery % = permeate / feed x 100."""
    return must_positive(qp, "Permeate flow") / must_positive(qf, "Feed flow") * 100


def salt_rejection_pct(cp: float, cf: float) -> float:
    """Salt rejection % = (1 - Cp/Cf) x 100."""
    return (1 - must_positive(cp, "Permeate TDS") / must_positive(cf, "Feed TDS")) * 100


def flux_lmh(qp_m3h: float, area_m2: float) -> float:
    """Permeate flux in litres per m2 of membrane per hour."""
    return must_positive(qp_m3h, "Permeate flow (m3/h)") * 1000 / must_positive(area_m2, "Membrane area (m2)")


def concentration_factor(recovery_percent: float) -> float:
    """CF = 1 / (1 - R), R as a fraction. Recovery must stay below 100 %."""
    r = must_positive(recovery_percent, "Recovery (%)")
    if r >= 100:
        raise ValidationError("Recovery (%)", "Recovery (%) must be < 100")
    return 1 / (1 - r / 100)


def brine_tds_simple(qf: float, cf: float, qp: float, cp: float) -> BrineResult:
    """
    Concentrate flow and TDS from Qf.Cf = Qp.Cp + Qb.Cb, Qb = Qf - Qp.

    Raises:
        ValueError: feed flow does not exceed permeate flow
    """
    qb = must_positive(qf, "Feed flow") - must_positive(qp, "Permeate flow")
    if qb <= 0:
        raise ValueError("Feed flow must exceed permeate flow")
    cb = (qf * must_positive(cf, "Feed TDS") - qp * must_non_negative(cp, "Permeate TDS")) / qb
    return BrineResult(qb=qb, cb=cb)


def osmotic_pressure_bar(
    tds_mgl: float,
    t_k: float,
    i: float = 2,
    mw_kg_per_mol: float = NACL_MW_KG_PER_MOL,
) -> float:
    """
    Van't Hoff osmotic pressure pi = i x R x T x M.

    Molarity is approximated from TDS and an equivalent molar mass
    (NaCl by default, i = 2 for a fully dissociated 1:1 salt).

    Args:
        tds_mgl: Total dissolved solids (mg/L)
        t_k: Absolute temperature (K)
        i: Van't Hoff factor
        mw_kg_per_mol: Equivalent molar mass (kg/mol)

    Returns:
        Osmotic pressure in bar
    """
    g_per_l = must_positive(tds_mgl, "TDS (mg/L)") / 1000
    mol_per_l = g_per_l / (must_positive(mw_kg_per_mol, "Molar mass (kg/mol)") * 1000)
    return must_positive(i, "Van't Hoff factor") * R_BAR_L_PER_MOL_K * must_positive(t_k, "Temperature (K)") * mol_per_l


def osmotic_pressure_atm_from_molarity(molarity: float, t_k: float, i: float = 2) -> float:
    """
    Van't Hoff osmotic pressure from a known molarity, in atm.

    pi = i x M x 0.0821 x T

    Example:
        >>> round(osmotic_pressure_atm_from_molarity(0.6, 298.15), 2)
        29.37
    """
    return (
        must_positive(i, "Van't Hoff factor")
        * must_positive(molarity, "Molarity (mol/L)")
        * R_ATM_L_PER_MOL_K
        * must_positive(t_k, "Temperature (K)")
    )


def sec_kwh_per_m3(p_kw: float, qp_m3h: float) -> float:
    """Specific energy consumption = input power / permeate flow."""
    return must_positive(p_kw, "Power (kW)") / must_positive(qp_m3h, "Permeate flow (m3/h)")


def ro_performance(qf: float, qp: float, area_m2: float, p_kw: float, cf: float, cp: float) -> ROPerformance:
    return ROPerformance(
        recovery_pct=recovery_pct(qp, qf),
        flux_lmh=flux_lmh(qp, area_m2),
        sec_kwh_per_m3=sec_kwh_per_m3(p_kw, qp),
        rejection_pct=salt_rejection_pct(cp, cf),
    )

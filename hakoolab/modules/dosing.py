"""
HakooLab Chemical Dosing Formulas

- Dilution C1.V1 = C2.V2
- Weight percent <-> molarity, molarity <-> normality
- Hypochlorite dosing pump flow
- Acid / alkali dosing pump flow for an alkalinity adjustment
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .conversions import MGL_CACO3_PER_MEQL
from .validation import must_positive

DILUTION_FIELDS = ("c1", "v1", "c2", "v2")


@dataclass
class Dilution:
    """All four dilution quantities, with the one that was solved for."""
    c1: float
    v1: float
    c2: float
    v2: float
    solved_for: str

    @property
    def solved_value(self) -> float:
        return getattr(self, self.solved_for)


@dataclass
class ChlorineDose:
    c_stock_mgl: float   # available chlorine in the stock solution
    q_dose_lph: float    # dosing pump flow
    daily_lpd: float     # stock solution consumed per day


@dataclass
class ChemicalDose:
    delta_meql: float
    q_chem_lph: float
    daily_lpd: float


def c1v1_c2v2(
    c1: Optional[float] = None,
    v1: Optional[float] = None,
    c2: Optional[float] = None,
    v2: Optional[float] = None,
) -> Dilution:
    """
    Solve the dilution equation for the one quantity left as None.

    Example:
        >>> c1v1_c2v2(c1=12.5, v1=1, c2=2.5).v2
        5.0

    Raises:
        ValueError: not exactly three quantities given
        ValidationError: a given quantity is not positive
    """
    known = {"c1": c1, "v1": v1, "c2": c2, "v2": v2}
    missing = [name for name, value in known.items() if value is None]
    if len(missing) != 1:
        raise ValueError("Give exactly three of C1, V1, C2, V2 to solve for the fourth")

    for name, value in known.items():
        if value is not None:
            must_positive(value, name.upper())

    unknown = missing[0]
    if unknown == "v2":
        v2 = c1 * v1 / c2
    elif unknown == "v1":
        v1 = c2 * v2 / c1
    elif unknown == "c1":
        c1 = c2 * v2 / v1
    else:
        c2 = c1 * v1 / v2

    return Dilution(c1=c1, v1=v1, c2=c2, v2=v2, solved_for=unknown)


def wt_percent_to_molarity(wt_percent: float, density_g_per_ml: float, mw_g_per_mol: float) -> float:
    """Molarity (mol/L) of a solution given as weight percent."""
    g_per_l = must_positive(density_g_per_ml, "Density (g/mL)") * 1000 * (must_positive(wt_percent, "Weight %") / 100)
    return g_per_l / must_positive(mw_g_per_mol, "Molar mass (g/mol)")


def molarity_to_wt_percent(m: float, density_g_per_ml: float, mw_g_per_mol: float) -> float:
    g_solute_per_l = must_positive(m, "Molarity (M)") * must_positive(mw_g_per_mol, "Molar mass (g/mol)")
    g_solution_per_l = must_positive(density_g_per_ml, "Density (g/mL)") * 1000
    return g_solute_per_l / g_solution_per_l * 100


def normality_from_molarity(m: float, equivalence: float) -> float:
    return must_positive(m, "Molarity (M)") * must_positive(equivalence, "Equivalence")


def molarity_from_normality(n: float, equivalence: float) -> float:
    return must_positive(n, "Normality (N)") / must_positive(equivalence, "Equivalence")


def chlorine_dose_pump_flow_lph(
    flow_m3h: float,
    dose_mgl: float,
    available_pct: float,
    density_g_per_ml: float = 1.2,
) -> ChlorineDose:
    """
    Hypochlorite dosing pump flow.

    C_stock (mg/L) = density x 1000 x available x 1000
    Q_dose (L/h)   = dose x Q_water x 1000 / C_stock

    Args:
        flow_m3h: Treated water flow (m3/h)
        dose_mgl: Target chlorine dose (mg/L)
        available_pct: Available chlorine of the stock (%)
        density_g_per_ml: Stock solution density (g/mL)

    Example:
        >>> round(chlorine_dose_pump_flow_lph(20, 2, 12.5, 1.2).q_dose_lph, 3)
        0.267
    """
    q_water = must_positive(flow_m3h, "Flow rate (m3/h)")
    dose = must_positive(dose_mgl, "Target dose (mg/L)")
    avail = must_positive(available_pct, "Available chlorine (%)") / 100
    density = must_positive(density_g_per_ml, "Solution density (g/mL)")

    c_stock = density * 1000 * avail * 1000  # g/L -> mg/L
    q_dose = dose * q_water * 1000 / c_stock
    return ChlorineDose(c_stock_mgl=c_stock, q_dose_lph=q_dose, daily_lpd=q_dose * 24)


def acid_alkali_dose_lph(flow_m3h: float, delta_alk_mgl_caco3: float, normality: float) -> ChemicalDose:
    """
    Acid or alkali dosing pump flow for an alkalinity change.

    Q_chem (L/h) = (dAlk / 50) x Q_water / N
    """
    q_water = must_positive(flow_m3h, "Flow rate (m3/h)")
    delta = must_positive(delta_alk_mgl_caco3, "Alkalinity change (mg/L as CaCO3)")
    n = must_positive(normality, "Normality (N)")

    delta_meql = delta / MGL_CACO3_PER_MEQL
    q_chem = delta_meql * q_water / n
    return ChemicalDose(delta_meql=delta_meql, q_chem_lph=q_chem, daily_lpd=q_chem * 24)

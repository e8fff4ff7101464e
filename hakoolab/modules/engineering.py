"""
HakooLab Engineering Formulas
Hydraulics, pumps and electrical sizing for water-treatment plants.

Implements:
- Pipe velocity, Hazen-Williams and Darcy-Weisbach friction loss
- Minor (fitting) losses and Total Dynamic Head
- Water / brake horsepower, pump affinity laws, NPSH available
- Three-phase current, apparent/real power, voltage drop, cable sizing
- Energy consumption and cost
- Process flow (Q = V x A) and simple surface areas

References: Hydraulic Institute, Crane TP-410.
All units are SI unless the parameter name says otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .validation import must_fraction, must_non_negative, must_positive

G = 9.80665            # m/s2
WATER_DENSITY = 998.0  # kg/m3 at ~20 C
HP_PER_KW = 1.34102209
SQRT3 = math.sqrt(3)


@dataclass
class Fluid:
    """Fluid properties used by the pump formulas."""
    rho: float = WATER_DENSITY     # kg/m3
    g: float = G                   # m/s2
    mu: Optional[float] = None     # Pa.s, informational


@dataclass
class HeadBreakdown:
    """Friction, minor and total head for a pumping line (m)."""
    friction_m: float
    minor_m: float
    tdh_m: float
    velocity_mps: float


@dataclass
class AffinityResult:
    """Pump duty point after a speed or impeller diameter change."""
    q2: float
    h2: float
    p2: float


@dataclass
class PumpPower:
    whp_kw: float
    bhp_kw: float
    bhp_hp: float


@dataclass
class ProcessFlow:
    """Q = V x A with the solved variable named."""
    q_m3s: float
    v_mps: float
    area_m2: float
    solved_for: str


# ==============================================================================
# PUMP POWER
# ==============================================================================

def water_hp_kw(q_m3h: float, h_m: float, fluid: Optional[Fluid] = None) -> float:
    """
    Hydraulic power delivered to the water.

    WHP = rho x g x Q x H / 1000

    Args:
        q_m3h: Flow rate (m3/h)
        h_m: Total head (m)
        fluid: Density and gravity, water at ~20 C by default

    Returns:
        Water horsepower in kW

    Example:
        >>> round(water_hp_kw(50, 40), 2)
        5.44
    """
    fluid = fluid or Fluid()
    q = must_positive(q_m3h, "Flow rate (m3/h)") / 3600  # m3/s
    h = must_positive(h_m, "Head (m)")
    rho = must_positive(fluid.rho, "Density (kg/m3)")
    g = must_positive(fluid.g, "Gravity (m/s2)")
    return rho * g * q * h / 1000


def brake_hp_kw(whp_kw: float, pump_eff: float = 0.75, mech_eff: float = 0.98) -> float:
    """Shaft power: BHP = WHP / (eta_pump x eta_mech), in kW."""
    return must_positive(whp_kw, "WHP (kW)") / (
        must_fraction(pump_eff, "Pump efficiency") * must_fraction(mech_eff, "Mechanical efficiency")
    )


def kw_to_hp(kw: float) -> float:
    return kw * HP_PER_KW


def hp_to_kw(hp: float) -> float:
    return hp / HP_PER_KW


def pump_power(q_m3h: float, h_m: float, pump_eff: float = 0.75, mech_eff: float = 0.98,
               fluid: Optional[Fluid] = None) -> PumpPower:
    """WHP and BHP for one duty point, as shown side by side on the pump screen."""
    whp = water_hp_kw(q_m3h, h_m, fluid)
    bhp = brake_hp_kw(whp, pump_eff, mech_eff)
    return PumpPower(whp_kw=whp, bhp_kw=bhp, bhp_hp=kw_to_hp(bhp))


def energy_kwh(power_kw: float, hours: float) -> float:
    return must_positive(power_kw, "Power (kW)") * must_positive(hours, "Time (h)")


def energy_cost(kwh: float, tariff_per_kwh: float) -> float:
    return must_positive(kwh, "Energy (kWh)") * must_positive(tariff_per_kwh, "Tariff")


# ==============================================================================
# PIPE HYDRAULICS
# ==============================================================================

def pipe_velocity_mps(q_m3h: float, d_mm: float) -> float:
    """Mean velocity v = Q / A for a full circular pipe (m/s)."""
    q = must_positive(q_m3h, "Flow rate (m3/h)") / 3600
    d = must_positive(d_mm, "Internal diameter (mm)") / 1000
    area = math.pi * d ** 2 / 4
    return q / area


def hazen_williams_head_loss(c: float, q_m3h: float, d_mm: float, l_m: float) -> float:
    """
    Friction head loss using the SI Hazen-Williams formula.

    hf = 10.67 x L x Q^1.852 / (C^1.852 x D^4.87)

    Args:
        c: Hazen-Williams roughness coefficient
        q_m3h: Flow rate (m3/h)
        d_mm: Internal diameter (mm)
        l_m: Pipe length (m)

    Returns:
        Head loss in m
    """
    q = must_positive(q_m3h, "Flow rate (m3/h)") / 3600
    d = must_positive(d_mm, "Internal diameter (mm)") / 1000
    c = must_positive(c, "C-factor")
    length = must_positive(l_m, "Length (m)")
    return 10.67 * length * q ** 1.852 / (c ** 1.852 * d ** 4.87)


def darcy_weisbach_head_loss(f: float, q_m3h: float, d_mm: float, l_m: float, g: float = G) -> float:
    """hf = f x (L/D) x v^2 / 2g (m)."""
    v = pipe_velocity_mps(q_m3h, d_mm)
    d = d_mm / 1000
    return (
        must_positive(f, "Friction factor")
        * (must_positive(l_m, "Length (m)") / d)
        * v ** 2 / (2 * must_positive(g, "Gravity (m/s2)"))
    )


def minor_losses_head(sum_k: float, q_m3h: float, d_mm: float, g: float = G) -> float:
    """Fitting losses: sum(K) x v^2 / 2g (m)."""
    v = pipe_velocity_mps(q_m3h, d_mm)
    return must_positive(sum_k, "Sum of K") * v ** 2 / (2 * must_positive(g, "Gravity (m/s2)"))


def total_dynamic_head(
    static_head_m: float,
    friction_head_m: float,
    minor_head_m: float,
    include_velocity_head: bool = False,
    q_m3h: float = 0,
    d_mm: float = 0,
    g: float = G,
) -> float:
    """
    TDH = static + friction + minor (+ velocity head).

    Negative friction or minor contributions are treated as zero so a
    rounding artifact never reduces the head. The velocity head is added
    only when requested and both flow and diameter are given.
    """
    tdh = (
        must_positive(static_head_m, "Static head (m)")
        + max(0.0, friction_head_m)
        + max(0.0, minor_head_m)
    )
    if include_velocity_head and q_m3h > 0 and d_mm > 0:
        v = pipe_velocity_mps(q_m3h, d_mm)
        tdh += v ** 2 / (2 * must_positive(g, "Gravity (m/s2)"))
    return tdh


def head_breakdown(
    static_head_m: float,
    c: float,
    q_m3h: float,
    d_mm: float,
    l_m: float,
    sum_k: float,
    include_velocity_head: bool = False,
) -> HeadBreakdown:
    """Hazen-Williams friction + minor losses + TDH for a single line."""
    friction = hazen_williams_head_loss(c, q_m3h, d_mm, l_m)
    minor = minor_losses_head(sum_k, q_m3h, d_mm)
    tdh = total_dynamic_head(
        static_head_m, friction, minor,
        include_velocity_head=include_velocity_head, q_m3h=q_m3h, d_mm=d_mm,
    )
    return HeadBreakdown(
        friction_m=friction,
        minor_m=minor,
        tdh_m=tdh,
        velocity_mps=pipe_velocity_mps(q_m3h, d_mm),
    )


# ==============================================================================
# PUMP AFFINITY / NPSH
# ==============================================================================

def affinity_by_speed(q1: float, h1: float, p1: float, n1: float, n2: float) -> AffinityResult:
    """Q ~ N, H ~ N^2, P ~ N^3."""
    r = must_positive(n2, "N2") / must_positive(n1, "N1")
    return AffinityResult(
        q2=must_positive(q1, "Q1") * r,
        h2=must_positive(h1, "H1") * r ** 2,
        p2=must_positive(p1, "P1") * r ** 3,
    )


def affinity_by_diameter(q1: float, h1: float, p1: float, d1: float, d2: float) -> AffinityResult:
    """Q ~ D^3, H ~ D^2, P ~ D^5."""
    r = must_positive(d2, "D2") / must_positive(d1, "D1")
    return AffinityResult(
        q2=must_positive(q1, "Q1") * r ** 3,
        h2=must_positive(h1, "H1") * r ** 2,
        p2=must_positive(p1, "P1") * r ** 5,
    )


def npsh_available(
    pvap_kpa: float,
    patm_kpa: float = 101.325,
    psurf_kpa: float = 0,
    rho: float = WATER_DENSITY,
    z_suction_m: float = 0,
    suction_loss_m: float = 0,
    g: float = G,
) -> float:
    """
    NPSHa = (Patm + Psurface)/rho.g + z - Pvap/rho.g - losses

    `z_suction_m` is positive for a flooded suction and negative for a
    suction lift. Negative losses count as zero.
    """
    rho_g = must_positive(rho, "Density (kg/m3)") * must_positive(g, "Gravity (m/s2)")
    head_atm = must_positive(patm_kpa, "Atmospheric pressure (kPa)") * 1000 / rho_g
    head_surf = must_non_negative(psurf_kpa, "Surface pressure (kPa)") * 1000 / rho_g
    head_vap = must_non_negative(pvap_kpa, "Vapour pressure (kPa)") * 1000 / rho_g
    return head_atm + head_surf + z_suction_m - head_vap - max(0.0, suction_loss_m)


# ==============================================================================
# ELECTRICAL
# ==============================================================================

def three_phase_current_a(p_kw: float, v_line: float, pf: float = 0.85, eff: float = 0.92) -> float:
    """Line current I = P x 1000 / (sqrt(3) x V x pf x eta)."""
    return must_positive(p_kw, "Power (kW)") * 1000 / (
        SQRT3
        * must_positive(v_line, "Line voltage (V)")
        * must_fraction(pf, "Power factor")
        * must_fraction(eff, "Motor efficiency")
    )


def apparent_power_kva(v_line: float, i_a: float) -> float:
    return SQRT3 * must_positive(v_line, "Line voltage (V)") * must_positive(i_a, "Current (A)") / 1000


def real_power_kw(kva: float, pf: float) -> float:
    return must_positive(kva, "Apparent power (kVA)") * must_fraction(pf, "Power factor")


def voltage_drop_percent(
    i_a: float,
    l_m: float,
    v_line: float,
    r_ohm_per_km: float,
    x_ohm_per_km: float = 0,
    cosphi: float = 0.85,
) -> float:
    """
    Three-phase voltage drop as a percentage of line voltage.

    dV% = sqrt(3) x I x (R cos(phi) + X sin(phi)) x L_km / V x 100
    """
    l_km = must_positive(l_m, "Length (m)") / 1000
    cosphi = must_fraction(cosphi, "Power factor")
    sinphi = math.sqrt(1 - min(1.0, cosphi * cosphi))
    dv = (
        SQRT3
        * must_positive(i_a, "Current (A)")
        * (must_positive(r_ohm_per_km, "R (ohm/km)") * cosphi
           + must_non_negative(x_ohm_per_km, "X (ohm/km)") * sinphi)
        * l_km
    )
    return dv / must_positive(v_line, "Line voltage (V)") * 100


def cable_size_estimate_mm2(i_a: float, current_density_a_per_mm2: float = 3) -> float:
    """First estimate of conductor cross-section from an allowed current density."""
    return must_positive(i_a, "Current (A)") / must_positive(
        current_density_a_per_mm2, "Current density (A/mm2)"
    )


# ==============================================================================
# PROCESS FLOW / AREAS
# ==============================================================================

def circle_area_m2(d_m: float) -> float:
    return math.pi * (must_positive(d_m, "Diameter (m)") / 2) ** 2


def process_flow(
    q_m3s: Optional[float] = None,
    v_mps: Optional[float] = None,
    area_m2: Optional[float] = None,
) -> ProcessFlow:
    """
    Solve Q = V x A for whichever of the three is not given.

    Example:
        >>> process_flow(v_mps=2, area_m2=0.5).q_m3s
        1.0
    """
    given = [name for name, value in (("q", q_m3s), ("v", v_mps), ("a", area_m2)) if value is not None]
    if len(given) != 2:
        raise ValueError("Give exactly two of flow, velocity and area")

    if q_m3s is None:
        v, a = must_positive(v_mps, "Velocity (m/s)"), must_positive(area_m2, "Area (m2)")
        return ProcessFlow(q_m3s=v * a, v_mps=v, area_m2=a, solved_for="q")
    if v_mps is None:
        q, a = must_positive(q_m3s, "Flow rate (m3/s)"), must_positive(area_m2, "Area (m2)")
        return ProcessFlow(q_m3s=q, v_mps=q / a, area_m2=a, solved_for="v")
    q, v = must_positive(q_m3s, "Flow rate (m3/s)"), must_positive(v_mps, "Velocity (m/s)")
    return ProcessFlow(q_m3s=q, v_mps=v, area_m2=q / v, solved_for="area")


SHAPES = ("square", "rectangle", "circle")


def surface_area(shape: str, *dims: float) -> float:
    """Area of a square (side), rectangle (length, width) or circle (radius)."""
    if shape == "square":
        (side,) = dims
        return must_positive(side, "Side") ** 2
    if shape == "rectangle":
        length, width = dims
        return must_positive(length, "Length") * must_positive(width, "Width")
    if shape == "circle":
        (radius,) = dims
        return math.pi * must_positive(radius, "Radius") ** 2
    raise ValueError(f"Unknown shape '{shape}'. Expected one of: {', '.join(SHAPES)}")

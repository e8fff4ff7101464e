"""
Hydraulics & Pumps Calculators
==============================
Pipe velocity, pump power, TDH, affinity laws, NPSH and process flow.
"""

from typing import Dict, Any

from ..base import (
    Calculator, CalculatorMetadata, CalculatorCategory, Difficulty,
    InputSchema, InputField, FieldType, register_calculator,
)
from ...modules import engineering as eng
from ...modules.conversions import m3h_to_ls


@register_calculator
class FlowVelocityCalculator(Calculator):
    """Mean velocity in a full circular pipe."""

    output_units = {"velocity_mps": "m/s", "velocity_head_m": "m", "flow_ls": "L/s"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="flow-velocity",
            name="Flow Velocity",
            description="Fluid velocity in a pipe from flow rate and internal diameter",
            category=CalculatorCategory.HYDRAULICS,
            icon="waves",
            tags=["hydraulic", "flow", "velocity"],
            featured=True,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="q_m3h", label="Flow rate", unit="m3/h", placeholder="60"),
            InputField(name="d_mm", label="Internal diameter", unit="mm", placeholder="150"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        v = eng.pipe_velocity_mps(values["q_m3h"], values["d_mm"])
        return {
            "velocity_mps": v,
            "velocity_head_m": v ** 2 / (2 * eng.G),
            "flow_ls": m3h_to_ls(values["q_m3h"]),
        }


@register_calculator
class PumpPowerCalculator(Calculator):
    """
    Water and brake horsepower.
    WHP = rho.g.Q.H / 1000, BHP = WHP / (eta_pump x eta_mech)
    """

    output_units = {"whp_kw": "kW", "bhp_kw": "kW", "bhp_hp": "HP"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="pump-power",
            name="Pump Power (WHP/BHP)",
            description="Hydraulic and shaft power of a pump",
            category=CalculatorCategory.HYDRAULICS,
            icon="zap",
            tags=["pump", "whp", "bhp"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="q_m3h", label="Flow rate", unit="m3/h", placeholder="50"),
            InputField(name="h_m", label="Total head", unit="m", placeholder="40"),
            InputField(name="pump_eff", label="Pump efficiency", default=0.75, min=0, max=1, step=0.01),
            InputField(name="mech_eff", label="Mechanical efficiency", default=0.98, min=0, max=1, step=0.01),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        power = eng.pump_power(values["q_m3h"], values["h_m"], values["pump_eff"], values["mech_eff"])
        return {"whp_kw": power.whp_kw, "bhp_kw": power.bhp_kw, "bhp_hp": power.bhp_hp}


@register_calculator
class TDHCalculator(Calculator):
    """Static head plus Hazen-Williams friction and fitting losses."""

    output_units = {
        "velocity_mps": "m/s",
        "friction_m": "m",
        "minor_m": "m",
        "tdh_m": "m",
    }

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="tdh",
            name="Total Dynamic Head",
            description="TDH with Hazen-Williams friction and minor losses",
            category=CalculatorCategory.HYDRAULICS,
            icon="trending-up",
            tags=["pump", "tdh", "losses", "hazen-williams"],
            difficulty=Difficulty.ADVANCED,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="static_head_m", label="Static head", unit="m", placeholder="15"),
            InputField(name="q_m3h", label="Flow rate", unit="m3/h", placeholder="60"),
            InputField(name="d_mm", label="Internal diameter", unit="mm", placeholder="150"),
            InputField(name="l_m", label="Pipe length", unit="m", placeholder="120"),
            InputField(name="c", label="Hazen-Williams C", default=130,
                       description="130-150 for PVC/HDPE, 100-120 for steel"),
            InputField(name="sum_k", label="Sum of fitting K", default=2.5),
            InputField(name="include_velocity_head", label="Include velocity head",
                       type=FieldType.BOOLEAN, default=False),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        head = eng.head_breakdown(
            values["static_head_m"], values["c"], values["q_m3h"], values["d_mm"],
            values["l_m"], values["sum_k"],
            include_velocity_head=values["include_velocity_head"],
        )
        return {
            "velocity_mps": head.velocity_mps,
            "friction_m": head.friction_m,
            "minor_m": head.minor_m,
            "tdh_m": head.tdh_m,
        }


@register_calculator
class AffinityCalculator(Calculator):
    """Pump affinity laws for a speed change and an impeller trim."""

    output_units = {
        "speed_q2": "m3/h", "speed_h2": "m", "speed_p2": "kW",
        "diameter_q2": "m3/h", "diameter_h2": "m", "diameter_p2": "kW",
    }

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="affinity",
            name="Pump Affinity Laws",
            description="New duty point after a speed or impeller diameter change",
            category=CalculatorCategory.HYDRAULICS,
            icon="gauge",
            tags=["pump", "affinity", "vfd", "impeller"],
            difficulty=Difficulty.INTERMEDIATE,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="q1", label="Flow Q1", unit="m3/h", placeholder="60"),
            InputField(name="h1", label="Head H1", unit="m", placeholder="40"),
            InputField(name="p1", label="Power P1", unit="kW", placeholder="22"),
            InputField(name="n1", label="Speed N1", unit="Hz/rpm", placeholder="50"),
            InputField(name="n2", label="Speed N2", unit="Hz/rpm", placeholder="45"),
            InputField(name="d1", label="Impeller D1", unit="mm", placeholder="200"),
            InputField(name="d2", label="Impeller D2", unit="mm", placeholder="180"),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        q1, h1, p1 = values["q1"], values["h1"], values["p1"]
        speed = eng.affinity_by_speed(q1, h1, p1, values["n1"], values["n2"])
        diameter = eng.affinity_by_diameter(q1, h1, p1, values["d1"], values["d2"])
        return {
            "speed_q2": speed.q2, "speed_h2": speed.h2, "speed_p2": speed.p2,
            "diameter_q2": diameter.q2, "diameter_h2": diameter.h2, "diameter_p2": diameter.p2,
        }


@register_calculator
class NPSHCalculator(Calculator):
    """NPSH available at the pump suction."""

    output_units = {"npsha_m": "m"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="npsh",
            name="NPSH Available",
            description="Net positive suction head available, to compare with the pump NPSHr",
            category=CalculatorCategory.HYDRAULICS,
            icon="arrow-down-to-line",
            tags=["pump", "npsh", "cavitation", "suction"],
            difficulty=Difficulty.ADVANCED,
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="pvap_kpa", label="Vapour pressure", unit="kPa", default=3.17,
                       description="Water at 25 C: 3.17 kPa"),
            InputField(name="patm_kpa", label="Atmospheric pressure", unit="kPa", default=101.325),
            InputField(name="psurf_kpa", label="Surface gauge pressure", unit="kPa", default=0),
            InputField(name="z_suction_m", label="Static suction head", unit="m", default=0,
                       description="Positive for flooded suction, negative for suction lift"),
            InputField(name="suction_loss_m", label="Suction line losses", unit="m", default=0),
            InputField(name="rho", label="Density", unit="kg/m3", default=998),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "npsha_m": eng.npsh_available(
                values["pvap_kpa"],
                patm_kpa=values["patm_kpa"],
                psurf_kpa=values["psurf_kpa"],
                rho=values["rho"],
                z_suction_m=values["z_suction_m"],
                suction_loss_m=values["suction_loss_m"],
            )
        }


@register_calculator
class ProcessFlowCalculator(Calculator):
    """Q = V x A, solving for the selected variable."""

    output_units = {"q_m3s": "m3/s", "q_m3h": "m3/h", "v_mps": "m/s", "area_m2": "m2"}

    @property
    def metadata(self) -> CalculatorMetadata:
        return CalculatorMetadata(
            id="process-flow",
            name="Process Flow",
            description="Solve Q = V x A for flow, velocity or area",
            category=CalculatorCategory.HYDRAULICS,
            icon="git-merge",
            tags=["flow", "velocity", "area"],
        )

    @property
    def input_schema(self) -> InputSchema:
        return InputSchema(fields=[
            InputField(name="solve_for", label="Solve for", type=FieldType.SELECT, default="q",
                       options=[
                           {"value": "q", "label": "Flow rate Q"},
                           {"value": "v", "label": "Velocity V"},
                           {"value": "area", "label": "Area A"},
                       ]),
            InputField(name="q_m3s", label="Flow rate", unit="m3/s", required=False),
            InputField(name="v_mps", label="Velocity", unit="m/s", required=False),
            InputField(name="area_m2", label="Area", unit="m2", required=False),
            InputField(name="diameter_m", label="Pipe diameter (for area)", unit="m", required=False),
        ])

    def compute(self, values: Dict[str, Any]) -> Dict[str, Any]:
        solve_for = values["solve_for"]
        area = values["area_m2"]
        if not area and values["diameter_m"]:
            area = eng.circle_area_m2(values["diameter_m"])

        if solve_for == "q":
            flow = eng.process_flow(v_mps=values["v_mps"] or 0, area_m2=area or 0)
        elif solve_for == "v":
            flow = eng.process_flow(q_m3s=values["q_m3s"] or 0, area_m2=area or 0)
        else:
            flow = eng.process_flow(q_m3s=values["q_m3s"] or 0, v_mps=values["v_mps"] or 0)

        return {
            "q_m3s": flow.q_m3s,
            "q_m3h": flow.q_m3s * 3600,
            "v_mps": flow.v_mps,
            "area_m2": flow.area_m2,
            "solved_for": flow.solved_for,
        }

"""
Engineering Formula Tests
=========================
Unit tests for pumps, pipe hydraulics, electrical sizing and process flow.
"""

import math

import pytest

from hakoolab.modules import engineering as eng
from hakoolab.modules.validation import ValidationError


class TestPumpPower:

    def test_water_horsepower_known_value(self):
        """50 m3/h against 40 m of water is about 5.44 kW."""
        assert eng.water_hp_kw(50, 40) == pytest.approx(5.437, abs=1e-3)

    def test_brake_horsepower(self):
        whp = eng.water_hp_kw(50, 40)
        assert eng.brake_hp_kw(whp, 0.75, 0.98) == pytest.approx(whp / 0.735)

    def test_pump_power_record(self):
        power = eng.pump_power(50, 40)
        assert power.whp_kw == pytest.approx(5.437, abs=1e-3)
        assert power.bhp_kw == pytest.approx(7.397, abs=1e-3)
        assert power.bhp_hp == pytest.approx(eng.kw_to_hp(power.bhp_kw))

    def test_custom_fluid(self):
        brine = eng.Fluid(rho=1025)
        assert eng.water_hp_kw(50, 40, brine) > eng.water_hp_kw(50, 40)

    @pytest.mark.parametrize("eff", [0, 1.2, -0.5])
    def test_efficiency_out_of_range(self, eff):
        with pytest.raises(ValidationError):
            eng.brake_hp_kw(5, pump_eff=eff)

    def test_zero_flow_rejected(self):
        with pytest.raises(ValidationError) as exc:
            eng.water_hp_kw(0, 40)
        assert "Flow rate" in exc.value.message

    def test_hp_round_trip(self):
        assert eng.hp_to_kw(eng.kw_to_hp(7.5)) == pytest.approx(7.5)

    def test_energy(self):
        kwh = eng.energy_kwh(30, 24)
        assert kwh == pytest.approx(720)
        assert eng.energy_cost(kwh, 0.12) == pytest.approx(86.4)


class TestPipeHydraulics:

    def test_velocity(self):
        assert eng.pipe_velocity_mps(60, 150) == pytest.approx(0.9431, abs=1e-3)

    def test_hazen_williams_known_value(self):
        assert eng.hazen_williams_head_loss(130, 60, 150, 120) == pytest.approx(0.814, rel=0.01)

    def test_hazen_williams_rougher_pipe_loses_more(self):
        assert eng.hazen_williams_head_loss(100, 60, 150, 120) > eng.hazen_williams_head_loss(140, 60, 150, 120)

    def test_darcy_weisbach(self):
        v = eng.pipe_velocity_mps(60, 150)
        expected = 0.02 * (120 / 0.15) * v ** 2 / (2 * eng.G)
        assert eng.darcy_weisbach_head_loss(0.02, 60, 150, 120) == pytest.approx(expected)

    def test_minor_losses(self):
        v = eng.pipe_velocity_mps(60, 150)
        assert eng.minor_losses_head(2.5, 60, 150) == pytest.approx(2.5 * v ** 2 / (2 * eng.G))

    def test_tdh_sums_components(self):
        assert eng.total_dynamic_head(15, 0.8, 0.1) == pytest.approx(15.9)

    def test_tdh_ignores_negative_losses(self):
        assert eng.total_dynamic_head(15, -0.3, -0.1) == pytest.approx(15)

    def test_tdh_velocity_head(self):
        v = eng.pipe_velocity_mps(60, 150)
        tdh = eng.total_dynamic_head(15, 0, 0, include_velocity_head=True, q_m3h=60, d_mm=150)
        assert tdh == pytest.approx(15 + v ** 2 / (2 * eng.G))

    def test_tdh_velocity_head_needs_flow_and_diameter(self):
        assert eng.total_dynamic_head(15, 0, 0, include_velocity_head=True) == pytest.approx(15)

    def test_tdh_requires_static_head(self):
        with pytest.raises(ValidationError):
            eng.total_dynamic_head(0, 1, 1)

    def test_head_breakdown(self):
        head = eng.head_breakdown(15, 130, 60, 150, 120, 2.5)
        assert head.friction_m == pytest.approx(0.814, rel=0.01)
        assert head.tdh_m == pytest.approx(15 + head.friction_m + head.minor_m)
        assert head.velocity_mps == pytest.approx(eng.pipe_velocity_mps(60, 150))


class TestAffinityAndNpsh:

    def test_affinity_by_speed(self):
        result = eng.affinity_by_speed(60, 40, 22, 50, 45)
        assert result.q2 == pytest.approx(54)
        assert result.h2 == pytest.approx(32.4)
        assert result.p2 == pytest.approx(16.038)

    def test_affinity_identity(self):
        result = eng.affinity_by_diameter(60, 40, 22, 200, 200)
        assert (result.q2, result.h2, result.p2) == pytest.approx((60, 40, 22))

    def test_affinity_by_diameter_exponents(self):
        result = eng.affinity_by_diameter(60, 40, 22, 200, 180)
        assert result.q2 == pytest.approx(60 * 0.9 ** 3)
        assert result.h2 == pytest.approx(40 * 0.9 ** 2)
        assert result.p2 == pytest.approx(22 * 0.9 ** 5)

    def test_affinity_rejects_zero_speed(self):
        with pytest.raises(ValidationError):
            eng.affinity_by_speed(60, 40, 22, 0, 45)

    def test_npsh_available_open_sump(self):
        assert eng.npsh_available(3.17) == pytest.approx(10.029, abs=1e-2)

    def test_npsh_suction_lift_and_losses(self):
        base = eng.npsh_available(3.17)
        assert eng.npsh_available(3.17, z_suction_m=-3, suction_loss_m=0.5) == pytest.approx(base - 3.5)

    def test_npsh_negative_losses_ignored(self):
        assert eng.npsh_available(3.17, suction_loss_m=-1) == pytest.approx(eng.npsh_available(3.17))


class TestElectrical:

    def test_three_phase_current(self):
        assert eng.three_phase_current_a(30, 400, 0.85, 0.92) == pytest.approx(55.37, abs=0.01)

    def test_power_triangle(self):
        kva = eng.apparent_power_kva(400, 55.37)
        assert kva == pytest.approx(38.36, abs=0.01)
        assert eng.real_power_kw(kva, 0.85) == pytest.approx(kva * 0.85)

    def test_voltage_drop(self):
        assert eng.voltage_drop_percent(55, 80, 400, 1.15, 0.08, 0.85) == pytest.approx(1.943, abs=1e-3)

    def test_voltage_drop_resistive_only(self):
        expected = math.sqrt(3) * 55 * 1.15 * 1.0 * 0.08 / 400 * 100
        assert eng.voltage_drop_percent(55, 80, 400, 1.15, 0, 1.0) == pytest.approx(expected)

    def test_voltage_drop_rejects_negative_reactance(self):
        with pytest.raises(ValidationError):
            eng.voltage_drop_percent(55, 80, 400, 1.15, -0.1)

    def test_cable_size(self):
        assert eng.cable_size_estimate_mm2(60, 3) == pytest.approx(20)


class TestProcessFlow:

    def test_solve_for_flow(self):
        flow = eng.process_flow(v_mps=2, area_m2=0.5)
        assert flow.q_m3s == pytest.approx(1)
        assert flow.solved_for == "q"

    def test_solve_for_velocity_and_area(self):
        assert eng.process_flow(q_m3s=1, area_m2=0.5).v_mps == pytest.approx(2)
        assert eng.process_flow(q_m3s=1, v_mps=2).area_m2 == pytest.approx(0.5)

    @pytest.mark.parametrize("kwargs", [{}, {"q_m3s": 1}, {"q_m3s": 1, "v_mps": 2, "area_m2": 0.5}])
    def test_needs_exactly_two(self, kwargs):
        with pytest.raises(ValueError, match="exactly two"):
            eng.process_flow(**kwargs)

    def test_circle_area(self):
        assert eng.circle_area_m2(2) == pytest.approx(math.pi)

    def test_surface_areas(self):
        assert eng.surface_area("square", 3) == pytest.approx(9)
        assert eng.surface_area("rectangle", 3, 4) == pytest.approx(12)
        assert eng.surface_area("circle", 1) == pytest.approx(math.pi)

    def test_unknown_shape(self):
        with pytest.raises(ValueError, match="Unknown shape"):
            eng.surface_area("hexagon", 1)

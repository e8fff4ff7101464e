"""
RO & Desalination Tests
=======================
"""

import pytest

from hakoolab.modules import ro
from hakoolab.modules.validation import ValidationError


class TestROBasics:

    def test_recovery(self):
        assert ro.recovery_pct(15, 20) == pytest.approx(75)

    def test_rejection(self):
        assert ro.salt_rejection_pct(350, 35000) == pytest.approx(99)

    def test_flux_and_sec(self):
        assert ro.flux_lmh(15, 200) == pytest.approx(75)
        assert ro.sec_kwh_per_m3(30, 15) == pytest.approx(2)

    def test_concentration_factor(self):
        assert ro.concentration_factor(75) == pytest.approx(4)
        assert ro.concentration_factor(50) == pytest.approx(2)

    @pytest.mark.parametrize("recovery", [100, 120])
    def test_concentration_factor_needs_recovery_below_100(self, recovery):
        with pytest.raises(ValidationError):
            ro.concentration_factor(recovery)

    def test_performance_record(self):
        perf = ro.ro_performance(qf=20, qp=15, area_m2=200, p_kw=30, cf=35000, cp=350)
        assert perf.recovery_pct == pytest.approx(75)
        assert perf.flux_lmh == pytest.approx(75)
        assert perf.sec_kwh_per_m3 == pytest.approx(2)
        assert perf.rejection_pct == pytest.approx(99)


class TestBrine:

    def test_mass_balance(self):
        brine = ro.brine_tds_simple(20, 35000, 8, 0)
        assert brine.qb == pytest.approx(12)
        assert brine.cb == pytest.approx(58333.33, abs=0.01)

    def test_salt_is_conserved(self):
        qf, cf, qp, cp = 20, 35000, 15, 350
        brine = ro.brine_tds_simple(qf, cf, qp, cp)
        assert qp * cp + brine.qb * brine.cb == pytest.approx(qf * cf)

    def test_permeate_cannot_exceed_feed(self):
        with pytest.raises(ValueError, match="Feed flow must exceed permeate flow"):
            ro.brine_tds_simple(10, 35000, 10, 0)

    def test_negative_permeate_tds(self):
        with pytest.raises(ValidationError):
            ro.brine_tds_simple(20, 35000, 8, -1)


class TestOsmoticPressure:

    def test_seawater(self):
        assert ro.osmotic_pressure_bar(35000, 298.15) == pytest.approx(29.69, abs=0.01)

    def test_proportional_to_tds(self):
        low = ro.osmotic_pressure_bar(1000, 298.15)
        assert ro.osmotic_pressure_bar(2000, 298.15) == pytest.approx(2 * low)

    def test_requires_absolute_temperature(self):
        with pytest.raises(ValidationError):
            ro.osmotic_pressure_bar(35000, 0)

    def test_from_molarity_in_atm(self):
        assert ro.osmotic_pressure_atm_from_molarity(0.6, 298.15) == pytest.approx(29.374, abs=1e-3)

    def test_molarity_uses_vant_hoff_factor(self):
        single = ro.osmotic_pressure_atm_from_molarity(0.1, 300, i=1)
        assert ro.osmotic_pressure_atm_from_molarity(0.1, 300, i=3) == pytest.approx(3 * single)

    def test_molarity_must_be_positive(self):
        with pytest.raises(ValidationError, match="Molarity"):
            ro.osmotic_pressure_atm_from_molarity(0, 298.15)

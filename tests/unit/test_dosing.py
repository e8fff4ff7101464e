"""
Chemical Dosing Tests
=====================
"""

import pytest

from hakoolab.modules import dosing
from hakoolab.modules.validation import ValidationError


class TestDilution:

    def test_solve_each_quantity(self):
        assert dosing.c1v1_c2v2(c1=12.5, v1=1, c2=2.5).v2 == pytest.approx(5)
        assert dosing.c1v1_c2v2(c1=12.5, c2=2.5, v2=5).v1 == pytest.approx(1)
        assert dosing.c1v1_c2v2(v1=1, c2=2.5, v2=5).c1 == pytest.approx(12.5)
        assert dosing.c1v1_c2v2(c1=12.5, v1=1, v2=5).c2 == pytest.approx(2.5)

    def test_solved_for(self):
        result = dosing.c1v1_c2v2(c1=10, v1=2, c2=4)
        assert result.solved_for == "v2"
        assert result.solved_value == pytest.approx(5)

    def test_product_invariant(self):
        result = dosing.c1v1_c2v2(c1=7, v1=3, c2=0.5)
        assert result.c1 * result.v1 == pytest.approx(result.c2 * result.v2)

    @pytest.mark.parametrize("kwargs", [
        {"c1": 1, "v1": 1},
        {"c1": 1, "v1": 1, "c2": 1, "v2": 1},
        {},
    ])
    def test_needs_exactly_three(self, kwargs):
        with pytest.raises(ValueError, match="exactly three"):
            dosing.c1v1_c2v2(**kwargs)

    def test_given_values_must_be_positive(self):
        with pytest.raises(ValidationError) as exc:
            dosing.c1v1_c2v2(c1=0, v1=1, c2=2)
        assert exc.value.field == "C1"


class TestSolutionStrength:

    def test_sulfuric_acid(self):
        m = dosing.wt_percent_to_molarity(98, 1.84, 98.08)
        assert m == pytest.approx(18.385, abs=1e-3)
        assert dosing.normality_from_molarity(m, 2) == pytest.approx(2 * m)

    def test_wt_percent_round_trip(self):
        m = dosing.wt_percent_to_molarity(33, 1.16, 36.46)
        assert dosing.molarity_to_wt_percent(m, 1.16, 36.46) == pytest.approx(33)

    def test_normality_round_trip(self):
        assert dosing.molarity_from_normality(dosing.normality_from_molarity(3, 2), 2) == pytest.approx(3)


class TestDosingPumps:

    def test_chlorine_dose_known_value(self):
        dose = dosing.chlorine_dose_pump_flow_lph(20, 2, 12.5, 1.2)
        assert dose.c_stock_mgl == pytest.approx(150000)
        assert dose.q_dose_lph == pytest.approx(0.2667, abs=1e-4)
        assert dose.daily_lpd == pytest.approx(dose.q_dose_lph * 24)

    def test_chlorine_needs_available_chlorine(self):
        with pytest.raises(ValidationError):
            dosing.chlorine_dose_pump_flow_lph(20, 2, 0)

    def test_acid_alkali_dose(self):
        dose = dosing.acid_alkali_dose_lph(50, 30, 1)
        assert dose.delta_meql == pytest.approx(0.6)
        assert dose.q_chem_lph == pytest.approx(30)
        assert dose.daily_lpd == pytest.approx(720)

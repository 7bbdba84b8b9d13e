import pytest

from prevoyance.engine.avs import MAX_PENSION, MIN_PENSION, avs_monthly_pension, avs_pensions


@pytest.mark.parametrize("income", [0, -1000, None])
def test_no_income_no_pension(income):
    assert avs_monthly_pension(income) == 0.0


def test_minimum_and_maximum_pension():
    assert avs_monthly_pension(1000) == MIN_PENSION
    assert avs_monthly_pension(15120) == MIN_PENSION
    assert avs_monthly_pension(90720) == MAX_PENSION
    assert avs_monthly_pension(250000) == MAX_PENSION


def test_step_uses_first_ceiling_covering_income():
    assert avs_monthly_pension(15121) == 1285
    assert avs_monthly_pension(16800) == 1285
    assert avs_monthly_pension(60000) == 1935
    assert avs_monthly_pension(89041) == 2520


def test_annual_and_disability_pensions():
    pensions = avs_pensions(50000)

    assert pensions.rente_vieillesse_mensuelle == 1785
    assert pensions.rente_vieillesse_annuelle == 1785 * 12
    assert pensions.rente_invalidite_mensuelle == pensions.rente_vieillesse_mensuelle
    assert pensions.revenu_annuel_determinant == 50000

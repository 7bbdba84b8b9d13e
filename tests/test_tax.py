import pytest

from prevoyance.data_model import BracketTable
from prevoyance.engine.tax import TaxEstimator, TaxInput, income_tax, wealth_tax


def test_zero_income_pays_nothing():
    assert income_tax(0) == 0.0


def test_income_exact_bracket_hit():
    assert income_tax(10000) == 313.00


def test_income_interpolation_midpoint():
    assert income_tax(1350) == pytest.approx(14.00)


def test_income_above_last_bracket_keeps_marginal_rate():
    # slope of the last segment: (143030 - 100530) / 100000
    assert income_tax(600000) == pytest.approx(143030.0 + 100000 * 0.425)


@pytest.mark.parametrize("wealth", [0, 1, 25000, 49999.99])
def test_wealth_below_exemption_is_untaxed(wealth):
    assert wealth_tax(wealth) == 0.0


def test_wealth_at_exemption_uses_table():
    assert wealth_tax(50000) == pytest.approx(22.95)
    assert wealth_tax(52500) == pytest.approx((22.95 + 27.80) / 2)


def test_income_and_wealth_tax_are_monotonic():
    incomes = [i * 2500 for i in range(0, 300)]
    wealths = [w * 10000 for w in range(0, 300)]

    income_values = [income_tax(i) for i in incomes]
    wealth_values = [wealth_tax(w) for w in wealths]

    assert all(a <= b for a, b in zip(income_values, income_values[1:]))
    assert all(a <= b for a, b in zip(wealth_values, wealth_values[1:]))


def test_estimator_accepts_other_tables():
    estimator = TaxEstimator(
        income_table=BracketTable.from_pairs("flat-income", [(100, 10.0), (200, 20.0)]),
        wealth_table=BracketTable.from_pairs("flat-wealth", [(1000, 1.0), (2000, 2.0)]),
        wealth_exemption=500,
        jurisdiction="TEST",
    )

    assert estimator.income_tax(150) == pytest.approx(15.0)
    assert estimator.wealth_tax(400) == 0.0
    assert estimator.wealth_tax(1500) == pytest.approx(1.5)


def test_estimate_applies_family_and_declared_deductions():
    values = TaxInput(
        income=80000,
        wealth=100000,
        children=2,
        married=True,
        third_pillar_deduction=7000,
        mortgage_interest=1400,
        other_deductions=500,
    )

    estimate = TaxEstimator().estimate(values)

    assert estimate.deductions == pytest.approx(7000 + 1400 + 500 + 2 * 6500 + 2600)
    assert estimate.taxable_income == pytest.approx(80000 - estimate.deductions)
    assert estimate.income_tax == pytest.approx(income_tax(estimate.taxable_income))
    assert estimate.wealth_tax == pytest.approx(75.05)
    assert estimate.total_tax == pytest.approx(estimate.income_tax + estimate.wealth_tax)
    assert estimate.effective_rate == pytest.approx(estimate.total_tax / 80000 * 100)


def test_estimate_floors_taxable_income_and_handles_zero_income():
    estimate = TaxEstimator().estimate(TaxInput(income=0, other_deductions=10000))

    assert estimate.taxable_income == 0.0
    assert estimate.total_tax == 0.0
    assert estimate.effective_rate == 0.0

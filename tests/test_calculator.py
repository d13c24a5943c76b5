import pytest
from pydantic import ValidationError

from smartretire.services.calculator import (
    RetirementCalculator,
    ScenarioInput,
    format_amount,
    format_currency,
    round_half_up,
)


def make_input(**overrides) -> ScenarioInput:
    data = {
        "currentAge": 62,
        "retirementAge": 67,
        "currentSavings": 500000,
        "monthlyExpenses": 5000,
        "socialSecurityAge": 67,
        "estimatedSocialSecurity": 2500,
    }
    data.update(overrides)
    return ScenarioInput(**data)


@pytest.mark.parametrize("age,factor", [(62, 0.70), (67, 1.00), (70, 1.24)])
def test_anchor_claiming_ages_are_exact(age, factor):
    assert RetirementCalculator.social_security_adjustment_factor(age) == factor


@pytest.mark.parametrize("age,factor", [(63, 0.68), (64, 0.76), (66, 0.92), (68, 1.08), (69, 1.16)])
def test_other_claiming_ages_move_eight_percent_per_year(age, factor):
    assert RetirementCalculator.social_security_adjustment_factor(age) == pytest.approx(factor)


def test_reference_scenario():
    result = RetirementCalculator.project(make_input())

    assert result.yearsToRetirement == 5
    assert result.yearsInRetirement == 23
    assert result.totalRetirementNeeds == pytest.approx(1_380_000)
    assert result.socialSecurityAdjustmentFactor == 1.0
    assert result.adjustedSocialSecurityBenefit == pytest.approx(2500)
    assert result.totalSocialSecurityIncome == pytest.approx(690_000)
    assert result.projectedBalance == pytest.approx(669_112.79, abs=0.01)
    assert result.annualWithdrawal == pytest.approx(26_764.51, abs=0.01)
    assert result.totalProjectedIncome == pytest.approx(1_305_583.77, abs=0.01)
    assert result.projectedShortfall == pytest.approx(74_416.23, abs=0.01)
    assert result.readinessScore == 95


def test_life_expectancy_defaults_to_ninety():
    assert make_input().lifeExpectancy == 90
    result = RetirementCalculator.project(make_input(lifeExpectancy=95))
    assert result.yearsInRetirement == 28
    assert result.totalSocialSecurityIncome == pytest.approx(2500 * 12 * 28)


def test_early_claim_reduces_lifetime_benefit():
    result = RetirementCalculator.project(make_input(socialSecurityAge=62))
    assert result.adjustedSocialSecurityBenefit == pytest.approx(1750)
    assert result.totalSocialSecurityIncome == pytest.approx(1750 * 12 * 28)


def test_score_clamped_at_100_when_income_exceeds_needs():
    result = RetirementCalculator.project(make_input(currentSavings=50_000_000))
    assert result.readinessScore == 100
    assert result.projectedShortfall < 0


def test_score_clamped_at_0_with_no_income():
    result = RetirementCalculator.project(make_input(currentSavings=0, estimatedSocialSecurity=0))
    assert result.readinessScore == 0
    assert result.projectedShortfall == pytest.approx(1_380_000)


def test_zero_retirement_years_does_not_divide_by_zero():
    result = RetirementCalculator.project(make_input(retirementAge=90, lifeExpectancy=90))
    assert result.totalRetirementNeeds == 0
    assert result.readinessScore == 0


def test_zero_expenses_does_not_divide_by_zero():
    result = RetirementCalculator.project(make_input(monthlyExpenses=0))
    assert result.readinessScore == 0


def test_social_security_years_never_negative():
    result = RetirementCalculator.project(make_input(lifeExpectancy=68, socialSecurityAge=70))
    assert result.totalSocialSecurityIncome == 0


def test_spouse_social_security_is_added():
    solo = RetirementCalculator.project(make_input())
    couple = RetirementCalculator.project(make_input(
        hasSpouse=True,
        spouseAge=60,
        spouseRetirementAge=65,
        spouseSocialSecurityAge=62,
        spouseSocialSecurity=1000,
    ))

    assert couple.spouseAdjustedSocialSecurityBenefit == pytest.approx(700)
    assert couple.spouseSocialSecurityIncome == pytest.approx(700 * 12 * 28)
    assert couple.totalProjectedIncome == pytest.approx(solo.totalProjectedIncome + 700 * 12 * 28)
    # Spouse savings are not modeled separately
    assert couple.projectedBalance == solo.projectedBalance


def test_spouse_ignored_without_flag():
    result = RetirementCalculator.project(make_input(spouseSocialSecurityAge=67, spouseSocialSecurity=1000))
    assert result.spouseSocialSecurityIncome == 0


def test_projection_is_deterministic():
    scenario = make_input(socialSecurityAge=64, hasSpouse=True, spouseSocialSecurityAge=66, spouseSocialSecurity=900)
    assert RetirementCalculator.project(scenario) == RetirementCalculator.project(scenario)


def test_retirement_age_must_follow_current_age():
    with pytest.raises(ValidationError):
        make_input(retirementAge=62)


@pytest.mark.parametrize("age", [61, 71])
def test_claiming_age_out_of_range_rejected(age):
    with pytest.raises(ValidationError):
        make_input(socialSecurityAge=age)


def test_round_half_up_and_currency_format():
    assert round_half_up(94.5) == 95
    assert round_half_up(2.4999) == 2
    assert format_currency(74416.23) == "$74,416"
    assert format_currency(1000000) == "$1,000,000"


def test_format_amount_keeps_cents():
    assert format_amount(10001.5) == "$10,001.5"
    assert format_amount(2500) == "$2,500"
    assert format_amount(1234.567) == "$1,234.567"

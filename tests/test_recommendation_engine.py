from smartretire.services.calculator import RetirementCalculator, ScenarioInput
from smartretire.services.recommendation_engine import RecommendationEngine


def recommend(**overrides):
    data = {
        "currentAge": 62,
        "retirementAge": 67,
        "currentSavings": 500000,
        "monthlyExpenses": 5000,
        "socialSecurityAge": 67,
        "estimatedSocialSecurity": 2500,
    }
    data.update(overrides)
    scenario = ScenarioInput(**data)
    result = RetirementCalculator.project(scenario)
    return RecommendationEngine.generate_recommendations(scenario, result)


def titles(recs):
    return [r.title for r in recs]


def test_reference_scenario_rules_in_display_order():
    recs = recommend()
    assert titles(recs) == [
        "Consider Delaying Social Security to Age 70",
        "Increase Monthly Savings",
        "Implement Tax-Efficient Withdrawal Strategy",
    ]
    assert [r.priority for r in recs] == ["medium", "high", "high"]


def test_delay_to_70_gain_and_monthly_savings_amount():
    recs = recommend()
    # (2500 * 1.24 - 2500) * 12 * (90 - 70)
    assert recs[0].impact == "Potential lifetime gain: $144,000"
    assert "$3,100" in recs[0].description
    # 74,416.23 / 5 / 12
    assert recs[1].impact == "Save an additional $1,240/month"


def test_early_claim_recommends_full_retirement_age():
    recs = recommend(socialSecurityAge=62)
    first = recs[0]
    assert first.title == "Delay Social Security to Age 67"
    assert first.priority == "high"
    assert "reduces your benefit by 30%" in first.description
    assert "from $1,750 to $2,500" in first.description
    # (2500 - 1750) * 12 * (90 - 67)
    assert first.impact == "Potential lifetime gain: $207,000"


def test_full_retirement_benefit_is_shown_unrounded():
    first = recommend(socialSecurityAge=62, estimatedSocialSecurity=2500.5)[0]
    assert "from $1,750 to $2,500.5." in first.description


def test_claiming_at_70_has_no_timing_recommendation():
    recs = recommend(socialSecurityAge=70)
    assert not any("Social Security" in t for t in titles(recs))


def test_no_savings_recommendation_without_shortfall():
    recs = recommend(currentSavings=5_000_000)
    assert "Increase Monthly Savings" not in titles(recs)
    assert "Implement Tax-Efficient Withdrawal Strategy" in titles(recs)


def test_long_runway_and_early_retirement():
    recs = recommend(currentAge=45, retirementAge=60, currentSavings=5_000_000)
    assert titles(recs) == [
        "Consider Delaying Social Security to Age 70",
        "Implement Tax-Efficient Withdrawal Strategy",
        "Consider Roth IRA Conversions",
        "Plan for Healthcare Costs Before Medicare",
    ]
    roth, health = recs[2], recs[3]
    assert roth.priority == "medium"
    assert health.priority == "high"
    assert "5 years of health insurance" in health.description
    assert health.impact == "Estimated cost: $60,000"


def test_exactly_five_years_out_skips_roth_conversion():
    assert "Consider Roth IRA Conversions" not in titles(recommend(currentAge=62, retirementAge=67))
    assert "Consider Roth IRA Conversions" in titles(recommend(currentAge=61, retirementAge=67))

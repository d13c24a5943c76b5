from typing import List, Literal
from pydantic import BaseModel

from smartretire.services.calculator import (
    FULL_RETIREMENT_AGE,
    MAX_CLAIMING_AGE,
    CLAIMING_AGE_FACTORS,
    ScenarioInput,
    ScenarioResult,
    format_amount,
    format_currency,
    round_half_up,
)

MEDICARE_AGE = 65
PRE_MEDICARE_MONTHLY_PREMIUM = 1000.0
ROTH_CONVERSION_MIN_YEARS = 5


class Recommendation(BaseModel):
    title: str
    description: str
    impact: str
    priority: Literal["high", "medium", "low"]


class RecommendationEngine:
    @staticmethod
    def generate_recommendations(scenario: ScenarioInput, result: ScenarioResult) -> List[Recommendation]:
        """
        Evaluates the fixed rule list against a projection.

        Rules run in display order and each contributes at most one item:
        Social Security timing, extra savings for a shortfall, withdrawal
        ordering (always), Roth conversions for long runways, and the
        pre-Medicare healthcare gap.

        Returns:
            List[Recommendation]: ordered recommendations with a priority label.
        """
        recommendations = []
        terminal_age = scenario.lifeExpectancy
        benefit = scenario.estimatedSocialSecurity
        adjusted_benefit = result.adjustedSocialSecurityBenefit

        # 1. Social Security timing
        if scenario.socialSecurityAge < FULL_RETIREMENT_AGE:
            delay_gain = (benefit * 1.0 - adjusted_benefit) * 12 * (terminal_age - FULL_RETIREMENT_AGE)
            reduction_pct = round_half_up((1 - result.socialSecurityAdjustmentFactor) * 100)
            recommendations.append(Recommendation(
                title="Delay Social Security to Age 67",
                description=(
                    f"Claiming at age {scenario.socialSecurityAge} reduces your benefit by {reduction_pct}%. "
                    f"Waiting until full retirement age (67) increases your monthly benefit from "
                    f"{format_currency(adjusted_benefit)} to {format_amount(benefit)}."
                ),
                impact=f"Potential lifetime gain: {format_currency(delay_gain)}",
                priority="high",
            ))
        elif scenario.socialSecurityAge < MAX_CLAIMING_AGE:
            max_factor = CLAIMING_AGE_FACTORS[MAX_CLAIMING_AGE]
            delay_gain = (benefit * max_factor - adjusted_benefit) * 12 * (terminal_age - MAX_CLAIMING_AGE)
            recommendations.append(Recommendation(
                title="Consider Delaying Social Security to Age 70",
                description=(
                    "Each year you delay past 67 increases your benefit by 8%. Waiting until age 70 "
                    f"would increase your monthly benefit to {format_currency(benefit * max_factor)}."
                ),
                impact=f"Potential lifetime gain: {format_currency(delay_gain)}",
                priority="medium",
            ))

        # 2. Savings gap
        if result.projectedShortfall > 0:
            years_left = max(1, result.yearsToRetirement)
            monthly_additional = result.projectedShortfall / years_left / 12
            recommendations.append(Recommendation(
                title="Increase Monthly Savings",
                description=(
                    "Based on your current trajectory, you may face a retirement income shortfall. "
                    "Consider increasing your monthly savings to bridge the gap."
                ),
                impact=f"Save an additional {format_currency(monthly_additional)}/month",
                priority="high",
            ))

        # 3. Withdrawal ordering (static)
        recommendations.append(Recommendation(
            title="Implement Tax-Efficient Withdrawal Strategy",
            description=(
                "Withdraw from taxable accounts first, then tax-deferred (401k/IRA), and finally "
                "tax-free (Roth IRA) to minimize lifetime tax burden."
            ),
            impact="Potential tax savings: $50,000 - $150,000 over retirement",
            priority="high",
        ))

        # 4. Roth conversion window
        if result.yearsToRetirement > ROTH_CONVERSION_MIN_YEARS:
            recommendations.append(Recommendation(
                title="Consider Roth IRA Conversions",
                description=(
                    "Convert portions of traditional IRA to Roth IRA during low-income years before "
                    "retirement to reduce future RMDs and create tax-free income."
                ),
                impact="Reduce future tax burden and RMD requirements",
                priority="medium",
            ))

        # 5. Healthcare bridge before Medicare
        if scenario.retirementAge < MEDICARE_AGE:
            gap_years = MEDICARE_AGE - scenario.retirementAge
            recommendations.append(Recommendation(
                title="Plan for Healthcare Costs Before Medicare",
                description=(
                    f"You'll need {gap_years} years of health insurance before Medicare eligibility. "
                    "Budget $800-$1,500/month for coverage."
                ),
                impact=f"Estimated cost: {format_currency(gap_years * 12 * PRE_MEDICARE_MONTHLY_PREMIUM)}",
                priority="high",
            ))

        return recommendations

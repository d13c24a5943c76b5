import math
from typing import Optional
from pydantic import BaseModel, Field, model_validator

# Planning assumptions
DEFAULT_TERMINAL_AGE = 90
FULL_RETIREMENT_AGE = 67
MAX_CLAIMING_AGE = 70
ASSUMED_RETURN = 0.06  # 6% annual return
SAFE_WITHDRAWAL_RATE = 0.04  # 4% rule
DELAYED_CREDIT_PER_YEAR = 0.08

# Fixed factors at the ages the claiming table is anchored on
CLAIMING_AGE_FACTORS = {
    62: 0.70,
    67: 1.00,
    70: 1.24,
}


class ScenarioInput(BaseModel):
    currentAge: int = Field(ge=0, le=120)
    retirementAge: int = Field(ge=0, le=120)
    lifeExpectancy: int = Field(default=DEFAULT_TERMINAL_AGE, ge=0, le=120)
    currentSavings: float = Field(ge=0)
    monthlyExpenses: float = Field(ge=0)
    socialSecurityAge: int = Field(ge=62, le=70)
    estimatedSocialSecurity: float = Field(ge=0)

    hasSpouse: bool = False
    spouseAge: Optional[int] = Field(default=None, ge=0, le=120)
    spouseRetirementAge: Optional[int] = Field(default=None, ge=0, le=120)
    spouseSocialSecurityAge: Optional[int] = Field(default=None, ge=62, le=70)
    spouseSocialSecurity: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_retirement_after_current_age(self):
        if self.retirementAge <= self.currentAge:
            raise ValueError("retirementAge must be greater than currentAge")
        return self


class ScenarioResult(BaseModel):
    yearsToRetirement: int
    yearsInRetirement: int
    totalRetirementNeeds: float
    socialSecurityAdjustmentFactor: float
    adjustedSocialSecurityBenefit: float
    totalSocialSecurityIncome: float
    spouseAdjustedSocialSecurityBenefit: float = 0.0
    spouseSocialSecurityIncome: float = 0.0
    projectedBalance: float
    annualWithdrawal: float
    totalProjectedIncome: float
    projectedShortfall: float  # positive means a projected deficit
    readinessScore: int  # 0-100


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(amount: float) -> str:
    """Whole-dollar display string, e.g. 74416.23 -> '$74,416'."""
    return f"${round_half_up(amount):,}"


def format_amount(amount: float) -> str:
    """Unrounded display string with up to three decimals, e.g. 10001.5 -> '$10,001.5'."""
    return "$" + f"{amount:,.3f}".rstrip("0").rstrip(".")


class RetirementCalculator:
    """
    Deterministic retirement projection.

    Everything here is closed-form arithmetic over a single ScenarioInput:
    compound growth of current savings to retirement, a 4% annual draw from
    that balance, Social Security adjusted for claiming age, and a readiness
    score comparing lifetime income with lifetime spending.
    """

    @staticmethod
    def social_security_adjustment_factor(claim_age: int) -> float:
        """
        Benefit multiplier relative to full retirement age (67).

        62, 67 and 70 are fixed at 0.70, 1.00 and 1.24. Every other age moves
        8% per year away from 67, e.g. 64 -> 0.76, 68 -> 1.08.
        """
        if claim_age in CLAIMING_AGE_FACTORS:
            return CLAIMING_AGE_FACTORS[claim_age]
        return 1.0 + DELAYED_CREDIT_PER_YEAR * (claim_age - FULL_RETIREMENT_AGE)

    @staticmethod
    def lifetime_social_security(monthly_benefit: float, claim_age: int, terminal_age: int) -> tuple[float, float]:
        """
        Returns (adjusted monthly benefit, total income from claim age to terminal age).
        """
        adjusted = monthly_benefit * RetirementCalculator.social_security_adjustment_factor(claim_age)
        years_collected = max(0, terminal_age - claim_age)
        return adjusted, adjusted * 12 * years_collected

    @staticmethod
    def project(scenario: ScenarioInput) -> ScenarioResult:
        terminal_age = scenario.lifeExpectancy
        years_to_retirement = scenario.retirementAge - scenario.currentAge
        years_in_retirement = terminal_age - scenario.retirementAge
        total_needs = scenario.monthlyExpenses * 12 * years_in_retirement

        factor = RetirementCalculator.social_security_adjustment_factor(scenario.socialSecurityAge)
        adjusted_benefit, ss_income = RetirementCalculator.lifetime_social_security(
            scenario.estimatedSocialSecurity, scenario.socialSecurityAge, terminal_age
        )

        # Spouse contributes Social Security only; household savings live in currentSavings
        spouse_benefit = 0.0
        spouse_ss_income = 0.0
        if scenario.hasSpouse and scenario.spouseSocialSecurity and scenario.spouseSocialSecurityAge:
            spouse_benefit, spouse_ss_income = RetirementCalculator.lifetime_social_security(
                scenario.spouseSocialSecurity, scenario.spouseSocialSecurityAge, terminal_age
            )

        projected_balance = scenario.currentSavings * (1 + ASSUMED_RETURN) ** years_to_retirement
        annual_withdrawal = projected_balance * SAFE_WITHDRAWAL_RATE

        total_income = annual_withdrawal * years_in_retirement + ss_income + spouse_ss_income
        shortfall = total_needs - total_income

        # No retirement years means nothing to fund; score is not meaningful
        if total_needs <= 0:
            readiness_score = 0
        else:
            ratio = total_income / total_needs
            readiness_score = min(100, max(0, round_half_up(ratio * 100)))

        return ScenarioResult(
            yearsToRetirement=years_to_retirement,
            yearsInRetirement=years_in_retirement,
            totalRetirementNeeds=total_needs,
            socialSecurityAdjustmentFactor=factor,
            adjustedSocialSecurityBenefit=adjusted_benefit,
            totalSocialSecurityIncome=ss_income,
            spouseAdjustedSocialSecurityBenefit=spouse_benefit,
            spouseSocialSecurityIncome=spouse_ss_income,
            projectedBalance=projected_balance,
            annualWithdrawal=annual_withdrawal,
            totalProjectedIncome=total_income,
            projectedShortfall=shortfall,
            readinessScore=readiness_score,
        )

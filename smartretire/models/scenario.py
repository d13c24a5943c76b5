from typing import Optional, List
from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, model_validator
from sqlmodel import SQLModel, Field

# Retirement Scenario Models

class ScenarioFields(SQLModel):
    # Personal Info
    currentAge: int = Field(ge=0, le=120, sa_column_kwargs={"name": "current_age"})
    retirementAge: int = Field(ge=0, le=120, sa_column_kwargs={"name": "retirement_age"})
    lifeExpectancy: int = Field(default=90, ge=0, le=120, sa_column_kwargs={"name": "life_expectancy"})

    # Financial Data
    currentSavings: Decimal = Field(ge=0, max_digits=14, decimal_places=2, sa_column_kwargs={"name": "current_savings"})
    monthlyExpenses: Decimal = Field(ge=0, max_digits=12, decimal_places=2, sa_column_kwargs={"name": "monthly_expenses"})
    socialSecurityAge: int = Field(ge=62, le=70, sa_column_kwargs={"name": "social_security_age"})
    estimatedSocialSecurity: Decimal = Field(ge=0, max_digits=10, decimal_places=2, sa_column_kwargs={"name": "estimated_social_security"}) # monthly

    # Spouse Data (optional)
    hasSpouse: bool = Field(default=False, sa_column_kwargs={"name": "has_spouse"})
    spouseAge: Optional[int] = Field(default=None, ge=0, le=120, sa_column_kwargs={"name": "spouse_age"})
    spouseRetirementAge: Optional[int] = Field(default=None, ge=0, le=120, sa_column_kwargs={"name": "spouse_retirement_age"})
    spouseSocialSecurityAge: Optional[int] = Field(default=None, ge=62, le=70, sa_column_kwargs={"name": "spouse_social_security_age"})
    spouseSocialSecurity: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2, sa_column_kwargs={"name": "spouse_social_security"}) # monthly

class RetirementScenarioBase(ScenarioFields):
    name: str = Field(max_length=255)

class RetirementScenario(RetirementScenarioBase, table=True):
    __tablename__ = "retirement_scenarios"
    id: Optional[int] = Field(default=None, primary_key=True)
    userId: int = Field(foreign_key="users.id", index=True, sa_column_kwargs={"name": "user_id"})

    # Results (calculated)
    readinessScore: Optional[int] = Field(default=None, sa_column_kwargs={"name": "readiness_score"}) # 0-100
    projectedShortfall: Optional[Decimal] = Field(default=None, max_digits=20, decimal_places=2, sa_column_kwargs={"name": "projected_shortfall"})

    createdAt: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"name": "created_at"})
    updatedAt: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"name": "updated_at"})


class RetirementScenarioCreate(RetirementScenarioBase):
    @model_validator(mode="after")
    def check_retirement_after_current_age(self):
        if self.retirementAge <= self.currentAge:
            raise ValueError("retirementAge must be greater than currentAge")
        return self

class RetirementScenarioUpdate(SQLModel):
    # Same limits as ScenarioFields so a patch cannot overflow a column
    name: Optional[str] = Field(default=None, max_length=255)
    currentAge: Optional[int] = Field(default=None, ge=0, le=120)
    retirementAge: Optional[int] = Field(default=None, ge=0, le=120)
    lifeExpectancy: Optional[int] = Field(default=None, ge=0, le=120)
    currentSavings: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    monthlyExpenses: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    socialSecurityAge: Optional[int] = Field(default=None, ge=62, le=70)
    estimatedSocialSecurity: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    hasSpouse: Optional[bool] = None
    spouseAge: Optional[int] = Field(default=None, ge=0, le=120)
    spouseRetirementAge: Optional[int] = Field(default=None, ge=0, le=120)
    spouseSocialSecurityAge: Optional[int] = Field(default=None, ge=62, le=70)
    spouseSocialSecurity: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


# Request / Response Models

class CompareRequest(BaseModel):
    ids: List[int]

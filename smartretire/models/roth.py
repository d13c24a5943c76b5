from typing import Optional
from decimal import Decimal
from datetime import datetime
from sqlmodel import SQLModel, Field

class RothConversionBase(SQLModel):
    currentAge: int = Field(ge=0, le=120, sa_column_kwargs={"name": "current_age"})
    traditionalIraBalance: Decimal = Field(ge=0, max_digits=14, decimal_places=2, sa_column_kwargs={"name": "traditional_ira_balance"})
    currentTaxBracket: Decimal = Field(ge=0, le=100, max_digits=5, decimal_places=2, sa_column_kwargs={"name": "current_tax_bracket"}) # percentage
    retirementTaxBracket: Decimal = Field(ge=0, le=100, max_digits=5, decimal_places=2, sa_column_kwargs={"name": "retirement_tax_bracket"}) # percentage
    conversionAmount: Decimal = Field(ge=0, max_digits=14, decimal_places=2, sa_column_kwargs={"name": "conversion_amount"})
    conversionYear: int = Field(ge=1900, le=2200, sa_column_kwargs={"name": "conversion_year"})

class RothConversionCreate(RothConversionBase):
    scenarioId: Optional[int] = None

class RothConversion(RothConversionBase, table=True):
    __tablename__ = "roth_conversions"
    id: Optional[int] = Field(default=None, primary_key=True)
    userId: int = Field(foreign_key="users.id", index=True, sa_column_kwargs={"name": "user_id"})
    scenarioId: Optional[int] = Field(default=None, foreign_key="retirement_scenarios.id", ondelete="SET NULL", sa_column_kwargs={"name": "scenario_id"})

    # Results
    taxesPaidNow: Decimal = Field(max_digits=14, decimal_places=2, sa_column_kwargs={"name": "taxes_paid_now"})
    taxesSavedLater: Decimal = Field(max_digits=14, decimal_places=2, sa_column_kwargs={"name": "taxes_saved_later"})
    netBenefit: Decimal = Field(max_digits=14, decimal_places=2, sa_column_kwargs={"name": "net_benefit"})
    recommendation: str

    createdAt: datetime = Field(default_factory=datetime.utcnow, sa_column_kwargs={"name": "created_at"})

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from smartretire.api import deps
from smartretire.models import User, RothConversion, RothConversionCreate
from smartretire.models.roth import RothConversionBase
from smartretire.services.roth_analyzer import RothConversionAnalyzer, RothConversionResult
from smartretire.services.scenario_service import RothConversionService, ScenarioService

router = APIRouter()

@router.get("", response_model=List[RothConversion])
async def list_roth_conversions(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    return await RothConversionService(db).list_for_user(current_user.id)

@router.post("/calculate", response_model=RothConversionResult)
def calculate_roth_conversion(conversion_in: RothConversionBase):
    """
    Quick calculation for anonymous visitors. Nothing is stored.
    """
    return RothConversionAnalyzer.analyze(
        float(conversion_in.conversionAmount),
        float(conversion_in.currentTaxBracket),
        float(conversion_in.retirementTaxBracket),
    )

@router.post("/analyze", response_model=RothConversion)
async def analyze_roth_conversion(
    conversion_in: RothConversionCreate,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    if conversion_in.scenarioId is not None:
        scenario = await ScenarioService(db).get(conversion_in.scenarioId, current_user.id)
        if not scenario:
            raise HTTPException(status_code=404, detail="Scenario not found")

    return await RothConversionService(db).create(current_user.id, conversion_in)

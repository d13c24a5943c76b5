import logging
from typing import List, Any
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from smartretire.api import deps
from smartretire.models import (
    User,
    RetirementScenario,
    RetirementScenarioCreate,
    RetirementScenarioUpdate,
    CompareRequest
)
from smartretire.services.calculator import ScenarioResult
from smartretire.services.scenario_service import ScenarioService

logger = logging.getLogger(__name__)

router = APIRouter()

class ScenarioCreateResponse(BaseModel):
    success: bool
    scenario: RetirementScenario
    analysis: ScenarioResult

@router.get("", response_model=List[RetirementScenario])
async def list_scenarios(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    """
    List the authenticated user's scenarios, most recently updated first.
    """
    return await ScenarioService(db).list_for_user(current_user.id)

@router.post("", response_model=ScenarioCreateResponse)
async def create_scenario(
    scenario_in: RetirementScenarioCreate,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    scenario, analysis = await ScenarioService(db).create(current_user.id, scenario_in)
    return ScenarioCreateResponse(success=True, scenario=scenario, analysis=analysis)

@router.post("/compare", response_model=List[RetirementScenario])
async def compare_scenarios(
    request: CompareRequest,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    # Ids that are missing or belong to someone else are silently dropped
    return await ScenarioService(db).compare(request.ids, current_user.id)

@router.get("/{scenario_id}", response_model=RetirementScenario)
async def get_scenario(
    scenario_id: int,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    scenario = await ScenarioService(db).get(scenario_id, current_user.id)
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario

@router.patch("/{scenario_id}", response_model=RetirementScenario)
async def update_scenario(
    scenario_id: int,
    scenario_update: RetirementScenarioUpdate,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    try:
        scenario = await ScenarioService(db).update(scenario_id, current_user.id, scenario_update)
    except ValidationError as exc:
        logger.error(f"Rejected update for scenario {scenario_id}: {exc}")
        raise HTTPException(
            status_code=422,
            detail=[{"loc": e["loc"], "msg": e["msg"], "type": e["type"]} for e in exc.errors()],
        )
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return scenario

@router.delete("/{scenario_id}", status_code=204)
async def delete_scenario(
    scenario_id: int,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    if not await ScenarioService(db).delete(scenario_id, current_user.id):
        raise HTTPException(status_code=404, detail="Scenario not found")
    return None

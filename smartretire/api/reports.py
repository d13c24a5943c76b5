import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from smartretire.api import deps
from smartretire.models import User, RetirementScenario
from smartretire.services.ai_service import AIRecommendation, AIService, AIServiceError
from smartretire.services.calculator import RetirementCalculator, ScenarioResult
from smartretire.services.recommendation_engine import Recommendation, RecommendationEngine
from smartretire.services.scenario_service import ScenarioService

logger = logging.getLogger(__name__)

router = APIRouter()

class ReportRequest(BaseModel):
    scenarioId: int

class ReportResponse(BaseModel):
    scenario: RetirementScenario
    analysis: ScenarioResult
    recommendations: List[Recommendation]
    aiRecommendations: List[AIRecommendation]
    generatedAt: datetime

@router.post("/generate", response_model=ReportResponse)
async def generate_report(
    request: ReportRequest,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
):
    """
    Combines a stored scenario's deterministic analysis with LLM-written advice.

    The analysis and rule-based recommendations never depend on the model;
    if the model call fails the whole report fails with 502.
    """
    scenario = await ScenarioService(db).get(request.scenarioId, current_user.id)
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")

    scenario_input = ScenarioService.to_input(scenario)
    analysis = RetirementCalculator.project(scenario_input)
    recommendations = RecommendationEngine.generate_recommendations(scenario_input, analysis)

    try:
        ai_recommendations = await run_in_threadpool(AIService.generate_retirement_recommendations, scenario)
    except AIServiceError as e:
        logger.error(f"Report generation failed for scenario {scenario.id}: {e}")
        raise HTTPException(status_code=502, detail="Failed to generate AI recommendations")

    return ReportResponse(
        scenario=scenario,
        analysis=analysis,
        recommendations=recommendations,
        aiRecommendations=ai_recommendations,
        generatedAt=datetime.utcnow(),
    )

from typing import List
from fastapi import APIRouter
from pydantic import BaseModel

from smartretire.services.calculator import RetirementCalculator, ScenarioInput, ScenarioResult
from smartretire.services.recommendation_engine import Recommendation, RecommendationEngine

router = APIRouter()

class ProjectionResponse(BaseModel):
    result: ScenarioResult
    recommendations: List[Recommendation]

@router.post("/project", response_model=ProjectionResponse)
def project_retirement(scenario: ScenarioInput):
    """
    Runs the projection and rule-based recommendations without saving anything.
    """
    result = RetirementCalculator.project(scenario)
    return ProjectionResponse(
        result=result,
        recommendations=RecommendationEngine.generate_recommendations(scenario, result),
    )

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from smartretire.models import (
    RetirementScenario,
    RetirementScenarioCreate,
    RetirementScenarioUpdate,
    RothConversion,
    RothConversionCreate,
)
from smartretire.services.calculator import RetirementCalculator, ScenarioInput, ScenarioResult
from smartretire.services.roth_analyzer import RothConversionAnalyzer

logger = logging.getLogger(__name__)

# Columns that may be cleared with an explicit null on update
NULLABLE_FIELDS = {"spouseAge", "spouseRetirementAge", "spouseSocialSecurityAge", "spouseSocialSecurity"}


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2)))


class ScenarioService:
    """
    Persistence for retirement scenarios, always scoped to the owning user.

    A scenario owned by someone else is indistinguishable from one that does
    not exist: every lookup returns None and the caller reports "not found".
    """
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def to_input(scenario: RetirementScenario) -> ScenarioInput:
        return ScenarioInput.model_validate(scenario.model_dump())

    @staticmethod
    def _apply_analysis(scenario: RetirementScenario, result: ScenarioResult):
        scenario.readinessScore = result.readinessScore
        scenario.projectedShortfall = _money(result.projectedShortfall)

    async def list_for_user(self, user_id: int) -> List[RetirementScenario]:
        stmt = (
            select(RetirementScenario)
            .where(RetirementScenario.userId == user_id)
            .order_by(RetirementScenario.updatedAt.desc(), RetirementScenario.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, scenario_id: int, user_id: int) -> Optional[RetirementScenario]:
        scenario = await self.session.get(RetirementScenario, scenario_id)
        if not scenario:
            return None
        if scenario.userId != user_id:
            logger.warning(f"User {user_id} requested scenario {scenario_id} owned by another user")
            return None
        return scenario

    async def create(self, user_id: int, data: RetirementScenarioCreate) -> Tuple[RetirementScenario, ScenarioResult]:
        scenario = RetirementScenario(userId=user_id, **data.model_dump())
        result = RetirementCalculator.project(self.to_input(scenario))
        self._apply_analysis(scenario, result)

        self.session.add(scenario)
        await self.session.commit()
        await self.session.refresh(scenario)
        logger.info(f"Created scenario {scenario.id} for user {user_id} (readiness {result.readinessScore})")
        return scenario, result

    async def update(self, scenario_id: int, user_id: int, data: RetirementScenarioUpdate) -> Optional[RetirementScenario]:
        """
        Applies a partial update and refreshes the stored analysis.

        The merged record is validated as a ScenarioInput before anything is
        written, so an update cannot leave a row the calculator rejects.
        Raises pydantic.ValidationError in that case.
        """
        scenario = await self.get(scenario_id, user_id)
        if not scenario:
            return None

        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }
        merged = scenario.model_dump()
        merged.update(changes)
        scenario_input = ScenarioInput.model_validate(merged)

        for key, value in changes.items():
            setattr(scenario, key, value)

        # Name-only edits leave the stored analysis alone
        if any(k in ScenarioInput.model_fields for k in changes):
            self._apply_analysis(scenario, RetirementCalculator.project(scenario_input))

        scenario.updatedAt = datetime.utcnow()
        self.session.add(scenario)
        await self.session.commit()
        await self.session.refresh(scenario)
        return scenario

    async def delete(self, scenario_id: int, user_id: int) -> bool:
        scenario = await self.get(scenario_id, user_id)
        if not scenario:
            return False
        await self.session.delete(scenario)
        await self.session.commit()
        logger.info(f"Deleted scenario {scenario_id} for user {user_id}")
        return True

    async def compare(self, scenario_ids: List[int], user_id: int) -> List[RetirementScenario]:
        scenarios = []
        for scenario_id in scenario_ids:
            scenario = await self.get(scenario_id, user_id)
            if scenario is not None:
                scenarios.append(scenario)
        return scenarios


class RothConversionService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user_id: int, data: RothConversionCreate) -> RothConversion:
        analysis = RothConversionAnalyzer.analyze(
            float(data.conversionAmount),
            float(data.currentTaxBracket),
            float(data.retirementTaxBracket),
        )
        conversion = RothConversion(
            userId=user_id,
            **data.model_dump(),
            taxesPaidNow=Decimal(analysis.taxesPaidNow),
            taxesSavedLater=Decimal(analysis.taxesSavedLater),
            netBenefit=Decimal(analysis.netBenefit),
            recommendation=analysis.recommendation,
        )
        self.session.add(conversion)
        await self.session.commit()
        await self.session.refresh(conversion)
        return conversion

    async def list_for_user(self, user_id: int) -> List[RothConversion]:
        stmt = (
            select(RothConversion)
            .where(RothConversion.userId == user_id)
            .order_by(RothConversion.createdAt, RothConversion.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

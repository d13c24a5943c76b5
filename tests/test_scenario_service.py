from decimal import Decimal

import pytest
from pydantic import ValidationError

from smartretire.models import RetirementScenario, RetirementScenarioCreate, RetirementScenarioUpdate, RothConversionCreate
from smartretire.services.calculator import RetirementCalculator
from smartretire.services.scenario_service import RothConversionService, ScenarioService


@pytest.fixture
def scenario_in(scenario_payload):
    return RetirementScenarioCreate(**scenario_payload)


async def test_create_stores_analysis(db, alice, scenario_in):
    scenario, analysis = await ScenarioService(db).create(alice.id, scenario_in)

    assert scenario.id is not None
    assert scenario.userId == alice.id
    assert scenario.readinessScore == 95 == analysis.readinessScore
    assert scenario.projectedShortfall == Decimal("74416.23")


async def test_get_hides_other_users_rows(db, alice, bob, scenario_in):
    service = ScenarioService(db)
    scenario, _ = await service.create(alice.id, scenario_in)

    assert (await service.get(scenario.id, alice.id)).id == scenario.id
    assert await service.get(scenario.id, bob.id) is None
    assert await service.get(9999, alice.id) is None


async def test_update_and_delete_require_ownership(db, alice, bob, scenario_in):
    service = ScenarioService(db)
    scenario, _ = await service.create(alice.id, scenario_in)

    assert await service.update(scenario.id, bob.id, RetirementScenarioUpdate(name="Hijacked")) is None
    assert await service.delete(scenario.id, bob.id) is False

    still_there = await service.get(scenario.id, alice.id)
    assert still_there.name == "Retire at 67"


async def test_update_recomputes_analysis(db, alice, scenario_in):
    service = ScenarioService(db)
    scenario, _ = await service.create(alice.id, scenario_in)

    updated = await service.update(scenario.id, alice.id, RetirementScenarioUpdate(currentSavings=Decimal("5000000")))

    assert updated.readinessScore == 100
    assert updated.projectedShortfall < 0


async def test_name_only_update_keeps_analysis(db, alice, scenario_in):
    service = ScenarioService(db)
    scenario, _ = await service.create(alice.id, scenario_in)

    updated = await service.update(scenario.id, alice.id, RetirementScenarioUpdate(name="Renamed"))

    assert updated.name == "Renamed"
    assert updated.readinessScore == 95


async def test_update_rejects_invalid_merged_record(db, alice, scenario_in):
    service = ScenarioService(db)
    scenario, _ = await service.create(alice.id, scenario_in)

    with pytest.raises(ValidationError):
        await service.update(scenario.id, alice.id, RetirementScenarioUpdate(retirementAge=60))

    unchanged = await service.get(scenario.id, alice.id)
    assert unchanged.retirementAge == 67


async def test_list_is_scoped_and_most_recent_first(db, alice, bob, scenario_payload):
    service = ScenarioService(db)
    first, _ = await service.create(alice.id, RetirementScenarioCreate(**{**scenario_payload, "name": "First"}))
    second, _ = await service.create(alice.id, RetirementScenarioCreate(**{**scenario_payload, "name": "Second"}))
    await service.create(bob.id, RetirementScenarioCreate(**{**scenario_payload, "name": "Bob's"}))

    assert [s.name for s in await service.list_for_user(alice.id)] == ["Second", "First"]

    await service.update(first.id, alice.id, RetirementScenarioUpdate(monthlyExpenses=Decimal("4000")))
    assert [s.name for s in await service.list_for_user(alice.id)] == ["First", "Second"]


async def test_compare_keeps_owned_existing_in_input_order(db, alice, bob, scenario_payload):
    service = ScenarioService(db)
    a1, _ = await service.create(alice.id, RetirementScenarioCreate(**scenario_payload))
    a2, _ = await service.create(alice.id, RetirementScenarioCreate(**scenario_payload))
    b1, _ = await service.create(bob.id, RetirementScenarioCreate(**scenario_payload))

    compared = await service.compare([a2.id, b1.id, 4242, a1.id], alice.id)

    assert [s.id for s in compared] == [a2.id, a1.id]


async def test_roth_conversions_persist_and_list_per_user(db, alice, bob):
    service = RothConversionService(db)
    data = RothConversionCreate(
        currentAge=55,
        traditionalIraBalance=Decimal("500000"),
        currentTaxBracket=Decimal("24"),
        retirementTaxBracket=Decimal("22"),
        conversionAmount=Decimal("100000"),
        conversionYear=2026,
    )
    conversion = await service.create(alice.id, data)

    assert conversion.taxesPaidNow == Decimal("24000")
    assert conversion.taxesSavedLater == Decimal("22000")
    assert conversion.netBenefit == Decimal("-2000")
    assert "may not be optimal" in conversion.recommendation

    assert [c.id for c in await service.list_for_user(alice.id)] == [conversion.id]
    assert await service.list_for_user(bob.id) == []


@pytest.mark.parametrize("overrides", [
    # Largest surplus: savings compound for a century before a short draw
    {"currentSavings": Decimal("999999999999.99"), "monthlyExpenses": 0, "retirementAge": 103},
    # Largest deficit: no savings, maximum expenses over the longest retirement
    {"currentSavings": 0, "monthlyExpenses": Decimal("9999999999.99"), "retirementAge": 1},
])
def test_extreme_shortfall_fits_column(scenario_payload, overrides):
    data = RetirementScenarioCreate(**{
        **scenario_payload,
        "currentAge": 0,
        "lifeExpectancy": 120,
        "estimatedSocialSecurity": 0,
        **overrides,
    })
    scenario = RetirementScenario(**data.model_dump(), userId=1)
    ScenarioService._apply_analysis(scenario, RetirementCalculator.project(ScenarioService.to_input(scenario)))

    column = RetirementScenario.__table__.c.projected_shortfall.type
    digits = len(str(abs(int(scenario.projectedShortfall))))
    assert digits <= column.precision - column.scale

from .user import User, UserRead
from .scenario import (
    RetirementScenario,
    RetirementScenarioCreate,
    RetirementScenarioUpdate,
    CompareRequest
)
from .roth import RothConversion, RothConversionCreate

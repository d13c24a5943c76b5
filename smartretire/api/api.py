from fastapi import APIRouter
from . import auth, calculator, scenarios, roth, reports

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(calculator.router, prefix="/calculator", tags=["calculator"])
api_router.include_router(scenarios.router, prefix="/scenarios", tags=["scenarios"])
api_router.include_router(roth.router, prefix="/roth", tags=["roth"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])

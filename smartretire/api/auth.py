from typing import Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from smartretire.api import deps
from smartretire.core import security
from smartretire.core.config import settings
from smartretire.database import get_db
from smartretire.models.user import User, UserRead
from smartretire.services.user_service import UserService

router = APIRouter()

class LoginRequest(BaseModel):
    openId: str = Field(min_length=1, max_length=64)
    name: Optional[str] = None
    email: Optional[str] = None
    loginMethod: Optional[str] = None

class UserResponse(BaseModel):
    message: str
    user: UserRead

@router.post("/login", response_model=UserResponse)
async def login(
    response: Response,
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """
    Signs in an identity that has already been verified upstream.
    Disabled unless DEV_LOGIN_ENABLED is set.
    """
    if not settings.DEV_LOGIN_ENABLED:
        raise HTTPException(status_code=404, detail="Not Found")

    user = await UserService(db).upsert_user(
        open_id=login_data.openId,
        name=login_data.name,
        email=login_data.email,
        login_method=login_data.loginMethod,
    )

    access_token = security.create_access_token(subject=user.openId)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=access_token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
        secure=False # Set to True in production
    )

    return {
        "message": "Login successful",
        "user": user
    }

@router.get("/me", response_model=Optional[UserRead])
async def read_users_me(
    current_user: Optional[User] = Depends(deps.get_optional_user)
) -> Any:
    return current_user

@router.post("/logout")
async def logout(response: Response) -> Any:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return {"success": True}

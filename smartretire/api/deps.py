from typing import Optional
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
import jwt
from sqlalchemy.ext.asyncio import AsyncSession
from smartretire.core import security
from smartretire.core.config import settings
from smartretire.database import get_db
from smartretire.models.user import User
from smartretire.services.user_service import UserService

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False
)

def _resolve_token(request: Request, token: Optional[str]) -> Optional[str]:
    # Try to get token from the session cookie if not in header
    if not token:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if token and token.startswith("Bearer "):
            token = token.split(" ")[1]
    return token

async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2)
) -> User:
    token = _resolve_token(request, token)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        open_id = security.decode_access_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )

    # In 'sub' we stored the openId
    user = await UserService(db).get_by_open_id(open_id) if open_id else None
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    token: Optional[str] = Depends(reusable_oauth2)
) -> Optional[User]:
    token = _resolve_token(request, token)
    if not token:
        return None
    try:
        open_id = security.decode_access_token(token)
    except jwt.InvalidTokenError:
        return None
    if not open_id:
        return None
    return await UserService(db).get_by_open_id(open_id)

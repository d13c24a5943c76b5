from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from smartretire.core.config import settings

ALGORITHM = settings.ALGORITHM


def create_access_token(subject: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issues a signed session token. `subject` is the user's openId.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    # Raises jwt.InvalidTokenError on a bad signature or an expired token
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    return payload.get("sub")
